"""Validazione dei dati in ingresso al motore di calcolo."""

from brello_cockpit.data.validators import (
    ErroreValidazione,
    valida_data,
    valida_enum,
    valida_non_negativo,
    valida_numero,
    valida_percentuale,
    valida_periodo_lotto,
    valida_piva_codfisc,
    valida_quantita,
    valida_venduto_inventario,
)
