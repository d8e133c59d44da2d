"""
Modulo di validazione dati.

Controlli al confine del motore di calcolo: i record e le richieste
malformati vengono rifiutati subito con un ErroreValidazione descrittivo
invece di produrre totali privi di senso.
  - Validazione partita IVA / codice fiscale
  - Conversione delle date (ISO o italiane) in date
  - Validazione periodo lotto (fine successiva all'inizio)
  - Validazione quantita', sconti, percentuali e tipi di spazio
  - Coerenza venduto / inventario di un lotto

Le anomalie vengono registrate tramite il modulo logging prima di
sollevare l'eccezione.
"""

import logging
import math
import numbers
import re
from datetime import date
from typing import Any, Optional, Type

logger = logging.getLogger(__name__)

# ============================================================================
# COSTANTI INTERNE
# ============================================================================

# Partita IVA (11 cifre) oppure codice fiscale persona fisica (16 caratteri)
_PATTERN_PIVA = re.compile(r"^\d{11}$")
_PATTERN_CODFISC = re.compile(r"^[A-Z0-9]{16}$")


class ErroreValidazione(ValueError):
    """Input non valido al confine del motore di calcolo."""


# ============================================================================
# FUNZIONI PUBBLICHE
# ============================================================================


def valida_piva_codfisc(valore: str) -> str:
    """
    Verifica che partita IVA o codice fiscale siano presenti.

    Il formato viene solo segnalato nel log: l'anagrafica puo' contenere
    identificativi esteri.

    Ritorna:
        Il valore normalizzato (maiuscolo, senza spazi).

    Raises:
        ErroreValidazione: se il valore e' nullo o vuoto.
    """
    if valore is None or not str(valore).strip():
        raise ErroreValidazione("Partita IVA / codice fiscale obbligatorio")

    normalizzato = str(valore).strip().upper().replace(" ", "")
    if not (_PATTERN_PIVA.match(normalizzato) or _PATTERN_CODFISC.match(normalizzato)):
        logger.warning(
            "Identificativo fiscale '%s' non nel formato P.IVA/CF italiano",
            normalizzato,
        )
    return normalizzato


def valida_periodo_lotto(periodo_start: date, periodo_end: date) -> None:
    """
    Il periodo di un lotto deve terminare dopo l'inizio.

    Raises:
        ErroreValidazione: se periodo_end <= periodo_start.
    """
    if periodo_end <= periodo_start:
        raise ErroreValidazione(
            f"Periodo lotto non valido: fine {periodo_end.isoformat()} "
            f"non successiva all'inizio {periodo_start.isoformat()}"
        )


def valida_data(valore: Any, nome: str, obbligatoria: bool = True) -> Optional[date]:
    """
    Converte in date una data ISO ("2025-10-01") o italiana ("01/10/2025").

    I record letti dal livello di accesso ai dati portano spesso le date
    come stringhe: vanno convertite prima di confrontarle.

    Raises:
        ErroreValidazione: se la data manca (quando obbligatoria) o non
            e' riconoscibile.
    """
    from brello_cockpit.utils.date_utils import parse_data

    if valore is None:
        if obbligatoria:
            raise ErroreValidazione(f"{nome} obbligatoria")
        return None
    if not isinstance(valore, (str, date)):
        raise ErroreValidazione(
            f"{nome} deve essere una data, ricevuto {type(valore).__name__}: {valore!r}"
        )
    try:
        return parse_data(valore)
    except ValueError as exc:
        raise ErroreValidazione(f"{nome} non valida: {exc}") from exc


def valida_numero(valore: Any, nome: str) -> float:
    """
    Verifica che il valore sia un numero finito (bool esclusi).

    Ritorna:
        Il valore convertito a float.
    """
    if isinstance(valore, bool) or not isinstance(valore, numbers.Real):
        raise ErroreValidazione(
            f"{nome} deve essere numerico, ricevuto {type(valore).__name__}: {valore!r}"
        )
    if not math.isfinite(valore):
        raise ErroreValidazione(f"{nome} deve essere finito, ricevuto {valore!r}")
    return float(valore)


def valida_non_negativo(valore: Any, nome: str) -> float:
    numero = valida_numero(valore, nome)
    if numero < 0:
        raise ErroreValidazione(f"{nome} non puo' essere negativo: {valore}")
    return numero


def valida_percentuale(valore: Any, nome: str) -> float:
    """Percentuale compresa tra 0 e 100 (estremi inclusi)."""
    numero = valida_numero(valore, nome)
    if not 0 <= numero <= 100:
        raise ErroreValidazione(f"{nome} deve essere tra 0 e 100, ricevuto {valore}")
    return numero


def valida_quantita(quantita: Any) -> int:
    """
    La quantita' di una riga di preventivo deve essere un intero >= 1.

    Raises:
        ErroreValidazione: per valori non interi o minori di 1.
    """
    if isinstance(quantita, bool) or not isinstance(quantita, numbers.Integral):
        raise ErroreValidazione(
            f"Quantita' deve essere un intero, ricevuto {quantita!r}"
        )
    if quantita < 1:
        raise ErroreValidazione(f"Quantita' deve essere almeno 1, ricevuto {quantita}")
    return int(quantita)


def valida_enum(valore: Any, tipo_enum: Type, nome: str):
    """
    Converte il valore nel membro dell'enumerazione indicata.

    Accetta il membro stesso oppure il suo nome (es. "PLUS").

    Raises:
        ErroreValidazione: se il valore non appartiene all'enumerazione.
    """
    if isinstance(valore, tipo_enum):
        return valore
    if isinstance(valore, str) and valore.strip().upper() in tipo_enum.__members__:
        return tipo_enum[valore.strip().upper()]
    raise ErroreValidazione(
        f"{nome} non valido: {valore!r}. "
        f"Valori ammessi: {list(tipo_enum.__members__)}"
    )


def valida_venduto_inventario(
    venduti: int, inventario: int, descrizione: str
) -> None:
    """
    Il numero di unita' vendute non puo' superare l'inventario del lotto.

    Un venduto eccedente indica dati incoerenti a monte e produrrebbe
    un'occupancy oltre il 100%.

    Raises:
        ErroreValidazione: se venduti > inventario.
    """
    if venduti > inventario:
        logger.error(
            "%s: %d unita' vendute su un inventario di %d",
            descrizione, venduti, inventario,
        )
        raise ErroreValidazione(
            f"{descrizione}: venduti ({venduti}) superiori all'inventario ({inventario})"
        )
