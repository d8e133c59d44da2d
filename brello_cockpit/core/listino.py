"""
Listino prezzi dell'inventario.

Unico punto in cui si leggono i prezzi di listino di spazi e stazioni:
Preventivatore e Simulatore scenari ricevono il Listino tramite la
ConfigurazioneEngine.
"""

from typing import Union

from brello_cockpit.config import CONFIGURAZIONE_DEFAULT, Listino, TipoSpazio
from brello_cockpit.core.modelli import calcola_prezzo_netto
from brello_cockpit.data.validators import ErroreValidazione, valida_enum, valida_numero

LISTINO_STANDARD = CONFIGURAZIONE_DEFAULT.listino


def prezzo_spazio(listino: Listino, tipo: Union[TipoSpazio, str]) -> float:
    """
    Prezzo di listino di un tipo di spazio.

    Raises:
        ErroreValidazione: se il tipo non e' a listino.
    """
    tipo_spazio = valida_enum(tipo, TipoSpazio, "Tipo spazio")
    try:
        return listino.prezzi_spazi[tipo_spazio]
    except KeyError:
        raise ErroreValidazione(
            f"Tipo spazio {tipo_spazio.name} non presente a listino"
        ) from None


def prezzo_stazione(listino: Listino) -> float:
    return listino.prezzo_stazione


def prezzo_netto(prezzo_listino: float, sconto_perc: float) -> float:
    """
    Prezzo netto scontato.

    Lo sconto non viene limitato: sconti >= 100% danno prezzi nulli
    o negativi (il clamping per tipo e' compito dell'interfaccia).
    """
    sconto = valida_numero(sconto_perc, "Sconto")
    return calcola_prezzo_netto(prezzo_listino, sconto)
