"""
Utilità per date in formato italiano e ISO.
"""

import math
from datetime import date, datetime
from typing import Optional, Union

from brello_cockpit.config import FORMATO_DATA, FORMATO_DATA_ISO


def parse_data(valore: Union[str, date, datetime]) -> date:
    """
    Converte una data ISO ("2025-10-01") o italiana ("01/10/2025") in date.

    Raises:
        ValueError: se il formato non e' riconosciuto.
    """
    if isinstance(valore, datetime):
        return valore.date()
    if isinstance(valore, date):
        return valore

    testo = str(valore).strip()
    for formato in (FORMATO_DATA_ISO, FORMATO_DATA):
        try:
            return datetime.strptime(testo, formato).date()
        except ValueError:
            continue
    raise ValueError(
        f"Data non riconosciuta: '{valore}'. Attesi YYYY-MM-DD oppure DD/MM/YYYY."
    )


def giorni_rimanenti(data_evento: date, oggi: Optional[Union[date, datetime]] = None) -> int:
    """
    Giorni mancanti a una data, arrotondati per eccesso.

    Con un istante (datetime) come riferimento la frazione di giorno
    residua conta come giorno intero; con una data il risultato e'
    la semplice differenza in giorni. Date passate danno valori negativi.

    Args:
        data_evento: data di riferimento (es. avvio del lotto).
        oggi: data o istante corrente (default: oggi).

    Returns:
        ceil((data_evento - oggi) / 1 giorno).
    """
    if oggi is None:
        oggi = date.today()
    if isinstance(oggi, datetime):
        inizio_evento = datetime.combine(data_evento, datetime.min.time())
        secondi = (inizio_evento - oggi.replace(tzinfo=None)).total_seconds()
        return math.ceil(secondi / 86_400)
    return (data_evento - oggi).days


def formatta_data(data: date, formato: Optional[str] = None) -> str:
    """Formatta una data nel formato italiano (default: DD/MM/YYYY)."""
    return data.strftime(formato or FORMATO_DATA)
