"""
Utilità numeriche condivise dal motore di calcolo.

Politica di arrotondamento: importi e percentuali nei risultati sono
arrotondati a 2 decimali; i conteggi di unita' simulate sono arrotondati
all'intero con metà verso l'alto (2,5 -> 3), non con l'arrotondamento
bancario di round().
"""

import math
from typing import Iterable


def percentuale(numeratore: float, denominatore: float) -> float:
    """
    Rapporto percentuale numeratore / denominatore x 100.

    Un denominatore nullo restituisce 0.0, mai NaN o infinito.

    Examples:
        >>> percentuale(16, 18)
        88.88888888888889
        >>> percentuale(5, 0)
        0.0
    """
    if not denominatore:
        return 0.0
    risultato = numeratore / denominatore * 100
    if not math.isfinite(risultato):
        return 0.0
    return risultato


def margine_percentuale(margine: float, ricavi: float) -> float:
    """Margine su ricavi in %; 0.0 se i ricavi non sono positivi."""
    if ricavi <= 0:
        return 0.0
    return percentuale(margine, ricavi)


def arrotonda_intero(valore: float) -> int:
    """
    Arrotonda all'intero piu' vicino con meta' verso l'alto.

    Examples:
        >>> arrotonda_intero(4.5)
        5
        >>> arrotonda_intero(16.002)
        16
    """
    return int(math.floor(valore + 0.5))


def somma(valori: Iterable[float]) -> float:
    """Somma con compensazione dell'errore (math.fsum)."""
    return math.fsum(valori)
