"""
Utilità di formattazione di valuta e percentuali per il locale italiano.

  - Separatore migliaia: punto (.)
  - Separatore decimali: virgola (,)
  - Simbolo valuta: euro
"""

from brello_cockpit.config import (
    SEPARATORE_DECIMALI,
    SEPARATORE_MIGLIAIA,
    SIMBOLO_VALUTA,
)


# ============================================================================
# FORMATTAZIONE VALUTA E NUMERI
# ============================================================================

def formatta_valuta(importo: float, decimali: int = 2) -> str:
    """
    Formatta un importo come valuta italiana.

    Examples:
        >>> formatta_valuta(19300)
        '€ 19.300,00'
        >>> formatta_valuta(-1234.56, decimali=0)
        '€ -1.235'
    """
    segno = "-" if importo < 0 else ""
    return f"{SIMBOLO_VALUTA} {segno}{_numero_italiano(abs(importo), decimali)}"


def formatta_variazione_valuta(importo: float, decimali: int = 2) -> str:
    """Importo con segno esplicito, es. "+€ 6.300,00"; zero senza segno."""
    testo = f"{SIMBOLO_VALUTA} {_numero_italiano(abs(importo), decimali)}"
    if round(importo, decimali) > 0:
        return f"+{testo}"
    if round(importo, decimali) < 0:
        return f"-{testo}"
    return testo


def formatta_numero(valore: float, decimali: int = 0) -> str:
    segno = "-" if valore < 0 else ""
    return f"{segno}{_numero_italiano(abs(valore), decimali)}"


# ============================================================================
# FORMATTAZIONE PERCENTUALI
# ============================================================================

def formatta_percentuale(valore: float, decimali: int = 1) -> str:
    """
    Formatta un valore gia' espresso in percentuale (88.9 -> "88,9%").

    Examples:
        >>> formatta_percentuale(88.888)
        '88,9%'
    """
    segno = "-" if round(valore, decimali) < 0 else ""
    return f"{segno}{_numero_italiano(abs(valore), decimali)}%"


# ============================================================================
# FUNZIONI INTERNE
# ============================================================================

def _numero_italiano(valore: float, decimali: int) -> str:
    """
    Numero positivo con separatori italiani.

    Usa il formato con virgola delle migliaia di Python e scambia i
    separatori con un carattere segnaposto.
    """
    testo = f"{valore:,.{decimali}f}"
    return (
        testo.replace(",", "\x00")
        .replace(".", SEPARATORE_DECIMALI)
        .replace("\x00", SEPARATORE_MIGLIAIA)
    )
