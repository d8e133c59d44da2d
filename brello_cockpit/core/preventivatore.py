"""
Preventivatore: ricavo, costo allocato e margine di un'offerta.

Dato un insieme di righe spazi (tipo, quantita', sconto) e di righe
stazioni (numero stazione, sconto) calcola:
    - Ricavo di ogni riga al netto dello sconto
    - Ricavo totale dell'offerta
    - Costo allocato = costi annui / lotti per anno
    - Margine lordo e margine % (0 se il ricavo e' nullo)

Il calcolo e' puro: non dipende dall'ordine delle righe e non modifica
i costi ricevuti.

Autore: Brellò
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from brello_cockpit.config import CONFIGURAZIONE_DEFAULT, ConfigurazioneEngine, TipoSpazio
from brello_cockpit.core.cassa import totale_costi_annui
from brello_cockpit.core.listino import prezzo_netto, prezzo_spazio, prezzo_stazione
from brello_cockpit.core.modelli import VoceCosto
from brello_cockpit.data.validators import (
    ErroreValidazione,
    valida_enum,
    valida_numero,
    valida_quantita,
)
from brello_cockpit.utils.calcolo_utils import margine_percentuale, somma

logger = logging.getLogger(__name__)


# ============================================================================
# DATACLASS
# ============================================================================


@dataclass
class RigaSpazio:
    """Riga spazi del preventivo: quantita' di spazi dello stesso tipo."""
    tipo: TipoSpazio
    quantita: int
    sconto_perc: float = 0.0


@dataclass
class RigaStazione:
    """Riga stazioni del preventivo: una singola stazione."""
    numero_stazione: int
    sconto_perc: float = 0.0


@dataclass
class RichiestaPreventivo:
    """
    Richiesta di preventivo.

    Attributi:
        cliente_id: cliente destinatario dell'offerta
        lotto_id: lotto su cui si propone l'offerta
        righe_spazi: righe spazi (anche vuota)
        righe_stazioni: righe stazioni (anche vuota)
    """
    cliente_id: str
    lotto_id: str
    righe_spazi: List[RigaSpazio] = field(default_factory=list)
    righe_stazioni: List[RigaStazione] = field(default_factory=list)


@dataclass(frozen=True)
class DettaglioSpazio:
    tipo: TipoSpazio
    quantita: int
    prezzo_unitario: float
    sconto_perc: float
    prezzo_netto_unitario: float
    totale: float


@dataclass(frozen=True)
class DettaglioStazione:
    numero_stazione: int
    prezzo_unitario: float
    sconto_perc: float
    totale: float


@dataclass(frozen=True)
class RisultatoPreventivo:
    """
    Esito del Preventivatore.

    Attributi:
        ricavo_totale: somma dei totali di riga (euro)
        costo_allocato: quota di costi annui attribuita al lotto (euro)
        margine_lordo: ricavo_totale - costo_allocato (euro)
        margine_perc: margine lordo su ricavo (%), 0 con ricavo nullo
        dettaglio_spazi: dettaglio per riga spazi
        dettaglio_stazioni: dettaglio per riga stazioni
    """
    cliente_id: str
    lotto_id: str
    ricavo_totale: float
    costo_allocato: float
    margine_lordo: float
    margine_perc: float
    dettaglio_spazi: Tuple[DettaglioSpazio, ...] = ()
    dettaglio_stazioni: Tuple[DettaglioStazione, ...] = ()


# ============================================================================
# CALCOLO
# ============================================================================


def calcola_costo_allocato(
    costi: List[VoceCosto], config: ConfigurazioneEngine = CONFIGURAZIONE_DEFAULT
) -> float:
    """Quota dei costi annui di struttura attribuita a un singolo lotto."""
    return totale_costi_annui(costi) / config.lotti_per_anno


def _dettaglio_riga_spazio(riga: RigaSpazio, config: ConfigurazioneEngine) -> DettaglioSpazio:
    tipo = valida_enum(riga.tipo, TipoSpazio, "Tipo spazio")
    quantita = valida_quantita(riga.quantita)
    sconto = valida_numero(riga.sconto_perc, "Sconto spazio")

    listino = prezzo_spazio(config.listino, tipo)
    netto = prezzo_netto(listino, sconto)
    return DettaglioSpazio(
        tipo=tipo,
        quantita=quantita,
        prezzo_unitario=listino,
        sconto_perc=sconto,
        prezzo_netto_unitario=round(netto, 2),
        totale=round(netto * quantita, 2),
    )


def _dettaglio_riga_stazione(riga: RigaStazione, config: ConfigurazioneEngine) -> DettaglioStazione:
    if isinstance(riga.numero_stazione, bool) or not isinstance(riga.numero_stazione, int):
        raise ErroreValidazione(
            f"Numero stazione deve essere un intero, ricevuto {riga.numero_stazione!r}"
        )
    sconto = valida_numero(riga.sconto_perc, "Sconto stazione")

    listino = prezzo_stazione(config.listino)
    return DettaglioStazione(
        numero_stazione=riga.numero_stazione,
        prezzo_unitario=listino,
        sconto_perc=sconto,
        totale=round(prezzo_netto(listino, sconto), 2),
    )


def calcola_preventivo(
    richiesta: RichiestaPreventivo,
    costi: List[VoceCosto],
    config: Optional[ConfigurazioneEngine] = None,
) -> RisultatoPreventivo:
    """
    Calcola ricavo, costo allocato e margine di una richiesta di preventivo.

    Parametri:
        richiesta: righe spazi e stazioni dell'offerta
        costi: voci di costo correnti (annualizzate secondo frequenza)
        config: parametri di business (lotti per anno, listino)

    Ritorna:
        RisultatoPreventivo con totali e dettaglio di riga

    Raises:
        ErroreValidazione: per quantita' < 1, tipi non a listino o
            sconti non numerici
    """
    config = config or CONFIGURAZIONE_DEFAULT

    dettaglio_spazi = tuple(
        _dettaglio_riga_spazio(riga, config) for riga in richiesta.righe_spazi
    )
    dettaglio_stazioni = tuple(
        _dettaglio_riga_stazione(riga, config) for riga in richiesta.righe_stazioni
    )

    ricavo_totale = somma(
        [d.totale for d in dettaglio_spazi] + [d.totale for d in dettaglio_stazioni]
    )
    costo_allocato = calcola_costo_allocato(costi, config)
    margine_lordo = ricavo_totale - costo_allocato
    margine_perc = margine_percentuale(margine_lordo, ricavo_totale)

    logger.info(
        "Preventivo cliente '%s' lotto '%s': %d righe spazi, %d stazioni, "
        "ricavo=%.2f, costo allocato=%.2f, margine=%.1f%%",
        richiesta.cliente_id,
        richiesta.lotto_id,
        len(dettaglio_spazi),
        len(dettaglio_stazioni),
        ricavo_totale,
        costo_allocato,
        margine_perc,
    )

    return RisultatoPreventivo(
        cliente_id=richiesta.cliente_id,
        lotto_id=richiesta.lotto_id,
        ricavo_totale=round(ricavo_totale, 2),
        costo_allocato=round(costo_allocato, 2),
        margine_lordo=round(margine_lordo, 2),
        margine_perc=round(margine_perc, 2),
        dettaglio_spazi=dettaglio_spazi,
        dettaglio_stazioni=dettaglio_stazioni,
    )
