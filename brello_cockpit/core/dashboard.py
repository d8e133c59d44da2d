"""
Aggregatore della dashboard del lotto corrente.

Calcola, a partire dalle liste di record fornite dal livello dati:

1. OCCUPANCY: spazi VENDUTO / inventario spazi, stazioni VENDUTA /
   stazioni totali (in %)
2. RICAVO ATTUALE: prezzo netto di spazi e stazioni venduti nel lotto
3. PROIEZIONE ANNUA: ricavo attuale x lotti per anno
4. BREAK-EVEN: ricavi annui proiettati / soglia di break-even (%)
5. GO/NO-GO: verdetto di stampa in base a occupancy, soglia del lotto
   e giorni mancanti all'avvio
6. FUNNEL VENDITE: opportunita' per fase, valore pipeline e tassi
   di conversione

Le cinque derivazioni sono indipendenti e ricalcolate da zero a ogni
chiamata. Il lotto corrente e' scelto da un selettore iniettato; se il
selettore non trova un lotto il risultato e' None.

Autore: Brellò
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, List, Optional, Union

from brello_cockpit.config import (
    CONFIGURAZIONE_DEFAULT,
    ConfigurazioneEngine,
    EsitoGoNoGo,
    FaseOpportunita,
    StatoSpazio,
    StatoStazione,
)
from brello_cockpit.core.cassa import saldo_cassa, totale_costi_annui
from brello_cockpit.core.modelli import (
    Lotto,
    MovimentoCassa,
    Opportunita,
    Spazio,
    Stazione,
    VoceCosto,
)
from brello_cockpit.data.validators import valida_venduto_inventario
from brello_cockpit.utils.calcolo_utils import percentuale, somma
from brello_cockpit.utils.date_utils import giorni_rimanenti

logger = logging.getLogger(__name__)

SelettoreLotto = Callable[[List[Lotto]], Optional[Lotto]]


# ============================================================================
# DATACLASS
# ============================================================================


@dataclass(frozen=True)
class StatoBreakEven:
    ricavi_annui: float
    soglia_break_even: float
    percentuale_raggiunta: float


@dataclass(frozen=True)
class StatoGoNoGo:
    """
    Verdetto Go/No-Go del lotto.

    Attributi:
        esito: GO, WARNING o NO_GO
        occupancy_attuale: occupancy spazi (%)
        soglia_richiesta: soglia Go/No-Go del lotto (%)
        giorni_rimanenti: giorni all'avvio del lotto
        blocco_stampa: True solo con esito NO_GO
    """
    esito: EsitoGoNoGo
    occupancy_attuale: float
    soglia_richiesta: float
    giorni_rimanenti: int
    blocco_stampa: bool


@dataclass(frozen=True)
class FunnelVendite:
    lead: int
    qualifica: int
    offerta: int
    chiusura: int
    totale: int
    valore_pipeline: float
    valore_pesato: float
    tasso_conversione: float
    lead_to_close: float


@dataclass(frozen=True)
class DatiDashboard:
    lotto_corrente: Lotto
    occupancy_spazi: float
    occupancy_stazioni: float
    spazi_venduti: int
    stazioni_vendute: int
    ricavo_attuale: float
    target_ricavo: float
    costi_annui: float
    margine_ytd: float
    saldo_cassa: float
    break_even: StatoBreakEven
    go_nogo: StatoGoNoGo
    funnel_vendite: FunnelVendite


# ============================================================================
# SELETTORI DEL LOTTO CORRENTE
# ============================================================================


def seleziona_per_id(lotto_id: str) -> SelettoreLotto:
    """Selettore del lotto fissato dall'utente."""
    def _seleziona(lotti: List[Lotto]) -> Optional[Lotto]:
        return next((l for l in lotti if l.id == lotto_id), None)
    return _seleziona


def seleziona_per_codice(codice_lotto: str) -> SelettoreLotto:
    def _seleziona(lotti: List[Lotto]) -> Optional[Lotto]:
        return next((l for l in lotti if l.codice_lotto == codice_lotto), None)
    return _seleziona


def seleziona_lotto_corrente(
    lotto_id_fissato: Optional[str] = None,
    codice_ripiego: Optional[str] = None,
) -> SelettoreLotto:
    """
    Lotto fissato dall'utente se presente, altrimenti ricerca per codice.

    Parametri:
        lotto_id_fissato: id del lotto scelto in interfaccia
        codice_ripiego: codice lotto da cercare se manca il lotto fissato
    """
    def _seleziona(lotti: List[Lotto]) -> Optional[Lotto]:
        if lotto_id_fissato is not None:
            lotto = seleziona_per_id(lotto_id_fissato)(lotti)
            if lotto is not None:
                return lotto
            logger.warning(
                "Lotto fissato '%s' non trovato, uso il codice di ripiego '%s'",
                lotto_id_fissato, codice_ripiego,
            )
        if codice_ripiego is not None:
            return seleziona_per_codice(codice_ripiego)(lotti)
        return None
    return _seleziona


# ============================================================================
# DERIVAZIONI ELEMENTARI
# ============================================================================


def calcola_occupancy(venduti: int, inventario: int, descrizione: str = "Inventario") -> float:
    """
    Occupancy in % = venduti / inventario x 100.

    Inventario nullo restituisce 0.0.

    Raises:
        ErroreValidazione: se venduti > inventario.
    """
    valida_venduto_inventario(venduti, inventario, descrizione)
    return percentuale(venduti, inventario)


def calcola_ricavo_lotto(
    lotto_id: str, spazi: List[Spazio], stazioni: List[Stazione]
) -> float:
    """Somma dei prezzi netti di spazi e stazioni venduti nel lotto."""
    ricavo_spazi = somma(
        s.prezzo_netto for s in spazi
        if s.lotto_id == lotto_id and s.stato is StatoSpazio.VENDUTO
    )
    ricavo_stazioni = somma(
        s.prezzo_netto for s in stazioni
        if s.lotto_id == lotto_id and s.stato is StatoStazione.VENDUTA
    )
    return ricavo_spazi + ricavo_stazioni


def calcola_break_even(
    ricavo_lotto: float, config: ConfigurazioneEngine = CONFIGURAZIONE_DEFAULT
) -> StatoBreakEven:
    """
    Proiezione annua del ricavo e percentuale della soglia di break-even.

    La classificazione (raggiunto / in avvicinamento / non raggiunto) e'
    di presentazione: vedi utils.alert_utils.livello_break_even().
    """
    ricavi_annui = ricavo_lotto * config.lotti_per_anno
    return StatoBreakEven(
        ricavi_annui=round(ricavi_annui, 2),
        soglia_break_even=config.soglia_break_even,
        percentuale_raggiunta=round(percentuale(ricavi_annui, config.soglia_break_even), 2),
    )


def valuta_go_no_go(
    occupancy_spazi: float,
    soglia_go_nogo: float,
    giorni: int,
    config: ConfigurazioneEngine = CONFIGURAZIONE_DEFAULT,
) -> StatoGoNoGo:
    """
    Verdetto Go/No-Go, funzione pura di occupancy, soglia e giorni.

    - occupancy >= soglia                 -> GO
    - sotto soglia e giorni <= 14         -> NO_GO (stampa bloccata)
    - sotto soglia e giorni <= 30         -> WARNING
    - sotto soglia e piu' di 30 giorni    -> GO (non ancora urgente)

    Parametri:
        occupancy_spazi: occupancy spazi attuale (%)
        soglia_go_nogo: soglia del lotto (%)
        giorni: giorni mancanti all'avvio del lotto
        config: soglie in giorni (giorni_no_go, giorni_warning)
    """
    if occupancy_spazi >= soglia_go_nogo:
        esito = EsitoGoNoGo.GO
    elif giorni <= config.giorni_no_go:
        esito = EsitoGoNoGo.NO_GO
    elif giorni <= config.giorni_warning:
        esito = EsitoGoNoGo.WARNING
    else:
        esito = EsitoGoNoGo.GO

    return StatoGoNoGo(
        esito=esito,
        occupancy_attuale=round(occupancy_spazi, 2),
        soglia_richiesta=soglia_go_nogo,
        giorni_rimanenti=giorni,
        blocco_stampa=esito is EsitoGoNoGo.NO_GO,
    )


def calcola_funnel(
    opportunita: List[Opportunita], lotto_id: Optional[str] = None
) -> FunnelVendite:
    """
    Funnel vendite per fase della pipeline.

    Parametri:
        opportunita: opportunita' da conteggiare
        lotto_id: se indicato conta solo le opportunita' del lotto

    Ritorna:
        FunnelVendite con conteggi per fase, valore pipeline, valore
        pesato per probabilita', tasso di conversione (CHIUSURA su
        totale) e lead-to-close (CHIUSURA su LEAD), entrambi 0 con
        denominatore nullo
    """
    selezione = [
        o for o in opportunita if lotto_id is None or o.lotto_id == lotto_id
    ]
    conteggi = {fase: 0 for fase in FaseOpportunita}
    for opp in selezione:
        conteggi[opp.fase] += 1

    totale = len(selezione)
    chiusura = conteggi[FaseOpportunita.CHIUSURA]
    valore_pipeline = somma(o.valore_previsto for o in selezione)
    valore_pesato = somma(o.valore_previsto * o.probabilita_perc / 100 for o in selezione)

    return FunnelVendite(
        lead=conteggi[FaseOpportunita.LEAD],
        qualifica=conteggi[FaseOpportunita.QUALIFICA],
        offerta=conteggi[FaseOpportunita.OFFERTA],
        chiusura=chiusura,
        totale=totale,
        valore_pipeline=round(valore_pipeline, 2),
        valore_pesato=round(valore_pesato, 2),
        tasso_conversione=round(percentuale(chiusura, totale), 2),
        lead_to_close=round(percentuale(chiusura, conteggi[FaseOpportunita.LEAD]), 2),
    )


# ============================================================================
# DASHBOARD COMPLETA
# ============================================================================


def calcola_dashboard(
    lotti: List[Lotto],
    spazi: List[Spazio],
    stazioni: List[Stazione],
    costi: List[VoceCosto],
    movimenti: List[MovimentoCassa],
    opportunita: List[Opportunita],
    selettore: SelettoreLotto,
    config: Optional[ConfigurazioneEngine] = None,
    oggi: Optional[Union[date, datetime]] = None,
    filtra_funnel_per_lotto: bool = False,
) -> Optional[DatiDashboard]:
    """
    Calcola tutti gli indicatori della dashboard per il lotto corrente.

    Parametri:
        lotti, spazi, stazioni, costi, movimenti, opportunita: istantanee
            delle collezioni fornite dal livello dati
        selettore: sceglie il lotto corrente tra i lotti
        config: parametri di business
        oggi: data di riferimento per i giorni all'avvio (default: oggi)
        filtra_funnel_per_lotto: se True il funnel conta solo le
            opportunita' del lotto corrente

    Ritorna:
        DatiDashboard, oppure None se non esiste un lotto corrente

    Raises:
        ErroreValidazione: se il venduto supera l'inventario del lotto
    """
    config = config or CONFIGURAZIONE_DEFAULT

    lotto = selettore(lotti)
    if lotto is None:
        logger.warning("Nessun lotto corrente tra %d lotti: dashboard non disponibile", len(lotti))
        return None

    spazi_venduti = sum(
        1 for s in spazi if s.lotto_id == lotto.id and s.stato is StatoSpazio.VENDUTO
    )
    stazioni_vendute = sum(
        1 for s in stazioni if s.lotto_id == lotto.id and s.stato is StatoStazione.VENDUTA
    )
    occupancy_spazi = calcola_occupancy(
        spazi_venduti, lotto.inventario_spazi, f"Spazi lotto {lotto.codice_lotto}"
    )
    occupancy_stazioni = calcola_occupancy(
        stazioni_vendute, lotto.stazioni_tot, f"Stazioni lotto {lotto.codice_lotto}"
    )

    ricavo_attuale = calcola_ricavo_lotto(lotto.id, spazi, stazioni)
    break_even = calcola_break_even(ricavo_attuale, config)
    costi_annui = totale_costi_annui(costi)
    margine_ytd = ricavo_attuale * config.lotti_per_anno - costi_annui

    go_nogo = valuta_go_no_go(
        occupancy_spazi,
        lotto.soglia_go_nogo,
        giorni_rimanenti(lotto.periodo_start, oggi),
        config,
    )
    funnel = calcola_funnel(opportunita, lotto.id if filtra_funnel_per_lotto else None)

    logger.info(
        "Dashboard lotto '%s': occupancy spazi=%.1f%%, stazioni=%.1f%%, "
        "ricavo=%.2f, break-even=%.1f%%, Go/No-Go=%s (%d giorni)",
        lotto.codice_lotto,
        occupancy_spazi,
        occupancy_stazioni,
        ricavo_attuale,
        break_even.percentuale_raggiunta,
        go_nogo.esito.value,
        go_nogo.giorni_rimanenti,
    )

    return DatiDashboard(
        lotto_corrente=lotto,
        occupancy_spazi=round(occupancy_spazi, 2),
        occupancy_stazioni=round(occupancy_stazioni, 2),
        spazi_venduti=spazi_venduti,
        stazioni_vendute=stazioni_vendute,
        ricavo_attuale=round(ricavo_attuale, 2),
        target_ricavo=lotto.target_ricavo,
        costi_annui=round(costi_annui, 2),
        margine_ytd=round(margine_ytd, 2),
        saldo_cassa=saldo_cassa(movimenti),
        break_even=break_even,
        go_nogo=go_nogo,
        funnel_vendite=funnel,
    )
