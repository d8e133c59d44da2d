"""
Simulatore di scenari what-if sull'anno.

Proietta ricavi, costi e margine annui al variare di:
    - Occupancy spazi (%)
    - Occupancy stazioni (%)
    - Variazione del prezzo medio degli spazi (%)
    - Variazione dei costi di struttura (%)

WORKFLOW:
    1. Definizione parametri (ParametriScenario, o uno degli
       SCENARI_PREDEFINITI in config.py)
    2. Calcolo del lotto tipo simulato e della proiezione annua
    3. Confronto con la situazione attuale letta dalla dashboard
    4. Confronto affiancato di piu' scenari e report testuale

Il prezzo medio di uno spazio parte dal lotto di riferimento
(ricavo_base_lotto / unita_medie_lotto); slot, soglia di break-even e
lotti per anno arrivano dalla ConfigurazioneEngine.

Autore: Brellò
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, List, Optional, Union

import pandas as pd

from brello_cockpit.config import (
    CONFIGURAZIONE_DEFAULT,
    SCENARI_PREDEFINITI,
    ConfigurazioneEngine,
)
from brello_cockpit.core.cassa import totale_costi_annui
from brello_cockpit.core.dashboard import DatiDashboard, SelettoreLotto, calcola_dashboard
from brello_cockpit.core.listino import prezzo_stazione
from brello_cockpit.core.modelli import Lotto, Spazio, Stazione, VoceCosto
from brello_cockpit.data.validators import valida_numero, valida_percentuale
from brello_cockpit.utils.alert_utils import livello_margine_scenario
from brello_cockpit.utils.calcolo_utils import arrotonda_intero, margine_percentuale
from brello_cockpit.utils.format_utils import (
    formatta_percentuale,
    formatta_valuta,
    formatta_variazione_valuta,
)

logger = logging.getLogger(__name__)


# ============================================================================
# DATACLASS
# ============================================================================


@dataclass(frozen=True)
class ParametriScenario:
    """
    Parametri di uno scenario.

    Attributi:
        occupancy_spazi_perc: spazi venduti sul totale slot (%, 0-100)
        occupancy_stazioni_perc: stazioni vendute sul totale slot (%, 0-100)
        variazione_prezzo_perc: variazione del prezzo medio spazio (%)
        variazione_costi_perc: variazione dei costi annui (%)
    """
    occupancy_spazi_perc: float
    occupancy_stazioni_perc: float
    variazione_prezzo_perc: float = 0.0
    variazione_costi_perc: float = 0.0

    def __post_init__(self):
        valida_percentuale(self.occupancy_spazi_perc, "Occupancy spazi")
        valida_percentuale(self.occupancy_stazioni_perc, "Occupancy stazioni")
        valida_numero(self.variazione_prezzo_perc, "Variazione prezzo")
        valida_numero(self.variazione_costi_perc, "Variazione costi")


@dataclass(frozen=True)
class VariazioneVsBase:
    ricavi: float
    margine: float


@dataclass(frozen=True)
class SituazioneBase:
    ricavi_annui: float
    margine_annuo: float


@dataclass(frozen=True)
class RisultatoScenario:
    nome: str
    parametri: ParametriScenario
    spazi_venduti: int
    stazioni_vendute: int
    prezzo_medio_spazio: float
    ricavo_lotto: float
    ricavi_annui: float
    costi_annui: float
    margine_annuo: float
    margine_perc: float
    break_even_raggiunto: bool
    variazione_vs_base: VariazioneVsBase


# ============================================================================
# SITUAZIONE DI BASE
# ============================================================================


def baseline_da_dashboard(
    dati_base: Optional[DatiDashboard],
    costi: List[VoceCosto],
    config: ConfigurazioneEngine = CONFIGURAZIONE_DEFAULT,
) -> SituazioneBase:
    """
    Ricavi e margine annui della situazione attuale.

    Con la dashboard disponibile si usano i ricavi annui proiettati del
    lotto corrente; senza lotto corrente si ripiega sul lotto di
    riferimento (ricavo_base_lotto x lotti_per_anno).

    Ritorna:
        SituazioneBase con ricavi e margine annui attuali
    """
    costi_annui = totale_costi_annui(costi)
    if dati_base is not None:
        ricavi_base = dati_base.break_even.ricavi_annui
    else:
        ricavi_base = config.ricavo_base_lotto * config.lotti_per_anno
        logger.debug("Baseline senza dashboard: ricavi lotto di riferimento %.2f", ricavi_base)
    return SituazioneBase(ricavi_annui=ricavi_base, margine_annuo=ricavi_base - costi_annui)


def parametri_da_dashboard(dati: DatiDashboard) -> ParametriScenario:
    """Parametri che replicano lo stato attuale del lotto corrente."""
    return ParametriScenario(
        occupancy_spazi_perc=dati.occupancy_spazi,
        occupancy_stazioni_perc=dati.occupancy_stazioni,
    )


# ============================================================================
# CALCOLO SCENARIO
# ============================================================================


def calcola_scenario(
    parametri: ParametriScenario,
    nome: str,
    costi: List[VoceCosto],
    config: Optional[ConfigurazioneEngine] = None,
    dati_base: Optional[DatiDashboard] = None,
) -> RisultatoScenario:
    """
    Proietta ricavi, costi e margine annui di uno scenario.

    Parametri:
        parametri: occupancy e variazioni dello scenario
        nome: nome dello scenario (es. "Best Case")
        costi: voci di costo correnti (annualizzate)
        config: parametri di business
        dati_base: dashboard del lotto corrente per la variazione vs base

    Ritorna:
        RisultatoScenario
    """
    config = config or CONFIGURAZIONE_DEFAULT

    prezzo_medio_base = config.ricavo_base_lotto / config.unita_medie_lotto
    prezzo_medio = prezzo_medio_base * (1 + parametri.variazione_prezzo_perc / 100)
    costi_annui = totale_costi_annui(costi) * (1 + parametri.variazione_costi_perc / 100)

    spazi_venduti = arrotonda_intero(parametri.occupancy_spazi_perc / 100 * config.slot_spazi)
    stazioni_vendute = arrotonda_intero(
        parametri.occupancy_stazioni_perc / 100 * config.slot_stazioni
    )

    ricavo_lotto = (
        spazi_venduti * prezzo_medio
        + stazioni_vendute * prezzo_stazione(config.listino)
    )
    ricavi_annui = ricavo_lotto * config.lotti_per_anno
    margine_annuo = ricavi_annui - costi_annui
    margine_perc = margine_percentuale(margine_annuo, ricavi_annui)

    base = baseline_da_dashboard(dati_base, costi, config)
    variazione = VariazioneVsBase(
        ricavi=round(ricavi_annui - base.ricavi_annui, 2),
        margine=round(margine_annuo - base.margine_annuo, 2),
    )

    logger.info(
        "Scenario '%s': %d spazi, %d stazioni, ricavi annui=%.2f, costi=%.2f, "
        "margine=%.1f%%, delta vs base=%.2f",
        nome,
        spazi_venduti,
        stazioni_vendute,
        ricavi_annui,
        costi_annui,
        margine_perc,
        variazione.ricavi,
    )

    return RisultatoScenario(
        nome=nome,
        parametri=parametri,
        spazi_venduti=spazi_venduti,
        stazioni_vendute=stazioni_vendute,
        prezzo_medio_spazio=round(prezzo_medio, 2),
        ricavo_lotto=round(ricavo_lotto, 2),
        ricavi_annui=round(ricavi_annui, 2),
        costi_annui=round(costi_annui, 2),
        margine_annuo=round(margine_annuo, 2),
        margine_perc=round(margine_perc, 2),
        break_even_raggiunto=ricavi_annui >= config.soglia_break_even,
        variazione_vs_base=variazione,
    )


def simula_scenario(
    parametri: ParametriScenario,
    nome: str,
    lotti: List[Lotto],
    spazi: List[Spazio],
    stazioni: List[Stazione],
    costi: List[VoceCosto],
    selettore: SelettoreLotto,
    config: Optional[ConfigurazioneEngine] = None,
    oggi: Optional[Union[date, datetime]] = None,
) -> RisultatoScenario:
    """
    Calcola uno scenario ricavando la base dalla dashboard del lotto
    corrente. Movimenti di cassa e opportunita' non incidono sulla base.
    """
    dati_base = calcola_dashboard(
        lotti, spazi, stazioni, costi, [], [], selettore, config, oggi
    )
    return calcola_scenario(parametri, nome, costi, config, dati_base)


def scenari_predefiniti(
    costi: List[VoceCosto],
    config: Optional[ConfigurazioneEngine] = None,
    dati_base: Optional[DatiDashboard] = None,
) -> Dict[str, RisultatoScenario]:
    """Calcola gli scenari Base, Best Case e Worst Case di config.py."""
    risultati = {}
    for chiave, valori in SCENARI_PREDEFINITI.items():
        parametri = ParametriScenario(
            occupancy_spazi_perc=valori["occupancy_spazi_perc"],
            occupancy_stazioni_perc=valori["occupancy_stazioni_perc"],
            variazione_prezzo_perc=valori["variazione_prezzo_perc"],
            variazione_costi_perc=valori["variazione_costi_perc"],
        )
        risultati[chiave] = calcola_scenario(parametri, valori["label"], costi, config, dati_base)
    return risultati


# ============================================================================
# CONFRONTO E REPORT
# ============================================================================


def confronta_scenari(scenari: List[RisultatoScenario]) -> pd.DataFrame:
    """
    Confronto affiancato di piu' scenari.

    Ritorna:
        DataFrame con righe = metriche e colonne = nomi degli scenari
    """
    logger.info("Confronto %d scenari", len(scenari))

    righe_dati = {}
    for scenario in scenari:
        righe_dati[scenario.nome] = {
            "Occupancy spazi %": scenario.parametri.occupancy_spazi_perc,
            "Occupancy stazioni %": scenario.parametri.occupancy_stazioni_perc,
            "Spazi venduti": scenario.spazi_venduti,
            "Stazioni vendute": scenario.stazioni_vendute,
            "Ricavi annui": scenario.ricavi_annui,
            "Costi annui": scenario.costi_annui,
            "Margine annuo": scenario.margine_annuo,
            "Margine %": scenario.margine_perc,
            "Break-even raggiunto": scenario.break_even_raggiunto,
            "Delta ricavi vs base": scenario.variazione_vs_base.ricavi,
            "Delta margine vs base": scenario.variazione_vs_base.margine,
        }

    df = pd.DataFrame(righe_dati)
    df.index.name = "Metrica"
    return df


def genera_report_scenario(scenario: RisultatoScenario) -> str:
    """
    Report testuale di uno scenario.

    Ritorna:
        Stringa con il report formattato
    """
    linea = "=" * 60
    linea_sottile = "-" * 60
    p = scenario.parametri

    righe = [
        linea,
        f"SCENARIO: {scenario.nome.upper()}",
        linea,
        f"  Occupancy spazi:       {formatta_percentuale(p.occupancy_spazi_perc):>16}",
        f"  Occupancy stazioni:    {formatta_percentuale(p.occupancy_stazioni_perc):>16}",
        f"  Variazione prezzo:     {formatta_percentuale(p.variazione_prezzo_perc):>16}",
        f"  Variazione costi:      {formatta_percentuale(p.variazione_costi_perc):>16}",
        linea_sottile,
        f"  Spazi / stazioni:      {scenario.spazi_venduti:>8} / {scenario.stazioni_vendute:<5}",
        f"  Ricavo per lotto:      {formatta_valuta(scenario.ricavo_lotto):>16}",
        f"  Ricavi annui:          {formatta_valuta(scenario.ricavi_annui):>16}",
        f"  Costi annui:           {formatta_valuta(scenario.costi_annui):>16}",
        f"  Margine annuo:         {formatta_valuta(scenario.margine_annuo):>16}",
        f"  Margine %:             {formatta_percentuale(scenario.margine_perc):>16}",
        f"  Valutazione:           {livello_margine_scenario(scenario.margine_perc):>16}",
        f"  Break-even:            {'raggiunto' if scenario.break_even_raggiunto else 'non raggiunto':>16}",
        linea_sottile,
        f"  Delta ricavi vs base:  {formatta_variazione_valuta(scenario.variazione_vs_base.ricavi):>16}",
        f"  Delta margine vs base: {formatta_variazione_valuta(scenario.variazione_vs_base.margine):>16}",
        linea,
    ]
    return "\n".join(righe)
