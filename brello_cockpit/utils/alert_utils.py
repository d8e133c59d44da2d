"""
Fasce semaforo e alert per la presentazione degli indicatori.

Il motore di calcolo restituisce solo valori grezzi (percentuali, importi,
esito Go/No-Go); questo modulo li traduce in livelli verde/giallo/rosso
e in messaggi per l'utente.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from brello_cockpit.config import (
    SOGLIE_BREAK_EVEN,
    SOGLIE_MARGINE_SCENARIO,
    EsitoGoNoGo,
    LivelliAlert,
)
from brello_cockpit.utils.format_utils import formatta_percentuale, formatta_valuta


# ============================================================================
# DATACLASS ALERT
# ============================================================================

@dataclass
class Alert:
    """
    Singolo alert da mostrare in dashboard.

    Attributes:
        codice: codice identificativo (es. "LOT_GONOGO").
        livello: "verde", "giallo" o "rosso".
        messaggio: descrizione testuale.
        valore_attuale: valore dell'indicatore.
        soglia: valore soglia di riferimento.
        lotto: codice del lotto interessato.
    """
    codice: str
    livello: str
    messaggio: str
    valore_attuale: float
    soglia: float
    lotto: Optional[str] = None
    timestamp: Optional[datetime] = None

    def __post_init__(self):
        livelli_validi = {l.value for l in LivelliAlert}
        if self.livello not in livelli_validi:
            raise ValueError(
                f"Livello alert non valido: '{self.livello}'. "
                f"Valori ammessi: {livelli_validi}"
            )
        if self.timestamp is None:
            self.timestamp = datetime.now()


# ============================================================================
# SEMAFORO
# ============================================================================

def colore_semaforo(valore: float, soglia_verde: float, soglia_gialla: float) -> str:
    """
    Colore del semaforo per indicatori in cui un valore alto e' migliore.

    Examples:
        >>> colore_semaforo(100.0, 100.0, 80.0)
        'verde'
        >>> colore_semaforo(85.0, 100.0, 80.0)
        'giallo'
    """
    if valore >= soglia_verde:
        return LivelliAlert.VERDE.value
    if valore >= soglia_gialla:
        return LivelliAlert.GIALLO.value
    return LivelliAlert.ROSSO.value


def livello_break_even(percentuale_raggiunta: float) -> str:
    """
    Fascia di break-even: >= 100% raggiunto (verde), >= 80% in
    avvicinamento (giallo), altrimenti non raggiunto (rosso).
    """
    verde, giallo = SOGLIE_BREAK_EVEN
    return colore_semaforo(percentuale_raggiunta, verde, giallo)


def descrizione_break_even(percentuale_raggiunta: float) -> str:
    return {
        LivelliAlert.VERDE.value: "Break-even raggiunto",
        LivelliAlert.GIALLO.value: "Vicino al break-even",
        LivelliAlert.ROSSO.value: "Sotto break-even",
    }[livello_break_even(percentuale_raggiunta)]


def livello_margine_scenario(margine_perc: float) -> str:
    """Eccellente (>= 25%), Buono (>= 15%), Accettabile (>= 5%), Critico."""
    eccellente, buono, accettabile = SOGLIE_MARGINE_SCENARIO
    if margine_perc >= eccellente:
        return "Eccellente"
    if margine_perc >= buono:
        return "Buono"
    if margine_perc >= accettabile:
        return "Accettabile"
    return "Critico"


def livello_go_no_go(esito: EsitoGoNoGo) -> str:
    return {
        EsitoGoNoGo.GO: LivelliAlert.VERDE.value,
        EsitoGoNoGo.WARNING: LivelliAlert.GIALLO.value,
        EsitoGoNoGo.NO_GO: LivelliAlert.ROSSO.value,
    }[esito]


# ============================================================================
# GENERAZIONE ALERT DASHBOARD
# ============================================================================

def genera_alert_dashboard(dati) -> List[Alert]:
    """
    Alert della dashboard del lotto corrente.

    Args:
        dati: DatiDashboard calcolato da core.dashboard.calcola_dashboard().

    Returns:
        Lista di Alert: Go/No-Go, break-even e ricavo rispetto al target.
    """
    codice_lotto = dati.lotto_corrente.codice_lotto
    go_nogo = dati.go_nogo
    alerts: List[Alert] = []

    if go_nogo.blocco_stampa:
        messaggio = (
            f"NO GO - occupancy spazi {formatta_percentuale(go_nogo.occupancy_attuale)} "
            f"sotto la soglia {formatta_percentuale(go_nogo.soglia_richiesta)} "
            f"a {go_nogo.giorni_rimanenti} giorni dall'avvio: stampa bloccata."
        )
    elif go_nogo.esito is EsitoGoNoGo.WARNING:
        messaggio = (
            f"ATTENZIONE - occupancy spazi {formatta_percentuale(go_nogo.occupancy_attuale)} "
            f"sotto la soglia {formatta_percentuale(go_nogo.soglia_richiesta)}, "
            f"mancano {go_nogo.giorni_rimanenti} giorni all'avvio."
        )
    else:
        messaggio = (
            f"GO - occupancy spazi {formatta_percentuale(go_nogo.occupancy_attuale)} "
            f"(soglia {formatta_percentuale(go_nogo.soglia_richiesta)})."
        )
    alerts.append(Alert(
        codice="LOT_GONOGO",
        livello=livello_go_no_go(go_nogo.esito),
        messaggio=messaggio,
        valore_attuale=go_nogo.occupancy_attuale,
        soglia=go_nogo.soglia_richiesta,
        lotto=codice_lotto,
    ))

    be = dati.break_even
    alerts.append(Alert(
        codice="ANN_BREAKEVEN",
        livello=livello_break_even(be.percentuale_raggiunta),
        messaggio=(
            f"{descrizione_break_even(be.percentuale_raggiunta)}: ricavi annui proiettati "
            f"{formatta_valuta(be.ricavi_annui)} su soglia {formatta_valuta(be.soglia_break_even)} "
            f"({formatta_percentuale(be.percentuale_raggiunta)})."
        ),
        valore_attuale=be.percentuale_raggiunta,
        soglia=be.soglia_break_even,
        lotto=codice_lotto,
    ))

    if dati.target_ricavo > 0 and dati.ricavo_attuale < dati.target_ricavo:
        alerts.append(Alert(
            codice="LOT_TARGET",
            livello=LivelliAlert.GIALLO.value,
            messaggio=(
                f"Ricavo lotto {formatta_valuta(dati.ricavo_attuale)} sotto il target "
                f"{formatta_valuta(dati.target_ricavo)}."
            ),
            valore_attuale=dati.ricavo_attuale,
            soglia=dati.target_ricavo,
            lotto=codice_lotto,
        ))

    return alerts


def formatta_alert_testo(alert: Alert) -> str:
    icone = {"verde": "[OK]", "giallo": "[!!]", "rosso": "[XX]"}
    return f"{icone[alert.livello]} {alert.codice}: {alert.messaggio}"
