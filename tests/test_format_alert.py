from datetime import date

import pytest

from brello_cockpit.config import StatoSpazio
from brello_cockpit.core.dashboard import calcola_dashboard, seleziona_per_codice
from brello_cockpit.utils.alert_utils import (
    Alert,
    colore_semaforo,
    formatta_alert_testo,
    genera_alert_dashboard,
    livello_break_even,
    livello_margine_scenario,
)
from brello_cockpit.utils.format_utils import (
    formatta_numero,
    formatta_percentuale,
    formatta_valuta,
    formatta_variazione_valuta,
)


def _dashboard(dati, oggi):
    return calcola_dashboard(
        dati.lotti, dati.spazi, dati.stazioni, dati.costi, dati.movimenti,
        dati.opportunita, seleziona_per_codice("2025-Q4-AL"), oggi=oggi,
    )


# ============================================================================
# FORMATTAZIONE
# ============================================================================


def test_formatta_valuta():
    assert formatta_valuta(19_300) == "€ 19.300,00"
    assert formatta_valuta(1045.5) == "€ 1.045,50"
    assert formatta_valuta(-1234.56, decimali=0) == "€ -1.235"
    assert formatta_valuta(0) == "€ 0,00"


def test_formatta_variazione_valuta():
    assert formatta_variazione_valuta(6300) == "+€ 6.300,00"
    assert formatta_variazione_valuta(-50) == "-€ 50,00"
    assert formatta_variazione_valuta(0.001) == "€ 0,00"


def test_formatta_percentuale_e_numero():
    assert formatta_percentuale(88.888) == "88,9%"
    assert formatta_percentuale(-3.03, decimali=2) == "-3,03%"
    assert formatta_numero(1_234_567) == "1.234.567"


# ============================================================================
# FASCE E ALERT
# ============================================================================


@pytest.mark.parametrize(
    "percentuale, livello",
    [(151.88, "verde"), (100.0, "verde"), (85.0, "giallo"), (80.0, "giallo"), (79.9, "rosso")],
)
def test_livello_break_even(percentuale, livello):
    assert livello_break_even(percentuale) == livello


@pytest.mark.parametrize(
    "margine, valutazione",
    [(55.5, "Eccellente"), (25.0, "Eccellente"), (15.0, "Buono"), (5.0, "Accettabile"), (4.99, "Critico"), (-3.0, "Critico")],
)
def test_livello_margine_scenario(margine, valutazione):
    assert livello_margine_scenario(margine) == valutazione


def test_colore_semaforo():
    assert colore_semaforo(10, 20, 5) == "giallo"


def test_alert_livello_non_valido():
    with pytest.raises(ValueError):
        Alert(codice="X", livello="blu", messaggio="", valore_attuale=0, soglia=0)


def test_alert_dashboard_lotto_in_salute(dati_demo):
    alerts = genera_alert_dashboard(_dashboard(dati_demo, date(2025, 9, 21)))

    assert [a.codice for a in alerts] == ["LOT_GONOGO", "ANN_BREAKEVEN"]
    assert all(a.livello == "verde" for a in alerts)
    assert all(a.lotto == "2025-Q4-AL" for a in alerts)


def test_alert_dashboard_no_go(dati_demo):
    for spazio in dati_demo.spazi[:8]:
        spazio.stato = StatoSpazio.LIBERO

    alerts = {a.codice: a for a in genera_alert_dashboard(_dashboard(dati_demo, date(2025, 9, 25)))}

    assert alerts["LOT_GONOGO"].livello == "rosso"
    assert "stampa bloccata" in alerts["LOT_GONOGO"].messaggio
    assert alerts["LOT_TARGET"].livello == "giallo"
    assert formatta_alert_testo(alerts["LOT_GONOGO"]).startswith("[XX] LOT_GONOGO")
