import random
from dataclasses import replace
from datetime import date, datetime

import pytest

from brello_cockpit.config import (
    CONFIGURAZIONE_DEFAULT,
    EsitoGoNoGo,
    FaseOpportunita,
    StatoSpazio,
    TipoOpportunita,
)
from brello_cockpit.core.dashboard import (
    calcola_break_even,
    calcola_dashboard,
    calcola_funnel,
    calcola_occupancy,
    seleziona_lotto_corrente,
    seleziona_per_codice,
    seleziona_per_id,
    valuta_go_no_go,
)
from brello_cockpit.core.modelli import Opportunita
from brello_cockpit.data.validators import ErroreValidazione
from brello_cockpit.utils.date_utils import giorni_rimanenti


def _dashboard(dati, selettore=None, **kwargs):
    return calcola_dashboard(
        dati.lotti,
        dati.spazi,
        dati.stazioni,
        dati.costi,
        dati.movimenti,
        dati.opportunita,
        selettore or seleziona_per_codice("2025-Q4-AL"),
        **kwargs,
    )


# ============================================================================
# GO / NO-GO
# ============================================================================


@pytest.mark.parametrize(
    "occupancy, giorni, esito, blocco",
    [
        (75.0, 5, EsitoGoNoGo.GO, False),
        (75.0, 100, EsitoGoNoGo.GO, False),
        (70.0, 0, EsitoGoNoGo.GO, False),
        (50.0, 10, EsitoGoNoGo.NO_GO, True),
        (50.0, 14, EsitoGoNoGo.NO_GO, True),
        (50.0, -3, EsitoGoNoGo.NO_GO, True),
        (50.0, 15, EsitoGoNoGo.WARNING, False),
        (50.0, 20, EsitoGoNoGo.WARNING, False),
        (50.0, 30, EsitoGoNoGo.WARNING, False),
        (50.0, 31, EsitoGoNoGo.GO, False),
        (50.0, 45, EsitoGoNoGo.GO, False),
    ],
)
def test_valuta_go_no_go(occupancy, giorni, esito, blocco):
    stato = valuta_go_no_go(occupancy, 70.0, giorni)

    assert stato.esito is esito
    assert stato.blocco_stampa is blocco
    assert stato.giorni_rimanenti == giorni
    assert stato.soglia_richiesta == 70.0


def test_soglie_in_giorni_configurabili():
    config = replace(CONFIGURAZIONE_DEFAULT, giorni_no_go=7, giorni_warning=21)

    assert valuta_go_no_go(50.0, 70.0, 10, config).esito is EsitoGoNoGo.WARNING
    assert valuta_go_no_go(50.0, 70.0, 25, config).esito is EsitoGoNoGo.GO


def test_giorni_rimanenti_arrotonda_per_eccesso():
    assert giorni_rimanenti(date(2025, 10, 1), date(2025, 9, 21)) == 10
    assert giorni_rimanenti(date(2025, 10, 1), datetime(2025, 9, 20, 12, 0)) == 11
    assert giorni_rimanenti(date(2025, 10, 1), date(2025, 10, 5)) == -4


# ============================================================================
# OCCUPANCY E BREAK-EVEN
# ============================================================================


def test_occupancy_sempre_tra_0_e_100():
    rng = random.Random(42)
    for _ in range(500):
        inventario = rng.randint(0, 40)
        venduti = rng.randint(0, inventario)
        assert 0.0 <= calcola_occupancy(venduti, inventario) <= 100.0


def test_occupancy_con_inventario_nullo():
    assert calcola_occupancy(0, 0) == 0.0


def test_venduto_oltre_inventario_rifiutato():
    with pytest.raises(ErroreValidazione):
        calcola_occupancy(19, 18, "Spazi")


def test_break_even():
    stato = calcola_break_even(15_400.0)

    assert stato.ricavi_annui == pytest.approx(46_200.0)
    assert stato.soglia_break_even == 46_200.0
    assert stato.percentuale_raggiunta == pytest.approx(100.0)


def test_break_even_con_soglia_nulla():
    config = replace(CONFIGURAZIONE_DEFAULT, soglia_break_even=0.0)
    assert calcola_break_even(1000.0, config).percentuale_raggiunta == 0.0


# ============================================================================
# FUNNEL
# ============================================================================


def _opportunita(id_, fase, lotto_id="lotto-2025-q4-al", valore=1000.0, probabilita=50.0):
    return Opportunita(
        id=id_,
        cliente_id="1",
        lotto_id=lotto_id,
        oggetto="Test",
        tipo=TipoOpportunita.SPAZIO,
        valore_previsto=valore,
        fase=fase,
        probabilita_perc=probabilita,
    )


def test_funnel_dati_demo(dati_demo):
    funnel = calcola_funnel(dati_demo.opportunita)

    assert (funnel.lead, funnel.qualifica, funnel.offerta, funnel.chiusura) == (1, 1, 1, 0)
    assert funnel.totale == 3
    assert funnel.valore_pipeline == pytest.approx(4400.0)
    assert funnel.valore_pesato == pytest.approx(2790.0)
    assert funnel.tasso_conversione == 0.0
    assert funnel.lead_to_close == 0.0


def test_funnel_conteggi_sommano_al_totale():
    rng = random.Random(3)
    fasi = list(FaseOpportunita)
    for _ in range(100):
        opportunita = [
            _opportunita(f"o{i}", rng.choice(fasi)) for i in range(rng.randint(0, 25))
        ]
        funnel = calcola_funnel(opportunita)
        assert funnel.lead + funnel.qualifica + funnel.offerta + funnel.chiusura == funnel.totale
        assert funnel.totale == len(opportunita)


def test_funnel_tassi_di_conversione():
    opportunita = [
        _opportunita("a", FaseOpportunita.LEAD),
        _opportunita("b", FaseOpportunita.LEAD),
        _opportunita("c", FaseOpportunita.OFFERTA),
        _opportunita("d", FaseOpportunita.CHIUSURA),
    ]
    funnel = calcola_funnel(opportunita)

    assert funnel.tasso_conversione == pytest.approx(25.0)
    assert funnel.lead_to_close == pytest.approx(50.0)


def test_funnel_filtrato_per_lotto():
    opportunita = [
        _opportunita("a", FaseOpportunita.LEAD),
        _opportunita("b", FaseOpportunita.CHIUSURA, lotto_id="altro"),
    ]

    assert calcola_funnel(opportunita).totale == 2
    assert calcola_funnel(opportunita, "lotto-2025-q4-al").totale == 1


# ============================================================================
# SELETTORI E DASHBOARD COMPLETA
# ============================================================================


def test_selettori(dati_demo):
    lotti = dati_demo.lotti

    assert seleziona_per_id("lotto-2025-q4-al")(lotti) is lotti[0]
    assert seleziona_per_codice("2025-Q4-AL")(lotti) is lotti[0]
    assert seleziona_per_codice("2026-Q1-XX")(lotti) is None
    assert seleziona_lotto_corrente("inesistente", "2025-Q4-AL")(lotti) is lotti[0]
    assert seleziona_lotto_corrente(None, None)(lotti) is None


def test_dashboard_dati_demo(dati_demo):
    dati = _dashboard(dati_demo, oggi=date(2025, 9, 21))

    assert dati.lotto_corrente.codice_lotto == "2025-Q4-AL"
    assert dati.spazi_venduti == 16
    assert dati.stazioni_vendute == 7
    assert dati.occupancy_spazi == pytest.approx(88.89)
    assert dati.occupancy_stazioni == pytest.approx(70.0)
    assert dati.ricavo_attuale == pytest.approx(23_390.0)
    assert dati.target_ricavo == 19_300.0
    assert dati.break_even.ricavi_annui == pytest.approx(70_170.0)
    assert dati.break_even.percentuale_raggiunta == pytest.approx(151.88, abs=0.01)
    assert dati.costi_annui == pytest.approx(46_200.0)
    assert dati.margine_ytd == pytest.approx(23_970.0)
    assert dati.saldo_cassa == 0.0
    assert dati.go_nogo.esito is EsitoGoNoGo.GO
    assert dati.go_nogo.giorni_rimanenti == 10
    assert dati.funnel_vendite.totale == 3


def test_dashboard_no_go_a_ridosso_dell_avvio(dati_demo):
    for spazio in dati_demo.spazi[:8]:
        spazio.stato = StatoSpazio.LIBERO

    dati = _dashboard(dati_demo, oggi=date(2025, 9, 25))

    assert dati.occupancy_spazi == pytest.approx(44.44)
    assert dati.go_nogo.esito is EsitoGoNoGo.NO_GO
    assert dati.go_nogo.blocco_stampa is True


def test_dashboard_senza_lotto_corrente(dati_demo):
    assert _dashboard(dati_demo, seleziona_per_codice("2030-Q1-XX")) is None


def test_dashboard_venduto_oltre_inventario(dati_demo):
    dati_demo.lotti[0].inventario_spazi = 10
    with pytest.raises(ErroreValidazione):
        _dashboard(dati_demo, oggi=date(2025, 9, 1))


def test_dashboard_lotti_per_anno_configurabili(dati_demo):
    config = replace(CONFIGURAZIONE_DEFAULT, lotti_per_anno=4)
    dati = _dashboard(dati_demo, config=config, oggi=date(2025, 9, 1))

    assert dati.break_even.ricavi_annui == pytest.approx(93_560.0)
    assert dati.margine_ytd == pytest.approx(47_360.0)


def test_dashboard_non_modifica_gli_input(dati_demo):
    stati_prima = [s.stato for s in dati_demo.spazi]
    _dashboard(dati_demo, oggi=date(2025, 9, 1))
    assert [s.stato for s in dati_demo.spazi] == stati_prima
