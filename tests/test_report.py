from datetime import date

import pytest

from brello_cockpit.core.modelli import Lotto
from brello_cockpit.core.report import (
    clienti_top,
    performance_lotti,
    valore_pipeline_per_fase,
    vendite_per_segmento,
)


def test_vendite_per_segmento(dati_demo):
    df = vendite_per_segmento(dati_demo.clienti, dati_demo.spazi, dati_demo.stazioni)

    assert list(df["segmento"]) == ["PMI_LOCALE", "PMI_REGIONALE", "ISTITUZIONALE"]
    locale = df.iloc[0]
    assert locale["numero_clienti"] == 2
    assert locale["ricavo_totale"] == pytest.approx(13_490.0)
    assert locale["numero_contratti"] == 14
    assert df["ricavo_totale"].sum() == pytest.approx(23_390.0)


def test_performance_lotti(dati_demo):
    vuoto = Lotto(
        id="lotto-vuoto",
        codice_lotto="2026-Q1-AL",
        citta="Alatri",
        periodo_start=date(2026, 1, 1),
        periodo_end=date(2026, 3, 31),
        inventario_spazi=18,
        stazioni_tot=10,
        soglia_go_nogo=70.0,
        target_ricavo=0.0,
    )

    df = performance_lotti(dati_demo.lotti + [vuoto], dati_demo.spazi, dati_demo.stazioni)

    demo = df.iloc[0]
    assert demo["lotto"] == "2025-Q4-AL"
    assert demo["stato"] == "PIANIFICATO"
    assert demo["occupancy_spazi"] == pytest.approx(88.89)
    assert demo["occupancy_stazioni"] == pytest.approx(70.0)
    assert demo["ricavo_totale"] == pytest.approx(23_390.0)
    assert demo["performance_vs_target"] == pytest.approx(121.19, abs=0.01)

    assert df.iloc[1]["occupancy_spazi"] == 0
    assert df.iloc[1]["performance_vs_target"] == 0


def test_clienti_top(dati_demo):
    df = clienti_top(dati_demo.clienti, dati_demo.spazi, dati_demo.stazioni)

    assert list(df["id"]) == ["3", "2", "1", "4"]
    assert list(df["ricavo_totale"]) == pytest.approx([8100.0, 6790.0, 6700.0, 1800.0])
    assert list(df["numero_contratti"]) == [7, 7, 7, 2]


def test_clienti_top_limite(dati_demo):
    df = clienti_top(dati_demo.clienti, dati_demo.spazi, dati_demo.stazioni, limite=2)
    assert list(df["ragione_sociale"]) == ["Banca Popolare del Lazio", "Farmacia San Francesco"]

    with pytest.raises(ValueError):
        clienti_top(dati_demo.clienti, dati_demo.spazi, dati_demo.stazioni, limite=0)


def test_clienti_senza_vendite_esclusi(dati_demo):
    df = clienti_top(dati_demo.clienti, [], [])
    assert df.empty


def test_valore_pipeline_per_fase(dati_demo):
    df = valore_pipeline_per_fase(dati_demo.opportunita).set_index("fase")

    assert list(df.index) == ["LEAD", "QUALIFICA", "OFFERTA", "CHIUSURA"]
    assert df.loc["OFFERTA", "valore"] == pytest.approx(2400.0)
    assert df.loc["OFFERTA", "valore_pesato"] == pytest.approx(1920.0)
    assert df.loc["CHIUSURA", "numero"] == 0
    assert df["numero"].sum() == len(dati_demo.opportunita)
