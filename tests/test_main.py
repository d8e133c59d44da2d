import logging

import pytest
from click.testing import CliRunner

from brello_cockpit import __version__
from brello_cockpit.main import cli


@pytest.fixture()
def runner():
    yield CliRunner()
    logger_root = logging.getLogger("brello_cockpit")
    for handler in list(logger_root.handlers):
        logger_root.removeHandler(handler)
        handler.close()


def test_versione(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_dashboard(runner):
    result = runner.invoke(cli, ["dashboard", "--oggi", "2025-09-21"])

    assert result.exit_code == 0, result.output
    assert "LOTTO 2025-Q4-AL - Alatri" in result.output
    assert "€ 23.390,00" in result.output
    assert "GO (10 giorni all'avvio)" in result.output
    assert "[OK] LOT_GONOGO" in result.output


def test_dashboard_data_italiana_e_override_configurazione(runner):
    result = runner.invoke(cli, ["--lotti-per-anno", "4", "dashboard", "--oggi", "21/09/2025"])

    assert result.exit_code == 0, result.output
    assert "€ 93.560,00" in result.output


def test_dashboard_lotto_inesistente(runner):
    result = runner.invoke(cli, ["dashboard", "--codice", "2030-Q1-XX"])

    assert result.exit_code == 0
    assert "Nessun lotto corrente" in result.output


def test_data_non_valida(runner):
    result = runner.invoke(cli, ["dashboard", "--oggi", "ieri"])
    assert result.exit_code == 2


def test_configurazione_non_valida(runner):
    result = runner.invoke(cli, ["--lotti-per-anno", "0", "report", "--tipo", "costi"])
    assert result.exit_code == 2


def test_soglia_break_even_negativa(runner):
    result = runner.invoke(cli, ["--soglia-break-even=-1", "report", "--tipo", "costi"])
    assert result.exit_code == 2


def test_preventivo(runner):
    result = runner.invoke(cli, ["preventivo", "--spazio", "PLUS:2:5", "--stazione", "3:10"])

    assert result.exit_code == 0, result.output
    assert "€ 2.900,00" in result.output
    assert "€ 15.400,00" in result.output


def test_preventivo_tipo_sconosciuto(runner):
    result = runner.invoke(cli, ["preventivo", "--spazio", "GOLD:1"])

    assert result.exit_code == 1
    assert "dati non validi" in result.output


@pytest.mark.parametrize("argomenti", [["preventivo"], ["preventivo", "--spazio", "PLUS"]])
def test_preventivo_argomenti_mancanti(runner, argomenti):
    assert runner.invoke(cli, argomenti).exit_code == 2


def test_scenario_personalizzato(runner):
    result = runner.invoke(
        cli,
        ["scenario", "--nome", "Pieno", "--occupancy-spazi", "100", "--occupancy-stazioni", "100",
         "--oggi", "2025-09-21"],
    )

    assert result.exit_code == 0, result.output
    assert "SCENARIO: PIENO" in result.output
    assert "Eccellente" in result.output


def test_scenari_predefiniti(runner):
    result = runner.invoke(cli, ["scenario", "--predefiniti", "--oggi", "2025-09-21"])

    assert result.exit_code == 0, result.output
    for nome in ("Base", "Best Case", "Worst Case"):
        assert nome in result.output


def test_scenario_senza_parametri(runner):
    assert runner.invoke(cli, ["scenario"]).exit_code == 2


def test_scenario_occupancy_fuori_intervallo(runner):
    result = runner.invoke(cli, ["scenario", "--occupancy-spazi", "250", "--occupancy-stazioni", "70"])

    assert result.exit_code == 1
    assert "dati non validi" in result.output


@pytest.mark.parametrize("tipo", ["segmenti", "lotti", "clienti", "pipeline", "costi", "pagamenti"])
def test_report(runner, tipo):
    result = runner.invoke(cli, ["report", "--tipo", tipo])
    assert result.exit_code == 0, result.output


def test_file_di_log(runner, tmp_path):
    percorso = tmp_path / "brello.log"

    result = runner.invoke(cli, ["--file-log", str(percorso), "report", "--tipo", "costi"])

    assert result.exit_code == 0, result.output
    assert "Avvio generazione report: tipo=costi" in percorso.read_text(encoding="utf-8")
