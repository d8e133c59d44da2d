"""
Punto di ingresso del cockpit Brellò.

Interfaccia a riga di comando (CLI) basata su Click per il motore di
calcolo del cockpit commerciale Brellò. Tutti i comandi lavorano sui
dati demo del lotto 2025-Q4-AL.

Comandi disponibili:
  - dashboard:  Indicatori del lotto corrente e alert
  - preventivo: Ricavo, costo allocato e margine di un'offerta
  - scenario:   Simulazione what-if o confronto degli scenari predefiniti
  - report:     Report per segmento, lotto, cliente, pipeline, costi

Utilizzo:
    brello dashboard --oggi 2025-09-20
    brello preventivo --spazio PLUS:2:5 --stazione 3
    brello scenario --occupancy-spazi 100 --occupancy-stazioni 80
    brello scenario --predefiniti
    brello --lotti-per-anno 4 report --tipo segmenti
"""

import logging
import sys
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Optional, Tuple

import click

from brello_cockpit import __version__
from brello_cockpit.config import (
    CODICE_LOTTO_RIPIEGO,
    CONFIGURAZIONE_DEFAULT,
    ConfigurazioneEngine,
)
from brello_cockpit.core.cassa import costi_per_categoria, piano_pagamenti
from brello_cockpit.core.dashboard import calcola_dashboard, seleziona_lotto_corrente
from brello_cockpit.core.preventivatore import (
    RichiestaPreventivo,
    RigaSpazio,
    RigaStazione,
    calcola_preventivo,
)
from brello_cockpit.core.report import (
    clienti_top,
    performance_lotti,
    valore_pipeline_per_fase,
    vendite_per_segmento,
)
from brello_cockpit.core.scenari import (
    ParametriScenario,
    calcola_scenario,
    confronta_scenari,
    genera_report_scenario,
    scenari_predefiniti,
)
from brello_cockpit.data.validators import ErroreValidazione
from brello_cockpit.demo.dati_demo import genera_dati_demo
from brello_cockpit.utils.alert_utils import formatta_alert_testo, genera_alert_dashboard
from brello_cockpit.utils.date_utils import formatta_data, parse_data
from brello_cockpit.utils.format_utils import formatta_percentuale, formatta_valuta

# ============================================================================
# COSTANTI
# ============================================================================

_FORMATO_LOG = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
_FORMATO_LOG_DATA = "%Y-%m-%d %H:%M:%S"

_TIPI_REPORT = ["segmenti", "lotti", "clienti", "pipeline", "costi", "pagamenti"]


# ============================================================================
# CONFIGURAZIONE LOGGING
# ============================================================================


def _configura_logging(verboso: bool = False, percorso_log: Optional[Path] = None) -> None:
    """
    Configura il logging del package con handler console e, se
    richiesto, file.

    Parametri
    ---------
    verboso : bool
        Se True, imposta il livello console a DEBUG.
    percorso_log : Path, opzionale
        File di log (livello DEBUG, in append).
    """
    livello_console = logging.DEBUG if verboso else logging.INFO
    logger_root = logging.getLogger("brello_cockpit")
    logger_root.setLevel(logging.DEBUG)

    # Gli handler di invocazioni precedenti puntano a stream ormai chiusi
    for handler in list(logger_root.handlers):
        logger_root.removeHandler(handler)
        handler.close()

    handler_console = logging.StreamHandler(sys.stdout)
    handler_console.setLevel(livello_console)
    handler_console.setFormatter(
        logging.Formatter(_FORMATO_LOG, datefmt=_FORMATO_LOG_DATA)
    )
    logger_root.addHandler(handler_console)

    if percorso_log is None:
        return
    try:
        handler_file = logging.FileHandler(
            str(percorso_log), encoding="utf-8", mode="a"
        )
        handler_file.setLevel(logging.DEBUG)
        handler_file.setFormatter(
            logging.Formatter(_FORMATO_LOG, datefmt=_FORMATO_LOG_DATA)
        )
        logger_root.addHandler(handler_file)
    except OSError as exc:
        logger_root.warning(
            "Impossibile creare il file di log %s: %s. "
            "Proseguo solo con output a console.",
            percorso_log, exc,
        )


# ============================================================================
# CONVERSIONE OPZIONI
# ============================================================================


def _converti_data(ctx: click.Context, param: click.Parameter, valore: Optional[str]) -> Optional[date]:
    if valore is None:
        return None
    try:
        return parse_data(valore)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


def _converti_righe_spazi(
    ctx: click.Context, param: click.Parameter, valori: Tuple[str, ...]
) -> list:
    """Converte 'TIPO:QUANTITA[:SCONTO]' in RigaSpazio."""
    righe = []
    for valore in valori:
        parti = valore.split(":")
        if len(parti) not in (2, 3):
            raise click.BadParameter(f"'{valore}': formato atteso TIPO:QUANTITA[:SCONTO]")
        try:
            quantita = int(parti[1])
            sconto = float(parti[2]) if len(parti) == 3 else 0.0
        except ValueError as exc:
            raise click.BadParameter(f"'{valore}': {exc}") from exc
        righe.append(RigaSpazio(tipo=parti[0].upper(), quantita=quantita, sconto_perc=sconto))
    return righe


def _converti_righe_stazioni(
    ctx: click.Context, param: click.Parameter, valori: Tuple[str, ...]
) -> list:
    """Converte 'NUMERO[:SCONTO]' in RigaStazione."""
    righe = []
    for valore in valori:
        parti = valore.split(":")
        if len(parti) not in (1, 2):
            raise click.BadParameter(f"'{valore}': formato atteso NUMERO[:SCONTO]")
        try:
            numero = int(parti[0])
            sconto = float(parti[1]) if len(parti) == 2 else 0.0
        except ValueError as exc:
            raise click.BadParameter(f"'{valore}': {exc}") from exc
        righe.append(RigaStazione(numero_stazione=numero, sconto_perc=sconto))
    return righe


def _esci_con_errore(logger: logging.Logger, contesto: str, exc: Exception) -> None:
    if isinstance(exc, ErroreValidazione):
        logger.error("Dati non validi (%s): %s", contesto, exc)
        click.echo(f"ERRORE: dati non validi: {exc}", err=True)
    else:
        logger.error("Errore durante %s: %s", contesto, exc, exc_info=True)
        click.echo(f"ERRORE durante {contesto}: {exc}", err=True)
    sys.exit(1)


# ============================================================================
# GRUPPO COMANDI PRINCIPALE
# ============================================================================


@click.group()
@click.version_option(__version__, prog_name="brello")
@click.option(
    "--verboso", "-v",
    is_flag=True,
    default=False,
    help="Attiva la modalita' verbosa (log livello DEBUG).",
)
@click.option(
    "--file-log",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Scrive anche su file il log dettagliato.",
)
@click.option(
    "--lotti-per-anno",
    type=int,
    default=None,
    help=f"Lotti venduti in un anno (default {CONFIGURAZIONE_DEFAULT.lotti_per_anno}).",
)
@click.option(
    "--soglia-break-even",
    type=float,
    default=None,
    help=f"Ricavi annui di break-even (default {CONFIGURAZIONE_DEFAULT.soglia_break_even:.0f}).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verboso: bool,
    file_log: Optional[Path],
    lotti_per_anno: Optional[int],
    soglia_break_even: Optional[float],
) -> None:
    """Brellò Cockpit - motore di calcolo commerciale per la pubblicita' su ombrelli."""
    ctx.ensure_object(dict)
    ctx.obj["verboso"] = verboso

    _configura_logging(verboso, file_log)

    modifiche = {}
    if lotti_per_anno is not None:
        modifiche["lotti_per_anno"] = lotti_per_anno
    if soglia_break_even is not None:
        modifiche["soglia_break_even"] = soglia_break_even
    try:
        ctx.obj["config"] = replace(CONFIGURAZIONE_DEFAULT, **modifiche)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc

    ctx.obj["dati"] = genera_dati_demo()


def _config(ctx: click.Context) -> ConfigurazioneEngine:
    return ctx.obj["config"]


# ============================================================================
# COMANDO: DASHBOARD
# ============================================================================


@cli.command("dashboard")
@click.option(
    "--oggi",
    callback=_converti_data,
    default=None,
    help="Data di riferimento YYYY-MM-DD o DD/MM/YYYY (default: oggi).",
)
@click.option("--lotto", "lotto_id", default=None, help="Id del lotto da analizzare.")
@click.option(
    "--codice",
    default=CODICE_LOTTO_RIPIEGO,
    show_default=True,
    help="Codice lotto di ripiego se --lotto non e' indicato o non esiste.",
)
@click.option(
    "--funnel-lotto",
    is_flag=True,
    default=False,
    help="Conta nel funnel solo le opportunita' del lotto corrente.",
)
@click.pass_context
def cmd_dashboard(
    ctx: click.Context,
    oggi: Optional[date],
    lotto_id: Optional[str],
    codice: str,
    funnel_lotto: bool,
) -> None:
    """Mostra gli indicatori del lotto corrente."""
    logger = logging.getLogger("brello_cockpit.main.dashboard")
    dati = ctx.obj["dati"]

    try:
        dashboard = calcola_dashboard(
            dati.lotti,
            dati.spazi,
            dati.stazioni,
            dati.costi,
            dati.movimenti,
            dati.opportunita,
            seleziona_lotto_corrente(lotto_id, codice),
            _config(ctx),
            oggi,
            filtra_funnel_per_lotto=funnel_lotto,
        )
    except Exception as exc:
        _esci_con_errore(logger, "il calcolo della dashboard", exc)

    if dashboard is None:
        click.echo("Nessun lotto corrente: dashboard non disponibile.")
        return

    lotto = dashboard.lotto_corrente
    funnel = dashboard.funnel_vendite
    click.echo(f"LOTTO {lotto.codice_lotto} - {lotto.citta} ({lotto.stato.value})")
    click.echo(
        f"  Periodo:              {formatta_data(lotto.periodo_start)} - "
        f"{formatta_data(lotto.periodo_end)}"
    )
    click.echo(
        f"  Occupancy spazi:      {formatta_percentuale(dashboard.occupancy_spazi)} "
        f"({dashboard.spazi_venduti}/{lotto.inventario_spazi})"
    )
    click.echo(
        f"  Occupancy stazioni:   {formatta_percentuale(dashboard.occupancy_stazioni)} "
        f"({dashboard.stazioni_vendute}/{lotto.stazioni_tot})"
    )
    click.echo(f"  Ricavo attuale:       {formatta_valuta(dashboard.ricavo_attuale)}")
    click.echo(f"  Target ricavo:        {formatta_valuta(dashboard.target_ricavo)}")
    click.echo(f"  Ricavi annui:         {formatta_valuta(dashboard.break_even.ricavi_annui)}")
    click.echo(f"  Costi annui:          {formatta_valuta(dashboard.costi_annui)}")
    click.echo(f"  Margine annuo:        {formatta_valuta(dashboard.margine_ytd)}")
    click.echo(f"  Saldo cassa:          {formatta_valuta(dashboard.saldo_cassa)}")
    click.echo(
        f"  Break-even:           {formatta_percentuale(dashboard.break_even.percentuale_raggiunta)} "
        f"di {formatta_valuta(dashboard.break_even.soglia_break_even)}"
    )
    click.echo(
        f"  Go/No-Go:             {dashboard.go_nogo.esito.value} "
        f"({dashboard.go_nogo.giorni_rimanenti} giorni all'avvio)"
    )
    click.echo(
        f"  Funnel:               {funnel.lead} lead, {funnel.qualifica} qualifica, "
        f"{funnel.offerta} offerta, {funnel.chiusura} chiusura "
        f"(pipeline {formatta_valuta(funnel.valore_pipeline)})"
    )
    click.echo("")
    for alert in genera_alert_dashboard(dashboard):
        click.echo(formatta_alert_testo(alert))


# ============================================================================
# COMANDO: PREVENTIVO
# ============================================================================


@cli.command("preventivo")
@click.option("--cliente", "cliente_id", default="1", show_default=True, help="Id del cliente.")
@click.option(
    "--lotto", "lotto_id",
    default="lotto-2025-q4-al",
    show_default=True,
    help="Id del lotto dell'offerta.",
)
@click.option(
    "--spazio", "righe_spazi",
    multiple=True,
    callback=_converti_righe_spazi,
    help="Riga spazi TIPO:QUANTITA[:SCONTO], es. PLUS:2:5 (ripetibile).",
)
@click.option(
    "--stazione", "righe_stazioni",
    multiple=True,
    callback=_converti_righe_stazioni,
    help="Stazione NUMERO[:SCONTO], es. 3:10 (ripetibile).",
)
@click.pass_context
def cmd_preventivo(
    ctx: click.Context,
    cliente_id: str,
    lotto_id: str,
    righe_spazi: list,
    righe_stazioni: list,
) -> None:
    """Calcola ricavo, costo allocato e margine di un'offerta."""
    logger = logging.getLogger("brello_cockpit.main.preventivo")
    if not righe_spazi and not righe_stazioni:
        raise click.UsageError("Indicare almeno una riga --spazio o --stazione.")

    richiesta = RichiestaPreventivo(
        cliente_id=cliente_id,
        lotto_id=lotto_id,
        righe_spazi=righe_spazi,
        righe_stazioni=righe_stazioni,
    )
    try:
        risultato = calcola_preventivo(richiesta, ctx.obj["dati"].costi, _config(ctx))
    except Exception as exc:
        _esci_con_errore(logger, "il calcolo del preventivo", exc)

    click.echo(f"PREVENTIVO cliente {risultato.cliente_id} - lotto {risultato.lotto_id}")
    for riga in risultato.dettaglio_spazi:
        click.echo(
            f"  {riga.quantita} x {riga.tipo.value:<8} "
            f"{formatta_valuta(riga.prezzo_unitario)} -{formatta_percentuale(riga.sconto_perc)} "
            f"= {formatta_valuta(riga.totale)}"
        )
    for riga in risultato.dettaglio_stazioni:
        click.echo(
            f"  Stazione {riga.numero_stazione:<4} "
            f"{formatta_valuta(riga.prezzo_unitario)} -{formatta_percentuale(riga.sconto_perc)} "
            f"= {formatta_valuta(riga.totale)}"
        )
    click.echo(f"  Ricavo totale:   {formatta_valuta(risultato.ricavo_totale)}")
    click.echo(f"  Costo allocato:  {formatta_valuta(risultato.costo_allocato)}")
    click.echo(f"  Margine lordo:   {formatta_valuta(risultato.margine_lordo)}")
    click.echo(f"  Margine %:       {formatta_percentuale(risultato.margine_perc)}")


# ============================================================================
# COMANDO: SCENARIO
# ============================================================================


@cli.command("scenario")
@click.option("--nome", default="Personalizzato", show_default=True, help="Nome dello scenario.")
@click.option("--occupancy-spazi", type=float, default=None, help="Occupancy spazi (%).")
@click.option("--occupancy-stazioni", type=float, default=None, help="Occupancy stazioni (%).")
@click.option("--variazione-prezzo", type=float, default=0.0, show_default=True, help="Variazione prezzo medio spazio (%).")
@click.option("--variazione-costi", type=float, default=0.0, show_default=True, help="Variazione costi annui (%).")
@click.option(
    "--predefiniti",
    is_flag=True,
    default=False,
    help="Confronta gli scenari Base, Best Case e Worst Case.",
)
@click.option(
    "--oggi",
    callback=_converti_data,
    default=None,
    help="Data di riferimento per la situazione di base.",
)
@click.pass_context
def cmd_scenario(
    ctx: click.Context,
    nome: str,
    occupancy_spazi: Optional[float],
    occupancy_stazioni: Optional[float],
    variazione_prezzo: float,
    variazione_costi: float,
    predefiniti: bool,
    oggi: Optional[date],
) -> None:
    """Simula uno scenario what-if sull'anno."""
    logger = logging.getLogger("brello_cockpit.main.scenario")
    dati = ctx.obj["dati"]
    config = _config(ctx)

    if not predefiniti and (occupancy_spazi is None or occupancy_stazioni is None):
        raise click.UsageError(
            "Indicare --occupancy-spazi e --occupancy-stazioni, oppure --predefiniti."
        )

    try:
        dati_base = calcola_dashboard(
            dati.lotti, dati.spazi, dati.stazioni, dati.costi, dati.movimenti,
            dati.opportunita, seleziona_lotto_corrente(None, CODICE_LOTTO_RIPIEGO),
            config, oggi,
        )
        if predefiniti:
            risultati = scenari_predefiniti(dati.costi, config, dati_base)
            df = confronta_scenari(list(risultati.values()))
            click.echo(df.to_string())
            return

        parametri = ParametriScenario(
            occupancy_spazi_perc=occupancy_spazi,
            occupancy_stazioni_perc=occupancy_stazioni,
            variazione_prezzo_perc=variazione_prezzo,
            variazione_costi_perc=variazione_costi,
        )
        risultato = calcola_scenario(parametri, nome, dati.costi, config, dati_base)
    except Exception as exc:
        _esci_con_errore(logger, "la simulazione dello scenario", exc)

    click.echo(genera_report_scenario(risultato))


# ============================================================================
# COMANDO: REPORT
# ============================================================================


@cli.command("report")
@click.option(
    "--tipo", "-t",
    required=True,
    type=click.Choice(_TIPI_REPORT, case_sensitive=False),
    help="Tipo di report da generare.",
)
@click.option("--limite", type=int, default=10, show_default=True, help="Righe del report clienti.")
@click.option("--anno", type=int, default=2025, show_default=True, help="Anno del piano pagamenti.")
@click.pass_context
def cmd_report(
    ctx: click.Context,
    tipo: str,
    limite: int,
    anno: int,
) -> None:
    """Genera report commerciali e di costo sui dati demo."""
    logger = logging.getLogger("brello_cockpit.main.report")
    logger.info("Avvio generazione report: tipo=%s", tipo)
    dati = ctx.obj["dati"]
    tipo = tipo.lower()

    try:
        if tipo == "segmenti":
            df = vendite_per_segmento(dati.clienti, dati.spazi, dati.stazioni)
        elif tipo == "lotti":
            df = performance_lotti(dati.lotti, dati.spazi, dati.stazioni)
        elif tipo == "clienti":
            df = clienti_top(dati.clienti, dati.spazi, dati.stazioni, limite)
        elif tipo == "pipeline":
            df = valore_pipeline_per_fase(dati.opportunita)
        elif tipo == "costi":
            df = costi_per_categoria(dati.costi)
        else:
            df = piano_pagamenti(dati.costi, anno)
    except Exception as exc:
        _esci_con_errore(logger, "la generazione del report", exc)

    click.echo(df.to_string(index=False))


if __name__ == "__main__":
    cli()
