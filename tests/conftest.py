from datetime import date

import pytest

from brello_cockpit.config import (
    CategoriaCosto,
    FrequenzaCosto,
    StatoSpazio,
    StatoStazione,
    TipoSpazio,
)
from brello_cockpit.core.modelli import Lotto, Spazio, Stazione, VoceCosto
from brello_cockpit.demo.dati_demo import genera_dati_demo

ID_LOTTO_RIFERIMENTO = "lotto-rif"


@pytest.fixture()
def dati_demo():
    return genera_dati_demo()


@pytest.fixture()
def costi_annui():
    """Una sola voce annua pari alla soglia di break-even di default."""
    return [
        VoceCosto(
            id="c-1",
            categoria=CategoriaCosto.PERSONALE,
            descrizione="Struttura",
            importo=46_200.0,
            frequenza=FrequenzaCosto.ANNUALE,
            data_competenza=date(2025, 1, 1),
        )
    ]


@pytest.fixture()
def lotto_riferimento():
    """
    Lotto che replica il lotto di riferimento: 16 spazi venduti su 18 per
    19.300 euro di ricavo spazi, 7 stazioni vendute su 10.
    """
    lotto = Lotto(
        id=ID_LOTTO_RIFERIMENTO,
        codice_lotto="2026-Q1-RF",
        citta="Frosinone",
        periodo_start=date(2026, 1, 15),
        periodo_end=date(2026, 3, 31),
        inventario_spazi=18,
        stazioni_tot=10,
        soglia_go_nogo=70.0,
        target_ricavo=19_300.0,
    )

    piano = (
        [(TipoSpazio.STANDARD, 900.0, 0.0, StatoSpazio.VENDUTO)] * 2
        + [(TipoSpazio.PLUS, 1100.0, 0.0, StatoSpazio.VENDUTO)] * 8
        + [(TipoSpazio.PREMIUM, 1500.0, 0.0, StatoSpazio.VENDUTO)] * 5
        + [(TipoSpazio.PREMIUM, 1500.0, 20.0, StatoSpazio.VENDUTO)]
        + [(TipoSpazio.STANDARD, 900.0, 0.0, StatoSpazio.LIBERO)] * 2
    )
    spazi = [
        Spazio(
            id=f"rf-s{numero}",
            lotto_id=ID_LOTTO_RIFERIMENTO,
            numero_spazio=numero,
            tipo=tipo,
            prezzo_listino=listino,
            sconto_perc=sconto,
            stato=stato,
            cliente_id="1" if stato is StatoSpazio.VENDUTO else None,
        )
        for numero, (tipo, listino, sconto, stato) in enumerate(piano, start=1)
    ]
    stazioni = [
        Stazione(
            id=f"rf-st{numero}",
            lotto_id=ID_LOTTO_RIFERIMENTO,
            numero_stazione=numero,
            prezzo_listino=900.0,
            stato=StatoStazione.VENDUTA if numero <= 7 else StatoStazione.LIBERA,
        )
        for numero in range(1, 11)
    ]
    return lotto, spazi, stazioni
