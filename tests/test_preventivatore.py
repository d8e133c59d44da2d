import math
import random

import pytest

from brello_cockpit.config import CONFIGURAZIONE_DEFAULT, TipoSpazio
from brello_cockpit.core.preventivatore import (
    RichiestaPreventivo,
    RigaSpazio,
    RigaStazione,
    calcola_costo_allocato,
    calcola_preventivo,
)
from brello_cockpit.data.validators import ErroreValidazione

PREZZI = {TipoSpazio.STANDARD: 900.0, TipoSpazio.PLUS: 1100.0, TipoSpazio.PREMIUM: 1500.0}


def _richiesta_casuale(rng: random.Random) -> RichiestaPreventivo:
    righe_spazi = [
        RigaSpazio(
            tipo=rng.choice(list(TipoSpazio)),
            quantita=rng.randint(1, 6),
            sconto_perc=rng.choice([0, 5, 10, 12.5, 33.3]),
        )
        for _ in range(rng.randint(0, 5))
    ]
    righe_stazioni = [
        RigaStazione(numero_stazione=numero, sconto_perc=rng.uniform(0, 30))
        for numero in rng.sample(range(1, 11), rng.randint(0, 4))
    ]
    return RichiestaPreventivo("1", "lotto-2025-q4-al", righe_spazi, righe_stazioni)


def test_costo_allocato_e_un_terzo_dei_costi_annui(costi_annui):
    assert calcola_costo_allocato(costi_annui, CONFIGURAZIONE_DEFAULT) == pytest.approx(15_400.0)


def test_preventivo_con_spazi_e_stazioni(costi_annui):
    richiesta = RichiestaPreventivo(
        cliente_id="2",
        lotto_id="lotto-2025-q4-al",
        righe_spazi=[
            RigaSpazio(TipoSpazio.PLUS, 2, 5),
            RigaSpazio(TipoSpazio.STANDARD, 1),
        ],
        righe_stazioni=[RigaStazione(3, 10)],
    )

    risultato = calcola_preventivo(richiesta, costi_annui)

    plus, standard = risultato.dettaglio_spazi
    assert plus.prezzo_unitario == 1100.0
    assert plus.prezzo_netto_unitario == pytest.approx(1045.0)
    assert plus.totale == pytest.approx(2090.0)
    assert standard.totale == pytest.approx(900.0)
    assert risultato.dettaglio_stazioni[0].totale == pytest.approx(810.0)

    assert risultato.ricavo_totale == pytest.approx(3800.0)
    assert risultato.costo_allocato == pytest.approx(15_400.0)
    assert risultato.margine_lordo == pytest.approx(-11_600.0)
    assert risultato.margine_perc == pytest.approx(-305.26, abs=0.01)


def test_preventivo_vuoto_ha_margine_percentuale_zero(costi_annui):
    risultato = calcola_preventivo(RichiestaPreventivo("1", "lotto-2025-q4-al"), costi_annui)

    assert risultato.ricavo_totale == 0
    assert risultato.margine_perc == 0
    assert not math.isnan(risultato.margine_perc)
    assert risultato.margine_lordo == pytest.approx(-15_400.0)


def test_sconto_totale_azzera_il_ricavo_senza_nan():
    richiesta = RichiestaPreventivo("1", "l", [RigaSpazio(TipoSpazio.PREMIUM, 1, 100)])

    risultato = calcola_preventivo(richiesta, [])

    assert risultato.ricavo_totale == 0
    assert risultato.margine_perc == 0


def test_tipo_come_stringa_accettato(costi_annui):
    richiesta = RichiestaPreventivo("1", "l", [RigaSpazio("premium", 1)])
    assert calcola_preventivo(richiesta, costi_annui).ricavo_totale == pytest.approx(1500.0)


@pytest.mark.parametrize("quantita", [0, -1, 1.5, True])
def test_quantita_non_valida(quantita):
    richiesta = RichiestaPreventivo("1", "l", [RigaSpazio(TipoSpazio.STANDARD, quantita)])
    with pytest.raises(ErroreValidazione):
        calcola_preventivo(richiesta, [])


def test_tipo_sconosciuto():
    richiesta = RichiestaPreventivo("1", "l", [RigaSpazio("GOLD", 1)])
    with pytest.raises(ErroreValidazione):
        calcola_preventivo(richiesta, [])


def test_sconto_non_numerico():
    richiesta = RichiestaPreventivo("1", "l", righe_stazioni=[RigaStazione(1, "10")])
    with pytest.raises(ErroreValidazione):
        calcola_preventivo(richiesta, [])


def test_numero_stazione_non_intero():
    richiesta = RichiestaPreventivo("1", "l", righe_stazioni=[RigaStazione("3")])
    with pytest.raises(ErroreValidazione):
        calcola_preventivo(richiesta, [])


def test_ricavo_totale_somma_delle_righe_casuali(costi_annui):
    rng = random.Random(20251001)
    for _ in range(200):
        richiesta = _richiesta_casuale(rng)
        risultato = calcola_preventivo(richiesta, costi_annui)

        for riga, dettaglio in zip(richiesta.righe_spazi, risultato.dettaglio_spazi):
            netto = PREZZI[riga.tipo] * (1 - riga.sconto_perc / 100)
            assert dettaglio.prezzo_netto_unitario == pytest.approx(netto, abs=0.005)
            assert dettaglio.totale == pytest.approx(netto * riga.quantita, abs=0.005)

        totale_righe = sum(d.totale for d in risultato.dettaglio_spazi) + sum(
            d.totale for d in risultato.dettaglio_stazioni
        )
        assert risultato.ricavo_totale == pytest.approx(totale_righe, abs=0.01)


def test_ordine_delle_righe_non_cambia_il_risultato(costi_annui):
    rng = random.Random(7)
    for _ in range(100):
        richiesta = _richiesta_casuale(rng)
        rimescolata = RichiestaPreventivo(
            richiesta.cliente_id,
            richiesta.lotto_id,
            rng.sample(richiesta.righe_spazi, len(richiesta.righe_spazi)),
            rng.sample(richiesta.righe_stazioni, len(richiesta.righe_stazioni)),
        )

        originale = calcola_preventivo(richiesta, costi_annui)
        permutato = calcola_preventivo(rimescolata, costi_annui)

        assert permutato.ricavo_totale == originale.ricavo_totale
        assert permutato.margine_lordo == originale.margine_lordo
        assert permutato.margine_perc == originale.margine_perc


def test_preventivo_non_modifica_i_costi(costi_annui):
    importo_prima = costi_annui[0].importo
    calcola_preventivo(RichiestaPreventivo("1", "l", [RigaSpazio(TipoSpazio.PLUS, 3)]), costi_annui)
    assert costi_annui[0].importo == importo_prima
    assert len(costi_annui) == 1
