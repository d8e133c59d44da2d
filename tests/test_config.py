from dataclasses import replace

import pytest

from brello_cockpit.config import CONFIGURAZIONE_DEFAULT, ConfigurazioneEngine
from brello_cockpit.data.validators import ErroreValidazione


def test_configurazione_default():
    assert CONFIGURAZIONE_DEFAULT.lotti_per_anno == 3
    assert CONFIGURAZIONE_DEFAULT.soglia_break_even == 46_200.0
    assert CONFIGURAZIONE_DEFAULT.slot_spazi == 18
    assert CONFIGURAZIONE_DEFAULT.slot_stazioni == 10


@pytest.mark.parametrize(
    "modifiche",
    [
        {"lotti_per_anno": 0},
        {"unita_medie_lotto": -1},
        {"soglia_break_even": -1.0},
        {"ricavo_base_lotto": -19_300.0},
        {"slot_spazi": -18},
        {"slot_stazioni": -1},
        {"lotti_per_anno": "3"},
        {"giorni_no_go": 40},
    ],
)
def test_configurazione_non_valida(modifiche):
    with pytest.raises(ErroreValidazione):
        replace(CONFIGURAZIONE_DEFAULT, **modifiche)


def test_configurazione_ammette_valori_nulli():
    config = ConfigurazioneEngine(soglia_break_even=0.0, slot_spazi=0, slot_stazioni=0)
    assert config.slot_spazi == 0
