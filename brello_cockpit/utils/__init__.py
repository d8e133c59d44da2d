"""Utilità: calcoli numerici, date, formattazione, alert."""

from brello_cockpit.utils.calcolo_utils import (
    percentuale,
    margine_percentuale,
    arrotonda_intero,
    somma,
)

from brello_cockpit.utils.date_utils import (
    parse_data,
    giorni_rimanenti,
    formatta_data,
)

from brello_cockpit.utils.format_utils import (
    formatta_valuta,
    formatta_variazione_valuta,
    formatta_percentuale,
    formatta_numero,
)

from brello_cockpit.utils.alert_utils import (
    Alert,
    colore_semaforo,
    livello_break_even,
    descrizione_break_even,
    livello_margine_scenario,
    livello_go_no_go,
    genera_alert_dashboard,
    formatta_alert_testo,
)

__all__ = [
    # calcolo_utils
    "percentuale",
    "margine_percentuale",
    "arrotonda_intero",
    "somma",
    # date_utils
    "parse_data",
    "giorni_rimanenti",
    "formatta_data",
    # format_utils
    "formatta_valuta",
    "formatta_variazione_valuta",
    "formatta_percentuale",
    "formatta_numero",
    # alert_utils
    "Alert",
    "colore_semaforo",
    "livello_break_even",
    "descrizione_break_even",
    "livello_margine_scenario",
    "livello_go_no_go",
    "genera_alert_dashboard",
    "formatta_alert_testo",
]
