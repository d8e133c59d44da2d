"""
Modulo core: motore di calcolo del cockpit Brellò.

Sotto-moduli:
    - modelli: entita' di dominio (clienti, lotti, spazi, stazioni, ...)
    - listino: prezzi di listino e prezzo netto scontato
    - preventivatore: preventivo con ricavo, costo allocato e margine
    - dashboard: indicatori del lotto corrente (occupancy, break-even, Go/No-Go, funnel)
    - scenari: simulazione what-if su occupancy, prezzi e costi
    - cassa: annualizzazione dei costi, saldo e piano dei pagamenti
    - report: aggregazioni per segmento, lotto, cliente e fase
"""

from brello_cockpit.core.modelli import (
    Contatti,
    Cliente,
    Lotto,
    Spazio,
    Stazione,
    Opportunita,
    VoceCosto,
    MovimentoCassa,
)

from brello_cockpit.core.listino import (
    LISTINO_STANDARD,
    prezzo_spazio,
    prezzo_stazione,
    prezzo_netto,
)

from brello_cockpit.core.cassa import (
    annualizza_importo,
    totale_costi_annui,
    costi_per_categoria,
    saldo_cassa,
    piano_pagamenti,
)

from brello_cockpit.core.preventivatore import (
    RigaSpazio,
    RigaStazione,
    RichiestaPreventivo,
    RisultatoPreventivo,
    calcola_costo_allocato,
    calcola_preventivo,
)

from brello_cockpit.core.dashboard import (
    DatiDashboard,
    seleziona_per_id,
    seleziona_per_codice,
    seleziona_lotto_corrente,
    calcola_break_even,
    valuta_go_no_go,
    calcola_funnel,
    calcola_dashboard,
)

from brello_cockpit.core.scenari import (
    ParametriScenario,
    RisultatoScenario,
    calcola_scenario,
    simula_scenario,
    scenari_predefiniti,
    confronta_scenari,
    genera_report_scenario,
)

from brello_cockpit.core.report import (
    vendite_per_segmento,
    performance_lotti,
    clienti_top,
    valore_pipeline_per_fase,
)

__all__ = [
    # modelli
    "Contatti",
    "Cliente",
    "Lotto",
    "Spazio",
    "Stazione",
    "Opportunita",
    "VoceCosto",
    "MovimentoCassa",
    # listino
    "LISTINO_STANDARD",
    "prezzo_spazio",
    "prezzo_stazione",
    "prezzo_netto",
    # cassa
    "annualizza_importo",
    "totale_costi_annui",
    "costi_per_categoria",
    "saldo_cassa",
    "piano_pagamenti",
    # preventivatore
    "RigaSpazio",
    "RigaStazione",
    "RichiestaPreventivo",
    "RisultatoPreventivo",
    "calcola_costo_allocato",
    "calcola_preventivo",
    # dashboard
    "DatiDashboard",
    "seleziona_per_id",
    "seleziona_per_codice",
    "seleziona_lotto_corrente",
    "calcola_break_even",
    "valuta_go_no_go",
    "calcola_funnel",
    "calcola_dashboard",
    # scenari
    "ParametriScenario",
    "RisultatoScenario",
    "calcola_scenario",
    "simula_scenario",
    "scenari_predefiniti",
    "confronta_scenari",
    "genera_report_scenario",
    # report
    "vendite_per_segmento",
    "performance_lotti",
    "clienti_top",
    "valore_pipeline_per_fase",
]
