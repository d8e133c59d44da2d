"""
Generatore dati demo per il cockpit Brellò.

Ricostruisce il lotto di avvio 2025-Q4-AL di Alatri:
  - 4 clienti (PMI locali, una PMI regionale, il Comune)
  - 18 spazi: 16 venduti (6 Standard, 8 Plus di cui 2 scontati del 5%,
    2 Premium) e 2 Standard liberi
  - 10 stazioni, 7 vendute a prezzo pieno
  - 3 opportunita' in pipeline
  - 7 voci di costo annue per 46.200 euro complessivi

I dati sono deterministici: ogni chiamata restituisce liste nuove con
lo stesso contenuto.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from brello_cockpit.config import (
    CategoriaCliente,
    CategoriaCosto,
    FaseOpportunita,
    FrequenzaCosto,
    StatoSpazio,
    StatoStazione,
    TipoOpportunita,
    TipoSpazio,
)
from brello_cockpit.core.listino import LISTINO_STANDARD, prezzo_spazio, prezzo_stazione
from brello_cockpit.core.modelli import (
    Cliente,
    Contatti,
    Lotto,
    MovimentoCassa,
    Opportunita,
    Spazio,
    Stazione,
    VoceCosto,
)

logger = logging.getLogger(__name__)

ID_LOTTO_DEMO = "lotto-2025-q4-al"


@dataclass
class DatiDemo:
    clienti: List[Cliente] = field(default_factory=list)
    lotti: List[Lotto] = field(default_factory=list)
    spazi: List[Spazio] = field(default_factory=list)
    stazioni: List[Stazione] = field(default_factory=list)
    opportunita: List[Opportunita] = field(default_factory=list)
    costi: List[VoceCosto] = field(default_factory=list)
    movimenti: List[MovimentoCassa] = field(default_factory=list)


# ============================================================================
# ANAGRAFICHE E LOTTO
# ============================================================================


def _genera_clienti() -> List[Cliente]:
    return [
        Cliente(
            id="1",
            ragione_sociale="Bar Centrale Alatri",
            piva_codfisc="12345678901",
            categoria=CategoriaCliente.PMI_LOCALE,
            contatti=Contatti(
                email="info@barcentrale.it",
                telefono="0775123456",
                indirizzo="Piazza Regina Margherita 1, Alatri",
                referente="Mario Rossi",
            ),
        ),
        Cliente(
            id="2",
            ragione_sociale="Farmacia San Francesco",
            piva_codfisc="98765432109",
            categoria=CategoriaCliente.PMI_LOCALE,
            contatti=Contatti(
                email="farmacia@sanfrancesco.it",
                telefono="0775654321",
                indirizzo="Via Roma 45, Alatri",
                referente="Dott.ssa Bianchi",
            ),
        ),
        Cliente(
            id="3",
            ragione_sociale="Banca Popolare del Lazio",
            piva_codfisc="11223344556",
            categoria=CategoriaCliente.PMI_REGIONALE,
            contatti=Contatti(
                email="marketing@bpl.it",
                telefono="0775111222",
                indirizzo="Corso della Repubblica 12, Alatri",
                referente="Ing. Verdi",
            ),
        ),
        Cliente(
            id="4",
            ragione_sociale="Comune di Alatri",
            piva_codfisc="80001234567",
            categoria=CategoriaCliente.ISTITUZIONALE,
            contatti=Contatti(
                email="comunicazione@comune.alatri.fr.it",
                telefono="0775434343",
                indirizzo="Piazza Santa Maria Maggiore 1, Alatri",
                referente="Assessore Cultura",
            ),
        ),
    ]


def _genera_lotti() -> List[Lotto]:
    return [
        Lotto(
            id=ID_LOTTO_DEMO,
            codice_lotto="2025-Q4-AL",
            citta="Alatri",
            periodo_start=date(2025, 10, 1),
            periodo_end=date(2025, 12, 31),
            inventario_spazi=18,
            stazioni_tot=10,
            soglia_go_nogo=70.0,
            target_ricavo=19_300.0,
            stato="PREVENDITA",
        )
    ]


# ============================================================================
# INVENTARIO
# ============================================================================


def _genera_spazi() -> List[Spazio]:
    """
    Spazi del lotto demo con i clienti assegnati.

    Ogni riga del piano indica tipo, sconto, stato e cliente di uno spazio,
    nell'ordine di numerazione.
    """
    piano = (
        # 6 Standard venduti
        [(TipoSpazio.STANDARD, 0.0, StatoSpazio.VENDUTO, c) for c in ("1", "1", "2", "2", "4", "4")]
        # 8 Plus venduti, i primi due scontati del 5%
        + [(TipoSpazio.PLUS, 5.0, StatoSpazio.VENDUTO, "2")] * 2
        + [(TipoSpazio.PLUS, 0.0, StatoSpazio.VENDUTO, c) for c in ("2", "3", "3", "3", "1", "1")]
        # 2 Premium venduti
        + [(TipoSpazio.PREMIUM, 0.0, StatoSpazio.VENDUTO, "3")] * 2
        # 2 Standard liberi
        + [(TipoSpazio.STANDARD, 0.0, StatoSpazio.LIBERO, None)] * 2
    )

    spazi = []
    for numero, (tipo, sconto, stato, cliente_id) in enumerate(piano, start=1):
        spazi.append(Spazio(
            id=f"spazio-{numero}",
            lotto_id=ID_LOTTO_DEMO,
            numero_spazio=numero,
            tipo=tipo,
            prezzo_listino=prezzo_spazio(LISTINO_STANDARD, tipo),
            sconto_perc=sconto,
            stato=stato,
            cliente_id=cliente_id,
        ))
    return spazi


def _cliente_stazione(numero: int) -> Optional[str]:
    if numero <= 3:
        return "1"
    if numero <= 5:
        return "2"
    if numero <= 7:
        return "3"
    return None


def _genera_stazioni() -> List[Stazione]:
    stazioni = []
    for numero in range(1, 11):
        cliente_id = _cliente_stazione(numero)
        stazioni.append(Stazione(
            id=f"stazione-{numero}",
            lotto_id=ID_LOTTO_DEMO,
            numero_stazione=numero,
            prezzo_listino=prezzo_stazione(LISTINO_STANDARD),
            stato=StatoStazione.VENDUTA if cliente_id else StatoStazione.LIBERA,
            cliente_id=cliente_id,
        ))
    return stazioni


# ============================================================================
# PIPELINE E COSTI
# ============================================================================


def _genera_opportunita() -> List[Opportunita]:
    return [
        Opportunita(
            id="opp-1",
            cliente_id="1",
            lotto_id=ID_LOTTO_DEMO,
            oggetto="Spazio Plus Autunno 2025",
            tipo=TipoOpportunita.SPAZIO,
            valore_previsto=1_100.0,
            fase=FaseOpportunita.LEAD,
            probabilita_perc=30.0,
            data_chiusura_prevista=date(2025, 9, 15),
            note="Interessato a visibilita' durante eventi autunnali",
        ),
        Opportunita(
            id="opp-2",
            cliente_id="2",
            lotto_id=ID_LOTTO_DEMO,
            oggetto="Sponsorship Stazione Centro",
            tipo=TipoOpportunita.STAZIONE,
            valore_previsto=900.0,
            fase=FaseOpportunita.QUALIFICA,
            probabilita_perc=60.0,
            data_chiusura_prevista=date(2025, 9, 20),
        ),
        Opportunita(
            id="opp-3",
            cliente_id="3",
            lotto_id=ID_LOTTO_DEMO,
            oggetto="Pacchetto Premium + Stazione",
            tipo=TipoOpportunita.MISTO,
            valore_previsto=2_400.0,
            fase=FaseOpportunita.OFFERTA,
            probabilita_perc=80.0,
            data_chiusura_prevista=date(2025, 9, 25),
        ),
    ]


# (categoria, descrizione, importo annuo, ricorrente)
_COSTI_ANNUI_DEMO = [
    (CategoriaCosto.PERSONALE, "Stipendio operatore + contributi", 25_800.0, True),
    (CategoriaCosto.VEICOLO, "Noleggio furgone + carburante", 6_000.0, True),
    (CategoriaCosto.OMBRELLI, "Acquisto ombrelli personalizzati", 3_600.0, True),
    (CategoriaCosto.STAZIONI, "Realizzazione rastrelliere", 5_000.0, False),
    (CategoriaCosto.MARKETING, "Promozione locale e materiali", 3_000.0, True),
    (CategoriaCosto.PERMESSI, "Permessi, assicurazioni, manutenzioni", 2_500.0, True),
    (CategoriaCosto.PERDITE, "Fondo perdite/danni ombrelli", 300.0, True),
]


def _genera_costi() -> List[VoceCosto]:
    return [
        VoceCosto(
            id=f"cost-{indice}",
            categoria=categoria,
            descrizione=descrizione,
            importo=importo,
            frequenza=FrequenzaCosto.ANNUALE,
            data_competenza=date(2025, 1, 1),
            ricorrente=ricorrente,
        )
        for indice, (categoria, descrizione, importo, ricorrente)
        in enumerate(_COSTI_ANNUI_DEMO, start=1)
    ]


# ============================================================================
# FUNZIONE PRINCIPALE
# ============================================================================


def genera_dati_demo() -> DatiDemo:
    """
    Genera il set di dati demo completo.

    Returns:
        DatiDemo con clienti, lotti, spazi, stazioni, opportunita' e
        costi; nessun movimento di cassa registrato.
    """
    dati = DatiDemo(
        clienti=_genera_clienti(),
        lotti=_genera_lotti(),
        spazi=_genera_spazi(),
        stazioni=_genera_stazioni(),
        opportunita=_genera_opportunita(),
        costi=_genera_costi(),
    )
    logger.debug(
        "Dati demo: %d clienti, %d lotti, %d spazi, %d stazioni, %d opportunita', %d costi",
        len(dati.clienti), len(dati.lotti), len(dati.spazi),
        len(dati.stazioni), len(dati.opportunita), len(dati.costi),
    )
    return dati
