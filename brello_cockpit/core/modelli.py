"""
Modello di dominio del cockpit Brellò.

Anagrafiche e record operativi letti dal motore di calcolo. I record
arrivano dal livello di accesso ai dati come semplici liste; il motore
non li modifica mai.

ENTITA':
    - Cliente (con Contatti)
    - Lotto: lotto di inventario in una citta' e in un periodo
    - Spazio: spazio pubblicitario su ombrello (Standard/Plus/Premium)
    - Stazione: sponsorship di una stazione, prezzo unico
    - Opportunita: trattativa commerciale nella pipeline
    - VoceCosto: costo di struttura con la sua frequenza
    - MovimentoCassa: entrata o uscita di cassa

Autore: Brellò
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from brello_cockpit.config import (
    CategoriaCliente,
    CategoriaCosto,
    FaseOpportunita,
    FrequenzaCosto,
    StatoLotto,
    StatoSpazio,
    StatoStazione,
    TipoMovimento,
    TipoOpportunita,
    TipoSpazio,
)
from brello_cockpit.data.validators import (
    ErroreValidazione,
    valida_data,
    valida_enum,
    valida_non_negativo,
    valida_numero,
    valida_percentuale,
    valida_periodo_lotto,
    valida_piva_codfisc,
)

logger = logging.getLogger(__name__)

# Scarto massimo ammesso tra prezzo netto registrato e prezzo calcolato
TOLLERANZA_PREZZO_NETTO = 0.01


def calcola_prezzo_netto(prezzo_listino: float, sconto_perc: float) -> float:
    """Prezzo netto = listino x (1 - sconto/100)."""
    return prezzo_listino * (1 - sconto_perc / 100)


def _risolvi_prezzo_netto(
    prezzo_listino: float,
    sconto_perc: float,
    prezzo_netto: Optional[float],
    descrizione: str,
) -> float:
    """
    Deriva il prezzo netto da listino e sconto oppure verifica quello
    registrato, che deve coincidere al centesimo.

    Raises:
        ErroreValidazione: se il prezzo netto registrato non e' coerente.
    """
    atteso = calcola_prezzo_netto(prezzo_listino, sconto_perc)
    if prezzo_netto is None:
        return atteso
    registrato = valida_numero(prezzo_netto, f"Prezzo netto {descrizione}")
    if not math.isclose(registrato, atteso, rel_tol=0.0, abs_tol=TOLLERANZA_PREZZO_NETTO):
        raise ErroreValidazione(
            f"Prezzo netto {descrizione} incoerente: registrato {registrato:.2f}, "
            f"atteso {atteso:.2f} (listino {prezzo_listino:.2f}, sconto {sconto_perc}%)"
        )
    return registrato


# ============================================================================
# ANAGRAFICHE
# ============================================================================


@dataclass
class Contatti:
    email: str = ""
    telefono: str = ""
    indirizzo: str = ""
    referente: str = ""


@dataclass
class Cliente:
    """
    Cliente inserzionista.

    Attributi:
        id: identificativo stabile
        ragione_sociale: denominazione legale
        piva_codfisc: partita IVA o codice fiscale (obbligatorio)
        categoria: segmento del cliente
        contatti: recapiti
        attivo: False per i clienti dismessi
        note: note libere
    """
    id: str
    ragione_sociale: str
    piva_codfisc: str
    categoria: CategoriaCliente
    contatti: Contatti = field(default_factory=Contatti)
    attivo: bool = True
    note: str = ""

    def __post_init__(self):
        self.piva_codfisc = valida_piva_codfisc(self.piva_codfisc)
        self.categoria = valida_enum(self.categoria, CategoriaCliente, "Categoria cliente")


@dataclass
class Lotto:
    """
    Lotto di inventario venduto in un periodo definito.

    Attributi:
        id: identificativo stabile
        codice_lotto: codice leggibile (es. "2025-Q4-AL")
        citta: citta' del lotto
        periodo_start: data di avvio (riferimento per il Go/No-Go)
        periodo_end: data di fine, successiva all'avvio
        inventario_spazi: spazi totali in vendita
        stazioni_tot: stazioni totali in vendita
        soglia_go_nogo: occupancy spazi minima (%) per andare in stampa
        target_ricavo: ricavo obiettivo del lotto (euro)
        stato: stato canonico (accetta anche i codici legacy)
        indirizzo: indirizzo della zona servita
    """
    id: str
    codice_lotto: str
    citta: str
    periodo_start: date
    periodo_end: date
    inventario_spazi: int
    stazioni_tot: int
    soglia_go_nogo: float
    target_ricavo: float
    stato: StatoLotto = StatoLotto.PIANIFICATO
    indirizzo: str = ""

    def __post_init__(self):
        self.periodo_start = valida_data(self.periodo_start, "Inizio periodo lotto")
        self.periodo_end = valida_data(self.periodo_end, "Fine periodo lotto")
        valida_periodo_lotto(self.periodo_start, self.periodo_end)
        valida_non_negativo(self.inventario_spazi, "Inventario spazi")
        valida_non_negativo(self.stazioni_tot, "Stazioni totali")
        valida_numero(self.soglia_go_nogo, "Soglia Go/No-Go")
        if not isinstance(self.stato, StatoLotto):
            try:
                self.stato = StatoLotto.da_valore(self.stato)
            except ValueError as exc:
                raise ErroreValidazione(str(exc)) from exc


# ============================================================================
# INVENTARIO
# ============================================================================


@dataclass
class Spazio:
    """
    Spazio pubblicitario di un lotto.

    Se prezzo_netto non viene fornito e' derivato da listino e sconto,
    altrimenti deve coincidere al centesimo con listino x (1 - sconto/100).
    """
    id: str
    lotto_id: str
    numero_spazio: int
    tipo: TipoSpazio
    prezzo_listino: float
    sconto_perc: float = 0.0
    prezzo_netto: Optional[float] = None
    stato: StatoSpazio = StatoSpazio.LIBERO
    cliente_id: Optional[str] = None

    def __post_init__(self):
        self.tipo = valida_enum(self.tipo, TipoSpazio, "Tipo spazio")
        self.stato = valida_enum(self.stato, StatoSpazio, "Stato spazio")
        valida_numero(self.prezzo_listino, "Prezzo listino spazio")
        valida_numero(self.sconto_perc, "Sconto spazio")
        self.prezzo_netto = _risolvi_prezzo_netto(
            self.prezzo_listino, self.sconto_perc, self.prezzo_netto,
            f"spazio {self.numero_spazio}",
        )


@dataclass
class Stazione:
    """Sponsorship di una stazione del lotto."""
    id: str
    lotto_id: str
    numero_stazione: int
    prezzo_listino: float
    sconto_perc: float = 0.0
    prezzo_netto: Optional[float] = None
    stato: StatoStazione = StatoStazione.LIBERA
    cliente_id: Optional[str] = None

    def __post_init__(self):
        self.stato = valida_enum(self.stato, StatoStazione, "Stato stazione")
        valida_numero(self.prezzo_listino, "Prezzo listino stazione")
        valida_numero(self.sconto_perc, "Sconto stazione")
        self.prezzo_netto = _risolvi_prezzo_netto(
            self.prezzo_listino, self.sconto_perc, self.prezzo_netto,
            f"stazione {self.numero_stazione}",
        )


# ============================================================================
# PIPELINE, COSTI, CASSA
# ============================================================================


@dataclass
class Opportunita:
    """
    Trattativa commerciale. Le fasi non hanno un ordine obbligato:
    l'utente puo' spostare un'opportunita' in qualsiasi fase.
    """
    id: str
    cliente_id: str
    lotto_id: str
    oggetto: str
    tipo: TipoOpportunita
    valore_previsto: float
    fase: FaseOpportunita
    probabilita_perc: float = 0.0
    data_chiusura_prevista: Optional[date] = None
    note: str = ""

    def __post_init__(self):
        self.tipo = valida_enum(self.tipo, TipoOpportunita, "Tipo opportunita'")
        self.fase = valida_enum(self.fase, FaseOpportunita, "Fase opportunita'")
        valida_numero(self.valore_previsto, "Valore previsto")
        valida_percentuale(self.probabilita_perc, "Probabilita'")
        self.data_chiusura_prevista = valida_data(
            self.data_chiusura_prevista, "Data chiusura prevista", obbligatoria=False
        )


@dataclass
class VoceCosto:
    """
    Costo di struttura.

    Attributi:
        importo: importo per singola occorrenza secondo la frequenza
        mesi_pagamento: mesi di uscita di cassa separati da virgola
                        (es. "1,4,7,10"); se vuoto valgono i default
                        della frequenza
    """
    id: str
    categoria: CategoriaCosto
    descrizione: str
    importo: float
    frequenza: FrequenzaCosto
    data_competenza: date
    ricorrente: bool = True
    mesi_pagamento: Optional[str] = None
    lotto_id: Optional[str] = None

    def __post_init__(self):
        self.categoria = valida_enum(self.categoria, CategoriaCosto, "Categoria costo")
        self.frequenza = valida_enum(self.frequenza, FrequenzaCosto, "Frequenza costo")
        valida_non_negativo(self.importo, f"Importo costo '{self.descrizione}'")
        self.data_competenza = valida_data(self.data_competenza, "Data competenza")


@dataclass
class MovimentoCassa:
    id: str
    data: date
    tipo: TipoMovimento
    importo: float
    descrizione: str = ""
    categoria: str = ""

    def __post_init__(self):
        if not isinstance(self.tipo, TipoMovimento):
            try:
                self.tipo = TipoMovimento.da_valore(self.tipo)
            except ValueError as exc:
                raise ErroreValidazione(str(exc)) from exc
        self.data = valida_data(self.data, "Data movimento")
        valida_numero(self.importo, "Importo movimento")
