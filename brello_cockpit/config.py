"""
Configurazione centrale del cockpit Brellò.
Contiene enumerazioni di dominio, parametri di business del motore di
calcolo, soglie semaforo, scenari predefiniti e formati.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from brello_cockpit.data.validators import ErroreValidazione, valida_non_negativo, valida_numero

logger = logging.getLogger(__name__)

# ============================================================================
# ENUMERAZIONI
# ============================================================================


class CategoriaCliente(Enum):
    PMI_LOCALE = "PMI locale"
    PMI_REGIONALE = "PMI regionale"
    PMI_NAZIONALE = "PMI nazionale"
    ISTITUZIONALE = "Istituzionale"


class StatoLotto(Enum):
    PIANIFICATO = "Pianificato"
    ATTIVO = "Attivo"
    SOSPESO = "Sospeso"
    COMPLETATO = "Completato"

    @classmethod
    def da_valore(cls, valore: str) -> "StatoLotto":
        """
        Converte un codice stato (canonico o legacy) nello stato canonico.

        Le schermate storiche usavano PREVENDITA/ATTIVO/CHIUSO accanto a
        PIANIFICATO/ATTIVO/SOSPESO/COMPLETATO: i valori legacy vengono
        ricondotti esplicitamente tramite MAPPA_STATI_LOTTO_LEGACY.

        Raises:
            ValueError: se il codice non e' riconosciuto.
        """
        codice = str(valore).strip().upper()
        if codice in cls.__members__:
            return cls[codice]
        if codice in MAPPA_STATI_LOTTO_LEGACY:
            canonico = MAPPA_STATI_LOTTO_LEGACY[codice]
            logger.debug("Stato lotto legacy '%s' mappato su %s", codice, canonico.name)
            return canonico
        raise ValueError(
            f"Stato lotto non riconosciuto: '{valore}'. "
            f"Valori ammessi: {list(cls.__members__) + list(MAPPA_STATI_LOTTO_LEGACY)}"
        )


MAPPA_STATI_LOTTO_LEGACY: Dict[str, StatoLotto] = {
    "PREVENDITA": StatoLotto.PIANIFICATO,
    "CHIUSO": StatoLotto.COMPLETATO,
    "PLANNED": StatoLotto.PIANIFICATO,
    "PRESALE": StatoLotto.PIANIFICATO,
    "ACTIVE": StatoLotto.ATTIVO,
    "SUSPENDED": StatoLotto.SOSPESO,
    "COMPLETED": StatoLotto.COMPLETATO,
    "CLOSED": StatoLotto.COMPLETATO,
}


class TipoSpazio(Enum):
    STANDARD = "Standard"
    PLUS = "Plus"
    PREMIUM = "Premium"


class StatoSpazio(Enum):
    LIBERO = "Libero"
    OPZIONATO = "Opzionato"
    VENDUTO = "Venduto"
    INVENDUTO = "Invenduto"


class StatoStazione(Enum):
    LIBERA = "Libera"
    OPZIONATA = "Opzionata"
    VENDUTA = "Venduta"


class TipoOpportunita(Enum):
    SPAZIO = "Spazio"
    STAZIONE = "Stazione"
    MISTO = "Misto"


class FaseOpportunita(Enum):
    LEAD = "Lead"
    QUALIFICA = "Qualifica"
    OFFERTA = "Offerta"
    CHIUSURA = "Chiusura"


class CategoriaCosto(Enum):
    PERSONALE = "Personale"
    VEICOLO = "Veicolo"
    OMBRELLI = "Ombrelli"
    STAZIONI = "Stazioni"
    MARKETING = "Marketing"
    PERMESSI = "Permessi e assicurazioni"
    PERDITE = "Perdite e danni"
    ALTRO = "Altro"


class FrequenzaCosto(Enum):
    MENSILE = "Mensile"
    TRIMESTRALE = "Trimestrale"
    SEMESTRALE = "Semestrale"
    ANNUALE = "Annuale"
    UNA_TANTUM = "Una tantum"


class TipoMovimento(Enum):
    ENTRATA = "Entrata"
    USCITA = "Uscita"

    @classmethod
    def da_valore(cls, valore: str) -> "TipoMovimento":
        """Accetta anche i codici legacy INCASSO/PAGAMENTO."""
        codice = str(valore).strip().upper()
        legacy = {"INCASSO": cls.ENTRATA, "PAGAMENTO": cls.USCITA}
        if codice in cls.__members__:
            return cls[codice]
        if codice in legacy:
            return legacy[codice]
        raise ValueError(f"Tipo movimento non riconosciuto: '{valore}'")


class EsitoGoNoGo(Enum):
    GO = "GO"
    WARNING = "WARNING"
    NO_GO = "NO_GO"


class LivelliAlert(Enum):
    VERDE = "verde"
    GIALLO = "giallo"
    ROSSO = "rosso"


# ============================================================================
# LISTINO PREZZI (unica fonte dei prezzi di listino)
# ============================================================================

PREZZI_LISTINO_SPAZI: Dict[TipoSpazio, float] = {
    TipoSpazio.STANDARD: 900.0,
    TipoSpazio.PLUS: 1100.0,
    TipoSpazio.PREMIUM: 1500.0,
}

PREZZO_LISTINO_STAZIONE = 900.0

# Moltiplicatori per riportare un importo su base annua
MOLTIPLICATORI_ANNUI: Dict[FrequenzaCosto, int] = {
    FrequenzaCosto.MENSILE: 12,
    FrequenzaCosto.TRIMESTRALE: 4,
    FrequenzaCosto.SEMESTRALE: 2,
    FrequenzaCosto.ANNUALE: 1,
    FrequenzaCosto.UNA_TANTUM: 1,
}

# Mesi di uscita di cassa quando la voce non indica mesi_pagamento
MESI_PAGAMENTO_DEFAULT: Dict[FrequenzaCosto, Optional[tuple]] = {
    FrequenzaCosto.MENSILE: tuple(range(1, 13)),
    FrequenzaCosto.TRIMESTRALE: (1, 4, 7, 10),
    FrequenzaCosto.SEMESTRALE: (1, 7),
    FrequenzaCosto.ANNUALE: None,      # mese della data di competenza
    FrequenzaCosto.UNA_TANTUM: None,   # mese della data di competenza
}


# ============================================================================
# PARAMETRI DEL MOTORE DI CALCOLO
# ============================================================================


@dataclass(frozen=True)
class Listino:
    """
    Listino prezzi delle unita' di inventario.

    Attributi:
        prezzi_spazi: prezzo di listino per tipo di spazio
        prezzo_stazione: prezzo di listino unico delle stazioni
    """
    prezzi_spazi: Dict[TipoSpazio, float] = field(
        default_factory=lambda: dict(PREZZI_LISTINO_SPAZI)
    )
    prezzo_stazione: float = PREZZO_LISTINO_STAZIONE


@dataclass(frozen=True)
class ConfigurazioneEngine:
    """
    Parametri di business iniettati in ogni calcolo.

    I valori di default descrivono il lotto di riferimento di Alatri;
    in esercizio variano per lotto e per anno.

    Attributi:
        lotti_per_anno: numero di lotti venduti in un anno
        soglia_break_even: ricavi annui necessari a coprire i costi (euro)
        ricavo_base_lotto: ricavo spazi di un lotto di riferimento (euro)
        unita_medie_lotto: spazi venduti mediamente in un lotto di riferimento
        slot_spazi: spazi disponibili in un lotto (simulazione scenari)
        slot_stazioni: stazioni disponibili in un lotto (simulazione scenari)
        giorni_no_go: giorni all'avvio sotto i quali scatta il NO_GO
        giorni_warning: giorni all'avvio sotto i quali scatta il WARNING
        listino: listino prezzi
    """
    lotti_per_anno: int = 3
    soglia_break_even: float = 46_200.0
    ricavo_base_lotto: float = 19_300.0
    unita_medie_lotto: int = 16
    slot_spazi: int = 18
    slot_stazioni: int = 10
    giorni_no_go: int = 14
    giorni_warning: int = 30
    listino: Listino = field(default_factory=Listino)

    def __post_init__(self):
        for nome in ("lotti_per_anno", "unita_medie_lotto"):
            if valida_numero(getattr(self, nome), nome) <= 0:
                raise ErroreValidazione(f"{nome} deve essere positivo")
        for nome in ("soglia_break_even", "ricavo_base_lotto", "slot_spazi", "slot_stazioni"):
            valida_non_negativo(getattr(self, nome), nome)
        if self.giorni_no_go > self.giorni_warning:
            raise ErroreValidazione(
                f"giorni_no_go ({self.giorni_no_go}) non puo' superare "
                f"giorni_warning ({self.giorni_warning})"
            )


CONFIGURAZIONE_DEFAULT = ConfigurazioneEngine()

# Codice del lotto usato come ripiego quando nessun lotto e' fissato
CODICE_LOTTO_RIPIEGO = "2025-Q4-AL"

# ============================================================================
# SOGLIE SEMAFORO (presentazione, non output del motore)
# ============================================================================

# (verde_min, giallo_min) in percentuale - sotto giallo_min e' rosso
SOGLIE_BREAK_EVEN = (100.0, 80.0)

# Margine % annuo di uno scenario: (eccellente, buono, accettabile)
SOGLIE_MARGINE_SCENARIO = (25.0, 15.0, 5.0)

# ============================================================================
# SCENARI PREDEFINITI
# ============================================================================

SCENARI_PREDEFINITI = {
    "base": {
        "label": "Base",
        "occupancy_spazi_perc": 88.9,
        "occupancy_stazioni_perc": 70.0,
        "variazione_prezzo_perc": 0.0,
        "variazione_costi_perc": 0.0,
    },
    "best_case": {
        "label": "Best Case",
        "occupancy_spazi_perc": 100.0,
        "occupancy_stazioni_perc": 100.0,
        "variazione_prezzo_perc": 10.0,
        "variazione_costi_perc": -5.0,
    },
    "worst_case": {
        "label": "Worst Case",
        "occupancy_spazi_perc": 60.0,
        "occupancy_stazioni_perc": 50.0,
        "variazione_prezzo_perc": -10.0,
        "variazione_costi_perc": 10.0,
    },
}

# ============================================================================
# FORMATTAZIONE
# ============================================================================

FORMATO_DATA = "%d/%m/%Y"
FORMATO_DATA_ISO = "%Y-%m-%d"
SEPARATORE_MIGLIAIA = "."
SEPARATORE_DECIMALI = ","
SIMBOLO_VALUTA = "€"

MESI_BREVI_IT = {
    1: "Gen", 2: "Feb", 3: "Mar", 4: "Apr",
    5: "Mag", 6: "Giu", 7: "Lug", 8: "Ago",
    9: "Set", 10: "Ott", 11: "Nov", 12: "Dic",
}
