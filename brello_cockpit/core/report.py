"""
Report commerciali su vendite, lotti, clienti e pipeline.

Aggregazioni tabellari (pandas) usate dal comando `report` della CLI:
  - Vendite per segmento di clientela
  - Performance dei lotti rispetto al target di ricavo
  - Classifica dei clienti per ricavo
  - Valore della pipeline per fase

Il ricavo di un cliente e' la somma dei prezzi netti degli spazi
VENDUTO e delle stazioni VENDUTA a lui assegnati; ogni spazio o
stazione venduta conta come un contratto.

Autore: Brellò
"""

import logging
from typing import Dict, List, Tuple

import pandas as pd

from brello_cockpit.config import FaseOpportunita, StatoSpazio, StatoStazione
from brello_cockpit.core.modelli import Cliente, Lotto, Opportunita, Spazio, Stazione
from brello_cockpit.utils.calcolo_utils import percentuale, somma

logger = logging.getLogger(__name__)


# ============================================================================
# FUNZIONI INTERNE
# ============================================================================


def _vendite_per_cliente(
    spazi: List[Spazio], stazioni: List[Stazione]
) -> Dict[str, Tuple[float, int]]:
    """Ricavo e numero di contratti per cliente_id."""
    importi: Dict[str, List[float]] = {}
    for spazio in spazi:
        if spazio.stato is StatoSpazio.VENDUTO and spazio.cliente_id is not None:
            importi.setdefault(spazio.cliente_id, []).append(spazio.prezzo_netto)
    for stazione in stazioni:
        if stazione.stato is StatoStazione.VENDUTA and stazione.cliente_id is not None:
            importi.setdefault(stazione.cliente_id, []).append(stazione.prezzo_netto)
    return {cliente_id: (somma(valori), len(valori)) for cliente_id, valori in importi.items()}


# ============================================================================
# REPORT
# ============================================================================


def vendite_per_segmento(
    clienti: List[Cliente], spazi: List[Spazio], stazioni: List[Stazione]
) -> pd.DataFrame:
    """
    Vendite aggregate per categoria di cliente.

    Parametri:
        clienti: anagrafica clienti
        spazi, stazioni: inventario di tutti i lotti

    Ritorna:
        DataFrame con una riga per categoria presente in anagrafica:
            - segmento: nome della categoria
            - numero_clienti: clienti con ricavo > 0
            - ricavo_totale: somma dei ricavi dei clienti
            - numero_contratti: spazi e stazioni venduti
        ordinato per ricavo decrescente
    """
    vendite = _vendite_per_cliente(spazi, stazioni)

    segmenti: Dict[str, Dict] = {}
    for cliente in clienti:
        riga = segmenti.setdefault(cliente.categoria.name, {
            "segmento": cliente.categoria.name,
            "numero_clienti": 0,
            "ricavo_totale": 0.0,
            "numero_contratti": 0,
        })
        ricavo, contratti = vendite.get(cliente.id, (0.0, 0))
        if ricavo > 0:
            riga["numero_clienti"] += 1
            riga["ricavo_totale"] += ricavo
            riga["numero_contratti"] += contratti

    for riga in segmenti.values():
        riga["ricavo_totale"] = round(riga["ricavo_totale"], 2)

    df = pd.DataFrame(
        list(segmenti.values()),
        columns=["segmento", "numero_clienti", "ricavo_totale", "numero_contratti"],
    )
    logger.info("Vendite per segmento: %d segmenti", len(df))
    return df.sort_values("ricavo_totale", ascending=False, kind="stable").reset_index(drop=True)


def performance_lotti(
    lotti: List[Lotto], spazi: List[Spazio], stazioni: List[Stazione]
) -> pd.DataFrame:
    """
    Occupancy e ricavo di ogni lotto confrontati con il target.

    A differenza della dashboard, l'occupancy e' calcolata sulle unita'
    effettivamente registrate per il lotto (non sull'inventario
    dichiarato): un lotto senza spazi registrati ha occupancy 0.

    Ritorna:
        DataFrame con colonne lotto, citta, stato, occupancy_spazi,
        occupancy_stazioni, ricavo_totale, target_ricavo,
        performance_vs_target (ricavo / target x 100, 0 senza target)
    """
    righe = []
    for lotto in lotti:
        spazi_lotto = [s for s in spazi if s.lotto_id == lotto.id]
        stazioni_lotto = [s for s in stazioni if s.lotto_id == lotto.id]
        spazi_venduti = [s for s in spazi_lotto if s.stato is StatoSpazio.VENDUTO]
        stazioni_vendute = [s for s in stazioni_lotto if s.stato is StatoStazione.VENDUTA]

        ricavo = somma(s.prezzo_netto for s in spazi_venduti) + somma(
            s.prezzo_netto for s in stazioni_vendute
        )
        righe.append({
            "lotto": lotto.codice_lotto,
            "citta": lotto.citta,
            "stato": lotto.stato.name,
            "occupancy_spazi": round(percentuale(len(spazi_venduti), len(spazi_lotto)), 2),
            "occupancy_stazioni": round(percentuale(len(stazioni_vendute), len(stazioni_lotto)), 2),
            "ricavo_totale": round(ricavo, 2),
            "target_ricavo": lotto.target_ricavo,
            "performance_vs_target": round(percentuale(ricavo, lotto.target_ricavo), 2),
        })

    colonne = [
        "lotto", "citta", "stato", "occupancy_spazi", "occupancy_stazioni",
        "ricavo_totale", "target_ricavo", "performance_vs_target",
    ]
    return pd.DataFrame(righe, columns=colonne)


def clienti_top(
    clienti: List[Cliente],
    spazi: List[Spazio],
    stazioni: List[Stazione],
    limite: int = 10,
) -> pd.DataFrame:
    """
    Classifica dei clienti per ricavo (solo clienti con ricavo > 0).

    Ritorna:
        DataFrame con colonne id, ragione_sociale, categoria,
        ricavo_totale, numero_contratti; al massimo `limite` righe
    """
    if limite < 1:
        raise ValueError(f"Il limite deve essere almeno 1, ricevuto {limite}")

    vendite = _vendite_per_cliente(spazi, stazioni)
    righe = []
    for cliente in clienti:
        ricavo, contratti = vendite.get(cliente.id, (0.0, 0))
        if ricavo <= 0:
            continue
        righe.append({
            "id": cliente.id,
            "ragione_sociale": cliente.ragione_sociale,
            "categoria": cliente.categoria.name,
            "ricavo_totale": round(ricavo, 2),
            "numero_contratti": contratti,
        })

    df = pd.DataFrame(
        righe,
        columns=["id", "ragione_sociale", "categoria", "ricavo_totale", "numero_contratti"],
    )
    df = df.sort_values("ricavo_totale", ascending=False, kind="stable")
    return df.head(limite).reset_index(drop=True)


def valore_pipeline_per_fase(opportunita: List[Opportunita]) -> pd.DataFrame:
    """
    Numero, valore e valore pesato delle opportunita' per fase.

    Tutte le fasi sono presenti, nell'ordine della pipeline, anche
    quando non hanno opportunita'.
    """
    righe = []
    for fase in FaseOpportunita:
        selezione = [o for o in opportunita if o.fase is fase]
        righe.append({
            "fase": fase.name,
            "numero": len(selezione),
            "valore": round(somma(o.valore_previsto for o in selezione), 2),
            "valore_pesato": round(
                somma(o.valore_previsto * o.probabilita_perc / 100 for o in selezione), 2
            ),
        })
    return pd.DataFrame(righe, columns=["fase", "numero", "valore", "valore_pesato"])
