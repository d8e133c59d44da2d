"""
Costi di struttura e cassa.

Riporta le voci di costo su base annua secondo la loro frequenza e
calcola saldo di cassa, ripartizione dei costi per categoria e piano
mensile delle uscite.

Tutti i calcoli del motore (costo allocato del Preventivatore, margine
della dashboard, costi degli scenari) partono da totale_costi_annui().

Autore: Brellò
"""

import logging
from typing import Dict, List, Tuple

import pandas as pd

from brello_cockpit.config import (
    FrequenzaCosto,
    MESI_BREVI_IT,
    MESI_PAGAMENTO_DEFAULT,
    MOLTIPLICATORI_ANNUI,
    TipoMovimento,
)
from brello_cockpit.core.modelli import MovimentoCassa, VoceCosto
from brello_cockpit.data.validators import ErroreValidazione
from brello_cockpit.utils.calcolo_utils import percentuale, somma

logger = logging.getLogger(__name__)


# ============================================================================
# ANNUALIZZAZIONE COSTI
# ============================================================================


def annualizza_importo(voce: VoceCosto) -> float:
    """
    Importo annuo di una voce di costo.

    MENSILE x12, TRIMESTRALE x4, SEMESTRALE x2, ANNUALE e UNA_TANTUM x1.
    """
    return voce.importo * MOLTIPLICATORI_ANNUI[voce.frequenza]


def totale_costi_annui(costi: List[VoceCosto]) -> float:
    totale = somma(annualizza_importo(voce) for voce in costi)
    logger.debug("Totale costi annui su %d voci: %.2f", len(costi), totale)
    return totale


def costi_per_categoria(costi: List[VoceCosto]) -> pd.DataFrame:
    """
    Ripartizione dei costi annui per categoria.

    Ritorna:
        DataFrame ordinato per importo decrescente con colonne:
            - categoria: nome della categoria
            - importo_annuo: totale annualizzato
            - quota_perc: peso sul totale (%)
    """
    totali: Dict[str, float] = {}
    for voce in costi:
        chiave = voce.categoria.name
        totali[chiave] = totali.get(chiave, 0.0) + annualizza_importo(voce)

    totale = somma(totali.values())
    righe = [
        {
            "categoria": categoria,
            "importo_annuo": round(importo, 2),
            "quota_perc": round(percentuale(importo, totale), 2),
        }
        for categoria, importo in totali.items()
    ]
    df = pd.DataFrame(righe, columns=["categoria", "importo_annuo", "quota_perc"])
    return df.sort_values("importo_annuo", ascending=False).reset_index(drop=True)


# ============================================================================
# SALDO E PIANO PAGAMENTI
# ============================================================================


def saldo_cassa(movimenti: List[MovimentoCassa]) -> float:
    """
    Saldo corrente = entrate - uscite.

    Gli importi sono presi in valore assoluto: alcune fonti registrano
    le uscite con segno negativo.
    """
    entrate = somma(abs(m.importo) for m in movimenti if m.tipo is TipoMovimento.ENTRATA)
    uscite = somma(abs(m.importo) for m in movimenti if m.tipo is TipoMovimento.USCITA)
    saldo = entrate - uscite
    logger.info(
        "Saldo cassa: entrate=%.2f, uscite=%.2f, saldo=%.2f (%d movimenti)",
        entrate, uscite, saldo, len(movimenti),
    )
    return round(saldo, 2)


def mesi_di_pagamento(voce: VoceCosto) -> Tuple[int, ...]:
    """
    Mesi (1-12) in cui la voce genera un'uscita di cassa.

    Se la voce indica mesi_pagamento (es. "1,4,7,10") si usano quelli,
    altrimenti i default della frequenza; ANNUALE e UNA_TANTUM escono
    nel mese della data di competenza.

    Raises:
        ErroreValidazione: se mesi_pagamento contiene valori non validi.
    """
    if voce.mesi_pagamento and voce.mesi_pagamento.strip():
        mesi = []
        for parte in voce.mesi_pagamento.split(","):
            parte = parte.strip()
            if not parte:
                continue
            if not parte.isdigit() or not 1 <= int(parte) <= 12:
                raise ErroreValidazione(
                    f"Mese di pagamento non valido '{parte}' nella voce '{voce.descrizione}'"
                )
            mesi.append(int(parte))
        if mesi:
            return tuple(sorted(set(mesi)))

    default = MESI_PAGAMENTO_DEFAULT[voce.frequenza]
    if default is None:
        return (voce.data_competenza.month,)
    return default


def piano_pagamenti(costi: List[VoceCosto], anno: int) -> pd.DataFrame:
    """
    Uscite di cassa mensili previste per l'anno indicato.

    L'importo annuo di ogni voce e' ripartito in parti uguali sui suoi
    mesi di pagamento. Le voci una tantum contano solo nell'anno della
    data di competenza.

    Ritorna:
        DataFrame di 12 righe con colonne mese, nome_mese, uscite,
        uscite_cumulate.
    """
    uscite = {mese: 0.0 for mese in range(1, 13)}

    for voce in costi:
        if voce.frequenza is FrequenzaCosto.UNA_TANTUM and voce.data_competenza.year != anno:
            continue
        mesi = mesi_di_pagamento(voce)
        quota = annualizza_importo(voce) / len(mesi)
        for mese in mesi:
            uscite[mese] += quota

    df = pd.DataFrame({
        "mese": list(uscite.keys()),
        "nome_mese": [MESI_BREVI_IT[m] for m in uscite],
        "uscite": [round(v, 2) for v in uscite.values()],
    })
    df["uscite_cumulate"] = df["uscite"].cumsum().round(2)

    logger.info(
        "Piano pagamenti %d: %d voci, uscite totali=%.2f",
        anno, len(costi), df["uscite"].sum(),
    )
    return df
