"""
topic_labels.py
---------------
Human-readable topic names built from each topic's highest-weight terms.

A label is the top N terms joined with ", ". Ties in weight keep the
order the terms have in the model's vocabulary, so the first term wins.
Labels double as column/legend identifiers downstream and are therefore
made unique.
"""

import numpy as np
import pandas as pd

from topicstream.utils.config import TOP_N_TERMS


def top_terms(topic_terms: pd.DataFrame, n: int = TOP_N_TERMS) -> dict:
    """Map topic -> list of its `n` highest-weight terms."""
    if n <= 0:
        raise ValueError(f"n must be positive, got {n}")

    terms = np.asarray(topic_terms.columns)
    result = {}
    for topic, weights in zip(topic_terms.index, topic_terms.to_numpy()):
        order = np.argsort(-weights, kind="stable")[:n]
        result[int(topic)] = terms[order].tolist()
    return result


def top_terms_table(topic_terms: pd.DataFrame, n: int = TOP_N_TERMS) -> pd.DataFrame:
    """Long table `topic`, `rank`, `term`, `beta` (rank starts at 1)."""
    rows = []
    for topic, words in top_terms(topic_terms, n).items():
        for rank, word in enumerate(words, start=1):
            rows.append({
                "topic": topic,
                "rank": rank,
                "term": word,
                "beta": float(topic_terms.at[topic, word]),
            })
    return pd.DataFrame(rows, columns=["topic", "rank", "term", "beta"])


def label_topics(topic_terms: pd.DataFrame, n: int = TOP_N_TERMS, sep: str = ", ") -> dict:
    """
    Map topic -> label made of its top `n` terms.

    Two topics sharing the same top terms get " (topic k)" appended so
    every label stays unique.
    """
    labels = {topic: sep.join(words) for topic, words in top_terms(topic_terms, n).items()}

    counts = pd.Series(list(labels.values())).value_counts()
    repeated = set(counts[counts > 1].index)
    for topic, label in labels.items():
        if label in repeated:
            labels[topic] = f"{label} (topic {topic})"

    return labels
