"""
topic_over_time.py
------------------
Bucket documents into decades and average their topic proportions.

For every decade that has at least one document, and every topic, the
output holds the plain (unweighted) mean of that topic's probability
over the decade's documents. Decades without documents do not appear.
"""

import pandas as pd

from topicstream.utils.logger import get_logger

logger = get_logger("TopicOverTime")


def decade_of(year: int) -> int:
    """1743 -> 1740, 1700 -> 1700, 1799 -> 1790."""
    return (int(year) // 10) * 10


def assign_decades(years: pd.Series) -> pd.Series:
    return years.astype(int).map(decade_of)


def documents_per_decade(years: pd.Series) -> pd.DataFrame:
    """Count table `decade`, `documents`, `percentage` sorted by decade."""
    counts = assign_decades(years).value_counts().sort_index()
    summary = counts.rename_axis("decade").reset_index(name="documents")
    summary["percentage"] = (summary["documents"] / summary["documents"].sum() * 100).round(2)
    return summary


def aggregate_by_decade(
    document_topics: pd.DataFrame,
    years: pd.Series,
    labels: dict | None = None,
) -> pd.DataFrame:
    """
    Mean topic proportion per (decade, topic).

    Parameters
    ----------
    document_topics : pd.DataFrame
        One row per document (indexed by document id), one column per topic.
    years : pd.Series
        Publication year indexed by document id.
    labels : dict | None
        topic -> label; defaults to "Topic k".

    Returns
    -------
    pd.DataFrame with columns `decade`, `topic`, `label`, `proportion`,
    sorted by decade then topic.

    Raises
    ------
    ValueError if a document has no year.
    """
    doc_years = years.reindex(document_topics.index)
    missing = doc_years.isna()
    if missing.any():
        sample = ", ".join(str(d) for d in doc_years[missing].index[:10])
        raise ValueError(f"{missing.sum()} document(s) have no publication year: {sample}")

    decades = assign_decades(doc_years).rename("decade")

    means = document_topics.groupby(decades.to_numpy()).mean()
    means.index.name = "decade"

    agg = means.stack().reset_index()
    agg.columns = ["decade", "topic", "proportion"]
    agg["decade"] = agg["decade"].astype(int)
    agg["topic"] = agg["topic"].astype(int)

    if labels is None:
        labels = {t: f"Topic {t}" for t in document_topics.columns}
    agg["label"] = agg["topic"].map(labels)

    agg = agg.sort_values(["decade", "topic"]).reset_index(drop=True)
    agg = agg[["decade", "topic", "label", "proportion"]]

    logger.info(
        f"Aggregated {len(document_topics)} documents into "
        f"{agg['decade'].nunique()} decades x {document_topics.shape[1]} topics."
    )
    return agg


def proportions_wide(agg: pd.DataFrame, column: str = "label") -> pd.DataFrame:
    """Pivot the long table to decades x topics (columns ordered by topic)."""
    order = agg.drop_duplicates("topic").sort_values("topic")[column].tolist()
    wide = agg.pivot(index="decade", columns=column, values="proportion")
    return wide[order]
