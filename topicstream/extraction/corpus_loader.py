"""
corpus_loader.py
----------------
Load the pre-cleaned historical corpus into a tidy document table.

Input is a comma-separated UTF-8 file with (at least) an identifier,
a free-text description and a publication date. Output columns:

    document_id : str
    text        : str   (trimmed, unicode repaired)
    year        : int   (first four-digit run of the date field)

Deduplication and range filtering happen upstream; rows outside
1500–1800 are reported, never dropped.
"""

import os
import re

import ftfy
import pandas as pd

from topicstream.utils.config import DATE_COLUMN, ID_COLUMN, TEXT_COLUMN
from topicstream.utils.logger import get_logger

YEAR_MIN = 1500
YEAR_MAX = 1800

YEAR_PATTERN = re.compile(r"(?<!\d)(\d{4})(?!\d)")

logger = get_logger("CorpusLoader")


def extract_year(value):
    """Return the first four-digit year in `value`, or None."""
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return None
    if isinstance(value, int):
        return value

    match = YEAR_PATTERN.search(str(value))
    if match is None:
        return None
    return int(match.group(1))


def clean_text(text) -> str:
    """Fix broken unicode and trim surrounding whitespace."""
    return ftfy.fix_text(str(text)).strip()


def _bad_rows(mask: pd.Series, ids: pd.Series) -> str:
    return ", ".join(str(i) for i in ids[mask].head(10).tolist())


def load_corpus(
    path,
    id_col: str = ID_COLUMN,
    text_col: str = TEXT_COLUMN,
    date_col: str = DATE_COLUMN,
) -> pd.DataFrame:
    """
    Read the corpus CSV and return the document table.

    Raises
    ------
    FileNotFoundError if `path` does not exist.
    ValueError on missing columns, missing ids, empty texts, unparseable years
    or duplicate identifiers.
    """
    logger.info(f"Loading corpus from {path}")

    if not os.path.exists(path):
        logger.error(f"Corpus file not found: {path}")
        raise FileNotFoundError(path)

    # ids stay strings ("007" must not become 7)
    raw = pd.read_csv(path, encoding="utf-8", dtype={id_col: str})

    missing = [c for c in (id_col, text_col, date_col) if c not in raw.columns]
    if missing:
        raise ValueError(
            f"Corpus is missing required column(s) {missing}; found {list(raw.columns)}"
        )

    # -----------------------------
    # Identifiers: present + non-empty
    # -----------------------------
    ids = raw[id_col].str.strip()
    no_id = ids.isna() | (ids == "")
    if no_id.any():
        rows = ", ".join(str(i + 2) for i in raw.index[no_id][:10])
        raise ValueError(f"{no_id.sum()} document(s) have no id (CSV line(s) {rows})")

    df = pd.DataFrame({
        "document_id": ids,
        "text": raw[text_col],
        "date": raw[date_col],
    })

    # -----------------------------
    # Text: trim + repair
    # -----------------------------
    no_text = df["text"].isna()
    if no_text.any():
        raise ValueError(
            f"{no_text.sum()} document(s) have no text: {_bad_rows(no_text, df['document_id'])}"
        )

    df["text"] = df["text"].map(clean_text)
    empty_text = df["text"] == ""
    if empty_text.any():
        raise ValueError(
            f"{empty_text.sum()} document(s) have empty text: "
            f"{_bad_rows(empty_text, df['document_id'])}"
        )

    # -----------------------------
    # Year from date string
    # -----------------------------
    years = df["date"].map(extract_year)
    no_year = years.isna()
    if no_year.any():
        raise ValueError(
            f"{no_year.sum()} document(s) have no parseable year: "
            f"{_bad_rows(no_year, df['document_id'])}"
        )
    df["year"] = years.astype(int)

    # -----------------------------
    # Duplicate identifiers
    # -----------------------------
    dupes = df["document_id"].duplicated(keep=False)
    if dupes.any():
        raise ValueError(
            f"Duplicate document ids in corpus: {_bad_rows(dupes, df['document_id'])}"
        )

    df = df[["document_id", "text", "year"]].reset_index(drop=True)
    check_year_range(df)

    logger.info(
        f"Loaded {len(df)} documents spanning {df['year'].min()}–{df['year'].max()}."
    )
    return df


def check_year_range(df: pd.DataFrame, year_min: int = YEAR_MIN, year_max: int = YEAR_MAX) -> int:
    """Warn about documents dated outside the accepted range; return how many."""
    outside = ~df["year"].between(year_min, year_max)
    n_outside = int(outside.sum())
    if n_outside:
        logger.warning(
            f"{n_outside} document(s) dated outside {year_min}–{year_max}; "
            "the corpus is expected to be range-filtered upstream."
        )
    return n_outside
