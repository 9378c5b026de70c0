"""
text_preprocessing.py
---------------------
Turn document descriptions into a tidy token table.

    1. strip numeric characters (dates, folio numbers, prices)
    2. lowercase + split on word boundaries, dropping punctuation
    3. one row per (document_id, word)

This module is imported by lda_pipeline.py and should not be run standalone.
"""

import re

import pandas as pd

from topicstream.utils.logger import get_logger

NUMBER_REGEX = re.compile(r"\d+")

# Letters only; an apostrophe is kept when it sits between letters (o'er, king's)
WORD_REGEX = re.compile(r"[^\W\d_]+(?:['’][^\W\d_]+)*")

logger = get_logger("TextPreprocessing")


def strip_numbers(text: str) -> str:
    """Remove every numeric character from `text`."""
    return NUMBER_REGEX.sub("", text)


def tokenize(text: str) -> list[str]:
    """Lowercase `text` and split it into words."""
    return WORD_REGEX.findall(text.lower())


def unnest_tokens(docs: pd.DataFrame, text_col: str = "text") -> pd.DataFrame:
    """
    Explode a document table into one row per token.

    Parameters
    ----------
    docs : pd.DataFrame
        Must have `document_id` and `text_col`.

    Returns
    -------
    pd.DataFrame with columns `document_id`, `word`, documents in input order.
    """
    logger.info(f"Tokenizing {len(docs)} documents...")

    tokens = docs[["document_id"]].copy()
    tokens["word"] = docs[text_col].map(lambda t: tokenize(strip_numbers(t)))
    tokens = tokens.explode("word", ignore_index=True)

    # documents with no word at all explode to a single NaN row
    tokens = tokens.dropna(subset=["word"]).reset_index(drop=True)

    logger.info(f"Produced {len(tokens)} tokens.")
    return tokens
