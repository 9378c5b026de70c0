"""
stopword_filter.py
------------------
Combined multilingual stopword list and the anti-join that removes it.

The corpus mixes English with French, Spanish and Latin-derived
vocabulary, so the NLTK lists for several languages are unioned with a
short list of early-modern spellings (see utils/config.py).
"""

import nltk
import pandas as pd
from nltk.corpus import stopwords

from topicstream.utils.config import EXTRA_STOPWORDS, STOPWORD_LANGUAGES
from topicstream.utils.logger import get_logger

logger = get_logger("StopwordFilter")


def ensure_stopword_corpus():
    """Download the NLTK stopword corpus if it is not installed yet."""
    try:
        nltk.data.find("corpora/stopwords")
    except LookupError:
        logger.info("NLTK stopword corpus not found; downloading...")
        nltk.download("stopwords", quiet=True)


def build_stopword_set(languages=STOPWORD_LANGUAGES, extra=EXTRA_STOPWORDS) -> frozenset:
    """
    Union of the NLTK stopword lists for `languages` plus `extra` words.

    Unknown language names raise the NLTK error (OSError).
    """
    ensure_stopword_corpus()

    words = set()
    for lang in languages:
        lang_words = stopwords.words(lang)
        logger.info(f"Adding {len(lang_words)} '{lang}' stopwords")
        words.update(w.lower() for w in lang_words)

    words.update(w.lower() for w in extra)
    logger.info(f"Combined stopword set has {len(words)} entries.")
    return frozenset(words)


def remove_stopwords(tokens, stopword_set):
    """
    Drop every token found in `stopword_set`, keep everything else in order.

    `tokens` is either a list of words or a token DataFrame with a
    `word` column; the same type is returned.
    """
    if isinstance(tokens, pd.DataFrame):
        keep = ~tokens["word"].isin(stopword_set)
        kept = tokens[keep].reset_index(drop=True)
        logger.info(f"Removed {int((~keep).sum())} stopword tokens; {len(kept)} remain.")
        return kept

    return [t for t in tokens if t not in stopword_set]
