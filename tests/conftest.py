import pandas as pd
import pytest

from topicstream.nlp.document_term import build_document_term_matrix, count_terms
from topicstream.nlp.stopword_filter import remove_stopwords
from topicstream.nlp.text_preprocessing import unnest_tokens

SMALL_STOPWORDS = frozenset({
    "the", "a", "of", "and", "in", "to", "for", "with", "on",
    "el", "la", "le", "de", "les", "del",
})

CORPUS_ROWS = [
    ("d1", "The ship sailed to the harbour with a cargo of sugar and tobacco.", "1712"),
    ("d2", "A merchant ship, cargo of tobacco, 200 tons, lost at sea.", "1718"),
    ("d3", "Sermon on the grace of God and the salvation of the soul.", "1745"),
    ("d4", "A treatise of divinity: grace, faith and the soul of man.", "c. 1743"),
    ("d5", "Voyage of the merchant fleet; sugar, cargo and harbour duties.", "1751"),
    ("d6", "Sermon preached on faith and salvation before the king.", "1756-04-01"),
    ("d7", "Harbour accounts: ship tonnage, tobacco cargo and sugar prices.", "1762"),
    ("d8", "God, grace and salvation: a sermon for the soul.", "1769"),
]
CORPUS_YEARS = [1712, 1718, 1745, 1743, 1751, 1756, 1762, 1769]


@pytest.fixture
def corpus_df():
    return pd.DataFrame(
        [
            {"document_id": doc_id, "text": text, "year": year}
            for (doc_id, text, _), year in zip(CORPUS_ROWS, CORPUS_YEARS)
        ]
    )


@pytest.fixture
def corpus_csv(tmp_path):
    df = pd.DataFrame(CORPUS_ROWS, columns=["id", "description", "date"])
    path = tmp_path / "corpus.csv"
    df.to_csv(path, index=False)
    return path


@pytest.fixture
def dtm(corpus_df):
    tokens = remove_stopwords(unnest_tokens(corpus_df), SMALL_STOPWORDS)
    return build_document_term_matrix(count_terms(tokens))
