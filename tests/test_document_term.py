import pandas as pd
import pytest

from topicstream.nlp.document_term import (
    build_document_term_matrix,
    count_terms,
    find_empty_documents,
)


@pytest.fixture
def tokens():
    return pd.DataFrame(
        {"document_id": ["d1", "d1", "d1", "d2"], "word": ["ship", "cargo", "ship", "cargo"]}
    )


def test_count_terms(tokens):
    counts = count_terms(tokens)

    lookup = {
        (doc, word): n
        for doc, word, n in zip(counts["document_id"], counts["word"], counts["count"])
    }
    assert lookup == {("d1", "ship"): 2, ("d1", "cargo"): 1, ("d2", "cargo"): 1}


def test_build_document_term_matrix(tokens):
    dtm = build_document_term_matrix(count_terms(tokens))

    assert dtm.document_ids == ["d1", "d2"]
    assert dtm.vocabulary == ["cargo", "ship"]
    assert dtm.shape == (2, 2)
    assert dtm.matrix.toarray().tolist() == [[1, 2], [1, 0]]


def test_empty_vocabulary_raises():
    empty = pd.DataFrame(columns=["document_id", "word", "count"])

    with pytest.raises(ValueError, match="Empty vocabulary"):
        build_document_term_matrix(empty)


def test_find_empty_documents(tokens):
    docs = pd.DataFrame({"document_id": ["d1", "d2", "d3"]})

    assert find_empty_documents(docs, count_terms(tokens)) == ["d3"]
