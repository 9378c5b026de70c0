import pandas as pd
import pytest

from topicstream.nlp.topic_labels import label_topics, top_terms, top_terms_table


@pytest.fixture
def topic_terms():
    return pd.DataFrame(
        [
            [0.1, 0.4, 0.4, 0.1],
            [0.25, 0.25, 0.25, 0.25],
            [0.6, 0.1, 0.1, 0.2],
        ],
        index=[0, 1, 2],
        columns=["anchor", "bible", "cargo", "divine"],
    )


def test_top_terms_ordered_by_weight(topic_terms):
    assert top_terms(topic_terms, n=1)[2] == ["anchor"]


def test_ties_keep_model_term_order(topic_terms):
    terms = top_terms(topic_terms, n=2)

    assert terms[0] == ["bible", "cargo"]
    assert terms[1] == ["anchor", "bible"]


def test_label_topics(topic_terms):
    labels = label_topics(topic_terms, n=2)

    assert labels[0] == "bible, cargo"
    assert labels[1] == "anchor, bible"
    assert labels[2] == "anchor, divine"
    assert len(set(labels.values())) == 3


def test_labels_are_unique():
    same = pd.DataFrame(
        [[0.5, 0.3, 0.2], [0.6, 0.3, 0.1]], index=[0, 1], columns=["god", "grace", "soul"]
    )

    labels = label_topics(same, n=2)

    assert labels == {0: "god, grace (topic 0)", 1: "god, grace (topic 1)"}
    assert len(set(labels.values())) == 2


def test_top_terms_table(topic_terms):
    table = top_terms_table(topic_terms, n=2)

    assert list(table.columns) == ["topic", "rank", "term", "beta"]
    assert len(table) == 6
    first = table[table["topic"] == 2].iloc[0]
    assert first["rank"] == 1
    assert first["term"] == "anchor"
    assert first["beta"] == pytest.approx(0.6)


def test_top_terms_rejects_non_positive_n(topic_terms):
    with pytest.raises(ValueError):
        top_terms(topic_terms, n=0)
