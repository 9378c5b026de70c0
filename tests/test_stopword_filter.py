import pandas as pd

from topicstream.nlp import stopword_filter
from topicstream.nlp.stopword_filter import build_stopword_set, remove_stopwords


class FakeStopwords:
    LISTS = {
        "english": ["the", "and", "The"],
        "spanish": ["el", "y"],
        "french": ["le", "et"],
    }

    def words(self, lang):
        return self.LISTS[lang]


def test_remove_stopwords_list():
    assert remove_stopwords(["the", "eye", "el", "le"], {"the", "el", "le"}) == ["eye"]


def test_remove_stopwords_keeps_order_and_duplicates():
    tokens = ["eye", "the", "hand", "eye"]
    assert remove_stopwords(tokens, {"the"}) == ["eye", "hand", "eye"]


def test_remove_stopwords_dataframe():
    tokens = pd.DataFrame(
        {"document_id": ["a", "a", "b", "b"], "word": ["the", "eye", "el", "hand"]}
    )

    kept = remove_stopwords(tokens, {"the", "el", "le"})

    assert kept["word"].tolist() == ["eye", "hand"]
    assert kept["document_id"].tolist() == ["a", "b"]
    assert kept.index.tolist() == [0, 1]


def test_build_stopword_set_unions_languages(monkeypatch):
    monkeypatch.setattr(stopword_filter, "ensure_stopword_corpus", lambda: None)
    monkeypatch.setattr(stopword_filter, "stopwords", FakeStopwords())

    words = build_stopword_set(("english", "spanish", "french"), extra=("Vnto",))

    assert words == {"the", "and", "el", "y", "le", "et", "vnto"}
