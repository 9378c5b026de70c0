"""
lda_model.py
------------
Fit a Latent Dirichlet Allocation model on a document-term matrix and
expose its two outputs as labelled tables:

    topic_terms     : K x vocabulary, each row a term distribution (beta)
    document_topics : documents x K, each row a topic distribution (gamma)

Inference is collapsed Gibbs sampling (the `lda` package). The sampler
is seeded through `random_state`: the same matrix, K, iteration count
and seed give identical tables on the same library version.
"""

import os
from dataclasses import dataclass

import joblib
import lda
import numpy as np
import pandas as pd

from topicstream.nlp.document_term import DocumentTermMatrix
from topicstream.utils.config import N_ITERATIONS, N_TOPICS, RANDOM_SEED
from topicstream.utils.logger import get_logger

# Dirichlet priors: alpha = 50 / K on document-topic, eta = 0.1 on topic-term
ALPHA_NUMERATOR = 50.0
ETA = 0.1

logger = get_logger("LdaModel")


@dataclass
class LdaResult:
    model: lda.LDA
    topic_terms: pd.DataFrame
    document_topics: pd.DataFrame

    @property
    def n_topics(self) -> int:
        return self.topic_terms.shape[0]


def _check_params(n_documents: int, n_topics: int, n_iterations: int):
    if n_topics <= 0:
        raise ValueError(f"Number of topics must be positive, got {n_topics}")
    if n_iterations <= 0:
        raise ValueError(f"Number of iterations must be positive, got {n_iterations}")
    if n_topics > n_documents:
        raise ValueError(
            f"Cannot fit {n_topics} topics on {n_documents} documents; "
            "K must not exceed the number of documents."
        )


def fit_lda(
    dtm: DocumentTermMatrix,
    n_topics: int = N_TOPICS,
    n_iterations: int = N_ITERATIONS,
    random_seed: int = RANDOM_SEED,
    alpha: float | None = None,
    eta: float = ETA,
) -> LdaResult:
    """
    Fit LDA by Gibbs sampling and return normalized topic-term and
    document-topic tables.

    `alpha` defaults to 50 / K.

    Raises
    ------
    ValueError on non-positive K / iterations, or K > number of documents.
    """
    n_documents = dtm.shape[0]
    _check_params(n_documents, n_topics, n_iterations)

    if alpha is None:
        alpha = ALPHA_NUMERATOR / n_topics

    logger.info(
        f"Fitting LDA (Gibbs) with K={n_topics}, iterations={n_iterations}, "
        f"seed={random_seed}, alpha={alpha:.3g}, eta={eta} on {n_documents} documents..."
    )

    model = lda.LDA(
        n_topics=n_topics,
        n_iter=n_iterations,
        alpha=alpha,
        eta=eta,
        random_state=random_seed,
        refresh=max(n_iterations // 10, 1),
    )
    # the sampler needs integer counts
    model.fit(dtm.matrix.astype(np.int64))

    # both estimates come out normalized; renormalize against float drift
    topic_term = model.topic_word_ / model.topic_word_.sum(axis=1, keepdims=True)
    doc_topic = model.doc_topic_ / model.doc_topic_.sum(axis=1, keepdims=True)

    topics = list(range(n_topics))

    topic_terms = pd.DataFrame(topic_term, index=topics, columns=dtm.vocabulary)
    topic_terms.index.name = "topic"

    document_topics = pd.DataFrame(doc_topic, index=dtm.document_ids, columns=topics)
    document_topics.index.name = "document_id"

    logger.info(
        f"Gibbs sampling finished after {n_iterations} iterations "
        f"(log likelihood={model.loglikelihood():.1f})."
    )
    return LdaResult(model=model, topic_terms=topic_terms, document_topics=document_topics)


def tidy_topic_terms(result: LdaResult) -> pd.DataFrame:
    """Long table `topic`, `term`, `beta`."""
    tidy = result.topic_terms.stack().reset_index()
    tidy.columns = ["topic", "term", "beta"]
    return tidy


def tidy_document_topics(result: LdaResult) -> pd.DataFrame:
    """Long table `document_id`, `topic`, `gamma`."""
    tidy = result.document_topics.stack().reset_index()
    tidy.columns = ["document_id", "topic", "gamma"]
    return tidy


def check_distributions(result: LdaResult, atol: float = 1e-6):
    """Raise ValueError if any topic or document row does not sum to 1."""
    for name, table in (
        ("topic-term", result.topic_terms),
        ("document-topic", result.document_topics),
    ):
        sums = table.to_numpy().sum(axis=1)
        if not np.allclose(sums, 1.0, atol=atol):
            worst = float(np.abs(sums - 1.0).max())
            raise ValueError(f"{name} rows do not sum to 1 (max deviation {worst:.2e})")


# -------------------------------------------------------
# SAVE / LOAD
# -------------------------------------------------------
def save_model(result: LdaResult, path: str) -> str:
    """Persist the fitted estimator and its tables with joblib."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    joblib.dump(
        {
            "model": result.model,
            "topic_terms": result.topic_terms,
            "document_topics": result.document_topics,
        },
        path,
    )
    logger.info(f"Saved LDA model → {path}")
    return path


def load_model(path: str) -> LdaResult:
    """Load a result written by `save_model`."""
    logger.info(f"Loading LDA model from {path}")

    try:
        payload = joblib.load(path)
    except Exception as e:
        logger.error(f"Failed to load LDA model. Ensure the pipeline saved it.\n{e}")
        raise

    return LdaResult(
        model=payload["model"],
        topic_terms=payload["topic_terms"],
        document_topics=payload["document_topics"],
    )
