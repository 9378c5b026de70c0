"""
document_term.py
----------------
Count (document, word) pairs and cast them to a sparse document-term
matrix for the LDA fitter.
"""

from dataclasses import dataclass

import pandas as pd
from scipy import sparse

from topicstream.utils.logger import get_logger

logger = get_logger("DocumentTerm")


@dataclass
class DocumentTermMatrix:
    """Sparse counts with row (document) and column (term) labels."""

    matrix: sparse.csr_matrix
    document_ids: list
    vocabulary: list

    @property
    def shape(self):
        return self.matrix.shape


def count_terms(tokens: pd.DataFrame) -> pd.DataFrame:
    """Return `document_id`, `word`, `count` for every (document, word) pair."""
    counts = (
        tokens.groupby(["document_id", "word"], sort=False)
        .size()
        .reset_index(name="count")
    )
    logger.info(
        f"Counted {len(counts)} (document, word) pairs over "
        f"{counts['document_id'].nunique()} documents."
    )
    return counts


def build_document_term_matrix(counts: pd.DataFrame) -> DocumentTermMatrix:
    """
    Cast a count table to a CSR matrix.

    Rows follow the first appearance of each document in `counts`,
    columns are the sorted vocabulary.

    Raises
    ------
    ValueError if the count table is empty (nothing left after filtering).
    """
    if counts.empty:
        raise ValueError(
            "Empty vocabulary: no tokens left after stopword removal; "
            "cannot build a document-term matrix."
        )

    document_ids = list(pd.unique(counts["document_id"]))
    vocabulary = sorted(pd.unique(counts["word"]))

    row_codes = pd.Categorical(counts["document_id"], categories=document_ids).codes
    col_codes = pd.Categorical(counts["word"], categories=vocabulary).codes

    matrix = sparse.csr_matrix(
        (counts["count"].to_numpy(), (row_codes, col_codes)),
        shape=(len(document_ids), len(vocabulary)),
    )

    logger.info(
        f"Document-term matrix: {matrix.shape[0]} documents x {matrix.shape[1]} terms, "
        f"{matrix.nnz} non-zero cells."
    )
    return DocumentTermMatrix(matrix=matrix, document_ids=document_ids, vocabulary=vocabulary)


def find_empty_documents(docs: pd.DataFrame, counts: pd.DataFrame) -> list:
    """Ids of documents in `docs` that have no token left in `counts`."""
    present = set(counts["document_id"])
    return [d for d in docs["document_id"] if d not in present]
