"""
lda_pipeline.py
---------------
End-to-end LDA topic pipeline over the historical corpus.

Stages (strictly sequential, any failure aborts the run):
    1. load corpus CSV                (extraction/corpus_loader.py)
    2. strip numbers + tokenize       (text_preprocessing.py)
    3. remove multilingual stopwords  (stopword_filter.py)
    4. count terms, build DTM         (document_term.py)
    5. fit LDA                        (lda_model.py)
    6. label topics by top terms      (topic_labels.py)
    7. average topics per decade      (topic_over_time.py)
    8. render charts                  (topic_visualizations.py)

Outputs:
    analysis/topics/topic_terms.csv
    analysis/topics/document_topics.csv
    analysis/topics/topic_labels.csv
    analysis/topics/topics_per_decade.csv
    analysis/topics/documents_per_decade.csv
    analysis/topics/lda_model.joblib
    analysis/visuals/topics_by_decade.png
    analysis/visuals/topics_by_decade.html
    analysis/visuals/topic_streamgraph.html

Run:
    python -m topicstream.nlp.lda_pipeline --input data/corpus.csv
"""

import argparse
import os
from dataclasses import dataclass

import pandas as pd

from topicstream.extraction.corpus_loader import load_corpus
from topicstream.nlp.document_term import (
    DocumentTermMatrix,
    build_document_term_matrix,
    count_terms,
    find_empty_documents,
)
from topicstream.nlp.lda_model import (
    LdaResult,
    check_distributions,
    fit_lda,
    save_model,
    tidy_document_topics,
    tidy_topic_terms,
)
from topicstream.nlp.stopword_filter import build_stopword_set, remove_stopwords
from topicstream.nlp.text_preprocessing import unnest_tokens
from topicstream.nlp.topic_labels import label_topics, top_terms_table
from topicstream.nlp.topic_over_time import aggregate_by_decade, documents_per_decade
from topicstream.nlp.topic_visualizations import build_palette, render_all
from topicstream.utils.config import PipelineConfig
from topicstream.utils.logger import get_logger

logger = get_logger("LdaPipeline")

STAGE_LOGGERS = (
    "CorpusLoader", "TextPreprocessing", "StopwordFilter", "DocumentTerm",
    "LdaModel", "TopicOverTime", "TopicVisualizations", "LdaPipeline",
)


@dataclass
class PipelineResult:
    corpus: pd.DataFrame
    dtm: DocumentTermMatrix
    lda: LdaResult
    labels: dict
    topics_per_decade: pd.DataFrame
    dropped_documents: list
    outputs: dict


# -------------------------------------------------------
# PREPROCESS
# -------------------------------------------------------
def preprocess(corpus: pd.DataFrame, stopword_set) -> tuple[pd.DataFrame, list]:
    """
    Tokenize, filter stopwords and count terms.

    Documents left with no token are dropped from modelling;
    their ids are returned alongside the count table.
    """
    tokens = unnest_tokens(corpus)
    tokens = remove_stopwords(tokens, stopword_set)
    counts = count_terms(tokens)

    dropped = find_empty_documents(corpus, counts)
    if dropped:
        logger.warning(
            f"Dropping {len(dropped)} document(s) with no words left after "
            f"stopword removal: {', '.join(str(d) for d in dropped[:10])}"
        )
    return counts, dropped


# -------------------------------------------------------
# SAVE OUTPUTS
# -------------------------------------------------------
def save_tables(
    lda: LdaResult,
    labels: dict,
    topics_per_decade: pd.DataFrame,
    decade_counts: pd.DataFrame,
    topic_dir: str,
    top_n: int,
) -> dict:
    os.makedirs(topic_dir, exist_ok=True)

    paths = {
        "topic_terms": os.path.join(topic_dir, "topic_terms.csv"),
        "document_topics": os.path.join(topic_dir, "document_topics.csv"),
        "topic_labels": os.path.join(topic_dir, "topic_labels.csv"),
        "top_terms": os.path.join(topic_dir, "top_terms.csv"),
        "topics_per_decade": os.path.join(topic_dir, "topics_per_decade.csv"),
        "documents_per_decade": os.path.join(topic_dir, "documents_per_decade.csv"),
    }

    tidy_topic_terms(lda).to_csv(paths["topic_terms"], index=False)
    tidy_document_topics(lda).to_csv(paths["document_topics"], index=False)
    pd.DataFrame(
        {"topic": list(labels.keys()), "label": list(labels.values())}
    ).to_csv(paths["topic_labels"], index=False)
    top_terms_table(lda.topic_terms, top_n).to_csv(paths["top_terms"], index=False)
    topics_per_decade.to_csv(paths["topics_per_decade"], index=False)
    decade_counts.to_csv(paths["documents_per_decade"], index=False)

    for name, path in paths.items():
        logger.info(f"Saved {name} → {path}")

    paths["model"] = save_model(lda, os.path.join(topic_dir, "lda_model.joblib"))
    return paths


# -------------------------------------------------------
# RUN
# -------------------------------------------------------
def run_pipeline(config: PipelineConfig, render: bool = True) -> PipelineResult:
    config.validate()

    if config.log_file:
        for name in STAGE_LOGGERS:
            get_logger(name, log_file=config.log_file)

    corpus = load_corpus(
        config.input_file,
        id_col=config.id_column,
        text_col=config.text_column,
        date_col=config.date_column,
    )

    stopword_set = build_stopword_set(config.stopword_languages, config.extra_stopwords)
    counts, dropped = preprocess(corpus, stopword_set)
    dtm = build_document_term_matrix(counts)

    lda = fit_lda(
        dtm,
        n_topics=config.n_topics,
        n_iterations=config.n_iterations,
        random_seed=config.random_seed,
    )
    check_distributions(lda)

    labels = label_topics(lda.topic_terms, n=config.top_n_terms)
    for topic, label in labels.items():
        logger.info(f"Topic {topic}: {label}")

    modelled = corpus[corpus["document_id"].isin(dtm.document_ids)]
    years = modelled.set_index("document_id")["year"]

    topics_per_decade = aggregate_by_decade(lda.document_topics, years, labels)
    decade_counts = documents_per_decade(years)

    outputs = save_tables(
        lda, labels, topics_per_decade, decade_counts, config.topic_dir, config.top_n_terms
    )

    if render:
        palette = build_palette(config.palette_name, config.n_colors)
        outputs.update(
            render_all(
                topics_per_decade,
                config.vis_dir,
                palette,
                decade_counts,
                config.chart_width,
                config.chart_height,
            )
        )

    return PipelineResult(
        corpus=corpus,
        dtm=dtm,
        lda=lda,
        labels=labels,
        topics_per_decade=topics_per_decade,
        dropped_documents=dropped,
        outputs=outputs,
    )


# -------------------------------------------------------
# CLI
# -------------------------------------------------------
def parse_args(argv=None) -> PipelineConfig:
    defaults = PipelineConfig()

    ap = argparse.ArgumentParser(
        description="Fit an LDA topic model on a dated corpus and chart topic proportions by decade."
    )
    ap.add_argument("--input", type=str, default=defaults.input_file,
                    help=f"Corpus CSV (default {defaults.input_file}).")
    ap.add_argument("--output-dir", type=str, default=defaults.output_dir,
                    help="Root folder for tables and charts (default analysis).")
    ap.add_argument("--id-column", type=str, default=defaults.id_column)
    ap.add_argument("--text-column", type=str, default=defaults.text_column)
    ap.add_argument("--date-column", type=str, default=defaults.date_column)
    ap.add_argument("--topics", type=int, default=defaults.n_topics,
                    help=f"Number of topics K (default {defaults.n_topics}).")
    ap.add_argument("--iterations", type=int, default=defaults.n_iterations,
                    help=f"Inference iterations (default {defaults.n_iterations}).")
    ap.add_argument("--seed", type=int, default=defaults.random_seed,
                    help=f"Random seed (default {defaults.random_seed}).")
    ap.add_argument("--top-n", type=int, default=defaults.top_n_terms,
                    help=f"Terms per topic label (default {defaults.top_n_terms}).")
    ap.add_argument("--palette", type=str, default=defaults.palette_name,
                    help=f"Plotly palette or colorscale name (default {defaults.palette_name}).")
    ap.add_argument("--palette-size", type=int, default=None,
                    help="Number of colours (default: number of topics).")
    ap.add_argument("--log-file", type=str, default=None,
                    help="Also write the log to this file.")

    args = ap.parse_args(argv)

    return PipelineConfig(
        input_file=args.input,
        output_dir=args.output_dir,
        id_column=args.id_column,
        text_column=args.text_column,
        date_column=args.date_column,
        n_topics=args.topics,
        n_iterations=args.iterations,
        random_seed=args.seed,
        top_n_terms=args.top_n,
        palette_name=args.palette,
        palette_size=args.palette_size,
        log_file=args.log_file,
    )


def main(argv=None):
    config = parse_args(argv)

    logger.info("Starting LDA topic pipeline...")
    result = run_pipeline(config)
    logger.info(
        f"Pipeline complete. {result.dtm.shape[0]} documents, "
        f"{result.dtm.shape[1]} terms, {result.lda.n_topics} topics, "
        f"{result.topics_per_decade['decade'].nunique()} decades."
    )
    return result


# -------------------------------------------------------
# MAIN
# -------------------------------------------------------
if __name__ == "__main__":
    main()
