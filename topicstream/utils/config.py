"""
config.py
---------
Paths and modelling defaults for the topicstream pipeline.

The constants mirror the tutorial settings (15 topics, 1000 sampling
iterations, seed 9161, 7 terms per topic label). `PipelineConfig`
bundles them so one object can be handed from the CLI to every stage.
"""

import os
from dataclasses import dataclass, field

# -------------------------------------------------------
# PATHS
# -------------------------------------------------------
INPUT_FILE = os.path.join("data", "corpus.csv")

OUTPUT_DIR = "analysis"
TOPIC_DIR = os.path.join(OUTPUT_DIR, "topics")
VIS_DIR = os.path.join(OUTPUT_DIR, "visuals")

# -------------------------------------------------------
# INPUT COLUMNS
# -------------------------------------------------------
ID_COLUMN = "id"
TEXT_COLUMN = "description"
DATE_COLUMN = "date"

# -------------------------------------------------------
# MODEL DEFAULTS
# -------------------------------------------------------
N_TOPICS = 15
N_ITERATIONS = 1000
RANDOM_SEED = 9161
TOP_N_TERMS = 7

# -------------------------------------------------------
# STOPWORDS
# -------------------------------------------------------
STOPWORD_LANGUAGES = (
    "english", "french", "spanish", "italian",
    "german", "portuguese", "dutch",
)

# Early-modern spellings and abbreviations that survive the NLTK lists
EXTRA_STOPWORDS = (
    "thee", "thou", "thy", "thine", "hath", "doth", "ye", "vnto",
    "vpon", "haue", "bee", "wee", "de", "la", "le", "les", "del", "los",
    "s", "st", "mr", "mrs", "etc", "viz",
)

# -------------------------------------------------------
# CHARTS
# -------------------------------------------------------
PALETTE_NAME = "Set3"
CHART_WIDTH = 1000
CHART_HEIGHT = 600


@dataclass
class PipelineConfig:
    """Options for one pipeline run. `palette_size` defaults to `n_topics`."""

    input_file: str = INPUT_FILE
    output_dir: str = OUTPUT_DIR
    id_column: str = ID_COLUMN
    text_column: str = TEXT_COLUMN
    date_column: str = DATE_COLUMN

    n_topics: int = N_TOPICS
    n_iterations: int = N_ITERATIONS
    random_seed: int = RANDOM_SEED
    top_n_terms: int = TOP_N_TERMS

    stopword_languages: tuple = STOPWORD_LANGUAGES
    extra_stopwords: tuple = EXTRA_STOPWORDS

    palette_name: str = PALETTE_NAME
    palette_size: int | None = None
    chart_width: int = CHART_WIDTH
    chart_height: int = CHART_HEIGHT

    log_file: str | None = field(default=None)

    @property
    def topic_dir(self) -> str:
        return os.path.join(self.output_dir, "topics")

    @property
    def vis_dir(self) -> str:
        return os.path.join(self.output_dir, "visuals")

    @property
    def n_colors(self) -> int:
        return self.palette_size if self.palette_size is not None else self.n_topics

    def validate(self) -> "PipelineConfig":
        """Raise ValueError on a non-positive count; return self otherwise."""
        positive = {
            "n_topics": self.n_topics,
            "n_iterations": self.n_iterations,
            "top_n_terms": self.top_n_terms,
            "palette_size": self.n_colors,
        }
        for name, value in positive.items():
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")

        if not isinstance(self.random_seed, int) or isinstance(self.random_seed, bool):
            raise ValueError(f"random_seed must be an integer, got {self.random_seed!r}")

        return self
