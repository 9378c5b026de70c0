import logging

import pytest

from topicstream.utils.config import PipelineConfig
from topicstream.utils.logger import get_logger


def test_default_config_is_valid():
    config = PipelineConfig().validate()

    assert (config.n_topics, config.n_iterations, config.random_seed, config.top_n_terms) == (
        15, 1000, 9161, 7,
    )
    assert config.n_colors == 15
    assert config.topic_dir.endswith("topics")


@pytest.mark.parametrize(
    "field, value",
    [("n_topics", 0), ("n_iterations", -1), ("top_n_terms", 0), ("palette_size", 0), ("n_topics", 2.5)],
)
def test_invalid_config(field, value):
    with pytest.raises(ValueError, match=field):
        PipelineConfig(**{field: value}).validate()


def test_get_logger_does_not_stack_handlers(tmp_path):
    log_file = str(tmp_path / "logs" / "run.log")

    logger = get_logger("TestStage", log_file=log_file)
    logger = get_logger("TestStage", log_file=log_file)

    assert sum(type(h) is logging.StreamHandler for h in logger.handlers) == 1
    assert sum(isinstance(h, logging.FileHandler) for h in logger.handlers) == 1

    logger.info("decade aggregation done")
    for h in logger.handlers:
        h.flush()
    with open(log_file, encoding="utf-8") as f:
        assert "[INFO] TestStage: decade aggregation done" in f.read()
