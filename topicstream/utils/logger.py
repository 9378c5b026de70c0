"""
logger.py
---------
Shared logger factory for the topicstream pipeline.

Every stage (corpus loading, tokenizing, model fitting, decade
aggregation, chart rendering) logs through a logger created here so
that a full run reads as one consistently formatted trace.

Usage example:
    from topicstream.utils.logger import get_logger

    logger = get_logger("CorpusLoader")
    logger.info("Loading corpus...")

Run:
    (import only — not executable as standalone)
"""

import logging
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name, log_file=None, level=logging.INFO):
    """
    Create (or fetch) a formatted logger.

    Parameters
    ----------
    name : str
        Logger name, usually the pipeline stage ("LdaPipeline").

    log_file : str | None
        Optional path of a log file. The parent folder is created
        if needed and a FileHandler with the same format is attached.

    level : int
        Logging level (default: logging.INFO)

    Returns
    -------
    logger : logging.Logger
        Logger with a console handler and, optionally, a file handler.
        Calling this twice with the same name does not stack handlers.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Example output:
    #   2026-10-16 21:04:11 [INFO] LdaPipeline: Fitting LDA with K=15...
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    # -----------------------------
    # Console Handler (always enabled, added once)
    # -----------------------------
    has_console = any(
        type(h) is logging.StreamHandler for h in logger.handlers
    )
    if not has_console:
        ch = logging.StreamHandler()
        ch.setFormatter(formatter)
        logger.addHandler(ch)

    # -----------------------------
    # File Handler (optional)
    # -----------------------------
    if log_file:
        log_path = os.path.abspath(log_file)
        has_file = any(
            isinstance(h, logging.FileHandler) and h.baseFilename == log_path
            for h in logger.handlers
        )
        if not has_file:
            log_dir = os.path.dirname(log_path)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

            fh = logging.FileHandler(log_path, encoding="utf-8")
            fh.setFormatter(formatter)
            logger.addHandler(fh)

    return logger
