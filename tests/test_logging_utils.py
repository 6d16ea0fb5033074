"""Tests for logging setup helpers."""

import io
import logging

import pytest

from logging_utils import TqdmLoggingHandler, resolve_log_level


class TestResolveLogLevel:
    @pytest.mark.parametrize("verbose,quiet,expected", [
        (0, 0, logging.INFO),
        (1, 0, logging.DEBUG),
        (2, 0, logging.DEBUG),
        (0, 1, logging.WARNING),
        (0, 2, logging.ERROR),
        (1, 1, logging.INFO),
    ])
    def test_counts(self, verbose, quiet, expected):
        assert resolve_log_level(verbose=verbose, quiet=quiet) == expected

    def test_explicit_level_wins(self):
        assert resolve_log_level("ERROR", verbose=2) == logging.ERROR


class TestTqdmLoggingHandler:
    def test_writes_formatted_record(self):
        stream = io.StringIO()
        handler = TqdmLoggingHandler(stream=stream)
        handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))

        logger = logging.getLogger("tests.tqdm_handler")
        logger.propagate = False
        logger.addHandler(handler)
        try:
            logger.warning("hello %s", "there")
        finally:
            logger.removeHandler(handler)
            logger.propagate = True

        assert stream.getvalue() == "WARNING hello there\n"
