"""Tests for the entry point's argument handling and logging setup."""
import logging

import pytest

from plasmoire.logging_config import level_from_name, setup_logging
from plasmoire.main import build_parser


class TestParser:

    def test_defaults(self):
        args, rest = build_parser().parse_known_args([])
        assert args.log_level == "info"
        assert args.debug is False
        assert args.log_file is None
        assert rest == []

    def test_qt_flags_pass_through(self):
        args, rest = build_parser().parse_known_args(["--debug", "-style", "fusion"])
        assert args.debug is True
        assert "-style" in rest
        assert "fusion" in rest


class TestLogging:

    @pytest.mark.parametrize("name,level", [("debug", logging.DEBUG), ("INFO", logging.INFO),
                                            ("Warning", logging.WARNING)])
    def test_level_from_name(self, name, level):
        assert level_from_name(name) == level

    def test_unknown_level(self):
        with pytest.raises(ValueError, match="Unknown logging level"):
            level_from_name("chatty")

    def test_setup_is_idempotent(self, tmp_path):
        log_file = tmp_path / "plasmoire.log"
        setup_logging(level=logging.DEBUG, log_file=str(log_file))
        setup_logging(level=logging.DEBUG, log_file=str(log_file))

        logger = logging.getLogger("plasmoire")
        assert len(logger.handlers) == 2
        logging.getLogger("plasmoire.model.field").debug("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")

        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
