"""Tests for overseas_reporter/common/log_config.py"""

import logging
import sys

from overseas_reporter.common.log_config import PROBE_LOGGER, logger_levels, setup_logging


class TestSetupLogging:
    def teardown_method(self):
        """Reset logger between tests."""
        logger = logging.getLogger("overseas_reporter")
        logger.handlers.clear()
        logger.setLevel(logging.WARNING)
        logging.getLogger(PROBE_LOGGER).setLevel(logging.NOTSET)

    def test_default_level_is_info(self):
        setup_logging()
        logger = logging.getLogger("overseas_reporter")
        assert logger.level == logging.INFO

    def test_verbose_sets_debug(self):
        setup_logging(verbose=True)
        logger = logging.getLogger("overseas_reporter")
        assert logger.level == logging.DEBUG

    def test_quiet_sets_warning(self):
        setup_logging(quiet=True)
        logger = logging.getLogger("overseas_reporter")
        assert logger.level == logging.WARNING

    def test_handler_outputs_to_stderr(self):
        setup_logging()
        logger = logging.getLogger("overseas_reporter")
        assert len(logger.handlers) == 1
        handler = logger.handlers[0]
        assert handler.stream is sys.stderr

    def test_repeated_setup_keeps_one_handler(self):
        setup_logging()
        setup_logging(verbose=True)
        assert len(logging.getLogger("overseas_reporter").handlers) == 1


class TestLoggerLevels:
    def teardown_method(self):
        for name in ("overseas_reporter", PROBE_LOGGER, "urllib3"):
            logger = logging.getLogger(name)
            logger.handlers.clear()
            logger.setLevel(logging.NOTSET)

    def test_probe_log_held_at_info_when_verbose(self):
        setup_logging(verbose=True)
        assert logging.getLogger(PROBE_LOGGER).level == logging.INFO
        assert logging.getLogger("overseas_reporter.extraction.orchestrator").getEffectiveLevel() == logging.DEBUG

    def test_trace_probes_inherits_debug(self):
        setup_logging(verbose=True, trace_probes=True)
        assert logging.getLogger(PROBE_LOGGER).level == logging.NOTSET
        assert logging.getLogger(PROBE_LOGGER).getEffectiveLevel() == logging.DEBUG

    def test_probe_log_follows_package_when_quiet(self):
        setup_logging(quiet=True)
        assert logging.getLogger(PROBE_LOGGER).getEffectiveLevel() == logging.WARNING

    def test_transport_loggers_warn_only(self):
        levels = logger_levels(verbose=True)
        assert levels["urllib3"] == logging.WARNING
        assert levels["overseas_reporter"] == logging.DEBUG
