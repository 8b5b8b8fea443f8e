# File: tests/unit/test_logging_config.py
"""Unit tests for logging configuration."""

import logging

import pytest

from revit_fbx_exporter.utils.logging_config import ExporterLogger, get_logger


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level, raise_exc = list(root.handlers), root.level, logging.raiseExceptions
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.raiseExceptions = raise_exc


def test_trace_level_registered():
    assert logging.getLevelName(ExporterLogger.TRACE_LEVEL) == "TRACE"
    assert hasattr(get_logger(__name__), "trace")


def test_console_only_by_default(restore_root_logger):
    assert ExporterLogger.configure() is None
    assert len(restore_root_logger.handlers) == 1
    assert restore_root_logger.level == logging.INFO
    assert logging.raiseExceptions is False


def test_design_automation_console_format(restore_root_logger, capsys):
    ExporterLogger.configure()
    get_logger("revit_fbx_exporter.test").error("Error occurred")
    assert "ERROR: Error occurred" in capsys.readouterr().out


def test_debug_mode_with_log_file(restore_root_logger, tmp_path):
    log_file = ExporterLogger.configure(debug_mode=True, log_dir=str(tmp_path / "logs"))
    get_logger("revit_fbx_exporter.test").trace("per-view detail")
    for handler in restore_root_logger.handlers:
        handler.flush()

    assert restore_root_logger.level == ExporterLogger.TRACE_LEVEL
    assert "per-view detail" in open(log_file).read()
