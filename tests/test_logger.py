"""Tests for logging setup."""

import importlib

from loguru import logger

from codemenu import logger as codemenu_logger


def test_import_keeps_existing_handlers():
    messages: list[str] = []
    handler_id = logger.add(messages.append, format="{message}")
    try:
        importlib.reload(codemenu_logger)
        importlib.import_module("codemenu.application")
        codemenu_logger.get_logger("host").info("host handler still attached")
    finally:
        logger.remove(handler_id)

    assert any("host handler still attached" in message for message in messages)


def test_setup_logger_names_unbound_records(tmp_path, monkeypatch):
    log_file = tmp_path / "codemenu.log"
    codemenu_logger.setup_logger(log_file=str(log_file), log_level="INFO", console_output=False)
    try:
        logger.info("plain record")
        codemenu_logger.get_logger("ranking").info("bound record")
    finally:
        monkeypatch.setattr(codemenu_logger, "_log_file_path", None)
        codemenu_logger.setup_logger(log_level="WARNING")

    lines = log_file.read_text().splitlines()
    assert any("| tests.test_logger:" in line and "plain record" in line for line in lines)
    assert any("| ranking:" in line and "bound record" in line for line in lines)
