"""
Unit tests for logging setup
"""

import logging

from shared.utils.logger import mask_token, setup_logging


def test_mask_token_keeps_prefix():
    assert mask_token("abcdefghijklmnop") == "abcde..."


def test_mask_token_empty():
    assert mask_token(None) == "<none>"


def test_setup_logging_level_override():
    setup_logging(log_level="debug")
    assert logging.getLogger().level == logging.DEBUG

    setup_logging(log_level="info")
    assert logging.getLogger().level == logging.INFO


def test_setup_logging_from_yaml(tmp_path):
    config_file = tmp_path / "logging.yaml"
    config_file.write_text(
        "version: 1\n"
        "disable_existing_loggers: false\n"
        "handlers:\n"
        "  console:\n"
        "    class: logging.StreamHandler\n"
        "loggers:\n"
        "  '':\n"
        "    level: WARNING\n"
        "    handlers: [console]\n"
    )

    setup_logging(config_path=str(config_file))
    assert logging.getLogger().level == logging.WARNING

    setup_logging(log_level="INFO")


def test_unreadable_yaml_falls_back_to_default(tmp_path):
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("version: [1\n")

    setup_logging(config_path=str(config_file), log_level="INFO")
    assert logging.getLogger().level == logging.INFO
