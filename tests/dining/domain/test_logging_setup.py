"""Tests for the logging setup of the dining domain."""

import logging

import pytest
from dining.utils.logging import configure_logging


@pytest.fixture()
def restore_logging():
    yield
    configure_logging(log_dir="logs", log_file_prefix="dining")


class TestConfigureLogging:
    def test_files_use_given_directory_and_prefix(self, tmp_path, restore_logging):
        log_dir = tmp_path / "nested" / "logs"
        configure_logging(log_dir=str(log_dir), log_file_prefix="ledger")

        assert (log_dir / "ledger.log").exists()
        assert (log_dir / "ledger_error.log").exists()

    def test_log_dir_from_environment(self, tmp_path, monkeypatch, restore_logging):
        monkeypatch.setenv("LOG_DIR", str(tmp_path / "from-env"))
        configure_logging(log_dir="logs", log_file_prefix="dining")

        assert (tmp_path / "from-env" / "dining.log").exists()

    def test_protean_logger_quieted(self, tmp_path, restore_logging):
        configure_logging(log_dir=str(tmp_path))
        assert logging.getLogger("protean").level == logging.WARNING
