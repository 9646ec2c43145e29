# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.03.11
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# tests/test_logging_setup.py

from unittest.mock import patch

from loguru import logger

from themesync.config.manager import SyncConfig
from themesync.system.logging_setup import setup_logging


class TestSetupLogging:

    def test_file_logging_when_configured(self, tmp_path):
        log_dir = tmp_path / "logs"
        setup_logging(SyncConfig(staging_dir=tmp_path, local_log=log_dir))
        logger.info("theme imported")
        logger.complete()

        log_file = log_dir / "themesync.log"
        assert log_file.exists()
        assert "theme imported" in log_file.read_text()

    def test_console_only_without_local_log(self, tmp_path):
        setup_logging(SyncConfig(staging_dir=tmp_path))
        logger.info("nothing on disk")
        assert not list(tmp_path.glob("**/themesync.log"))

    def test_config_loaded_when_not_given(self, tmp_path):
        with patch("themesync.system.logging_setup.load_config",
                   return_value=SyncConfig(staging_dir=tmp_path, local_log=tmp_path / "logs")) as load:
            setup_logging()
        load.assert_called_once()
        assert (tmp_path / "logs").is_dir()

    def test_file_logging_failure_is_not_fatal(self, tmp_path):
        blocker = tmp_path / "logs"
        blocker.write_text("not a directory")
        # Must not raise
        setup_logging(SyncConfig(staging_dir=tmp_path, local_log=blocker))

    def teardown_method(self):
        logger.remove()
