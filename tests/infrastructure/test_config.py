"""Tests for environment-driven settings."""

import pytest
from click.testing import CliRunner

from pos_inventory.infrastructure.cli.main import cli
from pos_inventory.infrastructure.config import ConfigurationError, get_settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("POS_TENANT", raising=False)
        monkeypatch.delenv("POS_LOW_STOCK_THRESHOLD", raising=False)
        monkeypatch.delenv("POS_LOG_LEVEL", raising=False)

        settings = get_settings()

        assert settings.tenant == "default"
        assert settings.low_stock_threshold == 5
        assert settings.log_level == "WARNING"

    def test_reads_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("POS_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("POS_LOW_STOCK_THRESHOLD", "12")
        monkeypatch.setenv("POS_LOG_LEVEL", "debug")

        settings = get_settings()

        assert settings.data_dir == tmp_path
        assert settings.low_stock_threshold == 12
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("raw, message", [
        ("lots", "must be an integer"),
        ("-1", "cannot be negative"),
    ])
    def test_bad_threshold(self, monkeypatch, raw, message):
        monkeypatch.setenv("POS_LOW_STOCK_THRESHOLD", raw)
        with pytest.raises(ConfigurationError, match=message):
            get_settings()

    def test_cli_reports_bad_threshold(self, monkeypatch, tmp_path):
        monkeypatch.setenv("POS_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("POS_LOW_STOCK_THRESHOLD", "lots")

        result = CliRunner().invoke(cli, ["stock", "show"])

        assert result.exit_code == 1
        assert "POS_LOW_STOCK_THRESHOLD must be an integer, got 'lots'" in result.output
        assert "Traceback" not in result.output
