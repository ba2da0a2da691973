"""
Tests for configuration management.

Covers defaults, environment overrides and TOML round trips of
:class:`GoldPriceConfig`.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import toml

from goldprice.core.config import GoldPriceConfig, PollingConfig, SourceConfig, load_config
from goldprice.core.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("GOLDPRICE_POLLING__INTERVAL", "GOLDPRICE_ALERTS__DOMESTIC_MAX", "GOLDPRICE_SOURCES__FALLBACKS_ENABLED"):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_default_sources(self) -> None:
        sources = SourceConfig()

        assert sources.primary_url == "http://hq.sinajs.cn/list=hf_XAU,gds_AUTD,USDCNY"
        assert sources.primary_referer == "https://finance.sina.com.cn/"
        assert sources.connect_timeout == 10.0
        assert sources.read_timeout == 10.0
        assert sources.fallbacks_enabled is True

    def test_default_config(self) -> None:
        config = GoldPriceConfig()

        assert config.polling.interval == 2.0
        assert config.alerts.cooldown_seconds == 600.0
        assert config.alerts.domestic_max == 0.0
        assert config.visibility.enabled is False
        assert config.logging.level == "INFO"

    def test_interval_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            PollingConfig(interval=0)


class TestEnvironment:
    def test_nested_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GOLDPRICE_POLLING__INTERVAL", "5")
        monkeypatch.setenv("GOLDPRICE_ALERTS__DOMESTIC_MAX", "480.5")
        monkeypatch.setenv("GOLDPRICE_SOURCES__FALLBACKS_ENABLED", "false")

        config = load_config()

        assert config.polling.interval == 5.0
        assert config.alerts.domestic_max == 480.5
        assert config.sources.fallbacks_enabled is False


class TestFiles:
    def test_save_and_load(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "goldprice.toml"
        original = GoldPriceConfig()
        original.alerts.domestic_max = 470.0

        original.save_to_file(path)
        loaded = GoldPriceConfig.load_from_file(path)

        assert loaded.alerts.domestic_max == 470.0
        assert loaded.sources.primary_url == original.sources.primary_url
        assert "file_path" not in toml.load(path)["logging"]

    def test_partial_file_keeps_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "goldprice.toml"
        path.write_text("[polling]\ninterval = 3.5\n", encoding="utf-8")

        config = load_config(path)

        assert config.polling.interval == 3.5
        assert config.sources.read_timeout == 10.0

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(tmp_path / "absent.toml")

        assert exc_info.value.error_code == "CONFIG_ERROR"
        assert "config_path" in exc_info.value.details

    def test_malformed_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.toml"
        path.write_text("[polling\ninterval = ", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Invalid TOML"):
            load_config(path)

    def test_invalid_values(self, tmp_path: Path) -> None:
        path = tmp_path / "invalid.toml"
        path.write_text("[polling]\ninterval = -1\n", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path)

        assert exc_info.value.details["errors"]
