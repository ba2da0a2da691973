"""
Configuration management for goldprice.

Settings come from keyword arguments, ``GOLDPRICE_*`` environment variables
(nested fields use ``__``, e.g. ``GOLDPRICE_POLLING__INTERVAL=5``), an optional
``.env`` file, and TOML files loaded through :meth:`GoldPriceConfig.load_from_file`.
"""

from __future__ import annotations

from pathlib import Path

import toml
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from goldprice.core.exceptions import ConfigurationError
from goldprice.core.http_adapter import BROWSER_USER_AGENT


class SourceConfig(BaseModel):
    """Upstream quote endpoints and request settings."""

    primary_url: str = Field(
        "http://hq.sinajs.cn/list=hf_XAU,gds_AUTD,USDCNY",
        description="Sina quote feed carrying international, domestic and USD/CNY series",
    )
    primary_referer: str = Field(
        "https://finance.sina.com.cn/", description="Referer header required by the Sina feed"
    )
    binance_url: str = Field(
        "https://api.binance.com/api/v3/ticker/price?symbol=PAXGUSDT",
        description="First fallback for the international price",
    )
    coinbase_url: str = Field(
        "https://api.coinbase.com/v2/prices/PAXG-USD/spot",
        description="Second fallback for the international price",
    )
    fallbacks_enabled: bool = Field(True, description="Query fallback feeds when the primary has no international price")
    connect_timeout: float = Field(10.0, gt=0, description="Connect timeout in seconds")
    read_timeout: float = Field(10.0, gt=0, description="Read timeout in seconds")
    user_agent: str = Field(BROWSER_USER_AGENT, description="User-Agent sent to every source")


class PollingConfig(BaseModel):
    """Poll loop settings."""

    interval: float = Field(2.0, gt=0, description="Seconds between the starts of two poll cycles")


class AlertConfig(BaseModel):
    """Price alert bounds; 0 disables a bound."""

    domestic_max: float = Field(0.0, ge=0)
    domestic_min: float = Field(0.0, ge=0)
    international_max: float = Field(0.0, ge=0)
    international_min: float = Field(0.0, ge=0)
    cooldown_seconds: float = Field(600.0, ge=0, description="Minimum gap between two alerts with the same key")


class VisibilityConfig(BaseModel):
    """Price window outside of which the display hides prices."""

    enabled: bool = False
    domestic_min: float = Field(0.0, ge=0)
    domestic_max: float = Field(0.0, ge=0)
    international_min: float = Field(0.0, ge=0)
    international_max: float = Field(0.0, ge=0)


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field("INFO", description="Log level")
    console_output: bool = Field(True, description="Write JSON log lines to stderr")
    file_output: bool = Field(False, description="Also append JSON log lines to file_path")
    file_path: Path | None = Field(None, description="Log file path")


class GoldPriceConfig(BaseSettings):
    """Main goldprice configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GOLDPRICE_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    sources: SourceConfig = Field(default_factory=SourceConfig)
    polling: PollingConfig = Field(default_factory=PollingConfig)
    alerts: AlertConfig = Field(default_factory=AlertConfig)
    visibility: VisibilityConfig = Field(default_factory=VisibilityConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load_from_file(cls, config_path: Path) -> GoldPriceConfig:
        """Load configuration from a TOML file."""
        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}", config_path=str(config_path)
            )

        try:
            config_data = toml.load(config_path)
        except toml.TomlDecodeError as exc:
            raise ConfigurationError(
                f"Invalid TOML in {config_path}: {exc}", config_path=str(config_path)
            ) from exc

        try:
            return cls(**config_data)
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid configuration in {config_path}",
                config_path=str(config_path),
                details={"errors": exc.errors(include_url=False)},
            ) from exc

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to a TOML file."""
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            toml.dump(self.model_dump(mode="json", exclude_none=True), f)


def load_config(config_path: Path | None = None) -> GoldPriceConfig:
    """Defaults plus environment, overlaid by ``config_path`` when given."""
    if config_path is None:
        return GoldPriceConfig()
    return GoldPriceConfig.load_from_file(config_path)
