"""TOML config loading and profiles."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

# Default config search path (project root or cwd)
_CONFIG_DIR = Path(__file__).resolve().parent.parent.parent.parent / "config"
_CWD_CONFIG = Path.cwd() / "config"


def _load_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base. Override values take precedence."""
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _find_config_dir(config_dir: Path | None = None) -> Path:
    if config_dir is not None:
        return Path(config_dir)
    if _CWD_CONFIG.exists():
        return _CWD_CONFIG
    return _CONFIG_DIR


def load_config(profile: str | None = None, config_dir: Path | None = None) -> dict[str, Any]:
    """Load merged config from default.toml and optional profile overlay."""
    config_dir = _find_config_dir(config_dir)
    default_path = config_dir / "default.toml"
    base = _load_toml(default_path) if default_path.exists() else {}
    if profile:
        profile_path = config_dir / f"{profile}.toml"
        if profile_path.exists():
            overlay = _load_toml(profile_path)
            base = _deep_merge(base, overlay)
    return base


def get_settings(profile: str | None = None, config_dir: Path | None = None) -> Settings:
    """Return Settings instance from merged config."""
    raw = load_config(profile, config_dir)
    return Settings.from_dict(raw)


class Settings:
    """Application settings from TOML config."""

    def __init__(
        self,
        *,
        curve: dict[str, Any] | None = None,
        ledger: dict[str, Any] | None = None,
        logging: dict[str, Any] | None = None,
    ):
        self.curve = curve or {}
        self.ledger = ledger or {}
        self.logging = logging or {}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Settings:
        return cls(
            curve=raw.get("curve"),
            ledger=raw.get("ledger"),
            logging=raw.get("logging"),
        )

    # Curve parameters (fixed per deployment)
    @property
    def total_issuance(self) -> float:
        return float(self.curve.get("total_issuance", 1_000_000_000))

    @property
    def virtual_base_offset(self) -> float:
        return float(self.curve.get("virtual_base_offset", 30.0))

    @property
    def graduation_threshold(self) -> float:
        return float(self.curve.get("graduation_threshold", 69.0))

    @property
    def fee_rate(self) -> float:
        return float(self.curve.get("fee_rate", 0.01))

    @property
    def chart_points(self) -> int:
        return int(self.curve.get("chart_points", 50))

    @property
    def chart_min_range(self) -> float:
        return float(self.curve.get("chart_min_range", 1000.0))

    # Ledger (read-only fullnode access)
    @property
    def node_url(self) -> str:
        return self.ledger.get("node_url", "https://fullnode.testnet.aptoslabs.com/v1")

    @property
    def contract_address(self) -> str:
        return self.ledger.get(
            "contract_address",
            "0xe839b729a89575c5930c1691b6817de70ecfb4cc229268108ee8eba64a4da792",
        )

    @property
    def module_name(self) -> str:
        return self.ledger.get("module_name", "bonding_curve")

    @property
    def ledger_timeout_sec(self) -> float:
        return float(self.ledger.get("timeout_sec", 30.0))

    @property
    def ledger_rate_per_sec(self) -> float:
        return float(self.ledger.get("rate_per_sec", 5.0))

    @property
    def ledger_max_retries(self) -> int:
        return int(self.ledger.get("max_retries", 3))

    @property
    def logging_level(self) -> str:
        return self.logging.get("level", "INFO").upper()

    @property
    def logging_format(self) -> str:
        return self.logging.get("format", "console")

    @property
    def logging_level_num(self) -> int:
        return getattr(logging, self.logging_level, logging.INFO)


def configure_logging(settings: Settings) -> None:
    """Configure structlog with settings. Call once at application entry."""
    import structlog

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.logging_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(settings.logging_level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
