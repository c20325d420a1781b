"""
Runtime configuration for Clinicalc.

Settings come from environment variables and are read once into a singleton.
"""

import logging
import os
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class CalculatorConfig:
  """Configuration for the calculator surfaces (CLI and HTTP)."""

  def __init__(self):
    self.log_level = os.environ.get("CLINICALC_LOG_LEVEL", "INFO").upper()
    self.paley_table = os.environ.get("CLINICALC_PALEY_TABLE") or None
    self.cors_origins = _split_csv(os.environ.get("CLINICALC_CORS_ORIGINS", "*"))
    self.host = os.environ.get("CLINICALC_HOST", "0.0.0.0")
    self.port = int(os.environ.get("CLINICALC_PORT", "8000"))

  @property
  def paley_table_path(self) -> Optional[Path]:
    """Override file for the Paley multiplier table, if one is set."""
    return Path(self.paley_table) if self.paley_table else None

  def validate(self) -> None:
    """Raise error if the configuration points at missing files."""
    path = self.paley_table_path
    if path is not None and not path.exists():
      raise ValueError(f"CLINICALC_PALEY_TABLE points to a missing file: {path}")
    if logging.getLevelName(self.log_level) == f"Level {self.log_level}":
      raise ValueError(f"CLINICALC_LOG_LEVEL is not a logging level: {self.log_level}")


def _split_csv(value: str) -> list[str]:
  return [item.strip() for item in value.split(",") if item.strip()]


# -----------------------------------------------------------------------------
# Singleton
# -----------------------------------------------------------------------------

_config: Optional[CalculatorConfig] = None


def get_config() -> CalculatorConfig:
  """Get the configuration (singleton)."""
  global _config
  if _config is None:
    _config = CalculatorConfig()
    _config.validate()
  return _config


def reset_config() -> None:
  """Reset the singleton (useful for testing)."""
  global _config
  _config = None


def configure_logging(level: Optional[str] = None) -> None:
  """Install the root handler used by the CLI and the server."""
  logging.basicConfig(
    level=level or get_config().log_level,
    format=LOG_FORMAT,
  )
