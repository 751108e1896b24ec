"""
Reporting Configuration Schema.

Presentation options shared by the console, CSV, HTML and PDF renderers.
Loaded from defaults, a plain dict, or a YAML file.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Self

import yaml

from payment_kernel.logging_config import get_logger

logger = get_logger("reporting.config")


@dataclass
class ReportingConfig:
    """
    Configuration schema for report rendering.

    Amounts are always printed with two decimal places; only the
    surrounding presentation is configurable.
    """

    # Prefix for every printed amount
    currency_symbol: str = "₹"

    # Organisation name printed in the console title block
    entity_name: str = "Company"

    # Console line width (borders and centering)
    console_width: int = 80

    # Max characters of description/party shown in console rows
    truncate_width: int = 18

    # strftime pattern for console dates
    date_format: str = "%d-%b-%y"

    # Optional TTF font for PDF export; core fonts cannot encode the
    # currency symbol or other non latin-1 text
    pdf_font_path: str | None = None

    # Replacement for currency_symbol when no TTF font is configured
    pdf_currency_fallback: str = "Rs."

    csv_encoding: str = "utf-8"

    def __post_init__(self):
        if self.console_width < 40:
            raise ValueError("console_width must be at least 40")
        if self.truncate_width < 4:
            raise ValueError("truncate_width must be at least 4")
        if not self.currency_symbol:
            raise ValueError("currency_symbol cannot be empty")
        if self.pdf_font_path is not None and not Path(self.pdf_font_path).is_file():
            raise ValueError(f"pdf_font_path does not exist: {self.pdf_font_path}")

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with standard defaults."""
        logger.debug("reporting_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create config from dictionary. Unknown keys are rejected."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown reporting config keys: {unknown}")
        logger.info(
            "reporting_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Path | str) -> Self:
        """
        Load config from a YAML file.

        The options may sit at the top level or under a ``reporting:`` key.
        An empty file yields the defaults.

        Raises:
            FileNotFoundError: if the file does not exist.
            yaml.YAMLError: if the file is not valid YAML.
        """
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Reporting config must be a mapping: {path}")
        if "reporting" in data:
            data = data["reporting"] or {}
        return cls.from_dict(data)
