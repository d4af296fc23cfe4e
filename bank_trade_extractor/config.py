"""
Configuration module for the bank trade extractor.
Contains markers, rates, tool settings and record literals.
"""

import copy
import json
import os
import logging
from typing import Dict, List, Any

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    # Statement markers
    "anchor": "valörlü GZ:",
    "amount_marker": "GZ:",
    "terminators": ["ALIS", "SATIS"],
    "max_context_lines": 10,
    # Fees
    "commission_rate": 0.0005,   # %0.05
    "tax_rate": 0.000015,        # %0.0015 BSMV
    # Text extraction
    "backend": "pdftotext",
    "tool": "pdftotext",
    "tool_timeout": 30,
    "extra_search_paths": ["/opt/homebrew/bin", "/usr/local/bin"],
    # Output records
    "category": "Hisse Senetleri",
    "source": "PDF Import Vakıf CSV Style v2",
    "locale": "tr_TR",
    "currency_label": "TL",
}


class ExtractorConfig:
    """Configuration class for the bank trade extractor."""

    def __init__(self, config_file: str = None, overrides: Dict[str, Any] = None):
        self.config = self._load_config(config_file)
        if overrides:
            self.config.update(overrides)

    def _load_config(self, config_file: str) -> Dict[str, Any]:
        """Load defaults, overlaid by a JSON configuration file when given."""
        default_config = copy.deepcopy(DEFAULT_CONFIG)

        if config_file and os.path.exists(config_file):
            try:
                with open(config_file, 'r', encoding='utf-8') as f:
                    user_config = json.load(f)
                default_config.update(user_config)
                logger.info(f"Loaded configuration from {config_file}")
            except (OSError, ValueError) as e:
                logger.warning(f"Failed to load config file: {e}. Using default config.")

        return default_config

    @property
    def anchor(self) -> str:
        return self.config["anchor"]

    @property
    def amount_marker(self) -> str:
        return self.config["amount_marker"]

    @property
    def terminators(self) -> List[str]:
        return self.config["terminators"]

    @property
    def max_context_lines(self) -> int:
        return int(self.config["max_context_lines"])

    @property
    def commission_rate(self) -> float:
        return float(self.config["commission_rate"])

    @property
    def tax_rate(self) -> float:
        return float(self.config["tax_rate"])

    @property
    def backend(self) -> str:
        return self.config["backend"]

    @property
    def tool(self) -> str:
        return self.config["tool"]

    @property
    def tool_timeout(self) -> float:
        return float(self.config["tool_timeout"])

    @property
    def extra_search_paths(self) -> List[str]:
        return self.config["extra_search_paths"]

    @property
    def category(self) -> str:
        return self.config["category"]

    @property
    def source(self) -> str:
        return self.config["source"]

    @property
    def locale(self) -> str:
        return self.config["locale"]

    @property
    def currency_label(self) -> str:
        return self.config["currency_label"]

    def get_config(self) -> Dict[str, Any]:
        """Get complete configuration as dictionary."""
        return copy.deepcopy(self.config)
