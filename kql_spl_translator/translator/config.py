"""
Translator Configuration
========================

Configuration classes and utilities for the query translator.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from kql_spl_translator.table_mapping import DEFAULT_MAPPING_FILE


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"
DEFAULT_REFRESH_STATE_PATH = Path("data") / "refresh_state.json"


@dataclass
class TranslatorConfig:
    """Configuration for the query translator."""
    reference_dir: Optional[Path] = None
    table_mapping_path: Path = Path(DEFAULT_MAPPING_FILE)
    refresh_interval_days: int = 7
    refresh_state_path: Path = DEFAULT_REFRESH_STATE_PATH
    log_level: str = "INFO"
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    @classmethod
    def from_yaml(cls, path: Path = DEFAULT_CONFIG_PATH) -> "TranslatorConfig":
        """Load configuration from YAML file."""
        path = Path(path)
        if not path.exists():
            return cls()

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        translator_data = data.get("translator", {})
        api_data = data.get("api", {})

        reference_dir = translator_data.get("reference_dir")

        return cls(
            reference_dir=Path(reference_dir) if reference_dir else None,
            table_mapping_path=Path(translator_data.get("table_mapping_path", DEFAULT_MAPPING_FILE)),
            refresh_interval_days=translator_data.get("refresh_interval_days", 7),
            refresh_state_path=Path(translator_data.get("refresh_state_path", DEFAULT_REFRESH_STATE_PATH)),
            log_level=translator_data.get("log_level", "INFO"),
            api_host=api_data.get("host", "127.0.0.1"),
            api_port=api_data.get("port", 8000),
        )
