"""
Vocabulary Store
================

Static SPL command and KQL operator reference data used by the validators,
the translators and the explainer.

Each language has its own reference document:
- data/splunk_reference.json - {"spl_commands": {verb: {description, kql_equivalent}}}
- data/kql_reference.json    - {"kql_operators": {op: {description, spl_equivalent}}}

A generic "equivalent" key is accepted in place of the language specific one.

NO FALLBACK DATA: if a reference document is missing or unparsable the load
raises ReferenceDataError. The translator cannot run without its vocabulary.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

# Bundled reference data
DEFAULT_REFERENCE_DIR = Path(__file__).parent / "data"
SPLUNK_REFERENCE_FILE = "splunk_reference.json"
KQL_REFERENCE_FILE = "kql_reference.json"


class ReferenceDataError(Exception):
    """Raised when reference data is missing or cannot be parsed."""
    pass


@dataclass(frozen=True)
class VerbEntry:
    """A single verb/operator with its description and target-language equivalent."""
    name: str
    equivalent: str
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "equivalent": self.equivalent,
            "description": self.description,
        }


@dataclass(frozen=True)
class Vocabulary:
    """
    Read-only SPL and KQL vocabularies.

    Keys are case-sensitive verb/operator names.
    """
    spl_commands: Mapping[str, VerbEntry]
    kql_operators: Mapping[str, VerbEntry]
    loaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def spl_command(self, verb: str) -> Optional[VerbEntry]:
        return self.spl_commands.get(verb)

    def kql_operator(self, operator: str) -> Optional[VerbEntry]:
        return self.kql_operators.get(operator)


# =============================================================================
# LOADERS
# =============================================================================

def _read_reference(path: Path, section: str, equivalent_key: str) -> Mapping[str, VerbEntry]:
    """
    Read one reference document and return its verb table.

    Args:
        path: JSON file to read
        section: Top-level key holding the verb table
        equivalent_key: Language specific name of the equivalent field

    Raises:
        ReferenceDataError: If the file is missing, unparsable or has no verb table
    """
    if not path.exists():
        raise ReferenceDataError(f"Reference data not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ReferenceDataError(f"Could not parse reference data {path}: {e}") from e

    table = data.get(section) if isinstance(data, dict) else None
    if not isinstance(table, dict):
        raise ReferenceDataError(f"Reference data {path} has no '{section}' mapping")

    entries = {}
    for name, raw in table.items():
        if not isinstance(raw, dict):
            raise ReferenceDataError(f"Invalid entry '{name}' in {path}: expected an object")
        entries[name] = VerbEntry(
            name=name,
            equivalent=raw.get(equivalent_key, raw.get("equivalent", "")),
            description=raw.get("description", ""),
        )

    return MappingProxyType(entries)


def load_vocabulary(reference_dir: Optional[Path] = None) -> Vocabulary:
    """
    Load both reference documents.

    Args:
        reference_dir: Directory holding the reference JSON files
            (defaults to the bundled data directory)

    Returns:
        Vocabulary with both verb tables

    Raises:
        ReferenceDataError: If either document is missing or invalid
    """
    base = Path(reference_dir) if reference_dir else DEFAULT_REFERENCE_DIR

    spl_commands = _read_reference(base / SPLUNK_REFERENCE_FILE, "spl_commands", "kql_equivalent")
    kql_operators = _read_reference(base / KQL_REFERENCE_FILE, "kql_operators", "spl_equivalent")

    logger.info(
        f"References loaded: {len(spl_commands)} SPL commands, "
        f"{len(kql_operators)} KQL operators from {base}"
    )
    return Vocabulary(spl_commands=spl_commands, kql_operators=kql_operators)
