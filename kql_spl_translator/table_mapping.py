"""
Table/Index Mapper
==================

Maps KQL table names to Splunk index/sourcetype pairs.

The mapping is an immutable, versioned value: merge() returns a new mapping
and never modifies the one it was called on, so a translation that captured
a mapping keeps a consistent view while another caller installs a new one.

Resolution is total:
    exact name -> case-insensitive name -> "default" entry

The defaults below are common Sentinel/Defender table placements and will
usually need adjusting to the Splunk environment in use (for example when
Azure data is ingested through Event Hub). generate_discovery_queries() builds SPL queries
that help find where a table's data actually lives.

Usage:
    mapping = TableMapping.defaults()
    entry, used_default = mapping.resolve("SecurityEvent")

    custom = mapping.merge({
        "DeviceProcessEvents": {"index": "edr", "sourcetype": "defender:process"},
    })
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_KEY = "default"
DEFAULT_MAPPING_FILE = "splunk-mappings.json"


@dataclass(frozen=True)
class TableMappingEntry:
    """Splunk placement for one KQL table."""
    index: str
    sourcetype: Optional[str] = None
    note: str = ""

    @classmethod
    def from_value(cls, name: str, value: Union["TableMappingEntry", dict]) -> "TableMappingEntry":
        """Build an entry from a raw mapping value."""
        if isinstance(value, TableMappingEntry):
            return value
        if not isinstance(value, dict) or not value.get("index"):
            raise ValueError(f"Mapping for table '{name}' must define an 'index'")
        sourcetype = value.get("sourcetype")
        note = value.get("note")
        return cls(
            index=str(value["index"]),
            sourcetype=str(sourcetype) if sourcetype not in (None, "") else None,
            note=str(note) if note is not None else "",
        )

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "sourcetype": self.sourcetype,
            "note": self.note,
        }


# =============================================================================
# DEFAULT MAPPINGS
# =============================================================================

_DEFENDER = "Microsoft Defender for Endpoint"
_IDENTITY = "Microsoft Defender for Identity"

DEFAULT_TABLE_MAPPINGS = {
    # Windows Security & Defender
    "SecurityEvent": TableMappingEntry("windows", "WinEventLog:Security", "Common for Windows Security events"),
    "DeviceProcessEvents": TableMappingEntry("defender", "MDE:DeviceProcessEvents", _DEFENDER),
    "DeviceNetworkEvents": TableMappingEntry("defender", "MDE:DeviceNetworkEvents", _DEFENDER),
    "DeviceFileEvents": TableMappingEntry("defender", "MDE:DeviceFileEvents", _DEFENDER),
    "DeviceEvents": TableMappingEntry("defender", "MDE:DeviceEvents", _DEFENDER),
    "DeviceRegistryEvents": TableMappingEntry("defender", "MDE:DeviceRegistryEvents", _DEFENDER),
    "DeviceLogonEvents": TableMappingEntry("defender", "MDE:DeviceLogonEvents", _DEFENDER),
    "DeviceImageLoadEvents": TableMappingEntry("defender", "MDE:DeviceImageLoadEvents", _DEFENDER),

    # Azure AD / Entra ID
    "SigninLogs": TableMappingEntry("azuread", "azure:aad:signin", "Azure AD Sign-in logs"),
    "AuditLogs": TableMappingEntry("azuread", "azure:aad:audit", "Azure AD Audit logs"),
    "AADSignInEventsBeta": TableMappingEntry("azuread", "azure:aad:signin", "Azure AD Sign-in logs (beta)"),

    # Office 365 / Email
    "EmailEvents": TableMappingEntry("o365", "ms:o365:reporting:messagetrace", "Office 365 Email events"),
    "EmailUrlInfo": TableMappingEntry("o365", "ms:o365:reporting:messagetrace", "Office 365 Email URL info"),
    "EmailAttachmentInfo": TableMappingEntry("o365", "ms:o365:reporting:messagetrace", "Office 365 Email attachments"),
    "CloudAppEvents": TableMappingEntry("o365", "ms:o365:management", "Office 365 Cloud App events"),
    "OfficeActivity": TableMappingEntry("o365", "ms:o365:management", "Office 365 Activity"),

    # Identity & Threat
    "IdentityInfo": TableMappingEntry("security", "MDI:IdentityInfo", _IDENTITY),
    "IdentityLogonEvents": TableMappingEntry("security", "MDI:IdentityLogonEvents", _IDENTITY),
    "IdentityQueryEvents": TableMappingEntry("security", "MDI:IdentityQueryEvents", _IDENTITY),
    "ThreatIntelligenceIndicator": TableMappingEntry("threatintel", "ti:indicators", "Threat Intelligence indicators"),
    "SecurityAlert": TableMappingEntry("security", "security:alerts", "Security alerts from various sources"),
    "SecurityIncident": TableMappingEntry("security", "security:incidents", "Security incidents"),
    "AlertEvidence": TableMappingEntry("security", "security:alert:evidence", "Security alert evidence"),

    # Azure Resources
    "Resources": TableMappingEntry("azure", "azure:resource:graph", "Azure Resource Graph"),
    "ResourceChanges": TableMappingEntry("azure", "azure:resource:changes", "Azure Resource Changes"),

    DEFAULT_KEY: TableMappingEntry("main", None, "Default fallback - adjust to your environment"),
}

# Keywords that identify a table's events in raw Splunk data
TABLE_SEARCH_KEYWORDS = {
    "SecurityEvent": ["EventCode=4624", "EventID", "Windows Security", "WinEventLog"],
    "DeviceProcessEvents": ["DeviceName", "ProcessCommandLine", "InitiatingProcessFileName", "DeviceId"],
    "DeviceNetworkEvents": ["DeviceName", "RemoteIP", "RemoteUrl", "InitiatingProcessFileName"],
    "DeviceFileEvents": ["DeviceName", "FileName", "FolderPath", "SHA256"],
    "SigninLogs": ["UserPrincipalName", "SignInLogs", "Azure AD", "ConditionalAccessStatus"],
    "AuditLogs": ["AuditLogs", "OperationName", "InitiatedBy", "Azure AD"],
    "EmailEvents": ["SenderFromAddress", "RecipientEmailAddress", "Subject", "NetworkMessageId"],
    "OfficeActivity": ["Office 365", "Operation", "UserId", "Workload"],
    "IdentityInfo": ["OnPremisesUserPrincipalName", "AccountDisplayName", "IdentityInfo"],
}


# =============================================================================
# TABLE MAPPING
# =============================================================================

@dataclass(frozen=True)
class TableMapping:
    """Versioned, read-only table -> index/sourcetype mapping."""
    entries: Mapping[str, TableMappingEntry] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_TABLE_MAPPINGS))
    )
    version: int = 1

    def __post_init__(self):
        if DEFAULT_KEY not in self.entries:
            raise ValueError(f"Table mapping must contain a '{DEFAULT_KEY}' entry")

    @classmethod
    def defaults(cls) -> "TableMapping":
        return cls()

    @classmethod
    def from_dict(cls, mapping: Mapping[str, Union[TableMappingEntry, dict]]) -> "TableMapping":
        """Create a mapping from raw entries layered over the defaults."""
        return cls.defaults().merge(mapping)

    def resolve(self, table_name: str) -> tuple[TableMappingEntry, bool]:
        """
        Resolve a table name. Never fails.

        Returns:
            Tuple of (entry, used_default)
        """
        name = table_name if isinstance(table_name, str) else str(table_name)

        key = name if name in self.entries else None
        if key is None:
            lowered = name.lower()
            key = next((k for k in self.entries if k.lower() == lowered), DEFAULT_KEY)

        return self.entries[key], key == DEFAULT_KEY

    def merge(self, new_entries: Mapping[str, Union[TableMappingEntry, dict]]) -> "TableMapping":
        """
        Overlay new entries onto this mapping.

        Per-key replacement; keys missing from new_entries are kept.

        Returns:
            A new TableMapping with version incremented

        Raises:
            ValueError: If an entry has no index
        """
        merged = dict(self.entries)
        for name, value in (new_entries or {}).items():
            merged[name] = TableMappingEntry.from_value(name, value)

        return TableMapping(entries=MappingProxyType(merged), version=self.version + 1)

    def to_dict(self) -> dict:
        return {name: entry.to_dict() for name, entry in self.entries.items()}

    def discover(self, table_name: Optional[str] = None) -> dict[str, str]:
        """Discovery SPL for a table; see generate_discovery_queries()."""
        return generate_discovery_queries(table_name)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, table_name: str) -> bool:
        return table_name in self.entries


def load_mapping_file(path: Path) -> Optional[dict]:
    """
    Read a custom mapping file (JSON or YAML).

    Returns:
        The raw mapping, or None if the file does not exist or is invalid
    """
    path = Path(path)
    if not path.exists():
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(f) or {}
            else:
                data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load custom mappings from {path}: {e}")
        return None

    if not isinstance(data, dict):
        logger.warning(f"Custom mappings in {path} must be an object keyed by table name")
        return None

    logger.info(f"Loaded custom mappings from {path} ({len(data)} entries)")
    return data


# =============================================================================
# DISCOVERY QUERIES
# =============================================================================

def search_keywords_for_table(table_name: str) -> list[str]:
    """Keywords used to find a table's events; falls back to the table name."""
    return list(TABLE_SEARCH_KEYWORDS.get(table_name, [table_name]))


def generate_discovery_queries(table_name: Optional[str] = None) -> dict[str, str]:
    """
    Generate SPL queries that help locate a KQL table's data in Splunk.

    Args:
        table_name: KQL table to look for, or None for general discovery

    Returns:
        Dict of query name -> SPL query
    """
    queries = {}

    if table_name:
        keywords = " OR ".join(search_keywords_for_table(table_name))
        queries[f"find_{table_name}"] = (
            f"index=* ({keywords})\n"
            "| stats count by index, sourcetype\n"
            "| sort -count\n"
            "| head 10"
        )
        queries[f"sample_{table_name}"] = (
            f"index=* ({keywords})\n"
            "| head 5\n"
            "| table _time, index, sourcetype, _raw"
        )
    else:
        queries["all_azure_data"] = (
            "index=* (azure OR entra OR microsoft OR defender OR office365)\n"
            "| stats count by index, sourcetype\n"
            "| sort -count"
        )
        queries["all_indexes"] = (
            "| eventcount summarize=false index=*\n"
            "| dedup index\n"
            "| table index"
        )
        queries["all_sourcetypes"] = (
            "| metadata type=sourcetypes\n"
            "| table sourcetype, totalCount, lastTime"
        )
        queries["eventhub_data"] = (
            "index=* source=*eventhub* OR sourcetype=*eventhub* OR sourcetype=*azure*\n"
            "| stats count by index, sourcetype, source\n"
            "| sort -count"
        )

    return queries
