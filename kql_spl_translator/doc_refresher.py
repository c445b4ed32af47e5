"""
Reference Refresh Tracking
==========================

Tracks when the SPL and KQL reference documents were last refreshed.

Refreshing is a manual step: the reference JSON files are regenerated from
the official documentation outside this tool. This module only records
refresh attempts, reports which references are stale, and returns the
instructions for the manual refresh. It does no network access and no
translation work.

Commands:
    kql-spl-translator refresh           # Record a refresh of both references
    kql-spl-translator refresh status    # Show refresh status
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

SPLUNK_SOURCES = [
    "https://www.splunk.com/en_us/pdfs/solution-guide/splunk-quick-reference-guide.pdf",
    "https://docs.splunk.com/Documentation/Splunk/latest/SearchReference/",
]

KQL_SOURCES = [
    "https://learn.microsoft.com/en-us/kusto/query/kql-quick-reference",
    "https://learn.microsoft.com/en-us/azure/data-explorer/kusto/query/",
]


def default_state() -> dict:
    return {
        "last_splunk_update": None,
        "last_kql_update": None,
        "splunk_sources": list(SPLUNK_SOURCES),
        "kql_sources": list(KQL_SOURCES),
        "auto_refresh_enabled": True,
    }


class DocRefresher:
    """Records reference refresh timestamps in a JSON state file."""

    def __init__(self, state_path: Path, refresh_interval_days: int = 7):
        self.state_path = Path(state_path)
        self.refresh_interval_days = refresh_interval_days
        self.refresh_interval = timedelta(days=refresh_interval_days)

    def load_state(self) -> dict:
        """Load the refresh state, falling back to defaults when missing or unreadable."""
        state = default_state()
        if not self.state_path.exists():
            return state

        try:
            with open(self.state_path, "r") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read refresh state {self.state_path}: {e}")
            return state

        if not isinstance(data, dict):
            logger.warning(f"Ignoring refresh state {self.state_path}: expected a JSON object")
            return state

        state.update(data)
        return state

    def save_state(self, state: dict):
        self.state_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.state_path, "w") as f:
            json.dump(state, f, indent=2)

    def needs_refresh(self, last_update: Optional[str], now: Optional[datetime] = None) -> bool:
        """True if never refreshed, the timestamp is unparsable, or it is older than the interval."""
        if not last_update:
            return True
        try:
            updated = datetime.fromisoformat(last_update)
        except (TypeError, ValueError):
            return True
        if updated.tzinfo is None:
            updated = updated.replace(tzinfo=timezone.utc)
        now = now or datetime.now(timezone.utc)
        return now - updated > self.refresh_interval

    def _record_refresh(self, key: str) -> str:
        timestamp = datetime.now(timezone.utc).isoformat()
        state = self.load_state()
        state[key] = timestamp
        self.save_state(state)
        return timestamp

    def refresh_kql_reference(self) -> dict:
        """Record a KQL reference refresh and return the manual refresh instructions."""
        logger.info("Recording KQL reference refresh")
        timestamp = self._record_refresh("last_kql_update")
        return {
            "success": False,
            "message": "Manual refresh required: regenerate kql_reference.json from Microsoft Learn",
            "instructions": {
                "method": "Documentation search",
                "sources": list(KQL_SOURCES),
                "topics": [
                    "KQL tabular operators where extend project summarize",
                    "KQL scalar functions string datetime conversion",
                    "KQL aggregation functions count sum avg",
                    "KQL mv-expand parse extract operators",
                ],
                "note": "Results should be merged into kql_reference.json under 'kql_operators'",
            },
            "timestamp": timestamp,
        }

    def refresh_splunk_reference(self) -> dict:
        """Record a Splunk reference refresh and return the manual refresh instructions."""
        logger.info("Recording Splunk reference refresh")
        timestamp = self._record_refresh("last_splunk_update")
        return {
            "success": False,
            "message": "Manual refresh required: regenerate splunk_reference.json from the Search Reference",
            "instructions": {
                "method": "PDF or web page parsing",
                "sources": list(SPLUNK_SOURCES),
                "note": "Results should be merged into splunk_reference.json under 'spl_commands'",
            },
            "timestamp": timestamp,
        }

    def refresh_all(self) -> dict:
        return {
            "kql": self.refresh_kql_reference(),
            "splunk": self.refresh_splunk_reference(),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    def get_status(self) -> dict:
        """Refresh status for both references."""
        state = self.load_state()
        last_kql = state.get("last_kql_update")

        next_refresh = "Not scheduled"
        if last_kql:
            try:
                next_refresh = (datetime.fromisoformat(last_kql) + self.refresh_interval).isoformat()
            except (TypeError, ValueError):
                pass

        return {
            "auto_refresh_enabled": state.get("auto_refresh_enabled", True),
            "refresh_interval_days": self.refresh_interval_days,
            "last_kql_update": last_kql,
            "last_splunk_update": state.get("last_splunk_update"),
            "kql_needs_refresh": self.needs_refresh(last_kql),
            "splunk_needs_refresh": self.needs_refresh(state.get("last_splunk_update")),
            "next_scheduled_refresh": next_refresh,
        }
