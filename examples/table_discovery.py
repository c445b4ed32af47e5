#!/usr/bin/env python3
"""
Example: Locating KQL Table Data in Splunk
==========================================

This example shows how to generate discovery queries for a KQL table,
install custom table mappings, and see how they change a translation.

Usage:
    python examples/table_discovery.py
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from kql_spl_translator import QueryTranslator


def main():
    """Demonstrate discovery queries and custom mappings."""
    print("=" * 60)
    print("KQL-SPL Translator - Table Discovery")
    print("=" * 60)
    print()

    translator = QueryTranslator()
    query = "SigninLogs | where ResultType != 0 | take 20"

    # Paste these into Splunk to find where the sign-in data lives
    for name, spl in translator.generate_discovery_queries("SigninLogs").items():
        print(f"--- {name} ---")
        print(spl)
        print()

    print("Before custom mapping:")
    print(translator.translate_kql_to_spl(query).translated_query)
    print()

    translator.set_table_mapping({
        "SigninLogs": {
            "index": "azure",
            "sourcetype": "mscs:azure:eventhub",
            "note": "Ingested through Event Hub",
        },
    })

    print("After custom mapping:")
    print(translator.translate_kql_to_spl(query).translated_query)


if __name__ == "__main__":
    main()
