#!/usr/bin/env python3
"""
Example: Translating Detection Queries
======================================

This example translates a few common detection queries in both directions
and prints the confidence score and notes for each.

Usage:
    python examples/translate_queries.py
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from kql_spl_translator import QueryTranslator


SPL_QUERIES = [
    "index=windows sourcetype=WinEventLog:Security EventCode=4625 | stats count by user, src | sort -count",
    "index=proxy earliest=-24h | spath input=body path=request.url output=url | table _time, url",
    "index=firewall action=blocked | timechart span=5m count by dest_port",
]

KQL_QUERIES = [
    "SecurityEvent | where EventID == 4625 | summarize count() by Account | order by count_ desc | take 10",
    "SigninLogs | where ResultType != 0 | project TimeGenerated, UserPrincipalName, IPAddress",
    "CustomTable_CL | project-rename user = UserName | take 5",
]


def main():
    """Translate the sample queries."""
    print("=" * 60)
    print("KQL-SPL Translator - Query Translation")
    print("=" * 60)
    print()

    translator = QueryTranslator()

    for query in SPL_QUERIES:
        result = translator.translate(query, "spl", "kql")
        print(result.format_output())
        print()

    for query in KQL_QUERIES:
        result = translator.translate(query, "kql", "spl")
        print(result.format_output())
        print()

    print("Explanation of the first KQL query:")
    print(translator.explain_query(KQL_QUERIES[0], "kql"))


if __name__ == "__main__":
    main()
