"""
Translator CLI Interface
========================

Command-line interface for the query translator.
"""

import json
import logging
import sys

from kql_spl_translator.doc_refresher import DocRefresher
from kql_spl_translator.translator.config import TranslatorConfig
from kql_spl_translator.translator.engine import QueryTranslator

USAGE = """
KQL-SPL Translator
==================

Usage:
    kql-spl-translator translate --from <lang> --to <lang> "<query>"
    kql-spl-translator spl2kql "<query>"          Translate SPL to KQL
    kql-spl-translator kql2spl "<query>"          Translate KQL to SPL
    kql-spl-translator explain --language <lang> "<query>"
    kql-spl-translator mappings                   Show table mappings
    kql-spl-translator discover [table]           Splunk data discovery queries
    kql-spl-translator refresh [status]           Reference refresh tracking
    kql-spl-translator serve [--local]            Run the HTTP API

Options:
    --json            Print results as JSON

Examples:
    kql-spl-translator spl2kql "index=main | stats count by host"
    kql-spl-translator kql2spl "SecurityEvent | where EventID == 4625 | take 10"
    kql-spl-translator explain --language kql "SigninLogs | summarize count() by UserPrincipalName"
    kql-spl-translator discover SecurityEvent
"""


def _parse_args(args: list[str]) -> tuple[dict, list[str]]:
    """Split --key value options from positional arguments."""
    options = {}
    positional = []
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--json":
            options["json"] = True
        elif arg == "--local":
            options["local"] = True
        elif arg in ("--from", "-f", "--to", "-t", "--language", "-l") and i + 1 < len(args):
            key = {"-f": "from", "-t": "to", "-l": "language"}.get(arg, arg.lstrip("-"))
            options[key] = args[i + 1]
            i += 1
        else:
            positional.append(arg)
        i += 1
    return options, positional


def _print_result(result, as_json: bool):
    if as_json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(result.format_output())


def _fail(message: str):
    print(f"Error: {message}")
    sys.exit(1)


def main():
    """CLI entry point."""
    if len(sys.argv) < 2:
        print(USAGE)
        sys.exit(0)

    command = sys.argv[1].lower()
    options, positional = _parse_args(sys.argv[2:])
    as_json = options.get("json", False)

    config = TranslatorConfig.from_yaml()
    logging.basicConfig(level=getattr(logging, str(config.log_level).upper(), logging.INFO))

    if command in ("-h", "--help", "help"):
        print(USAGE)

    elif command in ("translate", "spl2kql", "kql2spl"):
        if not positional:
            _fail('query required\nUsage: kql-spl-translator translate --from spl --to kql "<query>"')

        if command == "spl2kql":
            from_language, to_language = "spl", "kql"
        elif command == "kql2spl":
            from_language, to_language = "kql", "spl"
        else:
            from_language = options.get("from")
            to_language = options.get("to")
            if not from_language or not to_language:
                _fail("--from and --to are required")

        translator = QueryTranslator.from_config(config)
        try:
            result = translator.translate(positional[0], from_language, to_language)
        except ValueError as e:
            _fail(str(e))
        _print_result(result, as_json)

    elif command == "explain":
        language = options.get("language")
        if not positional or not language:
            _fail('query and --language required\nUsage: kql-spl-translator explain --language spl "<query>"')

        translator = QueryTranslator.from_config(config)
        try:
            print(translator.explain_query(positional[0], language))
        except ValueError as e:
            _fail(str(e))

    elif command == "mappings":
        translator = QueryTranslator.from_config(config)
        mapping = translator.get_table_mapping()
        if as_json:
            print(json.dumps(mapping, indent=2))
        else:
            print("\nKQL Table -> Splunk Index/Sourcetype")
            print("=" * 70)
            for table, entry in mapping.items():
                sourcetype = f' sourcetype="{entry["sourcetype"]}"' if entry["sourcetype"] else ""
                print(f"{table:<30} index={entry['index']}{sourcetype}")
            print("=" * 70)

    elif command == "discover":
        translator = QueryTranslator.from_config(config)
        queries = translator.generate_discovery_queries(positional[0] if positional else None)
        if as_json:
            print(json.dumps(queries, indent=2))
        else:
            for name, query in queries.items():
                print(f"\n--- {name} ---")
                print(query)
            print()

    elif command == "refresh":
        refresher = DocRefresher(config.refresh_state_path, config.refresh_interval_days)
        if positional and positional[0] == "status":
            result = refresher.get_status()
        else:
            result = refresher.refresh_all()
        print(json.dumps(result, indent=2))

    elif command == "serve":
        from kql_spl_translator.api.server import main as serve
        serve(local_only=options.get("local", False))

    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()
