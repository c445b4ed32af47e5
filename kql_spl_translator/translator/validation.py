"""
Query Validation
================

Lightweight structural checks for SPL and KQL queries.

These are lexical checks only (pipe presence, leading token, verb
recognition); they do not parse expressions. Validation never raises:
findings are returned as errors (hard) and warnings (soft). When no
vocabulary is supplied the verb recognition checks are skipped.
"""

from typing import Mapping, Optional

from kql_spl_translator.translator.models import ValidationResult
from kql_spl_translator.translator.stages import PIPE, stage_verb

# Leading tokens that start an SPL search rather than name a command
SPL_SEARCH_PREFIXES = ("index=", "source=", "sourcetype=")

# A query without pipes is still fine if it starts with one of these
SPL_PIPELESS_PREFIXES = ("index=", "source=")


def validate_spl(query: str, spl_commands: Optional[Mapping] = None) -> ValidationResult:
    """
    Validate an SPL query.

    Args:
        query: The SPL query
        spl_commands: Known SPL commands; None skips command recognition

    Returns:
        ValidationResult
    """
    result = ValidationResult()

    if PIPE not in query and not query.startswith(SPL_PIPELESS_PREFIXES):
        result.warnings.append("Query may be missing pipe character for chaining commands")

    if spl_commands is None:
        return result

    for segment in query.split(PIPE):
        segment = segment.strip()
        if not segment:
            continue

        command = stage_verb(segment)
        if command not in spl_commands and not command.startswith(SPL_SEARCH_PREFIXES):
            result.warnings.append(f"Unknown SPL command: {command}")

    return result


def validate_kql(query: str, kql_operators: Optional[Mapping] = None) -> ValidationResult:
    """
    Validate a KQL query.

    Args:
        query: The KQL query
        kql_operators: Known KQL operators; None skips operator recognition

    Returns:
        ValidationResult
    """
    result = ValidationResult()

    if PIPE not in query:
        result.warnings.append("Query may be missing pipe character for chaining operators")

    lines = [line.strip() for line in query.splitlines() if line.strip()]
    if lines and lines[0].startswith(PIPE):
        result.errors.append("KQL query must start with a table name, not a pipe")

    if kql_operators is None:
        return result

    # First segment is the table reference
    for segment in query.split(PIPE)[1:]:
        segment = segment.strip()
        if not segment:
            continue

        operator = stage_verb(segment)
        if operator not in kql_operators:
            result.warnings.append(f"Unknown KQL operator: {operator}")

    return result
