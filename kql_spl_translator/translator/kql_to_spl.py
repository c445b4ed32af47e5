"""
KQL -> SPL Translation
======================

Translates a KQL query into an SPL search.

The table reference is resolved to an index/sourcetype through the table
mapping. where clauses are appended inline, never as a new pipe segment, so
they filter the search itself only before any other operator; the remaining
operators become piped SPL commands.

This is not the inverse of the SPL -> KQL direction: the SPL head is parsed
into structured filters while the KQL head is a single table lookup, so a
round trip does not reproduce the original query.
"""

import logging
from enum import Enum
from typing import Optional

from kql_spl_translator.table_mapping import TableMapping
from kql_spl_translator.translator.extractors import (
    extract_order_by,
    extract_project_rename_pair,
)
from kql_spl_translator.translator.stages import split_stages, stage_args, stage_verb

logger = logging.getLogger(__name__)


class KqlOperator(Enum):
    """KQL operators with a specific SPL rewrite rule."""
    WHERE = "where"
    SUMMARIZE = "summarize"
    EXTEND = "extend"
    PROJECT = "project"
    PROJECT_AWAY = "project-away"
    PROJECT_RENAME = "project-rename"
    ORDER = "order"
    TAKE = "take"
    DISTINCT = "distinct"
    MV_EXPAND = "mv-expand"
    PARSE = "parse"
    OTHER = "other"

    @classmethod
    def from_operator(cls, operator: str) -> "KqlOperator":
        operator = _OPERATOR_ALIASES.get(operator, operator)
        try:
            return cls(operator)
        except ValueError:
            return cls.OTHER


# KQL synonyms
_OPERATOR_ALIASES = {
    "sort": "order",
    "limit": "take",
}


def normalize_comparison(expression: str) -> str:
    """KQL equality (==) to SPL equality (=)."""
    return expression.replace("==", "=")


# =============================================================================
# HEAD STAGE
# =============================================================================

def translate_table_reference(table_name: str, table_mapping: TableMapping, notes: list[str]) -> str:
    """
    Resolve the KQL table to a Splunk index/sourcetype search.

    Args:
        table_name: First stage of the KQL query
        table_mapping: Mapping captured for this translation
        notes: Translation notes (appended to)

    Returns:
        SPL search head, e.g. 'index=windows sourcetype="WinEventLog:Security"'
    """
    entry, used_default = table_mapping.resolve(table_name)

    if entry.sourcetype:
        spl = f'index={entry.index} sourcetype="{entry.sourcetype}"'
        notes.append(
            f'Mapped table "{table_name}" to index="{entry.index}" '
            f'sourcetype="{entry.sourcetype}" ({entry.note})'
        )
    else:
        spl = f"index={entry.index}"
        notes.append(f'Mapped table "{table_name}" to index="{entry.index}" ({entry.note})')

    if used_default:
        logger.warning(f"No table mapping for '{table_name}', using default index '{entry.index}'")
        notes.append(
            f'WARNING: Unknown table "{table_name}" - using default index. '
            "Please verify index/sourcetype in your Splunk environment!"
        )

    return spl


# =============================================================================
# OPERATOR RULES
# =============================================================================

def _translate_project_rename(args: str) -> str:
    pair = extract_project_rename_pair(args)
    if pair:
        new, old = pair
        return f" | rename {old} as {new}"
    return f" | rename {args}"


def _translate_order(args: str) -> str:
    order_by = extract_order_by(args)
    if order_by:
        name, direction = order_by
        prefix = "-" if direction == "desc" else "+"
        return f" | sort {prefix}{name}"
    return f" | sort {args}"


def translate_operator(stage: str, operator: str, inline: bool, notes: list[str]) -> str:
    """
    Translate one KQL operator stage to SPL.

    Args:
        stage: Full stage text, e.g. "summarize count() by Computer"
        operator: Leading operator name
        inline: True while a where clause still filters the search itself
        notes: Translation notes (appended to)

    Returns:
        SPL fragment to append; piped commands carry their leading " | "
    """
    args = stage_args(stage, operator)
    kind = KqlOperator.from_operator(operator)

    if kind is KqlOperator.WHERE:
        if not inline:
            notes.append("where after a piped command is appended to that command - requires manual adjustment")
        return f" {normalize_comparison(args)}"
    elif kind is KqlOperator.SUMMARIZE:
        return f" | stats {args}"
    elif kind is KqlOperator.EXTEND:
        return f" | eval {args}"
    elif kind is KqlOperator.PROJECT:
        return f" | fields {args}"
    elif kind is KqlOperator.PROJECT_AWAY:
        return f" | fields - {args}"
    elif kind is KqlOperator.PROJECT_RENAME:
        return _translate_project_rename(args)
    elif kind is KqlOperator.ORDER:
        return _translate_order(args)
    elif kind is KqlOperator.TAKE:
        return f" | head {args}"
    elif kind is KqlOperator.DISTINCT:
        return f" | dedup {args}"
    elif kind is KqlOperator.MV_EXPAND:
        return f" | mvexpand {args}"
    elif kind is KqlOperator.PARSE:
        notes.append("parse requires manual adjustment for regex patterns")
        return f" | rex {args}"

    notes.append(f"Unknown KQL operator: {operator}")
    return f" | {stage} /* WARNING: Manual translation needed */"


# =============================================================================
# QUERY
# =============================================================================

def translate_kql_query(query: str, table_mapping: TableMapping, notes: Optional[list[str]] = None) -> str:
    """
    Translate a KQL query to SPL.

    Args:
        query: KQL query
        table_mapping: Mapping captured for this translation
        notes: Translation notes (appended to)

    Returns:
        SPL query
    """
    notes = notes if notes is not None else []
    stages = split_stages(query)

    spl = translate_table_reference(stages[0], table_mapping, notes)

    # where is always appended inline; it only filters the search before any other operator
    inline = True
    for stage in stages[1:]:
        operator = stage_verb(stage)
        spl += translate_operator(stage, operator, inline, notes)
        if KqlOperator.from_operator(operator) is not KqlOperator.WHERE:
            inline = False

    logger.debug(f"KQL->SPL: {len(stages)} stages, {len(notes)} notes")
    return spl
