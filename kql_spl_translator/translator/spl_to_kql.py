"""
SPL -> KQL Translation
======================

Translates an SPL search into a KQL query.

Head stage:
    index=<table> sourcetype=<st> source=<src> earliest=<t> free text
    ->
    <table>
    | where TimeGenerated >= ago(<t>) and SourceType == "<st>" and Source == "<src>"
        and * contains "free" and * contains "text"

Command stages are dispatched on SplCommand. Commands known to the
vocabulary but without a specific rule use the vocabulary equivalent with
the original stage kept as a comment. Unknown commands are passed through
with a warning marker.
"""

import logging
from enum import Enum
from typing import Optional

from kql_spl_translator.vocabulary import VerbEntry, Vocabulary
from kql_spl_translator.translator.extractors import (
    earliest_to_timespan,
    extract_earliest,
    extract_field_filters,
    extract_index,
    extract_search_terms,
    extract_sort_field,
    extract_source,
    extract_sourcetype,
    extract_spath_args,
    extract_span,
    extract_rename_pair,
    index_to_table,
    split_by_clause,
    strip_quotes,
)
from kql_spl_translator.translator.stages import split_stages, stage_args, stage_verb

logger = logging.getLogger(__name__)

PLACEHOLDER_TABLE = "TableName"
DEFAULT_TIMECHART_SPAN = "1h"
SPATH_DEFAULT_INPUT = "dynamic_field"


class SplCommand(Enum):
    """SPL commands with a specific KQL rewrite rule."""
    STATS = "stats"
    EVAL = "eval"
    WHERE = "where"
    FIELDS = "fields"
    TABLE = "table"
    SORT = "sort"
    HEAD = "head"
    DEDUP = "dedup"
    RENAME = "rename"
    MVEXPAND = "mvexpand"
    SPATH = "spath"
    REX = "rex"
    TIMECHART = "timechart"
    OTHER = "other"

    @classmethod
    def from_verb(cls, verb: str) -> "SplCommand":
        try:
            return cls(verb)
        except ValueError:
            return cls.OTHER


# =============================================================================
# HEAD STAGE
# =============================================================================

def translate_search_head(head: str, notes: list[str]) -> str:
    """
    Translate the SPL search criteria into a KQL table reference and where clause.

    Args:
        head: First stage of the SPL query
        notes: Translation notes (appended to)

    Returns:
        KQL head, e.g. 'main\\n| where SourceType == "syslog"'
    """
    table = PLACEHOLDER_TABLE
    conditions = []

    raw_index = extract_index(head)
    if raw_index:
        table = index_to_table(raw_index)
        notes.append(f'Mapped index="{raw_index}" to table "{table}"')

    sourcetype = extract_sourcetype(head)
    if sourcetype:
        conditions.append(f'SourceType == "{strip_quotes(sourcetype)}"')

    source = extract_source(head)
    if source:
        conditions.append(f'Source == "{strip_quotes(source)}"')

    terms = extract_search_terms(head)
    if terms:
        conditions.append(" and ".join(f'* contains "{strip_quotes(term)}"' for term in terms))

    for field_filter in extract_field_filters(head):
        notes.append(f'Field filter "{field_filter}" not translated - requires manual adjustment')

    # Time filter goes first
    raw_earliest = extract_earliest(head)
    if raw_earliest:
        timespan = earliest_to_timespan(raw_earliest)
        conditions.insert(0, f"TimeGenerated >= ago({timespan})")
        notes.append(f"Translated earliest={strip_quotes(raw_earliest)} to ago()")

    kql = table
    if conditions:
        kql += "\n| where " + " and ".join(conditions)
    return kql


# =============================================================================
# COMMAND RULES
# =============================================================================

def _translate_fields(args: str) -> str:
    if args.startswith("+"):
        return f"project {args[1:].strip()}"
    if args.startswith("-"):
        return f"project-away {args[1:].strip()}"
    return f"project {args}"


def _translate_sort(args: str) -> str:
    sort_field = extract_sort_field(args)
    if sort_field:
        name, direction = sort_field
        return f"order by {name} {direction}"
    return f"order by {args}"


def _translate_rename(args: str) -> str:
    pair = extract_rename_pair(args)
    if pair:
        old, new = pair
        return f"project-rename {new} = {old}"
    return f"project-rename {args}"


def _translate_spath(args: str, notes: list[str]) -> str:
    spath = extract_spath_args(args)
    if spath:
        path = spath.path.replace("{}", "")
        notes.append(f"spath: Extracting {path} from JSON")
        return f"extend {spath.output} = tostring({spath.input or SPATH_DEFAULT_INPUT}.{path})"

    notes.append("spath requires manual adjustment for complex JSON parsing")
    return f"extend /* spath {args} - requires manual adjustment */"


def _translate_rex(args: str, notes: list[str]) -> str:
    notes.append("rex: Regular expression extraction may require manual adjustment")
    return f"parse /* {args} - requires manual regex adjustment */"


def _translate_timechart(args: str) -> str:
    span, remaining = extract_span(args)
    aggregations, group_by = split_by_clause(remaining)
    bucket = f"bin(TimeGenerated, {span or DEFAULT_TIMECHART_SPAN})"
    if group_by:
        return f"summarize {aggregations} by {bucket}, {group_by}"
    return f"summarize {remaining} by {bucket}"


def translate_command(stage: str, verb: str, entry: VerbEntry, notes: list[str]) -> str:
    """
    Translate one recognised SPL command stage to KQL.

    Args:
        stage: Full stage text, e.g. "stats count by host"
        verb: Leading command name
        entry: Vocabulary entry for the command
        notes: Translation notes (appended to)

    Returns:
        KQL stage without the leading pipe
    """
    args = stage_args(stage, verb)
    command = SplCommand.from_verb(verb)

    if command is SplCommand.STATS:
        return f"summarize {args}"
    elif command is SplCommand.EVAL:
        return f"extend {args}"
    elif command is SplCommand.WHERE:
        return f"where {args}"
    elif command is SplCommand.FIELDS:
        return _translate_fields(args)
    elif command is SplCommand.TABLE:
        return f"project {args}"
    elif command is SplCommand.SORT:
        return _translate_sort(args)
    elif command is SplCommand.HEAD:
        return f"take {args}"
    elif command is SplCommand.DEDUP:
        return f"distinct {args}"
    elif command is SplCommand.RENAME:
        return _translate_rename(args)
    elif command is SplCommand.MVEXPAND:
        return f"mv-expand {args}"
    elif command is SplCommand.SPATH:
        return _translate_spath(args, notes)
    elif command is SplCommand.REX:
        return _translate_rex(args, notes)
    elif command is SplCommand.TIMECHART:
        return _translate_timechart(args)

    notes.append(f"No specific translation for {verb}, using generic mapping")
    return f"{entry.equivalent} /* {stage} */"


# =============================================================================
# QUERY
# =============================================================================

def translate_spl_query(query: str, vocabulary: Vocabulary, notes: Optional[list[str]] = None) -> str:
    """
    Translate an SPL query to KQL.

    Args:
        query: SPL query
        vocabulary: Loaded vocabulary
        notes: Translation notes (appended to)

    Returns:
        KQL query
    """
    notes = notes if notes is not None else []
    stages = split_stages(query)

    kql = translate_search_head(stages[0], notes)

    for stage in stages[1:]:
        verb = stage_verb(stage)
        entry = vocabulary.spl_command(verb)

        if entry is None:
            kql += f"\n| {stage} // WARNING: Unknown SPL command"
            notes.append(f"Unknown command: {verb}")
            continue

        kql += f"\n| {translate_command(stage, verb, entry, notes)}"

    logger.debug(f"SPL->KQL: {len(stages)} stages, {len(notes)} notes")
    return kql
