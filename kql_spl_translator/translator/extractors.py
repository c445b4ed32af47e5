"""
Predicate Extraction
====================

Small pattern-matching extractors for the structured parts of SPL search
heads and command arguments. Each function takes the raw text and returns
only what it matched (or None), so they can be tested on their own.

SPL head extractors:
    extract_index("index=main foo")           -> "main"
    extract_sourcetype('sourcetype="x:y"')    -> '"x:y"'
    extract_source("source=/var/log/a")       -> "/var/log/a"
    extract_earliest("earliest=-24h")         -> "-24h"
    extract_search_terms("index=main a b=1 c") -> ["a", "c"]
    extract_field_filters("index=main b=1")    -> ["b=1"]

Argument extractors:
    extract_spath_args("path=a.b output=c")   -> SpathArgs(path="a.b", output="c", input=None)
    extract_span("span=5m count")             -> ("5m", "count")
    extract_rename_pair("old as new")         -> ("old", "new")
    extract_project_rename_pair("new = old")  -> ("new", "old")
    extract_order_by("by count desc")         -> ("count", "desc")
"""

import re
from dataclasses import dataclass
from typing import Optional


# =============================================================================
# PATTERNS
# =============================================================================

INDEX_PATTERN = re.compile(r'\bindex=(\S+)')
SOURCETYPE_PATTERN = re.compile(r'\bsourcetype=(\S+)')
SOURCE_PATTERN = re.compile(r'\bsource=(\S+)')
EARLIEST_PATTERN = re.compile(r'\bearliest=(-?\d+[smhd]|"[^"]+"|\S+)')

# key=value tokens consumed by the head translation
HEAD_KEYS = ("index", "source", "sourcetype", "earliest")

SPATH_PATH_PATTERN = re.compile(r'\bpath=(\S+)')
SPATH_OUTPUT_PATTERN = re.compile(r'\boutput=(\S+)')
SPATH_INPUT_PATTERN = re.compile(r'\binput=(\S+)')

SPAN_PATTERN = re.compile(r'\bspan=(\S+)')
BY_PATTERN = re.compile(r'\s+by\s+', re.IGNORECASE)

RENAME_PATTERN = re.compile(r'(\S+)\s+as\s+(\S+)', re.IGNORECASE)
PROJECT_RENAME_PATTERN = re.compile(r'(\S+)\s*=\s*(\S+)')
ORDER_BY_PATTERN = re.compile(r'\bby\s+(\S+)\s*(asc|desc)?')

SORT_DESC_PATTERN = re.compile(r'^-(\S+)')
SORT_ASC_PATTERN = re.compile(r'^\+?(\S+)')


def strip_quotes(value: str) -> str:
    return value.replace('"', "")


# =============================================================================
# SPL HEAD EXTRACTORS
# =============================================================================

def extract_index(head: str) -> Optional[str]:
    """Raw value of the first index= term, or None."""
    match = INDEX_PATTERN.search(head)
    return match.group(1) if match else None


def index_to_table(raw_index: str) -> str:
    """Table name for an index value (wildcards and quotes removed)."""
    return re.sub(r'[*"]', "", raw_index)


def extract_sourcetype(head: str) -> Optional[str]:
    """Raw value of the first sourcetype= term, or None."""
    match = SOURCETYPE_PATTERN.search(head)
    return match.group(1) if match else None


def extract_source(head: str) -> Optional[str]:
    """Raw value of the first source= term, or None. Never matches sourcetype=."""
    match = SOURCE_PATTERN.search(head)
    return match.group(1) if match else None


def extract_earliest(head: str) -> Optional[str]:
    """Raw value of the earliest= time modifier, or None."""
    match = EARLIEST_PATTERN.search(head)
    return match.group(1) if match else None


def earliest_to_timespan(raw_earliest: str) -> str:
    """Relative time for ago(): quotes removed and the leading '-' dropped."""
    return strip_quotes(raw_earliest).replace("-", "", 1)


def _without_log_source_terms(head: str) -> str:
    for pattern in (INDEX_PATTERN, SOURCETYPE_PATTERN, SOURCE_PATTERN):
        head = pattern.sub("", head)
    return head.strip()


def extract_search_terms(head: str) -> list[str]:
    """Free-text tokens of a search head (anything that is not key=value)."""
    return [
        token for token in _without_log_source_terms(head).split()
        if "=" not in token
    ]


def extract_field_filters(head: str) -> list[str]:
    """key=value tokens of a search head that the head translation does not consume."""
    filters = []
    for token in _without_log_source_terms(head).split():
        if "=" not in token:
            continue
        key = token.split("=", 1)[0]
        if key not in HEAD_KEYS:
            filters.append(token)
    return filters


def extract_free_text(head: str) -> str:
    """Everything left in the head once index/source/sourcetype terms are removed."""
    return _without_log_source_terms(head)


# =============================================================================
# ARGUMENT EXTRACTORS
# =============================================================================

@dataclass
class SpathArgs:
    """Arguments of an spath invocation."""
    path: str
    output: str
    input: Optional[str] = None


def extract_spath_args(args: str) -> Optional[SpathArgs]:
    """path= and output= (input= optional); None unless both are present."""
    path_match = SPATH_PATH_PATTERN.search(args)
    output_match = SPATH_OUTPUT_PATTERN.search(args)
    if not (path_match and output_match):
        return None

    input_match = SPATH_INPUT_PATTERN.search(args)
    return SpathArgs(
        path=path_match.group(1),
        output=output_match.group(1),
        input=input_match.group(1) if input_match else None,
    )


def extract_span(args: str) -> tuple[Optional[str], str]:
    """
    Split the span= option out of timechart arguments.

    Returns:
        Tuple of (span or None, remaining arguments)
    """
    match = SPAN_PATTERN.search(args)
    if not match:
        return None, args.strip()
    remaining = SPAN_PATTERN.sub("", args, count=1)
    return match.group(1), " ".join(remaining.split())


def split_by_clause(args: str) -> tuple[str, Optional[str]]:
    """Split 'aggs by fields' into (aggs, fields); fields is None without a by clause."""
    parts = BY_PATTERN.split(" " + args.strip(), maxsplit=1)
    if len(parts) < 2:
        return args.strip(), None
    return parts[0].strip(), parts[1].strip()


def extract_rename_pair(args: str) -> Optional[tuple[str, str]]:
    """SPL 'old as new' -> (old, new)."""
    match = RENAME_PATTERN.search(args)
    return (match.group(1), match.group(2)) if match else None


def extract_project_rename_pair(args: str) -> Optional[tuple[str, str]]:
    """KQL 'new = old' -> (new, old)."""
    match = PROJECT_RENAME_PATTERN.search(args)
    return (match.group(1), match.group(2)) if match else None


def extract_order_by(args: str) -> Optional[tuple[str, Optional[str]]]:
    """KQL 'by field [asc|desc]' -> (field, direction or None)."""
    match = ORDER_BY_PATTERN.search(args)
    return (match.group(1), match.group(2)) if match else None


def extract_sort_field(args: str) -> Optional[tuple[str, str]]:
    """SPL sort argument -> (field, 'asc'|'desc'); a leading '-' means descending."""
    match = SORT_DESC_PATTERN.match(args)
    if match:
        return match.group(1), "desc"
    match = SORT_ASC_PATTERN.match(args)
    if match:
        return match.group(1), "asc"
    return None
