"""
Stage Splitter
==============

Splits a pipeline query into its `|`-delimited stages.

Quoting is not interpreted: a literal `|` inside a string literal splits the
query. This is a known limitation of the lexical approach.
"""

import re

PIPE = "|"

_WHITESPACE = re.compile(r"\s+")


def join_lines(query: str) -> str:
    """Trim each line, drop empty ones and join the rest with a single space."""
    return " ".join(line.strip() for line in query.splitlines() if line.strip())


def split_stages(query: str) -> list[str]:
    """
    Split a query into trimmed stages.

    The head stage (index 0) is always present, even when empty. Empty
    stages after the head (from `||` runs or a trailing pipe) are dropped.

    Args:
        query: Raw query, possibly multi-line

    Returns:
        List of stages; stage[0] is the head
    """
    pieces = [piece.strip() for piece in join_lines(query).split(PIPE)]
    return [pieces[0]] + [piece for piece in pieces[1:] if piece]


def stage_verb(stage: str) -> str:
    """Leading token of a stage (the command or operator name)."""
    tokens = _WHITESPACE.split(stage.strip(), maxsplit=1)
    return tokens[0] if tokens else ""


def stage_args(stage: str, verb: str = None) -> str:
    """Everything after the verb, stripped."""
    stage = stage.strip()
    if verb is None:
        verb = stage_verb(stage)
    return stage[len(verb):].strip()
