"""
Query Explainer
===============

Describes an SPL or KQL query in plain English, one numbered line per stage.

Read-only: uses the vocabulary descriptions and never touches translator
state.

Example:
    explain_query("index=main error | stats count by host", QueryLanguage.SPL, vocabulary)
    This SPL query:
    1. Searches in the "main" index for events containing: "error"
    2. Calculates aggregate statistics over the results
"""

from kql_spl_translator.vocabulary import Vocabulary
from kql_spl_translator.translator.extractors import extract_free_text, extract_index
from kql_spl_translator.translator.models import QueryLanguage
from kql_spl_translator.translator.stages import split_stages, stage_verb


def describe_spl_head(head: str) -> str:
    """One sentence for the SPL search criteria."""
    raw_index = extract_index(head)
    free_text = extract_free_text(head)

    if raw_index and free_text:
        return f'Searches in the "{raw_index}" index for events containing: "{free_text}"'
    if raw_index:
        return f'Searches in the "{raw_index}" index'
    if free_text:
        return f'Searches all indexes for events containing: "{free_text}"'
    return "Starts from the results of a generating command"


def explain_spl(query: str, vocabulary: Vocabulary) -> str:
    stages = split_stages(query)
    lines = ["This SPL query:", f"1. {describe_spl_head(stages[0])}"]

    for i, stage in enumerate(stages[1:], 1):
        verb = stage_verb(stage)
        entry = vocabulary.spl_command(verb)
        if entry:
            lines.append(f"{i + 1}. {entry.description or verb}")
        else:
            lines.append(f"{i + 1}. Executes: {stage}")

    return "\n".join(lines) + "\n"


def explain_kql(query: str, vocabulary: Vocabulary) -> str:
    stages = split_stages(query)
    lines = ["This KQL query:", f'1. Queries the "{stages[0]}" table']

    for i, stage in enumerate(stages[1:], 1):
        operator = stage_verb(stage)
        entry = vocabulary.kql_operator(operator)
        if entry:
            lines.append(f"{i + 1}. {entry.description or operator}")
        else:
            lines.append(f"{i + 1}. Applies: {stage}")

    return "\n".join(lines) + "\n"


def explain_query(query: str, language: QueryLanguage, vocabulary: Vocabulary) -> str:
    """
    Explain a query.

    Args:
        query: Query text
        language: Language of the query
        vocabulary: Loaded vocabulary

    Returns:
        Multi-line explanation
    """
    if language is QueryLanguage.SPL:
        return explain_spl(query, vocabulary)
    return explain_kql(query, vocabulary)
