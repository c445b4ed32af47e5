"""
Confidence Scoring
==================

Deterministic 0-100 estimate of translation fidelity.
"""

from kql_spl_translator.translator.models import ValidationResult

ERROR_PENALTY = 20
WARNING_PENALTY = 5
ISSUE_NOTE_PENALTY = 10

# Notes containing any of these mark a degraded translation
ISSUE_MARKERS = ("Unknown", "manual", "WARNING")


def is_issue_note(note: str) -> bool:
    return any(marker in note for marker in ISSUE_MARKERS)


def calculate_confidence(
    input_validation: ValidationResult,
    output_validation: ValidationResult,
    notes: list[str],
) -> int:
    """
    Score a translation.

    Starts at 100 and subtracts 20 per error and 5 per warning on both the
    input and the output, and 10 per note flagging an unknown construct or a
    manual adjustment.

    Returns:
        Integer clamped to [0, 100]
    """
    score = 100

    score -= len(input_validation.errors) * ERROR_PENALTY
    score -= len(input_validation.warnings) * WARNING_PENALTY

    score -= len(output_validation.errors) * ERROR_PENALTY
    score -= len(output_validation.warnings) * WARNING_PENALTY

    score -= sum(1 for note in notes if is_issue_note(note)) * ISSUE_NOTE_PENALTY

    return max(0, min(100, score))
