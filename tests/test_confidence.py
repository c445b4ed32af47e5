from kql_spl_translator.translator.confidence import calculate_confidence, is_issue_note
from kql_spl_translator.translator.models import ValidationResult


def test_clean_translation_scores_100():
    assert calculate_confidence(ValidationResult(), ValidationResult(), ['Mapped index="main" to table "main"']) == 100


def test_penalties():
    input_validation = ValidationResult(errors=["e"], warnings=["w"])
    output_validation = ValidationResult(warnings=["w", "w"])
    notes = ["Unknown command: foo", "parse requires manual adjustment for regex patterns", "fine"]
    assert calculate_confidence(input_validation, output_validation, notes) == 100 - 20 - 5 - 10 - 20


def test_score_is_clamped_at_zero():
    many_errors = ValidationResult(errors=["e"] * 10)
    assert calculate_confidence(many_errors, many_errors, []) == 0


def test_adding_issues_never_raises_the_score():
    notes = []
    previous = calculate_confidence(ValidationResult(), ValidationResult(), notes)
    for i in range(15):
        notes.append(f"WARNING: issue {i}")
        score = calculate_confidence(ValidationResult(), ValidationResult(), notes)
        assert 0 <= score <= previous
        previous = score


def test_issue_markers_are_case_sensitive():
    assert is_issue_note("Unknown KQL operator: render")
    assert is_issue_note("requires manual adjustment")
    assert not is_issue_note("unknown lowercase")
    assert not is_issue_note("Manual with capital")
