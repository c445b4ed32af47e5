"""
Translator Data Models
======================

Result models, language enum and request errors for the query translator.
"""

from dataclasses import dataclass, field
from enum import Enum


class UnsupportedTranslationError(ValueError):
    """Raised when no translator exists for a (from, to) language pair."""
    pass


class UnsupportedLanguageError(ValueError):
    """Raised when a query language is not SPL or KQL."""
    pass


class QueryLanguage(str, Enum):
    """Supported query languages.

    Extends str for JSON serialization compatibility across API boundaries.
    """
    SPL = "spl"
    KQL = "kql"

    @classmethod
    def parse(cls, value: str) -> "QueryLanguage":
        """Parse a language name case-insensitively."""
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnsupportedLanguageError(f"Unsupported language: {value}") from None


@dataclass
class ValidationResult:
    """Errors (hard) and warnings (soft) found in a query."""
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return len(self.errors) == 0

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


@dataclass
class TranslationResult:
    """Result of translating one query."""
    original_query: str
    translated_query: str
    input_validation: ValidationResult
    output_validation: ValidationResult
    source_language: QueryLanguage
    target_language: QueryLanguage

    # Every non-trivial decision and every unmapped construct, in order
    translation_notes: list[str] = field(default_factory=list)

    # 0-100
    confidence: int = 100

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        input_validation = self.input_validation.to_dict()
        output_validation = self.output_validation.to_dict()
        return {
            "original_query": self.original_query,
            "translated_query": self.translated_query,
            "source_language": self.source_language.value,
            "target_language": self.target_language.value,
            "input_validation": input_validation,
            "output_validation": output_validation,
            "translation_notes": list(self.translation_notes),
            "confidence": self.confidence,
            "validation": {
                "input": input_validation,
                "output": output_validation,
            },
        }

    def format_output(self) -> str:
        """Format result for display."""
        lines = [
            "=" * 70,
            f"{self.source_language.value.upper()} -> {self.target_language.value.upper()} TRANSLATION",
            "=" * 70,
            "",
            f"Confidence: {self.confidence}%",
            "",
            "--- TRANSLATED QUERY ---",
            "",
            self.translated_query,
        ]

        if self.translation_notes:
            lines.extend(["", "--- NOTES ---"])
            for note in self.translation_notes:
                lines.append(f"  - {note}")

        for label, validation in (("INPUT", self.input_validation), ("OUTPUT", self.output_validation)):
            if validation.errors or validation.warnings:
                lines.extend(["", f"--- {label} VALIDATION ---"])
                for e in validation.errors:
                    lines.append(f"  [ERROR] {e}")
                for w in validation.warnings:
                    lines.append(f"  [WARNING] {w}")

        lines.append("")
        lines.append("=" * 70)

        return "\n".join(lines)
