"""
Translator Package
==================

Bidirectional SPL <-> KQL query translation, validation and explanation.

Usage:
    from kql_spl_translator.translator import QueryTranslator

    translator = QueryTranslator()
    result = translator.translate("index=main | stats count by host", "spl", "kql")
    print(result.translated_query)

    print(translator.explain_query("SecurityEvent | take 10", "kql"))
"""

from kql_spl_translator.translator.config import TranslatorConfig, DEFAULT_CONFIG_PATH
from kql_spl_translator.translator.models import (
    QueryLanguage,
    TranslationResult,
    UnsupportedLanguageError,
    UnsupportedTranslationError,
    ValidationResult,
)
from kql_spl_translator.translator.engine import QueryTranslator
from kql_spl_translator.translator.cli import main

__all__ = [
    "QueryTranslator",
    "TranslationResult",
    "ValidationResult",
    "QueryLanguage",
    "TranslatorConfig",
    "UnsupportedLanguageError",
    "UnsupportedTranslationError",
    "DEFAULT_CONFIG_PATH",
    "main",
]
