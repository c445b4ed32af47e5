"""
KQL-SPL Translator
==================

Translates search queries between Splunk SPL and Kusto KQL in both
directions, validates them, and explains them in plain English.

Main Components:
    - QueryTranslator: Translation facade (SPL->KQL, KQL->SPL, explain)
    - TableMapping: KQL table -> Splunk index/sourcetype resolution
    - Vocabulary: SPL command and KQL operator reference data
    - DocRefresher: Reference refresh tracking

Usage:
    from kql_spl_translator import QueryTranslator

    translator = QueryTranslator()
    result = translator.translate("SecurityEvent | where EventID == 4625", "kql", "spl")
    print(result.translated_query)
"""

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Core
    "QueryTranslator",
    "TranslationResult",
    "ValidationResult",
    "QueryLanguage",
    "TranslatorConfig",
    "UnsupportedLanguageError",
    "UnsupportedTranslationError",
    # Reference data
    "Vocabulary",
    "VerbEntry",
    "ReferenceDataError",
    "load_vocabulary",
    # Table mapping
    "TableMapping",
    "TableMappingEntry",
    "generate_discovery_queries",
    # Refresh
    "DocRefresher",
]

# Lazy imports to avoid RuntimeWarning when running submodules with python -m
# This defers imports until attributes are actually accessed

_import_map = {
    # kql_spl_translator.translator package
    "QueryTranslator": "kql_spl_translator.translator",
    "TranslationResult": "kql_spl_translator.translator",
    "ValidationResult": "kql_spl_translator.translator",
    "QueryLanguage": "kql_spl_translator.translator",
    "TranslatorConfig": "kql_spl_translator.translator",
    "UnsupportedLanguageError": "kql_spl_translator.translator",
    "UnsupportedTranslationError": "kql_spl_translator.translator",
    # kql_spl_translator.vocabulary
    "Vocabulary": "kql_spl_translator.vocabulary",
    "VerbEntry": "kql_spl_translator.vocabulary",
    "ReferenceDataError": "kql_spl_translator.vocabulary",
    "load_vocabulary": "kql_spl_translator.vocabulary",
    # kql_spl_translator.table_mapping
    "TableMapping": "kql_spl_translator.table_mapping",
    "TableMappingEntry": "kql_spl_translator.table_mapping",
    "generate_discovery_queries": "kql_spl_translator.table_mapping",
    # kql_spl_translator.doc_refresher
    "DocRefresher": "kql_spl_translator.doc_refresher",
}


def __getattr__(name: str):
    """Lazy import mechanism - only imports when the attribute is accessed."""
    if name in _import_map:
        module_path = _import_map[name]
        import importlib
        module = importlib.import_module(module_path)
        return getattr(module, name)
    raise AttributeError(f"module 'kql_spl_translator' has no attribute '{name}'")


def __dir__():
    """List available attributes for tab completion and dir()."""
    return __all__
