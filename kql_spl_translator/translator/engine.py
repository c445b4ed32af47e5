"""
Query Translator
================

Main entry point that combines the vocabulary, the table mapping, the
validators and both direction translators.

Workflow per call:
    1. Validate the input query
    2. Translate the head stage and each command/operator stage
    3. Validate the output query
    4. Score confidence from validation results and translation notes

Usage:
    from kql_spl_translator.translator import QueryTranslator

    translator = QueryTranslator()
    result = translator.translate("index=main | stats count by host", "spl", "kql")
    print(result.translated_query)
    print(result.confidence)

    translator.set_table_mapping({
        "SecurityEvent": {"index": "wineventlog", "sourcetype": "XmlWinEventLog:Security"},
    })
"""

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Mapping, Optional, Union

from kql_spl_translator.table_mapping import (
    TableMapping,
    TableMappingEntry,
    load_mapping_file,
)
from kql_spl_translator.vocabulary import Vocabulary, load_vocabulary
from kql_spl_translator.translator.config import TranslatorConfig
from kql_spl_translator.translator.confidence import calculate_confidence
from kql_spl_translator.translator.explainer import explain_query
from kql_spl_translator.translator.kql_to_spl import translate_kql_query
from kql_spl_translator.translator.models import (
    QueryLanguage,
    TranslationResult,
    UnsupportedLanguageError,
    UnsupportedTranslationError,
    ValidationResult,
)
from kql_spl_translator.translator.spl_to_kql import translate_spl_query
from kql_spl_translator.translator.validation import validate_kql, validate_spl

logger = logging.getLogger(__name__)


def _require_query(query) -> str:
    if not isinstance(query, str):
        raise TypeError(f"query must be a string, got {type(query).__name__}")
    return query


class QueryTranslator:
    """
    Bidirectional SPL <-> KQL translator.

    The vocabulary is loaded on first use and cached for the life of the
    instance. The table mapping is an immutable value; set_table_mapping()
    installs a merged copy, so translations already running keep the mapping
    they started with.
    """

    def __init__(
        self,
        table_mapping: Optional[Union[TableMapping, Mapping[str, Union[TableMappingEntry, dict]]]] = None,
        reference_dir: Optional[Path] = None,
        vocabulary: Optional[Vocabulary] = None,
        refresh_interval_days: int = 7,
    ):
        """
        Initialize the translator.

        Args:
            table_mapping: Custom table mappings layered over the defaults
            reference_dir: Directory holding the reference JSON files
            vocabulary: Optional pre-loaded vocabulary
            refresh_interval_days: Age after which the references are considered stale
        """
        if isinstance(table_mapping, TableMapping):
            self._table_mapping = table_mapping
        elif table_mapping:
            self._table_mapping = TableMapping.from_dict(table_mapping)
        else:
            self._table_mapping = TableMapping.defaults()

        self.reference_dir = reference_dir
        self.refresh_interval = timedelta(days=refresh_interval_days)
        self._vocabulary = vocabulary

    @classmethod
    def from_config(cls, config: Optional[TranslatorConfig] = None) -> "QueryTranslator":
        """Create a translator from configuration, merging the custom mapping file if present."""
        config = config or TranslatorConfig.from_yaml()

        custom_mappings = load_mapping_file(config.table_mapping_path)
        table_mapping = TableMapping.defaults()
        if custom_mappings:
            try:
                table_mapping = table_mapping.merge(custom_mappings)
            except ValueError as e:
                logger.warning(f"Ignoring custom mappings from {config.table_mapping_path}: {e}")
        else:
            logger.info("Using default table mappings")

        return cls(
            table_mapping=table_mapping,
            reference_dir=config.reference_dir,
            refresh_interval_days=config.refresh_interval_days,
        )

    @property
    def vocabulary(self) -> Vocabulary:
        """Get or load the reference vocabulary."""
        if self._vocabulary is None:
            self._vocabulary = load_vocabulary(self.reference_dir)
        return self._vocabulary

    @property
    def table_mapping(self) -> TableMapping:
        return self._table_mapping

    # =========================================================================
    # TRANSLATION
    # =========================================================================

    def translate(self, query: str, from_language: str, to_language: str) -> TranslationResult:
        """
        Translate a query between languages.

        Raises:
            UnsupportedTranslationError: If the language pair is not SPL->KQL or KQL->SPL
            TypeError: If query is not a string
        """
        try:
            source = QueryLanguage.parse(from_language)
            target = QueryLanguage.parse(to_language)
        except UnsupportedLanguageError:
            source = target = None

        if source is QueryLanguage.SPL and target is QueryLanguage.KQL:
            return self.translate_spl_to_kql(query)
        if source is QueryLanguage.KQL and target is QueryLanguage.SPL:
            return self.translate_kql_to_spl(query)

        raise UnsupportedTranslationError(
            f"Unsupported translation: {str(from_language).lower()} to {str(to_language).lower()}"
        )

    def translate_spl_to_kql(self, query: str) -> TranslationResult:
        """Translate an SPL query to KQL."""
        query = _require_query(query)
        vocabulary = self.vocabulary

        input_validation = validate_spl(query, vocabulary.spl_commands)
        notes = []

        try:
            kql = translate_spl_query(query, vocabulary, notes)
        except Exception as e:
            logger.exception("SPL to KQL translation failed")
            notes.append(f"Translation error: {e}")
            kql = ""

        output_validation = validate_kql(kql, vocabulary.kql_operators)
        return self._build_result(
            query, kql, QueryLanguage.SPL, QueryLanguage.KQL,
            input_validation, output_validation, notes,
        )

    def translate_kql_to_spl(self, query: str) -> TranslationResult:
        """Translate a KQL query to SPL using the current table mapping."""
        query = _require_query(query)
        vocabulary = self.vocabulary
        table_mapping = self._table_mapping

        input_validation = validate_kql(query, vocabulary.kql_operators)
        notes = []

        try:
            spl = translate_kql_query(query, table_mapping, notes)
        except Exception as e:
            logger.exception("KQL to SPL translation failed")
            notes.append(f"Translation error: {e}")
            spl = ""

        output_validation = validate_spl(spl, vocabulary.spl_commands)
        return self._build_result(
            query, spl, QueryLanguage.KQL, QueryLanguage.SPL,
            input_validation, output_validation, notes,
        )

    def _build_result(
        self,
        original: str,
        translated: str,
        source: QueryLanguage,
        target: QueryLanguage,
        input_validation: ValidationResult,
        output_validation: ValidationResult,
        notes: list[str],
    ) -> TranslationResult:
        confidence = calculate_confidence(input_validation, output_validation, notes)
        logger.debug(f"{source.value}->{target.value} translation confidence {confidence}%")
        return TranslationResult(
            original_query=original,
            translated_query=translated,
            input_validation=input_validation,
            output_validation=output_validation,
            source_language=source,
            target_language=target,
            translation_notes=notes,
            confidence=confidence,
        )

    # =========================================================================
    # EXPLANATION
    # =========================================================================

    def explain_query(self, query: str, language: str) -> str:
        """
        Explain what a query does in plain English.

        Raises:
            UnsupportedLanguageError: If language is not SPL or KQL
            TypeError: If query is not a string
        """
        query = _require_query(query)
        return explain_query(query, QueryLanguage.parse(language), self.vocabulary)

    # =========================================================================
    # TABLE MAPPING
    # =========================================================================

    def set_table_mapping(self, mapping: Mapping[str, Union[TableMappingEntry, dict]]) -> TableMapping:
        """
        Merge custom table mappings over the current ones.

        Returns:
            The newly installed mapping

        Raises:
            ValueError: If an entry has no index
        """
        self._table_mapping = self._table_mapping.merge(mapping)
        logger.info(
            f"Table mapping updated: {len(mapping or {})} entries merged "
            f"(version {self._table_mapping.version})"
        )
        return self._table_mapping

    def get_table_mapping(self) -> dict:
        return self._table_mapping.to_dict()

    def generate_discovery_queries(self, table_name: Optional[str] = None) -> dict[str, str]:
        """SPL queries that help find where a KQL table's data lives in Splunk."""
        return self._table_mapping.discover(table_name)

    # =========================================================================
    # REFERENCE FRESHNESS
    # =========================================================================

    def needs_reference_update(self, now: Optional[datetime] = None) -> bool:
        """True if the references were never loaded or are older than the refresh interval."""
        if self._vocabulary is None:
            return True
        now = now or datetime.now(timezone.utc)
        return now - self._vocabulary.loaded_at > self.refresh_interval
