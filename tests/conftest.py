import pytest

from kql_spl_translator.table_mapping import TableMapping
from kql_spl_translator.vocabulary import load_vocabulary
from kql_spl_translator.translator.engine import QueryTranslator


@pytest.fixture(scope="session")
def vocabulary():
    return load_vocabulary()


@pytest.fixture
def table_mapping():
    return TableMapping.defaults()


@pytest.fixture
def translator(vocabulary):
    return QueryTranslator(vocabulary=vocabulary)
