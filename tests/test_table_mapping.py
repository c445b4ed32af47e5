import json
import random
import string

import pytest

from kql_spl_translator.table_mapping import (
    DEFAULT_KEY,
    TableMapping,
    TableMappingEntry,
    generate_discovery_queries,
    load_mapping_file,
    search_keywords_for_table,
)


def test_defaults_contain_default_entry(table_mapping):
    entry, used_default = table_mapping.resolve(DEFAULT_KEY)
    assert entry.index == "main"
    assert used_default


def test_resolve_is_total(table_mapping):
    rng = random.Random(1234)
    alphabet = string.printable
    for _ in range(200):
        name = "".join(rng.choice(alphabet) for _ in range(rng.randint(0, 20)))
        entry, _ = table_mapping.resolve(name)
        assert isinstance(entry, TableMappingEntry)


def test_resolve_exact_then_case_insensitive(table_mapping):
    assert table_mapping.resolve("SigninLogs") == (table_mapping.entries["SigninLogs"], False)
    assert table_mapping.resolve("SIGNINLOGS") == (table_mapping.entries["SigninLogs"], False)


def test_merge_returns_new_mapping(table_mapping):
    merged = table_mapping.merge({"SecurityEvent": {"index": "wineventlog", "sourcetype": "XmlWinEventLog"}})

    assert merged is not table_mapping
    assert merged.version == table_mapping.version + 1
    assert merged.resolve("SecurityEvent")[0].index == "wineventlog"
    assert table_mapping.resolve("SecurityEvent")[0].index == "windows"
    # untouched keys survive
    assert merged.resolve("SigninLogs") == table_mapping.resolve("SigninLogs")


def test_merge_rejects_entry_without_index(table_mapping):
    with pytest.raises(ValueError):
        table_mapping.merge({"Broken": {"sourcetype": "x"}})


def test_mapping_requires_default_entry():
    with pytest.raises(ValueError):
        TableMapping(entries={"A": TableMappingEntry("a")})


def test_to_dict(table_mapping):
    data = table_mapping.to_dict()
    assert data["SecurityEvent"] == {
        "index": "windows",
        "sourcetype": "WinEventLog:Security",
        "note": "Common for Windows Security events",
    }
    assert len(data) == len(table_mapping)


def test_load_mapping_file_json(tmp_path):
    path = tmp_path / "splunk-mappings.json"
    path.write_text(json.dumps({"Custom_CL": {"index": "custom"}}))
    assert load_mapping_file(path) == {"Custom_CL": {"index": "custom"}}


def test_load_mapping_file_yaml(tmp_path):
    path = tmp_path / "mappings.yaml"
    path.write_text("Custom_CL:\n  index: custom\n  sourcetype: custom:json\n")
    assert load_mapping_file(path)["Custom_CL"]["sourcetype"] == "custom:json"


def test_load_mapping_file_missing_or_invalid(tmp_path):
    assert load_mapping_file(tmp_path / "missing.json") is None

    bad = tmp_path / "bad.json"
    bad.write_text("{not json")
    assert load_mapping_file(bad) is None

    not_object = tmp_path / "list.json"
    not_object.write_text("[1, 2]")
    assert load_mapping_file(not_object) is None


def test_search_keywords():
    assert "WinEventLog" in search_keywords_for_table("SecurityEvent")
    assert search_keywords_for_table("Unknown_CL") == ["Unknown_CL"]


def test_discovery_queries_for_table():
    queries = generate_discovery_queries("SecurityEvent")
    assert set(queries) == {"find_SecurityEvent", "sample_SecurityEvent"}
    assert queries["find_SecurityEvent"].startswith(
        "index=* (EventCode=4624 OR EventID OR Windows Security OR WinEventLog)"
    )


def test_discovery_queries_for_unknown_table_use_name():
    queries = generate_discovery_queries("Custom_CL")
    assert queries["find_Custom_CL"].startswith("index=* (Custom_CL)")


def test_general_discovery_queries():
    assert set(generate_discovery_queries()) == {
        "all_azure_data",
        "all_indexes",
        "all_sourcetypes",
        "eventhub_data",
    }


def test_mapping_discover_matches_module_function(table_mapping):
    assert table_mapping.discover("SigninLogs") == generate_discovery_queries("SigninLogs")


def test_load_mapping_file_not_utf8(tmp_path):
    path = tmp_path / "splunk-mappings.json"
    path.write_bytes(b'{"Custom_CL": {"\xff": 1}}')
    assert load_mapping_file(path) is None


def test_entry_values_are_stored_as_strings(table_mapping):
    merged = table_mapping.merge({"Custom_CL": {"index": 42, "sourcetype": 7, "note": 2024}})
    entry = merged.resolve("Custom_CL")[0]
    assert entry == TableMappingEntry("42", "7", "2024")
    assert merged.resolve("SigninLogs")[0].sourcetype == "azure:aad:signin"


def test_entry_without_sourcetype_or_note(table_mapping):
    entry = table_mapping.merge({"Custom_CL": {"index": "custom"}}).resolve("Custom_CL")[0]
    assert entry.sourcetype is None
    assert entry.note == ""
