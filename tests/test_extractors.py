from kql_spl_translator.translator.extractors import (
    earliest_to_timespan,
    extract_earliest,
    extract_field_filters,
    extract_index,
    extract_order_by,
    extract_project_rename_pair,
    extract_rename_pair,
    extract_search_terms,
    extract_sort_field,
    extract_source,
    extract_sourcetype,
    extract_spath_args,
    extract_span,
    index_to_table,
    split_by_clause,
)


def test_head_extractors():
    head = 'index=web* sourcetype="access_combined" source=/var/log/a.log earliest=-24h status=500 error'
    assert extract_index(head) == "web*"
    assert index_to_table("web*") == "web"
    assert extract_sourcetype(head) == '"access_combined"'
    assert extract_source(head) == "/var/log/a.log"
    assert extract_earliest(head) == "-24h"
    assert extract_search_terms(head) == ["error"]
    assert extract_field_filters(head) == ["status=500"]


def test_source_does_not_match_sourcetype():
    assert extract_source("sourcetype=syslog") is None


def test_missing_head_terms_are_none():
    assert extract_index("error") is None
    assert extract_earliest("index=main") is None


def test_earliest_to_timespan():
    assert earliest_to_timespan("-7d") == "7d"
    assert earliest_to_timespan('"-15m"') == "15m"


def test_spath_args():
    args = extract_spath_args("input=body path=items{}.id output=item_id")
    assert args.path == "items{}.id"
    assert args.output == "item_id"
    assert args.input == "body"
    assert extract_spath_args("path=a.b") is None


def test_span_and_by_clause():
    assert extract_span("span=5m count by host") == ("5m", "count by host")
    assert extract_span("count") == (None, "count")
    assert split_by_clause("count by host") == ("count", "host")
    assert split_by_clause("avg(bytes)") == ("avg(bytes)", None)


def test_rename_pairs():
    assert extract_rename_pair("src_ip AS source") == ("src_ip", "source")
    assert extract_project_rename_pair("User = UserName") == ("User", "UserName")
    assert extract_rename_pair("nothing") is None


def test_order_and_sort():
    assert extract_order_by("by count_ desc") == ("count_", "desc")
    assert extract_order_by("by TimeGenerated") == ("TimeGenerated", None)
    assert extract_sort_field("-count") == ("count", "desc")
    assert extract_sort_field("+name") == ("name", "asc")
    assert extract_sort_field("name") == ("name", "asc")
