import pytest

from kql_spl_translator.table_mapping import TableMapping
from kql_spl_translator.translator.kql_to_spl import (
    KqlOperator,
    normalize_comparison,
    translate_kql_query,
    translate_table_reference,
)


def translate(query, table_mapping):
    notes = []
    return translate_kql_query(query, table_mapping, notes), notes


class TestTableReference:
    def test_mapped_table_with_sourcetype(self, table_mapping):
        notes = []
        spl = translate_table_reference("SecurityEvent", table_mapping, notes)
        assert spl == 'index=windows sourcetype="WinEventLog:Security"'
        assert notes == [
            'Mapped table "SecurityEvent" to index="windows" sourcetype="WinEventLog:Security" '
            "(Common for Windows Security events)"
        ]

    def test_case_insensitive_table_name(self, table_mapping):
        spl = translate_table_reference("securityevent", table_mapping, [])
        assert spl == 'index=windows sourcetype="WinEventLog:Security"'

    def test_unknown_table_uses_default_and_warns(self, table_mapping):
        notes = []
        spl = translate_table_reference("MyCustom_CL", table_mapping, notes)
        assert spl == "index=main"
        assert notes[-1] == (
            'WARNING: Unknown table "MyCustom_CL" - using default index. '
            "Please verify index/sourcetype in your Splunk environment!"
        )

    def test_custom_mapping_wins(self):
        mapping = TableMapping.from_dict({"MyCustom_CL": {"index": "custom"}})
        notes = []
        assert translate_table_reference("MyCustom_CL", mapping, notes) == "index=custom"
        assert not any(note.startswith("WARNING") for note in notes)


class TestOperators:
    @pytest.mark.parametrize("kql, expected", [
        ("SecurityEvent | summarize count() by Computer",
         'index=windows sourcetype="WinEventLog:Security" | stats count() by Computer'),
        ("SecurityEvent | extend x = 1",
         'index=windows sourcetype="WinEventLog:Security" | eval x = 1'),
        ("SecurityEvent | project Account, Computer",
         'index=windows sourcetype="WinEventLog:Security" | fields Account, Computer'),
        ("SecurityEvent | project-away Activity",
         'index=windows sourcetype="WinEventLog:Security" | fields - Activity'),
        ("SecurityEvent | project-rename User = Account",
         'index=windows sourcetype="WinEventLog:Security" | rename Account as User'),
        ("SecurityEvent | order by TimeGenerated desc",
         'index=windows sourcetype="WinEventLog:Security" | sort -TimeGenerated'),
        ("SecurityEvent | sort by Computer asc",
         'index=windows sourcetype="WinEventLog:Security" | sort +Computer'),
        ("SecurityEvent | take 10",
         'index=windows sourcetype="WinEventLog:Security" | head 10'),
        ("SecurityEvent | limit 5",
         'index=windows sourcetype="WinEventLog:Security" | head 5'),
        ("SecurityEvent | distinct Computer",
         'index=windows sourcetype="WinEventLog:Security" | dedup Computer'),
        ("SecurityEvent | mv-expand Tags",
         'index=windows sourcetype="WinEventLog:Security" | mvexpand Tags'),
    ])
    def test_rule_table(self, table_mapping, kql, expected):
        spl, _ = translate(kql, table_mapping)
        assert spl == expected

    def test_leading_where_is_folded_into_search(self, table_mapping):
        spl, _ = translate("SecurityEvent | where EventID == 4625 | take 10", table_mapping)
        assert spl == 'index=windows sourcetype="WinEventLog:Security" EventID = 4625 | head 10'

    def test_where_after_other_operator_stays_inline(self, table_mapping):
        spl, notes = translate("SecurityEvent | summarize count() by Account | where count_ == 5", table_mapping)
        assert spl == 'index=windows sourcetype="WinEventLog:Security" | stats count() by Account count_ = 5'
        assert "| where" not in spl
        assert any("manual" in note for note in notes)

    def test_leading_where_adds_no_manual_note(self, table_mapping):
        _, notes = translate("SecurityEvent | where EventID == 4625 | where Account != \"x\"", table_mapping)
        assert not any("manual" in note for note in notes)

    def test_default_table_where(self, table_mapping):
        spl, notes = translate("Table | where A == B", table_mapping)
        assert spl == "index=main A = B"
        assert any(note.startswith("WARNING: Unknown table") for note in notes)

    def test_parse_is_noted(self, table_mapping):
        spl, notes = translate('SecurityEvent | parse CommandLine with "-user " User " "', table_mapping)
        assert '| rex CommandLine with "-user " User " "' in spl
        assert "parse requires manual adjustment for regex patterns" in notes

    def test_unknown_operator_passes_through(self, table_mapping):
        spl, notes = translate("SecurityEvent | render timechart", table_mapping)
        assert spl.endswith(" | render timechart /* WARNING: Manual translation needed */")
        assert "Unknown KQL operator: render" in notes


def test_normalize_comparison():
    assert normalize_comparison("a == 1 and b != 2") == "a = 1 and b != 2"


def test_operator_aliases():
    assert KqlOperator.from_operator("sort") is KqlOperator.ORDER
    assert KqlOperator.from_operator("limit") is KqlOperator.TAKE
    assert KqlOperator.from_operator("render") is KqlOperator.OTHER
