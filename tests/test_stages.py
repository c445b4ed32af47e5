from kql_spl_translator.translator.stages import join_lines, split_stages, stage_args, stage_verb


def test_split_stages_trims_each_stage():
    assert split_stages("index=main  |  stats count by host |sort -count") == [
        "index=main",
        "stats count by host",
        "sort -count",
    ]


def test_split_stages_joins_multiline_queries():
    query = """
        SecurityEvent
        | where EventID == 4625
        | take 10
    """
    assert split_stages(query) == ["SecurityEvent", "where EventID == 4625", "take 10"]


def test_head_is_kept_when_empty():
    assert split_stages("") == [""]
    assert split_stages("| tstats count") == ["", "tstats count"]


def test_empty_stages_after_head_are_dropped():
    assert split_stages("index=main || head 5 |") == ["index=main", "head 5"]
    assert split_stages("|||") == [""]


def test_join_lines_drops_blank_lines():
    assert join_lines("a\n\n   b  \n") == "a b"


def test_stage_verb_and_args():
    assert stage_verb("stats count by host") == "stats"
    assert stage_args("stats  count by host") == "count by host"
    assert stage_verb("") == ""
    assert stage_args("head") == ""
