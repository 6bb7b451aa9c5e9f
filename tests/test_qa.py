from ai_output_guard.pipeline import RewriteOutcome
from ai_output_guard.qa import find_leaked_tokens, has_leaks, leak_report


def test_current_token_is_flagged():
    assert find_leaked_tokens("Intro\n<<<TPL_LABEL_3>>>\n- x\n") == ["<<<TPL_LABEL_3>>>"]


def test_clean_content_is_not_flagged():
    assert find_leaked_tokens('Example prompts include:\n- "List items"\n') == []
    assert not has_leaks("Required parameters:\n")


def test_empty_content():
    assert find_leaked_tokens("") == []
    assert find_leaked_tokens(None) == []


def test_historical_formats_are_flagged_in_document_order():
    content = "**TPL_LABEL_1**\ntext\n__TPL_LABEL_0__\n<<<TPL_LABEL_12>>>"
    assert find_leaked_tokens(content) == ["**TPL_LABEL_1**", "__TPL_LABEL_0__", "<<<TPL_LABEL_12>>>"]


def test_pattern_list_is_configurable():
    content = "[[LBL4]] and <<<TPL_LABEL_0>>>"
    assert find_leaked_tokens(content, [r"\[\[LBL\d+\]\]"]) == ["[[LBL4]]"]
    assert find_leaked_tokens(content, []) == []


def test_leak_report_flags_fallback_rows():
    outcomes = [
        ("ok.md", RewriteOutcome(content="fine")),
        ("leak.md", RewriteOutcome(content="orig", fallback=True, leaked_tokens=["<<<TPL_LABEL_0>>>"], reason="leaked tokens")),
        ("cut.md", RewriteOutcome(content="orig", fallback=True, truncated=True, reason="truncated")),
    ]
    df = leak_report(outcomes)

    assert list(df["document"]) == ["ok.md", "leak.md", "cut.md"]
    assert list(df["has_issue"]) == [False, True, True]
    assert list(df["fallback"]) == [False, True, True]
    assert "<<<TPL_LABEL_0>>>" in df.loc[1, "issues"]
    assert df.loc[2, "issues"] == "truncated response"


def test_leak_report_empty():
    df = leak_report([])
    assert df.empty
    assert "has_issue" in df.columns
