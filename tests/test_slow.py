import pytest
from hypothesis import given, strategies as st

from acmatch.slow import MatchResult, SlowAutomaton, SlowState

FIRST_MATCH_CASES = [
    (["he", "she", "his", "her"], "he", "he"),
    (["he", "she", "his", "her"], "she", "she"),
    (["he", "she", "his", "her"], "his", "his"),
    (["he", "she", "his", "her"], "hers", "he"),
    (["he", "she", "his", "her"], "ahe", "he"),
    (["he", "she", "his", "her"], "shhe", "he"),
    (["he", "she", "his", "her"], "shis2", "his"),
    (["he", "she", "his", "her"], "ahhe", "he"),
    (["poto", "poto"], "The pot had a handle", None),
    (["The"], "The pot had a handle", "The"),
    (["pot"], "The pot had a handle", "pot"),
    (["pot "], "The pot had a handle", "pot "),
    (["ot h"], "The pot had a handle", "ot h"),
    (["andle"], "The pot had a handle", "andle"),
    (["aaab"], "aaaaaaab", "aaab"),
    (["haha", "z"], "aaaaz", "z"),
    (["haha", "z"], "z", "z"),
    (["abc"], "cde", None),
]


@pytest.mark.parametrize("patterns,subject,expected", FIRST_MATCH_CASES)
def test_first_match_cases(patterns, subject, expected):
    ac = SlowAutomaton(patterns)
    result = ac.match(subject)
    if expected is None:
        assert result is None
    else:
        assert result is not None
        assert subject[result.begin : result.end + 1] == expected
        assert ac.patterns[result.pattern_idx] == expected.encode()


def test_match_result_fields():
    ac = SlowAutomaton(["he", "she", "his", "her"])
    assert ac.match("ahe") == MatchResult(1, 2, 0)
    assert ac.match("shis2") == MatchResult(1, 3, 2)


def test_duplicate_pattern_keeps_last_index():
    ac = SlowAutomaton(["poto", "poto"])
    assert ac.match("xpotox") == MatchResult(1, 4, 1)


def test_match_via_fail_link_reports_previous_position():
    ac = SlowAutomaton(["abcd", "bc"])
    assert ac.match("abce") == MatchResult(1, 2, 1)


def test_bytes_subject_and_patterns():
    ac = SlowAutomaton([b"\x00\xff", b"zz"])
    assert ac.match(b"ab\x00\xffcd") == MatchResult(2, 3, 0)
    assert ac.match(bytearray(b"azz")) == MatchResult(1, 2, 1)


def test_empty_pattern_rejected():
    with pytest.raises(ValueError):
        SlowAutomaton(["ok", ""])


def test_invalid_pattern_type_rejected():
    with pytest.raises(TypeError):
        SlowAutomaton([42])


def test_empty_subject_has_no_match():
    assert SlowAutomaton(["a"]).match("") is None


def test_state_numbering_and_depth():
    ac = SlowAutomaton(["ab", "ac"])
    assert ac.state_count == 4
    assert ac.next_node_id == 5
    assert ac.root.id == 1
    assert [s.id for s in ac.states] == [1, 2, 3, 4]
    a = ac.root.goto(ord("a"))
    assert a.depth == 1
    assert a.goto(ord("b")).depth == 2
    assert ac.root_bytes == frozenset({ord("a")})


def test_fail_links():
    ac = SlowAutomaton(["he", "she", "his", "hers"])
    root = ac.root
    s = root.goto(ord("s"))
    sh = s.goto(ord("h"))
    she = sh.goto(ord("e"))
    h = root.goto(ord("h"))
    he = h.goto(ord("e"))
    assert root.fail_link is None
    assert sh.fail_link is h
    assert she.fail_link is he
    assert h.fail_link is root


def test_goto_missing_returns_none():
    ac = SlowAutomaton(["ab"])
    assert ac.root.goto(ord("b")) is None


def test_sorted_gotos_ascending():
    ac = SlowAutomaton(["c", "a", "b"])
    gotos = ac.root.sorted_gotos()
    assert [byte for byte, _ in gotos] == [ord("a"), ord("b"), ord("c")]
    assert all(isinstance(state, SlowState) for _, state in gotos)
    assert [state.pattern_idx for _, state in gotos] == [1, 2, 0]


def test_dump_text():
    ac = SlowAutomaton(["ab"])
    assert ac.dump_text() == (
        "S1 goto:{'a' -> S:2,} \n"
        "S2 goto:{'b' -> S:3,} , fail=S:1\n"
        "S3 goto:{} , fail=S:1, terminal\n"
    )


def test_dump_text_non_printable():
    ac = SlowAutomaton([b"\x00\x01"])
    assert ac.dump_text() == (
        "S1 goto:{0 -> S:2,} \n"
        "S2 goto:{0x1 -> S:3,} , fail=S:1\n"
        "S3 goto:{} , fail=S:1, terminal\n"
    )


def test_dump_dot():
    ac = SlowAutomaton(["aa"])
    assert ac.dump_dot() == (
        "digraph G {\n"
        "  1 [style=filled];\n"
        "  3 [shape=doublecircle];\n"
        "\n"
        "  1 -> 2 [label=a];\n"
        "  2 -> 3 [label=a];\n"
        "  3 -> 2 [style=dotted, color=red]; \n"
        "}\n"
    )


def test_dump_dot_non_alnum_label():
    ac = SlowAutomaton([" "])
    assert '  1 -> 2 [label="0x20"];\n' in ac.dump_dot()


_pattern_lists = st.lists(
    st.text(alphabet="abc", min_size=1, max_size=4), min_size=1, max_size=6
)


@given(_pattern_lists, st.text(alphabet="abcd", max_size=30))
def test_reported_match_is_genuine(patterns, subject):
    ac = SlowAutomaton(patterns)
    result = ac.match(subject)
    assert result is None or (
        subject[result.begin : result.end + 1].encode()
        == ac.patterns[result.pattern_idx]
    )


@given(_pattern_lists, st.data())
def test_pattern_as_subject_always_matches(patterns, data):
    ac = SlowAutomaton(patterns)
    subject = data.draw(st.sampled_from(patterns))
    result = ac.match(subject)
    assert result is not None
    assert subject[result.begin : result.end + 1].encode() == ac.patterns[
        result.pattern_idx
    ]