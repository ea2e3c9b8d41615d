import pytest

from termalign.ansi import (
    DEFAULT_ORACLE,
    ESC,
    ScanState,
    UnicodeWidthOracle,
    display_width,
    hidden_width,
    scan,
    step,
    strip_ansi,
)
from termalign.errors import WidthInvariantError

LINK = "\x1b]8;;https://example.com\x1b\\link text\x1b]8;;\x1b\\"


class _EscIsOneOracle(UnicodeWidthOracle):
    """Width table that counts ESC as one column."""

    def char_width(self, ch: str) -> int:
        if ch == ESC:
            return 1
        return super().char_width(ch)


class _InconsistentOracle:
    def char_width(self, ch: str) -> int:
        return 1

    def str_width(self, text: str) -> int:
        return 0


def test_oracle_char_widths() -> None:
    assert DEFAULT_ORACLE.char_width("a") == 1
    assert DEFAULT_ORACLE.char_width("日") == 2
    assert DEFAULT_ORACLE.char_width("Ａ") == 2  # fullwidth A
    assert DEFAULT_ORACLE.char_width("\u0301") == 0  # combining acute
    assert DEFAULT_ORACLE.char_width("\u200b") == 0  # zero width space
    assert DEFAULT_ORACLE.char_width(ESC) == 0


def test_oracle_str_width_is_sum_of_chars() -> None:
    text = "ab日本 e\u0301\x1b[0m"
    assert DEFAULT_ORACLE.str_width(text) == sum(DEFAULT_ORACLE.char_width(c) for c in text)


def test_plain_ascii_width_equals_raw_width() -> None:
    for text in ("", "a", "hello world", "  padded  ", "foo|bar"):
        assert display_width(text) == DEFAULT_ORACLE.str_width(text) == len(text)


def test_csi_color_is_hidden() -> None:
    assert display_width("\x1b[31mHello\x1b[0m") == display_width("Hello") == 5


def test_adjacent_csi_sequences() -> None:
    assert display_width("\x1b[1m\x1b[31mX\x1b[0m\x1b[0m") == 1
    assert display_width("\x1b[38;2;80;200;120m[OK]\x1b[0m done") == 9


def test_hyperlink_shows_only_label() -> None:
    assert display_width(LINK) == display_width("link text") == 9


def test_colored_hyperlink() -> None:
    colored = "\x1b[31m\x1b]8;;https://example.com\x1b\\colored link\x1b]8;;\x1b\\\x1b[0m"
    assert display_width(colored) == display_width("colored link")


def test_multiple_hyperlinks() -> None:
    text = (
        "normal \x1b]8;;https://example.com\x1b\\link1\x1b]8;;\x1b\\ and "
        "\x1b]8;;https://test.com\x1b\\link2\x1b]8;;\x1b\\"
    )
    assert display_width(text) == display_width("normal link1 and link2")


def test_bold_inside_hyperlink() -> None:
    nested = "\x1b]8;;https://example.com\x1b\\\x1b[1mBold Link\x1b[0m\x1b]8;;\x1b\\"
    assert display_width(nested) == display_width("Bold Link")


def test_wide_and_zero_width_characters() -> None:
    assert display_width("日本語") == 6
    assert display_width("\x1b[32m日本\x1b[0m") == 4
    assert display_width("e\u0301") == 1
    assert display_width("a\u200bb") == 2


def test_unrecognized_escape_is_abandoned() -> None:
    result = scan("\x1bXabc")
    assert result.hidden == 0
    assert result.state is ScanState.NORMAL
    assert display_width("\x1bXabc") == 4


def test_truncated_csi_does_not_crash() -> None:
    result = scan("abc\x1b[31")
    assert result.state is ScanState.OPEN_BRACKET
    assert not result.terminated
    assert result.hidden == 3
    assert display_width("abc\x1b[31") == 3


@pytest.mark.parametrize(
    "text",
    [
        "\x1b[31mHello\x1b[0m",
        LINK,
        "a\x1b\x1b[1mb\x1b]x\x1b\x1b\\c",
        "\x1b]8;;日\x1b\\日\x1b[",
    ],
)
def test_every_prefix_hides_at_most_its_raw_width(text: str) -> None:
    for end in range(len(text) + 1):
        prefix = text[:end]
        assert 0 <= hidden_width(prefix) <= DEFAULT_ORACLE.str_width(prefix)
        assert display_width(prefix) >= 0


def test_bel_terminated_osc_is_not_closed() -> None:
    # Known gap: only ESC \ closes an OSC sequence
    result = scan("\x1b]8;;http://x\x07label")
    assert result.state is ScanState.OSC
    assert display_width("\x1b]8;;http://x\x07label") == 0


@pytest.mark.parametrize(
    ("state", "ch", "expected_state", "expected_hidden"),
    [
        (ScanState.NORMAL, ESC, ScanState.ESCAPE_CHAR, 0),
        (ScanState.NORMAL, "[", ScanState.NORMAL, 0),
        (ScanState.NORMAL, "m", ScanState.NORMAL, 0),
        (ScanState.ESCAPE_CHAR, ESC, ScanState.ESCAPE_CHAR, 0),
        (ScanState.ESCAPE_CHAR, "[", ScanState.OPEN_BRACKET, 1),
        (ScanState.ESCAPE_CHAR, "]", ScanState.OSC, 1),
        (ScanState.ESCAPE_CHAR, "m", ScanState.NORMAL, 0),
        (ScanState.ESCAPE_CHAR, "\\", ScanState.NORMAL, 0),
        (ScanState.ESCAPE_CHAR, "x", ScanState.NORMAL, 0),
        (ScanState.OPEN_BRACKET, ESC, ScanState.ESCAPE_CHAR, 0),
        (ScanState.OPEN_BRACKET, "3", ScanState.OPEN_BRACKET, 1),
        (ScanState.OPEN_BRACKET, "[", ScanState.OPEN_BRACKET, 1),
        (ScanState.OPEN_BRACKET, "m", ScanState.AFTER_ESCAPE, 1),
        (ScanState.AFTER_ESCAPE, "H", ScanState.NORMAL, 0),
        (ScanState.AFTER_ESCAPE, ESC, ScanState.ESCAPE_CHAR, 0),
        (ScanState.OSC, ESC, ScanState.OSC_ESCAPE_CHAR, 0),
        (ScanState.OSC, "h", ScanState.OSC, 1),
        (ScanState.OSC, "日", ScanState.OSC, 2),
        (ScanState.OSC_ESCAPE_CHAR, "\\", ScanState.NORMAL, 1),
        (ScanState.OSC_ESCAPE_CHAR, "x", ScanState.OSC, 1),
        (ScanState.OSC_ESCAPE_CHAR, ESC, ScanState.OSC_ESCAPE_CHAR, 0),
    ],
)
def test_step_transitions(
    state: ScanState, ch: str, expected_state: ScanState, expected_hidden: int
) -> None:
    assert step(state, ch) == (expected_state, expected_hidden)


def test_oracle_counting_esc_gives_same_display_width() -> None:
    oracle = _EscIsOneOracle()
    assert step(ScanState.ESCAPE_CHAR, "]", oracle) == (ScanState.OSC, 2)
    assert step(ScanState.OSC_ESCAPE_CHAR, "\\", oracle) == (ScanState.NORMAL, 2)
    assert display_width("\x1b[31mHello\x1b[0m", oracle) == 5
    assert display_width(LINK, oracle) == 9


def test_inconsistent_oracle_raises_invariant_error() -> None:
    with pytest.raises(WidthInvariantError) as excinfo:
        display_width("\x1b[31m", _InconsistentOracle())
    assert excinfo.value.raw == 0
    assert excinfo.value.hidden == 5
    assert isinstance(excinfo.value, AssertionError)


def test_strip_ansi() -> None:
    assert strip_ansi("\x1b[31mHello\x1b[0m") == "Hello"
    assert strip_ansi(LINK) == "link text"
    assert strip_ansi("\x1bXab") == "\x1bXab"
    assert strip_ansi("plain\x1b") == "plain\x1b"
    assert strip_ansi("\x1b[31\x1bXab") == "\x1bXab"
    assert strip_ansi("\x1b[31\x1b[1mbold") == "bold"


def test_strip_ansi_matches_display_width() -> None:
    text = "\x1b[1m日\x1b[0m " + LINK
    assert DEFAULT_ORACLE.str_width(strip_ansi(text)) == display_width(text)
