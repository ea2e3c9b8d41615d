import pytest

from termalign.errors import (
    ERROR_TEMPLATES,
    ConfigError,
    EncodingError,
    FillError,
    TermAlignError,
    WidthInvariantError,
    format_error,
    get_recovery_text,
)
from termalign.theme import reset_theme


@pytest.fixture(autouse=True)
def _plain_theme(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("NO_COLOR", "1")
    reset_theme()
    yield
    reset_theme()


def test_format_error_with_context_and_recovery() -> None:
    text = format_error(
        "Config error",
        "bad width",
        context={"path": "/tmp/c.json", "key": "width"},
        recovery="1. Fix it\n\n2. Retry",
    )
    assert text.splitlines() == [
        "[FAIL] Config error: bad width",
        "",
        "Affected: path '/tmp/c.json', key 'width'.",
        "",
        "1. Fix it",
        "",
        "2. Retry",
    ]


def test_format_error_minimal() -> None:
    assert format_error("Encoding error", "oops") == "[FAIL] Encoding error: oops"


def test_every_template_has_recovery() -> None:
    for key in ERROR_TEMPLATES:
        assert get_recovery_text(key).startswith("1. ")


def test_hierarchy() -> None:
    for cls in (ConfigError, EncodingError, FillError):
        assert issubclass(cls, TermAlignError)
    assert not issubclass(WidthInvariantError, TermAlignError)
    assert issubclass(WidthInvariantError, AssertionError)
