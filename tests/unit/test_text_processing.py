"""Unit tests for shared text helpers."""

import pytest

from tailor.utils.text_processing import (
    dedupe_casefold,
    human_join,
    normalize_whitespace,
    truncate_display,
)


@pytest.mark.unit
def test_normalize_whitespace():
    assert normalize_whitespace("  Senior   Engineer\t ") == "Senior Engineer"


@pytest.mark.unit
def test_truncate_display():
    assert truncate_display("short", 10) == "short"
    assert truncate_display("this is a very long string", 10) == "this is..."


@pytest.mark.unit
def test_dedupe_casefold_keeps_first_spelling():
    assert dedupe_casefold(["Python", "python", "", "SQL", "PYTHON"]) == ["Python", "SQL"]


@pytest.mark.unit
@pytest.mark.parametrize(
    "items, expected",
    [
        ([], ""),
        (["Python"], "Python"),
        (["Python", "SQL"], "Python and SQL"),
        (["Python", "SQL", "AWS"], "Python, SQL and AWS"),
    ],
)
def test_human_join(items, expected):
    assert human_join(items) == expected
