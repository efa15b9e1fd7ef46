from __future__ import annotations

import pytest

from core.formats import is_date, is_email, is_url, is_uuid, matches_pattern


@pytest.mark.parametrize(
    "value,expected",
    [
        ("a@b.com", True),
        ("first.last@sub.example.org", True),
        ("not-an-email", False),
        ("a@b", False),
        ("a b@c.com", False),
        ("", False),
    ],
)
def test_is_email(value: str, expected: bool) -> None:
    assert is_email(value) is expected


@pytest.mark.parametrize(
    "value,expected",
    [
        ("https://example.com", True),
        ("http://localhost:5678/webhook/custom-webhook", True),
        ("ftp://files.example.com/a.txt", True),
        ("example.com", False),
        ("/relative/path", False),
        (" https://example.com", False),
    ],
)
def test_is_url(value: str, expected: bool) -> None:
    assert is_url(value) is expected


def test_is_uuid_rejects_wrong_version_and_variant() -> None:
    assert is_uuid("123e4567-e89b-42d3-a456-426614174000")
    # version digit 0
    assert not is_uuid("123e4567-e89b-02d3-a456-426614174000")
    # variant digit c
    assert not is_uuid("123e4567-e89b-42d3-c456-426614174000")
    assert not is_uuid("123e4567-e89b-42d3-a456-426614174000\n")


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2024-01-15", True),
        ("2024-01-15T08:00:00", True),
        ("2024-01-15T08:00:00.123+02:00", True),
        ("2024-01-15T08:00:00z", True),
        ("2024-13-01", False),
        ("15/01/2024", False),
        ("", False),
        (" 2024-01-15 ", False),
        ("2024-01-15\n", False),
    ],
)
def test_is_date(value: str, expected: bool) -> None:
    assert is_date(value) is expected


def test_matches_pattern_searches() -> None:
    assert matches_pattern("order-42", r"\d+")
    assert not matches_pattern("order", r"\d+")


def test_matches_pattern_bad_regex() -> None:
    assert matches_pattern("(", "(") is False


@pytest.mark.parametrize("check", [is_date, is_url])
def test_surrounding_whitespace_rejected(check) -> None:
    """Dates and URLs share one policy: values are checked as given, never trimmed."""
    samples = {is_date: "2024-01-15", is_url: "https://example.com"}
    value = samples[check]
    assert check(value)
    assert not check(f" {value}")
    assert not check(f"{value}\t")
