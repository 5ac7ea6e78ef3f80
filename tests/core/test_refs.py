"""Tests for reference normalization."""

import pytest

from session_desk.core.refs import normalize_ref


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("b1", "b1"),
        ({"_id": "b1", "batchName": "Morning"}, "b1"),
        ({"id": "b1"}, "b1"),
        ({"_id": {"_id": "b1"}}, "b1"),
        (None, None),
        ("", None),
        ({}, None),
        (42, "42"),
    ],
)
def test_normalize_ref(value, expected) -> None:
    assert normalize_ref(value) == expected
