#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Unit tests for jirasimple.json_nav module."""
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from jirasimple.json_nav import (
    boolean_or_none,
    datetime_or_none,
    decimal_or_none,
    float_or_none,
    int_or_none,
    iter_array,
    read,
    string_or_none,
    uuid_or_none,
)


DOCUMENT = {
    "issues": [
        {"key": "TEST-1", "fields": {"summary": "Broken", "votes": 3}},
        {"key": "TEST-2", "fields": {"summary": None}},
    ],
    "total": 2,
}


class TestRead:
    """Tests for read()."""

    def test_nested_path(self):
        """Test walking objects and arrays."""
        assert read(DOCUMENT, "issues", 0, "fields", "summary") == "Broken"

    def test_index_as_string(self):
        """Test that array indexes may be given as strings."""
        assert read(DOCUMENT, "issues", "1", "key") == "TEST-2"

    def test_no_path_returns_document(self):
        """Test that an empty path returns the document itself."""
        assert read(DOCUMENT) is DOCUMENT

    @pytest.mark.parametrize(
        "path",
        [
            ("missing",),
            ("issues", 5),
            ("issues", -1),
            ("issues", "first"),
            ("total", "value"),
            ("issues", 1, "fields", "summary", "text"),
        ],
    )
    def test_missing_steps_give_none(self, path):
        """Test that navigation never raises."""
        assert read(DOCUMENT, *path) is None

    def test_none_document(self):
        """Test that reading from None gives None."""
        assert read(None, "a", "b") is None


class TestIterArray:
    """Tests for iter_array()."""

    def test_yields_elements(self):
        """Test iteration over an array."""
        assert [issue["key"] for issue in iter_array(DOCUMENT["issues"])] == ["TEST-1", "TEST-2"]

    @pytest.mark.parametrize("value", [None, {"a": 1}, "text", 3])
    def test_non_arrays_are_empty(self, value):
        """Test that other values yield nothing."""
        assert list(iter_array(value)) == []


class TestScalarConversions:
    """Tests for the typed accessors."""

    def test_boolean(self):
        """Test boolean conversion."""
        assert boolean_or_none(True) is True
        assert boolean_or_none(False) is False
        assert boolean_or_none("true") is None
        assert boolean_or_none(1) is None

    def test_int(self):
        """Test integer conversion."""
        assert int_or_none(42) == 42
        assert int_or_none(42.0) == 42
        assert int_or_none(42.5) is None
        assert int_or_none(True) is None
        assert int_or_none("42") is None

    def test_float(self):
        """Test float conversion."""
        assert float_or_none(3) == 3.0
        assert float_or_none(2.5) == 2.5
        assert float_or_none(False) is None
        assert float_or_none(None) is None

    def test_decimal(self):
        """Test decimal conversion keeps the textual value."""
        assert decimal_or_none(0.1) == Decimal("0.1")
        assert decimal_or_none(7) == Decimal(7)
        assert decimal_or_none("0.1") is None

    def test_datetime(self):
        """Test ISO-8601 parsing with an offset."""
        value = datetime_or_none("2024-01-02T03:04:05+02:00")
        assert value == datetime(2024, 1, 2, 1, 4, 5, tzinfo=timezone.utc)
        assert value.utcoffset() == timedelta(hours=2)

    def test_datetime_with_z_suffix(self):
        """Test that a trailing Z means UTC."""
        assert datetime_or_none("2024-01-02T03:04:05Z") == datetime(
            2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc
        )

    def test_datetime_invalid(self):
        """Test that unparseable values give None."""
        assert datetime_or_none("yesterday") is None
        assert datetime_or_none(12) is None

    def test_uuid(self):
        """Test UUID parsing."""
        raw = "12345678-1234-5678-1234-567812345678"
        assert uuid_or_none(raw) == uuid.UUID(raw)
        assert uuid_or_none("not-a-uuid") is None
        assert uuid_or_none(None) is None

    def test_string(self):
        """Test string conversion of scalars."""
        assert string_or_none("text") == "text"
        assert string_or_none(True) == "true"
        assert string_or_none(12) == "12"
        assert string_or_none(1.5) == "1.5"

    @pytest.mark.parametrize("value", [None, {"a": 1}, [1, 2]])
    def test_string_of_containers_is_none(self, value):
        """Test that objects, arrays and null give None."""
        assert string_or_none(value) is None
