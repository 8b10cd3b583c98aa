#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Navigation helpers for parsed JSON documents.

Documents are the plain Python values produced by ``response.json()``.
Navigation never raises: a missing key, an out of range index or a step
into a scalar gives ``None``, the same value JSON ``null`` parses to.

Example::

    from jirasimple.json_nav import read, string_or_none

    doc = {"issues": [{"key": "TEST-1", "fields": {"summary": "Broken"}}]}
    read(doc, "issues", 0, "fields", "summary")   # 'Broken'
    read(doc, "issues", "9", "key")               # None
    string_or_none(read(doc, "issues", "0", "key"))
"""
import json
import uuid
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterator, Optional, Union


def read(document: Any, *path: Union[str, int]) -> Any:
    """Walk nested objects by key and arrays by index.

    :param document: Parsed JSON value
    :param path: Keys and indexes, indexes may be given as strings

    :return: The value found, or None
    """
    result = document
    for name in path:
        if isinstance(result, dict):
            key = name if isinstance(name, str) else str(name)
            if key not in result:
                return None
            result = result[key]
        elif isinstance(result, list):
            try:
                index = int(name)
            except (TypeError, ValueError):
                return None
            if index < 0 or index >= len(result):
                return None
            result = result[index]
        else:
            return None
    return result


def iter_array(value: Any) -> Iterator[Any]:
    """Yield the elements of a JSON array, nothing for other values."""
    if isinstance(value, list):
        yield from value


def boolean_or_none(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    return None


def int_or_none(value: Any) -> Optional[int]:
    """Return an integer for integral JSON numbers.

    Booleans and numbers with a fractional part give None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def float_or_none(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def decimal_or_none(value: Any) -> Optional[Decimal]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


def datetime_or_none(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string, None for anything else."""
    if not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def uuid_or_none(value: Any) -> Optional[uuid.UUID]:
    if not isinstance(value, str):
        return None
    try:
        return uuid.UUID(value)
    except ValueError:
        return None


def string_or_none(value: Any) -> Optional[str]:
    """Return strings as-is and booleans and numbers as their JSON text.

    Objects, arrays and null give None.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        return json.dumps(value)
    return None
