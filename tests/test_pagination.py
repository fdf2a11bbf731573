"""
Unit tests for cursor encoding.
"""
import base64
from datetime import datetime

import pytest

from closet.core.exceptions import ValidationError
from closet.utils.pagination import decode_cursor, encode_cursor


def test_cursor_carries_sort_key():
    created_at = datetime(2024, 5, 3, 12, 30, 15, 123456)
    assert decode_cursor(encode_cursor(created_at, 42)) == (created_at, 42)


@pytest.mark.parametrize("cursor", [
    "not-a-cursor",
    base64.urlsafe_b64encode(b'{"id": 1}').decode(),
    base64.urlsafe_b64encode(b'{"created_at": "yesterday", "id": 1}').decode(),
])
def test_bad_cursors_are_validation_errors(cursor):
    with pytest.raises(ValidationError) as exc:
        decode_cursor(cursor)
    assert exc.value.details == {"field": "cursor"}
