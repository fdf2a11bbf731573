"""
Keyset (cursor) pagination over ``created_at DESC, id DESC``.

Cursors are opaque url-safe base64 JSON blobs holding the sort key of the
last row a client has seen.
"""
import base64
import binascii
import json
from datetime import datetime
from typing import Any, List, Optional, Tuple

from sqlalchemy import and_, or_
from sqlalchemy.orm import Query

from closet.core.exceptions import ValidationError


def encode_cursor(created_at: datetime, row_id: int) -> str:
    raw = json.dumps({"created_at": created_at.isoformat(), "id": row_id})
    return base64.urlsafe_b64encode(raw.encode()).decode()


def decode_cursor(cursor: str) -> Tuple[datetime, int]:
    try:
        data = json.loads(base64.urlsafe_b64decode(cursor.encode()).decode())
        return datetime.fromisoformat(data["created_at"]), int(data["id"])
    except (binascii.Error, UnicodeDecodeError, ValueError, KeyError, TypeError):
        raise ValidationError("Invalid pagination cursor", field="cursor")


def paginate_newest_first(query: Query, model: Any, limit: int, cursor: Optional[str] = None) -> Tuple[List[Any], Optional[str], bool]:
    """Return ``(rows, next_cursor, has_more)`` for one page of ``query``.

    One extra row is fetched to tell whether another page exists.
    """
    if cursor:
        created_at, row_id = decode_cursor(cursor)
        query = query.filter(
            or_(
                model.created_at < created_at,
                and_(model.created_at == created_at, model.id < row_id),
            )
        )

    rows = (
        query.order_by(model.created_at.desc(), model.id.desc())
        .limit(limit + 1)
        .all()
    )
    has_more = len(rows) > limit
    rows = rows[:limit]
    next_cursor = encode_cursor(rows[-1].created_at, rows[-1].id) if has_more and rows else None
    return rows, next_cursor, has_more
