"""
Outfit helpers shared by the outfit, calendar and feed routers.
"""
import logging
from typing import Dict, Iterable, List, Optional, Sequence

from sqlalchemy.orm import Session

from closet.models import ClothingItem, Outfit
from closet.utils.colors import derive_outfit_color

logger = logging.getLogger(__name__)


def is_duplicate_selection(existing_item_ids: Sequence[int], selected_item_ids: Sequence[int]) -> bool:
    """Same number of items and every existing item is among the selection."""
    return len(existing_item_ids) == len(selected_item_ids) and set(existing_item_ids) == set(selected_item_ids)


def find_duplicate_outfit(db: Session, user_id: int, item_ids: Sequence[int], exclude_id: Optional[int] = None) -> Optional[Outfit]:
    query = db.query(Outfit).filter(Outfit.user_id == user_id)
    if exclude_id is not None:
        query = query.filter(Outfit.id != exclude_id)
    for outfit in query.all():
        if is_duplicate_selection(outfit.item_ids, item_ids):
            return outfit
    return None


def load_items(db: Session, item_ids: Iterable[int], user_id: Optional[int] = None) -> Dict[int, ClothingItem]:
    ids = {item_id for item_id in item_ids if item_id is not None}
    if not ids:
        return {}
    query = db.query(ClothingItem).filter(ClothingItem.id.in_(ids))
    if user_id is not None:
        query = query.filter(ClothingItem.user_id == user_id)
    return {item.id: item for item in query.all()}


def outfit_color(outfit: Outfit, items: List[ClothingItem]) -> str:
    """Persisted color when present, else a display-only derived one."""
    return derive_outfit_color([item.color for item in items], override=outfit.color)


def serialize_outfit(outfit: Outfit, items_by_id: Dict[int, ClothingItem]) -> dict:
    # Ids of deleted items are dropped, order is kept
    items = [items_by_id[item_id] for item_id in outfit.item_ids if item_id in items_by_id]
    return {
        "id": outfit.id,
        "user_id": outfit.user_id,
        "name": outfit.name,
        "items": [item.to_summary() for item in items],
        "favorite": bool(outfit.favorite),
        "color": outfit_color(outfit, items),
        "color_is_derived": not outfit.color,
        "image_url": outfit.image_url,
        "created_at": outfit.created_at,
    }


def serialize_outfits(db: Session, outfits: Sequence[Outfit]) -> List[dict]:
    """Serialize several outfits with a single item lookup."""
    items_by_id = load_items(db, (item_id for outfit in outfits for item_id in outfit.item_ids))
    return [serialize_outfit(outfit, items_by_id) for outfit in outfits]


def remove_item_from_outfits(db: Session, user_id: int, item_id: int) -> int:
    """Strip ``item_id`` from every outfit of ``user_id``. Persisted colors are left alone."""
    touched = 0
    for outfit in db.query(Outfit).filter(Outfit.user_id == user_id).all():
        if item_id in outfit.item_ids:
            # JSON columns only notice reassignment, not in-place mutation
            outfit.items = [i for i in outfit.item_ids if i != item_id]
            touched += 1
    if touched:
        logger.info(f"Removed item {item_id} from {touched} outfit(s) of user {user_id}")
    return touched


def count_outfits_using(db: Session, user_id: int, item_id: int) -> int:
    return sum(1 for outfit in db.query(Outfit).filter(Outfit.user_id == user_id).all() if item_id in outfit.item_ids)
