import logging
from fastapi import APIRouter, Query, Depends
from typing import Optional
from sqlalchemy.orm import Session
from closet.config import settings
from closet.core.exceptions import DuplicateOutfitError, NotFoundError, ValidationError
from closet.database import get_db
from closet.models import Outfit, CalendarEntry, Post, User
from closet.schemas import (
    CursorPage,
    OutfitCreate,
    OutfitUpdate,
    OutfitResponse,
    ColorPreviewRequest,
    ColorPreviewResponse,
)
from closet.utils.auth import get_current_user
from closet.utils.cache import invalidate_feed
from closet.utils.cloudinary_helper import store_image, delete_image_from_cloudinary
from closet.utils.colors import derive_outfit_color
from closet.utils.outfits import find_duplicate_outfit, load_items, serialize_outfit, serialize_outfits
from closet.utils.pagination import paginate_newest_first
from closet.utils.search import LIKE_ESCAPE, contains_pattern

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/outfits", tags=["Outfits"])


def _get_owned_outfit(db: Session, outfit_id: int, user: User) -> Outfit:
    outfit = db.query(Outfit).filter(Outfit.id == outfit_id, Outfit.user_id == user.id).first()
    if not outfit:
        raise NotFoundError("Outfit", outfit_id)
    return outfit


def _require_owned_items(db: Session, item_ids, user: User):
    """Load the selected items, failing if any is missing or belongs to someone else."""
    items_by_id = load_items(db, item_ids, user_id=user.id)
    missing = [item_id for item_id in item_ids if item_id not in items_by_id]
    if missing:
        raise ValidationError(f"Unknown clothing items: {missing}", field="item_ids")
    return items_by_id


def _reject_duplicate(db: Session, user: User, item_ids, exclude_id=None) -> None:
    duplicate = find_duplicate_outfit(db, user.id, item_ids, exclude_id=exclude_id)
    if duplicate:
        logger.info(f"Rejected duplicate outfit for user {user.id} (matches outfit {duplicate.id})")
        raise DuplicateOutfitError(duplicate.id)


@router.get("", response_model=CursorPage[OutfitResponse])
async def list_outfits(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    cursor: Optional[str] = Query(None, description="Cursor from the previous page"),
    limit: Optional[int] = Query(None, ge=1, le=100, description="Outfits per page"),
    search: Optional[str] = Query(None, description="Case-insensitive name filter"),
    favorites_only: bool = Query(False),
):
    """
    The caller's outfits, newest first.
    """
    query = db.query(Outfit).filter(Outfit.user_id == current_user.id)
    if search:
        query = query.filter(Outfit.name.ilike(contains_pattern(search), escape=LIKE_ESCAPE))
    if favorites_only:
        query = query.filter(Outfit.favorite.is_(True))

    outfits, next_cursor, has_more = paginate_newest_first(
        query, Outfit, limit or settings.OUTFITS_PAGE_SIZE, cursor
    )
    return {"items": serialize_outfits(db, outfits), "next_cursor": next_cursor, "has_more": has_more}


@router.post("/color-preview", response_model=ColorPreviewResponse)
async def preview_outfit_color(
    payload: ColorPreviewRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Color an unsaved selection would get. Nothing is persisted.
    """
    items_by_id = _require_owned_items(db, payload.item_ids, current_user)
    colors = [items_by_id[item_id].color for item_id in payload.item_ids]
    return {"color": derive_outfit_color(colors, override=payload.override)}


@router.post("", response_model=OutfitResponse, status_code=201)
async def create_outfit(
    payload: OutfitCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Create an outfit. Its color is derived once from the items and persisted.
    """
    items_by_id = _require_owned_items(db, payload.item_ids, current_user)

    _reject_duplicate(db, current_user, payload.item_ids)

    stored = await store_image(payload.image, folder="outfits", tags=["outfit"])
    color = derive_outfit_color([items_by_id[item_id].color for item_id in payload.item_ids])

    outfit = Outfit(
        user_id=current_user.id,
        name=payload.name,
        items=list(payload.item_ids),
        favorite=False,
        color=color,
        image_url=stored["url"],
        cloudinary_id=stored["public_id"],
    )
    db.add(outfit)
    db.commit()
    db.refresh(outfit)
    logger.info(f"Created outfit {outfit.id} for user {current_user.id} with color {color}")

    return serialize_outfit(outfit, items_by_id)


@router.get("/{outfit_id}", response_model=OutfitResponse)
async def get_outfit(
    outfit_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    outfit = _get_owned_outfit(db, outfit_id, current_user)
    return serialize_outfit(outfit, load_items(db, outfit.item_ids))


@router.patch("/{outfit_id}", response_model=OutfitResponse)
async def update_outfit(
    outfit_id: int,
    payload: OutfitUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Edit an outfit. A supplied color is persisted and wins over derivation from then on.
    """
    outfit = _get_owned_outfit(db, outfit_id, current_user)

    if payload.name is not None:
        outfit.name = payload.name.strip()
    if payload.favorite is not None:
        outfit.favorite = payload.favorite
    if payload.item_ids is not None:
        _require_owned_items(db, payload.item_ids, current_user)
        _reject_duplicate(db, current_user, payload.item_ids, exclude_id=outfit.id)
        outfit.items = list(payload.item_ids)
    if payload.color is not None:
        outfit.color = payload.color
    if payload.image and payload.image != outfit.image_url:
        stored = await store_image(payload.image, folder="outfits", tags=["outfit"])
        if outfit.cloudinary_id:
            await delete_image_from_cloudinary(outfit.cloudinary_id)
        outfit.image_url = stored["url"]
        outfit.cloudinary_id = stored["public_id"]

    db.commit()
    db.refresh(outfit)
    invalidate_feed()

    return serialize_outfit(outfit, load_items(db, outfit.item_ids))


@router.post("/{outfit_id}/favorite", response_model=OutfitResponse)
async def toggle_favorite(
    outfit_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    outfit = _get_owned_outfit(db, outfit_id, current_user)
    outfit.favorite = not outfit.favorite
    db.commit()
    db.refresh(outfit)
    invalidate_feed()
    return serialize_outfit(outfit, load_items(db, outfit.item_ids))


@router.delete("/{outfit_id}", status_code=204)
async def delete_outfit(
    outfit_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Delete an outfit and its calendar entries. Posts that shared it stay, without an outfit.
    """
    outfit = _get_owned_outfit(db, outfit_id, current_user)

    db.query(CalendarEntry).filter(CalendarEntry.outfit_id == outfit.id).delete(synchronize_session=False)
    db.query(Post).filter(Post.outfit_id == outfit.id).update({Post.outfit_id: None}, synchronize_session=False)
    cloudinary_id = outfit.cloudinary_id
    db.delete(outfit)
    db.commit()

    if cloudinary_id:
        await delete_image_from_cloudinary(cloudinary_id)
    invalidate_feed()
