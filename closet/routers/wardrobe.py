import logging
from fastapi import APIRouter, Query, Response, Depends
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from closet.schemas import (
    ClothingItem as ClothingItemSchema,
    ClothingItemCreate,
    ClothingItemUpdate,
    ItemUsage,
    ItemDeleteResponse,
)
from closet.models import ClothingItem as ClothingItemModel, User
from closet.database import get_db
from closet.core.exceptions import NotFoundError
from closet.utils.auth import get_current_user
from closet.utils.cache import invalidate_feed
from closet.utils.cloudinary_helper import (
    store_image,
    delete_image_from_cloudinary,
    get_cloudinary_status,
)
from closet.utils.outfits import remove_item_from_outfits, count_outfits_using
from closet.utils.search import LIKE_ESCAPE, contains_pattern

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_owned_item(db: Session, item_id: int, user: User) -> ClothingItemModel:
    item = (
        db.query(ClothingItemModel)
        .filter(ClothingItemModel.id == item_id, ClothingItemModel.user_id == user.id)
        .first()
    )
    if not item:
        raise NotFoundError("Item", item_id)
    return item


@router.get("", response_model=List[ClothingItemSchema])
async def get_wardrobe_items(
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    q: Optional[str] = Query(None, description="Search query across name and type"),
    type: Optional[str] = Query(None, description="Filter by item type (exact match)"),
    page: int = Query(1, ge=1, description="Page number (1-based)"),
    page_size: int = Query(50, ge=1, le=100, description="Items per page (max 100)"),
):
    """
    Get the caller's closet, ordered by name, with pagination.
    """
    query = db.query(ClothingItemModel).filter(ClothingItemModel.user_id == current_user.id)

    # Filtering
    if q:
        pattern = contains_pattern(q)
        query = query.filter(
            (ClothingItemModel.name.ilike(pattern, escape=LIKE_ESCAPE)) |
            (ClothingItemModel.type.ilike(pattern, escape=LIKE_ESCAPE))
        )
    if type:
        query = query.filter(func.lower(ClothingItemModel.type) == type.lower())

    # Get total count before pagination
    total = query.count()

    items = (
        query.order_by(ClothingItemModel.name.asc(), ClothingItemModel.id.asc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )

    # Set total count header for pagination
    response.headers["X-Total-Count"] = str(total)

    return [item.to_dict() for item in items]


# IMPORTANT: Specific routes must come BEFORE parameterized routes like /{item_id}
@router.get("/cloudinary-status")
async def cloudinary_status():
    """
    Check Cloudinary configuration status
    """
    return get_cloudinary_status()


@router.get("/{item_id}", response_model=ClothingItemSchema)
async def get_wardrobe_item(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Get a specific clothing item by ID
    """
    return _get_owned_item(db, item_id, current_user).to_dict()


@router.get("/{item_id}/usage", response_model=ItemUsage)
async def get_item_usage(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Number of outfits that would lose this item if it were deleted
    """
    _get_owned_item(db, item_id, current_user)
    return {"item_id": item_id, "outfit_count": count_outfits_using(db, current_user.id, item_id)}


@router.post("", response_model=ClothingItemSchema, status_code=201)
async def create_wardrobe_item(
    payload: ClothingItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Add a new item to the closet
    """
    stored = await store_image(payload.image, folder="items", tags=["closet", payload.type.lower()])

    new_item = ClothingItemModel(
        user_id=current_user.id,
        name=payload.name.strip(),
        type=payload.type,
        color=payload.color,
        image_url=stored["url"],
        cloudinary_id=stored["public_id"],
    )
    db.add(new_item)
    db.commit()
    db.refresh(new_item)

    return new_item.to_dict()


@router.patch("/{item_id}", response_model=ClothingItemSchema)
async def update_wardrobe_item(
    item_id: int,
    payload: ClothingItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Update a clothing item by ID. Outfit colors persisted earlier are not recomputed.
    """
    item = _get_owned_item(db, item_id, current_user)

    if payload.name is not None:
        item.name = payload.name.strip()
    if payload.type is not None:
        item.type = payload.type
    if payload.color is not None:
        item.color = payload.color

    # Update image if provided
    if payload.image and payload.image != item.image_url:
        stored = await store_image(payload.image, folder="items", tags=["closet", item.type.lower()])
        if item.cloudinary_id:
            await delete_image_from_cloudinary(item.cloudinary_id)
        item.image_url = stored["url"]
        item.cloudinary_id = stored["public_id"]

    db.commit()
    db.refresh(item)

    # Feed cards embed item summaries
    invalidate_feed()

    return item.to_dict()


@router.delete("/{item_id}", response_model=ItemDeleteResponse)
async def delete_wardrobe_item(
    item_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Delete a clothing item and drop it from every outfit that contains it
    """
    item = _get_owned_item(db, item_id, current_user)

    touched = remove_item_from_outfits(db, current_user.id, item.id)
    cloudinary_id = item.cloudinary_id
    db.delete(item)
    db.commit()

    # Delete from Cloudinary if it was uploaded there
    if cloudinary_id:
        await delete_image_from_cloudinary(cloudinary_id)

    invalidate_feed()
    logger.info(f"Deleted item {item_id} for user {current_user.id}")

    return {"status": "ok", "removed_from_outfits": touched}
