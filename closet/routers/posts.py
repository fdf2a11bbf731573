import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from fastapi.encoders import jsonable_encoder
from sqlalchemy.orm import Session
from closet.config import settings
from closet.core.exceptions import AuthorizationError, NotFoundError
from closet.database import get_db
from closet.models import Outfit, Post, User
from closet.schemas import CursorPage, PostCreate, PostResponse
from closet.utils.auth import get_current_user
from closet.utils.cache import get_cached_feed_page, set_cached_feed_page, invalidate_feed
from closet.utils.cloudinary_helper import store_image, delete_image_from_cloudinary
from closet.utils.outfits import serialize_outfits
from closet.utils.pagination import paginate_newest_first

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["Posts"])

ANONYMOUS_USERNAME = "Anonymous"


def _serialize_posts(db: Session, posts: List[Post]) -> List[dict]:
    """Attach each post's outfit, with items, resolved in one pass."""
    outfit_ids = {p.outfit_id for p in posts if p.outfit_id is not None}
    outfits = db.query(Outfit).filter(Outfit.id.in_(outfit_ids)).all() if outfit_ids else []
    by_id = {o["id"]: o for o in serialize_outfits(db, outfits)}
    return [
        {
            "id": post.id,
            "user_id": post.user_id,
            "username": post.username,
            "user_profile_picture": post.user_profile_picture,
            "caption": post.caption,
            "image_url": post.image_url,
            "outfit_id": post.outfit_id,
            "date": post.date,
            "created_at": post.created_at,
            "outfit": by_id.get(post.outfit_id),
        }
        for post in posts
    ]


def _page(db: Session, query, limit: int, cursor: Optional[str]) -> dict:
    posts, next_cursor, has_more = paginate_newest_first(query, Post, limit, cursor)
    return {"items": _serialize_posts(db, posts), "next_cursor": next_cursor, "has_more": has_more}


@router.get("/feed", response_model=CursorPage[PostResponse])
async def get_feed(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    cursor: Optional[str] = Query(None, description="Cursor from the previous page"),
    limit: Optional[int] = Query(None, ge=1, le=50),
):
    """
    Posts from everyone, newest first. The first page is served from cache when warm.
    """
    limit = limit or settings.POSTS_PAGE_SIZE
    if cursor is None:
        cached = get_cached_feed_page(limit)
        if cached is not None:
            return cached

    page = _page(db, db.query(Post), limit, cursor)
    if cursor is None:
        set_cached_feed_page(limit, jsonable_encoder(page))
    return page


@router.get("/mine", response_model=CursorPage[PostResponse])
async def get_my_posts(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    cursor: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=50),
):
    """
    The caller's own posts, for the profile screen.
    """
    query = db.query(Post).filter(Post.user_id == current_user.id)
    return _page(db, query, limit or settings.POSTS_PAGE_SIZE, cursor)


@router.post("", response_model=PostResponse, status_code=201)
async def create_post(
    payload: PostCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Share one of the caller's outfits to the feed.
    """
    outfit = db.query(Outfit).filter(Outfit.id == payload.outfit_id, Outfit.user_id == current_user.id).first()
    if not outfit:
        raise NotFoundError("Outfit", payload.outfit_id)

    stored = await store_image(payload.image, folder="posts", tags=["post"])
    post = Post(
        user_id=current_user.id,
        username=current_user.username or ANONYMOUS_USERNAME,
        user_profile_picture=current_user.profile_picture or "",
        caption=payload.caption,
        image_url=stored["url"],
        cloudinary_id=stored["public_id"],
        outfit_id=outfit.id,
        date=payload.date,
    )
    db.add(post)
    db.commit()
    db.refresh(post)

    invalidate_feed()
    logger.info(f"User {current_user.id} shared outfit {outfit.id} as post {post.id}")
    return _serialize_posts(db, [post])[0]


@router.delete("/{post_id}", status_code=204)
async def delete_post(
    post_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    post = db.query(Post).filter(Post.id == post_id).first()
    if not post:
        raise NotFoundError("Post", post_id)
    if post.user_id != current_user.id:
        raise AuthorizationError("You can only delete your own posts")

    cloudinary_id = post.cloudinary_id
    db.delete(post)
    db.commit()

    if cloudinary_id:
        await delete_image_from_cloudinary(cloudinary_id)
    invalidate_feed()
