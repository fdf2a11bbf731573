import logging
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from slowapi import Limiter
from slowapi.util import get_remote_address
from closet.config import settings
from closet.core.exceptions import ConflictError
from closet.database import get_db
from closet.models import User
from closet.schemas import UserCreate, UserResponse, UserUpdate, ProfilePictureUpdate, Token
from closet.utils.auth import get_password_hash, verify_password, create_access_token, get_current_user
from closet.utils.cloudinary_helper import store_image, delete_image_from_cloudinary

logger = logging.getLogger(__name__)

# Rate limiter for auth endpoints (registered on the app in main)
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={
        401: {"description": "Not authenticated - invalid or missing credentials"},
        429: {"description": "Too many requests - rate limit exceeded"},
    }
)


def _ensure_username_free(db: Session, username: str, user_id: int = None) -> None:
    query = db.query(User).filter(User.username == username)
    if user_id is not None:
        query = query.filter(User.id != user_id)
    if query.first():
        raise ConflictError("Username already taken", details={"username": username})


@router.post("/signup", response_model=UserResponse, status_code=201)
@limiter.limit("5/minute")  # Prevent signup abuse
async def create_user(request: Request, user: UserCreate, db: Session = Depends(get_db)):
    if db.query(User).filter(User.email == user.email).first():
        raise HTTPException(status_code=400, detail="Email already registered")
    if user.username:
        _ensure_username_free(db, user.username)
    db_user = User(
        email=user.email,
        hashed_password=get_password_hash(user.password),
        full_name=user.full_name,
        username=user.username,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    logger.info(f"Created user {db_user.id}")
    return db_user


@router.post("/login", response_model=Token)
@limiter.limit("10/minute")  # Prevent brute force attacks
async def login_for_access_token(request: Request, form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    # OAuth2PasswordRequestForm stores email in 'username' field
    user = db.query(User).filter(User.email == form_data.username).first()
    if not user or not verify_password(form_data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    access_token = create_access_token(data={"sub": user.email})
    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/me", response_model=UserResponse)
async def read_users_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.patch("/me", response_model=UserResponse)
async def update_users_me(
    payload: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    # Update only provided fields
    updated = False
    if payload.full_name is not None:
        current_user.full_name = payload.full_name
        updated = True
    if payload.username is not None and payload.username != current_user.username:
        _ensure_username_free(db, payload.username, current_user.id)
        current_user.username = payload.username
        updated = True

    if not updated:
        return current_user

    db.add(current_user)
    db.commit()
    db.refresh(current_user)
    return current_user


@router.post("/me/picture", response_model=UserResponse)
async def update_profile_picture(
    payload: ProfilePictureUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    stored = await store_image(payload.image, folder="profiles", tags=["profile"])
    if current_user.profile_picture_id:
        await delete_image_from_cloudinary(current_user.profile_picture_id)

    current_user.profile_picture = stored["url"]
    current_user.profile_picture_id = stored["public_id"]
    db.add(current_user)
    db.commit()
    db.refresh(current_user)
    return current_user
