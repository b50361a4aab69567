# Authentication API routes for user registration, login, and profile management

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from movie_tracker.db import get_app_db
from movie_tracker.db_handlers import UserDBHandler
from movie_tracker.dependencies import get_current_user, get_user_handler
from movie_tracker.exceptions import AccountExistsError
from movie_tracker.models import User
from movie_tracker.schemas import (
    RegisterResponse,
    Token,
    UserInfo,
    UserLogin,
    UserRegister,
    error_responses,
)
from movie_tracker.utils.auth import create_user_token, get_password_hash, verify_password
from movie_tracker.utils.logger import setup_logger

logger = setup_logger("api.auth")

router = APIRouter(
    prefix="/api/auth",
    tags=["Authentication"],
    responses=error_responses(400, 401, 422),
)


@router.post(
    "/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED
)
async def register_user(
    user_data: UserRegister,
    db: AsyncSession = Depends(get_app_db),
    user_db_handler: UserDBHandler = Depends(get_user_handler),
):
    """Register a new account and return a token so the client is logged in."""
    existing_user = await user_db_handler.find_conflicting_user(
        user_data.username, user_data.email, db=db
    )
    if existing_user:
        raise AccountExistsError("Username or email already registered")

    # Password is hashed with bcrypt before storage
    hashed_password = get_password_hash(user_data.password)
    try:
        user = await user_db_handler.create(
            {
                "username": user_data.username,
                "email": user_data.email,
                "hashed_password": hashed_password,
            },
            db=db,
        )
    except IntegrityError as e:
        raise AccountExistsError("Username or email already registered") from e

    logger.info(f"Registered user {user.username} (ID: {user.id})")
    return RegisterResponse(
        message="User registered successfully",
        access_token=create_user_token(user.id),
        token_type="bearer",
    )


@router.post("/login", response_model=Token)
async def login_user(
    user_data: UserLogin,
    db: AsyncSession = Depends(get_app_db),
    user_db_handler: UserDBHandler = Depends(get_user_handler),
):
    """Authenticate by email and password and return a JWT for API access."""
    user = await user_db_handler.get_user_by_email(user_data.email, db=db)

    if not user or not verify_password(user_data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return Token(access_token=create_user_token(user.id), token_type="bearer")


@router.get("/me", response_model=UserInfo)
async def get_current_user_info(
    current_user: User = Depends(get_current_user),
):
    """Retrieve current authenticated user's profile information."""
    return UserInfo.model_validate(current_user)
