from datetime import datetime
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StrictInt,
    field_validator,
)


# ===== Catalog =====
class MovieDescriptor(BaseModel):
    """Normalized movie metadata, from OMDb or supplied by the client."""

    imdb_id: str = Field(..., min_length=1, max_length=20)
    title: str = Field(..., min_length=1, max_length=255)
    year: str | None = None
    poster: str | None = None

    def to_row(self) -> dict:
        return self.model_dump()


class MovieReference(BaseModel):
    """An IMDb id plus optional client-known metadata used when the movie is new."""

    imdb_id: str = Field(..., min_length=1, max_length=20, description="IMDb id, e.g. tt0111161")
    title: str | None = Field(None, max_length=255, description="Title to use if the movie is new")
    year: str | None = Field(None, max_length=20)
    poster: str | None = Field(None, max_length=1024)

    @field_validator("imdb_id")
    @classmethod
    def strip_imdb_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("imdb_id must not be blank")
        return v

    def fallback_descriptor(self) -> MovieDescriptor | None:
        """Client metadata as a descriptor, or None when no title was given."""
        if not self.title:
            return None
        return MovieDescriptor(
            imdb_id=self.imdb_id, title=self.title, year=self.year, poster=self.poster
        )


class MovieInfo(BaseModel):
    id: UUID
    imdb_id: str
    title: str
    year: str | None = None
    poster: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ===== Accounts =====
class UserRegister(BaseModel):
    username: str = Field(
        ..., min_length=3, max_length=50, description="Username for the new account"
    )
    email: EmailStr = Field(..., description="Contact address, used to log in")
    password: str = Field(
        ..., min_length=6, max_length=100, description="Password for the new account"
    )


class UserLogin(BaseModel):
    email: EmailStr = Field(..., description="Email used at registration")
    password: str = Field(..., description="Password for login")


class Token(BaseModel):
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")


class RegisterResponse(Token):
    message: str = Field(..., description="Response message")


class UserInfo(BaseModel):
    id: UUID = Field(..., description="User unique identifier")
    username: str = Field(..., description="Username")
    email: str = Field(..., description="Email address")
    created_at: datetime = Field(..., description="Account creation timestamp")

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str = Field(..., description="Response message")


class ErrorResponse(BaseModel):
    kind: str = Field(..., description="Machine-checkable error kind")
    detail: str | list = Field(..., description="Human-readable explanation")


def error_responses(*status_codes: int) -> dict:
    """OpenAPI ``responses`` entries documenting the {kind, detail} error body."""
    return {code: {"model": ErrorResponse} for code in status_codes}


# ===== Watchlist =====
class WatchlistAddRequest(MovieReference):
    pass


class WatchlistEntryInfo(BaseModel):
    id: UUID
    user_id: UUID
    movie_id: UUID
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class WatchlistItem(BaseModel):
    entry: WatchlistEntryInfo
    movie: MovieInfo


# ===== Reviews =====
class ReviewCreateRequest(MovieReference):
    # Strict: JSON true or "7" must not be coerced into a score
    rating: StrictInt = Field(..., description="Score from 1 to 10")
    comment: str | None = Field(None, description="Optional review text")


class ReviewUpdateRequest(BaseModel):
    rating: StrictInt | None = Field(None, description="New score from 1 to 10")
    comment: str | None = Field(None, description="New review text")


class ReviewInfo(BaseModel):
    id: UUID
    user_id: UUID
    movie_id: UUID
    rating: int
    comment: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthorInfo(BaseModel):
    id: UUID
    username: str


class ReviewWithMovie(BaseModel):
    review: ReviewInfo
    movie: MovieInfo


class ReviewWithAuthor(BaseModel):
    review: ReviewInfo
    author: AuthorInfo
