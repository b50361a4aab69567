from fastapi import APIRouter

router = APIRouter(prefix="/api")


@router.get("/")
async def read_root():
    """API health check endpoint."""
    return {"message": "Movie Tracker API is running!"}
