from fastapi import APIRouter

from app.schemas import HealthResponse, WelcomeResponse

VERSION = "1.0.0"

router = APIRouter(tags=["service"])


@router.get("/", response_model=WelcomeResponse)
async def welcome():
    return {
        "message": "Welcome to the Guest Book API",
        "version": VERSION,
        "endpoints": {
            "health": "GET /health",
            "comments": "GET /comments",
            "createComment": "POST /comments",
        },
    }


@router.get("/health", response_model=HealthResponse)
async def health():
    return {"status": "healthy", "version": VERSION}
