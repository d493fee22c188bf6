from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_config

from .v1.routers import favorites, history, reviews, watchlist

config = get_config()

# Docs can be switched off in production
docs_url = "/docs" if config.api.enable_docs else None
redoc_url = "/redoc" if config.api.enable_docs else None

cors_origins = config.api.cors_origins or ["*"]

app = FastAPI(
    title="Anime Companion API",
    description="Reviews, ratings and personal library for the anime streaming app",
    version="1.0.0",
    docs_url=docs_url,
    redoc_url=redoc_url,
    openapi_tags=[
        {"name": "System", "description": "Service status"},
        {"name": "Reviews", "description": "Reviews, votes, reports and rating stats"},
        {"name": "Favorites", "description": "Favorite anime"},
        {"name": "Watchlist", "description": "Watchlist and watch states"},
        {"name": "Watch history", "description": "Episode progress"},
    ],
)

if "*" in cors_origins:
    allowed_origins = ["*"]
    allow_credentials = False  # "*" cannot be combined with credentials
else:
    allowed_origins = cors_origins
    allow_credentials = True

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=allow_credentials,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=3600,
)

app.add_middleware(GZipMiddleware, minimum_size=1000)

app.include_router(reviews.router, prefix="/api")
app.include_router(favorites.router, prefix="/api")
app.include_router(watchlist.router, prefix="/api")
app.include_router(history.router, prefix="/api")


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed input is a plain 400, like every other client error here."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.get("/api/health", summary="Health check", tags=["System"])
async def health_check():
    return {"status": "ok", "message": "Review API is running"}


@app.get("/", summary="API root", tags=["System"])
async def root():
    return {
        "message": "Anime Companion API",
        "version": "1.0.0",
        "endpoints": {
            "health": "/api/health",
            "reviews": "/api/reviews",
            "favorites": "/api/favorites",
            "watchlist": "/api/watchlist",
            "history": "/api/history",
        },
    }


@app.on_event("startup")
async def startup_event():
    from shared.database import init_db

    from .v1.dependencies.security import initialize_api_security

    initialize_api_security()
    await init_db()


@app.on_event("shutdown")
async def shutdown_event():
    from shared.database import close_db

    await close_db()
