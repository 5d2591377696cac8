# main.py

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware
from contextlib import asynccontextmanager

from vroommart.core.config import settings
from vroommart.api.main import api_router
from vroommart.core.error_handlers import setup_error_handlers, add_request_id_middleware
from vroommart.core.rate_limiter import limiter
from vroommart.database.core import Base, engine, SessionLocal
from vroommart.auth.service import prune_expired_sessions
from vroommart.logging import logger

# Import models to ensure they are registered with SQLAlchemy
# Use central models file to avoid circular dependency issues
import vroommart.database.models  # noqa: F401


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    logger.info("Starting database initialization...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully")

    db = SessionLocal()
    try:
        prune_expired_sessions(db)
    finally:
        db.close()

    logger.info("VroomMart API startup completed")
    yield
    logger.info("VroomMart API shutting down")


app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    lifespan=lifespan
)

# Set up error handlers
setup_error_handlers(app)

# Rate limiting: decorated routes read the limiter from app state
app.state.limiter = limiter

# Session middleware keeps the OAuth state across the identity provider redirect
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET_KEY,
    same_site='lax',
    https_only=settings.ENVIRONMENT == 'production',
    max_age=60 * 60 * 2,
    session_cookie=settings.SESSION_COOKIE_NAME
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request ID middleware for better error tracking
app.middleware("http")(add_request_id_middleware)

app.include_router(api_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Simple health check endpoint"""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT)
