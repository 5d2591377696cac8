# vroommart/core/config.py
import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    # --- API Info ---
    API_TITLE: str = "VroomMart API"
    API_DESCRIPTION: str = "Social commerce backend: products, vrooms, follows, likes, comments, cart, pay-on-delivery orders and direct messages."
    API_VERSION: str = "1.0.0"

    # --- Server Configuration ---
    PORT: int = int(os.getenv("PORT", "8000"))
    HOST: str = os.getenv("HOST", "0.0.0.0")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # --- Database ---
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")
    DATABASE_ECHO: bool = os.getenv("DATABASE_ECHO", "0") == "1"

    # --- Sessions and tokens ---
    SESSION_SECRET_KEY: str = os.getenv("SESSION_SECRET_KEY", "fallback-secret-key")
    SESSION_COOKIE_NAME: str = os.getenv("SESSION_COOKIE_NAME", "vm_session")
    SESSION_TTL_HOURS: int = int(os.getenv("SESSION_TTL_HOURS", str(24 * 7)))
    ENCODING_SECRET_KEY: str = os.getenv("ENCODING_SECRET_KEY") or "dev-secret-change-me"
    ENCODING_ALGORITHM: str = os.getenv("ENCODING_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))

    # --- OpenID Connect identity provider ---
    OIDC_CLIENT_ID: str = os.getenv("OIDC_CLIENT_ID", "")
    OIDC_CLIENT_SECRET: str = os.getenv("OIDC_CLIENT_SECRET", "")
    OIDC_METADATA_URL: str = os.getenv("OIDC_METADATA_URL", "https://replit.com/oidc/.well-known/openid-configuration")
    OIDC_SCOPE: str = os.getenv("OIDC_SCOPE", "openid email profile offline_access")
    OIDC_REDIRECT_URI: str = os.getenv("OIDC_REDIRECT_URI", "")

    # --- Frontend ---
    FRONTEND_BASE_URL: str = os.getenv("FRONTEND_BASE_URL", "http://localhost:5173")
    CORS_ORIGINS: list[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
        if origin.strip()
    ]

    # --- Feed and analytics defaults ---
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100
    DEFAULT_TRENDING_LIMIT: int = 10

    # --- Rate limits (slowapi syntax) ---
    PRODUCT_CREATE_RATE_LIMIT: str = os.getenv("PRODUCT_CREATE_RATE_LIMIT", "30/minute")
    MESSAGE_SEND_RATE_LIMIT: str = os.getenv("MESSAGE_SEND_RATE_LIMIT", "60/minute")

settings = Settings()
