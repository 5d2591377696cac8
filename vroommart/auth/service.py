# vroommart/auth/service.py

from datetime import timedelta, datetime, timezone
from typing import Annotated, Optional
from uuid import uuid4
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
import jwt
from jwt import PyJWTError
from authlib.integrations.starlette_client import OAuth
import logging

from . import models
from ..core.config import settings
from ..core.exceptions import AuthenticationError, VroomMartError, ErrorCode
from ..database.core import DbSession
from ..schemas.user import UserUpsert
from ..users.models import User
from ..users.service import UserService

logger = logging.getLogger(__name__)

# --- Configuration ---
SECRET_KEY = settings.ENCODING_SECRET_KEY
ALGORITHM = settings.ENCODING_ALGORITHM
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES
SESSION_TTL = timedelta(hours=settings.SESSION_TTL_HOURS)

bearer_scheme = HTTPBearer(auto_error=False)


def _utcnow() -> datetime:
    # session expiry is stored as naive UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


# --- OpenID Connect client ---
def get_oidc_client():
    """Get the OAuth client registered against the identity provider's discovery document."""
    if not settings.OIDC_CLIENT_ID:
        logger.error("Missing OIDC_CLIENT_ID in environment")
        raise VroomMartError(
            code=ErrorCode.INTERNAL_SERVER_ERROR,
            user_message="Login is not configured",
            technical_details="OIDC_CLIENT_ID is not set",
        )

    oauth_instance = OAuth()
    oauth_instance.register(
        name="oidc",
        client_id=settings.OIDC_CLIENT_ID,
        client_secret=settings.OIDC_CLIENT_SECRET or None,
        server_metadata_url=settings.OIDC_METADATA_URL,
        client_kwargs={"scope": settings.OIDC_SCOPE},
    )
    return oauth_instance.oidc


def user_from_claims(claims: dict) -> UserUpsert:
    """Map identity-provider claims onto the user identity fields."""
    subject = claims.get("sub")
    if not subject:
        raise AuthenticationError(message="Identity provider did not return a subject")
    return UserUpsert(
        id=str(subject),
        email=claims.get("email"),
        first_name=claims.get("first_name") or claims.get("given_name"),
        last_name=claims.get("last_name") or claims.get("family_name"),
        profile_image_url=claims.get("profile_image_url") or claims.get("picture"),
    )


def login_user(db: Session, claims: dict) -> User:
    """Upsert the user behind a successful identity-provider login."""
    return UserService.upsert_user(db, user_from_claims(claims))


# --- Sessions ---
def create_session(db: Session, user_id: str, claims: Optional[dict] = None) -> models.UserSession:
    try:
        session = models.UserSession(
            sid=uuid4().hex,
            user_id=user_id,
            sess=claims or {},
            expire=_utcnow() + SESSION_TTL,
        )
        db.add(session)
        db.commit()
        db.refresh(session)
        logger.info(f"Opened session for user {user_id}")
        return session
    except Exception as e:
        logger.error(f"Error creating session for user {user_id}: {e}")
        db.rollback()
        raise


def delete_session(db: Session, session_id: str) -> bool:
    deleted = db.query(models.UserSession).filter(models.UserSession.sid == session_id).delete(synchronize_session=False)
    db.commit()
    return bool(deleted)


def prune_expired_sessions(db: Session) -> int:
    deleted = (
        db.query(models.UserSession)
        .filter(models.UserSession.expire <= _utcnow())
        .delete(synchronize_session=False)
    )
    db.commit()
    if deleted:
        logger.info(f"Pruned {deleted} expired sessions")
    return deleted


# --- Tokens ---
def create_access_token(user_id: str, session_id: str, expires_delta: timedelta) -> str:
    """Signed bearer token; its `jti` is the server-side session id."""
    expire = datetime.now(timezone.utc) + expires_delta
    encode = {
        "sub": user_id,
        "jti": session_id,
        "exp": expire,
        "scope": "access_token",
    }
    return jwt.encode(encode, SECRET_KEY, algorithm=ALGORITHM)


def verify_token(db: Session, token: str) -> models.TokenData:
    """Decode the token and require its session to still exist and be unexpired."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except PyJWTError as e:
        logger.warning(f"JWT decode error: {e}")
        raise AuthenticationError(message="Invalid token")

    if payload.get("scope") != "access_token":
        raise AuthenticationError(message="Invalid token scope")

    session_id = payload.get("jti")
    user_id = payload.get("sub")
    if not session_id or not user_id:
        raise AuthenticationError(message="Token is missing session or subject")

    session = (
        db.query(models.UserSession)
        .filter(models.UserSession.sid == session_id, models.UserSession.user_id == user_id)
        .first()
    )
    if not session or session.expire <= _utcnow():
        raise AuthenticationError(message="Session has expired or been revoked")

    return models.TokenData(user_id=user_id, session_id=session_id)


def get_current_user(
    db: DbSession,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> models.TokenData:
    """FastAPI dependency resolving the bearer token to the acting user."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError(message="Not authenticated")
    return verify_token(db, credentials.credentials)


CurrentUser = Annotated[models.TokenData, Depends(get_current_user)]
