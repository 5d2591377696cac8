# vroommart/auth/controller.py
from datetime import timedelta
from urllib.parse import quote
from uuid import uuid4
from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse
from starlette import status
from authlib.integrations.base_client import OAuthError

from . import service
from ..core.config import settings
from ..core.exceptions import AuthenticationError, NotFoundError
from ..database.core import DbSession
from ..schemas.user import UserResponse
from ..users.service import UserService
from ..logging import logger

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/login")
async def login(request: Request):
    """Redirect the browser to the identity provider's authorization page."""
    logger.info("OIDC login initiated")
    redirect_uri = settings.OIDC_REDIRECT_URI or str(request.url_for("auth_callback"))
    if not settings.OIDC_REDIRECT_URI:
        logger.warning(f"OIDC_REDIRECT_URI not set; using {redirect_uri}")

    next_target = request.query_params.get("next")
    if next_target:
        request.session["post_auth_next"] = next_target

    client = service.get_oidc_client()
    return await client.authorize_redirect(request, redirect_uri, state=uuid4().hex)


@router.get("/callback", name="auth_callback")
async def callback(request: Request, db: DbSession):
    """Finish the login: upsert the user, open a session and hand the
    frontend a bearer token."""
    client = service.get_oidc_client()
    try:
        token = await client.authorize_access_token(request)
    except OAuthError as e:
        logger.warning(f"OIDC callback rejected: {e.error}")
        raise AuthenticationError(message="Login was not completed")

    claims = token.get("userinfo")
    if not claims:
        claims = await client.userinfo(token=token)
    if not claims:
        raise AuthenticationError(message="Could not fetch user info from identity provider")

    user = service.login_user(db, dict(claims))
    session = service.create_session(db, user.id, dict(claims))
    access_token = service.create_access_token(
        user_id=user.id,
        session_id=session.sid,
        expires_delta=timedelta(minutes=service.ACCESS_TOKEN_EXPIRE_MINUTES),
    )

    redirect_url = f"{settings.FRONTEND_BASE_URL}/auth-callback?token={access_token}"
    next_target = request.session.pop("post_auth_next", None)
    if next_target:
        redirect_url += f"&next={quote(str(next_target))}"
    return RedirectResponse(url=redirect_url, status_code=status.HTTP_302_FOUND)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(current_user: service.CurrentUser, db: DbSession):
    """Delete the server-side session, which revokes the bearer token."""
    if current_user.session_id:
        service.delete_session(db, current_user.session_id)
    logger.info(f"User {current_user.user_id} logged out")


@router.get("/user", response_model=UserResponse)
async def get_authenticated_user(current_user: service.CurrentUser, db: DbSession):
    user = UserService.get_user(db, current_user.user_id)
    if not user:
        raise NotFoundError("User", current_user.user_id)
    return user
