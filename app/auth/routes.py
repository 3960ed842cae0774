# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for authentication-related operations.
#
# Note: Actual login (email/OAuth) is handled by Supabase Auth client-side.
# These routes finish the OAuth/PKCE flow and report who is logged in.
# =============================================================================

import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from fastapi.responses import JSONResponse, RedirectResponse

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser, MeResponse
from app.config import settings
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

router = APIRouter()


# The refresh token is only ever needed by /api/auth/refresh
REFRESH_COOKIE_PATH = "/api/auth"
REFRESH_COOKIE_MAX_AGE = 60 * 60 * 24 * 30  # 30 days


def _site_url(path: str) -> str:
    return f"{settings.SITE_URL.rstrip('/')}{path}"


def _set_session_cookies(response: Response, session: dict) -> None:
    """Store the access token and, when present, the refresh token."""
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=session["access_token"],
        max_age=session.get("expires_in"),
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    if session.get("refresh_token"):
        response.set_cookie(
            key=settings.AUTH_REFRESH_COOKIE_NAME,
            value=session["refresh_token"],
            max_age=REFRESH_COOKIE_MAX_AGE,
            path=REFRESH_COOKIE_PATH,
            httponly=True,
            secure=settings.is_production,
            samesite="lax",
        )


@router.get("/me", response_model=MeResponse)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> MeResponse:
    """
    Get the current authenticated user and their profile, if created.

    Raises:
        401: If not authenticated
    """
    profile = None
    try:
        profile = SupabaseClient.fetch_row("profile", {"id": user.id})
    except SupabaseClientError as e:
        logger.warning(f"Could not fetch user profile: {e}")

    return MeResponse(id=user.id, email=user.email, profile=profile)


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email
    }


@router.get("/callback")
async def auth_callback(
    request: Request,
    code: str | None = Query(default=None, description="OAuth/PKCE authorization code"),
):
    """
    Finish the login flow.

    Exchanges the code for a session, stores the access and refresh tokens
    in cookies and sends the browser to the dashboard. Without a code
    the browser goes back to the login page; provider errors are passed
    along in the `error` query parameter.
    """
    if not code:
        return RedirectResponse(_site_url("/login"), status_code=303)

    code_verifier = request.cookies.get(settings.AUTH_CODE_VERIFIER_COOKIE)

    try:
        session = SupabaseClient.exchange_code_for_session(code, code_verifier)
    except SupabaseClientError as e:
        logger.error(f"Exchange error: {e.message}")
        return RedirectResponse(
            _site_url(f"/login?error={quote(e.message)}"),
            status_code=303,
        )
    except Exception as e:
        logger.exception(f"Unexpected error during code exchange: {e}")
        return RedirectResponse(_site_url("/login?error=unexpected_error"), status_code=303)

    response = RedirectResponse(_site_url("/dashboard"), status_code=303)
    _set_session_cookies(response, session)
    response.delete_cookie(settings.AUTH_CODE_VERIFIER_COOKIE)
    return response


@router.post("/refresh")
async def refresh_session(request: Request):
    """
    Renew the session from the refresh-token cookie.

    Replaces both cookies (Supabase rotates refresh tokens).

    Raises:
        401: If there is no refresh cookie or Supabase rejects it
    """
    refresh_token = request.cookies.get(settings.AUTH_REFRESH_COOKIE_NAME)
    if not refresh_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No refresh token")

    try:
        session = SupabaseClient.refresh_session(refresh_token)
    except SupabaseClientError as e:
        logger.warning(f"Session refresh failed: {e.message}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Session expired")

    response = JSONResponse({"message": "Session refreshed", "expires_in": session.get("expires_in")})
    _set_session_cookies(response, session)
    return response


@router.post("/logout")
async def logout():
    """Clear the session cookies."""
    response = JSONResponse({"message": "Logged out"})
    response.delete_cookie(settings.AUTH_COOKIE_NAME)
    response.delete_cookie(settings.AUTH_REFRESH_COOKIE_NAME, path=REFRESH_COOKIE_PATH)
    return response
