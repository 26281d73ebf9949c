"""OAuth provider registration and identity mapping for Google and GitHub logins."""

from __future__ import annotations

from typing import Any, Mapping

from authlib.integrations.starlette_client import OAuth
from starlette.requests import Request

from trivia_quiz.core.models import AuthenticatedUser
from trivia_quiz.core.settings import Settings

GOOGLE = "google"
GITHUB = "github"
_GOOGLE_METADATA_URL = "https://accounts.google.com/.well-known/openid-configuration"


def build_oauth(settings: Settings) -> OAuth:
    """Register every provider that has client credentials configured."""
    oauth = OAuth()
    if GOOGLE in settings.oauth_providers:
        oauth.register(
            name=GOOGLE,
            client_id=settings.google_client_id,
            client_secret=settings.google_client_secret,
            server_metadata_url=_GOOGLE_METADATA_URL,
            client_kwargs={"scope": "openid email profile"},
        )
    if GITHUB in settings.oauth_providers:
        oauth.register(
            name=GITHUB,
            client_id=settings.github_client_id,
            client_secret=settings.github_client_secret,
            access_token_url="https://github.com/login/oauth/access_token",
            authorize_url="https://github.com/login/oauth/authorize",
            api_base_url="https://api.github.com/",
            client_kwargs={"scope": "user:email"},
        )
    return oauth


async def fetch_identity(client: Any, provider: str, request: Request) -> AuthenticatedUser:
    """Finish the authorization code exchange and return the user's identity."""
    token = await client.authorize_access_token(request)
    if provider == GOOGLE:
        userinfo = token.get("userinfo") or await client.userinfo(token=token)
        return google_identity(userinfo)

    profile_response = await client.get("user", token=token)
    profile = profile_response.json()
    email = profile.get("email")
    if not email:
        emails_response = await client.get("user/emails", token=token)
        email = primary_github_email(emails_response.json())
    return github_identity(profile, email)


def google_identity(userinfo: Mapping[str, Any]) -> AuthenticatedUser:
    return AuthenticatedUser(
        id=str(userinfo["sub"]),
        provider=GOOGLE,
        name=userinfo.get("name") or userinfo.get("email") or "",
        email=userinfo.get("email"),
        avatar=userinfo.get("picture"),
    )


def github_identity(profile: Mapping[str, Any], email: str | None) -> AuthenticatedUser:
    return AuthenticatedUser(
        id=str(profile["id"]),
        provider=GITHUB,
        name=profile.get("name") or profile.get("login") or "",
        email=email,
        avatar=profile.get("avatar_url"),
        username=profile.get("login"),
    )


def primary_github_email(emails: Any) -> str | None:
    if not isinstance(emails, list):
        return None
    verified = [entry for entry in emails if isinstance(entry, dict) and entry.get("verified")]
    for entry in verified:
        if entry.get("primary"):
            return entry.get("email")
    return verified[0].get("email") if verified else None
