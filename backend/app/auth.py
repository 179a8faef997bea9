"""
Bearer-credential identity resolution.

Credentials are validated by the external auth provider (Supabase Auth
REST API). The role is not trusted from the token: it comes from the local
`users` table, where a row with role "user" is created the first time an
identity is seen.

Dependencies:
    get_current_user   -> Actor, 401 if missing/invalid
    get_optional_user  -> Actor or None (anonymous when absent, rejected or unresolvable)
    require_admin      -> Actor, 403 unless role == admin
"""
import logging
import os
from typing import Dict, Optional

import requests
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.database import get_session
from app.models.user import User, UserRole
from app.services.ownership import Actor

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


class IdentityProviderError(Exception):
    """The auth provider could not be reached or answered unexpectedly."""


class SupabaseIdentityProvider:
    """
    Resolves a bearer token with GET {SUPABASE_URL}/auth/v1/user.

    Reads configuration from environment variables:
        SUPABASE_URL, SUPABASE_ANON_KEY, AUTH_TIMEOUT_SECONDS (default 5)
    """

    def __init__(self, base_url: Optional[str] = None, anon_key: Optional[str] = None, timeout: Optional[float] = None):
        self.base_url = (base_url if base_url is not None else os.getenv("SUPABASE_URL", "")).rstrip("/")
        self.anon_key = anon_key if anon_key is not None else os.getenv("SUPABASE_ANON_KEY", "")
        self.timeout = timeout if timeout is not None else float(os.getenv("AUTH_TIMEOUT_SECONDS", "5"))

    def resolve(self, token: str) -> Optional[Dict[str, Optional[str]]]:
        """Return {"id", "email"} for a valid token, None for a rejected one."""
        if not self.base_url:
            raise IdentityProviderError("SUPABASE_URL is not configured")

        try:
            response = requests.get(
                f"{self.base_url}/auth/v1/user",
                headers={"apikey": self.anon_key, "Authorization": f"Bearer {token}"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise IdentityProviderError(f"Auth provider unreachable: {e}") from e

        if response.status_code in (401, 403):
            return None
        if response.status_code != 200:
            raise IdentityProviderError(f"Auth provider returned {response.status_code}")

        payload = response.json()
        if not payload.get("id"):
            return None
        return {"id": payload["id"], "email": payload.get("email")}


_provider: Optional[SupabaseIdentityProvider] = None


def get_identity_provider() -> SupabaseIdentityProvider:
    global _provider
    if _provider is None:
        _provider = SupabaseIdentityProvider()
    return _provider


class UserRecordError(Exception):
    """The local user row for a verified identity could not be loaded or created."""


def load_actor(session: Session, identity: Dict[str, Optional[str]]) -> Actor:
    """Map a verified identity to an Actor, creating the local user row on first sight."""
    try:
        user = session.get(User, identity["id"])
        if user is None:
            user = User(id=identity["id"], email=identity.get("email"), role=UserRole.user.value)
            session.add(user)
            session.commit()
            session.refresh(user)
            logger.info(f"Created user record for {user.id}")
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to load user record for {identity['id']}: {e}")
        raise UserRecordError(f"Failed to load user record for {identity['id']}") from e

    return Actor(id=user.id, role=user.role or UserRole.user.value, email=user.email or identity.get("email"))


def _resolve(provider: SupabaseIdentityProvider, token: str) -> Optional[Dict[str, Optional[str]]]:
    try:
        return provider.resolve(token)
    except IdentityProviderError as e:
        logger.warning(f"Authentication failed: {e}")
        raise HTTPException(status_code=401, detail="Authentication failed")


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    session: Session = Depends(get_session),
    provider: SupabaseIdentityProvider = Depends(get_identity_provider),
) -> Actor:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Missing Authorization header")

    identity = _resolve(provider, credentials.credentials)
    if identity is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    try:
        return load_actor(session, identity)
    except UserRecordError:
        raise HTTPException(status_code=401, detail="Failed to create user record")


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    session: Session = Depends(get_session),
    provider: SupabaseIdentityProvider = Depends(get_identity_provider),
) -> Optional[Actor]:
    if credentials is None:
        return None
    try:
        identity = provider.resolve(credentials.credentials)
        if identity is None:
            return None
        return load_actor(session, identity)
    except (IdentityProviderError, UserRecordError) as e:
        logger.warning(f"Ignoring credential on public endpoint: {e}")
        return None


def require_admin(user: Actor = Depends(get_current_user)) -> Actor:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
