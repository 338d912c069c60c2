# core/profile_client.py

"""
Client for the external identity endpoint (GET /auth/profile) and the
translation of its loosely-typed payload into a Principal.
"""

from typing import Any, Mapping, Optional

import requests
from jose import JWTError, jwt

from core.access import Principal
from core.config import settings
from core.errors import ProfileFetchError, extract_upstream_error
from core.logging_config import logger
from core.permissions import EMPTY_PERMISSIONS, PermissionSet, build_permission_set
from core.roles import is_known_role, normalize_role


OFFICE_RECORD_FIELDS = ("nombre", "name", "code", "city")


# ============================================================
# JWT CLAIMS (read only, never verified here)
# ============================================================
def decode_claims(token: Optional[str]) -> dict:
    """
    Unverified claims of the access token. The identity service owns
    verification; we only read `role` / `permissions` hints from it.
    """
    if not token:
        return {}
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        return {}
    return claims if isinstance(claims, dict) else {}


# ============================================================
# PAYLOAD HELPERS
# ============================================================
def flatten_permissions(raw: Any) -> list:
    """Permission lists sometimes hold records ({"name": ...}) instead of strings."""
    if not isinstance(raw, (list, tuple)):
        return []
    flattened = []
    for item in raw:
        if isinstance(item, Mapping):
            item = item.get("name") or item.get("nombre")
        flattened.append(item)
    return flattened


def _first_permission_set(*candidates: Any) -> PermissionSet:
    for candidate in candidates:
        permissions = build_permission_set(flatten_permissions(candidate))
        if len(permissions):
            return permissions
    return EMPTY_PERMISSIONS


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def display_name_from(profile: Mapping) -> Optional[str]:
    full_name = _text(profile.get("full_name"))
    if full_name:
        return full_name

    parts = [_text(profile.get("first_name")), _text(profile.get("last_name"))]
    joined = " ".join(p for p in parts if p)
    if joined:
        return joined

    return _text(profile.get("name")) or _text(profile.get("email"))


def office_from(profile: Mapping) -> Optional[str]:
    office = profile.get("office")
    if office is None:
        office = profile.get("oficina")

    if isinstance(office, Mapping):
        for field in OFFICE_RECORD_FIELDS:
            value = _text(office.get(field))
            if value:
                return value
        return None

    return _text(office)


def build_principal(profile: Mapping, access_token: Optional[str] = None) -> Principal:
    """
    Build a Principal from a raw profile record.

    Precedence (first non-empty wins):
      • permissions: token claims → profile.permissions → profile.role.permissions
      • role: token claim (when it names a known role) → profile.role
    """
    claims = decode_claims(access_token)

    raw_role = profile.get("role")
    role_permissions = raw_role.get("permissions") if isinstance(raw_role, Mapping) else None

    permissions = _first_permission_set(
        claims.get("permissions"),
        profile.get("permissions"),
        role_permissions,
    )

    # Generic claims like "authenticated" must not mask the profile role
    claimed_role = claims.get("role")
    role = normalize_role(claimed_role if is_known_role(claimed_role) else raw_role)

    user_id = profile.get("id")

    return Principal(
        role=role,
        permissions=permissions,
        user_id=str(user_id) if user_id is not None else None,
        email=_text(profile.get("email")),
        display_name=display_name_from(profile),
        office=office_from(profile),
    )


# ============================================================
# FETCH
# ============================================================
def _timeout() -> Optional[float]:
    value = settings.PROFILE_TIMEOUT_SECONDS
    return value if value and value > 0 else None


def fetch_profile(access_token: str, http: Optional[requests.Session] = None) -> Optional[dict]:
    """
    GET the profile record for `access_token`.

    Returns:
        The profile dict, or None when the identity service says the
        token is not (or no longer) valid (401/403).

    Raises:
        ProfileFetchError: network failure, timeout, other non-2xx,
        or a body that is not a JSON object.
    """
    if not access_token:
        return None

    getter = http.get if http is not None else requests.get

    try:
        response = getter(
            settings.profile_url,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/json",
            },
            timeout=_timeout(),
        )
    except requests.Timeout as e:
        raise ProfileFetchError("Profile request timed out", status_code=408) from e
    except requests.RequestException as e:
        raise ProfileFetchError(f"Profile request failed: {e}") from e

    if response.status_code in (401, 403):
        logger.info(f"Identity service rejected token (status {response.status_code})")
        return None

    try:
        body = response.json()
    except ValueError:
        body = response.text

    if not response.ok:
        raise ProfileFetchError(
            extract_upstream_error(body, fallback=f"Error {response.status_code}"),
            status_code=response.status_code,
        )

    if not isinstance(body, dict):
        raise ProfileFetchError("Unexpected profile payload", status_code=response.status_code)

    return body


def fetch_principal(access_token: str, http: Optional[requests.Session] = None) -> Optional[Principal]:
    """
    Profile fetch + Principal construction. Never raises: an invalid
    token and a failed fetch both mean "no principal".
    """
    try:
        profile = fetch_profile(access_token, http=http)
    except ProfileFetchError as e:
        logger.warning(f"Profile fetch failed (status={e.status_code}): {e.detail}")
        return None

    if profile is None:
        return None

    return build_principal(profile, access_token)
