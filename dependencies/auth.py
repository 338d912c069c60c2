from typing import Iterator, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.access import Principal
from core.session import PrincipalSession
from models.enums import CanonicalRole


# Missing header is not an error here: no token just means no principal
bearer_scheme = HTTPBearer(auto_error=False)


def unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired authentication token",
        headers={"WWW-Authenticate": "Bearer"},
    )


# ============================================================
# ACCESS TOKEN
# ============================================================
def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    if not credentials or not credentials.credentials:
        return None
    return credentials.credentials.strip() or None


# ============================================================
# PRINCIPAL SESSION (one per request)
# ============================================================
def get_principal_session(
    access_token: Optional[str] = Depends(get_access_token),
) -> Iterator[PrincipalSession]:
    """
    Fetch the profile once for this request and expose the session.
    The in-flight fetch is cancelled if the request is torn down.
    """
    session = PrincipalSession()
    try:
        session.refresh(access_token)
        yield session
    finally:
        session.close()


def get_optional_principal(
    session: PrincipalSession = Depends(get_principal_session),
) -> Optional[Principal]:
    """Principal or None (no token, 401 from identity service, failed fetch)."""
    return session.principal


def get_current_principal(
    principal: Optional[Principal] = Depends(get_optional_principal),
) -> Principal:
    if principal is None:
        raise unauthorized()
    return principal


# ============================================================
# ROLE CHECKER (basic role list guard)
# ============================================================
def requires_role(allowed_roles: list):
    allowed = {CanonicalRole(r) for r in allowed_roles}

    def checker(principal: Principal = Depends(get_current_principal)):
        if principal.role not in allowed:
            raise HTTPException(
                status_code=403,
                detail=f"Requires one of: {sorted(str(r) for r in allowed)}",
            )
        return principal
    return checker


# ============================================================
# PERMISSION CHECK (DELEGATES TO permission_helpers)
# ============================================================
def requires_permission(permission: str):
    """
    Thin wrapper so routes can still import from dependencies.auth.
    Real decision logic lives in core.permission_helpers.
    """
    from core.permission_helpers import requires_permission as new_checker
    return new_checker(permission)
