# routers/access.py

from typing import Iterable, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from core.access import Principal, default_evaluator, has_override, is_administrator
from core.aliases import ALIAS_TABLE, Alias, AnyOf, Single, describe_requirement
from core.config import settings
from core.errors import ProfileFetchError, handle_upstream_error
from core.logging_config import logger
from core.navigation import (
    ADMIN_TABS,
    NO_ADMIN_TABS_MESSAGE,
    NO_SECTIONS_MESSAGE,
    SIDEBAR_CATALOG,
    NavigationEntry,
    default_entry,
    filter_entries,
    requirement_for_path,
)
from core.permission_helpers import requires_access
from core.profile_client import fetch_profile
from core.roles import role_display_name
from core.route_guard import RouteGuard
from core.session import PrincipalSession
from dependencies.auth import (
    get_access_token,
    get_current_principal,
    get_optional_principal,
    get_principal_session,
    unauthorized,
)
from models.access import (
    AccessCheckRequest,
    AccessCheckResponse,
    CatalogRead,
    GuardDecisionRead,
    MenuRead,
    NavigationEntryRead,
    PrincipalRead,
)
from models.enums import GuardState


router = APIRouter(
    prefix="/access",
    tags=["Access Control"],
)

FORBIDDEN_MESSAGE = "No tienes permisos para acceder a esta sección"


# ============================================================
# Helpers
# ============================================================
def _entry_read(entry: NavigationEntry) -> NavigationEntryRead:
    return NavigationEntryRead(
        key=entry.key,
        label=entry.label,
        route=entry.route,
        requirement=describe_requirement(entry.requirement),
        admin_only=entry.admin_only,
    )


def _menu(entries: Iterable[NavigationEntry], principal: Optional[Principal], empty_message: str) -> MenuRead:
    visible = filter_entries(entries, principal, default_evaluator)
    first = default_entry(visible)
    return MenuRead(
        entries=[_entry_read(e) for e in visible],
        default_key=first.key if first else None,
        empty_message=None if visible else empty_message,
    )


# ============================================================
# Current principal
# ============================================================
@router.get("/me", response_model=PrincipalRead, summary="Resolved role and permissions")
def read_principal(principal: Principal = Depends(get_current_principal)):
    return PrincipalRead(
        role=principal.role,
        role_display_name=role_display_name(principal.role),
        permissions=principal.permissions.as_list(),
        is_administrator=is_administrator(principal),
        unrestricted=has_override(principal),
        user_id=principal.user_id,
        email=principal.email,
        display_name=principal.display_name,
        office=principal.office,
    )


@router.get("/profile", summary="Raw profile from the identity service")
def read_raw_profile(access_token: Optional[str] = Depends(get_access_token)):
    """
    Passes the identity service's profile through untouched. Unlike
    /me, upstream failures surface as 502/504 instead of a 401.
    """
    if not access_token:
        raise unauthorized()
    try:
        profile = fetch_profile(access_token)
    except ProfileFetchError as e:
        raise handle_upstream_error(e, "Profile fetch")
    if profile is None:
        raise unauthorized()
    return profile


# ============================================================
# Navigation
# ============================================================
@router.get("/menu", response_model=MenuRead, summary="Sidebar entries visible to the caller")
def read_menu(principal: Optional[Principal] = Depends(get_optional_principal)):
    return _menu(SIDEBAR_CATALOG, principal, NO_SECTIONS_MESSAGE)


@router.get("/admin-tabs", response_model=MenuRead, summary="Admin tabs visible to the caller")
def read_admin_tabs(principal: Optional[Principal] = Depends(get_optional_principal)):
    return _menu(ADMIN_TABS, principal, NO_ADMIN_TABS_MESSAGE)


@router.get(
    "/catalog",
    response_model=CatalogRead,
    summary="Full navigation catalog and alias table",
    dependencies=[Depends(requires_access(Alias("admin")))],
)
def read_catalog():
    return CatalogRead(
        sidebar=[_entry_read(e) for e in SIDEBAR_CATALOG],
        admin_tabs=[_entry_read(e) for e in ADMIN_TABS],
        aliases={alias: ALIAS_TABLE.resolve(alias) for alias in ALIAS_TABLE.aliases()},
    )


# ============================================================
# Route guard
# ============================================================
@router.get("/guard", response_model=GuardDecisionRead, summary="Guard decision for a page path")
def read_guard(
    path: str = Query(..., min_length=1),
    session: PrincipalSession = Depends(get_principal_session),
):
    redirects: List[str] = []
    guard = RouteGuard(
        requirement_for_path(path),
        redirect=redirects.append,
        entry_point=settings.ENTRY_POINT_PATH,
        evaluator=default_evaluator,
    )

    snapshot = session.snapshot()
    decision = guard.update(session_loaded=snapshot.loaded, principal=snapshot.principal)

    if decision.state == GuardState.unauthenticated:
        logger.info(f"Guard: unauthenticated request for {path}, redirecting")

    return GuardDecisionRead(
        path=path,
        state=decision.state,
        render=decision.render,
        redirect_to=redirects[0] if redirects else None,
        fallback_message=FORBIDDEN_MESSAGE if decision.state == GuardState.authenticated_denied else None,
    )


# ============================================================
# Ad-hoc check
# ============================================================
@router.post("/check", response_model=AccessCheckResponse, summary="Evaluate a requirement")
def check_access(
    payload: AccessCheckRequest,
    principal: Principal = Depends(get_current_principal),
):
    given = [
        name for name, value in (
            ("permission", payload.permission),
            ("any_of", payload.any_of),
            ("alias", payload.alias),
        ) if value is not None
    ]
    if len(given) > 1:
        raise HTTPException(400, f"Provide only one of permission, any_of, alias (got {', '.join(given)})")

    requirement = None
    if payload.permission is not None:
        requirement = Single(payload.permission)
    elif payload.any_of is not None:
        requirement = AnyOf(payload.any_of)
    elif payload.alias is not None:
        requirement = Alias(payload.alias)

    return AccessCheckResponse(
        granted=default_evaluator.grants(principal, requirement),
        requirement=describe_requirement(requirement),
    )
