# models/access.py

from typing import List, Optional
from pydantic import BaseModel

from models.enums import CanonicalRole, GuardRender, GuardState


# -----------------------------------------------------
# PRINCIPAL (API view)
# -----------------------------------------------------
class PrincipalRead(BaseModel):
    role: CanonicalRole
    role_display_name: str
    permissions: List[str] = []
    is_administrator: bool = False
    unrestricted: bool = False

    user_id: Optional[str] = None
    email: Optional[str] = None
    display_name: Optional[str] = None
    office: Optional[str] = None


# -----------------------------------------------------
# NAVIGATION
# -----------------------------------------------------
class NavigationEntryRead(BaseModel):
    key: str
    label: str
    route: str
    requirement: str = "none"
    admin_only: bool = False


class MenuRead(BaseModel):
    """
    Filtered navigation list. When `entries` is empty the client shows
    `empty_message` instead of picking a section.
    """
    entries: List[NavigationEntryRead] = []
    default_key: Optional[str] = None
    empty_message: Optional[str] = None


class CatalogRead(BaseModel):
    sidebar: List[NavigationEntryRead]
    admin_tabs: List[NavigationEntryRead]
    aliases: dict


# -----------------------------------------------------
# ROUTE GUARD
# -----------------------------------------------------
class GuardDecisionRead(BaseModel):
    path: str
    state: GuardState
    render: GuardRender
    redirect_to: Optional[str] = None
    fallback_message: Optional[str] = None


# -----------------------------------------------------
# AD-HOC CHECK
# -----------------------------------------------------
class AccessCheckRequest(BaseModel):
    """Exactly one of the three may be given; none means no restriction."""
    permission: Optional[str] = None
    any_of: Optional[List[str]] = None
    alias: Optional[str] = None


class AccessCheckResponse(BaseModel):
    granted: bool
    requirement: str
