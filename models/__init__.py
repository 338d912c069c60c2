# -------------------------
# Enums
# -------------------------
from .enums import (
    BaseStrEnum,
    CanonicalRole,
    GuardRender,
    GuardState,
)

# -------------------------
# Access Models
# -------------------------
from .access import (
    PrincipalRead,
    NavigationEntryRead,
    MenuRead,
    CatalogRead,
    GuardDecisionRead,
    AccessCheckRequest,
    AccessCheckResponse,
)

__all__ = [
    # enums
    "BaseStrEnum",
    "CanonicalRole",
    "GuardRender",
    "GuardState",

    # access
    "PrincipalRead",
    "NavigationEntryRead",
    "MenuRead",
    "CatalogRead",
    "GuardDecisionRead",
    "AccessCheckRequest",
    "AccessCheckResponse",
]
