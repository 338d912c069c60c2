from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# CANONICAL ROLE
# -----------------------------------------------------
class CanonicalRole(BaseStrEnum):
    """Closed set of roles every raw role value resolves to."""

    administrator = "administrator"
    manager = "manager"
    coordinator = "coordinator"
    agent = "agent"
    owner = "owner"
    tenant = "tenant"


# -----------------------------------------------------
# ROUTE GUARD STATE
# -----------------------------------------------------
class GuardState(BaseStrEnum):
    loading = "loading"
    unauthenticated = "unauthenticated"
    authenticated_granted = "authenticated_granted"
    authenticated_denied = "authenticated_denied"


# -----------------------------------------------------
# ROUTE GUARD RENDER
# -----------------------------------------------------
class GuardRender(BaseStrEnum):
    """What the page should show for a given guard state."""

    spinner = "spinner"
    placeholder = "placeholder"  # neutral, shown while redirecting
    children = "children"
    fallback = "fallback"  # "no tienes permisos" message
