# core/navigation.py

from dataclasses import dataclass
from typing import Iterable, List, Optional

from core.access import AccessEvaluator, Principal, default_evaluator, is_administrator
from core.aliases import Alias, Requirement


NO_SECTIONS_MESSAGE = "No tienes permisos para acceder a ninguna sección."
NO_ADMIN_TABS_MESSAGE = "No tienes permisos para gestionar sucursales, usuarios o roles."


@dataclass(frozen=True)
class NavigationEntry:
    key: str
    label: str
    route: str
    requirement: Requirement = None
    admin_only: bool = False


# ============================================================
# CATALOGS (authored data, declaration order matters)
# ============================================================
SIDEBAR_CATALOG = (
    NavigationEntry("dashboard", "Dashboard", "/dashboard"),
    NavigationEntry("reportes", "Reportes", "/reportes", Alias("reportes")),
    NavigationEntry("admin", "Admin", "/admin", Alias("admin")),
    NavigationEntry("centro_pagos", "Centro de Pagos", "/pagos", Alias("centro_pagos")),
    NavigationEntry("interesados", "Interesados", "/interesados", Alias("interesados")),
    NavigationEntry("mis_rentas", "Mis Rentas", "/rentas", Alias("mis_rentas")),
    NavigationEntry("renovaciones", "Renovaciones", "/renovaciones", Alias("renovaciones")),
    NavigationEntry("administraciones", "Administraciones", "/administraciones", Alias("administraciones")),
    NavigationEntry("usuarios", "Usuarios", "/usuarios", Alias("usuarios")),
)

ADMIN_TABS = (
    NavigationEntry("branches", "Sucursales", "/admin#branches", Alias("sucursales")),
    NavigationEntry("users", "Usuarios", "/admin#users", Alias("usuarios")),
    NavigationEntry("roles", "Roles", "/admin#roles", Alias("roles"), admin_only=True),
)

# Page path -> requirement checked by the route guard
ROUTE_REQUIREMENTS = {
    "/dashboard": None,
    "/perfil": None,
    "/admin": Alias("admin"),
    "/usuarios": Alias("usuarios"),
    "/rentas": Alias("mis_rentas"),
    "/reportes": Alias("reportes"),
    "/pagos": Alias("centro_pagos"),
    "/interesados": Alias("interesados"),
    "/renovaciones": Alias("renovaciones"),
    "/administraciones": Alias("administraciones"),
}


# ============================================================
# FILTERING
# ============================================================
def is_visible(
    entry: NavigationEntry,
    principal: Optional[Principal],
    evaluator: AccessEvaluator = default_evaluator,
) -> bool:
    if principal is None:
        return False
    if entry.admin_only and not is_administrator(principal):
        return False
    return evaluator.grants(principal, entry.requirement)


def filter_entries(
    entries: Iterable[NavigationEntry],
    principal: Optional[Principal],
    evaluator: AccessEvaluator = default_evaluator,
) -> List[NavigationEntry]:
    """
    Entries the principal may see, in declaration order.
    No principal (logged out, 401, failed fetch) means an empty menu.
    """
    if principal is None:
        return []
    return [entry for entry in entries if is_visible(entry, principal, evaluator)]


def default_entry(filtered: List[NavigationEntry]) -> Optional[NavigationEntry]:
    """
    Initially-selected entry. None when nothing is accessible; the caller
    must then show NO_SECTIONS_MESSAGE rather than pick an arbitrary entry.
    """
    return filtered[0] if filtered else None


def requirement_for_path(path: str) -> Requirement:
    """
    Requirement for a page path, matched on the longest route prefix
    ("/rentas/42/preview" -> "/rentas"). Unknown paths are unrestricted.
    """
    clean = "/" + (path or "").split("?", 1)[0].split("#", 1)[0].strip("/")
    best = None
    for route in ROUTE_REQUIREMENTS:
        if clean == route or clean.startswith(route.rstrip("/") + "/"):
            if best is None or len(route) > len(best):
                best = route
    if best is None:
        return None
    return ROUTE_REQUIREMENTS[best]
