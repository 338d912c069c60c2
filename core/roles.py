# core/roles.py

"""
Role normalization.

The identity endpoint hands back the role in whatever shape the backend
felt like that day: a bare string ("Administrador"), or a record such as
{"nombre": "Administrador del sistema", "uid": "..."}. Everything in here
collapses those shapes onto one CanonicalRole.
"""

import re
import unicodedata
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from models.enums import CanonicalRole


DEFAULT_ROLE = CanonicalRole.agent

# Record fields probed for the role name, in order: name, then code, then
# the display label.
ROLE_RECORD_FIELDS = ("name", "nombre", "code", "display_name", "display name")


# ============================================================
# RAW ROLE (tagged union at the boundary)
# ============================================================
@dataclass(frozen=True)
class StringRole:
    value: str


@dataclass(frozen=True)
class RecordRole:
    fields: Mapping[str, Any]

    def role_name(self) -> str:
        for field in ROLE_RECORD_FIELDS:
            candidate = self.fields.get(field)
            if isinstance(candidate, str) and candidate.strip():
                return candidate
        return ""


RawRole = Union[StringRole, RecordRole]


def parse_raw_role(value: Any) -> Optional[RawRole]:
    """Tag an untyped role value. Returns None for shapes we can't read."""
    if isinstance(value, (StringRole, RecordRole)):
        return value
    if isinstance(value, CanonicalRole):
        return StringRole(value.value)
    if isinstance(value, str):
        return StringRole(value)
    if isinstance(value, Mapping):
        return RecordRole(value)
    return None


# ============================================================
# SYNONYMS
# ============================================================
ROLE_SYNONYMS = {
    # administrator
    "administrator": CanonicalRole.administrator,
    "administrador": CanonicalRole.administrator,
    "administrador del sistema": CanonicalRole.administrator,
    "administrador sistema": CanonicalRole.administrator,
    "admin": CanonicalRole.administrator,

    # manager
    "manager": CanonicalRole.manager,
    "gerente": CanonicalRole.manager,

    # coordinator
    "coordinator": CanonicalRole.coordinator,
    "coordinador": CanonicalRole.coordinator,

    # agent
    "agent": CanonicalRole.agent,
    "agente": CanonicalRole.agent,

    # owner
    "owner": CanonicalRole.owner,
    "propietario": CanonicalRole.owner,

    # tenant
    "tenant": CanonicalRole.tenant,
    "inquilino": CanonicalRole.tenant,
}

ROLE_DISPLAY_NAMES = {
    CanonicalRole.administrator: "Administrador",
    CanonicalRole.manager: "Gerente",
    CanonicalRole.coordinator: "Coordinador",
    CanonicalRole.agent: "Agente",
    CanonicalRole.owner: "Propietario",
    CanonicalRole.tenant: "Inquilino",
}

_SEPARATORS = re.compile(r"[\s_\-]+")


def fold_text(value: str) -> str:
    """
    Case-fold, strip diacritics and collapse separators.
    "  ADMINISTRADOR_DEL-Sistema " -> "administrador del sistema"
    """
    decomposed = unicodedata.normalize("NFKD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _SEPARATORS.sub(" ", stripped.casefold()).strip()


def _role_text(raw: Optional[RawRole]) -> str:
    if isinstance(raw, StringRole):
        return raw.value
    if isinstance(raw, RecordRole):
        return raw.role_name()
    return ""


def normalize_role(value: Any, default: CanonicalRole = DEFAULT_ROLE) -> CanonicalRole:
    """
    Resolve any raw role value to a CanonicalRole. Never raises;
    unknown or empty input resolves to `default`.
    """
    text = _role_text(parse_raw_role(value))
    if not text:
        return default
    return ROLE_SYNONYMS.get(fold_text(text), default)


def role_display_name(role: CanonicalRole) -> str:
    return ROLE_DISPLAY_NAMES.get(role, str(role))


def is_known_role(value: Any) -> bool:
    """True if `value` spells one of the synonyms (no default fallback involved)."""
    text = _role_text(parse_raw_role(value))
    return bool(text) and fold_text(text) in ROLE_SYNONYMS
