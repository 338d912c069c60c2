# core/permissions.py

from dataclasses import dataclass, field
from typing import Any, FrozenSet, Iterable, Optional


# Wildcard token: holding it grants every requirement
WILDCARD_TOKEN = "all"

# "<resource>.*" covers every "<resource>.<action>"
RESOURCE_WILDCARD_SUFFIX = ".*"


def canonical_token(value: Any) -> Optional[str]:
    """
    Trim + case-fold a permission token.
    Returns None for non-strings and blank strings.
    """
    if not isinstance(value, str):
        return None
    token = value.strip().casefold()
    return token or None


# -----------------------------------------------------
# PermissionSet
# -----------------------------------------------------
@dataclass(frozen=True)
class PermissionSet:
    tokens: FrozenSet[str] = field(default_factory=frozenset)

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self):
        return iter(sorted(self.tokens))

    def __contains__(self, token) -> bool:
        return self.contains(token)

    def contains(self, token: Any) -> bool:
        wanted = canonical_token(token)
        if wanted is None:
            return False

        if wanted in self.tokens:
            return True

        # Resource wildcard: "rentas.*" covers "rentas.ver"
        if "." in wanted:
            resource = wanted.split(".", 1)[0]
            if f"{resource}{RESOURCE_WILDCARD_SUFFIX}" in self.tokens:
                return True

        return False

    def is_unrestricted(self) -> bool:
        return WILDCARD_TOKEN in self.tokens

    def as_list(self) -> list:
        return sorted(self.tokens)


EMPTY_PERMISSIONS = PermissionSet()


def build_permission_set(raw: Optional[Iterable[Any]]) -> PermissionSet:
    """
    Canonicalize a raw permission list from the profile payload.

    Non-string and blank entries are dropped silently; the payload is
    not trusted, so a malformed list just yields a smaller set.
    """
    # Only real sequences; a mapping would leak its keys in as tokens
    if not isinstance(raw, (list, tuple, set, frozenset)):
        return EMPTY_PERMISSIONS

    tokens = set()
    for item in raw:
        token = canonical_token(item)
        if token is not None:
            tokens.add(token)

    return PermissionSet(frozenset(tokens))
