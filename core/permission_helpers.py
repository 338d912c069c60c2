from typing import Optional

from fastapi import Depends, HTTPException

from core.access import AccessEvaluator, Principal, default_evaluator
from core.aliases import Requirement, Single, describe_requirement
from dependencies.auth import get_optional_principal, unauthorized


# -----------------------------------------------------
# FastAPI dependency wrappers
# -----------------------------------------------------
def requires_access(requirement: Requirement, evaluator: AccessEvaluator = default_evaluator):
    """
    Usage:
        @router.get("/", dependencies=[Depends(requires_access(Alias("usuarios")))])

    No principal -> 401 (the client redirects to the entry point).
    Principal without access -> 403.
    """

    def dependency(principal: Optional[Principal] = Depends(get_optional_principal)) -> Principal:
        if principal is None:
            raise unauthorized()
        if not evaluator.grants(principal, requirement):
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: '{describe_requirement(requirement)}' required",
            )
        return principal

    return dependency


def requires_permission(permission: str):
    """
    Usage:
        @router.post("/", dependencies=[Depends(requires_permission("rentas.editar"))])
    """
    return requires_access(Single(permission))
