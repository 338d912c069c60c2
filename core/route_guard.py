# core/route_guard.py

"""
Page guard state machine.

Inputs on every update: whether the session/profile fetch has resolved,
and the Principal (or None). Output: which GuardState the page is in and
what to render. The redirect to the entry point is a side effect fired
once per trip into `unauthenticated`, not once per update.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from core.access import AccessEvaluator, Principal, default_evaluator
from core.aliases import Requirement
from core.logging_config import logger
from models.enums import GuardRender, GuardState


_RENDER_FOR_STATE = {
    GuardState.loading: GuardRender.spinner,
    GuardState.unauthenticated: GuardRender.placeholder,
    GuardState.authenticated_granted: GuardRender.children,
    GuardState.authenticated_denied: GuardRender.fallback,
}


@dataclass(frozen=True)
class GuardDecision:
    state: GuardState
    render: GuardRender
    redirected: bool = False  # a redirect was issued by this update


class RouteGuard:
    def __init__(
        self,
        requirement: Requirement = None,
        *,
        redirect: Callable[[str], None],
        entry_point: str = "/",
        evaluator: AccessEvaluator = default_evaluator,
    ):
        self.requirement = requirement
        self.entry_point = entry_point
        self.evaluator = evaluator
        self._redirect = redirect
        self._state = GuardState.loading
        self._redirect_issued = False

    @property
    def state(self) -> GuardState:
        return self._state

    def _next_state(self, session_loaded: bool, principal: Optional[Principal]) -> GuardState:
        if not session_loaded:
            return GuardState.loading
        if principal is None:
            return GuardState.unauthenticated
        if self.evaluator.grants(principal, self.requirement):
            return GuardState.authenticated_granted
        return GuardState.authenticated_denied

    def update(self, *, session_loaded: bool, principal: Optional[Principal]) -> GuardDecision:
        previous = self._state
        self._state = self._next_state(session_loaded, principal)

        if self._state != previous:
            logger.debug(f"Route guard: {previous} -> {self._state}")

        redirected = False
        if self._state == GuardState.unauthenticated:
            # Already navigating away: re-renders and refreshes that stay
            # unauthenticated must not redirect again.
            if not self._redirect_issued:
                self._redirect_issued = True
                redirected = True
                self._redirect(self.entry_point)
        elif self._state in (GuardState.authenticated_granted, GuardState.authenticated_denied):
            self._redirect_issued = False

        return GuardDecision(
            state=self._state,
            render=_RENDER_FOR_STATE[self._state],
            redirected=redirected,
        )
