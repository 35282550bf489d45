"""
Access Policy Engine
====================

Decides, per navigation, whether a session may view a page or must be
redirected elsewhere.

Rules are an ordered list evaluated top to bottom; the first rule whose
predicate matches produces the verdict:

1. loading          -> Loading
2. auth required    -> /auth/login (with return-to)
3. hard block       -> /blocked
4. org pending      -> /pending-approval
5. org rejected     -> /rejected-organization
6. role required    -> /dashboard
7. otherwise        -> Allow

Blocked sessions skip the organization lifecycle pages: the hard block is
checked before the pending and rejected rules, so every redirect for a
blocked session converges on /blocked.

Usage:
    engine = get_access_policy()
    verdict = engine.evaluate(RouteRequirement(required_role=Role.ADMIN), facts, "/admin")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from devtogether.core.enums import OrganizationStatus
from devtogether.core.logging import AccessLogger, get_logger
from devtogether.core.paths import (
    BLOCKED_PATH,
    DASHBOARD_PATH,
    HOME_PATH,
    LOGIN_PATH,
    PENDING_APPROVAL_PATH,
    REJECTED_ORGANIZATION_PATH,
    is_auth_path,
    normalize_path,
)
from devtogether.models.navigation import Verdict
from devtogether.models.role_enum import Role
from devtogether.models.session import RouteRequirement, SessionFacts, is_admin
from devtogether.services.route_table import RouteGuard, RouteTable

logger = get_logger(__name__)


# =====================================
# Rule Definitions
# =====================================

@dataclass(frozen=True)
class AccessContext:
    """
    Everything a rule may look at.

    ``path`` is the normalized location; ``requested_path`` keeps the
    query string for the post-login return. ``is_admin`` is derived once
    per evaluation from the role and the legacy admin flag.
    """

    requirement: RouteRequirement
    facts: SessionFacts
    path: str
    is_admin: bool
    requested_path: str = ""


@dataclass(frozen=True)
class AccessRule:
    """
    A named predicate and the verdict it produces.

    Attributes:
        name: Rule name, reported in redirect logs
        applies: Predicate over the evaluation context
        verdict: Builds the verdict once the rule matched
    """

    name: str
    applies: Callable[[AccessContext], bool]
    verdict: Callable[[AccessContext], Verdict]


def _in_organization_lifecycle(facts: SessionFacts) -> bool:
    # A hard block outranks the lifecycle, including on the /blocked page itself
    return (
        facts.authenticated
        and facts.role == Role.ORGANIZATION
        and facts.has_profile
        and not is_hard_blocked(facts)
    )


def _organization_status(facts: SessionFacts) -> OrganizationStatus:
    # An organization without a recorded status has not been approved yet
    return facts.organization_status or OrganizationStatus.PENDING


def is_hard_blocked(facts: SessionFacts) -> bool:
    """Account-level block flag, or a blocked organization lifecycle."""
    if facts.blocked:
        return True
    return (
        facts.role == Role.ORGANIZATION
        and facts.organization_status == OrganizationStatus.BLOCKED
    )


def has_required_role(facts: SessionFacts, required: Iterable[Role], admin: bool) -> bool:
    """
    Check a viewer's role against a route's role requirement.

    Admins inherit developer capabilities, and either the admin role or
    the legacy admin flag satisfies an admin requirement.

    Args:
        facts: Session facts
        required: Roles the route accepts
        admin: Whether the viewer is an administrator

    Returns:
        True if the viewer may access the route
    """
    required = frozenset(required)
    if not required:
        return False
    if facts.role is not None and facts.role in required:
        return True
    if facts.role == Role.ADMIN and Role.DEVELOPER in required:
        return True
    if admin and Role.ADMIN in required:
        return True
    return False


def _needs_login(ctx: AccessContext) -> bool:
    return ctx.requirement.require_auth and not ctx.facts.authenticated


def _login_redirect(ctx: AccessContext) -> Verdict:
    return Verdict.redirect(LOGIN_PATH, "auth_required", return_to=ctx.requested_path or ctx.path)


def _hard_block(ctx: AccessContext) -> bool:
    return is_hard_blocked(ctx.facts) and ctx.path != BLOCKED_PATH


def _org_pending(ctx: AccessContext) -> bool:
    return (
        _in_organization_lifecycle(ctx.facts)
        and _organization_status(ctx.facts) == OrganizationStatus.PENDING
        and not is_auth_path(ctx.path)
        and ctx.path != PENDING_APPROVAL_PATH
    )


def _org_rejected(ctx: AccessContext) -> bool:
    return (
        _in_organization_lifecycle(ctx.facts)
        and _organization_status(ctx.facts) == OrganizationStatus.REJECTED
        and not is_auth_path(ctx.path)
        and ctx.path != REJECTED_ORGANIZATION_PATH
    )


def _missing_role(ctx: AccessContext) -> bool:
    required = ctx.requirement.required_roles
    if required is None:
        return False
    return not has_required_role(ctx.facts, required, ctx.is_admin)


ACCESS_RULES: List[AccessRule] = [
    AccessRule(
        name="loading",
        applies=lambda ctx: ctx.facts.loading,
        verdict=lambda ctx: Verdict.loading(),
    ),
    AccessRule(
        name="auth_required",
        applies=_needs_login,
        verdict=_login_redirect,
    ),
    AccessRule(
        name="hard_block",
        applies=_hard_block,
        verdict=lambda ctx: Verdict.redirect(BLOCKED_PATH, "blocked"),
    ),
    AccessRule(
        name="organization_pending",
        applies=_org_pending,
        verdict=lambda ctx: Verdict.redirect(PENDING_APPROVAL_PATH, "organization_pending"),
    ),
    AccessRule(
        name="organization_rejected",
        applies=_org_rejected,
        verdict=lambda ctx: Verdict.redirect(REJECTED_ORGANIZATION_PATH, "organization_rejected"),
    ),
    AccessRule(
        name="role_required",
        applies=_missing_role,
        verdict=lambda ctx: Verdict.redirect(DASHBOARD_PATH, "insufficient_role"),
    ),
]


# =====================================
# Engine
# =====================================

class AccessPolicyEngine:
    """
    Evaluates route requirements against session facts.

    The engine is stateless; it never raises and never mutates its
    inputs. Unknown or missing roles grant no special access.
    """

    def __init__(
        self,
        rules: Optional[List[AccessRule]] = None,
        route_table: Optional[RouteTable] = None,
    ):
        self.rules = list(rules) if rules is not None else list(ACCESS_RULES)
        self.route_table = route_table or RouteTable()
        self.access_log = AccessLogger("access")

    def evaluate(
        self,
        requirement: RouteRequirement,
        facts: SessionFacts,
        current_path: str,
    ) -> Verdict:
        """
        Evaluate a protected route.

        Args:
            requirement: Requirements the route declares
            facts: Current session facts
            current_path: Path being navigated to

        Returns:
            Loading, Allow, or a Redirect with its reason
        """
        path = normalize_path(current_path)
        ctx = AccessContext(
            requirement=requirement,
            facts=facts,
            path=path,
            is_admin=is_admin(facts),
            requested_path=current_path or "",
        )

        for rule in self.rules:
            if not rule.applies(ctx):
                continue
            verdict = rule.verdict(ctx)
            if verdict.is_redirect:
                self.access_log.log_redirect(path, verdict.path, rule.name, verdict.reason)
            elif not verdict.is_allowed:
                self.access_log.log_loading(path)
            return verdict

        return Verdict.allow()

    def evaluate_public(
        self,
        facts: SessionFacts,
        default_redirect: Optional[str] = None,
    ) -> Verdict:
        """
        Evaluate a page meant only for signed-out visitors.

        Signed-in users with a profile are sent on to ``default_redirect``
        (the dashboard unless given).
        """
        if facts.loading:
            self.access_log.log_loading("public")
            return Verdict.loading()

        if facts.authenticated and facts.has_profile:
            target = default_redirect or DASHBOARD_PATH
            self.access_log.log_redirect("public", target, "public_only", "already_authenticated")
            return Verdict.redirect(target, "already_authenticated")

        return Verdict.allow()

    def evaluate_path(self, facts: SessionFacts, path: str) -> Verdict:
        """
        Evaluate a path through the route table.

        Args:
            facts: Current session facts
            path: Requested location

        Returns:
            Verdict for the first matching route; unknown paths redirect home
        """
        route = self.route_table.match(path)

        if route is None:
            normalized = normalize_path(path)
            self.access_log.log_redirect(normalized, HOME_PATH, "catch_all", "unknown_route")
            return Verdict.redirect(HOME_PATH, "unknown_route")

        if route.guard == RouteGuard.OPEN:
            return Verdict.allow()

        if route.guard == RouteGuard.PUBLIC:
            return self.evaluate_public(facts)

        return self.evaluate(route.requirement, facts, path)


_engine: Optional[AccessPolicyEngine] = None


def get_access_policy() -> AccessPolicyEngine:
    """Get the shared engine instance."""
    global _engine
    if _engine is None:
        _engine = AccessPolicyEngine()
        logger.debug("access_policy_initialized", rules=[rule.name for rule in _engine.rules])
    return _engine
