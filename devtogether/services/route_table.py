"""
Route Table
===========

Access declaration for every page of the DevTogether application.

Each entry is guarded in one of three ways:
- PROTECTED: evaluated against a RouteRequirement
- PUBLIC: hidden from signed-in users (login, register, ...)
- OPEN: rendered for everyone

Entries are matched in declaration order, so literal paths must come
before parameterised siblings (``/projects/create`` before
``/projects/{project_id}``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from starlette.routing import compile_path

from devtogether.core.paths import normalize_path
from devtogether.models.role_enum import Role
from devtogether.models.session import RouteRequirement


class RouteGuard(str, Enum):
    """How a route is guarded."""

    PROTECTED = "protected"
    PUBLIC = "public"
    OPEN = "open"


@dataclass(frozen=True)
class RouteDefinition:
    """
    A single page declaration.

    Attributes:
        pattern: Starlette path pattern, e.g. ``/projects/{project_id}``
        guard: Guard applied to the page
        requirement: Requirement for PROTECTED routes
    """

    pattern: str
    guard: RouteGuard = RouteGuard.PROTECTED
    requirement: Optional[RouteRequirement] = None
    _regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        regex, _, _ = compile_path(self.pattern)
        object.__setattr__(self, "_regex", regex)
        if self.guard == RouteGuard.PROTECTED and self.requirement is None:
            object.__setattr__(self, "requirement", RouteRequirement())

    def matches(self, path: str) -> bool:
        return self._regex.match(path) is not None


def protected(pattern: str, *roles: Role) -> RouteDefinition:
    """Declare an authenticated route, optionally restricted to roles."""
    required: Optional[Tuple[Role, ...]] = tuple(roles) if roles else None
    return RouteDefinition(
        pattern=pattern,
        guard=RouteGuard.PROTECTED,
        requirement=RouteRequirement(require_auth=True, required_role=required),
    )


def public(pattern: str) -> RouteDefinition:
    return RouteDefinition(pattern=pattern, guard=RouteGuard.PUBLIC)


def open_route(pattern: str) -> RouteDefinition:
    return RouteDefinition(pattern=pattern, guard=RouteGuard.OPEN)


ROUTE_TABLE: Tuple[RouteDefinition, ...] = (
    # Home and landing pages
    open_route("/"),
    open_route("/for-developers"),
    open_route("/for-organizations"),

    # Authentication
    public("/auth/login"),
    public("/auth/register"),
    public("/auth/forgot-password"),
    public("/auth/verify-email"),
    open_route("/auth/callback"),
    protected("/auth/select-role"),

    # Organization lifecycle pages
    protected("/pending-approval"),
    protected("/rejected-organization"),
    protected("/blocked"),

    # Onboarding and dashboards
    protected("/onboarding"),
    protected("/dashboard"),
    protected("/organization/dashboard", Role.ORGANIZATION),
    protected("/organization/projects", Role.ORGANIZATION),

    # Profiles
    open_route("/profile/shared/{share_token}"),
    protected("/profile"),
    protected("/profile/{user_id}"),

    # Projects and workspaces
    protected("/projects"),
    protected("/projects/create", Role.ORGANIZATION),
    protected("/projects/{project_id}"),
    protected("/my-projects", Role.ORGANIZATION),
    protected("/workspace/{project_id}"),

    # Applications
    protected("/applications"),
    protected("/my-applications"),

    # Notifications
    protected("/notifications"),

    # Administration
    protected("/admin", Role.ADMIN),
)


class RouteTable:
    """Ordered lookup over route definitions."""

    def __init__(self, routes: Iterable[RouteDefinition] = ROUTE_TABLE):
        self._routes: List[RouteDefinition] = list(routes)

    @property
    def routes(self) -> List[RouteDefinition]:
        return list(self._routes)

    def match(self, path: str) -> Optional[RouteDefinition]:
        """
        Find the first route declaring ``path``.

        Args:
            path: Requested location; query strings and trailing
                slashes are ignored

        Returns:
            Matching RouteDefinition, or None for unknown paths
        """
        normalized = normalize_path(path)
        for route in self._routes:
            if route.matches(normalized):
                return route
        return None
