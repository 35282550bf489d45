"""
Session Models
==============

Read-only facts about the current viewer and the access requirements
a route declares. Both are supplied per call; the policy engine never
reads session state from anywhere else. Fields accept their camelCase
alias (``organizationStatus``) or the snake_case name.
"""

from __future__ import annotations

from typing import Any, FrozenSet, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from devtogether.core.enums import OrganizationStatus
from devtogether.core.exceptions import MalformedInputError
from devtogether.core.logging import AccessLogger
from devtogether.models.role_enum import Role

_access_log = AccessLogger("session")


# =====================================
# Parsing helpers
# =====================================

def parse_role(value: Any) -> Optional[Role]:
    """
    Strictly parse a role value.

    Args:
        value: Role, role string or None

    Returns:
        Role or None when no role is set

    Raises:
        MalformedInputError: If the value is not a known role
    """
    if value is None or isinstance(value, Role):
        return value
    if isinstance(value, str):
        try:
            return Role(value.strip().lower())
        except ValueError:
            pass
    raise MalformedInputError("role", value, "unknown role")


def coerce_role(value: Any) -> Optional[Role]:
    """Parse a role, treating anything unrecognised as no role at all."""
    try:
        return parse_role(value)
    except MalformedInputError as exc:
        _access_log.log_malformed_input(exc.field, exc.value, exc.reason)
        return None


def parse_organization_status(value: Any) -> Optional[OrganizationStatus]:
    """
    Strictly parse an organization status value.

    Raises:
        MalformedInputError: If the value is not a known status
    """
    if value is None or isinstance(value, OrganizationStatus):
        return value
    if isinstance(value, str):
        try:
            return OrganizationStatus(value.strip().lower())
        except ValueError:
            pass
    raise MalformedInputError("organization_status", value, "unknown organization status")


def coerce_organization_status(value: Any) -> Optional[OrganizationStatus]:
    """
    Parse an organization status, degrading unknown values to PENDING.

    PENDING is the most restrictive lifecycle state that still lets the
    account reach its own status page.
    """
    try:
        return parse_organization_status(value)
    except MalformedInputError as exc:
        _access_log.log_malformed_input(exc.field, exc.value, exc.reason)
        return OrganizationStatus.PENDING


# =====================================
# Session Facts
# =====================================

class SessionFacts(BaseModel):
    """
    Snapshot of the viewer's session, recomputed by the session provider.

    Attributes:
        authenticated: A session exists
        loading: Session or profile are still being resolved
        role: Profile role, None when no profile is loaded
        organization_status: Approval lifecycle state (organizations only)
        blocked: Account-level hard block, independent of the lifecycle
        user_id: Viewer id, if known
        legacy_admin: Legacy boolean admin flag kept on older profiles
        profile_loaded: Whether a profile record is present. Defaults to
            ``role is not None`` when not supplied.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    authenticated: bool = False
    loading: bool = False
    role: Optional[Role] = None
    organization_status: Optional[OrganizationStatus] = None
    blocked: bool = False
    user_id: Optional[str] = None
    legacy_admin: bool = False
    profile_loaded: Optional[bool] = None

    @field_validator("role", mode="before")
    @classmethod
    def _lenient_role(cls, v: Any) -> Optional[Role]:
        return coerce_role(v)

    @field_validator("organization_status", mode="before")
    @classmethod
    def _lenient_status(cls, v: Any) -> Optional[OrganizationStatus]:
        return coerce_organization_status(v)

    @property
    def has_profile(self) -> bool:
        if self.profile_loaded is not None:
            return self.profile_loaded
        return self.role is not None


def is_admin(facts: SessionFacts) -> bool:
    """Either the admin role or the legacy admin flag marks an administrator."""
    return facts.role == Role.ADMIN or facts.legacy_admin


# =====================================
# Route Requirements
# =====================================

class RouteRequirement(BaseModel):
    """
    Access requirements declared by a protected route.

    Attributes:
        require_auth: Route needs an authenticated session
        required_role: A single role, several roles, or None for any role
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    require_auth: bool = True
    required_role: Union[Role, Tuple[Role, ...], None] = Field(default=None)

    @property
    def required_roles(self) -> Optional[FrozenSet[Role]]:
        """Required roles as a set, or None when any role is accepted."""
        if self.required_role is None:
            return None
        if isinstance(self.required_role, Role):
            return frozenset({self.required_role})
        return frozenset(self.required_role)
