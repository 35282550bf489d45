"""
Access Schemas Module
=====================

Pydantic models for access evaluation request/response validation.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from devtogether.core.enums import VerdictKind
from devtogether.models.navigation import Verdict
from devtogether.models.session import RouteRequirement, SessionFacts


# ==========================
# Request Schemas
# ==========================

class AccessEvaluationRequest(BaseModel):
    """Evaluate a navigation against a requirement or the route table."""

    path: str = Field(
        ...,
        description="Path being navigated to"
    )
    session: SessionFacts = Field(
        default_factory=SessionFacts,
        description="Session facts of the viewer"
    )
    requirement: Optional[RouteRequirement] = Field(
        default=None,
        description="Route requirement; the route table is used when omitted"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "path": "/projects/create",
                "session": {
                    "authenticated": True,
                    "loading": False,
                    "role": "developer",
                    "blocked": False,
                },
                "requirement": {
                    "require_auth": True,
                    "required_role": "organization",
                },
            }
        }
    )


class PublicEvaluationRequest(BaseModel):
    """Evaluate a page that is hidden from signed-in users."""

    session: SessionFacts = Field(
        default_factory=SessionFacts,
        description="Session facts of the viewer"
    )
    default_redirect: Optional[str] = Field(
        default=None,
        description="Where signed-in users are sent (defaults to /dashboard)"
    )


# ==========================
# Response Schemas
# ==========================

class VerdictResponse(BaseModel):
    """Access verdict."""

    kind: VerdictKind = Field(
        ...,
        description="loading, allow or redirect"
    )
    path: Optional[str] = Field(
        default=None,
        description="Redirect target"
    )
    reason: Optional[str] = Field(
        default=None,
        description="Reason for the redirect"
    )
    return_to: Optional[str] = Field(
        default=None,
        description="Requested path to return to after login"
    )

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "kind": "redirect",
                "path": "/dashboard",
                "reason": "insufficient_role",
                "return_to": None,
            }
        }
    )

    @classmethod
    def from_verdict(cls, verdict: Verdict) -> "VerdictResponse":
        return cls.model_validate(verdict)
