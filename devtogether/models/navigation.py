"""
Navigation Models
=================

Value types produced by the policy engines: access verdicts,
notification navigation targets and notification display context.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from devtogether.core.enums import Priority, VerdictKind


class Verdict(BaseModel):
    """
    Outcome of an access evaluation.

    Attributes:
        kind: LOADING, ALLOW or REDIRECT
        path: Redirect target (REDIRECT only)
        reason: Machine readable reason for the redirect
        return_to: Originally requested path, for post-login return
    """

    model_config = ConfigDict(frozen=True)

    kind: VerdictKind
    path: Optional[str] = None
    reason: Optional[str] = None
    return_to: Optional[str] = None

    @classmethod
    def loading(cls) -> "Verdict":
        return cls(kind=VerdictKind.LOADING)

    @classmethod
    def allow(cls) -> "Verdict":
        return cls(kind=VerdictKind.ALLOW)

    @classmethod
    def redirect(cls, path: str, reason: str, return_to: Optional[str] = None) -> "Verdict":
        return cls(kind=VerdictKind.REDIRECT, path=path, reason=reason, return_to=return_to)

    @property
    def is_allowed(self) -> bool:
        return self.kind == VerdictKind.ALLOW

    @property
    def is_redirect(self) -> bool:
        return self.kind == VerdictKind.REDIRECT


class NavigationResult(BaseModel):
    """
    In-app navigation target for a notification.

    ``tab`` and ``highlight`` are optional refinements for the
    destination page; ``path`` alone is always a valid target.
    """

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., min_length=1)
    tab: Optional[str] = None
    highlight: Optional[str] = None
    external: bool = False

    @model_validator(mode="after")
    def validate_path(self) -> "NavigationResult":
        """Ensure in-app paths are absolute."""
        if not self.external and not self.path.startswith("/"):
            raise ValueError(f"Navigation path must be absolute: {self.path}")
        return self


class NotificationContext(BaseModel):
    """Display metadata for a notification badge or list entry."""

    model_config = ConfigDict(frozen=True)

    priority: Priority
    category: str
    action_text: str
