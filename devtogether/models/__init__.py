"""
Model Package Initialization
============================

Value types consumed and produced by the policy engines.

Usage:
    from devtogether.models import SessionFacts, RouteRequirement, Role
"""

from .role_enum import Role
from .session import RouteRequirement, SessionFacts, is_admin
from .navigation import NavigationResult, NotificationContext, Verdict
from .notification import (
    AnyNotification,
    Notification,
    UnrecognizedNotification,
    parse_notification,
)

__all__ = [
    "Role",
    "SessionFacts",
    "RouteRequirement",
    "is_admin",
    "Verdict",
    "NavigationResult",
    "NotificationContext",
    "Notification",
    "AnyNotification",
    "UnrecognizedNotification",
    "parse_notification",
]
