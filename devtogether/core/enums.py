"""
Enumeration Module
==================

Defines enumerations used across the application.
"""

from enum import Enum


class OrganizationStatus(str, Enum):
    """
    Approval lifecycle for organization accounts.

    Organizations register as PENDING and are moved to APPROVED,
    REJECTED or BLOCKED by moderation. APPROVED may later become BLOCKED.
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    BLOCKED = "blocked"


class NotificationType(str, Enum):
    """Closed set of notification types produced by the platform."""

    APPLICATION = "application"
    PROJECT = "project"
    TEAM = "team"
    ACHIEVEMENT = "achievement"
    SYSTEM = "system"
    MODERATION = "moderation"
    CHAT = "chat"
    STATUS_CHANGE = "status_change"
    FEEDBACK = "feedback"
    PROMOTION = "promotion"


class Priority(str, Enum):
    """Display priority of a notification."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class VerdictKind(str, Enum):
    """Outcome of an access evaluation."""

    LOADING = "loading"
    ALLOW = "allow"
    REDIRECT = "redirect"
