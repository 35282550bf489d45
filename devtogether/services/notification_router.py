"""
Notification Router
===================

Maps a notification and the viewer's role to the most relevant in-app
page, optionally refined with a tab or a highlight anchor.

Resolution is total: every notification type and every role (including
a missing or unrecognised one) produces a target, falling back to the
dashboard when nothing more precise is known.

Usage:
    router = get_notification_router()
    result = router.resolve(notification, Role.DEVELOPER, user_id="u1")
    url = build_navigation_url(result)
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional
from urllib.parse import quote, urlencode, urlsplit

from devtogether.core.enums import NotificationType
from devtogether.core.logging import get_logger
from devtogether.core.paths import (
    ADMIN_PATH,
    APPLICATIONS_PATH,
    DASHBOARD_PATH,
    MY_APPLICATIONS_PATH,
    MY_PROJECTS_PATH,
    ORGANIZATION_DASHBOARD_PATH,
    PROFILE_PATH,
)
from devtogether.models.navigation import NavigationResult
from devtogether.models.notification import (
    AchievementNotification,
    AnyNotification,
    ApplicationNotification,
    FeedbackNotification,
    ModerationNotification,
    ProjectNotification,
    SystemNotification,
    TeamNotification,
    UnrecognizedNotification,
)
from devtogether.models.role_enum import Role
from devtogether.models.session import coerce_role

logger = get_logger(__name__)

# Project statuses that send an organization to the project itself
PROJECT_VISIBLE_STATUSES = frozenset({"approved", "open"})
# Project statuses that send an organization back to its project list
PROJECT_CLOSED_STATUSES = frozenset({"rejected", "cancelled"})

ADMIN_TAB_ORGANIZATIONS = "organizations"
ADMIN_TAB_PROJECTS = "projects"


def segment(value: str) -> str:
    """Percent-encode an identifier for use as a single path segment."""
    return quote(str(value), safe="")


def _dashboard() -> NavigationResult:
    return NavigationResult(path=DASHBOARD_PATH)


def build_navigation_url(result: NavigationResult) -> str:
    """
    Serialize a navigation result into a URL.

    ``tab`` then ``highlight`` are appended as query parameters, only
    when present. A path without refinements is returned unchanged.

    Args:
        result: Resolved navigation target

    Returns:
        URL string for the navigation host
    """
    params = [
        (name, value)
        for name, value in (("tab", result.tab), ("highlight", result.highlight))
        if value
    ]
    if not params:
        return result.path

    separator = "&" if "?" in result.path else "?"
    return f"{result.path}{separator}{urlencode(params)}"


class NotificationRouter:
    """
    Resolves notifications to navigation targets.

    Handlers are looked up by notification type; types without a
    handler (and unrecognised notifications) go to the dashboard.
    """

    def __init__(self):
        self._handlers: Dict[NotificationType, Callable[..., NavigationResult]] = {
            NotificationType.MODERATION: self._moderation,
            NotificationType.APPLICATION: self._application,
            NotificationType.PROJECT: self._project,
            NotificationType.STATUS_CHANGE: self._project,
            NotificationType.TEAM: self._team,
            NotificationType.CHAT: self._team,
            NotificationType.PROMOTION: self._team,
            NotificationType.FEEDBACK: self._feedback,
            NotificationType.ACHIEVEMENT: self._achievement,
            NotificationType.SYSTEM: self._system,
        }

    def resolve(
        self,
        notification: AnyNotification,
        role: Any = None,
        user_id: Optional[str] = None,
    ) -> NavigationResult:
        """
        Resolve the navigation target for a notification.

        Args:
            notification: Parsed notification
            role: Viewer role; unknown values are treated as no role
            user_id: Viewer id

        Returns:
            NavigationResult with a non-empty path
        """
        viewer_role = coerce_role(role)
        notification_type = notification.notification_type
        handler = self._handlers.get(notification_type) if notification_type else None

        if handler is None or isinstance(notification, UnrecognizedNotification):
            logger.debug(
                "notification_unhandled",
                notification_id=notification.id,
                notification_type=notification.type,
            )
            return _dashboard()

        return handler(notification, viewer_role, user_id)

    # =====================================
    # Handlers
    # =====================================

    def _moderation(
        self,
        notification: ModerationNotification,
        role: Optional[Role],
        user_id: Optional[str],
    ) -> NavigationResult:
        if role != Role.ADMIN:
            return _dashboard()

        data = notification.data
        # Organizations come first in the review pipeline
        if data.organization_id or data.organization_name:
            return NavigationResult(path=ADMIN_PATH, tab=ADMIN_TAB_ORGANIZATIONS)
        if data.project_id or data.project_title:
            return NavigationResult(path=ADMIN_PATH, tab=ADMIN_TAB_PROJECTS)
        if data.target_type == "organizations":
            return NavigationResult(path=ADMIN_PATH, tab=ADMIN_TAB_ORGANIZATIONS)
        if data.target_type == "projects":
            return NavigationResult(path=ADMIN_PATH, tab=ADMIN_TAB_PROJECTS)
        return NavigationResult(path=ADMIN_PATH)

    def _application(
        self,
        notification: ApplicationNotification,
        role: Optional[Role],
        user_id: Optional[str],
    ) -> NavigationResult:
        data = notification.data

        if role == Role.DEVELOPER:
            if data.project_id:
                highlight = f"application-{data.application_id}" if data.application_id else None
                return NavigationResult(
                    path=f"/projects/{segment(data.project_id)}",
                    highlight=highlight,
                )
            return NavigationResult(path=MY_APPLICATIONS_PATH)

        if role == Role.ORGANIZATION:
            return NavigationResult(path=APPLICATIONS_PATH)

        if role == Role.ADMIN:
            return self._admin_projects(data.project_id)

        return _dashboard()

    def _project(
        self,
        notification: ProjectNotification,
        role: Optional[Role],
        user_id: Optional[str],
    ) -> NavigationResult:
        data = notification.data
        project_path = f"/projects/{segment(data.project_id)}" if data.project_id else None

        if role == Role.ORGANIZATION:
            status = (data.status or "").strip().lower()
            if status in PROJECT_VISIBLE_STATUSES:
                return NavigationResult(path=project_path or MY_PROJECTS_PATH)
            if status in PROJECT_CLOSED_STATUSES:
                return NavigationResult(path=MY_PROJECTS_PATH)
            return NavigationResult(path=project_path or ORGANIZATION_DASHBOARD_PATH)

        if role == Role.DEVELOPER:
            if data.project_id:
                return NavigationResult(path=f"/workspace/{segment(data.project_id)}")
            return _dashboard()

        if role == Role.ADMIN:
            return self._admin_projects(data.project_id)

        return _dashboard()

    def _team(
        self,
        notification: TeamNotification,
        role: Optional[Role],
        user_id: Optional[str],
    ) -> NavigationResult:
        data = notification.data

        if role not in (Role.ORGANIZATION, Role.DEVELOPER) or not data.project_id:
            return _dashboard()

        return NavigationResult(
            path=f"/workspace/{segment(data.project_id)}",
            tab="chat" if data.message_id else None,
        )

    def _feedback(
        self,
        notification: FeedbackNotification,
        role: Optional[Role],
        user_id: Optional[str],
    ) -> NavigationResult:
        data = notification.data

        if role == Role.DEVELOPER:
            highlight = f"feedback-{data.feedback_id}" if data.feedback_id else None
            return NavigationResult(path=PROFILE_PATH, highlight=highlight)

        if role == Role.ORGANIZATION:
            if data.developer_id:
                return NavigationResult(path=f"/profile/{segment(data.developer_id)}")
            return NavigationResult(path=ORGANIZATION_DASHBOARD_PATH)

        return _dashboard()

    def _achievement(
        self,
        notification: AchievementNotification,
        role: Optional[Role],
        user_id: Optional[str],
    ) -> NavigationResult:
        return NavigationResult(path=PROFILE_PATH, tab="achievements")

    def _system(
        self,
        notification: SystemNotification,
        role: Optional[Role],
        user_id: Optional[str],
    ) -> NavigationResult:
        action_url = (notification.data.action_url or "").strip()
        if not action_url:
            return _dashboard()

        # Protocol-relative URLs ("//host/...") leave the app too
        parts = urlsplit(action_url)
        if parts.scheme or parts.netloc:
            return NavigationResult(path=action_url, external=True)

        if not action_url.startswith("/"):
            action_url = "/" + action_url
        return NavigationResult(path=action_url)

    @staticmethod
    def _admin_projects(project_id: Optional[str]) -> NavigationResult:
        if project_id:
            return NavigationResult(path=ADMIN_PATH, tab=ADMIN_TAB_PROJECTS)
        return NavigationResult(path=ADMIN_PATH)


_router: Optional[NotificationRouter] = None


def get_notification_router() -> NotificationRouter:
    """Get the shared router instance."""
    global _router
    if _router is None:
        _router = NotificationRouter()
    return _router
