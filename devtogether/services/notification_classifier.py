"""
Notification Context Classifier
===============================

Derives display metadata (priority, category, action text) for a
notification from its type and payload. Independent of the viewer.
"""

from __future__ import annotations

from typing import Dict, Optional

from devtogether.core.enums import NotificationType, Priority
from devtogether.core.logging import AccessLogger
from devtogether.models.navigation import NotificationContext
from devtogether.models.notification import AnyNotification, ModerationNotification

DEFAULT_CONTEXT = NotificationContext(
    priority=Priority.LOW,
    category="Notification",
    action_text="View Details",
)

NOTIFICATION_CONTEXTS: Dict[NotificationType, NotificationContext] = {
    NotificationType.MODERATION: NotificationContext(
        priority=Priority.HIGH,
        category="Admin Action Required",
        action_text="Review in Admin Dashboard",
    ),
    NotificationType.APPLICATION: NotificationContext(
        priority=Priority.MEDIUM,
        category="Application Update",
        action_text="View Application",
    ),
    NotificationType.PROJECT: NotificationContext(
        priority=Priority.MEDIUM,
        category="Project Update",
        action_text="View Project",
    ),
    NotificationType.STATUS_CHANGE: NotificationContext(
        priority=Priority.MEDIUM,
        category="Project Update",
        action_text="View Project",
    ),
    NotificationType.TEAM: NotificationContext(
        priority=Priority.LOW,
        category="Team Activity",
        action_text="Join Workspace",
    ),
    NotificationType.CHAT: NotificationContext(
        priority=Priority.LOW,
        category="Team Activity",
        action_text="Join Workspace",
    ),
    NotificationType.PROMOTION: NotificationContext(
        priority=Priority.HIGH,
        category="Role Promotion",
        action_text="View Workspace",
    ),
    NotificationType.FEEDBACK: NotificationContext(
        priority=Priority.MEDIUM,
        category="Feedback",
        action_text="View Profile",
    ),
    NotificationType.ACHIEVEMENT: NotificationContext(
        priority=Priority.LOW,
        category="Achievement",
        action_text="View Achievements",
    ),
    NotificationType.SYSTEM: DEFAULT_CONTEXT,
}


class NotificationContextClassifier:
    """Looks up the display context for a notification."""

    def __init__(self):
        self.access_log = AccessLogger("classifier")

    def classify(self, notification: AnyNotification) -> NotificationContext:
        """
        Classify a notification for display.

        Moderation notifications may carry their own priority in the
        payload; an invalid value keeps the default.

        Args:
            notification: Parsed notification

        Returns:
            NotificationContext for the notification type
        """
        context = DEFAULT_CONTEXT
        if notification.notification_type is not None:
            context = NOTIFICATION_CONTEXTS.get(notification.notification_type, DEFAULT_CONTEXT)

        if isinstance(notification, ModerationNotification):
            priority = self._payload_priority(notification.data.priority)
            if priority is not None and priority != context.priority:
                context = context.model_copy(update={"priority": priority})

        return context

    def _payload_priority(self, value: Optional[str]) -> Optional[Priority]:
        if value is None:
            return None
        try:
            return Priority(value.strip().lower())
        except ValueError:
            self.access_log.log_malformed_input("data.priority", value, "unknown priority")
            return None


_classifier: Optional[NotificationContextClassifier] = None


def get_notification_classifier() -> NotificationContextClassifier:
    """Get the shared classifier instance."""
    global _classifier
    if _classifier is None:
        _classifier = NotificationContextClassifier()
    return _classifier
