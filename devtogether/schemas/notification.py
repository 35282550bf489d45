"""
Notification Schemas Module
===========================

Pydantic models for notification routing request/response validation.

Notifications are accepted as raw feed records and parsed by the
notification models, so unknown types and malformed payloads degrade
instead of failing request validation.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from devtogether.core.enums import Priority


# ==========================
# Request Schemas
# ==========================

class NotificationClassifyRequest(BaseModel):
    """Classify a notification for display."""

    notification: Dict[str, Any] = Field(
        ...,
        description="Notification record as delivered by the feed"
    )
    strict: bool = Field(
        default=False,
        description="Reject malformed notifications instead of degrading"
    )


class NotificationResolveRequest(NotificationClassifyRequest):
    """Resolve a notification to a navigation target."""

    role: Optional[str] = Field(
        default=None,
        description="Viewer role (developer, organization or admin)"
    )
    user_id: Optional[str] = Field(
        default=None,
        description="Viewer id"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "notification": {
                    "id": "n-1",
                    "type": "application",
                    "data": {"projectId": "p1", "applicationId": "a1"},
                },
                "role": "developer",
                "user_id": "u1",
            }
        }
    )


# ==========================
# Response Schemas
# ==========================

class NavigationResponse(BaseModel):
    """Navigation target for a notification."""

    path: str = Field(..., description="Destination path or external URL")
    tab: Optional[str] = Field(default=None, description="Tab to open")
    highlight: Optional[str] = Field(default=None, description="Element to highlight")
    external: bool = Field(default=False, description="Destination leaves the app")

    model_config = ConfigDict(from_attributes=True)


class NotificationContextResponse(BaseModel):
    """Display metadata for a notification."""

    priority: Priority
    category: str
    action_text: str

    model_config = ConfigDict(from_attributes=True)


class NotificationResolveResponse(BaseModel):
    """Resolved navigation, serialized URL and display context."""

    navigation: NavigationResponse
    url: str = Field(..., description="URL for the navigation host")
    context: NotificationContextResponse

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "navigation": {
                    "path": "/projects/p1",
                    "tab": None,
                    "highlight": "application-a1",
                    "external": False,
                },
                "url": "/projects/p1?highlight=application-a1",
                "context": {
                    "priority": "medium",
                    "category": "Application Update",
                    "action_text": "View Application",
                },
            }
        }
    )
