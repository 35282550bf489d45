"""
Schemas Package Initialization
==============================

Exports all Pydantic schemas for the application.

Usage:
    from devtogether.schemas import AccessEvaluationRequest, VerdictResponse
"""

# Access schemas
from devtogether.schemas.access import (
    AccessEvaluationRequest,
    PublicEvaluationRequest,
    VerdictResponse,
)

# Notification schemas
from devtogether.schemas.notification import (
    NavigationResponse,
    NotificationClassifyRequest,
    NotificationContextResponse,
    NotificationResolveRequest,
    NotificationResolveResponse,
)

# Common schemas
from devtogether.schemas.common import ErrorResponse

__all__ = [
    # Access
    "AccessEvaluationRequest",
    "PublicEvaluationRequest",
    "VerdictResponse",
    # Notification
    "NavigationResponse",
    "NotificationClassifyRequest",
    "NotificationContextResponse",
    "NotificationResolveRequest",
    "NotificationResolveResponse",
    # Common
    "ErrorResponse",
]
