"""
Notification Routes Module
==========================

Endpoints exposing the notification router and classifier.

Features:
- Resolve a notification to a navigation target and URL
- Classify a notification for display

Notifications are accepted as raw feed records. Unknown types and
malformed payloads degrade to safe defaults unless ``strict`` is set,
in which case they are rejected with 422.
"""

from fastapi import APIRouter, Depends

from devtogether.core.logging import get_logger
from devtogether.models.notification import parse_notification
from devtogether.schemas import (
    ErrorResponse,
    NavigationResponse,
    NotificationClassifyRequest,
    NotificationContextResponse,
    NotificationResolveRequest,
    NotificationResolveResponse,
)
from devtogether.services.notification_classifier import (
    NotificationContextClassifier,
    get_notification_classifier,
)
from devtogether.services.notification_router import (
    NotificationRouter,
    build_navigation_url,
    get_notification_router,
)

# Initialize logger
logger = get_logger(__name__)


# =====================================
# Router Setup
# =====================================

router = APIRouter(
    prefix="/notifications",
    tags=["Notifications"],
    responses={
        422: {"model": ErrorResponse, "description": "Malformed notification"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)


# =====================================
# Notification Endpoints
# =====================================

@router.post(
    "/resolve",
    response_model=NotificationResolveResponse,
    summary="Resolve Notification",
    description="Resolve a notification to a navigation target for the viewer's role.",
)
def resolve_notification(
    payload: NotificationResolveRequest,
    notification_router: NotificationRouter = Depends(get_notification_router),
    classifier: NotificationContextClassifier = Depends(get_notification_classifier),
) -> NotificationResolveResponse:
    """
    Resolve a notification.

    Args:
        payload: Raw notification, viewer role and id
        notification_router: Notification router
        classifier: Notification classifier

    Returns:
        Navigation target, serialized URL and display context

    Raises:
        MalformedInputError: In strict mode, for a malformed notification
    """
    notification = parse_notification(payload.notification, strict=payload.strict)
    result = notification_router.resolve(notification, payload.role, payload.user_id)

    logger.debug(
        "notification_resolved",
        notification_id=notification.id,
        notification_type=notification.type,
        path=result.path,
    )

    return NotificationResolveResponse(
        navigation=NavigationResponse.model_validate(result),
        url=build_navigation_url(result),
        context=NotificationContextResponse.model_validate(classifier.classify(notification)),
    )


@router.post(
    "/classify",
    response_model=NotificationContextResponse,
    summary="Classify Notification",
    description="Get priority, category and action text for a notification.",
)
def classify_notification(
    payload: NotificationClassifyRequest,
    classifier: NotificationContextClassifier = Depends(get_notification_classifier),
) -> NotificationContextResponse:
    notification = parse_notification(payload.notification, strict=payload.strict)
    return NotificationContextResponse.model_validate(classifier.classify(notification))
