"""
Test Configuration and Fixtures
================================

Central configuration for pytest with all shared fixtures.

Features:
- Session fact factories for every kind of viewer
- Raw notification factory
- TestClient setup
"""

import os
from typing import Any, Callable, Dict, Generator, Optional

import pytest
from fastapi.testclient import TestClient

# Set testing environment before importing app modules
os.environ["DEVTOGETHER_ENVIRONMENT"] = "testing"
os.environ["DEVTOGETHER_LOG_LEVEL"] = "DEBUG"

from devtogether.core.config import reset_settings
from devtogether.core.enums import OrganizationStatus
from devtogether.main import create_app
from devtogether.models.role_enum import Role
from devtogether.models.session import SessionFacts
from devtogether.services.access_policy import AccessPolicyEngine
from devtogether.services.notification_classifier import NotificationContextClassifier
from devtogether.services.notification_router import NotificationRouter


# =====================================
# Engine Fixtures
# =====================================

@pytest.fixture
def engine() -> AccessPolicyEngine:
    return AccessPolicyEngine()


@pytest.fixture
def notification_router() -> NotificationRouter:
    return NotificationRouter()


@pytest.fixture
def classifier() -> NotificationContextClassifier:
    return NotificationContextClassifier()


# =====================================
# Session Fact Fixtures
# =====================================

@pytest.fixture
def make_facts() -> Callable[..., SessionFacts]:
    """
    Factory for session facts.

    Defaults to a signed-in developer with a loaded profile.
    """
    def _make(**overrides: Any) -> SessionFacts:
        values: Dict[str, Any] = {
            "authenticated": True,
            "loading": False,
            "role": Role.DEVELOPER,
            "organization_status": None,
            "blocked": False,
            "user_id": "u1",
        }
        values.update(overrides)
        return SessionFacts(**values)

    return _make


@pytest.fixture
def anonymous_facts() -> SessionFacts:
    return SessionFacts(authenticated=False, loading=False)


@pytest.fixture
def loading_facts() -> SessionFacts:
    return SessionFacts(authenticated=False, loading=True)


@pytest.fixture
def developer_facts(make_facts) -> SessionFacts:
    return make_facts(role=Role.DEVELOPER)


@pytest.fixture
def admin_facts(make_facts) -> SessionFacts:
    return make_facts(role=Role.ADMIN, user_id="admin-1")


@pytest.fixture
def approved_org_facts(make_facts) -> SessionFacts:
    return make_facts(
        role=Role.ORGANIZATION,
        organization_status=OrganizationStatus.APPROVED,
        user_id="org-1",
    )


@pytest.fixture
def pending_org_facts(make_facts) -> SessionFacts:
    return make_facts(
        role=Role.ORGANIZATION,
        organization_status=OrganizationStatus.PENDING,
        user_id="org-1",
    )


# =====================================
# Notification Fixtures
# =====================================

@pytest.fixture
def make_notification() -> Callable[..., Dict[str, Any]]:
    """Factory for raw notification records as delivered by the feed."""
    def _make(
        notification_type: str,
        data: Optional[Dict[str, Any]] = None,
        **extra: Any,
    ) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            "id": "n-1",
            "userId": "u1",
            "type": notification_type,
            "title": "Notification",
            "message": "Something happened",
            "data": data or {},
            "read": False,
            "createdAt": "2024-01-15T10:30:00Z",
        }
        record.update(extra)
        return record

    return _make


# =====================================
# Client Fixtures
# =====================================

@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """
    Create a test client against a freshly built app.
    """
    reset_settings()
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
    reset_settings()
