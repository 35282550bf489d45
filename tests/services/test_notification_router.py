"""
Notification Router Unit Tests
==============================

Tests for notification navigation including:
- Totality over types and roles
- Role-conditioned destinations per type
- Moderation tab selection and tie-break
- System action URLs
- URL serialization
"""

import pytest

from devtogether.core.enums import NotificationType
from devtogether.models.navigation import NavigationResult
from devtogether.models.notification import UnrecognizedNotification, parse_notification
from devtogether.models.role_enum import Role
from devtogether.services.notification_router import build_navigation_url, segment


pytestmark = pytest.mark.routing


@pytest.fixture
def resolve(notification_router, make_notification):
    """Resolve a raw notification for a role."""
    def _resolve(notification_type, data=None, role=Role.DEVELOPER, user_id="u1"):
        notification = parse_notification(make_notification(notification_type, data))
        return notification_router.resolve(notification, role, user_id)

    return _resolve


class TestTotality:
    """Tests that every type and role resolves."""

    @pytest.mark.parametrize("notification_type", [t.value for t in NotificationType])
    @pytest.mark.parametrize("role", [*Role, None, "superuser"])
    def test_resolves_with_empty_payload(self, resolve, notification_type, role):
        """Test that every combination yields an absolute path."""
        # Act
        result = resolve(notification_type, {}, role=role)

        # Assert
        assert isinstance(result, NavigationResult)
        assert result.path.startswith("/")

    def test_unrecognized_type_goes_to_dashboard(self, resolve):
        """Test the default branch."""
        # Act
        result = resolve("newsletter", {"projectId": "p1"})

        # Assert
        assert result == NavigationResult(path="/dashboard")

    def test_bare_unrecognized_notification(self, notification_router):
        # Act
        result = notification_router.resolve(UnrecognizedNotification(), Role.ADMIN)

        # Assert
        assert result.path == "/dashboard"


class TestModeration:
    """Tests for moderation notifications."""

    def test_organization_tab(self, resolve):
        """Test that organization reviews open the organizations tab."""
        # Act
        result = resolve("moderation", {"organizationId": "o1"}, role=Role.ADMIN)

        # Assert
        assert result == NavigationResult(path="/admin", tab="organizations")

    def test_project_tab(self, resolve):
        # Act
        result = resolve("moderation", {"projectTitle": "Food Bank App"}, role=Role.ADMIN)

        # Assert
        assert result == NavigationResult(path="/admin", tab="projects")

    def test_organization_fields_win(self, resolve):
        """Test the tie-break between organization and project fields."""
        # Act
        result = resolve(
            "moderation",
            {"organizationName": "Helping Hands", "projectId": "p1"},
            role=Role.ADMIN,
        )

        # Assert
        assert result.tab == "organizations"

    @pytest.mark.parametrize("target,tab", [("organizations", "organizations"), ("projects", "projects")])
    def test_queue_type_hint(self, resolve, target, tab):
        """Test that data.type selects the tab when no ids are present."""
        # Act
        result = resolve("moderation", {"type": target}, role=Role.ADMIN)

        # Assert
        assert result.tab == tab

    def test_no_hint_opens_overview(self, resolve):
        # Act
        result = resolve("moderation", {}, role=Role.ADMIN)

        # Assert
        assert result == NavigationResult(path="/admin")

    @pytest.mark.parametrize("role", [Role.DEVELOPER, Role.ORGANIZATION, None])
    def test_non_admins_go_to_dashboard(self, resolve, role):
        # Act
        result = resolve("moderation", {"organizationId": "o1"}, role=role)

        # Assert
        assert result.path == "/dashboard"


class TestApplication:
    """Tests for application notifications."""

    def test_developer_highlight(self, resolve):
        """Test that developers land on the project with their application highlighted."""
        # Act
        result = resolve("application", {"projectId": "p1", "applicationId": "a1"}, role="developer")

        # Assert
        assert result == NavigationResult(path="/projects/p1", highlight="application-a1")
        assert build_navigation_url(result) == "/projects/p1?highlight=application-a1"

    def test_developer_without_application_id(self, resolve):
        # Act
        result = resolve("application", {"projectId": "p1"})

        # Assert
        assert result == NavigationResult(path="/projects/p1")

    def test_developer_without_project(self, resolve):
        # Act
        result = resolve("application", {"applicationId": "a1"})

        # Assert
        assert result.path == "/my-applications"

    def test_organization(self, resolve):
        # Act
        result = resolve("application", {"projectId": "p1"}, role=Role.ORGANIZATION)

        # Assert
        assert result.path == "/applications"

    def test_admin(self, resolve):
        # Assert
        assert resolve("application", {"projectId": "p1"}, role=Role.ADMIN).tab == "projects"
        assert resolve("application", {}, role=Role.ADMIN) == NavigationResult(path="/admin")


class TestProject:
    """Tests for project and status change notifications."""

    @pytest.mark.parametrize("status", ["approved", "open", "Approved"])
    def test_organization_visible_project(self, resolve, status):
        # Act
        result = resolve("project", {"projectId": "p2", "status": status}, role=Role.ORGANIZATION)

        # Assert
        assert result.path == "/projects/p2"

    def test_organization_approved_without_id(self, resolve):
        # Act
        result = resolve("project", {"status": "approved"}, role=Role.ORGANIZATION)

        # Assert
        assert result.path == "/my-projects"

    @pytest.mark.parametrize("status", ["rejected", "cancelled"])
    def test_organization_closed_project(self, resolve, status):
        """Test that a rejected project goes to the project list, not the project."""
        # Act
        result = resolve("project", {"projectId": "p2", "status": status}, role=Role.ORGANIZATION)

        # Assert
        assert result == NavigationResult(path="/my-projects")

    def test_organization_other_status(self, resolve):
        # Assert
        assert resolve("status_change", {"projectId": "p2"}, role=Role.ORGANIZATION).path == "/projects/p2"
        assert resolve("status_change", {}, role=Role.ORGANIZATION).path == "/organization/dashboard"

    def test_developer_workspace(self, resolve):
        # Assert
        assert resolve("project", {"projectId": "p2"}).path == "/workspace/p2"
        assert resolve("status_change", {}).path == "/dashboard"

    def test_admin(self, resolve):
        # Act
        result = resolve("project", {"projectId": "p2"}, role=Role.ADMIN)

        # Assert
        assert result == NavigationResult(path="/admin", tab="projects")


class TestTeam:
    """Tests for team, chat and promotion notifications."""

    @pytest.mark.parametrize("notification_type", ["team", "chat", "promotion"])
    @pytest.mark.parametrize("role", [Role.DEVELOPER, Role.ORGANIZATION])
    def test_workspace(self, resolve, notification_type, role):
        # Act
        result = resolve(notification_type, {"projectId": "p3"}, role=role)

        # Assert
        assert result == NavigationResult(path="/workspace/p3")

    def test_chat_tab_for_messages(self, resolve):
        # Act
        result = resolve("chat", {"projectId": "p3", "messageId": "m9"})

        # Assert
        assert result == NavigationResult(path="/workspace/p3", tab="chat")
        assert build_navigation_url(result) == "/workspace/p3?tab=chat"

    def test_without_project(self, resolve):
        # Assert
        assert resolve("team", {"messageId": "m9"}).path == "/dashboard"

    def test_admin_dashboard(self, resolve):
        # Assert
        assert resolve("promotion", {"projectId": "p3"}, role=Role.ADMIN).path == "/dashboard"


class TestFeedback:
    """Tests for feedback notifications."""

    def test_developer_highlight(self, resolve):
        # Act
        result = resolve("feedback", {"feedbackId": "f1"})

        # Assert
        assert result == NavigationResult(path="/profile", highlight="feedback-f1")

    def test_developer_without_feedback_id(self, resolve):
        # Assert
        assert resolve("feedback", {}) == NavigationResult(path="/profile")

    def test_organization(self, resolve):
        # Assert
        assert resolve("feedback", {"developerId": "d1"}, role=Role.ORGANIZATION).path == "/profile/d1"
        assert resolve("feedback", {}, role=Role.ORGANIZATION).path == "/organization/dashboard"

    def test_admin(self, resolve):
        # Assert
        assert resolve("feedback", {"developerId": "d1"}, role=Role.ADMIN).path == "/dashboard"


class TestAchievementAndSystem:
    """Tests for role-independent notifications."""

    @pytest.mark.parametrize("role", list(Role))
    def test_achievement(self, resolve, role):
        # Act
        result = resolve("achievement", {"achievementName": "First Project"}, role=role)

        # Assert
        assert result == NavigationResult(path="/profile", tab="achievements")

    def test_system_relative_url(self, resolve):
        # Assert
        assert resolve("system", {"actionUrl": "/projects/p1"}) == NavigationResult(path="/projects/p1")

    def test_system_url_made_absolute(self, resolve):
        # Assert
        assert resolve("system", {"actionUrl": "settings/privacy"}).path == "/settings/privacy"

    def test_system_external_url(self, resolve):
        # Act
        result = resolve("system", {"actionUrl": "https://status.devtogether.org"})

        # Assert
        assert result.external is True
        assert result.path == "https://status.devtogether.org"

    def test_system_protocol_relative_url_is_external(self, resolve):
        """Test that a host-relative URL is not mistaken for an in-app path."""
        # Act
        result = resolve("system", {"actionUrl": "//evil.example/phish"})

        # Assert
        assert result.external is True
        assert result.path == "//evil.example/phish"

    @pytest.mark.parametrize("data", [{}, {"actionUrl": ""}, {"actionUrl": "   "}])
    def test_system_without_url(self, resolve, data):
        # Assert
        assert resolve("system", data) == NavigationResult(path="/dashboard")


class TestPathSegments:
    """Tests for identifier encoding."""

    def test_identifier_is_percent_encoded(self, resolve):
        # Act
        result = resolve("project", {"projectId": "a b/c"})

        # Assert
        assert result.path == "/workspace/a%20b%2Fc"

    def test_numeric_identifier(self, resolve):
        # Assert
        assert resolve("application", {"projectId": 42}).path == "/projects/42"

    def test_segment(self):
        # Assert
        assert segment("p?1#x") == "p%3F1%23x"


class TestBuildNavigationUrl:
    """Tests for build_navigation_url."""

    def test_path_only(self):
        # Assert
        assert build_navigation_url(NavigationResult(path="/dashboard")) == "/dashboard"

    def test_tab_before_highlight(self):
        # Arrange
        result = NavigationResult(path="/profile", tab="achievements", highlight="ach-1")

        # Assert
        assert build_navigation_url(result) == "/profile?tab=achievements&highlight=ach-1"

    def test_values_are_encoded(self):
        # Arrange
        result = NavigationResult(path="/profile", highlight="feedback-a&b")

        # Assert
        assert build_navigation_url(result) == "/profile?highlight=feedback-a%26b"

    def test_existing_query(self):
        # Arrange
        result = NavigationResult(path="/search?q=x", tab="people")

        # Assert
        assert build_navigation_url(result) == "/search?q=x&tab=people"
