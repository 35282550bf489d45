"""
Session Model Unit Tests
========================

Tests for session facts and route requirements including:
- Lenient role and status parsing
- Strict parsers
- Profile presence
- Admin derivation
"""

import pytest
from pydantic import ValidationError

from devtogether.core.enums import OrganizationStatus
from devtogether.core.exceptions import MalformedInputError
from devtogether.models.role_enum import Role
from devtogether.models.session import (
    RouteRequirement,
    SessionFacts,
    coerce_organization_status,
    coerce_role,
    is_admin,
    parse_organization_status,
    parse_role,
)


pytestmark = pytest.mark.models


class TestRoleParsing:
    """Tests for role parsing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("developer", Role.DEVELOPER),
            ("Organization", Role.ORGANIZATION),
            (" ADMIN ", Role.ADMIN),
            (Role.ADMIN, Role.ADMIN),
            (None, None),
        ],
    )
    def test_parse_role(self, value, expected):
        # Assert
        assert parse_role(value) == expected

    @pytest.mark.parametrize("value", ["superuser", "", 1, ["admin"]])
    def test_parse_role_rejects_unknown(self, value):
        # Act & Assert
        with pytest.raises(MalformedInputError) as exc_info:
            parse_role(value)

        assert exc_info.value.field == "role"

    def test_coerce_role_degrades_to_none(self):
        # Assert
        assert coerce_role("superuser") is None
        assert coerce_role("admin") == Role.ADMIN


class TestOrganizationStatusParsing:
    """Tests for organization status parsing."""

    def test_parse_known(self):
        # Assert
        assert parse_organization_status("approved") == OrganizationStatus.APPROVED
        assert parse_organization_status(None) is None

    def test_parse_unknown_raises(self):
        # Act & Assert
        with pytest.raises(MalformedInputError):
            parse_organization_status("suspended")

    def test_coerce_unknown_is_pending(self):
        """Test that an unknown status grants no more than pending."""
        # Assert
        assert coerce_organization_status("suspended") == OrganizationStatus.PENDING


class TestSessionFacts:
    """Tests for SessionFacts."""

    def test_defaults(self):
        # Act
        facts = SessionFacts()

        # Assert
        assert facts.authenticated is False
        assert facts.loading is False
        assert facts.role is None
        assert facts.blocked is False
        assert facts.has_profile is False

    def test_lenient_fields(self):
        # Act
        facts = SessionFacts(role="hacker", organization_status="limbo")

        # Assert
        assert facts.role is None
        assert facts.organization_status == OrganizationStatus.PENDING

    def test_has_profile_follows_role(self):
        # Assert
        assert SessionFacts(role=Role.DEVELOPER).has_profile is True

    def test_explicit_profile_flag_wins(self):
        # Assert
        assert SessionFacts(role=Role.DEVELOPER, profile_loaded=False).has_profile is False
        assert SessionFacts(profile_loaded=True).has_profile is True

    def test_frozen(self):
        # Arrange
        facts = SessionFacts(authenticated=True)

        # Act & Assert
        with pytest.raises(ValidationError):
            facts.blocked = True

    def test_from_json_payload(self):
        """Test facts as sent by the session provider."""
        # Act
        facts = SessionFacts.model_validate({
            "authenticated": True,
            "loading": False,
            "role": "organization",
            "organization_status": "pending",
            "blocked": False,
            "user_id": "org-7",
        })

        # Assert
        assert facts.role == Role.ORGANIZATION
        assert facts.organization_status == OrganizationStatus.PENDING

    def test_camel_case_keys(self):
        # Act
        facts = SessionFacts.model_validate({
            "authenticated": True,
            "role": "organization",
            "organizationStatus": "approved",
            "userId": "org-7",
            "legacyAdmin": True,
            "profileLoaded": True,
        })

        # Assert
        assert facts.organization_status == OrganizationStatus.APPROVED
        assert facts.user_id == "org-7"
        assert facts.legacy_admin is True
        assert facts.profile_loaded is True


class TestIsAdmin:
    """Tests for the derived admin predicate."""

    @pytest.mark.parametrize(
        "role,legacy,expected",
        [
            (Role.ADMIN, False, True),
            (Role.DEVELOPER, True, True),
            (None, True, True),
            (Role.DEVELOPER, False, False),
            (Role.ORGANIZATION, False, False),
        ],
    )
    def test_is_admin(self, role, legacy, expected):
        # Assert
        assert is_admin(SessionFacts(role=role, legacy_admin=legacy)) is expected


class TestRouteRequirement:
    """Tests for RouteRequirement."""

    def test_defaults(self):
        # Act
        requirement = RouteRequirement()

        # Assert
        assert requirement.require_auth is True
        assert requirement.required_roles is None

    def test_single_role(self):
        # Assert
        assert RouteRequirement(required_role=Role.ADMIN).required_roles == frozenset({Role.ADMIN})

    def test_role_list(self):
        # Act
        requirement = RouteRequirement.model_validate({"required_role": ["developer", "admin"]})

        # Assert
        assert requirement.required_roles == frozenset({Role.DEVELOPER, Role.ADMIN})

    def test_role_string(self):
        # Act
        requirement = RouteRequirement.model_validate({"required_role": "organization"})

        # Assert
        assert requirement.required_roles == frozenset({Role.ORGANIZATION})

    def test_unknown_role_rejected(self):
        # Act & Assert
        with pytest.raises(ValidationError):
            RouteRequirement.model_validate({"required_role": "superuser"})
