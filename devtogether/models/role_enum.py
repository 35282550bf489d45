"""
Role Enumeration Module
=======================

Defines all valid roles in the system.

Admin is not a structural superset of the other roles: the policy
engine grants it developer rights through an explicit inheritance rule.
"""

from enum import Enum


class Role(str, Enum):
    """
    System-wide allowed roles.
    """

    DEVELOPER = "developer"
    ORGANIZATION = "organization"
    ADMIN = "admin"
