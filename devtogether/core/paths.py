"""
In-app paths referenced by the policy engines.
"""

HOME_PATH = "/"
LOGIN_PATH = "/auth/login"
AUTH_PREFIX = "/auth"
DASHBOARD_PATH = "/dashboard"
ORGANIZATION_DASHBOARD_PATH = "/organization/dashboard"

PENDING_APPROVAL_PATH = "/pending-approval"
REJECTED_ORGANIZATION_PATH = "/rejected-organization"
BLOCKED_PATH = "/blocked"

ADMIN_PATH = "/admin"
PROFILE_PATH = "/profile"
APPLICATIONS_PATH = "/applications"
MY_APPLICATIONS_PATH = "/my-applications"
MY_PROJECTS_PATH = "/my-projects"


def normalize_path(path: str) -> str:
    """
    Reduce a location to its bare path.

    Drops any query string or fragment and trailing slashes, and
    makes the path absolute. An empty location is the home page.
    """
    path = (path or "").split("#", 1)[0].split("?", 1)[0].strip()
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def is_auth_path(path: str) -> bool:
    """True for the /auth section (login, register, callback, ...)."""
    path = normalize_path(path)
    return path == AUTH_PREFIX or path.startswith(AUTH_PREFIX + "/")
