# constants/role_permission_defaults.py
from enum import Enum


class Role(str, Enum):
    ADMIN = "admin"
    EDITOR = "editor"
    VIEWER = "viewer"


ROLE_NAMES = [role.value for role in Role]

# Roles whose access rows can be changed from the admin page
MUTABLE_ROLES = {Role.EDITOR.value, Role.VIEWER.value}

DEFAULT_USER_ROLE = Role.VIEWER.value

PROFILE_PAGE = "/profile"
ADMIN_PAGE = "/admin"
BLOG_PAGE = "/blog"

# Wire name -> PageAccess attribute
ACCESS_FIELDS = {
    "canView": "can_view",
    "canAdd": "can_add",
    "canEdit": "can_edit",
    "canDelete": "can_delete",
}

# Page registry shown in the role access grid
PAGES = [
    {"path": "/", "name": "Home"},
    {"path": "/dashboard", "name": "Dashboard"},
    {"path": BLOG_PAGE, "name": "Blog"},
    {"path": PROFILE_PAGE, "name": "Profile"},
    {"path": ADMIN_PAGE, "name": "Admin"},
]
