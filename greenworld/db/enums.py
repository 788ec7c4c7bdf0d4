"""Enum definitions for application constants."""

from enum import Enum


class Role(str, Enum):
    """
    Platform roles. A user's role is fixed at registration.

    - CORPORATE: CSR sponsor, sees platform-wide impact estimates
    - NGO: creates and runs projects
    - VOLUNTEER: registers for projects and logs hours
    - ADMIN: manages users and may edit any project
    """
    CORPORATE = "corporate"
    NGO = "ngo"
    VOLUNTEER = "volunteer"
    ADMIN = "admin"

    @classmethod
    def has_value(cls, value) -> bool:
        """Check if value is a valid role."""
        return value in cls._value2member_map_


class ProjectStatus(str, Enum):
    """Project lifecycle. Transitions are unconstrained."""
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"


DEFAULT_PROJECT_STATUS = ProjectStatus.ACTIVE


class ImpactType(str, Enum):
    """Impact categories used by the dashboards."""
    TREES = "Trees"
    WATER = "Water"
    WASTE = "Waste"
    ENERGY = "Energy"


# =============================================================================
# Role-based permission sets
# =============================================================================

# Create projects, update owned projects, toggle milestones
ROLES_CAN_MANAGE_PROJECTS = frozenset({Role.NGO, Role.ADMIN})

# Bypass project ownership checks
ROLES_CAN_EDIT_ANY_PROJECT = frozenset({Role.ADMIN})

# List and delete users
ROLES_CAN_MANAGE_USERS = frozenset({Role.ADMIN})

# Dashboards
ROLES_NGO_DASHBOARD = frozenset({Role.NGO})
ROLES_CORPORATE_DASHBOARD = frozenset({Role.CORPORATE})
