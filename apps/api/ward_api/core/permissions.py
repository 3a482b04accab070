"""Role/permission model: resources, actions, role defaults and grant checks.

A grant is a (resource, action) pair. Each role has a fixed default grant set;
an operator may carry an explicit grant list that replaces the defaults.

Admin role: always granted everything (stored grants are ignored)
Unknown role: empty default set (deny)
"edit" never implies "view"
"""

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Protocol


class Resource(str, Enum):
    """Permission-gated areas of the dashboard."""
    DASHBOARD = "dashboard"
    MEMBERS = "members"
    CALLINGS = "callings"
    FHE_GROUPS = "fhe_groups"
    CALENDAR = "calendar"
    SURVEY = "survey"
    SURVEY_RESPONSES = "survey_responses"
    USERS = "users"


class Action(str, Enum):
    VIEW = "view"
    EDIT = "edit"


ALL_RESOURCES: tuple[Resource, ...] = tuple(Resource)
ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Grant:
    """Allowed (resource, action) pair."""
    resource: Resource
    action: Action

    @classmethod
    def of(cls, resource: str | Resource, action: str | Action) -> "Grant":
        """Build a grant, raising ValueError outside the enumerations."""
        return cls(Resource(resource), Action(action))

    def to_dict(self) -> dict[str, str]:
        return {"resource": self.resource.value, "action": self.action.value}


class IdentityLike(Protocol):
    role: str
    permissions: list[Grant] | None


def _grants(*pairs: tuple[Resource, Action]) -> tuple[Grant, ...]:
    return tuple(Grant(resource, action) for resource, action in pairs)


def _view_and_edit(resource: Resource) -> tuple[tuple[Resource, Action], ...]:
    return ((resource, Action.VIEW), (resource, Action.EDIT))


R, A = Resource, Action

# =============================================================================
# Default Role Grants
# =============================================================================

ROLE_DEFAULTS: dict[str, tuple[Grant, ...]] = {
    "admin": _grants(*(pair for r in ALL_RESOURCES for pair in _view_and_edit(r))),
    # Everything except user management, which is view-only
    "bishopric": _grants(
        *(
            pair
            for r in ALL_RESOURCES
            for pair in ((r, A.VIEW),) + (((r, A.EDIT),) if r != R.USERS else ())
        )
    ),
    "ward_clerk": _grants(
        (R.DASHBOARD, A.VIEW),
        (R.MEMBERS, A.VIEW),
        (R.MEMBERS, A.EDIT),
        (R.CALLINGS, A.VIEW),
        (R.CALLINGS, A.EDIT),
        (R.FHE_GROUPS, A.VIEW),
        (R.CALENDAR, A.VIEW),
        (R.CALENDAR, A.EDIT),
        (R.SURVEY, A.VIEW),
        (R.SURVEY_RESPONSES, A.VIEW),
        (R.SURVEY_RESPONSES, A.EDIT),
    ),
    "elders_quorum": _grants(
        (R.DASHBOARD, A.VIEW),
        (R.MEMBERS, A.VIEW),
        (R.CALLINGS, A.VIEW),
        (R.FHE_GROUPS, A.VIEW),
        (R.FHE_GROUPS, A.EDIT),
        (R.CALENDAR, A.VIEW),
        (R.CALENDAR, A.EDIT),
        (R.SURVEY, A.VIEW),
    ),
    "member": _grants(
        (R.DASHBOARD, A.VIEW),
        (R.CALENDAR, A.VIEW),
        (R.FHE_GROUPS, A.VIEW),
        (R.SURVEY, A.VIEW),
        (R.SURVEY, A.EDIT),
    ),
}
ROLE_DEFAULTS["relief_society"] = ROLE_DEFAULTS["elders_quorum"]


def default_grants_for_role(role: str) -> list[Grant]:
    """Fixed default grants for a role, in table order. Unknown role -> []."""
    return list(ROLE_DEFAULTS.get(role, ()))


def parse_grants(raw: Iterable[dict | Grant]) -> list[Grant]:
    """
    Parse stored/submitted grants.

    Accepts dicts with resource/action keys or Grant instances.
    Raises ValueError for anything outside the enumerations.
    """
    grants = []
    for item in raw:
        if isinstance(item, Grant):
            grants.append(item)
        else:
            grants.append(Grant.of(item["resource"], item["action"]))
    return grants


def dedupe_grants(grants: Iterable[Grant]) -> list[Grant]:
    """Drop repeated pairs, keeping first-seen order."""
    return list(dict.fromkeys(grants))


def serialize_grants(grants: Iterable[Grant]) -> list[dict[str, str]]:
    return [g.to_dict() for g in grants]


# =============================================================================
# Resolution
# =============================================================================

def effective_grants(identity: IdentityLike) -> list[Grant]:
    """Explicit grants if present, else the role defaults."""
    if identity.permissions is not None:
        return list(identity.permissions)
    return default_grants_for_role(identity.role)


def is_granted(
    identity: IdentityLike | None,
    resource: str | Resource,
    action: str | Action,
) -> bool:
    """
    Check a (resource, action) pair for an identity.

    No identity -> False. Admin -> True. Otherwise membership in the
    effective grants.
    """
    grant = Grant.of(resource, action)
    if identity is None:
        return False
    if identity.role == ADMIN_ROLE:
        return True
    return grant in effective_grants(identity)


def grants_equal(left: Iterable[Grant], right: Iterable[Grant]) -> bool:
    """Order-independent multiset comparison."""
    return Counter(left) == Counter(right)


def has_custom_permissions(role: str, stored: Iterable[Grant] | None) -> bool:
    """True when stored grants differ from the role defaults (None = not custom)."""
    if stored is None:
        return False
    return not grants_equal(stored, default_grants_for_role(role))


def capabilities(identity: IdentityLike | None) -> dict[str, dict[str, bool]]:
    """Per-resource view/edit flags for hiding/disabling UI affordances."""
    return {
        resource.value: {
            action.value: is_granted(identity, resource, action) for action in Action
        }
        for resource in ALL_RESOURCES
    }


# =============================================================================
# Navigation
# =============================================================================

@dataclass(frozen=True)
class NavItem:
    title: str
    href: str
    resource: Resource
    action: Action = Action.VIEW
    public: bool = False  # Shown to every signed-in user


NAVIGATION: tuple[NavItem, ...] = (
    NavItem("Dashboard", "/dashboard", R.DASHBOARD),
    NavItem("Members", "/dashboard/members", R.MEMBERS),
    NavItem("Callings", "/dashboard/callings", R.CALLINGS),
    NavItem("FHE Groups", "/dashboard/fhe-groups", R.FHE_GROUPS, public=True),
    NavItem("Calendar", "/dashboard/calendar", R.CALENDAR, public=True),
    NavItem("New Member Survey", "/dashboard/survey", R.SURVEY),
    NavItem("Survey Responses", "/dashboard/survey-responses", R.SURVEY_RESPONSES),
    # LCR updates are a clerk workflow, gated on editing members
    NavItem("LCR Updates", "/dashboard/lcr-updates", R.MEMBERS, action=A.EDIT),
    NavItem("User Management", "/dashboard/users", R.USERS),
)


def visible_navigation(identity: IdentityLike | None) -> list[NavItem]:
    """Navigation entries the identity may see."""
    if identity is None:
        return []
    return [
        item
        for item in NAVIGATION
        if item.public or is_granted(identity, item.resource, item.action)
    ]
