"""Role capability table.

Every (actor role, target role) pair maps to one Capability. View, edit and
delete checks all read from this table so the role rules live in one place.
Jurisdiction narrowing (cluster / school scope) is applied by the policy on
top of the scope recorded here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from ..core.enums import Role


class ViewScope(str, Enum):
    NONE = "none"
    ALL = "all"
    CLUSTER = "cluster"
    SCHOOL = "school"


@dataclass(frozen=True)
class Capability:
    view: ViewScope
    edit: bool
    delete: bool


MANAGEMENT_ROLES = frozenset({Role.ADMIN, Role.CAMPUS_HEAD, Role.SCHOOL_ADMIN})
RESTRICTED_VIEWERS = frozenset({Role.RESOURCE_PERSON, Role.TEACHER, Role.STUDENT})
ROSTER_ROLES = frozenset({Role.TEACHER, Role.STUDENT})
DELETING_ROLES = frozenset({Role.SUPER_ADMIN, Role.ADMIN})

PROTECTED_FROM_SCHOOL_ADMIN = frozenset(
    {Role.SUPER_ADMIN, Role.ADMIN, Role.CAMPUS_HEAD, Role.RESOURCE_PERSON, Role.SCHOOL_ADMIN}
)
PROTECTED_FROM_RESTRICTED = frozenset(
    {Role.SUPER_ADMIN, Role.ADMIN, Role.CAMPUS_HEAD, Role.SCHOOL_ADMIN, Role.RESOURCE_PERSON}
)


def _view_scope(actor: Role, target: Role) -> ViewScope:
    if actor == Role.SUPER_ADMIN:
        return ViewScope.ALL
    if target == Role.SUPER_ADMIN:
        return ViewScope.NONE
    if actor in MANAGEMENT_ROLES:
        return ViewScope.ALL
    if actor == Role.RESOURCE_PERSON and target in ROSTER_ROLES:
        return ViewScope.CLUSTER
    if actor == Role.TEACHER and target in ROSTER_ROLES:
        return ViewScope.SCHOOL
    return ViewScope.NONE


def _can_edit(actor: Role, target: Role) -> bool:
    if actor == Role.SUPER_ADMIN:
        return True
    if actor == Role.SCHOOL_ADMIN:
        return target not in PROTECTED_FROM_SCHOOL_ADMIN
    if actor in RESTRICTED_VIEWERS:
        return target not in PROTECTED_FROM_RESTRICTED
    return True


def build_capability_table() -> dict[tuple[Role, Role], Capability]:
    return {
        (actor, target): Capability(
            view=_view_scope(actor, target),
            edit=_can_edit(actor, target),
            delete=actor in DELETING_ROLES,
        )
        for actor in Role
        for target in Role
    }


CAPABILITIES: Mapping[tuple[Role, Role], Capability] = build_capability_table()


def capability_for(
    actor: Optional[Role],
    target: Optional[Role],
    table: Mapping[tuple[Role, Role], Capability] = CAPABILITIES,
) -> Optional[Capability]:
    """Capability for a role pair; None when either role is unknown."""
    if actor is None or target is None:
        return None
    return table.get((actor, target))
