from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from ..common.validators import same_token
from ..core.enums import JurisdictionKind, Role
from ..core.exceptions import AuthorizationError
from ..org.jurisdiction import identity_cluster, identity_school, in_cluster
from ..org.model import OrgDirectory
from ..users.model import Identity
from .capabilities import CAPABILITIES, Capability, ViewScope, capability_for


@dataclass(frozen=True)
class AccessDecision:
    visible: bool
    editable: bool
    deletable: bool


class AccessPolicy:
    """Answer view / edit / delete questions for (actor, target) pairs.

    Unknown roles on either side deny everything. An identity may always see
    itself; self-edit is allowed for every known role; self-delete never is.
    """

    def __init__(self, org: OrgDirectory, *, table: Mapping[tuple[Role, Role], Capability] = CAPABILITIES):
        self._org = org
        self._table = table

    def _capability(self, actor: Identity, target: Identity) -> Optional[Capability]:
        return capability_for(actor.role, target.role, self._table)

    def can_view(self, actor: Identity, target: Identity) -> bool:
        cap = self._capability(actor, target)
        if cap is None:
            return False
        if actor.identity_id == target.identity_id:
            return True

        if cap.view == ViewScope.ALL:
            return True
        if cap.view == ViewScope.CLUSTER:
            scope = identity_cluster(actor, self._org)
            return scope.verified and in_cluster(target, scope.cluster_name, self._org)
        if cap.view == ViewScope.SCHOOL:
            return _same_school(actor, target)
        return False

    def can_edit(self, actor: Identity, target: Identity) -> bool:
        cap = self._capability(actor, target)
        if cap is None:
            return False
        if actor.identity_id == target.identity_id:
            return True
        return cap.edit

    def can_delete(self, actor: Identity, target: Identity) -> bool:
        cap = self._capability(actor, target)
        if cap is None:
            return False
        return cap.delete and actor.identity_id != target.identity_id

    def decide(self, actor: Identity, target: Identity) -> AccessDecision:
        return AccessDecision(
            visible=self.can_view(actor, target),
            editable=self.can_edit(actor, target),
            deletable=self.can_delete(actor, target),
        )

    def filter_visible(self, actor: Identity, identities: Iterable[Identity]) -> list[Identity]:
        return [t for t in identities if self.can_view(actor, t)]

    def require_view(self, actor: Identity, target: Identity) -> None:
        if not self.can_view(actor, target):
            raise AuthorizationError("Not allowed to view this identity")

    def require_edit(self, actor: Identity, target: Identity) -> None:
        if not self.can_edit(actor, target):
            raise AuthorizationError("Not allowed to edit this identity")

    def require_delete(self, actor: Identity, target: Identity) -> None:
        if not self.can_delete(actor, target):
            raise AuthorizationError("Not allowed to delete this identity")


def _same_school(actor: Identity, target: Identity) -> bool:
    school = identity_school(actor)
    if not school:
        return False
    if same_token(target.school, school) or same_token(target.assignment, school):
        return True
    j = target.jurisdiction
    return j is not None and j.kind == JurisdictionKind.SCHOOL and same_token(j.name, school)


def can_view(actor: Identity, target: Identity, org: OrgDirectory) -> bool:
    return AccessPolicy(org).can_view(actor, target)


def can_edit(actor: Identity, target: Identity) -> bool:
    # Edit rules never consult the org hierarchy.
    return AccessPolicy(OrgDirectory()).can_edit(actor, target)


def can_delete(actor: Identity, target: Identity) -> bool:
    return AccessPolicy(OrgDirectory()).can_delete(actor, target)
