from __future__ import annotations

from typing import Optional

from ..access.policy import AccessDecision, AccessPolicy
from ..core.exceptions import ValidationError
from ..org.jurisdiction import effective_jurisdiction, identity_cluster, identity_school
from ..snapshots.model import Snapshot
from ..snapshots.repository import SnapshotRepository
from .model import Identity


class DirectoryService:
    """Use case: what part of the directory an actor may see and touch."""

    def __init__(self, snapshots: SnapshotRepository):
        self._snapshots = snapshots

    def _actor(self, snapshot: Snapshot, actor_id: str) -> Identity:
        actor = snapshot.get_identity(actor_id)
        if not actor:
            raise ValidationError("Actor does not exist")
        return actor

    def _target(self, snapshot: Snapshot, target_id: str) -> Identity:
        target = snapshot.get_identity(target_id)
        if not target:
            raise ValidationError("Identity does not exist")
        return target

    def list_visible(self, *, actor_id: str, role: Optional[str] = None) -> list[dict]:
        snapshot = self._snapshots.load()
        actor = self._actor(snapshot, actor_id)
        policy = AccessPolicy(snapshot.org)

        out = []
        for target in policy.filter_visible(actor, snapshot.identities):
            if role and (target.role is None or target.role.value != role):
                continue
            decision = policy.decide(actor, target)
            scope = effective_jurisdiction(target, snapshot.org)
            out.append(
                {
                    "id": target.identity_id,
                    "name": target.name,
                    "role": target.role.value if target.role else None,
                    "school": identity_school(target) or None,
                    "cluster": identity_cluster(target, snapshot.org).cluster_name or None,
                    "designation": target.designation,
                    "jurisdiction": {"kind": scope.kind.value, "name": scope.name} if scope else None,
                    "can_edit": decision.editable,
                    "can_delete": decision.deletable,
                }
            )
        return out

    def access_for(self, *, actor_id: str, target_id: str) -> AccessDecision:
        snapshot = self._snapshots.load()
        actor = self._actor(snapshot, actor_id)
        target = self._target(snapshot, target_id)
        return AccessPolicy(snapshot.org).decide(actor, target)

    def ensure_can_edit(self, *, actor_id: str, target_id: str) -> Identity:
        """Guard for edit flows; returns the target when allowed."""
        snapshot = self._snapshots.load()
        actor = self._actor(snapshot, actor_id)
        target = self._target(snapshot, target_id)
        AccessPolicy(snapshot.org).require_edit(actor, target)
        return target

    def ensure_can_delete(self, *, actor_id: str, target_id: str) -> Identity:
        snapshot = self._snapshots.load()
        actor = self._actor(snapshot, actor_id)
        target = self._target(snapshot, target_id)
        AccessPolicy(snapshot.org).require_delete(actor, target)
        return target
