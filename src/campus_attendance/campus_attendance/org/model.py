from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..common.validators import same_token
from ..core.enums import JurisdictionKind


@dataclass(frozen=True)
class Campus:
    campus_id: str
    name: str


@dataclass(frozen=True)
class Cluster:
    cluster_id: str
    name: str
    campus_id: Optional[str] = None

    def matches(self, token: Optional[str]) -> bool:
        return same_token(self.name, token) or same_token(self.cluster_id, token)


@dataclass(frozen=True)
class School:
    school_id: str
    name: str
    cluster_id: Optional[str] = None
    cluster_name: Optional[str] = None
    campus_id: Optional[str] = None

    def matches(self, token: Optional[str]) -> bool:
        return same_token(self.name, token) or same_token(self.school_id, token)


@dataclass(frozen=True)
class Jurisdiction:
    """Explicit tagged replacement for the legacy free-text assignment."""

    kind: JurisdictionKind
    name: str


@dataclass(frozen=True)
class OrgDirectory:
    """Read-only snapshot of the Campus -> Cluster -> School hierarchy."""

    campuses: Sequence[Campus] = ()
    clusters: Sequence[Cluster] = ()
    schools: Sequence[School] = ()

    def find_cluster(self, token: Optional[str]) -> Optional[Cluster]:
        return next((c for c in self.clusters if c.matches(token)), None)

    def find_school(self, token: Optional[str]) -> Optional[School]:
        return next((s for s in self.schools if s.matches(token)), None)

    def schools_in_cluster(self, cluster_name: str) -> list[School]:
        cluster = self.find_cluster(cluster_name)
        out = []
        for s in self.schools:
            if same_token(s.cluster_name, cluster_name):
                out.append(s)
            elif cluster and same_token(s.cluster_id, cluster.cluster_id):
                out.append(s)
        return out
