"""Resolve the cluster an identity is authoritative over.

Legacy identities carry a free-text ``assignment`` that may hold a cluster,
a school or the root token. Newer records carry an explicit tagged
``Jurisdiction`` which is used instead of string matching when present.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ..common.validators import normalize_token, same_token
from ..core.constants import ROOT_ASSIGNMENT_TOKEN
from ..core.enums import JurisdictionKind
from ..users.model import Identity
from .model import Cluster, Jurisdiction, OrgDirectory, School


@dataclass(frozen=True)
class ClusterResolution:
    """Effective cluster name; ``verified`` is False for orphan tokens."""

    cluster_name: str
    verified: bool


def _school_cluster(school: School, clusters: Sequence[Cluster]) -> ClusterResolution:
    if school.cluster_name:
        owner = next((c for c in clusters if same_token(c.name, school.cluster_name)), None)
        if owner is None and school.cluster_id:
            owner = next((c for c in clusters if same_token(c.cluster_id, school.cluster_id)), None)
        return ClusterResolution(cluster_name=school.cluster_name, verified=owner is not None)

    if school.cluster_id:
        owner = next((c for c in clusters if same_token(c.cluster_id, school.cluster_id)), None)
        if owner:
            return ClusterResolution(cluster_name=owner.name, verified=True)
    return ClusterResolution(cluster_name="", verified=False)


def resolve_jurisdiction(
    assignment: Optional[str],
    clusters: Sequence[Cluster],
    schools: Sequence[School],
) -> ClusterResolution:
    raw = assignment or ""
    if not normalize_token(raw):
        return ClusterResolution(cluster_name=raw, verified=False)

    cluster = next((c for c in clusters if c.matches(raw)), None)
    if cluster:
        return ClusterResolution(cluster_name=cluster.name, verified=True)

    school = next((s for s in schools if s.matches(raw)), None)
    if school:
        resolved = _school_cluster(school, clusters)
        if resolved.cluster_name:
            return resolved

    return ClusterResolution(cluster_name=raw, verified=False)


def resolve_cluster_jurisdiction(
    assignment: Optional[str],
    clusters: Sequence[Cluster],
    schools: Sequence[School],
) -> str:
    """Cluster name for an assignment that names a cluster or a school.

    Unknown assignments come back unchanged; callers must not treat such a
    token as a verified cluster.
    """
    return resolve_jurisdiction(assignment, clusters, schools).cluster_name


def classify_assignment(assignment: Optional[str], org: OrgDirectory) -> Optional[Jurisdiction]:
    """Convert a legacy free-text assignment into a tagged Jurisdiction."""
    if same_token(assignment, ROOT_ASSIGNMENT_TOKEN):
        return Jurisdiction(kind=JurisdictionKind.ROOT, name=ROOT_ASSIGNMENT_TOKEN)

    cluster = org.find_cluster(assignment)
    if cluster:
        return Jurisdiction(kind=JurisdictionKind.CLUSTER, name=cluster.name)

    school = org.find_school(assignment)
    if school:
        return Jurisdiction(kind=JurisdictionKind.SCHOOL, name=school.name)
    return None


def effective_jurisdiction(identity: Identity, org: OrgDirectory) -> Optional[Jurisdiction]:
    """Tagged jurisdiction of an identity, or the one its legacy assignment names."""
    if identity.jurisdiction is not None:
        return identity.jurisdiction
    return classify_assignment(identity.assignment, org)


def cluster_for_jurisdiction(jurisdiction: Jurisdiction, org: OrgDirectory) -> ClusterResolution:
    if jurisdiction.kind == JurisdictionKind.CLUSTER:
        cluster = org.find_cluster(jurisdiction.name)
        if cluster:
            return ClusterResolution(cluster_name=cluster.name, verified=True)
        return ClusterResolution(cluster_name=jurisdiction.name, verified=False)

    if jurisdiction.kind == JurisdictionKind.SCHOOL:
        school = org.find_school(jurisdiction.name)
        if school:
            resolved = _school_cluster(school, org.clusters)
            if resolved.cluster_name:
                return resolved
        return ClusterResolution(cluster_name=jurisdiction.name, verified=False)

    # Root sits above every cluster and grants no single cluster scope.
    return ClusterResolution(cluster_name=jurisdiction.name, verified=False)


def identity_cluster(identity: Identity, org: OrgDirectory) -> ClusterResolution:
    """Cluster scope of an identity: tagged jurisdiction first, then legacy fields."""
    if identity.jurisdiction is not None:
        return cluster_for_jurisdiction(identity.jurisdiction, org)
    return resolve_jurisdiction(identity.cluster or identity.assignment, org.clusters, org.schools)


def identity_school(identity: Identity) -> str:
    """School name an identity belongs to, '' when it has none."""
    if identity.jurisdiction is not None:
        if identity.jurisdiction.kind == JurisdictionKind.SCHOOL:
            return identity.jurisdiction.name
        return identity.school or ""
    return identity.school or identity.assignment or ""


def in_cluster(identity: Identity, cluster_name: str, org: OrgDirectory) -> bool:
    """True when the identity's cluster field or its school's cluster equals cluster_name."""
    if same_token(identity.cluster, cluster_name):
        return True
    if identity.jurisdiction is not None and identity.jurisdiction.kind == JurisdictionKind.CLUSTER:
        if same_token(identity.jurisdiction.name, cluster_name):
            return True

    school = org.find_school(identity_school(identity))
    if school is None:
        return False
    return same_token(_school_cluster(school, org.clusters).cluster_name, cluster_name)
