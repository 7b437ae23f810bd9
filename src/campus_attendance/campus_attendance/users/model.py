from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role
from ..org.model import Jurisdiction


@dataclass(frozen=True)
class Identity:
    """Domain entity: a person in the org directory.

    ``role`` is None when the directory held a role string the engine does not
    recognise; every access decision treats that as deny.
    ``assignment`` is the legacy free-text scope (school, cluster or root token);
    ``jurisdiction`` is its explicit tagged form when the directory has one.
    """

    identity_id: str
    name: str
    role: Optional[Role]
    assignment: str = ""
    school: Optional[str] = None
    cluster: Optional[str] = None
    designation: str = ""
    jurisdiction: Optional[Jurisdiction] = None
    class_id: Optional[str] = None
    grade_id: Optional[str] = None
