from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol, Union

from ..core.exceptions import SnapshotError, ValidationError
from .loader import load_snapshot
from .model import Snapshot

logger = logging.getLogger(__name__)


class SnapshotRepository(Protocol):
    """Source of the current snapshot.

    Note (DIP): services depend on this interface, never on where the
    snapshot actually comes from.
    """

    def load(self) -> Snapshot:
        raise NotImplementedError


class InMemorySnapshotRepository(SnapshotRepository):
    def __init__(self, snapshot: Snapshot):
        self._snapshot = snapshot

    def load(self) -> Snapshot:
        return self._snapshot


class JsonSnapshotRepository(SnapshotRepository):
    """Reads the snapshot file exported by the directory sync on every load."""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    def load(self) -> Snapshot:
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise SnapshotError(f"Snapshot file not found: {self._path}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise SnapshotError(f"Snapshot file unreadable: {self._path}") from e

        try:
            snapshot = load_snapshot(payload)
        except ValidationError as e:
            raise SnapshotError(f"Snapshot file malformed: {self._path}: {e}") from e

        logger.info(
            "Loaded snapshot %s (identities=%d, shifts=%d, records=%d)",
            self._path,
            len(snapshot.identities),
            len(snapshot.shifts.shifts),
            len(snapshot.attendance),
        )
        return snapshot
