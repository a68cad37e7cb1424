"""
Persistence adapters for game snapshots.

A state service stores one opaque snapshot dict. Loading an absent or
unreadable snapshot raises ``SnapshotError``; the controller turns that into
a user-visible warning.
"""
import json
import os
from abc import ABC, abstractmethod
from typing import Any, Optional


class SnapshotError(Exception):
    """The saved snapshot is missing or corrupt."""


class StateService(ABC):
    """Save and load a single game snapshot."""

    @abstractmethod
    def save(self, snapshot: dict[str, Any]) -> None:
        pass

    @abstractmethod
    def load(self) -> dict[str, Any]:
        """Return the stored snapshot.

        Raises:
            SnapshotError: If there is no snapshot or it cannot be read
        """
        pass


class JsonFileStateService(StateService):
    """Stores the snapshot as a JSON file."""

    def __init__(self, path: str):
        self.path = path

    def save(self, snapshot: dict[str, Any]) -> None:
        directory = os.path.dirname(self.path)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(snapshot, f, ensure_ascii=False, indent=2)

    def load(self) -> dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise SnapshotError(f"No saved game found at {self.path}")
        except (OSError, json.JSONDecodeError) as e:
            raise SnapshotError(f"Invalid state in {self.path}: {e}")

        if not isinstance(data, dict):
            raise SnapshotError(f"Invalid state in {self.path}: expected an object")
        return data


class MemoryStateService(StateService):
    """Keeps the snapshot in memory as serialized JSON text."""

    def __init__(self, initial: Optional[str] = None):
        self._stored = initial

    @property
    def text(self) -> Optional[str]:
        """The stored JSON text, or None before the first save."""
        return self._stored

    def save(self, snapshot: dict[str, Any]) -> None:
        self._stored = json.dumps(snapshot)

    def load(self) -> dict[str, Any]:
        if self._stored is None:
            raise SnapshotError("No saved game found")
        try:
            data = json.loads(self._stored)
        except json.JSONDecodeError as e:
            raise SnapshotError(f"Invalid state: {e}")
        if not isinstance(data, dict):
            raise SnapshotError("Invalid state: expected an object")
        return data
