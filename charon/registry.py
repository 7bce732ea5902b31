"""In-memory registry that fronts permission registration in a repository."""

from __future__ import annotations

import threading
from collections.abc import Iterable
from typing import Protocol


class PermissionRepository(Protocol):
    """Persistent store that permissions are registered in."""

    def register(self, permissions: list[str]) -> tuple[int, int, int]:
        """Store permissions; return counts of created, untouched and removed."""
        ...


class PermissionRegistry:
    """Remembers registered permissions to avoid repeated trips to storage.

    Permissions are strings of the form "subsystem:module:action".
    """

    def __init__(self, repository: PermissionRepository) -> None:
        self._repository = repository
        self._permissions: set[str] = set()
        self._lock = threading.Lock()

    def exists(self, permission: str) -> bool:
        """Report whether the permission has already been registered."""
        with self._lock:
            return permission in self._permissions

    def register(self, permissions: Iterable[str]) -> tuple[int, int, int]:
        """Register permissions, returning (created, untouched, removed).

        The repository is consulted only when at least one permission is new
        to the registry; it then receives the whole collection. Otherwise
        nothing is stored and (0, 0, 0) is returned.
        """
        given = list(permissions)
        with self._lock:
            new = [p for p in given if p not in self._permissions]
            self._permissions.update(new)
            if new:
                return self._repository.register(given)
            return 0, 0, 0