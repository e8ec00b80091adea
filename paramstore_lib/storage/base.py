"""Parameter backend interface definitions.

Defines the ParameterBackend abstract class every storage implementation
must satisfy. Implementations translate their native failures into the
errors in `paramstore_lib.parameters.errors`.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from paramstore_lib.parameters.models import Parameter


class ParameterBackend(ABC):
    """Abstract parameter backend.

    Implementations must be thread-safe if used concurrently.
    """

    kind: str = "abstract"

    @abstractmethod
    def list(self, namespace: Optional[str] = None) -> Dict[str, List[Parameter]]:
        """Return a snapshot of all entries grouped by namespace.

        When `namespace` is given only that namespace is returned; it is
        absent from the mapping when it holds no entries. Should raise
        `BackendUnavailable` rather than return a partial result.
        """

    @abstractmethod
    def create(
        self,
        namespace: str,
        name: str,
        value: str,
        is_secure: bool = False,
        overwrite: bool = False,
    ) -> Parameter:
        """Create an entry at version 1.

        Raise `AlreadyExists` if the entry exists and `overwrite` is False.
        With `overwrite` an existing entry is updated instead.
        """

    @abstractmethod
    def update(
        self,
        namespace: str,
        name: str,
        value: Optional[str] = None,
        is_secure: Optional[bool] = None,
        expected_version: Optional[int] = None,
    ) -> Parameter:
        """Apply the supplied fields and bump the version by exactly one.

        Fields left as None keep their stored value. Raise `VersionConflict`
        when `expected_version` is given and differs from the stored one.
        """

    @abstractmethod
    def delete(self, namespace: str, name: str) -> None:
        """Delete the entry. Raise `NotFound` if it does not exist."""
