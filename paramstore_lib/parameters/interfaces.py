"""Protocol definitions for the parameter store service."""
from typing import Protocol, Dict, List, Optional, runtime_checkable

from .models import Parameter


@runtime_checkable
class ParameterStoreProtocol(Protocol):
    """Protocol for the ParameterStore public surface.

    The store is bound to exactly one backend for its lifetime. All
    operations raise the errors from `paramstore_lib.parameters.errors`.
    """

    @property
    def backend_kind(self) -> str:
        """Name of the bound backend (`memory` or `ssm`)."""
        ...

    def list_all(self) -> Dict[str, List[Parameter]]:
        """Return every entry grouped by namespace."""
        ...

    def list_namespace(self, namespace: str) -> List[Parameter]:
        """Return the entries of one namespace (empty if it has none)."""
        ...

    def create_variable(self, namespace: str, name: str, value: str, is_secure: bool = False) -> Parameter:
        ...

    def update_variable(
        self,
        namespace: str,
        name: str,
        value: Optional[str] = None,
        is_secure: Optional[bool] = None,
        expected_version: Optional[int] = None,
    ) -> Parameter:
        ...

    def delete_variable(self, namespace: str, name: str) -> None:
        ...

    def create_namespace_with_variable(
        self, namespace: str, name: str, value: str, is_secure: bool = False
    ) -> Parameter:
        """Create the first entry of a namespace that must not exist yet."""
        ...
