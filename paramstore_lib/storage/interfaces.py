from typing import Protocol, Dict, List, Optional, runtime_checkable

from paramstore_lib.parameters.models import Parameter


@runtime_checkable
class ParameterBackendProtocol(Protocol):
    """Backend protocol mirroring `paramstore_lib.storage.ParameterBackend`.

    Implementations should follow the semantics documented on the abstract
    base class in `paramstore_lib.storage.base` (NotFound for missing keys,
    AlreadyExists on no-overwrite creates, one version bump per update).
    """

    kind: str

    def list(self, namespace: Optional[str] = None) -> Dict[str, List[Parameter]]: ...

    def create(self, namespace: str, name: str, value: str, is_secure: bool = False, overwrite: bool = False) -> Parameter: ...

    def update(
        self,
        namespace: str,
        name: str,
        value: Optional[str] = None,
        is_secure: Optional[bool] = None,
        expected_version: Optional[int] = None,
    ) -> Parameter: ...

    def delete(self, namespace: str, name: str) -> None: ...
