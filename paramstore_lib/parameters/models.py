"""Parameter record shared by all backends."""
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, Dict, Union

from .errors import ValidationError

MASK = "••••••••"


def validate_value(value: str) -> str:
    if not isinstance(value, str) or value == "":
        raise ValidationError("Value is required")
    return value


@dataclass(frozen=True)
class Parameter:
    """One named, versioned value inside a namespace.

    Records are immutable; backends produce a new instance on every write.
    The value of a secure parameter is masked in `repr` so it does not leak
    into log lines or tracebacks.
    """

    name: str
    value: str
    namespace: str = ""
    is_secure: bool = False
    version: int = 1
    id: Union[int, str] = 0

    def __repr__(self) -> str:
        value = MASK if self.is_secure else self.value
        return (
            f"Parameter(id={self.id!r}, namespace={self.namespace!r}, name={self.name!r}, "
            f"value={value!r}, is_secure={self.is_secure}, version={self.version})"
        )

    @property
    def masked_value(self) -> str:
        return MASK if self.is_secure else self.value

    def bumped(self, **changes: Any) -> "Parameter":
        """Return a copy with `changes` applied and the version incremented by one."""
        return replace(self, version=self.version + 1, **changes)

    def to_dict(self, reveal: bool = False) -> Dict[str, Any]:
        """Serialize for the HTTP layer. Secure values stay masked unless `reveal`."""
        return {
            "id": self.id,
            "name": self.name,
            "value": self.value if reveal else self.masked_value,
            "isSecure": self.is_secure,
            "namespace": self.namespace,
            "version": self.version,
        }
