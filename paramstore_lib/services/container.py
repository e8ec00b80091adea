from typing import Any, Dict


class ServiceContainer:
    """Registry of named singletons.

    The app factory registers the parameter store here and routers resolve
    it by key through `app.state.container`. Tests re-register keys to
    inject fakes.
    """

    def __init__(self) -> None:
        self._singletons: Dict[str, Any] = {}

    def register_singleton(self, key: str, instance: Any) -> None:
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        if key in self._singletons:
            return self._singletons[key]
        raise KeyError(f"No service registered for key '{key}'")
