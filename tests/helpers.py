from typing import Any, Dict, List, Optional

from botocore.exceptions import ClientError
from starlette.testclient import TestClient

from paramstore_lib.services.container import ServiceContainer


def register_service_on_client(client: TestClient, name: str, instance: Any) -> None:
    """Register a service instance into the app's DI container for tests."""
    container = getattr(client.app.state, 'container', None)
    if container is None:
        container = ServiceContainer()
        client.app.state.container = container

    container.register_singleton(name, instance)


def client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": f"{code} raised by fake"}}, operation)


class FakeSSMClient:
    """In-process stand-in for a boto3 SSM client.

    Mirrors the SSM behaviour the backend relies on: paginated recursive
    listing with NextToken, Overwrite semantics on put, a per-key version
    counter that restarts after delete, and ClientError codes for missing
    or duplicate keys.
    """

    def __init__(self, page_size: int = 2):
        self.page_size = page_size
        self.params: Dict[str, Dict[str, Any]] = {}
        self.calls: List[tuple] = []
        # Raise this exception on the n-th get_parameters_by_path call (1-based)
        self.fail_list_on_call: Optional[int] = None
        self.fail_with: Optional[Exception] = None
        self._list_calls = 0

    def _check_failure(self):
        if self.fail_with is not None and self.fail_list_on_call is None:
            raise self.fail_with

    def get_parameters_by_path(self, Path, Recursive=False, WithDecryption=False, NextToken=None, MaxResults=None):
        self.calls.append(("get_parameters_by_path", Path, NextToken, Recursive))
        self._list_calls += 1
        if self.fail_with is not None and self.fail_list_on_call in (None, self._list_calls):
            raise self.fail_with
        prefix = Path if Path.endswith("/") else Path + "/"
        names = sorted(n for n in self.params if n.startswith(prefix))
        if not Recursive:
            names = [n for n in names if "/" not in n[len(prefix):]]
        size = MaxResults or self.page_size
        start = int(NextToken) if NextToken else 0
        page = names[start:start + size]
        response: Dict[str, Any] = {"Parameters": [dict(self.params[n]) for n in page]}
        if start + size < len(names):
            response["NextToken"] = str(start + size)
        return response

    def get_parameter(self, Name, WithDecryption=False):
        self.calls.append(("get_parameter", Name))
        self._check_failure()
        if Name not in self.params:
            raise client_error("ParameterNotFound", "GetParameter")
        return {"Parameter": dict(self.params[Name])}

    def put_parameter(self, Name, Value, Type, Overwrite=False):
        self.calls.append(("put_parameter", Name, Type, Overwrite))
        self._check_failure()
        existing = self.params.get(Name)
        if existing is not None and not Overwrite:
            raise client_error("ParameterAlreadyExists", "PutParameter")
        version = existing["Version"] + 1 if existing else 1
        self.params[Name] = {"Name": Name, "Value": Value, "Type": Type, "Version": version}
        return {"Version": version, "Tier": "Standard"}

    def delete_parameter(self, Name):
        self.calls.append(("delete_parameter", Name))
        self._check_failure()
        if Name not in self.params:
            raise client_error("ParameterNotFound", "DeleteParameter")
        del self.params[Name]
        return {}
