"""Conversion between full key paths and (namespace, name) pairs.

A full path looks like `/ortelius/dev/PORT`: every segment but the last is
the namespace (`ortelius/dev`), the last one is the parameter name. A path
with a single segment (`/PORT`) belongs to the root namespace `""`.
"""
from __future__ import annotations
from typing import Tuple

from .errors import ValidationError

SEPARATOR = "/"


def validate_name(name: str) -> str:
    if not isinstance(name, str) or not name:
        raise ValidationError("Name is required")
    if SEPARATOR in name:
        raise ValidationError(f"Name '{name}' must not contain '{SEPARATOR}'")
    return name


def validate_namespace(namespace: str) -> str:
    """Check that `namespace` is "" or a run of non-empty segments without outer separators."""
    if not isinstance(namespace, str):
        raise ValidationError("Namespace must be a string")
    if namespace == "":
        return namespace
    if namespace.startswith(SEPARATOR) or namespace.endswith(SEPARATOR):
        raise ValidationError(f"Namespace '{namespace}' must not start or end with '{SEPARATOR}'")
    if any(segment == "" for segment in namespace.split(SEPARATOR)):
        raise ValidationError(f"Namespace '{namespace}' contains an empty segment")
    return namespace


def encode(namespace: str, name: str) -> str:
    """Return the full path addressing `name` inside `namespace`."""
    validate_namespace(namespace)
    validate_name(name)
    if namespace == "":
        return f"{SEPARATOR}{name}"
    return f"{SEPARATOR}{namespace}{SEPARATOR}{name}"


def decode(full_path: str) -> Tuple[str, str]:
    """Split a full path into `(namespace, name)`.

    Only a single leading separator is stripped, the rest is split as-is.
    """
    if not isinstance(full_path, str) or full_path in ("", SEPARATOR):
        raise ValidationError(f"Invalid parameter path: {full_path!r}")
    path = full_path[1:] if full_path.startswith(SEPARATOR) else full_path
    parts = path.split(SEPARATOR)
    name = parts.pop()
    if not name:
        raise ValidationError(f"Parameter path '{full_path}' has no name segment")
    return SEPARATOR.join(parts), name


def namespace_prefix(namespace: str) -> str:
    """Return the path prefix under which all entries of `namespace` live."""
    validate_namespace(namespace)
    return SEPARATOR if namespace == "" else f"{SEPARATOR}{namespace}"
