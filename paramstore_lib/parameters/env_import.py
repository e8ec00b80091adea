"""Bulk import of `.env` files into a namespace.

Each `KEY=VALUE` pair is applied on its own: existing names are updated,
new names are created. Nothing is rolled back when an entry fails; the
returned ImportReport says what happened to each line.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .errors import ParameterStoreError
from .interfaces import ParameterStoreProtocol

logger = logging.getLogger(__name__)


@dataclass
class ImportReport:
    created: List[str] = field(default_factory=list)
    updated: List[str] = field(default_factory=list)
    failed: List[Dict[str, str]] = field(default_factory=list)
    skipped: List[Dict[str, object]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "created": self.created,
            "updated": self.updated,
            "failed": self.failed,
            "skipped": self.skipped,
        }


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_env(text: str) -> Tuple[List[Tuple[str, str]], List[Dict[str, object]]]:
    """Parse `.env` text into `(pairs, malformed)`.

    Blank lines and `#` comments are ignored, an `export ` prefix is
    accepted and matching outer quotes are stripped from values. Lines that
    are not `KEY=VALUE` are returned in `malformed` with their line number.
    """
    pairs: List[Tuple[str, str]] = []
    malformed: List[Dict[str, object]] = []
    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            malformed.append({"line": lineno, "text": raw_line})
            continue
        pairs.append((key, _unquote(value.strip())))
    return pairs, malformed


def import_env(
    store: ParameterStoreProtocol,
    namespace: str,
    text: str,
    is_secure: Optional[bool] = None,
) -> ImportReport:
    """Apply every pair from `text` to `namespace`, update-or-create.

    `is_secure=True` marks every imported entry secure. Otherwise existing
    entries keep their current flag and new entries are created plain; an
    import never downgrades a secure entry.
    """
    pairs, malformed = parse_env(text)
    report = ImportReport(skipped=malformed)
    existing = {p.name for p in store.list_namespace(namespace)}
    for name, value in pairs:
        try:
            if name in existing:
                store.update_variable(namespace, name, value=value, is_secure=True if is_secure else None)
                report.updated.append(name)
            else:
                store.create_variable(namespace, name, value, bool(is_secure))
                existing.add(name)
                report.created.append(name)
        except ParameterStoreError as e:
            logger.warning("Import of %s into %s failed: %s", name, namespace or "/", e)
            report.failed.append({"name": name, "error": str(e)})
    logger.info(
        "Imported into %s: %d created, %d updated, %d failed, %d skipped",
        namespace or "/",
        len(report.created),
        len(report.updated),
        len(report.failed),
        len(report.skipped),
    )
    return report
