"""Parameter resolution for ParameterChange proposals.

A parameter change can be described two ways: inline, as a JSON object
carrying ``key``, ``value``, and ``op``; or by naming a key inside the node's
parameter snapshot (``<home>/<path>/config/params.json``).  Snapshot lookups go
through a :class:`ParameterRegistry` so new parameter keys are added by
registering an extractor rather than by editing the dispatch.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping

from .errors import (
    MalformedParamInput,
    MalformedSnapshot,
    ParameterSnapshotUnreadable,
    UnknownParameterKey,
)
from .model import Param, ProposalKind

logger = logging.getLogger(__name__)

SNAPSHOT_RELATIVE_PATH = Path("config") / "params.json"
COMPACT_JSON_SEPARATORS = (",", ":")

DEPOSIT_PROCEDURE_KEY = "Gov/gov/depositProcedure"
VOTING_PROCEDURE_KEY = "Gov/gov/votingProcedure"
TALLYING_PROCEDURE_KEY = "Gov/gov/tallyingProcedure"


@dataclass(frozen=True)
class ParameterSnapshotDocument:
    """Read-only view of a node's persisted governance parameters."""

    source: Path
    data: Mapping[str, Any]

    def section(self, name: str) -> Mapping[str, Any]:
        value = self.data.get(name)
        if not isinstance(value, dict):
            raise MalformedSnapshot(f"Snapshot {self.source} has no '{name}' section")
        return value


Extractor = Callable[[ParameterSnapshotDocument], Any]


class ParameterRegistry:
    """Maps parameter keys to functions extracting their snapshot value."""

    def __init__(self) -> None:
        self._extractors: dict[str, Extractor] = {}

    def register(self, key: str, extractor: Extractor | None = None):
        """Register ``extractor`` for ``key``; usable as a decorator."""

        def _add(func: Extractor) -> Extractor:
            if key in self._extractors:
                raise ValueError(f"Parameter key {key} is already registered")
            self._extractors[key] = func
            return func

        if extractor is not None:
            return _add(extractor)
        return _add

    def keys(self) -> list[str]:
        return sorted(self._extractors)

    def extractor_for(self, key: str) -> Extractor:
        extractor = self._extractors.get(key)
        if extractor is None:
            known = ", ".join(self.keys()) or "none"
            raise UnknownParameterKey(
                f"Unknown parameter key '{key}' (registered keys: {known})"
            )
        return extractor

    def extract(self, key: str, document: ParameterSnapshotDocument) -> Any:
        return self.extractor_for(key)(document)


def _gov_entry(key: str) -> Extractor:
    def extract(document: ParameterSnapshotDocument) -> Any:
        section = document.section("gov")
        if key not in section:
            raise MalformedSnapshot(f"Snapshot {document.source} has no entry for {key}")
        return section[key]

    return extract


DEFAULT_REGISTRY = ParameterRegistry()
DEFAULT_REGISTRY.register(DEPOSIT_PROCEDURE_KEY, _gov_entry(DEPOSIT_PROCEDURE_KEY))
DEFAULT_REGISTRY.register(VOTING_PROCEDURE_KEY, _gov_entry(VOTING_PROCEDURE_KEY))
DEFAULT_REGISTRY.register(TALLYING_PROCEDURE_KEY, _gov_entry(TALLYING_PROCEDURE_KEY))


def parse_inline_param(raw: str) -> Param:
    """Decode an inline ``{"key": ..., "value": ..., "op": ...}`` document."""

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedParamInput(f"Parameter JSON is invalid: {exc}") from exc
    if not isinstance(data, dict):
        raise MalformedParamInput("Parameter JSON must decode to an object")

    # Field names match case-insensitively, so {"Key": ...} is accepted too.
    lowered = {str(name).lower(): value for name, value in data.items()}
    fields: dict[str, str] = {}
    for name in ("key", "value", "op"):
        value = lowered.get(name, "")
        if not isinstance(value, str):
            raise MalformedParamInput(f"Parameter field '{name}' must be a string")
        fields[name] = value
    for name in ("key", "op"):
        if not fields[name].strip():
            raise MalformedParamInput(f"Parameter field '{name}' must not be empty")
    return Param(**fields)


def snapshot_path(node_home: str | Path, relative: str | Path) -> Path:
    # Always joined beneath the home directory, even for "/node0".
    relative = str(relative).lstrip("/")
    return Path(node_home).expanduser() / relative / SNAPSHOT_RELATIVE_PATH


def load_snapshot(path: str | Path) -> ParameterSnapshotDocument:
    path = Path(path)
    logger.info("Opening parameter snapshot %s", path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ParameterSnapshotUnreadable(
            f"Cannot read parameter snapshot {path}: {exc}"
        ) from exc

    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MalformedSnapshot(f"Parameter snapshot {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise MalformedSnapshot(f"Parameter snapshot {path} must contain a JSON object")
    return ParameterSnapshotDocument(source=path, data=data)


def param_from_snapshot(
    document: ParameterSnapshotDocument,
    key: str,
    op: str,
    registry: ParameterRegistry = DEFAULT_REGISTRY,
) -> Param:
    return _encode_param(key, registry.extract(key, document), op, document.source)


def _encode_param(key: str, value: Any, op: str, source: Path) -> Param:
    encoded = json.dumps(value, separators=COMPACT_JSON_SEPARATORS)
    logger.debug("Resolved %s from %s", key, source)
    return Param(key=key, value=encoded, op=op)


def resolve_param(
    kind: ProposalKind,
    *,
    node_home: str | Path,
    inline: str = "",
    path: str = "",
    key: str = "",
    op: str = "",
    registry: ParameterRegistry = DEFAULT_REGISTRY,
) -> Param | None:
    """Resolve the parameter carried by a proposal of ``kind``.

    Only ParameterChange proposals carry a parameter; every other kind yields
    ``None``.  A non-empty ``inline`` document takes precedence over the
    snapshot lookup described by ``path``, ``key``, and ``op``.
    """

    if kind is not ProposalKind.PARAMETER_CHANGE:
        return None
    if inline:
        return parse_inline_param(inline)
    extractor = registry.extractor_for(key)
    document = load_snapshot(snapshot_path(node_home, path))
    return _encode_param(key, extractor(document), op, document.source)
