# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Constraint declarations loaded from YAML or JSON files.

For types that cannot carry ``Annotated`` metadata, constraints can be
declared in a file::

    types:
      - type: myapp.forms:SignupForm
        fields:
          name: [required]
          code:
            - pattern: {regexp: "^[A-Z]{3}$", message: "bad code"}
            - length: {value: 3}
"""

from __future__ import annotations

import importlib
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional

import yaml

from ..config import CONSTRAINT_FILE_ENV, load_settings
from ..exceptions import ConfigurationError
from ..validation.base import TypeMetadata
from ..validation.constraints import Constraint, constraint_from_mapping
from . import registry

logger = logging.getLogger(__name__)

DEFAULT_FILENAMES = ("fieldguard.yaml", "fieldguard.yml", "fieldguard.json")


def _config_home() -> Path:
    xdg = os.getenv("XDG_CONFIG_HOME")
    return Path(xdg) if xdg else Path.home() / ".config"


def iter_constraint_candidates(cwd: Optional[Path] = None) -> Iterator[Path]:
    """Yield candidate constraint files in lookup order (existing files only)."""

    override = load_settings().constraint_file
    if override is not None:
        yield override

    for directory in (cwd or Path.cwd(), _config_home() / "fieldguard"):
        for name in DEFAULT_FILENAMES:
            candidate = directory / name
            if candidate.is_file():
                yield candidate


def locate_constraint_file(path: Optional[os.PathLike] = None) -> Optional[Path]:
    """Resolve the constraint file to load.

    An explicit *path* or the ``FIELDGUARD_CONSTRAINT_FILE`` variable wins;
    otherwise exactly one default file may exist.
    """

    if path is not None:
        explicit = Path(path).expanduser()
        if not explicit.is_file():
            raise ConfigurationError(f"Constraint file not found: {explicit}")
        return explicit

    override = load_settings().constraint_file
    if override is not None:
        explicit = override
        if not explicit.is_file():
            raise ConfigurationError(
                f"{CONSTRAINT_FILE_ENV} points to a missing file: {explicit}"
            )
        return explicit

    defaults = list(iter_constraint_candidates())
    if len(defaults) > 1:
        raise ConfigurationError(
            "Multiple constraint files found; keep one or set "
            f"{CONSTRAINT_FILE_ENV}: {', '.join(str(p) for p in defaults)}"
        )
    return defaults[0] if defaults else None


def _read_document(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() == ".json":
            return json.loads(text)
        return yaml.safe_load(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Cannot parse constraint file {path}: {exc}") from exc


def resolve_type(reference: str) -> type:
    """Import ``package.module:QualName`` (or ``package.module.Name``)."""

    if ":" in reference:
        module_name, _, qualname = reference.partition(":")
    else:
        module_name, _, qualname = reference.rpartition(".")
    if not module_name or not qualname:
        raise ConfigurationError(f"Invalid type reference {reference!r}")

    try:
        target: Any = importlib.import_module(module_name)
        for part in qualname.split("."):
            target = getattr(target, part)
    except (ImportError, AttributeError) as exc:
        raise ConfigurationError(f"Cannot import type {reference!r}: {exc}") from exc

    if not isinstance(target, type):
        raise ConfigurationError(f"{reference!r} does not name a class")
    return target


def parse_fields(raw_fields: Any, *, where: str) -> Dict[str, List[Constraint]]:
    if raw_fields is None:
        return {}
    if not isinstance(raw_fields, Mapping):
        raise ConfigurationError(f"{where}: 'fields' must be a mapping")

    fields: Dict[str, List[Constraint]] = {}
    for name, declarations in raw_fields.items():
        if declarations is None:
            declarations = []
        elif not isinstance(declarations, list):
            declarations = [declarations]
        fields[str(name)] = [constraint_from_mapping(item) for item in declarations]
    return fields


def load_constraint_document(document: Any, *, source: str = "<document>") -> List[TypeMetadata]:
    """Register every type declared in an already-parsed document."""

    if document is None:
        return []
    if not isinstance(document, Mapping):
        raise ConfigurationError(f"{source}: top level must be a mapping")

    entries = document.get("types") or []
    if not isinstance(entries, list):
        raise ConfigurationError(f"{source}: 'types' must be a list")

    registered = []
    for index, entry in enumerate(entries):
        where = f"{source}: types[{index}]"
        if not isinstance(entry, Mapping) or not entry.get("type"):
            raise ConfigurationError(f"{where}: each entry needs a 'type'")
        klass = resolve_type(str(entry["type"]))
        fields = parse_fields(entry.get("fields"), where=where)
        registered.append(registry.register(klass, fields))

    logger.debug("Loaded constraints for %d types from %s", len(registered), source)
    return registered


def load_constraint_file(path: Optional[os.PathLike] = None) -> List[TypeMetadata]:
    """Locate, parse and register a constraint file. Returns the new metadata."""

    located = locate_constraint_file(path)
    if located is None:
        logger.debug("No constraint file found")
        return []
    try:
        return load_constraint_document(_read_document(located), source=str(located))
    except ConfigurationError:
        logger.error("Failed to load constraint file %s", located)
        raise


__all__ = [
    "DEFAULT_FILENAMES",
    "iter_constraint_candidates",
    "load_constraint_document",
    "load_constraint_file",
    "locate_constraint_file",
    "parse_fields",
    "resolve_type",
]
