"""YAML / JSON endpoint catalog loader.

A catalog is either a single file with a top-level ``groups`` list, or a
directory holding one group per file.

Example group::

    name: Statuses
    endpoints:
      - name: Show
        method: Get
        url: https://api.twitter.com/1.1/statuses/show/{id}.json
        return_type: Status
        params:
          - {name: id, type: long, kind: required}
          - {name: trim_user, type: bool}
"""

import fnmatch
from collections.abc import Iterable
from pathlib import Path

import yaml
from pydantic import ValidationError

from .base import SourceGroup, split_return_declaration
from ..errors import TemplateParseError

CATALOG_SUFFIXES = (".yaml", ".yml", ".json")


def load_catalog(path: Path, exclude: Iterable[str] = ()) -> list[SourceGroup]:
    """Load every group from a catalog file or directory, in a stable order."""
    if path.is_dir():
        groups = []
        for file_path in _catalog_files(path, list(exclude)):
            groups.extend(_load_file(file_path))
        return groups
    return _load_file(path)


def _catalog_files(directory: Path, exclude: list[str]) -> list[Path]:
    files = []
    for file_path in sorted(directory.iterdir()):
        if not file_path.is_file() or file_path.suffix not in CATALOG_SUFFIXES:
            continue
        if any(fnmatch.fnmatch(file_path.name, pattern) for pattern in exclude):
            continue
        files.append(file_path)
    return files


def _load_file(file_path: Path) -> list[SourceGroup]:
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateParseError(file_path.name, f"cannot read file: {e}") from e

    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        position = (mark.line + 1, mark.column + 1) if mark is not None else None
        raise TemplateParseError(file_path.name, str(getattr(e, "problem", e)), position) from e

    if not isinstance(doc, dict):
        raise TemplateParseError(file_path.name, "expected a mapping at the top level")

    raw_groups = doc["groups"] if "groups" in doc else [doc]
    if not isinstance(raw_groups, list):
        raise TemplateParseError(file_path.name, "'groups' must be a list")

    groups = []
    for raw in raw_groups:
        try:
            groups.append(SourceGroup(**_normalize_group(raw)))
        except (ValidationError, TypeError, ValueError) as e:
            raise TemplateParseError(file_path.name, str(e)) from e
    return groups


def _normalize_group(raw: dict) -> dict:
    """Fill in response shapes for endpoints that use the combined ``Listed<Status>`` form."""
    group = dict(raw)
    endpoints = []
    for ep in group.get("endpoints") or []:
        ep = dict(ep)
        if "shape" not in ep and isinstance(ep.get("return_type"), str):
            name, shape = split_return_declaration(ep["return_type"])
            ep["return_type"] = name
            ep["shape"] = shape
        endpoints.append(ep)
    group["endpoints"] = endpoints
    return group
