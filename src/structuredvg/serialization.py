"""
Serialization helpers for write settings and bundle schemas.

Settings round-trip through dict, JSON and YAML. Bundle schemas are
described one way only (for documentation and inspection); callables are
reported by kind, never serialized.
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, fields
from typing import Any, Dict, List

import yaml

from structuredvg.bundle import Bundle, NestedBundle
from structuredvg.errors import SettingsError
from structuredvg.io import WriteSettings
from structuredvg.policy import AttributeDescriptor, LiteralSuffix

logger = logging.getLogger(__name__)


def settings_to_dict(settings: WriteSettings) -> Dict[str, Any]:
    return asdict(settings)


def settings_from_dict(d: Dict[str, Any] | None) -> WriteSettings:
    if d is None:
        return WriteSettings()
    if not isinstance(d, dict):
        raise SettingsError(f"Settings must be a mapping, got {type(d).__name__}")
    known = {f.name for f in fields(WriteSettings)}
    unknown = sorted(set(d) - known)
    if unknown:
        raise SettingsError(f"Unknown settings: {unknown}")
    return WriteSettings(**d)


def settings_to_json(settings: WriteSettings) -> str:
    return json.dumps(settings_to_dict(settings), sort_keys=True)


def settings_from_json(s: str) -> WriteSettings:
    try:
        d = json.loads(s)
    except json.JSONDecodeError as e:
        raise SettingsError(f"Invalid settings JSON: {str(e)}")
    return settings_from_dict(d)


def settings_to_yaml(settings: WriteSettings) -> str:
    return yaml.safe_dump(settings_to_dict(settings))


def settings_from_yaml(s: str) -> WriteSettings:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid settings YAML: {str(e)}")
    return settings_from_dict(d)


def load_settings(filepath: str) -> WriteSettings:
    """
    Load write settings from a YAML file.

    An empty file gives the default settings.

    Raises:
        FileNotFoundError: If the file doesn't exist
        SettingsError: If the content is invalid
    """
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"Settings file not found: {filepath}")

    settings = settings_from_yaml(content)
    logger.debug("Loaded write settings from %s: %s", filepath, settings)
    return settings


def descriptor_to_dict(d: AttributeDescriptor) -> Dict[str, Any]:
    result: Dict[str, Any] = {
        "type": "attribute",
        "field": d.field,
        "name": d.name,
        "presence": d.presence.kind,
        "value": d.value.kind,
    }
    if isinstance(d.value, LiteralSuffix):
        result["literal"] = d.value.literal.decode("utf-8")
    return result


def nested_to_dict(n: NestedBundle) -> Dict[str, Any]:
    return {"type": "bundle", "field": n.field}


def bundle_to_dict(bundle: Bundle) -> Dict[str, Any]:
    entries: List[Dict[str, Any]] = []
    for entry in bundle.entries:
        if isinstance(entry, NestedBundle):
            entries.append(nested_to_dict(entry))
        else:
            entries.append(descriptor_to_dict(entry))
    return {"name": bundle.name, "entries": entries}


def bundle_to_json(bundle: Bundle) -> str:
    return json.dumps(bundle_to_dict(bundle), sort_keys=True)


def bundle_to_yaml(bundle: Bundle) -> str:
    return yaml.safe_dump(bundle_to_dict(bundle), sort_keys=False)


__all__ = [
    "settings_to_dict",
    "settings_from_dict",
    "settings_to_json",
    "settings_from_json",
    "settings_to_yaml",
    "settings_from_yaml",
    "load_settings",
    "descriptor_to_dict",
    "bundle_to_dict",
    "bundle_to_json",
    "bundle_to_yaml",
]
