"""Serialization of result dataclasses into JSON-ready dicts."""
from __future__ import annotations

from dataclasses import fields, is_dataclass
from typing import Any, Dict, Mapping


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def to_dict(obj: Any) -> Dict[str, Any]:
    """
    Serialize a dataclass to a dict with camelCase keys.

    Nested dataclasses, lists and mappings are converted recursively; mapping
    keys are kept as-is. Values that define their own `to_dict` use it.
    """
    return {camel_case(f.name): _to_json(getattr(obj, f.name)) for f in fields(obj)}


def _to_json(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if is_dataclass(value) and not isinstance(value, type):
        return to_dict(value)
    if isinstance(value, Mapping):
        return {k: _to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_json(v) for v in value]
    return value
