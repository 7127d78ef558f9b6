from typing import Any, Mapping, MutableMapping

from pydantic import ValidationError


def deep_merge(a: Mapping[str, Any], b: Mapping[str, Any]) -> Mapping[str, Any]:
    out = dict(a)
    for k, v in b.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def insert_path(target: MutableMapping[str, Any], dotted_key: str, value: Any) -> None:
    """
    Insert `value` under a dotted key, creating intermediate dicts
    (e.g. "a.b" -> {"a": {"b": value}}).
    """
    parts = [segment for segment in dotted_key.split(".") if segment]
    if not parts:
        raise ValueError("Override key must not be empty")
    node = target
    for segment in parts[:-1]:
        child = node.setdefault(segment, {})
        if not isinstance(child, dict):
            raise ValueError(f"Cannot nest override under non-mapping key {segment!r}")
        node = child
    node[parts[-1]] = value


def validation_error_parser(error: ValidationError) -> list[dict[str, str]]:
    parsed_error = [
        {
            "component": "config.schema",
            "path": ".".join(map(str, err["loc"])),
            "message": err["msg"],
            "error_type": err["type"],
        }
        for err in error.errors()
    ]
    return parsed_error
