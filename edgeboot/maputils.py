"""Helpers for converting, merging and copying configuration structures via JSON."""

from __future__ import annotations

import dataclasses
import json
import types
import typing
from typing import Any, Union

PATH_SEP = "/"

_SIMPLE_ANNOTATIONS: dict[str, Any] = {
    "int": int,
    "str": str,
    "bool": bool,
    "float": float,
    "dict": dict,
    "list": list,
    "Any": Any,
    "typing.Any": Any,
    "object": object,
}


def _json_default(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    raise TypeError(f"object of type {type(obj).__name__} is not JSON serializable")


def _to_json(value: Any) -> str:
    try:
        return json.dumps(value, default=_json_default)
    except (TypeError, ValueError) as err:
        raise ValueError(f"could not marshal {type(value).__name__} to JSON: {err}") from err


def convert_to_map(target: Any) -> dict[str, Any]:
    """Convert a dataclass instance or mapping into a plain dict via JSON."""
    result = json.loads(_to_json(target))
    if not isinstance(result, dict):
        raise ValueError(
            f"could not unmarshal JSON (from {type(target).__name__}) into a map"
        )
    return result


def _is_union(origin: Any) -> bool:
    return origin is Union or origin is types.UnionType


def _type_from_default(fld: dataclasses.Field) -> Any:
    if fld.default is not dataclasses.MISSING:
        sample = fld.default
    elif fld.default_factory is not dataclasses.MISSING:
        try:
            sample = fld.default_factory()
        except Exception:  # noqa: BLE001 - a failing factory leaves the type open
            return Any
    else:
        return Any
    if dataclasses.is_dataclass(sample) and not isinstance(sample, type):
        return type(sample)
    if isinstance(sample, bool):
        return bool
    if isinstance(sample, (int, float, str, dict, list)):
        return type(sample)
    return Any


def _resolve_string_annotation(annotation: str, fld: dataclasses.Field) -> Any:
    text = annotation.strip()
    if text in _SIMPLE_ANNOTATIONS:
        return _SIMPLE_ANNOTATIONS[text]
    inferred = _type_from_default(fld)
    if inferred is not Any:
        return inferred
    for prefix, kind in (("dict[", dict), ("Dict[", dict), ("list[", list), ("List[", list)):
        if text.startswith(prefix):
            return kind
    return Any


def _field_types(cls: type) -> dict[str, Any]:
    resolved = {}
    for fld in dataclasses.fields(cls):
        annotation = fld.type
        if isinstance(annotation, str):
            annotation = _resolve_string_annotation(annotation, fld)
        resolved[fld.name] = annotation
    return resolved


def _decode(value: Any, tp: Any) -> Any:
    if tp is Any or tp is object:
        return value
    origin = typing.get_origin(tp)
    if _is_union(origin):
        args = typing.get_args(tp)
        if value is None and type(None) in args:
            return None
        errors = []
        for arg in args:
            if arg is type(None):
                continue
            try:
                return _decode(value, arg)
            except ValueError as err:
                errors.append(str(err))
        raise ValueError("; ".join(errors) or f"cannot decode {value!r}")
    if value is None:
        return None
    if dataclasses.is_dataclass(tp) and isinstance(tp, type):
        if not isinstance(value, dict):
            raise ValueError(f"expected object for {tp.__name__}, got {type(value).__name__}")
        return _build_dataclass(value, tp)
    if origin is dict or tp is dict:
        if not isinstance(value, dict):
            raise ValueError(f"expected object, got {type(value).__name__}")
        args = typing.get_args(tp)
        item_type = args[1] if len(args) == 2 else Any
        return {key: _decode(item, item_type) for key, item in value.items()}
    if origin is list or tp is list:
        if not isinstance(value, list):
            raise ValueError(f"expected array, got {type(value).__name__}")
        args = typing.get_args(tp)
        item_type = args[0] if args else Any
        return [_decode(item, item_type) for item in value]
    if tp is bool:
        if not isinstance(value, bool):
            raise ValueError(f"expected bool, got {type(value).__name__}")
        return value
    if tp is int:
        if isinstance(value, bool):
            raise ValueError("expected number, got bool")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        raise ValueError(f"expected integer, got {value!r}")
    if tp is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"expected number, got {type(value).__name__}")
        return float(value)
    if tp is str:
        if not isinstance(value, str):
            raise ValueError(f"expected string, got {type(value).__name__}")
        return value
    return value


def _build_dataclass(data: dict[str, Any], cls: type) -> Any:
    hints = _field_types(cls)
    kwargs = {}
    for fld in dataclasses.fields(cls):
        if not fld.init or fld.name not in data:
            continue
        value = data[fld.name]
        field_type = hints.get(fld.name, Any)
        if value is None:
            origin = typing.get_origin(field_type)
            allows_none = field_type is Any or (
                _is_union(origin) and type(None) in typing.get_args(field_type)
            )
            if not allows_none:
                continue
        kwargs[fld.name] = _decode(value, field_type)
    return cls(**kwargs)


def convert_from_map(mapping: dict[str, Any], target_type: Any) -> Any:
    """Build an instance of target_type from a plain dict via JSON."""
    data = json.loads(_to_json(mapping))
    name = getattr(target_type, "__name__", str(target_type))
    try:
        return _decode(data, target_type)
    except ValueError as err:
        raise ValueError(f"could not unmarshal JSON to {name}: {err}") from err


def merge_maps(dest: dict[str, Any], src: dict[str, Any]) -> None:
    """Merge src into dest in place, descending into nested dicts present in both."""
    for key, value in src.items():
        if key not in dest:
            dest[key] = value
            continue
        current = dest[key]
        if isinstance(current, dict):
            if not isinstance(value, dict):
                raise TypeError(
                    f"cannot merge {type(value).__name__} into map at key '{key}'"
                )
            merge_maps(current, value)
            continue
        dest[key] = value


def _remove_unused_settings_from_map(
    target: dict[str, Any], base_key: str, valid_keys: dict[str, Any]
) -> None:
    remove_keys = []
    for key, value in target.items():
        next_base_key = build_base_key(base_key, key)
        if isinstance(value, dict):
            _remove_unused_settings_from_map(value, next_base_key, valid_keys)
            if not value:
                remove_keys.append(key)
            continue
        if next_base_key not in valid_keys:
            remove_keys.append(key)
    for key in remove_keys:
        del target[key]


def remove_unused_settings(
    src: Any, base_key: str, used_setting_keys: dict[str, Any]
) -> dict[str, Any]:
    """Return src as a dict holding only settings whose full key is in used_setting_keys."""
    try:
        src_map = convert_to_map(src)
    except ValueError as err:
        raise ValueError(f"could not create map from {type(src).__name__}: {err}") from err
    _remove_unused_settings_from_map(src_map, base_key, used_setting_keys)
    return src_map


def merge_values(dest: Any, src: Any) -> Any:
    """Merge src into dest, updating dest in place, and return dest.

    Either value may be a dict or a dataclass instance.
    """
    if isinstance(dest, dict):
        dest_map = dest
    else:
        try:
            dest_map = convert_to_map(dest)
        except ValueError as err:
            raise ValueError(
                f"could not create destination map from {type(dest).__name__}: {err}"
            ) from err

    if isinstance(src, dict):
        src_map = src
    else:
        try:
            src_map = convert_to_map(src)
        except ValueError as err:
            raise ValueError(
                f"could not create source map from {type(src).__name__}: {err}"
            ) from err

    merge_maps(dest_map, src_map)

    if dest_map is dest:
        return dest
    merged = convert_from_map(dest_map, type(dest))
    for fld in dataclasses.fields(dest):
        setattr(dest, fld.name, getattr(merged, fld.name))
    return dest


def string_slice_to_map(values: typing.Iterable[str]) -> dict[str, Any]:
    """Return a dict with each value as a key mapped to None."""
    return dict.fromkeys(values)


def build_base_key(*args: str) -> str:
    """Join key parts with the path separator."""
    return PATH_SEP.join(args)


def deep_copy(src: Any) -> Any:
    """Return an independent copy of src made through a JSON round trip."""
    if dataclasses.is_dataclass(src) and not isinstance(src, type):
        return convert_from_map(convert_to_map(src), type(src))
    return json.loads(_to_json(src))