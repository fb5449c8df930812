"""JSON document with dotted key-path lookups and typed, defaulting getters."""

from __future__ import annotations

import json
import math
import re
from typing import Any

from emiglio.logger import get_logger

_MISSING = object()

_INT32_MIN, _INT32_MAX = -(2**31), 2**31 - 1
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1
_UINT64_MAX = 2**64 - 1

_LEADING_DOUBLE = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


class JsonParseError(ValueError):
    """Raised when a JSON document cannot be read or parsed."""


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_int32(value: Any) -> bool:
    return _is_integer(value) and _INT32_MIN <= value <= _INT32_MAX


def _is_int64(value: Any) -> bool:
    return _is_integer(value) and _INT64_MIN <= value <= _INT64_MAX


def _is_uint64(value: Any) -> bool:
    return _is_integer(value) and 0 <= value <= _UINT64_MAX


def _string_to_double(text: str, default: float) -> float:
    match = _LEADING_DOUBLE.match(text)
    if not match:
        return default
    literal = match.group(1)
    result = float(literal)
    if math.isinf(result) and "inf" not in literal.lower():
        return default
    return result


def _as_double(value: Any, default: float) -> float:
    """Floats, 64-bit signed integers and numeric strings become floats."""
    if isinstance(value, float):
        return value
    if _is_int64(value):
        return float(value)
    if isinstance(value, str):
        return _string_to_double(value, default)
    return default


def _as_int64(value: Any, default: int) -> int:
    """Integers that fit 64 bits; unsigned values wrap into the signed range."""
    if _is_int64(value):
        return value
    if _is_uint64(value):
        return value - 2**64
    return default


def _parse_int(text: str):
    value = int(text)
    if _INT64_MIN <= value <= _UINT64_MAX:
        return value
    return _parse_float(text)


def _parse_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"Number too big to be stored in double: {text}")
    return value


def _reject_constant(name: str):
    raise ValueError(f"Invalid value: {name}")


def _first_key_wins(pairs):
    result = {}
    for key, value in pairs:
        result.setdefault(key, value)
    return result


class JsonParser:
    """Holds one parsed JSON document.

    Getters take a dotted key path (``"exchange.apiKey"``); the empty path
    is the root. A missing key or a value of the wrong type yields the
    given default.
    """

    def __init__(self) -> None:
        self._doc: Any = None
        self._valid = False
        self.error = ""

    @property
    def valid(self) -> bool:
        return self._valid

    def parse(self, json_string) -> None:
        """Parse ``json_string``; raise JsonParseError when it is not valid JSON."""
        try:
            doc = json.loads(
                json_string,
                parse_int=_parse_int,
                parse_float=_parse_float,
                parse_constant=_reject_constant,
                object_pairs_hook=_first_key_wins,
            )
        except json.JSONDecodeError as exc:
            self._fail(f"{exc.msg} (offset: {exc.pos})")
            raise JsonParseError(self.error) from exc
        except ValueError as exc:
            self._fail(str(exc))
            raise JsonParseError(self.error) from exc
        self._doc = doc
        self._valid = True
        self.error = ""
        get_logger().debug("JSON parsed successfully")

    def parse_file(self, file_path) -> None:
        """Parse the JSON file at ``file_path``; raise JsonParseError on failure."""
        try:
            with open(file_path, encoding="utf-8") as handle:
                text = handle.read()
        except OSError as exc:
            self.error = f"Failed to open file: {file_path}"
            self._valid = False
            get_logger().error(self.error)
            raise JsonParseError(self.error) from exc
        self.parse(text)

    def _fail(self, message: str) -> None:
        self.error = message
        self._valid = False
        get_logger().error("Failed to parse JSON: " + message)

    def _navigate(self, key_path: str) -> Any:
        if not self._valid:
            return _MISSING
        if not key_path:
            return self._doc
        if not isinstance(self._doc, dict):
            return _MISSING
        current = self._doc
        for key in key_path.split("."):
            if not isinstance(current, dict) or key not in current:
                return _MISSING
            current = current[key]
        return current

    def _element(self, key_path: str, index: int) -> Any:
        array = self._navigate(key_path)
        if isinstance(array, list) and 0 <= index < len(array):
            return array[index]
        return _MISSING

    def _nested_element(self, key_path: str, outer_index: int, inner_index: int) -> Any:
        inner = self._element(key_path, outer_index)
        if isinstance(inner, list) and 0 <= inner_index < len(inner):
            return inner[inner_index]
        return _MISSING

    def _object_field(self, key_path: str, index: int, field: str) -> Any:
        element = self._element(key_path, index)
        if isinstance(element, dict) and field in element:
            return element[field]
        return _MISSING

    def get_string(self, key_path, default="") -> str:
        value = self._navigate(key_path)
        return value if isinstance(value, str) else default

    def get_int(self, key_path, default=0) -> int:
        value = self._navigate(key_path)
        return value if _is_int32(value) else default

    def get_int64(self, key_path, default=0) -> int:
        return _as_int64(self._navigate(key_path), default)

    def get_double(self, key_path, default=0.0) -> float:
        return _as_double(self._navigate(key_path), default)

    def get_bool(self, key_path, default=False) -> bool:
        value = self._navigate(key_path)
        return value if isinstance(value, bool) else default

    def has(self, key_path) -> bool:
        return self._navigate(key_path) is not _MISSING

    def is_array(self, key_path) -> bool:
        return isinstance(self._navigate(key_path), list)

    def get_array_size(self, key_path) -> int:
        value = self._navigate(key_path)
        return len(value) if isinstance(value, list) else 0

    def get_array_string(self, key_path, index, default="") -> str:
        value = self._element(key_path, index)
        return value if isinstance(value, str) else default

    def get_array_int(self, key_path, index, default=0) -> int:
        value = self._element(key_path, index)
        return value if _is_int32(value) else default

    def get_array_int64(self, key_path, index, default=0) -> int:
        return _as_int64(self._element(key_path, index), default)

    def get_array_double(self, key_path, index, default=0.0) -> float:
        return _as_double(self._element(key_path, index), default)

    def get_nested_array_size(self, key_path, index) -> int:
        value = self._element(key_path, index)
        return len(value) if isinstance(value, list) else 0

    def get_nested_array_double(self, key_path, outer_index, inner_index, default=0.0) -> float:
        return _as_double(self._nested_element(key_path, outer_index, inner_index), default)

    def get_nested_array_int64(self, key_path, outer_index, inner_index, default=0) -> int:
        return _as_int64(self._nested_element(key_path, outer_index, inner_index), default)

    def get_nested_array_string(self, key_path, outer_index, inner_index, default="") -> str:
        value = self._nested_element(key_path, outer_index, inner_index)
        return value if isinstance(value, str) else default

    def get_array_object_string(self, key_path, index, field, default="") -> str:
        value = self._object_field(key_path, index, field)
        return value if isinstance(value, str) else default

    def get_array_object_double(self, key_path, index, field, default=0.0) -> float:
        return _as_double(self._object_field(key_path, index, field), default)

    def get_array_object_int64(self, key_path, index, field, default=0) -> int:
        return _as_int64(self._object_field(key_path, index, field), default)

    def to_string(self, pretty=True) -> str:
        """Serialise the document; ``"{}"`` when nothing valid is loaded."""
        if not self._valid:
            return "{}"
        if pretty:
            return json.dumps(self._doc, indent=4, ensure_ascii=False)
        return json.dumps(self._doc, separators=(",", ":"), ensure_ascii=False)