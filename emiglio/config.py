"""Application settings held as flat dotted keys with string values."""

from __future__ import annotations

import functools
import json
import math
import os
import re
from typing import Any, Dict, List

from emiglio.jsonparser import JsonParseError
from emiglio.logger import get_logger

_DEFAULT_HOME = "/boot/home"
_NUMERIC_CHARS = frozenset("0123456789.-")
_INT32_MIN, _INT32_MAX = -(2**31), 2**31 - 1

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_LEADING_DOUBLE = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def _leading_int(text: str):
    match = _LEADING_INT.match(text)
    if not match:
        return None
    value = int(match.group(1))
    if not _INT32_MIN <= value <= _INT32_MAX:
        return None
    return value


def _leading_double(text: str):
    match = _LEADING_DOUBLE.match(text)
    if not match:
        return None
    literal = match.group(1)
    value = float(literal)
    if math.isinf(value) and "inf" not in literal.lower():
        return None
    return value


def _json_literal(text: str) -> str:
    """Booleans and numeric-looking values are written bare, the rest quoted."""
    if text in ("true", "false"):
        return text
    if text and set(text) <= _NUMERIC_CHARS:
        return text
    return json.dumps(text, ensure_ascii=False)


def _flatten(prefix: str, value: Any, out: Dict[str, str]) -> None:
    if isinstance(value, dict):
        for key, item in value.items():
            _flatten(f"{prefix}.{key}" if prefix else str(key), item, out)
    elif isinstance(value, list):
        for index, item in enumerate(value):
            _flatten(f"{prefix}.{index}", item, out)
    elif value is None:
        return
    elif isinstance(value, bool):
        out[prefix] = "true" if value else "false"
    else:
        out[prefix] = str(value)


class Config:
    """Key/value settings with typed getters and JSON persistence.

    Keys are dotted paths (``"log.level"``); arrays are stored as
    ``key.0``, ``key.1`` and so on.
    """

    def __init__(self) -> None:
        self._values: Dict[str, str] = {}
        self._loaded = False
        home = os.environ.get("HOME") or _DEFAULT_HOME
        self.config_dir = f"{home}/config/settings/Emiglio"
        self.data_dir = f"{home}/config/settings/Emiglio/data"
        self.recipes_dir = f"{home}/config/settings/Emiglio/recipes"
        self.log_file = f"{self.config_dir}/emilio.log"
        self._values.update(
            {
                "app.name": "Emiglio",
                "app.version": "1.0.0",
                "log.level": "INFO",
                "log.file": self.log_file,
                "data.dir": self.data_dir,
                "recipes.dir": self.recipes_dir,
            }
        )

    @property
    def loaded(self) -> bool:
        return self._loaded

    def load(self, config_path) -> None:
        """Merge settings from a JSON file.

        Raises OSError when the file cannot be read and JsonParseError when
        it is not valid JSON; current values are kept in both cases.
        """
        log = get_logger()
        try:
            with open(config_path, encoding="utf-8") as handle:
                text = handle.read()
        except OSError:
            log.warning(f"Config file not found: {config_path}, using defaults")
            raise
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            message = f"Failed to parse config file: {exc.msg} (offset: {exc.pos})"
            log.error(message)
            raise JsonParseError(message) from exc
        if isinstance(document, dict):
            values: Dict[str, str] = {}
            _flatten("", document, values)
            self._values.update(values)
        self._loaded = True
        log.info(f"Configuration loaded from: {config_path}")

    def save(self, config_path) -> None:
        """Write all settings as a flat JSON object, keys in sorted order."""
        log = get_logger()
        entries = ",\n".join(
            f"  {json.dumps(key, ensure_ascii=False)}: {_json_literal(value)}"
            for key, value in sorted(self._values.items())
        )
        try:
            with open(config_path, "w", encoding="utf-8") as handle:
                handle.write("{\n" + entries + "\n}\n")
        except OSError:
            log.error(f"Failed to open config file for writing: {config_path}")
            raise
        log.info(f"Configuration saved to: {config_path}")

    def get_string(self, key, default="") -> str:
        return self._values.get(key, default)

    def get_int(self, key, default=0) -> int:
        if key not in self._values:
            return default
        value = _leading_int(self._values[key])
        return default if value is None else value

    def get_double(self, key, default=0.0) -> float:
        if key not in self._values:
            return default
        value = _leading_double(self._values[key])
        return default if value is None else value

    def get_bool(self, key, default=False) -> bool:
        if key not in self._values:
            return default
        return self._values[key] in ("true", "1")

    def get_string_array(self, key) -> List[str]:
        """Values of ``key.0``, ``key.1``, ... up to the first missing index."""
        result = []
        index = 0
        while (item := f"{key}.{index}") in self._values:
            result.append(self._values[item])
            index += 1
        return result

    def set_string(self, key, value) -> None:
        self._values[key] = str(value)

    def set_int(self, key, value) -> None:
        self._values[key] = str(int(value))

    def set_double(self, key, value) -> None:
        self._values[key] = f"{float(value):f}"

    def set_bool(self, key, value) -> None:
        self._values[key] = "true" if value else "false"

    def has(self, key) -> bool:
        return key in self._values


@functools.lru_cache(maxsize=None)
def get_config() -> Config:
    """Return the shared application configuration."""
    return Config()