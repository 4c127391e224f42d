"""Bind dotted property keys onto Service Bus JMS settings.

Keys follow the relaxed style used by property files, so
``servicebus.prefetch-policy.queue-prefetch``,
``servicebus.prefetchPolicy.queuePrefetch`` and
``servicebus.prefetch_policy.queue_prefetch`` all bind the same field.

Usage:
    from servicebus_jms.config.properties import load_settings, read_properties

    settings = load_settings(read_properties("application.properties"))
    settings.validate_settings()
"""

import re
from collections.abc import Mapping
from pathlib import Path
from string import hexdigits
from types import UnionType
from typing import Any, Union, get_args, get_origin

from pydantic import BaseModel

from servicebus_jms.config.logging import get_logger
from servicebus_jms.config.settings import KEY_PREFIX, ServiceBusJmsSettings
from servicebus_jms.core.exceptions import ConfigurationError

log = get_logger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_WHITESPACE = " \t\f"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def normalize_key(segment: str) -> str:
    """Convert a kebab-case or camelCase key segment to snake_case."""
    return _CAMEL_BOUNDARY.sub("_", segment.strip()).replace("-", "_").lower()


def _nested_model(annotation: Any) -> type[BaseModel] | None:
    """Return the model class behind ``annotation``, unwrapping Optional."""
    if get_origin(annotation) in (Union, UnionType):
        for arg in get_args(annotation):
            model = _nested_model(arg)
            if model is not None:
                return model
        return None
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation
    return None


def _bind(tree: dict[str, Any], model: type[BaseModel], path: list[str], value: Any, key: str) -> None:
    name, rest = path[0], path[1:]
    field = model.model_fields.get(name)
    if field is None:
        raise ConfigurationError(f"'{key}' is not a known setting")

    if not rest:
        if isinstance(tree.get(name), dict):
            raise ConfigurationError(f"'{key}' conflicts with nested settings under it")
        tree[name] = value
        return

    nested = _nested_model(field.annotation)
    if nested is None:
        raise ConfigurationError(f"'{key}' is not a known setting")
    branch = tree.setdefault(name, {})
    if not isinstance(branch, dict):
        raise ConfigurationError(f"'{key}' conflicts with a scalar value for its parent")
    _bind(branch, nested, rest, value, key)


def to_settings_tree(properties: Mapping[str, Any], prefix: str = KEY_PREFIX) -> dict[str, Any]:
    """Group flat dotted keys under ``prefix`` into a nested dict.

    Keys outside ``prefix`` are skipped.

    Raises:
        ConfigurationError: If a key under ``prefix`` names no setting, or
            two spellings of a key name the same setting.
    """
    prefix_parts = [normalize_key(part) for part in prefix.split(".") if part]
    tree: dict[str, Any] = {}
    seen: dict[tuple[str, ...], str] = {}
    skipped = 0

    for key, value in properties.items():
        parts = [normalize_key(part) for part in key.split(".")]
        if parts[: len(prefix_parts)] != prefix_parts or len(parts) == len(prefix_parts):
            skipped += 1
            continue
        path = tuple(parts[len(prefix_parts) :])
        if path in seen:
            raise ConfigurationError(f"'{key}' duplicates '{seen[path]}'")
        seen[path] = key
        _bind(tree, ServiceBusJmsSettings, list(path), value, key)

    log.debug("servicebus_properties_bound", bound=len(properties) - skipped, skipped=skipped)
    return tree


def load_settings(
    properties: Mapping[str, Any],
    prefix: str = KEY_PREFIX,
    include_environment: bool = False,
) -> ServiceBusJmsSettings:
    """Build settings from flat property keys.

    By default the environment is not consulted. With
    ``include_environment`` the properties are layered over
    ``SERVICEBUS_*`` variables and ``.env``, properties winning.
    Validation is left to the caller, which should invoke
    ``validate_settings()`` once binding is done.

    Raises:
        ConfigurationError: If a key under ``prefix`` names no setting.
        pydantic.ValidationError: If a value has the wrong type.
    """
    tree = to_settings_tree(properties, prefix)
    if include_environment:
        return ServiceBusJmsSettings(**tree)
    return ServiceBusJmsSettings.model_validate(tree)


def _logical_lines(text: str) -> list[str]:
    lines: list[str] = []
    pending: str | None = None
    for raw in _LINE_BREAK.split(text):
        line = raw.lstrip(_WHITESPACE)
        if pending is None and (not line or line[0] in "#!"):
            continue
        # An odd run of trailing backslashes continues the line
        if (len(line) - len(line.rstrip("\\"))) % 2:
            pending = (pending or "") + line[:-1]
            continue
        lines.append((pending or "") + line)
        pending = None
    if pending:
        lines.append(pending)
    return lines


def _unescape(line: str, start: int, stop: str) -> tuple[str, int, int]:
    """Read from ``start`` up to the first unescaped character in ``stop``.

    Returns:
        The unescaped text, the index where reading stopped, and the
        length of the text up to and including its last escaped character.
    """
    out: list[str] = []
    escaped_len = 0
    i = start
    while i < len(line):
        char = line[i]
        if char != "\\":
            if char in stop:
                break
            out.append(char)
            i += 1
            continue

        i += 1
        if i == len(line):
            break
        char = line[i]
        if char == "u":
            digits = line[i + 1 : i + 5]
            if len(digits) != 4 or any(d not in hexdigits for d in digits):
                raise ConfigurationError("Malformed \\uxxxx escape in properties file")
            out.append(chr(int(digits, 16)))
            i += 5
        else:
            out.append(_ESCAPES.get(char, char))
            i += 1
        escaped_len = len(out)
    return "".join(out), i, escaped_len


def parse_properties(text: str) -> dict[str, str]:
    """Parse ``.properties`` text into a flat mapping.

    Follows ``java.util.Properties.load``: the key ends at the first
    unescaped ``=``, ``:`` or whitespace, ``#`` and ``!`` start comment
    lines, a trailing backslash continues the line, and ``\\=``, ``\\:``,
    ``\\uXXXX`` and the other escapes are undone in keys and values.
    Unescaped trailing whitespace is dropped from values. A later
    duplicate key replaces an earlier one.
    """
    properties: dict[str, str] = {}
    for line in _logical_lines(text):
        key, i, _ = _unescape(line, 0, "=:" + _WHITESPACE)
        while i < len(line) and line[i] in _WHITESPACE:
            i += 1
        if i < len(line) and line[i] in "=:":
            i += 1
            while i < len(line) and line[i] in _WHITESPACE:
                i += 1
        value, _, escaped_len = _unescape(line, i, "")
        while len(value) > escaped_len and value[-1] in _WHITESPACE:
            value = value[:-1]
        properties[key] = value
    return properties


def read_properties(path: str | Path) -> dict[str, str]:
    """Read a ``.properties`` file into a flat mapping.

    The file is decoded as ISO-8859-1, the ``java.util.Properties``
    default; other characters arrive through ``\\uXXXX`` escapes.

    Raises:
        ConfigurationError: If the file is missing or cannot be read.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Properties file not found: {path}")
    try:
        text = path.read_bytes().decode("latin-1")
    except OSError as e:
        raise ConfigurationError(f"Properties file could not be read: {path}: {e}") from e
    return parse_properties(text)
