"""``${key}`` template substitution."""

from __future__ import annotations

import re
from typing import Iterable

from build_sources.models import TemplateError

_FORMAT_RE = re.compile(r"^(?P<key>\S+?)\s*(?:=\s*(?P<value>\S+)\s*)?$")
_PLACEHOLDER_RE = re.compile(r"\$\{[^}]+?\}")


def parse_formats(tokens: Iterable[str]) -> dict[str, str]:
    """Turn ``key[=value]`` tokens into a substitution table.

    A bare ``key`` maps to the empty string. Repeated keys accumulate,
    space-separated, in the order given.
    """
    formats: dict[str, str] = {}
    for token in tokens:
        m = _FORMAT_RE.match(token)
        if not m:
            raise TemplateError(f"invalid format argument: {token!r}")
        key = m.group("key")
        value = m.group("value") or ""
        if key in formats:
            formats[key] = f"{formats[key]} {value}"
        else:
            formats[key] = value
    return formats


def format_template(source: str, formats: dict[str, str]) -> str:
    result = source
    for key, value in formats.items():
        result = result.replace("${" + key + "}", value)
    # Unmatched placeholders are dropped
    return _PLACEHOLDER_RE.sub("", result)
