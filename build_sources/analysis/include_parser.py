"""#include directive parsing."""

from __future__ import annotations

import re
from typing import Iterable, Iterator

from build_sources.models import IncludeDirective, IncludeScope

_INCLUDE_RE = re.compile(
    r'^\s*#\s*include\s+(?:"(?P<local>[^"<>]+)"|<(?P<search>[^"<>]+)>)'
)


def parse_include(line: str, line_number: int = 0) -> IncludeDirective | None:
    """Extract the include directive from a single line, if there is one."""
    m = _INCLUDE_RE.match(line)
    if not m:
        return None
    if m.group("local") is not None:
        return IncludeDirective(IncludeScope.LOCAL, m.group("local"), line_number)
    return IncludeDirective(IncludeScope.SEARCH, m.group("search"), line_number)


def iter_includes(lines: Iterable[str]) -> Iterator[IncludeDirective]:
    for number, line in enumerate(lines, start=1):
        directive = parse_include(line, number)
        if directive is not None:
            yield directive
