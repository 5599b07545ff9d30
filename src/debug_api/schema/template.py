"""Path template tokenizer.

Turns a template such as ``/stats/dump/{db}/{table}`` into a sequence of
literal and placeholder segments once, when the endpoint is defined, so
that request building never has to re-parse the template.
"""

import re
from dataclasses import dataclass

from debug_api.errors import TemplateError

_NAME = re.compile(r"\w+")


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Placeholder:
    name: str


Segment = Literal | Placeholder


def parse_template(path: str) -> tuple[Segment, ...]:
    """Split a path template into literal and placeholder segments."""
    segments: list[Segment] = []
    pos = 0
    while pos < len(path):
        start = path.find("{", pos)
        stray = path.find("}", pos)
        if stray != -1 and (start == -1 or stray < start):
            raise TemplateError(f"unexpected '}}' at offset {stray} in {path!r}")
        if start == -1:
            segments.append(Literal(path[pos:]))
            break

        if start > pos:
            segments.append(Literal(path[pos:start]))

        end = path.find("}", start + 1)
        if end == -1:
            raise TemplateError(f"unclosed '{{' at offset {start} in {path!r}")
        name = path[start + 1:end]
        if not _NAME.fullmatch(name):
            raise TemplateError(f"invalid placeholder {{{name}}} in {path!r}")
        segments.append(Placeholder(name))
        pos = end + 1

    return tuple(segments)


def placeholder_names(segments: tuple[Segment, ...]) -> list[str]:
    """Distinct placeholder names in order of first appearance."""
    names: list[str] = []
    for seg in segments:
        if isinstance(seg, Placeholder) and seg.name not in names:
            names.append(seg.name)
    return names
