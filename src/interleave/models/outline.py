"""Domain models for outline documents."""

from dataclasses import dataclass, field
from enum import StrEnum


class Direction(StrEnum):
    NEXT = "next"
    PREVIOUS = "previous"


@dataclass(eq=False)
class Heading:
    """A single heading in an outline document.

    Headings compare by identity, so a Heading doubles as a location in the
    document it belongs to.
    """

    level: int
    title: str
    properties: dict[str, str] = field(default_factory=dict)
    # SCHEDULED:/DEADLINE:/CLOSED: lines between the heading and its drawer
    planning: list[str] = field(default_factory=list)
    # Raw lines of the property drawer as read, None when there was no drawer
    drawer_lines: list[str] | None = None
    body: list[str] = field(default_factory=list)
    folded: bool = False
    drawer_hidden: bool = False


@dataclass(frozen=True)
class InsertionPoint:
    """Where a new heading goes, and the level it gets when inserted there."""

    index: int
    level: int
