"""In-memory org-style outline buffer.

Understands only what a notes file needs: ``#+KEY: value`` keywords before
the first heading, ``*`` headings, planning lines, ``:PROPERTIES:`` drawers
and body lines. Everything else is kept verbatim as body text so files
round-trip. Property names compare case-insensitively, as in org.

Headings are stored flat in document order; the tree is derived from levels
the way org derives it: a heading's parent is the nearest preceding heading
with a smaller level, and its subtree is the run of following headings with
a greater level.
"""

import re
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

from interleave.errors import OutlineError
from interleave.models.outline import Heading, InsertionPoint

_HEADING_RE = re.compile(r"^(\*+)(?:[ \t]+(.*?))?[ \t]*$")
_KEYWORD_RE = re.compile(r"^#\+(\w+):[ \t]*(.*?)[ \t]*$")
_PROPERTY_RE = re.compile(r"^[ \t]*:([^:\s]+):(?:[ \t]+(.*?))?[ \t]*$")
_PLANNING_RE = re.compile(r"^[ \t]*(?:SCHEDULED|DEADLINE|CLOSED):")
_DRAWER_START = ":PROPERTIES:"
_DRAWER_END = ":END:"


def _property_key(heading: Heading, name: str) -> str | None:
    """Spelling under which ``heading`` stores property ``name``, if it has it."""
    folded = name.casefold()
    for key in heading.properties:
        if key.casefold() == folded:
            return key
    return None


def _render_drawer(heading: Heading) -> list[str]:
    """Drawer lines in their original order, with current property values."""
    lines: list[str] = []
    written: set[str] = set()
    for raw in heading.drawer_lines or []:
        pm = _PROPERTY_RE.match(raw)
        if pm is None:
            lines.append(raw)
            continue
        key = pm.group(1)
        if key not in heading.properties or key in written:
            continue
        value = heading.properties[key]
        lines.append(raw if (pm.group(2) or "") == value else f":{key}: {value}".rstrip())
        written.add(key)
    lines.extend(
        f":{k}: {v}".rstrip() for k, v in heading.properties.items() if k not in written
    )
    return [_DRAWER_START, *lines, _DRAWER_END]


class OrgOutline:
    """An outline document with a point, a restriction and fold state."""

    def __init__(
        self,
        *,
        preamble: list[str] | None = None,
        headings: list[Heading] | None = None,
        path: Path | None = None,
    ) -> None:
        self.preamble: list[str] = preamble or []
        self.headings: list[Heading] = headings or []
        self.path = path
        self.point: Heading | None = None
        self.restriction: Heading | None = None
        # Heading the view was last scrolled to (recenter without narrowing)
        self.window_start: Heading | None = None
        # File contents as last read or written, to notice edits made elsewhere
        self._disk_text: str | None = None

    # --- Reading and writing ---

    @classmethod
    def parse(cls, text: str, *, path: Path | None = None) -> "OrgOutline":
        """Parse org text into an outline."""
        preamble: list[str] = []
        headings: list[Heading] = []
        in_drawer = False
        drawer: list[str] = []

        for line in text.splitlines():
            m = _HEADING_RE.match(line)
            if m:
                headings.append(Heading(level=len(m.group(1)), title=m.group(2) or ""))
                in_drawer = False
                continue
            if not headings:
                preamble.append(line)
                continue

            current = headings[-1]
            if in_drawer:
                if line.strip().upper() == _DRAWER_END:
                    in_drawer = False
                    continue
                drawer.append(line)
                pm = _PROPERTY_RE.match(line)
                if pm:
                    current.properties[pm.group(1)] = pm.group(2) or ""
                continue

            # Planning lines and the drawer only count right after the heading line
            if not current.body and current.drawer_lines is None:
                if _PLANNING_RE.match(line):
                    current.planning.append(line)
                    continue
                if line.strip().upper() == _DRAWER_START:
                    drawer = []
                    current.drawer_lines = drawer
                    in_drawer = True
                    continue
            current.body.append(line)

        return cls(preamble=preamble, headings=headings, path=path)

    @classmethod
    def load(cls, path: Path) -> "OrgOutline":
        """Read an outline from disk."""
        text = path.read_text(encoding="utf-8")
        outline = cls.parse(text, path=path)
        outline._disk_text = text
        return outline

    def render(self) -> str:
        """Serialize the outline back to org text."""
        lines = list(self.preamble)
        for h in self.headings:
            lines.append(f"{'*' * h.level} {h.title}".rstrip())
            lines.extend(h.planning)
            if h.properties or h.drawer_lines is not None:
                lines.extend(_render_drawer(h))
            lines.extend(h.body)
        return "\n".join(lines) + "\n" if lines else ""

    def changed_on_disk(self) -> bool:
        """Whether the file at ``path`` differs from what was last loaded or saved."""
        if self.path is None or self._disk_text is None:
            return False
        try:
            return self.path.read_text(encoding="utf-8") != self._disk_text
        except FileNotFoundError:
            return True

    def save(self, path: Path | None = None) -> Path:
        """Write the outline to ``path`` (default: where it was loaded from)."""
        target = path or self.path
        if target is None:
            msg = "Outline has no path to save to"
            raise OutlineError(msg)
        text = self.render()
        target.write_text(text, encoding="utf-8")
        self.path = target
        self._disk_text = text
        return target

    # --- File keywords and properties ---

    def file_keyword(self, name: str) -> str | None:
        for line in self.preamble:
            m = _KEYWORD_RE.match(line)
            if m and m.group(1).upper() == name.upper():
                return m.group(2)
        return None

    def set_file_keyword(self, name: str, value: str) -> None:
        new_line = f"#+{name}: {value}"
        insert_at = 0
        for i, line in enumerate(self.preamble):
            m = _KEYWORD_RE.match(line)
            if not m:
                break
            if m.group(1).upper() == name.upper():
                self.preamble[i] = new_line
                return
            insert_at = i + 1
        self.preamble.insert(insert_at, new_line)

    def get_property(self, heading: Heading, name: str, *, inherit: bool = False) -> str | None:
        """Return a property of a heading.

        With ``inherit``, the nearest ancestor carrying the property answers
        when the heading itself does not.
        """
        candidates = [heading, *self.ancestors(heading)] if inherit else [heading]
        for h in candidates:
            key = _property_key(h, name)
            if key is not None:
                return h.properties[key]
        return None

    def set_property(self, heading: Heading, name: str, value: str) -> None:
        self._index_of(heading)
        heading.properties[_property_key(heading, name) or name] = value

    # --- Structure ---

    def _index_of(self, heading: Heading) -> int:
        for i, h in enumerate(self.headings):
            if h is heading:
                return i
        msg = f"Heading {heading.title!r} is not part of this outline"
        raise OutlineError(msg)

    def goto(self, heading: Heading | None) -> None:
        if heading is not None:
            self._index_of(heading)
        self.point = heading

    def parent(self, heading: Heading) -> Heading | None:
        idx = self._index_of(heading)
        for h in reversed(self.headings[:idx]):
            if h.level < heading.level:
                return h
        return None

    def ancestors(self, heading: Heading) -> Iterator[Heading]:
        current = self.parent(heading)
        while current is not None:
            yield current
            current = self.parent(current)

    def subtree_end(self, heading: Heading) -> int:
        idx = self._index_of(heading)
        end = idx + 1
        while end < len(self.headings) and self.headings[end].level > heading.level:
            end += 1
        return end

    def subtree(self, heading: Heading) -> list[Heading]:
        return self.headings[self._index_of(heading) : self.subtree_end(heading)]

    def children(self, heading: Heading | None) -> list[Heading]:
        if heading is None:
            scope = self.headings
        else:
            scope = self.subtree(heading)[1:]
        # A direct child has no preceding heading of smaller level inside scope
        result: list[Heading] = []
        min_level = 0
        for h in scope:
            if not result or h.level <= min_level:
                result.append(h)
                min_level = h.level
        return result

    def promote(self, heading: Heading) -> None:
        self._index_of(heading)
        if heading.level <= 1:
            msg = f"Cannot promote top-level heading {heading.title!r}"
            raise OutlineError(msg)
        heading.level -= 1

    def demote(self, heading: Heading) -> None:
        self._index_of(heading)
        heading.level += 1

    def insert_heading(self, at: InsertionPoint, title: str = "") -> Heading:
        if not 0 <= at.index <= len(self.headings):
            msg = f"Insertion index {at.index} out of range"
            raise OutlineError(msg)
        heading = Heading(level=at.level, title=title)
        self.headings.insert(at.index, heading)
        self.point = heading
        return heading

    def sort_children(
        self,
        parent: Heading | None,
        key: Callable[[Heading], Any],
        *,
        reverse: bool = False,
    ) -> None:
        kids = self.children(parent)
        if not kids:
            msg = "Nothing to sort"
            raise OutlineError(msg)

        start = self._index_of(kids[0])
        end = self.subtree_end(kids[-1])
        blocks = [self.subtree(k) for k in kids]
        # sorted() is stable for reverse=True as well
        blocks.sort(key=lambda block: key(block[0]), reverse=reverse)
        self.headings[start:end] = [h for block in blocks for h in block]

    # --- Narrowing and visibility ---

    def narrow_to(self, heading: Heading) -> None:
        self._index_of(heading)
        self.restriction = heading
        if self.point is None or self.point not in self.subtree(heading):
            self.point = heading

    def widen(self) -> None:
        self.restriction = None

    def show_subtree(self, heading: Heading) -> None:
        for h in self.subtree(heading):
            h.folded = False

    def hide_drawers(self, heading: Heading) -> None:
        for h in self.subtree(heading):
            h.drawer_hidden = True

    def overview(self) -> None:
        for h in self.headings:
            h.folded = True
            h.drawer_hidden = True

    def recenter(self, heading: Heading) -> None:
        self._index_of(heading)
        self.point = heading
        self.window_start = heading

    def visible_headings(self) -> list[Heading]:
        """Headings inside the restriction that no folded ancestor hides."""
        scope = self.subtree(self.restriction) if self.restriction else self.headings
        visible: list[Heading] = []
        hidden_below: int | None = None
        for h in scope:
            if hidden_below is not None and h.level > hidden_below:
                continue
            hidden_below = h.level if h.folded else None
            visible.append(h)
        return visible
