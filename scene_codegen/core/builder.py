"""
Line buffer used by every text emitter.

Keeps indentation in one place so markup and C# generators only
describe structure (open, close, line) instead of gluing whitespace.
"""

from typing import Iterable, List, Optional


class LineBuilder:
    """Ordered line buffer with indent tracking."""

    def __init__(self, indent_size: int = 4, use_tabs: bool = False, level: int = 0):
        """
        Initialize builder.

        Args:
            indent_size: Spaces per indent level (ignored with tabs)
            use_tabs: Indent with one tab per level
            level: Starting indent level
        """
        self.indent_size = max(1, int(indent_size))
        self.use_tabs = use_tabs
        self.level = max(0, level)
        self._lines: List[str] = []

    @property
    def unit(self) -> str:
        """Whitespace for a single indent level."""
        return "\t" if self.use_tabs else " " * self.indent_size

    def indent_text(self, level: Optional[int] = None) -> str:
        """Whitespace for ``level`` (defaults to the current level)."""
        return self.unit * (self.level if level is None else max(0, level))

    def line(self, text: str = "") -> "LineBuilder":
        """Append a line at the current indent. Empty text yields a blank line."""
        if text:
            self._lines.append(self.indent_text() + text)
        else:
            self._lines.append("")
        return self

    def lines(self, texts: Iterable[str]) -> "LineBuilder":
        """Append several lines at the current indent."""
        for text in texts:
            self.line(text)
        return self

    def blank(self) -> "LineBuilder":
        """Append a blank line."""
        self._lines.append("")
        return self

    def raw(self, text: str) -> "LineBuilder":
        """Append pre-indented text (may span lines) untouched."""
        self._lines.extend(text.split("\n"))
        return self

    def block(self, text: str) -> "LineBuilder":
        """Append multi-line text, re-indenting each non-empty line."""
        for part in text.split("\n"):
            self.line(part)
        return self

    def indent(self) -> "LineBuilder":
        self.level += 1
        return self

    def dedent(self) -> "LineBuilder":
        if self.level == 0:
            raise ValueError("Cannot dedent below level 0")
        self.level -= 1
        return self

    def open(self, text: str) -> "LineBuilder":
        """Append ``text`` then indent (e.g. an opening brace or tag)."""
        return self.line(text).indent()

    def close(self, text: str) -> "LineBuilder":
        """Dedent then append ``text``."""
        return self.dedent().line(text)

    def child(self) -> "LineBuilder":
        """Create an empty builder sharing settings and the current level."""
        return LineBuilder(self.indent_size, self.use_tabs, self.level)

    def extend(self, other: "LineBuilder") -> "LineBuilder":
        """Append all lines of another builder."""
        self._lines.extend(other._lines)
        return self

    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def render(self) -> str:
        """Join lines with newlines; trailing whitespace is stripped per line."""
        return "\n".join(line.rstrip() for line in self._lines)

    def __str__(self) -> str:
        return self.render()
