"""Line-level syntax helpers for block bodies: bullets and ``key: value``."""
from __future__ import annotations

import re

from toolcards.shared.config import ParserConfig

MAX_KEY_LENGTH = 40

_KEY_RE = re.compile(r"[A-Za-z_][\w .\-]*")


class LineSyntax:
    def __init__(self, config: ParserConfig | None = None) -> None:
        config = config or ParserConfig()
        self.separator = config.separator
        # Longest first so "--" wins over "-" when both are configured.
        self._markers = sorted(config.bullet_markers, key=len, reverse=True)

    def bullet_marker(self, line: str) -> str | None:
        """Return the marker *line* starts with, if it is a bullet line.

        A marker only counts when followed by whitespace or the end of
        the line, so ``-5`` stays a number.
        """
        for marker in self._markers:
            if line == marker:
                return marker
            if line.startswith(marker) and line[len(marker)].isspace():
                return marker
        return None

    def is_bullet(self, line: str) -> bool:
        return self.bullet_marker(line) is not None

    def strip_bullet(self, line: str) -> str:
        marker = self.bullet_marker(line)
        if marker is None:
            return line.strip()
        return line[len(marker):].strip()

    def split(self, line: str) -> tuple[str, str, bool]:
        """Split at the first separator: ``(left, right, found)``, both trimmed."""
        left, sep, right = line.partition(self.separator)
        return left.strip(), right.strip(), bool(sep)

    def looks_like_entry(self, line: str) -> bool:
        """True for a top-level ``key: value`` line.

        Bullets never qualify, the key must be a short plain name and
        ``scheme://`` URLs are not keys.
        """
        line = line.strip()
        if not line or self.is_bullet(line):
            return False
        left, sep, right = line.partition(self.separator)
        if not sep:
            return False
        key = left.strip()
        if not key or len(key) > MAX_KEY_LENGTH or not _KEY_RE.fullmatch(key):
            return False
        return not right.startswith("//")

    def starts_entry(self, line: str) -> bool:
        """True for any non-bullet line with a key before the separator.

        Looser than :meth:`looks_like_entry`: keys such as ``Total (AUD)``
        or ``2nd opinion`` start a new entry after a single-line value.
        """
        line = line.strip()
        if not line or self.is_bullet(line):
            return False
        left, sep, right = line.partition(self.separator)
        if not sep or not left.strip():
            return False
        return not right.startswith("//")
