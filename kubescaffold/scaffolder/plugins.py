"""Post-processing plugins applied to every rendered file before it is written.

A plugin is any callable ``(path, content) -> content``.  Plugins run in the
order they are given to :class:`~kubescaffold.scaffolder.scaffold.Scaffold`;
each one sees the output of the previous one.  They must be deterministic
and must not keep state between files.
"""

from __future__ import annotations

import re
from collections.abc import Callable

Plugin = Callable[[str, str], str]


def normalize_whitespace(path: str, content: str) -> str:
    """Strip trailing whitespace, collapse runs of blank lines, end with one newline."""
    normalized = content.replace("\r\n", "\n").replace("\r", "\n")
    cleaned: list[str] = []
    previous_blank = False
    for line in normalized.split("\n"):
        stripped = line.rstrip()
        if not stripped:
            if previous_blank:
                continue
            previous_blank = True
        else:
            previous_blank = False
        cleaned.append(stripped)

    while cleaned and cleaned[-1] == "":
        cleaned.pop()
    return "\n".join(cleaned) + "\n"


class ImportPathRewriter:
    """Rewrites Go import paths that start with one module prefix to another.

    Useful when a project vendors its API types under a different module
    than the one recorded in the ``PROJECT`` file.  Only ``.go`` files are
    touched; only quoted import paths equal to *old* or below it match.
    """

    def __init__(self, old: str, new: str) -> None:
        if not old:
            raise ValueError("old import path must not be empty")
        self.old = old.rstrip("/")
        self.new = new.rstrip("/")
        self._pattern = re.compile(r'"' + re.escape(self.old) + r'(/[^"]*)?"')

    def __call__(self, path: str, content: str) -> str:
        if not path.endswith(".go"):
            return content
        return self._pattern.sub(lambda m: f'"{self.new}{m.group(1) or ""}"', content)

    def __repr__(self) -> str:
        return f"ImportPathRewriter({self.old!r}, {self.new!r})"
