"""In-place updates of previously generated files.

Generated wiring files (``main.go``, the CRD ``kustomization.yaml``, the
controller ``suite_test.go``) carry marker comments such as
``// +kubebuilder:scaffold:imports``.  New statements are inserted directly
above their marker, at the marker's indentation, and only when an equivalent
statement is not already present in the block enclosing the marker, so
re-running a scaffold never duplicates wiring.  Everything outside the
inserted lines is preserved byte-for-byte.
"""

from __future__ import annotations

import textwrap
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from kubescaffold.errors import MarkerNotFoundError, WriteError


@dataclass(frozen=True)
class Insertion:
    """A code fragment to place above the line holding *marker*.

    Attributes:
        marker: Marker comment that anchors the insertion.
        code: Fragment to insert; may span several lines.
        equivalents: Alternative spellings that count as already present
            (for example an uncommented kustomize patch entry).
    """

    marker: str
    code: str
    equivalents: tuple[str, ...] = ()


def insert_code(content: str, insertions: Sequence[Insertion], path: str | Path = "<memory>") -> str:
    """Return *content* with every missing insertion applied.

    Raises:
        MarkerNotFoundError: If a marker is absent from *content*.
    """
    newline = "\r\n" if "\r\n" in content else "\n"
    lines = content.splitlines(keepends=True)

    for insertion in insertions:
        index = _find_marker(lines, insertion.marker)
        if index is None:
            raise MarkerNotFoundError(path, insertion.marker)

        region = lines[slice(*_enclosing_block(lines, index))]
        if any(_is_present(fragment, region) for fragment in (insertion.code, *insertion.equivalents)):
            continue

        marker_line = lines[index]
        indent = marker_line[: len(marker_line) - len(marker_line.lstrip())]
        block = [
            f"{indent}{line}{newline}" if line.strip() else newline
            for line in textwrap.dedent(insertion.code).strip("\n").split("\n")
        ]
        lines[index:index] = block

    return "".join(lines)


def update_file(path: str | Path, insertions: Sequence[Insertion]) -> bool:
    """Apply *insertions* to the file at *path*.

    Returns:
        ``True`` if the file was rewritten, ``False`` if every statement was
        already present.

    Raises:
        MarkerNotFoundError: If an expected marker is missing.
        WriteError: If the file cannot be read or written.
    """
    file_path = Path(path)
    try:
        original = file_path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise WriteError(file_path, f"unable to read file for update: {exc}") from exc

    updated = insert_code(original, insertions, file_path)
    if updated == original:
        return False

    try:
        file_path.write_bytes(updated.encode("utf-8"))
    except OSError as exc:
        raise WriteError(file_path, str(exc)) from exc
    return True


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _find_marker(lines: list[str], marker: str) -> int | None:
    for index, line in enumerate(lines):
        if marker in line:
            return index
    return None


def _indent_width(line: str) -> int:
    return len(line) - len(line.lstrip())


def _enclosing_block(lines: list[str], index: int) -> tuple[int, int]:
    """Return the line range of the block holding the marker at *index*.

    The block runs from the nearest less-indented line above the marker to
    the nearest less-indented line below it (both included).  A marker at
    column zero belongs to the whole file.
    """
    depth = _indent_width(lines[index])
    start, end = 0, len(lines)
    if depth == 0:
        return start, end
    for above in range(index - 1, -1, -1):
        if lines[above].strip() and _indent_width(lines[above]) < depth:
            start = above
            break
    for below in range(index + 1, len(lines)):
        if lines[below].strip() and _indent_width(lines[below]) < depth:
            end = below + 1
            break
    return start, end


def _significant(lines: Sequence[str]) -> list[str]:
    return [line.strip() for line in lines if line.strip()]


def _is_present(fragment: str, lines: list[str]) -> bool:
    """Whether the non-blank lines of *fragment* appear contiguously in *lines*."""
    needle = _significant(fragment.splitlines())
    if not needle:
        return True
    haystack = _significant(lines)
    width = len(needle)
    return any(
        haystack[start:start + width] == needle
        for start in range(len(haystack) - width + 1)
    )
