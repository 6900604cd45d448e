"""Parsing ``git status --porcelain`` output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Shortest line that carries both state columns, the separator and a path
MIN_LINE_LENGTH = 3

# Offset of the path after "XY "
PATH_OFFSET = 3

RENAME_ARROW = " -> "

# Backslash escapes git uses inside a quoted path
QUOTED_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    '"': '"',
    "\\": "\\",
}


def unquote_path(path: str) -> str:
    """Undo git's C-style quoting of a single path.

    Porcelain v1 wraps a path in double quotes when it contains a space,
    a double quote, a backslash or a control character, and escapes those
    with backslashes. Octal escapes are byte values of the UTF-8 name.
    Unquoted paths are returned as-is.
    """
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path

    body = path[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        ch = body[i]
        if ch != "\\" or i + 1 == len(body):
            out += ch.encode("utf-8")
            i += 1
            continue

        nxt = body[i + 1]
        octal = body[i + 1:i + 4]
        if len(octal) == 3 and all(c in "01234567" for c in octal):
            out.append(int(octal, 8) & 0xFF)
            i += 4
        elif nxt in QUOTED_ESCAPES:
            out += QUOTED_ESCAPES[nxt].encode("utf-8")
            i += 2
        else:
            out += ("\\" + nxt).encode("utf-8")
            i += 2

    return out.decode("utf-8", errors="replace")

# Arguments used to request the status listing. quotepath=false keeps
# non-ASCII file names readable instead of octal-escaped; names with spaces,
# quotes or control characters are still quoted.
STATUS_ARGS = ["-c", "core.quotepath=false", "status", "--porcelain"]


@dataclass(frozen=True)
class FileStatusEntry:
    """One line of ``git status --porcelain``.

    ``index_state`` is the X column (staged), ``work_tree_state`` the Y
    column (unstaged).
    """

    index_state: str
    work_tree_state: str
    path: str

    @property
    def code(self) -> str:
        """Both state characters with surrounding whitespace removed."""
        return (self.index_state + self.work_tree_state).strip()

    @property
    def is_staged(self) -> bool:
        """Staged if the index column holds something other than ' ' or '?'."""
        return bool(self.index_state) and self.index_state not in (" ", "?")

    @property
    def is_untracked(self) -> bool:
        return self.index_state == "?" and self.work_tree_state == "?"

    @property
    def target_path(self) -> str:
        """Path to operate on, unquoted.

        Renames and copies are listed as ``old -> new``; operations should
        address the new name. ``path`` keeps the text exactly as listed.
        """
        if self.index_state in ("R", "C") and RENAME_ARROW in self.path:
            return unquote_path(self.path.split(RENAME_ARROW, 1)[1].strip())
        return unquote_path(self.path)


def parse_status(raw: Optional[str]) -> list[FileStatusEntry]:
    """Parse ``git status --porcelain`` output.

    Lines too short to hold a status are skipped. State characters are
    passed through unvalidated, and paths are only whitespace-trimmed.

    Args:
        raw: Output from ``git status --porcelain``.

    Returns:
        Entries in the order git listed them.
    """
    entries: list[FileStatusEntry] = []
    if not raw:
        return entries

    for line in raw.splitlines():
        if len(line) < MIN_LINE_LENGTH:
            continue

        entries.append(FileStatusEntry(
            index_state=line[0],
            work_tree_state=line[1],
            path=line[PATH_OFFSET:].strip(),
        ))

    return entries
