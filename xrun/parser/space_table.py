"""Parser for whitespace-aligned tables printed by CLIs such as kubectl or helm."""

from dataclasses import dataclass, field
from typing import List

TAB_REPLACEMENT = "  "


@dataclass
class Table:
    """Parsed table.

    Attributes:
        headers: Column names in display order
        rows: Cells of each data row, one per header
    """

    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)


@dataclass
class TableOutput:
    """Parsed table together with the lines it was parsed from.

    ``lines[0]`` is the header line, ``lines[i + 1]`` is the source of
    ``table.rows[i]``.
    """

    table: Table = field(default_factory=Table)
    lines: List[str] = field(default_factory=list)


class TableSpace:
    """Splits fixed-width tables using the column offsets of the header line.

    Columns are assumed to be separated by at least two spaces, so headers
    such as ``APP VERSION`` stay in one cell. Tables delimited by a single
    space, or outputs holding more than one table, are not supported.
    """

    def table_separated(self, text: str) -> TableOutput:
        """Parse ``text`` into headers and rows.

        Args:
            text: Raw command output

        Returns:
            TableOutput with the parsed table and the normalized source lines
        """
        out = TableOutput()
        lines = replace_tabs_with_spaces(text).splitlines()

        while lines and not lines[0].strip():
            lines.pop(0)
        while lines and not lines[-1].strip():
            lines.pop()

        if not lines:
            return out

        header_line = lines[0]
        separators = get_separators(header_line)
        out.lines.append(header_line)
        out.table.headers = split_into_cells(header_line, separators)

        for line in lines[1:]:
            out.lines.append(line)
            out.table.rows.append(split_into_cells(line, separators))

        return out


def replace_tabs_with_spaces(text: str) -> str:
    return text.replace("\t", TAB_REPLACEMENT)


def get_separators(line: str) -> List[int]:
    """Return the offsets at which a new header cell starts.

    An offset is a separator when it is the last space of a run of at least
    two spaces and is followed by a non-space character.
    """
    separators = []
    for idx in range(1, len(line) - 1):
        if not line[idx].isspace():
            continue
        if line[idx + 1].isspace():
            continue
        if not line[idx - 1].isspace():
            # single space inside a multi-word header, e.g. "APP VERSION"
            continue
        separators.append(idx)
    return separators


def split_into_cells(line: str, separators: List[int]) -> List[str]:
    """Cut ``line`` at ``separators`` and strip each cell.

    Always returns ``len(separators) + 1`` cells; offsets past the end of the
    line produce empty cells.
    """
    cells = []
    start = 0
    for end in [*separators, len(line)]:
        end = min(end, len(line))
        start = min(start, end)
        cells.append(line[start:end].strip())
        start = end
    return cells
