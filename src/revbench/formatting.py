"""Shared text formatting helpers for revbench.

Tables, section headers and number formatting used by the report
renderers and the CLI listing commands.
"""

from __future__ import annotations


def format_thousands(value: int) -> str:
    """Format an integer with ``,`` between groups of three digits.

    ``1234567`` becomes ``'1,234,567'``.
    """
    return f"{value:,}"


def format_table(
    headers: list[str],
    rows: list[list[str]],
    *,
    alignments: list[str] | None = None,
    indent: int = 2,
) -> str:
    """Format rows as an aligned plain-text table.

    Column widths are computed from the widest cell (header included).
    Columns marked ``'r'`` in *alignments* are right aligned, all others
    left aligned. A rule of ``─`` characters separates the header
    from the body.

    Args:
        headers: Column header strings.
        rows: List of rows, each a list of cell strings. Short rows are
            padded with empty cells.
        alignments: Per-column alignment, ``'l'`` or ``'r'``.
        indent: Number of leading spaces per line.

    Returns:
        The formatted table. Empty string if there are no headers.
    """
    if not headers:
        return ""

    ncols = len(headers)
    aligns = list(alignments or [])
    aligns += ["l"] * (ncols - len(aligns))

    body = [(list(row) + [""] * ncols)[:ncols] for row in rows]

    widths = [len(h) for h in headers]
    for row in body:
        for ci, cell in enumerate(row):
            widths[ci] = max(widths[ci], len(cell))

    def _line(cells: list[str]) -> str:
        parts = [
            cell.rjust(widths[ci]) if aligns[ci] == "r" else cell.ljust(widths[ci])
            for ci, cell in enumerate(cells)
        ]
        return (" " * indent + "  ".join(parts)).rstrip()

    lines = [_line(headers)]
    lines.append(" " * indent + "─" * (sum(widths) + 2 * (ncols - 1)))
    lines.extend(_line(row) for row in body)
    return "\n".join(lines)


def format_markdown_table(
    headers: list[str],
    rows: list[list[str]],
    *,
    alignments: list[str] | None = None,
) -> str:
    """Format rows as a GitHub-flavored markdown table."""
    aligns = list(alignments or [])
    aligns += ["l"] * (len(headers) - len(aligns))
    separators = ["---:" if a == "r" else "---" for a in aligns]

    lines = ["| " + " | ".join(headers) + " |"]
    lines.append("| " + " | ".join(separators) + " |")
    for row in rows:
        lines.append("| " + " | ".join(row) + " |")
    return "\n".join(lines)


def format_section_header(title: str, width: int = 60) -> str:
    """Format a section header: ``'─── Title ──...'``."""
    prefix = "─── "
    suffix_len = width - len(prefix) - len(title) - 1
    return prefix + title + " " + "─" * max(0, suffix_len)
