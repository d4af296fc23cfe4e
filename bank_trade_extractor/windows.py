"""
Line splitting and anchor-driven context windows.

Each anchor line opens its own window; windows may overlap and the scan
for the next anchor continues right after the current anchor line.
"""

from typing import Iterator, List, Sequence


def split_lines(text: str) -> List[str]:
    """Split extracted text into trimmed, non-empty lines."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def anchor_indices(lines: Sequence[str], anchor: str) -> Iterator[int]:
    """Yield the index of every line containing the anchor substring."""
    for i, line in enumerate(lines):
        if anchor in line:
            yield i


def context_window(lines: Sequence[str], start: int, terminators: Sequence[str],
                   max_lines: int = 10) -> List[str]:
    """Return the anchor line plus up to max_lines following lines.

    Stops after the first following line that contains a terminator.
    """
    window = [lines[start]]
    for j in range(start + 1, min(start + 1 + max_lines, len(lines))):
        next_line = lines[j]
        window.append(next_line)
        if any(marker in next_line for marker in terminators):
            break
    return window


def iter_context_windows(lines: Sequence[str], anchor: str, terminators: Sequence[str],
                         max_lines: int = 10) -> Iterator[List[str]]:
    """Lazily produce one context window per anchor occurrence."""
    for index in anchor_indices(lines, anchor):
        yield context_window(lines, index, terminators, max_lines)
