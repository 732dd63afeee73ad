"""
Text Diff Rendering

Line-based diff with intra-line emphasis, grouped into hunks with context.
Each rendered line is ``<old no><new no> |<sign><content>``.
"""

import difflib
import re
from typing import List, Optional, Sequence, Tuple

import click

SEPARATOR = "-" * 80

_TOKEN_RE = re.compile(r"\w+|\s+|[^\w\s]")

Segment = Tuple[bool, str]

STYLES = {
    "-": {"fg": "red"},
    "+": {"fg": "green"},
    " ": {"dim": True},
}


def _line_number(index: Optional[int]) -> str:
    if index is None:
        return "    "
    return f"{index + 1:<4}"


def _tokenize(line: str) -> List[str]:
    return _TOKEN_RE.findall(line)


def _inline_segments(old: str, new: str) -> Tuple[List[Segment], List[Segment]]:
    """Split a changed line pair into (emphasized, text) runs for each side."""
    old_tokens = _tokenize(old)
    new_tokens = _tokenize(new)
    matcher = difflib.SequenceMatcher(None, old_tokens, new_tokens, autojunk=False)

    old_segments: List[Segment] = []
    new_segments: List[Segment] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        changed = tag != "equal"
        if i2 > i1:
            old_segments.append((changed, "".join(old_tokens[i1:i2])))
        if j2 > j1:
            new_segments.append((changed, "".join(new_tokens[j1:j2])))
    return old_segments, new_segments


def _render(
    old_index: Optional[int],
    new_index: Optional[int],
    sign: str,
    segments: Sequence[Segment],
    color: bool,
) -> str:
    numbers = f"{_line_number(old_index)}{_line_number(new_index)}"
    if not color:
        content = "".join(text for _, text in segments)
        return f"{numbers} |{sign}{content}\n"

    style = STYLES[sign]
    parts = [click.style(numbers, dim=True), " |", click.style(sign, bold=True, **style)]
    for emphasized, text in segments:
        if emphasized:
            parts.append(click.style(text, underline=True, bg="black", **style))
        else:
            parts.append(click.style(text, **style))
    return "".join(parts) + "\n"


def _split_lines(text: str) -> List[str]:
    """Split on LF only; a trailing newline does not open an extra line."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def diff_text(text1: str, text2: str, context: int = 3, color: bool = False) -> str:
    """
    Render the differences between two texts.

    Args:
        text1: Old text
        text2: New text
        context: Unchanged lines kept around each change
        color: Emit ANSI styling (changed spans underlined)

    Returns:
        Rendered diff; empty when the texts are identical
    """
    lines1 = _split_lines(text1)
    lines2 = _split_lines(text2)
    matcher = difflib.SequenceMatcher(None, lines1, lines2, autojunk=False)

    output: List[str] = []
    for idx, group in enumerate(matcher.get_grouped_opcodes(context)):
        if idx > 0:
            output.append((click.style(SEPARATOR, dim=True) if color else SEPARATOR) + "\n")

        for tag, i1, i2, j1, j2 in group:
            if tag == "equal":
                for offset in range(i2 - i1):
                    output.append(
                        _render(i1 + offset, j1 + offset, " ", [(False, lines1[i1 + offset])], color)
                    )
                continue

            old_block = lines1[i1:i2]
            new_block = lines2[j1:j2]
            old_segments: List[List[Segment]] = [[(False, line)] for line in old_block]
            new_segments: List[List[Segment]] = [[(False, line)] for line in new_block]

            if tag == "replace":
                for pos, (old, new) in enumerate(zip(old_block, new_block)):
                    old_segments[pos], new_segments[pos] = _inline_segments(old, new)

            for offset, segments in enumerate(old_segments):
                output.append(_render(i1 + offset, None, "-", segments, color))
            for offset, segments in enumerate(new_segments):
                output.append(_render(None, j1 + offset, "+", segments, color))

    return "".join(output)
