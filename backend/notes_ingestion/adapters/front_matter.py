"""
Front matter extraction.

A daily note may open with a metadata block:

    ---
    wake-up: 07:15
    Meditation: 20
    ---

Only the first block is read. Its lines are split on the first colon so that
values such as clock times keep their own colons.
"""

import re

# Delimiter lines hold exactly three hyphens (trailing blanks tolerated)
_BLOCK_RE = re.compile(
    r'^---[ \t]*\r?\n(.*?)^---[ \t]*\r?$',
    re.MULTILINE | re.DOTALL,
)


def extract_block(text: str) -> list[str]:
    """
    Return the non-empty, stripped lines of the first metadata block.

    A note without a block yields an empty list.
    """
    match = _BLOCK_RE.search(text)
    if match is None:
        return []
    lines = (line.strip() for line in match.group(1).splitlines())
    return [line for line in lines if line]


def split_pairs(lines: list[str]) -> list[tuple[str, str]]:
    """Split "key: value" lines, dropping lines without a colon."""
    pairs = []
    for line in lines:
        key, sep, value = line.partition(':')
        if not sep:
            continue
        pairs.append((key.strip(), value.strip()))
    return pairs


def extract_pairs(text: str) -> list[tuple[str, str]]:
    """(key, value) pairs of a note's metadata block, in block order."""
    return split_pairs(extract_block(text))
