# -*- coding: utf-8 -*-
"""
Quote-aware CSV line evaluation.

Prepares a single CSV line for a plain comma split. Inside every quoted span
the first comma is replaced with a placeholder so the split does not break the
field apart; the quotes are then dropped. Values taken from the split must go
through unescape() before they are used as a class name or label.

Only single-level quoting is handled: escaped quotes inside quotes and quoted
fields spanning several lines are not supported.

Example:
    from ontocsv.ingestion.line_evaluator import evaluate, split_fields, unescape

    fields = split_fields(evaluate('"Istanbul, TR",Ankara'))
    # ['Istanbul~ TR', 'Ankara']
    unescape(fields[0])
    # 'Istanbul, TR'
"""
from typing import List, Optional

QUOTE = '"'
SEPARATOR = ","
PLACEHOLDER = "~"


def evaluate(line: Optional[str]) -> str:
    """
    Escape quoted commas and strip quotes from a CSV line.

    Quote occurrences are paired in order: the 1st, 3rd, 5th... open a span and
    the following occurrence closes it. An unmatched trailing quote opens
    nothing.

    Args:
        line: Raw line, may be None

    Returns:
        Line with one comma per quoted span replaced by PLACEHOLDER, all quotes
        removed and surrounding whitespace stripped

    Example:
        >>> evaluate('"1" "2,3" "4,5" "6,7,8,9"')
        '1 2~3 4~5 6~7,8,9'
    """
    if not line:
        return ""

    if QUOTE not in line:
        return line.strip()

    quotes = [i for i, char in enumerate(line) if char == QUOTE]
    chars = list(line)

    for opening, closing in zip(quotes[0::2], quotes[1::2]):
        comma = line.find(SEPARATOR, opening + 1, closing)
        if comma != -1:
            chars[comma] = PLACEHOLDER

    return "".join(chars).replace(QUOTE, "").strip()


def split_fields(evaluated: str) -> List[str]:
    """
    Split an evaluated line on commas.

    Trailing empty fields are dropped, so separators at the end of a line do
    not count as extra columns. An empty line has no fields.
    """
    fields = evaluated.split(SEPARATOR)
    while fields and fields[-1] == "":
        fields.pop()
    return fields


def unescape(value: str) -> str:
    """Turn placeholders back into the commas they replaced."""
    return value.replace(PLACEHOLDER, SEPARATOR)
