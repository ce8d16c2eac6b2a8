"""Format-specifier count reconciliation.

Type tags without a parameter count get the count of their format string
appended, for example:

    {10000: TRICE8_2 "hi %03u, %5x", 10001: TRICE16 "hi %03u, %5x"}
    {10000: TRICE8_2 "hi %03u, %5x", 10001: TRICE16_2 "hi %03u, %5x"}
"""

import re
from typing import Dict, Optional, TextIO

import click

from logid.lut.id_table import IDTable
from logid.services.exceptions import FormatStringError
from logid.utils.logging import get_logger

logger = get_logger(__name__)

# Largest parameter count a type tag can encode
MAX_PARAMETERS = 12

# %[flags][width][.precision][length]conversion
_SPECIFIER = re.compile(
    r"%[-+ #0]*(?:\*|\d+)?(?:\.(?:\*|\d+))?(?:hh|h|ll|l|L|j|z|t)?[diouxXeEfFgGaAcspnb]"
)


def format_specifier_count(fmt: str) -> int:
    """
    Count the printf conversions in fmt.

    "%%" is a literal percent sign and is not counted.

    Raises:
        FormatStringError: If a "%" does not start a valid conversion

    Example:
        >>> format_specifier_count("hi %03u, %5x, 100%%")
        2
    """
    count = 0
    pos = fmt.find("%")
    while pos != -1:
        if fmt.startswith("%%", pos):
            pos = fmt.find("%", pos + 2)
            continue
        match = _SPECIFIER.match(fmt, pos)
        if match is None:
            raise FormatStringError(f"invalid format specifier at offset {pos} in {fmt!r}")
        count += 1
        pos = fmt.find("%", match.end())
    return count


def has_specifier_count(type_tag: str) -> bool:
    """Check whether type_tag already encodes a parameter count.

    "TRICE16_2" carries an explicit count and "TRICE0" means no parameters.
    Width digits alone, as in "TRICE16", are not a count.
    """
    return "_" in type_tag or "0" in type_tag


def add_format_specifier_count(type_tag: str, n: int) -> str:
    """
    Append parameter count n to type_tag.

    Raises:
        FormatStringError: If n is outside 0..MAX_PARAMETERS
    """
    if not 0 <= n <= MAX_PARAMETERS:
        raise FormatStringError(
            f"unexpected parameter count {n} for {type_tag}, expected 0..{MAX_PARAMETERS}"
        )
    return f"{type_tag}_{n}"


def reconcile(table: IDTable, out: Optional[TextIO] = None) -> int:
    """
    Add the format specifier count to every type tag that lacks one.

    Entries whose format string cannot be counted are skipped with a
    warning; the rest of the table is still updated. Running it again
    changes nothing.

    Args:
        table: ID table, updated in place
        out: Diagnostic writer (default stdout)

    Returns:
        Number of rewritten entries
    """
    updates: Dict[int, str] = {}
    for id_, descriptor in table.items():
        if has_specifier_count(descriptor.type):
            continue
        try:
            n = format_specifier_count(descriptor.strg)
            updates[id_] = add_format_specifier_count(descriptor.type, n)
        except FormatStringError as e:
            logger.warning("format_count_skipped", id=id_, type=descriptor.type, error=str(e))
            click.echo(f"ID {id_} skipped: {e}", file=out)

    for id_, type_tag in updates.items():
        table.add(id_, table[id_].model_copy(update={"type": type_tag}))

    logger.info("format_counts_reconciled", updated=len(updates))
    return len(updates)
