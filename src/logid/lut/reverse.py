"""Reverse index: format descriptor to the IDs bound to it.

Used to find an existing ID for a format string before allocating a new
one, and to report format strings that ended up with several IDs.
"""

from typing import Dict, List

from logid.lut.id_table import IDTable
from logid.models.format import FormatDescriptor

ReverseIndex = Dict[FormatDescriptor, List[int]]


def build_reverse_index(table: IDTable) -> ReverseIndex:
    """
    Invert table into descriptor -> IDs.

    Keys are normalized (uppercased type tag), so case variants of one
    descriptor share a bucket. Entries are visited in ascending ID order,
    so every ID list is ascending.

    Example:
        >>> table = IDTable({5: FormatDescriptor(Type="trice8", Strg="hi"),
        ...                  9: FormatDescriptor(Type="TRICE8", Strg="hi")})
        >>> build_reverse_index(table)[FormatDescriptor(Type="TRICE8", Strg="hi")]
        [5, 9]
    """
    index: ReverseIndex = {}
    for id_, descriptor in table.items():
        index.setdefault(descriptor.normalized(), []).append(id_)
    return index


def find_ids(index: ReverseIndex, descriptor: FormatDescriptor) -> List[int]:
    """Return the IDs bound to descriptor, empty if there are none."""
    return list(index.get(descriptor.normalized(), []))


def duplicates(index: ReverseIndex) -> ReverseIndex:
    """Return only the descriptors bound to more than one ID."""
    return {descriptor: ids for descriptor, ids in index.items() if len(ids) > 1}
