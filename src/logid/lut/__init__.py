"""Lookup tables, ID allocation and table maintenance."""

from logid.lut.allocator import NO_ID, IDMethod, allocate_and_add, new_id
from logid.lut.id_table import IDTable
from logid.lut.location_table import LocationTable
from logid.lut.reconcile import reconcile
from logid.lut.reverse import build_reverse_index, duplicates, find_ids
from logid.lut.table import EMPTY_FILE

__all__ = [
    "EMPTY_FILE",
    "NO_ID",
    "IDMethod",
    "IDTable",
    "LocationTable",
    "allocate_and_add",
    "build_reverse_index",
    "duplicates",
    "find_ids",
    "new_id",
    "reconcile",
]
