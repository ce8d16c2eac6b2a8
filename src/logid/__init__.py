"""logid - ID allocation and lookup tables for ID-tagged log format strings."""

__version__ = "0.1.0"
