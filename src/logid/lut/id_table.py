"""ID list: mapping of ID to format descriptor."""

from pathlib import Path
from typing import Dict, Optional, TextIO, Union

import click
from pydantic import TypeAdapter

from logid.lut.table import EMPTY_FILE, LookupTable, is_empty_file
from logid.models.format import FormatDescriptor
from logid.services.exceptions import IDListReadError, ParseError
from logid.services.file_operations import read_bytes
from logid.utils.logging import get_logger

logger = get_logger(__name__)

__all__ = ["EMPTY_FILE", "IDTable"]


class IDTable(LookupTable[FormatDescriptor]):
    """Every ID in use and the format descriptor it stands for.

    Before allocating a new ID the table must hold every ID used anywhere
    in the project, including IDs not yet written to disk. The allocator
    cannot detect a table that is missing entries.

    Example:
        >>> table = IDTable.load(b'{"10": {"Type": "TRICE16", "Strg": "x=%d"}}')
        >>> table[10].strg
        'x=%d'
    """

    _adapter = TypeAdapter(Dict[int, FormatDescriptor])

    @classmethod
    def load_from_file(
        cls,
        path: Union[str, Path],
        out: Optional[TextIO] = None,
    ) -> "IDTable":
        """
        Load the ID list from path.

        Args:
            path: ID list file, or EMPTY_FILE for an empty table
            out: Diagnostic writer (default stdout)

        Returns:
            Loaded IDTable

        Raises:
            IDListReadError: If the file is missing or unreadable
            ParseError: If the file content is malformed
        """
        if is_empty_file(path):
            return cls()

        try:
            data = read_bytes(path)
        except OSError as e:
            logger.error("id_list_read_failed", path=str(path), error=str(e))
            raise IDListReadError(str(path)) from e

        try:
            table = cls.load(data, path=str(path))
        except ParseError as e:
            logger.error("id_list_malformed", path=str(path), error=str(e))
            raise

        logger.info("id_list_loaded", path=str(path), count=len(table))
        click.echo(f"Read ID list file {path} with {len(table)} items.", file=out)
        return table
