"""Location list: mapping of ID to source location.

Location information only annotates decoded output, so a missing file is
never an error.
"""

from pathlib import Path
from typing import Dict, Optional, TextIO, Union

import click
from pydantic import TypeAdapter

from logid.lut.table import LookupTable, is_empty_file
from logid.models.format import LocationInfo
from logid.services.file_operations import read_bytes
from logid.utils.logging import get_logger

logger = get_logger(__name__)


class LocationTable(LookupTable[LocationInfo]):
    """Where each ID is used in the source tree."""

    _adapter = TypeAdapter(Dict[int, LocationInfo])

    @classmethod
    def load_from_file(
        cls,
        path: Union[str, Path],
        out: Optional[TextIO] = None,
        verbose: bool = False,
    ) -> "LocationTable":
        """
        Load the location list from path.

        Args:
            path: Location list file, or EMPTY_FILE for an empty table
            out: Diagnostic writer (default stdout)
            verbose: Write a note when the file is missing

        Returns:
            Loaded LocationTable, empty if the file does not exist

        Raises:
            ParseError: If an existing file is malformed
        """
        if is_empty_file(path):
            return cls()

        try:
            data = read_bytes(path)
        except OSError as e:
            logger.warning("location_list_missing", path=str(path), error=str(e))
            if verbose:
                click.echo(f"File {path} not found, not showing location information", file=out)
            return cls()

        table = cls.load(data, path=str(path))
        logger.info("location_list_loaded", path=str(path), count=len(table))
        if verbose:
            click.echo(f"Read ID location information file {path} with {len(table)} items.", file=out)
        return table
