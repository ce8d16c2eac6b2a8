"""JSON-backed lookup table shared by the ID and location lists.

The on-disk format is a JSON object keyed by decimal ID strings:

{
	"1234": {...},
	...
}

Written tab-indented with keys in ascending numeric order so list files
diff cleanly under review.
"""

import json
import re
from pathlib import Path
from typing import Any, ClassVar, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from logid.services.exceptions import ListWriteError, ParseError
from logid.services.file_operations import atomic_write
from logid.utils.logging import get_logger

logger = get_logger(__name__)

# Reserved list path: never touches the file system, always an empty table
EMPTY_FILE = "emptyFile"

V = TypeVar("V", bound=BaseModel)

_DECIMAL_KEY = re.compile(r"0|-?[1-9]\d*")


def _unique_pairs(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise ValueError(f"duplicate key {key!r}")
        result[key] = value
    return result


def is_empty_file(path: Union[str, Path]) -> bool:
    """Check whether path is the reserved no-file sentinel."""
    return str(path) == EMPTY_FILE


class LookupTable(Generic[V]):
    """Mapping of integer ID to a pydantic value, loadable from and savable to JSON.

    Subclasses set `_adapter` to a TypeAdapter for Dict[int, value type].

    Thread safety: Not thread-safe. One table per invocation.
    """

    _adapter: ClassVar[TypeAdapter]

    def __init__(self, entries: Optional[Dict[int, V]] = None):
        self.entries: Dict[int, V] = dict(entries or {})

    @classmethod
    def load(cls, source: Union[bytes, str], path: str = "<bytes>"):
        """Create a table from a JSON document.

        Args:
            source: JSON text; empty input yields an empty table
            path: Name used in error messages

        Raises:
            ParseError: If source is not a JSON object of the expected shape
        """
        table = cls()
        table.from_json(source, path=path)
        return table

    def from_json(self, source: Union[bytes, str], path: str = "<bytes>") -> None:
        """Merge a JSON document into this table.

        Existing keys are overwritten, new keys extend the table.

        Raises:
            ParseError: If source is not a JSON object of the expected shape
        """
        if isinstance(source, bytes):
            try:
                source = source.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ParseError(path, f"List file is not UTF-8 ({e})") from e

        if not source.strip():
            return

        try:
            raw = json.loads(source, object_pairs_hook=_unique_pairs)
        except ValueError as e:
            raise ParseError(path, f"Malformed list file ({e})") from e

        if not isinstance(raw, dict):
            raise ParseError(path, "List file must contain a JSON object")

        # Canonical spelling only, so two keys never collapse into one ID
        for key in raw:
            if not _DECIMAL_KEY.fullmatch(key):
                raise ParseError(path, f"List file key {key!r} is not a canonical decimal ID")

        try:
            parsed = self._adapter.validate_python(raw)
        except ValidationError as e:
            raise ParseError(
                path, f"List file entries have the wrong shape ({e.error_count()} errors)"
            ) from e

        self.entries.update(parsed)

    def to_json(self) -> bytes:
        """Serialize as tab-indented JSON with keys in ascending numeric order."""
        document = {
            str(key): self.entries[key].model_dump(by_alias=True)
            for key in sorted(self.entries)
        }
        return json.dumps(document, indent="\t", ensure_ascii=False).encode("utf-8")

    def save_to_file(self, path: Union[str, Path]) -> None:
        """Write the table to path, replacing any existing file.

        Raises:
            ListWriteError: On any I/O failure
        """
        data = self.to_json()
        try:
            atomic_write(Path(path), data)
        except OSError as e:
            logger.error("list_write_failed", path=str(path), error=str(e))
            raise ListWriteError(str(path), f"Failed to write list file ({e})") from e
        logger.info("list_saved", path=str(path), count=len(self.entries))

    def add(self, key: int, value: V) -> None:
        """Insert or overwrite one entry."""
        self.entries[key] = value

    def get(self, key: int, default: Any = None) -> Optional[V]:
        return self.entries.get(key, default)

    def ids(self) -> List[int]:
        """Return all IDs in ascending order."""
        return sorted(self.entries)

    def items(self) -> List[Tuple[int, V]]:
        """Return (id, value) pairs in ascending ID order."""
        return [(key, self.entries[key]) for key in sorted(self.entries)]

    def __getitem__(self, key: int) -> V:
        return self.entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __iter__(self) -> Iterator[int]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LookupTable):
            return NotImplemented
        return type(self) is type(other) and self.entries == other.entries

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.entries!r})"
