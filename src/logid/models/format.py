"""Value types stored in the ID and location lists."""

from pydantic import BaseModel, ConfigDict, Field


class FormatDescriptor(BaseModel):
    """Static shape of one log statement.

    Attributes:
        type: Type/width tag such as "TRICE16" or "TRICE16_2" (JSON name "Type")
        strg: printf-style format string (JSON name "Strg")

    Equality ignores the case of the type tag, so "trice8" and "TRICE8"
    describe the same statement.

    Example:
        >>> FormatDescriptor(Type="Trice8", Strg="x=%d") == FormatDescriptor(Type="TRICE8", Strg="x=%d")
        True
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: str = Field(..., alias="Type", description="Type/width tag")
    strg: str = Field(..., alias="Strg", description="printf-style format string")

    def normalized(self) -> "FormatDescriptor":
        """Return a copy with the type tag uppercased."""
        return FormatDescriptor(type=self.type.upper(), strg=self.strg)

    def _key(self) -> tuple[str, str]:
        return (self.type.upper(), self.strg)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FormatDescriptor):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())


class LocationInfo(BaseModel):
    """Source location of an ID (JSON names "File" and "Line")."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    file: str = Field(..., alias="File", description="Source file path")
    line: int = Field(..., alias="Line", description="Line number in file")
