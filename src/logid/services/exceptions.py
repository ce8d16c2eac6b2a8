"""Custom exceptions for logid services.

Library code raises these and never exits the process. The CLI decides
which of them terminate a run.
"""


class LookupTableError(Exception):
    """Base class for errors reading or writing an ID or location list.

    Attributes:
        path: Path to the list file involved
        message: Human-readable error message
    """

    def __init__(self, path: str, message: str):
        """Initialize LookupTableError.

        Args:
            path: Path to the list file involved
            message: Human-readable error message
        """
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class ParseError(LookupTableError):
    """Raised when a list file is not valid JSON or has the wrong shape."""

    def __init__(self, path: str, message: str = "Malformed list file"):
        super().__init__(path, message)


class IDListReadError(LookupTableError):
    """Raised when the ID list file cannot be read.

    Starting from an empty ID space when a populated list was expected
    would hand out IDs that are already in use, so this is never
    downgraded to an empty table.
    """

    def __init__(
        self,
        path: str,
        message: str = "Cannot read ID list file, maybe need to create an empty file first?",
    ):
        super().__init__(path, message)


class ListWriteError(LookupTableError):
    """Raised when writing a list file fails."""

    def __init__(self, path: str, message: str = "Failed to write list file"):
        super().__init__(path, message)


class AllocationError(Exception):
    """Base class for errors allocating a new ID.

    Attributes:
        id_min: Lower bound of the requested interval
        id_max: Upper bound of the requested interval
        used: Number of IDs in the table at allocation time
    """

    def __init__(self, message: str, id_min: int, id_max: int, used: int):
        self.id_min = id_min
        self.id_max = id_max
        self.used = used
        super().__init__(f"{message}: min={id_min}, max={id_max}, used={used}")


class InvalidIntervalError(AllocationError):
    """Raised when the interval upper bound is below its lower bound."""

    def __init__(self, id_min: int, id_max: int, used: int = 0):
        super().__init__("invalid ID interval", id_min, id_max, used)


class NoFreeIDError(AllocationError):
    """Raised when the interval has no unused ID left."""

    def __init__(self, id_min: int, id_max: int, used: int):
        super().__init__("no new ID possible", id_min, id_max, used)


class FormatStringError(ValueError):
    """Raised when the specifier count of a format string cannot be computed."""
