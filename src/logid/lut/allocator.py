"""ID allocation inside a closed interval.

The delivered ID is usable as a key of the table but is not added to it.
Calling new_id twice without inserting the first result can return the
same value again.
"""

import random
from enum import Enum
from typing import AbstractSet, Optional, TextIO, Union

import click

from logid.lut.id_table import IDTable
from logid.models.format import FormatDescriptor
from logid.services.exceptions import InvalidIntervalError, NoFreeIDError
from logid.utils.logging import get_logger

logger = get_logger(__name__)

# Returned for an unknown search method; never a valid ID
NO_ID = 0


class IDMethod(str, Enum):
    """Search strategy for a new ID.

    - RANDOM: uniform draw, spreads IDs so independent branches rarely collide
    - UPWARD: smallest free ID, deterministic
    - DOWNWARD: largest free ID, deterministic
    """

    RANDOM = "random"
    UPWARD = "upward"
    DOWNWARD = "downward"


def parse_method(method: Union[IDMethod, str]) -> Optional[IDMethod]:
    """Return the IDMethod named by method, or None if there is none."""
    try:
        return IDMethod(method)
    except ValueError:
        return None


def random_id(
    used: AbstractSet[int],
    id_min: int,
    id_max: int,
    rng: Optional[random.Random] = None,
    out: Optional[TextIO] = None,
) -> int:
    """Draw uniformly from [id_min, id_max] until a value not in used turns up."""
    if not used:
        return id_min
    rng = rng or random.Random()
    candidate = rng.randint(id_min, id_max)
    while candidate in used:
        logger.debug("random_id_collision", id=candidate)
        click.echo(f"ID {candidate} used, next try...", file=out)
        candidate = rng.randint(id_min, id_max)
    return candidate


def upward_id(used: AbstractSet[int], id_min: int, id_max: int) -> int:
    """Return the smallest value in [id_min, id_max] not in used."""
    candidate = id_min
    while candidate in used:
        candidate += 1
    if candidate > id_max:
        raise NoFreeIDError(id_min, id_max, len(used))
    return candidate


def downward_id(used: AbstractSet[int], id_min: int, id_max: int) -> int:
    """Return the largest value in [id_min, id_max] not in used."""
    candidate = id_max
    while candidate in used:
        candidate -= 1
    if candidate < id_min:
        raise NoFreeIDError(id_min, id_max, len(used))
    return candidate


def new_id(
    table: IDTable,
    id_min: int,
    id_max: int,
    method: Union[IDMethod, str],
    out: Optional[TextIO] = None,
    rng: Optional[random.Random] = None,
    verbose: bool = False,
) -> int:
    """
    Get an ID inside [id_min, id_max] that is not a key of table.

    The table must already hold every ID used in the project, otherwise
    the result may collide with an ID used elsewhere.

    Args:
        table: All IDs currently in use
        id_min: Lower interval bound (inclusive)
        id_max: Upper interval bound (inclusive)
        method: "random", "upward" or "downward"
        out: Diagnostic writer (default stdout)
        rng: Random source for the random method
        verbose: Write the allocation parameters to out

    Returns:
        A free ID, or NO_ID if method is unknown

    Raises:
        InvalidIntervalError: If id_max < id_min
        NoFreeIDError: If no free ID is left in the interval
    """
    method_name = method.value if isinstance(method, IDMethod) else str(method)
    if verbose:
        click.echo(f"IDMin={id_min} IDMax={id_max} IDMethod={method_name}", file=out)

    strategy = parse_method(method_name)
    if strategy is None:
        logger.error("unknown_id_method", method=method_name)
        click.echo(f"ERROR: {method_name} is unknown ID search method.", file=out)
        return NO_ID

    if id_max < id_min:
        logger.error("invalid_id_interval", id_min=id_min, id_max=id_max)
        raise InvalidIntervalError(id_min, id_max, len(table))

    interval = id_max - id_min + 1
    free_ids = interval - len(table)
    if free_ids <= 0:
        logger.error("no_free_id", id_min=id_min, id_max=id_max, used=len(table))
        raise NoFreeIDError(id_min, id_max, len(table))

    if free_ids < interval >> 2:
        logger.warning("free_ids_low", free=free_ids, interval=interval)
        click.echo("WARNING: Less than 25% IDs free!", file=out)

    used = set(table)
    if strategy is IDMethod.RANDOM:
        result = random_id(used, id_min, id_max, rng=rng, out=out)
    elif strategy is IDMethod.UPWARD:
        result = upward_id(used, id_min, id_max)
    else:
        result = downward_id(used, id_min, id_max)

    logger.info("id_allocated", id=result, method=strategy.value, free=free_ids - 1)
    return result


def allocate_and_add(
    table: IDTable,
    descriptor: FormatDescriptor,
    id_min: int,
    id_max: int,
    method: Union[IDMethod, str],
    out: Optional[TextIO] = None,
    rng: Optional[random.Random] = None,
) -> int:
    """
    Allocate a new ID and insert it into table with descriptor.

    Returns:
        The new ID, or NO_ID (table unchanged) if method is unknown

    Raises:
        InvalidIntervalError: If id_max < id_min
        NoFreeIDError: If no free ID is left in the interval
    """
    if parse_method(method) is None:
        return new_id(table, id_min, id_max, method, out=out, rng=rng)
    result = new_id(table, id_min, id_max, method, out=out, rng=rng)
    table.add(result, descriptor)
    return result
