"""Comparator predicates used by checks and attachments.

Values crossing the driver transport may arrive stringified (``"4"``,
``"true"``), so equality and ordering accept a numeric or boolean string in
place of the number or boolean it spells. A predicate never raises: anything
that cannot be compared counts as a mismatch.

Argument order follows the call sites. Checks call ``comparator(actual,
expected)``; attachments call ``comparator(expected, actual)``, which is why the
ordering predicates read "``actual`` is above ``bound``" with the bound first.
"""

import logging
from numbers import Number
from typing import Any, Sequence

logger = logging.getLogger(__name__)


def _as_number(value: Any) -> float:
    """Coerce a transported scalar to a number for ordering.

    Raises:
        TypeError: If value is a bool or not number-like
        ValueError: If value is a string that does not spell a number
    """
    if isinstance(value, bool):
        raise TypeError("booleans are not ordered")
    if isinstance(value, Number):
        return value
    if isinstance(value, str):
        return float(value)
    raise TypeError(f"cannot order {type(value).__name__}")


def shallow_equals(a: Any, b: Any) -> bool:
    """Loose equality across the transport boundary."""
    if a == b:
        return True

    if isinstance(a, str) == isinstance(b, str):
        return False

    text, other = (a, b) if isinstance(a, str) else (b, a)
    if isinstance(other, bool):
        return text == ("true" if other else "false")
    if isinstance(other, Number):
        try:
            return float(text) == other
        except ValueError:
            return False
    return False


def shallow_unequals(a: Any, b: Any) -> bool:
    return not shallow_equals(a, b)


def between(bounds: Sequence[Any], value: Any) -> bool:
    """Inclusive range test, ``bounds`` is ``[low, high]``."""
    try:
        low, high = _as_number(bounds[0]), _as_number(bounds[1])
        return low <= _as_number(value) <= high
    except (TypeError, ValueError, IndexError, KeyError) as e:
        logger.debug(f"between({bounds!r}, {value!r}) not comparable: {e}")
        return False


def greater_than(bound: Any, value: Any) -> bool:
    try:
        return _as_number(value) > _as_number(bound)
    except (TypeError, ValueError) as e:
        logger.debug(f"greater_than({bound!r}, {value!r}) not comparable: {e}")
        return False


def greater_than_equal(bound: Any, value: Any) -> bool:
    # Strict comparison against bound - 1; exact for integer counts only.
    try:
        return greater_than(_as_number(bound) - 1, value)
    except (TypeError, ValueError):
        return False


def lower_than(bound: Any, value: Any) -> bool:
    try:
        return _as_number(value) < _as_number(bound)
    except (TypeError, ValueError) as e:
        logger.debug(f"lower_than({bound!r}, {value!r}) not comparable: {e}")
        return False


def lower_than_equal(bound: Any, value: Any) -> bool:
    # Strict comparison against bound + 1; exact for integer counts only.
    try:
        return lower_than(_as_number(bound) + 1, value)
    except (TypeError, ValueError):
        return False


def truthy(value: Any, expected: Any = None) -> bool:
    """True for ``True`` or the transported string ``"true"``."""
    return value is True or value == "true"


def falsy(value: Any, expected: Any = None) -> bool:
    """True for ``False`` or the transported string ``"false"``."""
    return value is False or value == "false"
