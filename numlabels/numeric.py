"""
Numeric primitives for label formatting.

Normalizes numeric values from Python stdlib and third-party libraries into
plain floats (or None for missing), rounds to an accuracy step, and infers the
coarsest accuracy that still tells adjacent break values apart.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
import operator
import sys
from typing import Iterable

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import fmt_type, fmt_value


# Constants ------------------------------------------------------------------------------------------------------------

MAX_DIGITS = 20

# Gaps below this are numerical noise, not real distinctions between values
_NOISE_GAP = math.sqrt(sys.float_info.epsilon)

# Tolerance in decades when taking the order of magnitude of a gap
_LOG10_TOL = 1e-9


# Methods --------------------------------------------------------------------------------------------------------------

def std_float(value) -> float | None:
    """
    Convert a numeric-like value to a Python float, or None when missing.

    Used to normalize every element of a label input vector so that lists,
    NumPy arrays, pandas Series and Decimal collections are formatted alike.

    Parameters
    ----------
    value : various
        Value to convert. Supports Python int/float/None, Decimal, Fraction, and
        third-party scalars via __index__, .item() or __float__.

    Returns
    -------
    float
        Finite values, and ±inf (integers too large for a float overflow to ±inf).

    None
        For None, NaN, pandas.NA and numpy.ma.masked.

    Raises
    ------
    TypeError
        When the value is a bool or of an unsupported type.

    Examples
    --------
    >>> std_float(3)
    3.0
    >>> std_float(float("nan")) is None
    True
    >>> std_float(10 ** 400)
    inf
    >>> std_float("1")
    Traceback (most recent call last):
        ...
    TypeError: unsupported numeric type: <type: str>...
    """
    if value is None:
        return None

    if isinstance(value, bool):
        raise TypeError(f"boolean values not supported, got {value}")

    # Fast path for Python numerics
    if isinstance(value, (int, float)):
        return _to_float(value)

    # pandas.NA raises on __float__, detect it without importing pandas
    cls = type(value)
    cls_name = getattr(cls, "__name__", "")
    cls_module = getattr(cls, "__module__", "") or ""
    if cls_name == "NAType" and "pandas" in cls_module:
        return None

    # numpy.ma.masked, detected without importing numpy
    if cls_name == "MaskedConstant" and cls_module.startswith("numpy.ma"):
        return None

    # numpy.bool_ (named "bool" since NumPy 2)
    if cls_name in ("bool_", "bool") and cls_module == "numpy":
        return std_float(bool(value))

    # Priority 1: true integers (NumPy integer scalars)
    if hasattr(value, "__index__"):
        try:
            return _to_float(operator.index(value))
        except (TypeError, ValueError) as e:
            raise TypeError(f"cannot convert {fmt_type(value)} to int via __index__: {e}") from e

    # Priority 2: array scalars with .item()
    if hasattr(value, "item") and callable(value.item):
        try:
            result = value.item()
        except (TypeError, ValueError, AttributeError):
            result = None
        else:
            if isinstance(result, bool):
                raise TypeError(f"boolean values not supported (from .item()), got {value}")
            if isinstance(result, (int, float)):
                return _to_float(result)

    # Priority 3: Decimal, Fraction and other float-like types
    if hasattr(value, "__float__"):
        try:
            return _to_float(float(value))
        except (TypeError, ValueError) as e:
            raise TypeError(f"cannot convert {fmt_type(value)} to float: {e}") from e
        except OverflowError:
            return math.inf if value > 0 else -math.inf

    raise TypeError(
        f"unsupported numeric type: {fmt_type(value)}. "
        f"Expected int, float, None, or types implementing __index__, .item() or __float__ "
        f"(e.g., numpy scalars, Decimal, Fraction), got {fmt_value(value)}"
    )


def round_any(x: float | None, accuracy: float) -> float | None:
    """
    Round x to the nearest multiple of accuracy, ties away from zero.

    Missing and non-finite values are returned unchanged.

    Examples:
        >>> round_any(1.25, 0.5)
        1.5
        >>> round_any(-2.5, 1)
        -3.0
        >>> round_any(1234, 100)
        1200.0
    """
    if x is None or not math.isfinite(x):
        return x

    steps = abs(x) / accuracy
    if not math.isfinite(steps):
        return x

    rounded = math.floor(steps + 0.5) * accuracy
    return math.copysign(rounded, x)


def precision(values: Iterable[float | None]) -> float:
    """
    Infer the coarsest decimal accuracy that distinguishes all finite values.

    The accuracy is one order of magnitude finer than the smallest gap between
    sorted adjacent distinct values, coarsened by 10 when the last displayed digit
    would always be 0, and never coarser than 1.

    Args:
        values: Numbers to label, missing and non-finite values are ignored.

    Returns:
        Positive accuracy, e.g. 0.01 for two decimal places.

    Examples:
        >>> precision([1, 2, 3])
        1.0
        >>> precision([1.0, 1.1, 1.2])
        0.1
        >>> precision([0.001, 0.002])
        0.001
    """
    distinct = sorted({v for v in values if v is not None and math.isfinite(v)})
    if len(distinct) <= 1:
        return 1.0

    smallest_gap = min(b - a for a, b in zip(distinct, distinct[1:]))
    # Gaps between extreme finite values can overflow to inf
    if smallest_gap < _NOISE_GAP or not math.isfinite(smallest_gap):
        return 1.0

    magnitude = math.floor(math.log10(smallest_gap) + _LOG10_TOL)
    accuracy = 10.0 ** (magnitude - 1)

    # Reduce precision when the final digit is always 0
    if all(round_any(v / accuracy, 1) % 10 == 0 for v in distinct):
        accuracy *= 10

    return min(accuracy, 1.0)


def decimal_digits(accuracy: float) -> int:
    """
    Number of fractional digits to display for an accuracy, clamped to [0, 20].

    Examples:
        >>> decimal_digits(0.01)
        2
        >>> decimal_digits(1000)
        0
    """
    digits = -math.floor(math.log10(accuracy) + _LOG10_TOL)
    return max(0, min(MAX_DIGITS, digits))


# Private Methods ------------------------------------------------------------------------------------------------------

def _to_float(value: int | float) -> float | None:
    """Convert int/float to float, NaN becomes None and huge ints overflow to ±inf."""
    try:
        result = float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf
    if math.isnan(result):
        return None
    return result

