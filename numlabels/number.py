"""
Numeric label formatting for axis breaks and legend values.

Turns a vector of numbers into a vector of labels of the same length: values are
rounded to an accuracy (inferred from the gaps between values unless given),
optionally rescaled into magnitude buckets such as K/M/B, grouped by thousands,
and decorated with prefix, suffix and sign styling.

The main entry points are number() for one-shot formatting and label_number(),
which validates the configuration once and returns a reusable labelling function.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
import warnings
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum, unique
from numbers import Real
from typing import Any, Callable, Literal

# Local ----------------------------------------------------------------------------------------------------------------
from .numeric import decimal_digits, precision, round_any, std_float
from .scale_cut import ScaleCut, scale_cut as cut_scale
from .sentinels import UNSET, UnsetType
from .utils import ConfigError, fmt_type, fmt_value


# @formatter:off

class FormatConf:
    MINUS_SIGN = "−"
    INF_TOKEN = "Inf"
    BIG_MARK = " "
    DECIMAL_MARK = "."

# @formatter:on

Labels = list[str | None] | dict[Any, str | None]


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class StylePositive(StrEnum):
    """
    Display style of positive numbers.

    Attributes:
        NONE (str) : No change - 1
        PLUS (str) : Preceded by a plus sign - +1
    """
    NONE = "none"
    PLUS = "plus"


@unique
class StyleNegative(StrEnum):
    """
    Display style of negative numbers.

    Attributes:
        HYPHEN (str) : Preceded by a standard hyphen - -1
        MINUS (str)  : Preceded by the Unicode minus sign U+2212 which aligns with the bar of + - −1
        PARENS (str) : Wrapped in parentheses - (1)
    """
    HYPHEN = "hyphen"
    MINUS = "minus"
    PARENS = "parens"


@dataclass(frozen=True)
class FormatConfig:
    """
    Validated, immutable configuration of the number formatter.

    String styles are coerced to StylePositive/StyleNegative and scale_cut to
    ScaleCut, so an invalid configuration fails here, before any value is formatted.

    Attributes:
        accuracy: Step to round to, e.g. 0.01 for 2 decimal places. None or "auto"
            infers the minimal accuracy that tells adjacent values apart. Applied to
            rescaled data.
        scale: Positive factor applied before formatting, e.g. 1e-3 to show thousands.
        prefix: Text before the number. Applied before sign styling, so "$" gives -$1 and ($1).
        suffix: Text after the number.
        big_mark: Separator between every 3 integer digits.
        decimal_mark: Decimal point character.
        style_positive: Display style of positive numbers.
        style_negative: Display style of negative numbers.
        scale_cut: Magnitude buckets to rescale values into, e.g. cut_short_scale().
        trim: If False, numbers sharing a number of decimals are right-justified
            to a common width.
        inf_token: Label of infinite values, before sign styling.

    Raises:
        ConfigError: If any field has an invalid value.
    """

    accuracy: float | Literal["auto"] | None = None
    scale: float = 1
    prefix: str = ""
    suffix: str = ""
    big_mark: str = FormatConf.BIG_MARK
    decimal_mark: str = FormatConf.DECIMAL_MARK
    style_positive: StylePositive | str = StylePositive.NONE
    style_negative: StyleNegative | str = StyleNegative.HYPHEN
    scale_cut: ScaleCut | Mapping[str, float] | None = None
    trim: bool = True
    inf_token: str = FormatConf.INF_TOKEN

    def __post_init__(self):
        object.__setattr__(self, 'accuracy', _parse_accuracy(self.accuracy))
        object.__setattr__(self, 'scale', _parse_scale(self.scale))
        object.__setattr__(self, 'style_positive', _parse_style(self.style_positive, StylePositive, "style_positive"))
        object.__setattr__(self, 'style_negative', _parse_style(self.style_negative, StyleNegative, "style_negative"))

        if self.scale_cut is not None and not isinstance(self.scale_cut, ScaleCut):
            object.__setattr__(self, 'scale_cut', ScaleCut(self.scale_cut))

        for name in ("prefix", "suffix", "big_mark", "decimal_mark", "inf_token"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ConfigError(f"{name} must be a str, got {fmt_value(value)}")

        if not isinstance(self.trim, bool):
            raise ConfigError(f"trim must be a bool, got {fmt_value(self.trim)}")


# Methods --------------------------------------------------------------------------------------------------------------

def format_number(x, config: FormatConfig) -> Labels:
    """
    Format numbers into labels according to a validated configuration.

    Args:
        x: Iterable of numeric-like values, or a mapping (or pandas Series) of
            name to value. None, NaN, pandas.NA and numpy.ma.masked are missing.
        config: Formatter configuration.

    Returns:
        A list of labels, or a dict with the keys of a mapping input. Missing values
        give None, infinite values give config.inf_token with sign styling.

    Raises:
        TypeError: If x is not iterable or contains non-numeric values.
    """
    keys, values = _as_vector(x)
    n = len(values)
    if n == 0:
        return {} if keys is not None else []

    if config.scale_cut is not None:
        cut = cut_scale(
            values,
            breaks=config.scale_cut,
            scale=config.scale,
            accuracy=config.accuracy,
            suffix=config.suffix,
        )
        scales, suffixes, accuracies = cut.scale, cut.suffix, cut.accuracy
    else:
        accuracy = config.accuracy
        if accuracy is None:
            accuracy = precision(v * config.scale for v in values if v is not None)
        scales = (config.scale,) * n
        suffixes = (config.suffix,) * n
        accuracies = (accuracy,) * n

    signs = [0] * n
    numbers: list[str | None] = [None] * n
    digits: list[int] = [0] * n

    for i, (value, scale, accuracy) in enumerate(zip(values, scales, accuracies)):
        if value is None:
            continue
        if math.isinf(value):
            signs[i] = _sign(value)
            continue

        rounded = round_any(value, accuracy / scale)
        signs[i] = _sign(rounded)
        digits[i] = decimal_digits(accuracy)
        numbers[i] = _render(
            abs(rounded) * scale,
            digits[i],
            big_mark=config.big_mark,
            decimal_mark=config.decimal_mark,
        )

    if not config.trim:
        _justify(numbers, digits)

    labels: list[str | None] = []
    for value, sign, number_str, suffix in zip(values, signs, numbers, suffixes):
        if value is None:
            labels.append(None)
            continue

        if number_str is None:
            label = config.inf_token
        else:
            label = f"{config.prefix}{number_str}{suffix}"

        labels.append(_style_sign(label, sign, config))

    if keys is not None:
        return dict(zip(keys, labels))
    return labels


def number(
        x,
        accuracy: float | Literal["auto"] | None = None,
        scale: float = 1,
        prefix: str = "",
        suffix: str = "",
        big_mark: str = FormatConf.BIG_MARK,
        decimal_mark: str = FormatConf.DECIMAL_MARK,
        style_positive: StylePositive | str = StylePositive.NONE,
        style_negative: StyleNegative | str = StyleNegative.HYPHEN,
        scale_cut: ScaleCut | Mapping[str, float] | None = None,
        trim: bool = True,
) -> Labels:
    """
    Format numbers in decimal notation, never scientific.

    Low-level formatter behind every labelling function. See FormatConfig for the
    meaning of the arguments.

    Examples:
        >>> number([-1e6, 1e6])
        ['-1 000 000', '1 000 000']
        >>> number([0, 1e6], scale_cut=cut_short_scale())
        ['0', '1M']
        >>> number([-1000, 1000], style_positive="plus", style_negative="minus")
        ['−1 000', '+1 000']
        >>> number([-5, 5], style_negative="parens")
        ['(5)', '5']
        >>> number({"low": 0.5, "high": 1.25}, prefix="$")
        {'low': '$0.50', 'high': '$1.25'}

    Raises:
        ConfigError: If the configuration is invalid.
        TypeError: If x contains non-numeric values.
    """
    config = FormatConfig(
        accuracy=accuracy,
        scale=scale,
        prefix=prefix,
        suffix=suffix,
        big_mark=big_mark,
        decimal_mark=decimal_mark,
        style_positive=style_positive,
        style_negative=style_negative,
        scale_cut=scale_cut,
        trim=trim,
    )
    return format_number(x, config)


def label_number(
        accuracy: float | Literal["auto"] | None = None,
        scale: float = 1,
        prefix: str = "",
        suffix: str = "",
        big_mark: str = FormatConf.BIG_MARK,
        decimal_mark: str = FormatConf.DECIMAL_MARK,
        style_positive: StylePositive | str = StylePositive.NONE,
        style_negative: StyleNegative | str = StyleNegative.HYPHEN,
        scale_cut: ScaleCut | Mapping[str, float] | None = None,
        trim: bool = True,
) -> Callable[[Any], Labels]:
    """
    Create a labelling function for numbers in decimal format, e.g. 0.12 or 1 234.

    The configuration is validated and frozen here, so an invalid style fails when the
    labeller is created rather than when a plot is rendered.

    Returns:
        A function taking a vector x and returning one label per element.

    Examples:
        >>> labeller = label_number(scale_cut=cut_short_scale())
        >>> labeller([1e3, 2e6, 3e9])
        ['1K', '2M', '3B']
        >>> labeller([1.5e6, 2.5e6])
        ['1.5M', '2.5M']
        >>> label_number(suffix="°C")([0, 100])
        ['0°C', '100°C']
    """
    config = FormatConfig(
        accuracy=accuracy,
        scale=scale,
        prefix=prefix,
        suffix=suffix,
        big_mark=big_mark,
        decimal_mark=decimal_mark,
        style_positive=style_positive,
        style_negative=style_negative,
        scale_cut=scale_cut,
        trim=trim,
    )

    def labeller(x) -> Labels:
        return format_number(x, config)

    return labeller


def label_comma(
        accuracy: float | Literal["auto"] | None = None,
        scale: float = 1,
        prefix: str = "",
        suffix: str = "",
        big_mark: str = ",",
        decimal_mark: str = FormatConf.DECIMAL_MARK,
        trim: bool = True,
        digits: int | UnsetType = UNSET,
        **kwargs,
) -> Callable[[Any], Labels]:
    """
    Create a labelling function inserting a comma every three digits, e.g. 1,234.

    Same as label_number() with big_mark="," by default. Extra keyword arguments such as
    style_negative or scale_cut are passed on to label_number().

    Args:
        digits: Deprecated and ignored, use accuracy instead.
    """
    if digits is not UNSET:
        _warn_digits("label_comma")
    return label_number(
        accuracy=accuracy,
        scale=scale,
        prefix=prefix,
        suffix=suffix,
        big_mark=big_mark,
        decimal_mark=decimal_mark,
        trim=trim,
        **kwargs,
    )


def comma(
        x,
        accuracy: float | Literal["auto"] | None = None,
        scale: float = 1,
        prefix: str = "",
        suffix: str = "",
        big_mark: str = ",",
        decimal_mark: str = FormatConf.DECIMAL_MARK,
        trim: bool = True,
        digits: int | UnsetType = UNSET,
        **kwargs,
) -> Labels:
    """
    Format numbers with a comma every three digits, one-shot form of label_comma().

    Examples:
        >>> comma([1234567.891, 2e6])
        ['1,234,568', '2,000,000']
    """
    if digits is not UNSET:
        _warn_digits("comma")
    return number(
        x,
        accuracy=accuracy,
        scale=scale,
        prefix=prefix,
        suffix=suffix,
        big_mark=big_mark,
        decimal_mark=decimal_mark,
        trim=trim,
        **kwargs,
    )


# Private Methods ------------------------------------------------------------------------------------------------------

def _as_vector(x) -> tuple[list | None, list[float | None]]:
    """Split input into (keys or None, normalized values)."""
    if isinstance(x, (str, bytes)):
        raise TypeError(f"x must be an iterable of numbers, got {fmt_value(x)}")

    if isinstance(x, Mapping) or callable(getattr(x, "items", None)):
        keys = []
        values = []
        for key, value in x.items():
            keys.append(key)
            values.append(std_float(value))
        return keys, values

    if not isinstance(x, Iterable):
        raise TypeError(f"x must be an iterable of numbers, got {fmt_type(x)}")

    return None, [std_float(value) for value in x]


def _parse_accuracy(accuracy) -> float | None:
    if accuracy is None or accuracy == "auto":
        return None
    if isinstance(accuracy, bool) or not isinstance(accuracy, Real):
        raise ConfigError(f"accuracy must be a positive number, None or 'auto', got {fmt_value(accuracy)}")
    if not math.isfinite(accuracy) or accuracy <= 0:
        raise ConfigError(f"accuracy must be a positive finite number, got {fmt_value(accuracy)}")
    return accuracy


def _parse_scale(scale) -> float:
    if isinstance(scale, bool) or not isinstance(scale, Real):
        raise ConfigError(f"scale must be a positive number, got {fmt_value(scale)}")
    if not math.isfinite(scale) or scale <= 0:
        raise ConfigError(f"scale must be a positive finite number, got {fmt_value(scale)}")
    return scale


def _parse_style(value, enum_cls: type[StrEnum], name: str) -> StrEnum:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ConfigError(f"Invalid {name} {fmt_value(value)}. Allowed: {allowed}") from None


def _render(value: float, digits: int, big_mark: str, decimal_mark: str) -> str:
    """Fixed-point representation with exactly `digits` decimals and grouped thousands."""
    text = f"{value:,.{digits}f}"
    whole, _, fraction = text.partition(".")
    whole = whole.replace(",", big_mark)
    if fraction:
        return f"{whole}{decimal_mark}{fraction}"
    return whole


def _justify(numbers: list[str | None], digits: list[int]) -> None:
    """Right-justify in place the numbers sharing a number of decimals to a common width."""
    widths: dict[int, int] = {}
    for number_str, n_digits in zip(numbers, digits):
        if number_str is not None:
            widths[n_digits] = max(widths.get(n_digits, 0), len(number_str))

    for i, (number_str, n_digits) in enumerate(zip(numbers, digits)):
        if number_str is not None:
            numbers[i] = number_str.rjust(widths[n_digits])


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def _style_sign(label: str, sign: int, config: FormatConfig) -> str:
    if sign < 0:
        if config.style_negative == StyleNegative.HYPHEN:
            return f"-{label}"
        if config.style_negative == StyleNegative.MINUS:
            return f"{FormatConf.MINUS_SIGN}{label}"
        return f"({label})"

    if sign > 0 and config.style_positive == StylePositive.PLUS:
        return f"+{label}"

    return label


def _warn_digits(func_name: str) -> None:
    warnings.warn(
        f"{func_name}(digits) is deprecated, use {func_name}(accuracy) instead",
        DeprecationWarning,
        stacklevel=3,
    )
