#
# Numlabels Scale Cut Tables
#

# Standard library -----------------------------------------------------------------------------------------------------
import bisect
import math
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from numbers import Real
from typing import overload

# Local ----------------------------------------------------------------------------------------------------------------
from .numeric import precision
from .utils import ConfigError, fmt_type, fmt_value


# @formatter:off

# Power-of-ten prefixes of the International System of Units (SI).
# Irregular prefixes (hecto, deca, deci, centi) are not stored since they
# rarely appear in scientific usage. Micro uses the micro sign U+00B5.
si_prefixes = {
    -24: "y", -21: "z", -18: "a", -15: "f", -12: "p", -9: "n", -6: "µ", -3: "m",
    0: "",
    3: "k", 6: "M", 9: "G", 12: "T", 15: "P", 18: "E", 21: "Z", 24: "Y",
}

valid_si_exponents = tuple(si_prefixes.keys())
# @formatter:on


# Classes --------------------------------------------------------------------------------------------------------------

class ScaleCut(Sequence[tuple[str, float]]):
    """
    Ordered table of magnitude buckets as (label, threshold) pairs.

    Bucket i covers absolute values in [threshold_i, threshold_i+1); the top bucket
    is open-ended. Values in bucket i are divided by threshold_i and get label_i as
    suffix, except the zero bucket which is never rescaled.

    Thresholds are sorted on construction and must be non-negative, distinct, not
    missing, and start at exactly 0. Labels may repeat.

    Accepts a mapping of label to threshold, any object with an items() method
    (such as a pandas Series), or an iterable of (label, threshold) pairs.

    Examples:
        >>> cut = ScaleCut({"": 0, "K": 1e3, "M": 1e6})
        >>> cut.labels
        ('', 'K', 'M')
        >>> cut.find(25_000)
        1

    Raises:
        ConfigError: If the table is empty, unlabeled or has invalid thresholds.
    """

    __slots__ = ("_labels", "_thresholds")

    def __init__(self, cuts: "Mapping[str, float] | Iterable[tuple[str, float]] | ScaleCut") -> None:
        pairs = _scale_cut_pairs(cuts)
        pairs.sort(key=lambda pair: pair[1])

        thresholds = tuple(threshold for _, threshold in pairs)
        if thresholds[0] != 0:
            raise ConfigError(
                f"Smallest value of scale_cut must be zero, got {thresholds[0]:g}"
            )
        for lower, upper in zip(thresholds, thresholds[1:]):
            if lower == upper:
                raise ConfigError(f"scale_cut values must be unique, got {lower:g} twice")

        self._labels = tuple(label for label, _ in pairs)
        self._thresholds = thresholds

    # ----- Sequence required methods -----

    @overload
    def __getitem__(self, index: int) -> tuple[str, float]:
        ...

    @overload
    def __getitem__(self, index: slice) -> tuple[tuple[str, float], ...]:
        ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return tuple(zip(self._labels[index], self._thresholds[index]))
        return self._labels[index], self._thresholds[index]

    def __len__(self) -> int:
        return len(self._thresholds)

    def __iter__(self) -> Iterator[tuple[str, float]]:
        return iter(zip(self._labels, self._thresholds))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScaleCut):
            return NotImplemented
        return self._labels == other._labels and self._thresholds == other._thresholds

    def __hash__(self) -> int:
        return hash((self._labels, self._thresholds))

    def __repr__(self) -> str:
        items = ", ".join(f"{label!r}: {threshold:g}" for label, threshold in self)
        return f"ScaleCut({{{items}}})"

    # ----- Bucket lookup -----

    @property
    def labels(self) -> tuple[str, ...]:
        """Bucket labels in ascending threshold order."""
        return self._labels

    @property
    def thresholds(self) -> tuple[float, ...]:
        """Bucket lower bounds in ascending order, the first one is 0."""
        return self._thresholds

    def find(self, magnitude: float | None) -> int:
        """
        Index of the half-open bucket [t_i, t_i+1) containing magnitude.

        Missing, NaN, negative and infinite magnitudes fall back to the bucket
        with the smallest threshold.
        """
        if magnitude is None or not math.isfinite(magnitude) or magnitude < 0:
            return 0
        return bisect.bisect_right(self._thresholds, magnitude) - 1

    def divisor(self, index: int) -> float:
        """Divisor applied to values in bucket index, 1 for the zero bucket."""
        threshold = self._thresholds[index]
        return threshold if threshold != 0 else 1.0


@dataclass(frozen=True)
class ScaleCutResult:
    """
    Per-element outcome of scale-cut bucketing.

    Attributes:
        scale: Effective multiplicative scale of each element.
        suffix: Bucket label plus the configured suffix of each element.
        accuracy: Rounding accuracy of each element, on the rescaled values.
    """

    scale: tuple[float, ...]
    suffix: tuple[str, ...]
    accuracy: tuple[float, ...]


# Methods --------------------------------------------------------------------------------------------------------------

def scale_cut(
        x: Sequence[float | None],
        breaks: "ScaleCut | Mapping[str, float] | Iterable[tuple[str, float]]",
        scale: float = 1,
        accuracy: float | None = None,
        suffix: str = "",
) -> ScaleCutResult:
    """
    Assign each value a magnitude bucket with its own scale, suffix and accuracy.

    Every element is placed in the bucket containing abs(x * scale). Its effective
    scale becomes scale / threshold, so 25 000 with the short scale table is shown
    as 25 with suffix "K". Exact zeros, the zero bucket, and divisions that are not
    finite keep the original scale.

    Args:
        x: Normalized values, None for missing.
        breaks: Bucket table, coerced to ScaleCut.
        scale: Scale applied before bucketing.
        accuracy: Accuracy on rescaled values. If None, inferred with precision()
            separately for each group of elements sharing an effective scale.
        suffix: Appended after the bucket label.

    Returns:
        ScaleCutResult with one entry per element of x.

    Raises:
        ConfigError: If breaks is not a valid scale-cut table.

    Examples:
        >>> result = scale_cut([0, 2_500, 1e6], cut_short_scale())
        >>> result.suffix
        ('', 'K', 'M')
        >>> result.scale
        (1, 0.001, 1e-06)
    """
    table = breaks if isinstance(breaks, ScaleCut) else ScaleCut(breaks)

    scales = []
    suffixes = []
    for value in x:
        magnitude = None if value is None else abs(value * scale)
        index = table.find(magnitude)

        effective = scale / table.divisor(index)
        if not math.isfinite(effective) or value == 0:
            effective = scale

        scales.append(effective)
        suffixes.append(table.labels[index] + suffix)

    if accuracy is not None:
        accuracies = [accuracy] * len(scales)
    else:
        # One inferred accuracy per distinct effective scale
        groups: dict[float, list[float | None]] = {}
        for value, effective in zip(x, scales):
            groups.setdefault(effective, []).append(None if value is None else value * effective)
        group_accuracy = {effective: precision(values) for effective, values in groups.items()}
        accuracies = [group_accuracy[effective] for effective in scales]

    return ScaleCutResult(
        scale=tuple(scales),
        suffix=tuple(suffixes),
        accuracy=tuple(accuracies),
    )


def cut_short_scale(space: bool = False) -> ScaleCut:
    """
    Short scale table: [10³, 10⁶) = K, [10⁶, 10⁹) = M, [10⁹, 10¹²) = B, [10¹², ∞) = T.

    Args:
        space: Prepend a space to every label, e.g. "1 K" instead of "1K".
    """
    return _spaced({"": 0, "K": 1e3, "M": 1e6, "B": 1e9, "T": 1e12}, space)


def cut_long_scale(space: bool = False) -> ScaleCut:
    """
    Long scale table: [10³, 10⁶) = K, [10⁶, 10¹²) = M, [10¹², 10¹⁸) = B, [10¹⁸, ∞) = T.

    Args:
        space: Prepend a space to every label.
    """
    return _spaced({"": 0, "K": 1e3, "M": 1e6, "B": 1e12, "T": 1e18}, space)


def cut_si(unit: str, space: bool = True) -> ScaleCut:
    """
    SI prefix table for a unit, from yocto (10⁻²⁴) to yotta (10²⁴).

    Zero and 10⁰ are both labeled with the bare unit. Every label starts with a
    space unless space=False.

    Args:
        unit: SI unit abbreviation, e.g. "g" or "m".
        space: Separate the number from the prefixed unit with a space.

    Examples:
        >>> cut_si("g")[:3]
        ((' g', 0.0), (' yg', 1e-24), (' zg', 1e-21))
    """
    if not isinstance(unit, str):
        raise ConfigError(f"unit must be a str, got {fmt_type(unit)}")

    lead = " " if space else ""
    pairs = [(f"{lead}{unit}", 0.0)]
    pairs.extend((f"{lead}{prefix}{unit}", float(f"1e{exp}")) for exp, prefix in si_prefixes.items())
    return ScaleCut(pairs)


# Private Methods ------------------------------------------------------------------------------------------------------

def _spaced(cuts: dict[str, float], space: bool) -> ScaleCut:
    if space:
        cuts = {f" {label}": threshold for label, threshold in cuts.items()}
    return ScaleCut(cuts)


def _scale_cut_pairs(cuts) -> list[tuple[str, float]]:
    """Validate a labeled threshold collection and return it as a list of (label, float) pairs."""
    if isinstance(cuts, ScaleCut):
        return list(cuts)

    if isinstance(cuts, (str, bytes)) or isinstance(cuts, Real):
        raise ConfigError(
            f"scale_cut must be a labeled set of numeric thresholds, got {fmt_value(cuts)}"
        )

    if isinstance(cuts, Mapping) or callable(getattr(cuts, "items", None)):
        raw = list(cuts.items())
    elif isinstance(cuts, Iterable):
        raw = list(cuts)
    else:
        raise ConfigError(
            f"scale_cut must be a labeled set of numeric thresholds, got {fmt_type(cuts)}"
        )

    if not raw:
        raise ConfigError("scale_cut must not be empty")

    pairs = []
    for item in raw:
        if isinstance(item, (str, bytes)) or not isinstance(item, Sequence) or len(item) != 2:
            raise ConfigError(
                f"scale_cut must be labeled: expected (label, threshold) pairs, got {fmt_value(item)}"
            )
        label, threshold = item
        if not isinstance(label, str):
            raise ConfigError(f"scale_cut labels must be str, got {fmt_value(label)}")
        pairs.append((label, _threshold_value(threshold)))

    return pairs


def _threshold_value(threshold) -> float:
    if threshold is None:
        raise ConfigError("scale_cut values must not be missing")
    if isinstance(threshold, bool) or not isinstance(threshold, (Real, Decimal)):
        raise ConfigError(f"scale_cut values must be numeric, got {fmt_value(threshold)}")

    value = float(threshold)
    if math.isnan(value):
        raise ConfigError("scale_cut values must not be missing")
    if math.isinf(value) or value < 0:
        raise ConfigError(f"scale_cut values must be finite and non-negative, got {fmt_value(threshold)}")
    return value


# Module Sanity Checks -------------------------------------------------------------------------------------------------

# Ensure the SI exponents are the regular powers of 1000.
if valid_si_exponents != tuple(range(-24, 25, 3)):
    raise AssertionError(
        "Configuration Error: si_prefixes must cover every power of 1000 from 10^-24 to 10^24."
    )
