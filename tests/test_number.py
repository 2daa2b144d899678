#
# Numlabels - Number Formatting Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import dataclasses
import math
from decimal import Decimal

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from numlabels.number import (
    FormatConf, FormatConfig, StyleNegative, StylePositive,
    comma, format_number, label_comma, label_number, number,
)
from numlabels.scale_cut import ScaleCut, cut_long_scale, cut_short_scale, cut_si
from numlabels.utils import ConfigError


# Tests ----------------------------------------------------------------------------------------------------------------

class TestNumberScenarios:
    """Reference scenarios for axis labels."""

    def test_big_mark_default_space(self):
        """Default big mark is a space, precision infers whole units."""
        assert number([-1e6, 1e6]) == ["-1 000 000", "1 000 000"]

    def test_short_scale_cut(self):
        """Zero stays unscaled, 1e6 becomes 1M."""
        assert number([0, 1e6], scale_cut=cut_short_scale()) == ["0", "1M"]

    def test_plus_and_minus_styles(self):
        """Unicode minus sign for negatives, plus sign for positives."""
        labels = number([-1000, 1000], style_positive="plus", style_negative="minus")
        assert labels == ["−1 000", "+1 000"]

    def test_parens_style(self):
        """Parentheses wrap the magnitude, no sign glyph."""
        assert number([-5, 5], style_negative="parens") == ["(5)", "5"]


class TestNumberFormatting:

    @pytest.mark.parametrize(
        "x, kwargs, expected",
        [
            pytest.param([0, 0.25, 0.5], {}, ["0.00", "0.25", "0.50"], id="inferred-hundredths"),
            pytest.param([0, 0.5, 1], {}, ["0.0", "0.5", "1.0"], id="inferred-tenths"),
            pytest.param([1.0, 1.1, 1.2], {}, ["1.0", "1.1", "1.2"], id="inferred-tenths-float-noise"),
            pytest.param([1234.567], {"accuracy": 0.1}, ["1 234.6"], id="explicit-accuracy"),
            pytest.param([1234.567], {"accuracy": "auto"}, ["1 235"], id="auto-accuracy"),
            pytest.param([0.123], {"accuracy": 0.01, "scale": 100, "suffix": "%"}, ["12.30%"], id="scale-percent"),
            pytest.param([0, 1e6], {"scale": 1e-3}, ["0", "1 000"], id="scale-thousands"),
            pytest.param([32, 212], {"suffix": "°F"}, ["32°F", "212°F"], id="suffix"),
            pytest.param([-1, 1], {"prefix": "$"}, ["-$1", "$1"], id="prefix-hyphen"),
            pytest.param([-1, 1], {"prefix": "$", "style_negative": "parens"}, ["($1)", "$1"], id="prefix-parens"),
            pytest.param(
                [1234567.5], {"accuracy": 0.1, "big_mark": ".", "decimal_mark": ","}, ["1.234.567,5"],
                id="european-marks",
            ),
            pytest.param([1e9], {"big_mark": ""}, ["1000000000"], id="no-big-mark"),
            pytest.param([1], {"accuracy": 1e-3}, ["1.000"], id="trailing-zeros-kept"),
        ],
    )
    def test_number(self, x, kwargs, expected):
        assert number(x, **kwargs) == expected

    def test_zero_never_decorated(self):
        """Zero gets no sign decoration regardless of style."""
        assert number([-1, 0, 1], style_positive="plus") == ["-1", "0", "+1"]
        assert number([-1, 0, 1], style_negative="parens") == ["(1)", "0", "1"]

    def test_sign_from_rounded_value(self):
        """Values rounding to zero lose their sign."""
        assert number([-0.4, 5], accuracy=1) == ["0", "5"]

    def test_round_half_away_from_zero(self):
        assert number([0.5, 1.5, 2.5, -2.5], accuracy=1) == ["1", "2", "3", "-3"]

    def test_enum_styles(self):
        labels = number([-2, 2], style_positive=StylePositive.PLUS, style_negative=StyleNegative.MINUS)
        assert labels == [f"{FormatConf.MINUS_SIGN}2", "+2"]

    def test_trim_false_justifies(self):
        """Right-justify numbers to a common width when trim=False."""
        assert number([1, 10, 100], trim=False) == ["  1", " 10", "100"]

    def test_trim_false_per_decimals_group(self):
        """Only numbers sharing decimals are padded together."""
        labels = number([1, 10, 1_500, 2_500], scale_cut=cut_short_scale(), trim=False)
        assert labels == [" 1", "10", "1.5K", "2.5K"]


class TestNumberMissingAndInfinite:

    def test_mirror_missing_and_infinite(self):
        """Missing input gives None, infinite input gives the infinity token."""
        labels = number([1, None, math.nan, math.inf, -math.inf])
        assert labels == ["1", None, None, "Inf", "-Inf"]

    @pytest.mark.parametrize(
        "style_negative, expected",
        [
            pytest.param("hyphen", "-Inf", id="hyphen"),
            pytest.param("minus", "−Inf", id="minus"),
            pytest.param("parens", "(Inf)", id="parens"),
        ],
    )
    def test_negative_infinity_styled(self, style_negative, expected):
        assert number([-math.inf, 1], style_negative=style_negative)[0] == expected

    def test_positive_infinity_plus(self):
        assert number([math.inf], style_positive="plus") == ["+Inf"]

    def test_infinity_skips_prefix_and_suffix(self):
        assert number([math.inf, 1], prefix="$", suffix="K") == ["Inf", "$1K"]

    def test_custom_inf_token(self):
        config = FormatConfig(inf_token="∞")
        assert format_number([-math.inf, 2], config) == ["-∞", "2"]

    def test_all_missing(self):
        assert number([None, math.nan]) == [None, None]

    def test_extreme_finite_values(self):
        """Values whose gap overflows to inf still format at whole units."""
        labels = number([-1e308, 1e308])
        assert len(labels) == 2
        assert labels[1].startswith("100 000 000")
        assert labels[0] == "-" + labels[1]

    def test_extreme_finite_values_scale_cut(self):
        labels = number([-1e308, 1e308], scale_cut=cut_short_scale())
        assert len(labels) == 2
        assert all(label.endswith("T") for label in labels)

    @pytest.mark.parametrize(
        "x",
        [
            pytest.param([0.001, 0.002, None], id="small"),
            pytest.param([-5e6, 0, 5e6, math.inf], id="large"),
            pytest.param([1, 1, 1], id="constant"),
            pytest.param([Decimal("1.5"), 2, 2.5], id="mixed-types"),
        ],
    )
    def test_length_preserved(self, x):
        labels = number(x)
        assert len(labels) == len(x)
        for value, label in zip(x, labels):
            assert (label is None) == (value is None)


class TestNumberContainers:

    def test_empty(self):
        assert number([]) == []
        assert number({}) == {}

    def test_mapping_keys_preserved(self):
        """Names on elements are preserved in the output."""
        labels = number({"low": 0.5, "mid": None, "high": 1.25}, prefix="$")
        assert labels == {"low": "$0.50", "mid": None, "high": "$1.25"}
        assert list(labels) == ["low", "mid", "high"]

    def test_generator_input(self):
        assert number(v * 10 for v in range(3)) == ["0", "10", "20"]

    def test_tuple_input(self):
        assert number((1, 2)) == ["1", "2"]

    @pytest.mark.parametrize(
        "x",
        [
            pytest.param("123", id="str"),
            pytest.param(b"123", id="bytes"),
            pytest.param(5, id="scalar"),
        ],
    )
    def test_invalid_container(self, x):
        with pytest.raises(TypeError, match=r"iterable of numbers"):
            number(x)

    def test_non_numeric_element(self):
        with pytest.raises(TypeError, match=r"unsupported numeric type"):
            number([1, "2"])

    def test_bool_element(self):
        with pytest.raises(TypeError, match=r"boolean values not supported"):
            number([1, True])


class TestNumberScaleCut:

    def test_log_breaks_short_scale(self, log_breaks):
        labels = number(log_breaks, scale_cut=cut_short_scale())
        assert labels == ["1", "10", "100", "1K", "10K", "100K", "1M", "10M", "100M", "1B"]

    def test_long_scale(self):
        assert number([5e9, 5e12], scale_cut=cut_long_scale()) == ["5 000M", "5B"]

    def test_space(self):
        assert number([0, 2e3], scale_cut=cut_short_scale(space=True)) == ["0 ", "2 K"]

    def test_per_bucket_accuracy(self):
        """Each bucket infers its own accuracy."""
        labels = number([1_000, 1_500, 2e6, 3e6], scale_cut=cut_short_scale())
        assert labels == ["1.0K", "1.5K", "2M", "3M"]

    def test_explicit_accuracy_on_rescaled_values(self):
        labels = number([1_234, 5_678_000], scale_cut=cut_short_scale(), accuracy=0.1)
        assert labels == ["1.2K", "5.7M"]

    def test_suffix_after_bucket_label(self):
        labels = number([1_200, 2.4e6], scale_cut=cut_short_scale(), suffix=" USD", prefix="$")
        assert labels == ["$1K USD", "$2M USD"]

    def test_negative_values(self):
        labels = number([-3e6, 3e6], scale_cut=cut_short_scale(), style_negative="parens")
        assert labels == ["(3M)", "3M"]

    def test_si_units(self):
        labels = number([1e-9, 1e-6, 1e-3, 1], scale_cut=cut_si("g"))
        assert labels == ["1 ng", "1 µg", "1 mg", "1 g"]

    def test_si_with_scale(self):
        """Data stored in kg, labelled in SI grams."""
        labels = number([0.002, 5], scale_cut=cut_si("g"), scale=1e3)
        assert labels == ["2 g", "5 kg"]

    def test_custom_mapping(self, custom_cut):
        labels = number([50, 300, 4_000], scale_cut={"": 0, "a": 100, "b": 1000})
        assert labels == number([50, 300, 4_000], scale_cut=custom_cut)
        assert labels == ["50", "3a", "4b"]

    def test_missing_with_scale_cut(self):
        assert number([None, 2e3], scale_cut=cut_short_scale()) == [None, "2K"]


class TestFormatConfig:

    def test_defaults(self):
        config = FormatConfig()
        assert config.accuracy is None
        assert config.scale == 1
        assert config.big_mark == " "
        assert config.decimal_mark == "."
        assert config.style_positive is StylePositive.NONE
        assert config.style_negative is StyleNegative.HYPHEN
        assert config.scale_cut is None
        assert config.trim is True

    def test_coercion(self):
        """Coerce strings to enums, 'auto' to None and mappings to ScaleCut."""
        config = FormatConfig(accuracy="auto", style_positive="plus", style_negative="parens",
                              scale_cut={"": 0, "K": 1e3})
        assert config.accuracy is None
        assert config.style_positive is StylePositive.PLUS
        assert config.style_negative is StyleNegative.PARENS
        assert isinstance(config.scale_cut, ScaleCut)

    def test_frozen(self):
        config = FormatConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.scale = 2

    @pytest.mark.parametrize(
        "kwargs, match",
        [
            pytest.param({"style_positive": "minus"}, r"style_positive.*Allowed: none, plus", id="style-positive"),
            pytest.param({"style_negative": "bogus"}, r"style_negative.*Allowed: hyphen, minus, parens",
                         id="style-negative"),
            pytest.param({"accuracy": 0}, r"accuracy", id="accuracy-zero"),
            pytest.param({"accuracy": -0.1}, r"accuracy", id="accuracy-negative"),
            pytest.param({"accuracy": math.nan}, r"accuracy", id="accuracy-nan"),
            pytest.param({"accuracy": "fine"}, r"accuracy", id="accuracy-str"),
            pytest.param({"accuracy": True}, r"accuracy", id="accuracy-bool"),
            pytest.param({"scale": 0}, r"scale", id="scale-zero"),
            pytest.param({"scale": math.inf}, r"scale", id="scale-inf"),
            pytest.param({"scale": "1"}, r"scale", id="scale-str"),
            pytest.param({"prefix": 1}, r"prefix must be a str", id="prefix"),
            pytest.param({"big_mark": None}, r"big_mark must be a str", id="big-mark"),
            pytest.param({"trim": "yes"}, r"trim must be a bool", id="trim"),
            pytest.param({"scale_cut": {"K": 1e3}}, r"Smallest value", id="scale-cut-no-zero"),
            pytest.param({"scale_cut": [0, 1e3]}, r"labeled", id="scale-cut-unlabeled"),
        ],
    )
    def test_invalid(self, kwargs, match):
        with pytest.raises(ConfigError, match=match):
            FormatConfig(**kwargs)

    def test_number_rejects_before_output(self):
        """Invalid configuration aborts the call, even for empty input."""
        with pytest.raises(ConfigError):
            number([], style_negative="bogus")


class TestLabelFactories:

    def test_label_number_reusable(self):
        labeller = label_number(scale_cut=cut_short_scale())
        assert labeller([1e3, 2e6, 3e9]) == ["1K", "2M", "3B"]
        assert labeller([1.5e6, 2.5e6]) == ["1.5M", "2.5M"]

    def test_label_number_matches_number(self):
        x = [-1234.5, 0, 98765.25]
        kwargs = {"prefix": "€", "style_negative": "minus", "big_mark": ","}
        assert label_number(**kwargs)(x) == number(x, **kwargs)

    def test_label_number_validates_eagerly(self):
        """Invalid style fails when the labeller is created."""
        with pytest.raises(ConfigError, match=r"style_negative"):
            label_number(style_negative="bogus")

    def test_label_number_captures_config(self):
        """Later changes to the caller's arguments do not affect the labeller."""
        cuts = {"": 0, "K": 1e3}
        labeller = label_number(scale_cut=cuts)
        cuts["M"] = 1e6
        assert labeller([0, 2e6]) == ["0", "2 000K"]

    def test_label_comma(self):
        assert label_comma()([1234567]) == ["1,234,567"]

    def test_label_comma_kwargs(self):
        assert label_comma(style_negative="parens")([-1000]) == ["(1,000)"]

    def test_comma(self):
        assert comma([1234567.891, 2e6]) == ["1,234,568", "2,000,000"]
        assert comma([1234.5, 2000.25]) == ["1,235", "2,000"]

    @pytest.mark.parametrize(
        "call",
        [
            pytest.param(lambda: comma([1234.5], digits=2), id="comma"),
            pytest.param(lambda: label_comma(digits=None), id="label_comma"),
        ],
    )
    def test_digits_deprecated(self, call):
        """The legacy digits argument warns and is otherwise ignored."""
        with pytest.warns(DeprecationWarning, match=r"digits\) is deprecated, use .*accuracy"):
            call()

    def test_digits_ignored(self):
        with pytest.warns(DeprecationWarning):
            labels = comma([1234.5], digits=5)
        assert labels == comma([1234.5])


# Integration Tests ----------------------------------------------------------------------------------------------------

class TestNumberNumpyPandas:

    def test_numpy_array(self):
        np = pytest.importorskip("numpy")
        assert number(np.array([-1e6, 1e6])) == ["-1 000 000", "1 000 000"]
        assert number(np.array([1.0, np.nan, np.inf])) == ["1", None, "Inf"]
        assert number(np.arange(3, dtype=np.int64)) == ["0", "1", "2"]

    def test_pandas_series_keeps_index(self):
        pd = pytest.importorskip("pandas")
        series = pd.Series([1_000.0, None, 2_000_000.0], index=["a", "b", "c"])
        labels = number(series, scale_cut=cut_short_scale())
        assert labels == {"a": "1K", "b": None, "c": "2M"}

    def test_pandas_na(self):
        pd = pytest.importorskip("pandas")
        series = pd.Series([1, pd.NA, 3], dtype="Int64")
        assert list(number(series).values()) == ["1", None, "3"]
