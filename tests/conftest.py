#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from numlabels.scale_cut import ScaleCut, cut_short_scale


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def short_scale() -> ScaleCut:
    """Short scale table: K, M, B, T."""
    return cut_short_scale()


@pytest.fixture
def custom_cut() -> ScaleCut:
    """Table from the labelling docs: [0, 100) unscaled, [100, 1000) as 'a', [1000, inf) as 'b'."""
    return ScaleCut({"": 0, "a": 100, "b": 1000})


@pytest.fixture
def log_breaks() -> list[float]:
    """Powers of ten as produced by a log10 breaks algorithm."""
    return [10.0 ** exp for exp in range(0, 10)]
