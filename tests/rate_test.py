import pytest

from glassvis.errors import ImageTooSmallError, PreconditionError
from glassvis.rate import defect_rate, format_defect_rate


def test_defect_rate_per_percent_of_area():
    assert defect_rate(100, 100, 50) == 0.5


def test_full_coverage_is_one_hundred():
    assert defect_rate(10, 10, 100) == 100.0


def test_zero_defects():
    assert defect_rate(600, 800, 0) == 0.0


def test_area_is_divided_with_integer_division():
    # 150 // 100 == 1
    assert defect_rate(15, 10, 3) == 3.0
    # 199 // 100 == 1
    assert defect_rate(199, 1, 2) == 2.0


def test_area_below_one_hundred_is_rejected():
    with pytest.raises(ImageTooSmallError):
        defect_rate(9, 11, 1)
    with pytest.raises(ImageTooSmallError):
        defect_rate(0, 0, 0)


def test_negative_input_is_rejected():
    with pytest.raises(PreconditionError):
        defect_rate(10, 10, -1)


def test_format_defect_rate():
    assert format_defect_rate(0.5) == "Total Defect Rate = 0.5%"
