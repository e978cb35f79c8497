import numpy as np
import pytest

from glassvis.config import DIFF_COLOR, LumaMethod
from glassvis.errors import DimensionMismatchError, InvalidSignificanceError, PreconditionError
from glassvis.geometry import Point
from glassvis.pixel_diff import (
    DiffResult, compute_luma, detect, find_diffs, mark_points, significance_threshold
)


def uniform(width, height, value, channels=4):
    image = np.full((height, width, channels), value, dtype=np.uint8)
    if channels == 4:
        image[..., 3] = 255
    return image


def test_identical_images_have_no_diffs():
    reference = uniform(10, 10, 100)
    for significance in (1, 2, 10, 128, 255):
        captured = reference.copy()
        result = detect(reference, captured, significance)
        assert result.points == []
        assert result.count == 0
        assert np.array_equal(captured, reference)


def test_uniform_delta_marks_all_pixels_at_significance_10():
    reference = uniform(10, 10, 100)
    captured = uniform(10, 10, 150)
    result = detect(reference, captured, 10)
    assert result.count == 100
    assert len(result.points) == 100


def test_uniform_delta_marks_nothing_at_significance_2():
    reference = uniform(10, 10, 100)
    captured = uniform(10, 10, 150)
    result = detect(reference, captured, 2)
    assert result.count == 0
    assert np.array_equal(captured, uniform(10, 10, 150))


def test_count_is_monotonic_in_significance():
    reference = uniform(10, 10, 100)
    captured = reference.copy()
    # column x gets a luma delta of 10 * x
    for x in range(10):
        captured[:, x, :3] = 100 + 10 * x

    counts = [len(find_diffs(reference, captured, s)) for s in (1, 2, 5, 10, 20, 50, 255)]
    assert counts == sorted(counts)
    assert counts[0] == 0
    assert counts[-1] == 90


def test_threshold_is_exclusive():
    # significance 10 -> threshold 25, a delta of exactly 25 does not count
    reference = uniform(4, 4, 100)
    captured = reference.copy()
    captured[0, 0, :3] = 125
    captured[1, 1, :3] = 126
    assert find_diffs(reference, captured, 10) == [Point(1, 1)]


def test_negative_delta_is_detected():
    reference = uniform(4, 4, 200)
    captured = reference.copy()
    captured[2, 3, :3] = 10
    assert find_diffs(reference, captured, 10) == [Point(3, 2)]


def test_points_are_row_major():
    reference = uniform(6, 6, 0)
    captured = reference.copy()
    for x, y in [(4, 3), (1, 0), (5, 0), (0, 3), (2, 5)]:
        captured[y, x, :3] = 255
    points = find_diffs(reference, captured, 10)
    assert points == [Point(1, 0), Point(5, 0), Point(0, 3), Point(4, 3), Point(2, 5)]


def test_alpha_only_change_is_not_significant():
    reference = uniform(5, 5, 80)
    captured = reference.copy()
    captured[2, 2, 3] = 0
    assert find_diffs(reference, captured, 255) == []


def test_detect_marks_captured_in_place_and_leaves_reference():
    reference = uniform(8, 8, 50)
    reference_before = reference.copy()
    captured = reference.copy()
    captured[3, 4, :3] = 250

    result = detect(reference, captured, 10)

    assert result.marked_image is captured
    assert tuple(captured[3, 4]) == DIFF_COLOR
    assert np.array_equal(reference, reference_before)
    untouched = np.ones((8, 8), dtype=bool)
    untouched[3, 4] = False
    assert np.all(captured[untouched] == reference_before[untouched])


def test_detect_unpacks_like_a_tuple():
    reference = uniform(7, 4, 0)
    captured = reference.copy()
    captured[1, 6, :3] = 255
    marked, points, width, height, count = detect(reference, captured, 10)
    assert isinstance(detect(reference, reference.copy(), 10), DiffResult)
    assert (width, height) == (7, 4)
    assert points == [Point(6, 1)]
    assert count == 1
    assert marked is captured


def test_detecting_on_marked_output_pair_finds_nothing():
    reference = uniform(10, 10, 30)
    captured = reference.copy()
    captured[2:5, 2:5, :3] = 220
    marked = detect(reference, captured, 10).marked_image
    again = detect(marked, marked.copy(), 10)
    assert again.count == 0


def test_dimension_mismatch_fails_without_mutation():
    reference = uniform(5, 5, 10)
    captured = uniform(6, 6, 200)
    reference_before = reference.copy()
    captured_before = captured.copy()

    with pytest.raises(DimensionMismatchError):
        detect(reference, captured, 10)

    assert np.array_equal(reference, reference_before)
    assert np.array_equal(captured, captured_before)


@pytest.mark.parametrize("significance", [0, -1, 256, 10.0, True, "10"])
def test_invalid_significance_is_rejected(significance):
    reference = uniform(5, 5, 10)
    captured = uniform(5, 5, 200)
    with pytest.raises(InvalidSignificanceError):
        detect(reference, captured, significance)
    assert np.all(captured[..., :3] == 200)


def test_significance_error_is_a_value_error():
    with pytest.raises(ValueError):
        significance_threshold(0)


def test_significance_threshold_values():
    assert significance_threshold(1) == 255
    assert significance_threshold(2) == 127
    assert significance_threshold(10) == 25
    assert significance_threshold(255) == 1
    assert significance_threshold(np.uint8(10)) == 25


def test_channel_count_mismatch_is_rejected():
    with pytest.raises(PreconditionError):
        find_diffs(uniform(4, 4, 0, channels=4), uniform(4, 4, 0, channels=3), 10)


def test_rgb_images_are_supported():
    reference = uniform(10, 10, 100, channels=3)
    captured = uniform(10, 10, 150, channels=3)
    result = detect(reference, captured, 10)
    assert result.count == 100
    assert tuple(captured[0, 0]) == DIFF_COLOR[:3]


def test_rec709_luma():
    pixels = np.array([[255, 255, 255, 255], [255, 0, 0, 255], [0, 0, 0, 0]], dtype=np.uint8)
    assert compute_luma(pixels).tolist() == [255, 54, 0]


def test_opencv_luma_matches_on_gray_images():
    reference = uniform(10, 10, 100)
    captured = uniform(10, 10, 150)
    assert len(find_diffs(reference, captured, 10, LumaMethod.OPENCV)) == 100
    assert len(find_diffs(reference, captured, 2, LumaMethod.OPENCV)) == 0


def test_mark_points_with_custom_color():
    image = uniform(3, 3, 0)
    mark_points(image, [Point(0, 0), Point(2, 1)], (1, 2, 3, 4))
    assert tuple(image[0, 0]) == (1, 2, 3, 4)
    assert tuple(image[1, 2]) == (1, 2, 3, 4)
    assert tuple(image[1, 1]) == (0, 0, 0, 255)


def test_mark_points_with_no_points_is_a_no_op():
    image = uniform(3, 3, 7)
    assert mark_points(image, []) is image
    assert np.all(image[..., :3] == 7)
