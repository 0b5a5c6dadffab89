import numpy as np
import pytest
from PIL import Image

from imagecompare.errors import DimensionMismatchError, LoadError
from imagecompare.imaging import (
    compare_arrays,
    extract_slice,
    image_size,
    load_image,
    rescale_intensity,
    write_image,
)


def test_load_grayscale_png(make_png):
    image = load_image(make_png("a.png", width=6, height=4, value=10))
    assert image.dtype == np.float64
    assert image.shape == (4, 6)
    assert np.all(image == 10)


def test_load_rgb_png_reduces_to_luminance(tmp_path):
    path = tmp_path / "rgb.png"
    Image.fromarray(np.full((3, 4, 3), 10, dtype=np.uint8)).save(path)

    image = load_image(path)

    assert image.shape == (3, 4)
    assert image[0, 0] == pytest.approx(10.0, abs=1e-3)


def test_load_npy_keeps_dimensions(make_npy):
    image = load_image(make_npy("vol.npy", np.zeros((4, 5, 3), dtype=np.int16)))
    assert image.shape == (4, 5, 3)
    assert image.dtype == np.float64


def test_load_missing_file(tmp_path):
    with pytest.raises(LoadError) as excinfo:
        load_image(tmp_path / "missing.png")
    assert excinfo.value.status == 1000
    assert "missing.png" in str(excinfo.value)


def test_load_garbage_file(not_an_image):
    with pytest.raises(LoadError):
        load_image(not_an_image)


def test_load_oversized_image_is_load_error(make_png, monkeypatch):
    path = make_png("big.png", width=10, height=10)
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 20)

    with pytest.raises(LoadError) as excinfo:
        load_image(path)
    assert excinfo.value.status == 1000


def test_load_rejects_more_than_six_dimensions(make_npy):
    with pytest.raises(LoadError):
        load_image(make_npy("big.npy", np.zeros((1,) * 7)))


def test_image_size_is_width_first():
    assert image_size(np.zeros((5, 6))) == (6, 5)
    assert image_size(np.zeros((2, 3, 4))) == (4, 3, 2)


def test_compare_identical():
    image = np.full((5, 5), 10.0)
    result = compare_arrays(image, image.copy())
    assert result.passed
    assert result.total_difference == 0
    assert result.differing_pixels == 0
    assert result.total_pixels == 25


def test_compare_ignores_differences_within_tolerance():
    baseline = np.full((5, 5), 10.0)
    result = compare_arrays(baseline, baseline + 2.0)
    assert result.passed
    assert not result.difference.any()


def test_compare_sums_differences_beyond_tolerance():
    baseline = np.full((5, 5), 10.0)
    test = baseline.copy()
    test[0, 0] = 13.0
    test[1, 1] = 4.0
    test[2, 2] = 11.0

    result = compare_arrays(baseline, test)

    assert not result.passed
    assert result.total_difference == pytest.approx(9.0)
    assert result.differing_pixels == 2
    assert result.difference[0, 0] == 3.0
    assert result.difference[2, 2] == 0.0


def test_compare_custom_tolerance():
    baseline = np.zeros((2, 2))
    assert compare_arrays(baseline, baseline + 5.0, tolerance=5.0).passed
    assert not compare_arrays(baseline, baseline + 5.0, tolerance=4.5).passed


def test_compare_size_mismatch():
    with pytest.raises(DimensionMismatchError) as excinfo:
        compare_arrays(np.zeros((5, 5)), np.zeros((5, 6)))
    assert excinfo.value.baseline_size == (5, 5)
    assert excinfo.value.test_size == (6, 5)


def test_rescale_spans_output_range():
    out = rescale_intensity(np.array([[0.0, 1.0, 2.0]]))
    assert out.dtype == np.uint8
    assert out.tolist() == [[0, 127, 255]]


def test_rescale_shifts_negative_values():
    out = rescale_intensity(np.array([[-10.0, 10.0]]))
    assert out.tolist() == [[0, 255]]


@pytest.mark.parametrize("value", [0.0, 10.0])
def test_rescale_constant_image(value):
    out = rescale_intensity(np.full((3, 3), value))
    assert not out.any()


def test_extract_slice_fixes_higher_axes_at_zero():
    image = np.arange(4 * 3 * 2 * 5).reshape(4, 3, 2, 5)
    plane = extract_slice(image)
    assert plane.shape == (2, 5)
    assert image_size(plane) == image_size(image)[:2]
    np.testing.assert_array_equal(plane, image[0, 0])


def test_extract_slice_of_1d_image():
    assert extract_slice(np.arange(4)).shape == (1, 4)


def test_write_image(tmp_path):
    path = tmp_path / "out.png"
    plane = extract_slice(np.zeros((2, 3, 4), dtype=np.uint8))

    write_image(plane, path)

    with Image.open(path) as img:
        assert img.mode == "L"
        assert img.size == (4, 3)
