import numpy as np

from flappy_strike.utils import clamp, scale_color, tilt_degrees, vertical_gradient


def test_clamp_basic() -> None:
    assert clamp(5, 0, 10) == 5
    assert clamp(-1, 0, 10) == 0
    assert clamp(11, 0, 10) == 10


def test_scale_color_clamps() -> None:
    assert scale_color((100, 200, 50), 2.0) == (200, 255, 100)
    assert scale_color((100, 200, 50), 0.0) == (0, 0, 0)


def test_vertical_gradient_shape_and_ends() -> None:
    arr = vertical_gradient(4, 11, (0, 100, 200), (100, 200, 0))
    assert arr.shape == (4, 11, 3)
    assert arr.dtype == np.uint8
    assert tuple(arr[0, 0]) == (0, 100, 200)
    assert tuple(arr[3, 10]) == (100, 200, 0)
    assert tuple(arr[2, 5]) == (50, 150, 100)
    # every column is identical
    assert (arr == arr[0]).all()


def test_tilt_is_limited() -> None:
    assert tilt_degrees(0.0, 5.7, 45.0) == 0.0
    assert tilt_degrees(100.0, 5.7, 45.0) == -45.0
    assert tilt_degrees(-100.0, 5.7, 45.0) == 45.0
