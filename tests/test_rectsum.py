import numpy as np
import pytest

from labmap.integral import integral_image
from labmap.rectsum import rect_sum, rect_sum_shape

from helpers import random_image, brute_rect_sums


@pytest.mark.parametrize('rw,rh', [(1, 1), (2, 2), (3, 1), (1, 4), (5, 3), (13, 2), (4, 9)])
def test_matches_brute_force(rw, rh):
    im = random_image((9, 13), seed=rw*10+rh)
    rs = rect_sum(integral_image(im), rw, rh)
    H, W = rect_sum_shape(im.shape, rw, rh)
    assert np.array_equal(rs[:H, :W], brute_rect_sums(im, rw, rh))

def test_one_by_one_is_the_image():
    im = random_image((7, 5), seed=1)
    assert np.array_equal(rect_sum(integral_image(im), 1, 1), im)

def test_block_the_size_of_the_image():
    im = random_image((6, 8), seed=2)
    rs = rect_sum(integral_image(im), 8, 6)
    assert rs[0, 0] == im.astype(np.int64).sum()

def test_rest_of_out_is_untouched():
    im = random_image((10, 12), seed=3)
    ii = integral_image(im)
    out = np.full(ii.shape, -7, ii.dtype)
    assert rect_sum(ii, 3, 4, out) is out
    H, W = rect_sum_shape(ii.shape, 3, 4)
    assert (out[H:, :] == -7).all()
    assert (out[:, W:] == -7).all()
    assert (out[:H, :W] >= 0).all()

def test_threads_give_same_result():
    im = random_image((300, 200), seed=4)
    ii = integral_image(im)
    single = rect_sum(ii, 5, 3, np.zeros_like(ii))
    multi = rect_sum(ii, 5, 3, np.zeros_like(ii), nthreads=4)
    assert np.array_equal(single, multi)
    H, W = rect_sum_shape(ii.shape, 5, 3)
    assert np.array_equal(single[:H, :W], brute_rect_sums(im, 5, 3))

def test_invalid_arguments():
    ii = integral_image(random_image((5, 5)))
    with pytest.raises(ValueError):
        rect_sum(ii, 0, 1)
    with pytest.raises(ValueError):
        rect_sum(ii, 6, 1)
    with pytest.raises(ValueError):
        rect_sum(ii, 1, 6)
    with pytest.raises(ValueError):
        rect_sum(ii, 1, 1, np.empty((5, 5), np.int32))
