import numpy as np
import pytest

from labmap import FeatureMap
from labmap.filters import Filter, FilterBank, LAB, Variance

from helpers import random_image


@pytest.mark.parametrize('rw,rh', [(1, 1), (2, 2), (3, 2), (2, 4)])
def test_lab_matches_pipeline(rw, rh):
    im = random_image((30, 34), seed=rw*10+rh)
    f = LAB(rw, rh)
    assert f.features == 1
    assert f.padding == max(rw + rw//2, rh + rh//2)
    out = f(im)
    assert out.shape == (1, 30, 34) and out.dtype == np.uint8
    fm = FeatureMap(rect_width=rw, rect_height=rh)
    fm.compute(im)
    H, W = fm.valid_shape
    oy, ox = rh + rh//2, rw + rw//2
    assert np.array_equal(out[0, oy:oy+H, ox:ox+W], fm.features)

@pytest.mark.parametrize('region', [(10, 12, 25, 30), (0, 0, 15, 15), (20, 35, 40, 50)])
def test_lab_region(region):
    im = random_image((40, 50), seed=1)
    f = LAB(2, 2)
    full = f(im)
    T, L, B, R = region
    assert np.array_equal(f(im, region=region), full[:, T:B, L:R])

def test_lab_uniform_image():
    out = LAB(3, 3)(np.full((12, 12), 9, np.uint8))
    assert (out == 0xFF).all()

def test_lab_out():
    im = random_image((20, 20), seed=2)
    out = np.zeros((1, 20, 20), np.float64)
    assert LAB(2, 1)(im, out=out) is out
    assert np.array_equal(out, LAB(2, 1)(im))
    with pytest.raises(ValueError):
        LAB(2, 1)(im, out=np.zeros((1, 19, 20)))

def test_variance_matches_brute_force():
    im = random_image((15, 18), seed=3)
    radius = 2
    out = Variance(radius)(im)
    assert out.shape == (2, 15, 18)
    padded = np.pad(im, radius, mode='symmetric').astype(np.float64)
    for r in range(15):
        for c in range(18):
            window = padded[r:r+2*radius+1, c:c+2*radius+1]
            assert out[0, r, c] == pytest.approx(window.mean())
            assert out[1, r, c] == pytest.approx(window.std())

def test_variance_region():
    im = random_image((30, 30), seed=4)
    f = Variance(3)
    assert np.allclose(f(im, region=(5, 6, 20, 25)), f(im)[:, 5:20, 6:25])

def test_filter_bank():
    im = random_image((25, 28), seed=5)
    lab, var = LAB(2, 2), Variance(2)
    bank = FilterBank([lab, var])
    assert bank.padding == 3
    assert bank.features == 3
    assert bank.filters == (lab, var)
    out = bank(im)
    assert out.shape == (3, 25, 28) and out.dtype == np.float64
    assert np.array_equal(out[0], lab(im)[0])
    assert np.allclose(out[1:], var(im))
    region = (4, 5, 20, 22)
    assert np.allclose(bank(im, region=region), out[:, 4:20, 5:22])

def test_filter_bank_invalid():
    with pytest.raises(ValueError):
        FilterBank([])
    with pytest.raises(TypeError):
        FilterBank([LAB(), 'not a filter'])

def test_filter_is_abstract():
    with pytest.raises(TypeError):
        Filter(0, 1) #pylint: disable=abstract-class-instantiated
