"""Brute-force versions of the pipeline stages used to check the real ones."""

import numpy as np

from labmap.lab import lab_code

def random_image(shape, seed=0, high=256):
    return np.random.default_rng(seed).integers(0, high, size=shape, dtype=np.uint8)

def brute_integral(im, square=False):
    im = im.astype(np.int64)
    if square: im = im * im
    H, W = im.shape
    out = np.empty((H, W), np.int64)
    for r in range(H):
        for c in range(W):
            out[r, c] = im[:r+1, :c+1].sum()
    return out

def brute_rect_sums(im, rw, rh):
    im = im.astype(np.int64)
    H, W = im.shape
    out = np.empty((H-rh+1, W-rw+1), np.int64)
    for r in range(out.shape[0]):
        for c in range(out.shape[1]):
            out[r, c] = im[r:r+rh, c:c+rw].sum()
    return out

def brute_lab(im, rw, rh):
    sums = brute_rect_sums(im, rw, rh)
    H, W = im.shape[0] - 3*rh + 1, im.shape[1] - 3*rw + 1
    out = np.empty((max(H, 0), max(W, 0)), np.uint8)
    for r in range(out.shape[0]):
        for c in range(out.shape[1]):
            out[r, c] = lab_code([[sums[r+i*rh, c+j*rw] for j in range(3)] for i in range(3)])
    return out
