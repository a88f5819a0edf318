"""
Integral images (summed area tables) and the window queries built on top of them.

The integral image of an image I is the table II where II[r,c] is the sum of I[0:r+1,0:c+1]. Once
it has been built, the sum of any rectangular block of I can be found with at most four lookups.
The squared integral image is the same table built over I**2 and, together with the integral
image, gives the variance of any block in constant time as well.

The tables are signed integers. The default is int64 which cannot overflow for any 8-bit image
that fits in memory. The historical accumulator was int32, which is still accepted, but the squared
table overflows it for images larger than about 33000 pixels of full intensity (and the plain table
for images larger than about 8.4 million pixels) so a warning is issued when that is possible.
"""

__all__ = ['accumulator_overflows', 'integral_image', 'squared_integral_image', 'window_sums', 'window_mean_var']

def accumulator_overflows(dtype, shape, max_value=255*255):
    """
    True if an integral image of the given shape and accumulator dtype could overflow. The default
    max_value is for the squared integral image, which is the first to overflow.
    """
    from numpy import dtype as _dtype, iinfo
    return shape[0] * shape[1] * max_value > iinfo(_dtype(dtype)).max

def __check_dtype(dtype, shape, max_value, warn_overflow):
    """Makes sure the accumulator dtype is a signed integer and warns if it could overflow."""
    from numpy import dtype as _dtype
    dtype = _dtype(dtype)
    if dtype.kind != 'i' or dtype.itemsize < 4: raise ValueError('Integral images require a signed integer type of at least 32 bits')
    if warn_overflow and accumulator_overflows(dtype, shape, max_value):
        from warnings import warn
        warn('%s accumulator may overflow for a %dx%d image' % (dtype.name, shape[1], shape[0]), RuntimeWarning)
    return dtype

def __cumsum2(im, out, dtype):
    """Running sums along each row followed by running sums down each column, done in `out`."""
    from numpy import cumsum, empty
    if im.ndim != 2 or im.size == 0: raise ValueError('Image must be a non-empty 2D array')
    if out is None: out = empty(im.shape, dtype)
    elif out.shape != im.shape or out.dtype != dtype: raise ValueError('Invalid output array')
    cumsum(im, axis=1, dtype=dtype, out=out)
    cumsum(out, axis=0, out=out)
    return out

def integral_image(im, out=None, dtype='int64', warn_overflow=True):
    """
    Computes the integral image of a 2D array of samples. If out is given it must have the same
    shape as the image and the given dtype, and the table is written directly into it. A
    RuntimeWarning is given if the dtype could overflow, unless warn_overflow is False.
    """
    dtype = __check_dtype(dtype, im.shape, 255, warn_overflow)
    return __cumsum2(im, out, dtype)

def squared_integral_image(im, out=None, dtype='int64', warn_overflow=True):
    """
    Computes the integral image of the squares of a 2D array of samples. Like `integral_image`, it
    writes into out when given. The squares are calculated in the accumulator type so that 8-bit
    samples do not wrap around.
    """
    from numpy import square
    dtype = __check_dtype(dtype, im.shape, 255*255, warn_overflow)
    if out is None: return __cumsum2(square(im, dtype=dtype), None, dtype)
    if out.shape != im.shape or out.dtype != dtype: raise ValueError('Invalid output array')
    square(im, out=out, dtype=dtype)
    return __cumsum2(out, out, dtype)

def window_sums(ii, height, width):
    """
    Gets the sum of every height x width block of the image that produced the integral image ii.
    The result has one entry for every top-left corner where the block fits, so it has the shape
    (H-height+1, W-width+1). This allocates its output; the pipeline uses `rect_sum` instead which
    fills a pre-allocated grid.
    """
    from numpy import pad
    H, W = ii.shape
    if height < 1 or width < 1 or height > H or width > W: raise ValueError('Invalid block size')
    ii = pad(ii, ((1, 0), (1, 0)), mode='constant') # row and column of 0s for the 'above' and 'left' terms
    return ii[height:, width:] - ii[:H-height+1, width:] - ii[height:, :W-width+1] + ii[:H-height+1, :W-width+1]

def window_mean_var(ii, sq_ii, height, width):
    """
    Gets the mean and variance of every height x width block of an image given its integral image
    and squared integral image. Both are returned as float64 arrays with the same shape as
    `window_sums`. The variance is the population variance (E[x^2] - E[x]^2) and clipped at 0 to
    remove rounding noise.
    """
    from numpy import maximum
    if ii.shape != sq_ii.shape: raise ValueError('Integral images must be the same shape')
    n = float(height * width)
    mean = window_sums(ii, height, width) / n
    var = window_sums(sq_ii, height, width) / n
    var -= mean * mean
    maximum(var, 0.0, out=var)
    return mean, var
