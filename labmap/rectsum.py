"""
Rectangle sums. For every anchor pixel this computes the sum of the fixed-size block that has the
anchor as its top-left corner, using four lookups into the integral image:

    sum(r,c) = II(r+h-1, c+w-1) - II(r-1, c+w-1) - II(r+h-1, c-1) + II(r-1, c-1)

where any term that reaches above the first row or left of the first column is 0. The first row and
column are done separately so that the rest of each row is just whole-row vector operations. Each
row is computed from the integral image alone so rows can be split among threads freely.
"""

__all__ = ['rect_sum', 'rect_sum_shape']

def rect_sum_shape(shape, rect_width, rect_height):
    """
    The number of anchor rows and columns where a rect_width x rect_height block fits completely
    inside an image of the given shape. These are the entries `rect_sum` fills in.
    """
    return shape[0] - rect_height + 1, shape[1] - rect_width + 1

def rect_sum(ii, rect_width, rect_height, out=None, nthreads=1):
    """
    Computes the block sums from the integral image ii. The output is the same shape and type as ii
    and can be given with out to be filled in place. Only the top-left rect_sum_shape() portion of
    the output is written, the rest of out is left as-is (and is uninitialized if out is not given).
    """
    from numpy import empty, add, subtract
    from .utils import run_threads
    rw, rh = rect_width, rect_height
    if rw < 1 or rh < 1 or rh > ii.shape[0] or rw > ii.shape[1]: raise ValueError('Invalid block size')
    if out is None: out = empty(ii.shape, ii.dtype)
    elif out.shape != ii.shape or out.dtype != ii.dtype: raise ValueError('Invalid output array')
    H, W = rect_sum_shape(ii.shape, rw, rh)

    def rows(_, start, stop):
        if start == 0:
            # First row: no 'above' terms
            bottom, dst = ii[rh-1], out[0]
            dst[0] = bottom[rw-1]
            subtract(bottom[rw:rw+W-1], bottom[:W-1], dst[1:W])
            start = 1
            if start >= stop: return
        top    = ii[start-1:stop-1]
        bottom = ii[start+rh-1:stop+rh-1]
        dst = out[start:stop]
        # First column: no 'left' terms
        subtract(bottom[:,rw-1], top[:,rw-1], dst[:,0])
        # Everything else
        dst = dst[:,1:W]
        subtract(bottom[:,rw:rw+W-1], top[:,rw:rw+W-1], dst)
        subtract(dst, bottom[:,:W-1], dst)
        add(dst, top[:,:W-1], dst)

    run_threads(rows, H, 64, nthreads)
    return out
