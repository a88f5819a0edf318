"""
Utility functions used by the LAB feature map pipeline and filters.
"""

__all__ = ['im2samples', 'get_image_region', 'check_region', 'run_threads']


########## Conversion ##########
def im2samples(im):
    """
    Checks that an image holds 8-bit intensity samples and returns it as a 2D uint8 array. Any
    integer or boolean array is accepted as long as every value is between 0 and 255. The array is
    only copied if it is not already uint8.
    """
    from numpy import asarray, uint8
    im = asarray(im)
    if im.ndim != 2: raise ValueError('Samples must be a 2D image')
    k = im.dtype.kind
    if k not in 'biu': raise ValueError('Unknown image format')
    if k == 'b' or im.dtype == uint8: return im.astype(uint8, copy=False)
    if im.size and (im.min() < 0 or im.max() > 255): raise ValueError('Samples must be between 0 and 255')
    return im.astype(uint8)


########## Extracting and Padding Image ##########
def check_region(region, shape):
    """
    Checks that a region, given as top, left, bottom, right (bottom and right being one past the
    end), is non-empty and completely inside an image of the given shape. Returns the region as a
    tuple of ints.
    """
    try: T, L, B, R = (int(x) for x in region)
    except (TypeError, ValueError): raise ValueError('Region must be four integers: top, left, bottom, right')
    if T < 0 or L < 0 or B > shape[0] or R > shape[1] or T >= B or L >= R:
        raise ValueError('Invalid region %r for an image of %dx%d' % ((T, L, B, R), shape[1], shape[0]))
    return T, L, B, R

def get_image_region(im, padding=0, region=None, mode='symmetric'):
    """
    Gets the desired subregion of an image with the given amount of padding. If possible, the
    padding is taken from the image itself. If not possible, the pad function is used to add the
    necessary padding.
        padding is the amount of extra space around the region that is desired
        region is the portion of the image we want to use, or None to use the whole image
            given as top, left, bottom, right - negative values do not go from the end of the axis
            like normal, but instead indicate before the beginning of the axis; the right and
            bottom values should be one past the end just like normal
        mode is the padding mode, if padding is required, and defaults to symmetric
    Besides returning the image, a new region is returned that is valid for the returned image to be
    processed again.
    """
    from numpy import pad
    if region is None:
        region = (padding, padding, padding + im.shape[0], padding + im.shape[1]) # the new region
        if padding == 0: return im, region
        return pad(im, int(padding), mode=mode), region
    T, L, B, R = region #pylint: disable=unpacking-non-sequence
    region = (padding, padding, padding + (B-T), padding + (R-L)) # the new region
    T -= padding; L -= padding
    B += padding; R += padding
    if T < 0 or L < 0 or B > im.shape[0] or R > im.shape[1]:
        padding = [[0, 0], [0, 0]]
        if T < 0: padding[0][0] = -T; T = 0
        if L < 0: padding[1][0] = -L; L = 0
        if B > im.shape[0]: padding[0][1] = B - im.shape[0]; B = im.shape[0]
        if R > im.shape[1]: padding[1][1] = R - im.shape[1]; R = im.shape[1]
        return pad(im[T:B, L:R], padding, mode=mode), region
    return im[T:B, L:R], region


########## Threading ##########
def run_threads(func, total, min_size=1, nthreads=1):
    """
    Runs a bunch of threads, over "total" items, chunking the items. The function is given a
    "threadid" (a value 0 to nthreads-1, inclusive) along with a start and stop index to run over
    (where stop is not included).

    Since every stage of the pipeline is made of NumPy ufuncs, which release the GIL, the threads
    do run in parallel.
    """
    from multiprocessing import cpu_count
    from threading import Thread
    from math import floor
    if total <= 0: return
    nthreads = min(nthreads, (total + (min_size // 2)) // min_size, cpu_count())
    if nthreads <= 1:
        func(0, 0, total)
    else:
        inc = total / nthreads
        inds = [0] + [int(floor(inc*i)) for i in range(1, nthreads)] + [total]
        errors = []
        def run(*args):
            try: func(*args)
            except BaseException as ex: errors.append(ex)
        threads = [Thread(target=run, args=(i, inds[i], inds[i+1])) for i in range(nthreads)]
        for t in threads: t.start()
        for t in threads: t.join()
        if errors: raise errors[0]
