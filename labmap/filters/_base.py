"""
Filter base classes.

Every filter takes a 2D image of 8-bit samples and produces a (features,H,W) array for a region of
it. A filter can write directly to an output and use a region of an image so that the image data
around the region is used instead of padding (padding is only added where the region runs off the
image).
"""

from abc import ABCMeta, abstractmethod

__all__ = ['Filter', 'FilterBank']

class Filter(object, metaclass=ABCMeta):
    """
    A filter has the amount of padding it needs around each pixel and the number of features it
    produces for each pixel. Calling the filter computes the features:
        im       the image, a 2D array of integer samples from 0 to 255
        out      the output array to write to, shaped (features,H,W), or None to allocate one
        region   the portion of the image to compute as top, left, bottom, right, or None for the
                 entire image (see `labmap.utils.get_image_region`)
        nthreads the number of threads to use
    """
    def __init__(self, padding, features):
        self.__padding = padding
        self.__features = features
    @property
    def padding(self): return self.__padding
    @property
    def features(self): return self.__features
    @abstractmethod
    def __call__(self, im, out=None, region=None, nthreads=1): pass

    @staticmethod
    def _get_out(out, shape, dtype):
        """Allocates the output or checks the given output has the right shape."""
        if out is None:
            from numpy import empty
            return empty(shape, dtype)
        if out.shape != shape: raise ValueError('Invalid output')
        return out

class FilterBank(Filter):
    """
    Runs several filters, one after the other, with the features of each stored consecutively in
    the output. The padding is the largest padding of any of the filters and the number of features
    is the sum of all of their features. The output is float64 unless an output array is given.
    """
    def __init__(self, filters):
        filters = tuple(filters)
        if len(filters) == 0: raise ValueError('A filter bank requires at least one filter')
        if not all(isinstance(f, Filter) for f in filters): raise TypeError('Not a filter')
        super(FilterBank, self).__init__(max(f.padding for f in filters), sum(f.features for f in filters))
        self.__filters = filters
    @property
    def filters(self): return self.__filters
    def __call__(self, im, out=None, region=None, nthreads=1):
        from ..utils import get_image_region
        # Pad/region the image just once for all of the filters
        im, region = get_image_region(im, self.padding, region)
        H, W = region[2]-region[0], region[3]-region[1]
        out = self._get_out(out, (self.features, H, W), 'float64')
        nf_start = 0
        for f in self.__filters:
            f(im, out=out[nf_start:nf_start+f.features], region=region, nthreads=nthreads)
            nf_start += f.features
        return out
