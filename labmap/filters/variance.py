"""
Variance Filter. Uses the integral image and squared integral image.
"""

from ._base import Filter

__all__ = ['Variance']

class Variance(Filter):
    """
    Computes the mean and standard deviation of the square window of size radius*2+1 on each side
    around every pixel, producing 2 features. Both come from the integral image and the squared
    integral image so each pixel takes constant time no matter the radius. These are the usual
    values for normalizing the lighting of a detection window.

    Uses a padding of radius, as a symmetric reflection. Uses O(4*im.size) intermediate memory.
    """
    def __init__(self, radius=1):
        if radius < 0: raise ValueError('radius')
        super(Variance, self).__init__(radius, 2)

    def __call__(self, im, out=None, region=None, nthreads=1): #pylint: disable=unused-argument
        from numpy import sqrt
        from ..utils import get_image_region, im2samples
        from ..integral import integral_image, squared_integral_image, window_mean_var
        P = self.padding
        im, region = get_image_region(im2samples(im), P, region)
        H, W = region[2]-region[0], region[3]-region[1]
        out = self._get_out(out, (2, H, W), 'float64')
        mean, var = window_mean_var(integral_image(im), squared_integral_image(im), 2*P+1, 2*P+1) # INTERMEDIATE: 4*im.shape
        out[0] = mean
        sqrt(var, out=out[1])
        return out
