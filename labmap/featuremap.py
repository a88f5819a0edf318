"""
The LAB feature map pipeline. A FeatureMap owns all of the working buffers and, every time an image
is given to `compute`, runs the three stages in order:

  1. the integral image and squared integral image of the samples
  2. the block sums at every anchor where a block fits
  3. the LAB code of every pixel whose 3x3 block neighborhood fits

The buffers are kept between calls and only resized when the image size changes. Each stage only
writes the part of its buffer that is valid for the current image, so the bottom and right edges of
the block sums and the feature map keep whatever was there before (or 0s). Only the `valid_shape`
portion of the feature map should be used; `features` gives just that portion.

A FeatureMap is not safe to use from multiple threads at once, but the stages themselves can be
split among several threads with the nthreads argument.
"""

from .geometry import Geometry, InvalidGeometryError

__all__ = ['FeatureMap', 'InvalidDimensionsError', 'InvalidGeometryError']

class InvalidDimensionsError(ValueError):
    """The width or height of an image is not positive or does not match the number of samples."""
    pass

def _resize(buf, n):
    """
    Resizes a flat buffer to n elements. The existing data is kept as far as it fits and any new
    elements are 0. Returns buf itself if it is already the right size.
    """
    if buf.size == n: return buf
    from numpy import zeros
    out = zeros(n, buf.dtype)
    m = min(n, buf.size)
    out[:m] = buf[:m]
    return out

class FeatureMap(object):
    """
    Computes dense LAB feature maps. The geometry can be given as a Geometry, a path to a saved
    geometry, or None for 1x1 blocks; rect_width, rect_height, and num_rect keyword arguments
    override the individual parameters.

    roi is an optional region of interest (top, left, bottom, right) that every image is cropped to
    before any processing. The buffers then have the size of the region.

    dtype is the accumulator type of the integral images and block sums, int64 by default. It can be
    int32 to match older models, but that overflows for large images (a warning is given).
    """
    def __init__(self, geometry=None, roi=None, dtype='int64', nthreads=1, **params):
        from numpy import empty, dtype as _dtype, uint8
        geometry = Geometry() if geometry is None else Geometry.load(geometry)
        if params: geometry = geometry.replace(**params)
        self._geometry = geometry
        self.roi = roi
        self._dtype = _dtype(dtype)
        if self._dtype.kind != 'i' or self._dtype.itemsize < 4: raise ValueError('dtype must be a signed integer type of at least 32 bits')
        self.nthreads = nthreads
        self._width = 0
        self._height = 0
        self._feat_map = empty(0, uint8)
        self._rect_sum = empty(0, self._dtype)
        self._int_img = empty(0, self._dtype)
        self._square_int_img = empty(0, self._dtype)

    ##### Configuration #####
    @property
    def geometry(self): return self._geometry
    @geometry.setter
    def geometry(self, geometry): self._geometry = Geometry.load(geometry)
    @property
    def rect_width(self): return self._geometry.rect_width
    @rect_width.setter
    def rect_width(self, value): self._geometry = self._geometry.replace(rect_width=value)
    @property
    def rect_height(self): return self._geometry.rect_height
    @rect_height.setter
    def rect_height(self, value): self._geometry = self._geometry.replace(rect_height=value)
    @property
    def num_rect(self): return self._geometry.num_rect
    @num_rect.setter
    def num_rect(self, value): self._geometry = self._geometry.replace(num_rect=value)

    @property
    def roi(self):
        """The region of interest as top, left, bottom, right or None for the entire image."""
        return self._roi
    @roi.setter
    def roi(self, roi):
        if roi is not None:
            try: T, L, B, R = (int(x) for x in roi)
            except (TypeError, ValueError): raise ValueError('Region must be four integers: top, left, bottom, right')
            if T < 0 or L < 0 or T >= B or L >= R: raise ValueError('Invalid region %r' % ((T, L, B, R),))
            roi = (T, L, B, R)
        self._roi = roi

    @property
    def dtype(self): return self._dtype
    @property
    def nthreads(self): return self._nthreads
    @nthreads.setter
    def nthreads(self, nthreads):
        nthreads = int(nthreads)
        if nthreads < 1: raise ValueError('nthreads must be positive')
        self._nthreads = nthreads

    ##### Results #####
    @property
    def width(self): return self._width
    @property
    def height(self): return self._height
    @property
    def length(self): return self._width * self._height
    @property
    def feat_map(self):
        """The entire feature map buffer as a height x width uint8 array (not a copy)."""
        return self._feat_map.reshape((self._height, self._width))
    @property
    def rect_sum(self): return self._rect_sum.reshape((self._height, self._width))
    @property
    def int_img(self): return self._int_img.reshape((self._height, self._width))
    @property
    def square_int_img(self): return self._square_int_img.reshape((self._height, self._width))
    @property
    def valid_shape(self):
        """The number of rows and columns of the feature map that hold LAB codes."""
        return self._geometry.valid_shape(self._height, self._width)
    @property
    def features(self):
        """The part of the feature map that holds LAB codes (not a copy)."""
        H, W = self.valid_shape
        return self.feat_map[:H, :W]

    ##### Computation #####
    def compute(self, samples, width=None, height=None):
        """
        Computes the feature map of an image. The samples can be a 2D array (in which case width and
        height are optional) or a flat sequence or buffer of width*height row-major samples. The
        samples must be integers between 0 and 255.

        If the arguments are invalid, an InvalidDimensionsError, InvalidGeometryError, or ValueError
        is raised and the buffers are not changed at all. Returns `feat_map`.
        """
        from .utils import get_image_region, check_region
        im = self.__get_samples(samples, width, height)
        if self._roi is not None: im = get_image_region(im, 0, check_region(self._roi, im.shape))[0]
        H, W = im.shape
        g = self._geometry
        if not g.fits(H, W):
            raise InvalidGeometryError('%dx%d blocks do not fit in a %dx%d image' % (g.rect_width, g.rect_height, W, H))
        from warnings import warn
        from .integral import accumulator_overflows
        if 0 in g.valid_shape(H, W):
            warn('%dx%d neighborhood of %dx%d blocks does not fit in a %dx%d image, no LAB codes will be computed' %
                 (g.num_rect, g.num_rect, g.rect_width, g.rect_height, W, H), RuntimeWarning)
        if accumulator_overflows(self._dtype, (H, W)):
            warn('%s accumulator may overflow for a %dx%d image' % (self._dtype.name, W, H), RuntimeWarning)

        self.__reshape(W, H)
        self.__compute_integral_images(im)
        self.__compute_rect_sum()
        self.__compute_feature_map()
        return self.feat_map

    @staticmethod
    def __get_samples(samples, width, height):
        """Checks the dimensions and samples, returning a 2D uint8 array."""
        from numpy import asarray, frombuffer, uint8
        from .utils import im2samples
        if isinstance(samples, (bytes, bytearray, memoryview)): samples = frombuffer(samples, uint8)
        samples = asarray(samples)
        if width is None and height is None:
            if samples.ndim != 2: raise InvalidDimensionsError('Width and height are required unless samples is a 2D array')
            height, width = samples.shape
        elif width is None or height is None:
            raise InvalidDimensionsError('Width and height must be given together')
        elif samples.ndim == 2 and samples.shape != (height, width):
            raise InvalidDimensionsError('Illegal arguments: width (%d) and height (%d) do not match a %dx%d array' % (width, height, samples.shape[1], samples.shape[0]))
        if width <= 0 or height <= 0:
            raise InvalidDimensionsError('Illegal arguments: width (%d), height (%d)' % (width, height))
        if samples.size != width * height:
            raise InvalidDimensionsError('Illegal arguments: width (%d) and height (%d) do not match %d samples' % (width, height, samples.size))
        return im2samples(samples.reshape((height, width)))

    def __reshape(self, width, height):
        self._width = width
        self._height = height
        n = width * height
        self._feat_map = _resize(self._feat_map, n)
        self._rect_sum = _resize(self._rect_sum, n)
        self._int_img = _resize(self._int_img, n)
        self._square_int_img = _resize(self._square_int_img, n)

    def __compute_integral_images(self, im):
        from .integral import integral_image, squared_integral_image
        integral_image(im, self.int_img, self._dtype, False)
        squared_integral_image(im, self.square_int_img, self._dtype, False)

    def __compute_rect_sum(self):
        from .rectsum import rect_sum
        rect_sum(self.int_img, self.rect_width, self.rect_height, self.rect_sum, self._nthreads)

    def __compute_feature_map(self):
        from .lab import lab_features
        lab_features(self.rect_sum, self.rect_width, self.rect_height, self.feat_map, self._nthreads)

    def window_mean_var(self, rect_width=None, rect_height=None):
        """
        The mean and variance of every block of the last computed image, from the integral image and
        squared integral image. The block size defaults to the geometry's block size.
        """
        from .integral import window_mean_var
        if self.length == 0: raise ValueError('No image has been computed')
        if rect_width is None: rect_width = self.rect_width
        if rect_height is None: rect_height = self.rect_height
        return window_mean_var(self.int_img, self.square_int_img, rect_height, rect_width)
