"""
LAB Filter. Uses the LAB feature map pipeline.
"""

from ._base import Filter

__all__ = ['LAB']

class LAB(Filter):
    """
    Computes the LAB (Local Assembled Binary) code of every pixel, producing a single feature. The
    code for a pixel is the one whose center block contains the pixel at (rect_height//2,
    rect_width//2) within the block, so that the neighborhood is roughly centered on the pixel.

    The neighborhood reaches at most rect+rect//2 pixels from each pixel (for the larger block side)
    which is the padding used. Padding is a symmetric reflection of the image. The
    output is uint8 if not given.

    Uses O(4*im.size) intermediate memory for the pipeline buffers.
    """
    def __init__(self, rect_width=1, rect_height=1):
        from ..geometry import Geometry
        self.__geometry = Geometry(rect_width, rect_height)
        self.__offset = (rect_height + rect_height//2, rect_width + rect_width//2)
        super(LAB, self).__init__(max(self.__offset), 1)

    @property
    def geometry(self): return self.__geometry

    def __call__(self, im, out=None, region=None, nthreads=1):
        from ..utils import get_image_region
        from ..featuremap import FeatureMap
        P = self.padding
        im, region = get_image_region(im, P, region)
        H, W = region[2]-region[0], region[3]-region[1]
        out = self._get_out(out, (1, H, W), 'uint8')
        fm = FeatureMap(self.__geometry, nthreads=nthreads) # INTERMEDIATE: 4*im.shape
        fm.compute(im)
        oy, ox = self.__offset
        out[0] = fm.feat_map[P-oy:P-oy+H, P-ox:P-ox+W]
        return out
