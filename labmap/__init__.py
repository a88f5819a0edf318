"""
Dense Local Assembled Binary (LAB) feature maps for cascade object detectors.

A LAB feature map gives every pixel of a grayscale image an 8-bit code formed by comparing the sum
of a block of pixels against the sums of the eight equal-size blocks around it. The codes are
computed with an integral image so that every block sum takes constant time.

The main entry point is FeatureMap. The filters subpackage provides the same codes, along with
block variance features, in the form of image filters.
"""

__version__ = '0.1.0'

from .geometry import Geometry, InvalidGeometryError
from .featuremap import FeatureMap, InvalidDimensionsError
from .classifier import Classifier, Score

__all__ = ['Geometry', 'FeatureMap', 'Classifier', 'Score',
           'InvalidDimensionsError', 'InvalidGeometryError']
