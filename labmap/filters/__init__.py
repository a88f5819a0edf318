"""
Filters producing per-pixel features from 8-bit grayscale images.

Every filter can write directly to an output, use a region of an image (so that padding isn't
necessary), and is potentially multi-threaded. The output is always (features,H,W).
"""

from ._base import Filter, FilterBank
from .lab import LAB
from .variance import Variance

__all__ = ['Filter', 'FilterBank', 'LAB', 'Variance']
