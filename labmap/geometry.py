"""
Block geometry of the LAB feature map: the size of each block and the number of blocks along each
axis of the neighborhood. The geometry is checked once when it is created so that the pipeline only
has to check it against the size of each image.
"""

__all__ = ['Geometry', 'InvalidGeometryError']

class InvalidGeometryError(ValueError):
    """The block geometry is invalid, either on its own or for the image it is used with."""
    pass

class Geometry(object):
    """
    The block geometry: rect_width and rect_height are the size of each block, in pixels, and
    num_rect is the number of blocks along each side of the neighborhood. The LAB code layout is a
    fixed 3x3 neighborhood with 8 bits, so num_rect must be 3; it is kept as a parameter so that
    saved configurations state it explicitly.

    Geometries are immutable and can be saved to and loaded from JSON files.
    """
    __slots__ = ('__rect_width', '__rect_height', '__num_rect')

    def __init__(self, rect_width=1, rect_height=1, num_rect=3):
        from numbers import Integral
        from .lab import NUM_RECT
        for name, value in (('rect_width', rect_width), ('rect_height', rect_height), ('num_rect', num_rect)):
            if not isinstance(value, Integral) or isinstance(value, bool):
                raise InvalidGeometryError('%s must be an integer, not %r' % (name, value))
        if rect_width < 1 or rect_height < 1:
            raise InvalidGeometryError('Block size must be positive: rect_width (%d), rect_height (%d)' % (rect_width, rect_height))
        if num_rect != NUM_RECT:
            raise InvalidGeometryError('num_rect must be %d for the 3x3 LAB layout, not %d' % (NUM_RECT, num_rect))
        self.__rect_width = int(rect_width)
        self.__rect_height = int(rect_height)
        self.__num_rect = int(num_rect)

    @property
    def rect_width(self): return self.__rect_width
    @property
    def rect_height(self): return self.__rect_height
    @property
    def num_rect(self): return self.__num_rect

    def replace(self, **kwargs):
        """Returns a new geometry with some of the parameters changed."""
        d = self.to_dict()
        d.update(kwargs)
        return Geometry(**d)

    def fits(self, height, width):
        """True if a single block fits inside an image of the given size."""
        return self.__rect_height <= height and self.__rect_width <= width

    def valid_shape(self, height, width):
        """
        The number of rows and columns of an image of the given size that get a LAB code, i.e. those
        whose entire neighborhood fits in the image. Either is 0 when none do.
        """
        return (max(height - self.__num_rect*self.__rect_height + 1, 0),
                max(width - self.__num_rect*self.__rect_width + 1, 0))

    def to_dict(self):
        return {'rect_width': self.__rect_width, 'rect_height': self.__rect_height, 'num_rect': self.__num_rect}

    @classmethod
    def from_dict(cls, d):
        """Creates a geometry from a dictionary like the one returned by `to_dict`."""
        unknown = set(d) - {'rect_width', 'rect_height', 'num_rect'}
        if unknown: raise InvalidGeometryError('Unknown geometry parameters: %s' % ', '.join(sorted(unknown)))
        return cls(**d)

    def save(self, path):
        """Save the geometry as a JSON file."""
        import json
        with open(path, 'w') as f: json.dump(self.to_dict(), f, indent=2, sort_keys=True)

    @classmethod
    def load(cls, path):
        """
        Loads a geometry from a JSON file. If a geometry is given, it is returned un-altered.
        """
        if isinstance(path, Geometry): return path
        import json
        with open(path) as f: d = json.load(f)
        if not isinstance(d, dict): raise InvalidGeometryError('Geometry file must contain a JSON object')
        return cls.from_dict(d)

    def __eq__(self, other):
        if not isinstance(other, Geometry): return NotImplemented
        return self.to_dict() == other.to_dict()
    def __hash__(self): return hash((self.__rect_width, self.__rect_height, self.__num_rect))
    def __repr__(self):
        return 'Geometry(rect_width=%d, rect_height=%d, num_rect=%d)' % (self.__rect_width, self.__rect_height, self.__num_rect)
