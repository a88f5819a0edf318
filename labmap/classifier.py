"""
Classifier abstract class. Classifiers consume a computed feature map and produce a score. None are
implemented here; this only describes what the feature map is handed to.
"""

from abc import ABCMeta, abstractmethod
from collections import namedtuple

__all__ = ['Classifier', 'Score']

Score = namedtuple('Score', ('score', 'output'))
Score.__doc__ = """The result of a classifier: a numeric score along with the classifier's output value."""

class Classifier(object, metaclass=ABCMeta):
    @abstractmethod
    def classify(self, feature_map):
        """
        Evaluates a fully computed FeatureMap. Returns a Score or None if the classifier rejects the
        features (for example when a cascade stage fails). Only the `features` portion of the map
        may be used.
        """
        pass

    def __call__(self, feature_map):
        from .featuremap import FeatureMap
        if not isinstance(feature_map, FeatureMap): raise TypeError('Classifiers require a FeatureMap')
        if feature_map.length == 0: raise ValueError('The feature map has not been computed')
        return self.classify(feature_map)
