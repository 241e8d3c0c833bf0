"""Center update rules for clustering algorithms."""

from .mean import MeanUpdater
from .median import MedianUpdater, coordinate_median
from .medoid import MedoidUpdater, candidate_costs
from .online_mean import OnlineMeanUpdater

__all__ = [
    'MeanUpdater',
    'MedianUpdater',
    'MedoidUpdater',
    'OnlineMeanUpdater',
    'coordinate_median',
    'candidate_costs'
]
