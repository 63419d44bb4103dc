"""
Placeholder rent prediction.

Scales each listing's rent per square foot by a constant factor.
Listings without a value are predicted as 0.0.
"""

import numpy as np
from typing import List, Optional, Sequence

from ..pipeline_config import PREDICTION_CONFIG


def build_predictive_model(properties: Sequence, factor: Optional[float] = None) -> List[float]:
    """
    Predict one value per listing.

    Args:
        properties: Listings exposing an optional rent_per_sqft
        factor: Multiplier, defaults to PREDICTION_CONFIG

    Returns:
        List of predictions in input order
    """
    if factor is None:
        factor = PREDICTION_CONFIG['factor']

    values = np.array(
        [p.rent_per_sqft if p.rent_per_sqft is not None else 0.0 for p in properties],
        dtype=float)
    return (values * factor).tolist()


__all__ = ['build_predictive_model']
