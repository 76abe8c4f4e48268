"""Audio-feature aggregation: many tracks -> one mood vector."""

import math
from typing import Dict, List, Sequence

from vibematch.core import MOOD_FEATURES, MoodVector, Track


def aggregate_mood(tracks: Sequence[Track]) -> MoodVector:
    """
    Return the coordinate-wise mean of the tracks' seven audio features.

    - an empty sequence yields the all-zero vector
    - a missing feature value counts as 0 but the track still counts towards
      the divisor
    - values are collected in input order and summed once with math.fsum,
      then divided once; fsum is exactly rounded, so any permutation of the
      same tracks gives the same vector
    """
    columns: Dict[str, List[float]] = {name: [] for name in MOOD_FEATURES}
    count = 0

    for track in tracks:
        count += 1
        features = track.audio_features
        for name in MOOD_FEATURES:
            value = getattr(features, name)
            columns[name].append(float(value) if value is not None else 0.0)

    if count == 0:
        return MoodVector()

    return MoodVector(
        **{name: math.fsum(values) / count for name, values in columns.items()}
    )
