"""Hypothesize-and-verify matching of one scanner against the global beacon set."""

import numpy as np
from joblib import Parallel, delayed

from .transforms import apply_rotation, generate_rotations, points_to_array
from .vector import Vector


def _match_rotation(rotation, fixed_array, fixed_set, unfixed_array, threshold):
    """
    Try every point-pair offset hypothesis under a single rotation.

    Hypotheses are ordered unfixed-point-major, fixed-point-minor. Since both
    point sets hold unique points, the number of pairs sharing an offset is the
    number of translated points landing on fixed points under that offset.

    Returns:
        (offset, newly_discovered) for the first accepted hypothesis, or None
    """
    rotated = apply_rotation(unfixed_array, rotation)

    # offsets[i * len(fixed) + j] = fixed[j] - rotated[i]
    offsets = (fixed_array[np.newaxis, :, :] - rotated[:, np.newaxis, :]).reshape(-1, 3)
    _, inverse, counts = np.unique(offsets, axis=0, return_inverse=True, return_counts=True)
    votes = counts[inverse.reshape(-1)]

    for index in np.flatnonzero(votes >= threshold):
        offset = offsets[index]
        translated = [Vector(*p) for p in (rotated + offset).tolist()]
        new_points = {p for p in translated if p not in fixed_set}
        if len(translated) - len(new_points) >= threshold:
            return Vector(*offset.tolist()), new_points

    return None


def match_beacons(fixed, unfixed, threshold=12, n_jobs=1, rotations=None):
    """
    Find a rotation and translation that lays ``unfixed`` onto ``fixed``.

    Every rotation is tried in enumeration order; for each rotated point ``u``
    and fixed point ``f`` the offset ``f - u`` is hypothesized and accepted if
    at least ``threshold`` translated points coincide exactly with fixed ones.
    The first accepted hypothesis wins.

    Args:
        fixed: Set of Vectors already placed in the global frame
        unfixed: Set of Vectors in the candidate scanner's local frame
        threshold: Minimum number of coincident points
        n_jobs: Number of joblib workers; rotations are evaluated in parallel
                when this is not 1, keeping the first success in rotation order
        rotations: Optional list of Rotations (default: all 24)

    Returns:
        Tuple of (offset, newly_discovered) where ``offset`` is the scanner
        position in the global frame and ``newly_discovered`` is the set of
        translated points not already in ``fixed``; None if no alignment
        reaches the threshold
    """
    if len(unfixed) < threshold or not fixed or not unfixed:
        return None

    if rotations is None:
        rotations = generate_rotations()

    fixed_set = {p if isinstance(p, Vector) else Vector(*p) for p in fixed}
    fixed_array = points_to_array(fixed_set)
    unfixed_array = points_to_array(unfixed)

    if n_jobs == 1:
        for rotation in rotations:
            result = _match_rotation(rotation, fixed_array, fixed_set, unfixed_array, threshold)
            if result is not None:
                return result
        return None

    results = Parallel(n_jobs=n_jobs, backend='loky')(
        delayed(_match_rotation)(rotation, fixed_array, fixed_set, unfixed_array, threshold)
        for rotation in rotations
    )
    return next((r for r in results if r is not None), None)
