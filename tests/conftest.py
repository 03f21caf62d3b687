from pathlib import Path

import matplotlib
import numpy as np
import pytest

matplotlib.use("Agg")

from beaconreg.scanner import Scanner, load_scanners
from beaconreg.transforms import generate_rotations
from beaconreg.vector import Vector

EXAMPLE_PATH = Path(__file__).resolve().parent.parent / "data" / "example_scanners.txt"


@pytest.fixture
def example_path():
    return EXAMPLE_PATH


@pytest.fixture
def example_scanners():
    return load_scanners(EXAMPLE_PATH)


def random_cloud(rng, count, spread=1000):
    """Unique random integer points."""
    points = set()
    while len(points) < count:
        points.add(Vector(*rng.integers(-spread, spread + 1, size=3).tolist()))
    return sorted(points)


def observe(global_points, rotation, position):
    """
    Local coordinates of global points as seen by a scanner at ``position``
    whose frame is mapped to the global frame by ``rotation``.
    """
    inverse = rotation.inverse
    return {inverse.rotate(p - position) for p in global_points}


@pytest.fixture
def rng():
    return np.random.default_rng(19)


@pytest.fixture
def overlapping_pair(rng):
    """
    A fixed set and a rotated, translated scanner view sharing 12 points.

    Returns:
        Dict with 'fixed', 'unfixed', 'rotation', 'position', 'new'
    """
    cloud = random_cloud(rng, 36)
    rotation = generate_rotations()[13]
    position = Vector(431, -1278, 96)
    fixed = set(cloud[:24])
    seen = cloud[12:]
    return {
        'fixed': fixed,
        'unfixed': observe(seen, rotation, position),
        'rotation': rotation,
        'position': position,
        'new': set(cloud[24:]),
    }


def make_scanners(views):
    return [Scanner(i, view) for i, view in enumerate(views)]
