"""Rotation utilities for scanner registration.

Scanners may be oriented along any of the 24 axis-aligned orientations of a
cube. All rotations are built from exact quarter-turn sine/cosine values, so
every matrix holds only -1, 0 and 1.
"""

import numpy as np

from .vector import Vector

# sin(k * 90°) for k = 0..3; cos is the same table shifted by one quarter turn
INT_SINES = (0, 1, 0, -1)


def int_sin(quarter_turns):
    return INT_SINES[quarter_turns % 4]


def int_cos(quarter_turns):
    return INT_SINES[(quarter_turns + 1) % 4]


class Rotation:
    """A 3x3 integer rotation matrix from the cube rotation group."""

    def __init__(self, matrix, description=None):
        """
        Args:
            matrix: 3x3 array-like of integers
            description: Optional human-readable label
        """
        matrix = np.array(matrix, dtype=np.int64)
        if matrix.shape != (3, 3):
            raise ValueError(f"Rotation matrix must be 3x3, got shape {matrix.shape}")
        matrix.setflags(write=False)
        self.matrix = matrix
        self.description = description

    def compose(self, other):
        """Matrix product ``self @ other``: apply ``other`` first, then ``self``."""
        description = None
        if self.description and other.description:
            description = f"{self.description}, {other.description}"
        return Rotation(self.matrix @ other.matrix, description)

    def __matmul__(self, other):
        return self.compose(other)

    def rotate(self, vector):
        """Rotate a single Vector."""
        return Vector(*(self.matrix @ np.array(tuple(vector), dtype=np.int64)).tolist())

    def rotate_points(self, points):
        """Rotate an (N, 3) array of points."""
        return points @ self.matrix.T

    @property
    def inverse(self):
        # Rotation matrices are orthogonal
        return Rotation(self.matrix.T)

    def determinant(self):
        """Exact integer determinant (cofactor expansion, no floating point)."""
        m = self.matrix.tolist()
        return (m[0][0] * (m[1][1] * m[2][2] - m[1][2] * m[2][1])
                - m[0][1] * (m[1][0] * m[2][2] - m[1][2] * m[2][0])
                + m[0][2] * (m[1][0] * m[2][1] - m[1][1] * m[2][0]))

    def is_signed_permutation(self):
        """True if every row and column has exactly one nonzero entry equal to +/-1."""
        m = self.matrix
        if not np.all(np.isin(m, (-1, 0, 1))):
            return False
        nonzero = m != 0
        return bool(np.all(nonzero.sum(axis=0) == 1) and np.all(nonzero.sum(axis=1) == 1))

    def key(self):
        return tuple(map(tuple, self.matrix.tolist()))

    def __eq__(self, other):
        if not isinstance(other, Rotation):
            return NotImplemented
        return self.key() == other.key()

    def __hash__(self):
        return hash(self.key())

    def __repr__(self):
        label = f" ({self.description})" if self.description else ""
        return f"Rotation({self.key()}){label}"


IDENTITY = Rotation(np.eye(3, dtype=np.int64), "identity")


def rotation_about_x(quarter_turns):
    c = int_cos(quarter_turns)
    s = int_sin(quarter_turns)
    return Rotation([
        [1, 0, 0],
        [0, c, -s],
        [0, s, c],
    ])


def rotation_about_y(quarter_turns):
    c = int_cos(quarter_turns)
    s = int_sin(quarter_turns)
    return Rotation([
        [c, 0, s],
        [0, 1, 0],
        [-s, 0, c],
    ])


def rotation_about_z(quarter_turns):
    c = int_cos(quarter_turns)
    s = int_sin(quarter_turns)
    return Rotation([
        [c, -s, 0],
        [s, c, 0],
        [0, 0, 1],
    ])


def _facing_label(rotation):
    """Name the direction the local +z axis is turned to."""
    z_axis = rotation.rotate((0, 0, 1))
    for axis_name, value in zip("xyz", z_axis):
        if value:
            return f"z-axis to {'+' if value > 0 else '-'}{axis_name}"
    raise ValueError(f"Degenerate rotation: {rotation!r}")


def generate_facings():
    """
    Generate the 6 rotations that turn the local +z axis towards each cube face.

    Returns:
        List of Rotation objects: identity, quarter turns about y
        (+90°, -90°, 180°) and about x (+90°, -90°).
    """
    facings = [
        IDENTITY,
        rotation_about_y(1),
        rotation_about_y(-1),
        rotation_about_y(2),
        rotation_about_x(1),
        rotation_about_x(-1),
    ]
    return [Rotation(f.matrix, _facing_label(f)) for f in facings]


def generate_spins():
    """Generate the 4 quarter-turn rotations about the z axis (0°, 90°, 180°, 270°)."""
    return [Rotation(rotation_about_z(k).matrix, f"spin {90 * k}°") for k in range(4)]


def generate_rotations():
    """
    Generate all 24 proper rotations of the cube.

    Each rotation spins about z first and then turns z towards a face, so the
    combinations cover every orientation exactly once.

    Returns:
        List of 24 Rotation objects in facing-major, spin-minor order
    """
    return [facing @ spin for facing in generate_facings() for spin in generate_spins()]


def points_to_array(points):
    """
    Convert a collection of points to a sorted (N, 3) int64 array.

    Sorting makes iteration order independent of set ordering.
    """
    if len(points) == 0:
        return np.empty((0, 3), dtype=np.int64)
    return np.array(sorted(tuple(p) for p in points), dtype=np.int64)


def apply_rotation(points, rotation):
    """Rotate an (N, 3) point array by a Rotation."""
    return rotation.rotate_points(points)
