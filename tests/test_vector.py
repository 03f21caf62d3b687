from beaconreg.vector import ZERO, Vector


def test_arithmetic():
    a = Vector(1, -2, 3)
    b = Vector(-4, 5, 6)
    assert a + b == Vector(-3, 3, 9)
    assert a - b == Vector(5, -7, -3)
    assert -a == Vector(-1, 2, -3)
    assert a + ZERO == a


def test_manhattan():
    assert Vector(1105, -1205, 1229).manhattan_length() == 3539
    assert Vector(1105, -1205, 1229).manhattan_distance(Vector(-92, -2380, -20)) == 3621
    assert ZERO.manhattan_length() == 0


def test_value_semantics():
    assert Vector(1, 2, 3) == Vector(1, 2, 3)
    assert len({Vector(1, 2, 3), Vector(1, 2, 3), Vector(3, 2, 1)}) == 2
    assert sorted([Vector(2, 0, 0), Vector(1, 9, 9)]) == [Vector(1, 9, 9), Vector(2, 0, 0)]
    assert tuple(Vector(4, 5, 6)) == (4, 5, 6)
    assert str(Vector(-1, 0, 7)) == "-1,0,7"
