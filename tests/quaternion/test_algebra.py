import math

import pytest

from darwin_atlas.quaternion.algebra import Quaternion

I = Quaternion(0.0, 1.0, 0.0, 0.0)
J = Quaternion(0.0, 0.0, 1.0, 0.0)
K = Quaternion(0.0, 0.0, 0.0, 1.0)
MINUS_ONE = Quaternion(-1.0)


def test_hamilton_units():
    assert I * J == K
    assert J * K == I
    assert K * I == J
    assert J * I == -K


def test_units_square_to_minus_one():
    for unit in (I, J, K):
        assert unit * unit == MINUS_ONE
    assert I * J * K == MINUS_ONE


def test_identity_is_neutral():
    q = Quaternion(0.5, -1.0, 2.0, 0.25)
    assert Quaternion.identity() * q == q
    assert q * Quaternion.identity() == q


def test_inverse_and_conjugate():
    q = Quaternion(1.0, 2.0, -1.0, 0.5)
    assert (q * q.inverse()).approx_eq(Quaternion.identity())
    assert q.conjugate() == Quaternion(1.0, -2.0, 1.0, -0.5)
    assert q.norm_squared() == pytest.approx(6.25)
    assert q.norm() == pytest.approx(2.5)


def test_zero_has_no_inverse():
    with pytest.raises(ZeroDivisionError):
        Quaternion(0.0).inverse()


def test_from_axis_angle_is_unit():
    q = Quaternion.from_axis_angle((0.0, 0.0, 2.0), math.pi / 3)
    assert q.norm() == pytest.approx(1.0)
    assert q.approx_eq(Quaternion(math.cos(math.pi / 3), 0.0, 0.0, math.sin(math.pi / 3)))


def test_from_axis_angle_rejects_zero_axis():
    with pytest.raises(ValueError):
        Quaternion.from_axis_angle((0.0, 0.0, 0.0), 1.0)


def test_power():
    q = Quaternion.from_axis_angle((0.0, 0.0, 1.0), math.pi / 4)
    assert q.power(0) == Quaternion.identity()
    assert q.power(4).approx_eq(MINUS_ONE)
    assert q.power(8).approx_eq(Quaternion.identity())
    assert q.power(-1).approx_eq(q.inverse())


def test_approx_eq_tolerance():
    q = Quaternion(1.0, 0.0, 0.0, 0.0)
    assert q.approx_eq(Quaternion(1.0 + 1e-12))
    assert not q.approx_eq(Quaternion(1.0 + 1e-6))
    assert q.approx_eq(Quaternion(1.0 + 1e-6), tol=1e-5)
