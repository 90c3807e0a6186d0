"""Dicyclic groups realized inside the unit quaternions.

Dic_n = <a, b | a^(2n) = 1, b^2 = a^n, b a b^-1 = a^-1> has order 4n. We take
``a = exp(k * pi/n)`` and ``b = j``. The quotient by the central element
``a^n = -1`` is the dihedral group D_n of order 2n, which gives the 2-to-1
projection checked by :func:`verify_double_cover`.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from dataclasses import dataclass

from darwin_atlas.errors import InvalidParameterError
from darwin_atlas.quaternion.algebra import DEFAULT_TOLERANCE, Quaternion

_LOGGER = logging.getLogger(__name__)

_ROTATION_AXIS = (0.0, 0.0, 1.0)
_B = Quaternion(0.0, 0.0, 1.0, 0.0)


@dataclass(frozen=True, slots=True)
class DicyclicGroup:
    """Dic_n for ``n >= 2``."""

    n: int

    def __post_init__(self) -> None:
        if self.n < 2:
            raise InvalidParameterError(f"Dicyclic group requires n >= 2, got {self.n}")

    @property
    def order(self) -> int:
        return 4 * self.n

    @property
    def angle(self) -> float:
        return math.pi / self.n

    def __str__(self) -> str:
        return f"Dic_{self.n}"


@dataclass(frozen=True, slots=True)
class DicyclicElement:
    """``a^power`` (or ``b * a^power`` when ``uses_b``) in Dic_n, with its quaternion."""

    q: Quaternion
    power: int
    uses_b: bool
    n: int


@dataclass(frozen=True, slots=True)
class DihedralElement:
    """``s^reflection * r^rotation`` in D_n."""

    rotation: int
    reflection: bool


def order(group: DicyclicGroup) -> int:
    return group.order


def dicyclic_element(group: DicyclicGroup, power: int, uses_b: bool) -> DicyclicElement:
    """Build ``a^power`` or ``b * a^power``; ``power`` is taken mod 2n."""
    p = power % (2 * group.n)
    q = Quaternion.from_axis_angle(_ROTATION_AXIS, p * group.angle)
    if uses_b:
        q = _B * q
    return DicyclicElement(q=q, power=p, uses_b=uses_b, n=group.n)


def all_elements(group: DicyclicGroup) -> list[DicyclicElement]:
    """All 4n elements: the powers of a, then the b-coset."""
    two_n = 2 * group.n
    elements = [dicyclic_element(group, p, False) for p in range(two_n)]
    elements.extend(dicyclic_element(group, p, True) for p in range(two_n))
    return elements


def project_to_dihedral(element: DicyclicElement) -> DihedralElement:
    """Quotient by the centre {1, a^n}: ``a^p -> r^p``, ``b a^p -> s r^p``."""
    return DihedralElement(rotation=element.power % element.n, reflection=element.uses_b)


def dihedral_compose(g: DihedralElement, h: DihedralElement, n: int) -> DihedralElement:
    """Product ``g * h`` in D_n, using ``r^i s = s r^-i``."""
    if h.reflection:
        rotation = (h.rotation - g.rotation) % n
    else:
        rotation = (g.rotation + h.rotation) % n
    return DihedralElement(rotation=rotation, reflection=g.reflection != h.reflection)


def locate_element(group: DicyclicGroup, q: Quaternion, tol: float = DEFAULT_TOLERANCE) -> DicyclicElement | None:
    """Return the group element whose quaternion is within ``tol`` of ``q``.

    Powers of a lie in the (w, z) plane and the b-coset in the (x, y) plane,
    so the angle in the dominant plane pins down the power. ``None`` means
    ``q`` is not in the group.
    """
    uses_b = q.x * q.x + q.y * q.y > q.w * q.w + q.z * q.z
    # b * exp(k*phi) = (0, sin(phi), cos(phi), 0)
    phi = math.atan2(q.x, q.y) if uses_b else math.atan2(q.z, q.w)
    power = round(phi / group.angle)
    candidate = dicyclic_element(group, power, uses_b)
    if candidate.q.approx_eq(q, tol):
        return candidate
    return None


def verify_double_cover(group: DicyclicGroup, tol: float = DEFAULT_TOLERANCE) -> bool:
    """Check that Dic_n -> D_n is a 2-to-1 homomorphism, by multiplication.

    Every check is evaluated on actual quaternion products:

    (a) a^(2n) == 1
    (b) b^2 == a^n
    (c) each of the 2n dihedral elements has exactly two pre-images, and they
        differ by the central element -1
    (d) b a b^-1 == a^-1
    (e) the product of any two elements is an element, and projects to the
        product of the projections

    Returns ``True`` only if all hold. A failed relation is a ``False``
    result, not an error.
    """
    n = group.n
    a = dicyclic_element(group, 1, False).q
    b = dicyclic_element(group, 0, True).q
    identity = Quaternion.identity()

    checks: dict[str, bool] = {}
    checks["a_order"] = a.power(2 * n).approx_eq(identity, tol)
    checks["b_squared"] = (b * b).approx_eq(a.power(n), tol)
    checks["two_to_one"] = _check_two_to_one(group, tol)
    checks["conjugation"] = (b * a * b.inverse()).approx_eq(a.inverse(), tol)
    checks["homomorphism"] = _check_homomorphism(group, tol)

    failed = [name for name, ok in checks.items() if not ok]
    if failed:
        _LOGGER.warning(f"{group} failed double-cover checks: {', '.join(failed)}")
        return False
    return True


def _check_two_to_one(group: DicyclicGroup, tol: float) -> bool:
    elements = all_elements(group)
    if len(elements) != group.order:
        return False
    fibres: dict[DihedralElement, list[DicyclicElement]] = defaultdict(list)
    for element in elements:
        fibres[project_to_dihedral(element)].append(element)
    if len(fibres) != 2 * group.n:
        return False
    for pair in fibres.values():
        if len(pair) != 2:
            return False
        first, second = pair
        if first.q.approx_eq(second.q, tol):
            return False
        if not first.q.approx_eq(-second.q, tol):
            return False
    return True


def _check_homomorphism(group: DicyclicGroup, tol: float) -> bool:
    elements = all_elements(group)
    projections = [project_to_dihedral(element) for element in elements]
    for x, px in zip(elements, projections):
        for y, py in zip(elements, projections):
            product = locate_element(group, x.q * y.q, tol)
            if product is None:
                return False
            if project_to_dihedral(product) != dihedral_compose(px, py, group.n):
                return False
    return True
