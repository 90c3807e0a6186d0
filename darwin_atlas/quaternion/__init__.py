"""Quaternion lift: Dic_n as a double cover of D_n."""

from .algebra import DEFAULT_TOLERANCE, Quaternion
from .dicyclic import (
    DicyclicElement,
    DicyclicGroup,
    DihedralElement,
    all_elements,
    dicyclic_element,
    dihedral_compose,
    locate_element,
    order,
    project_to_dihedral,
    verify_double_cover,
)

__all__ = [
    "DEFAULT_TOLERANCE",
    "DicyclicElement",
    "DicyclicGroup",
    "DihedralElement",
    "Quaternion",
    "all_elements",
    "dicyclic_element",
    "dihedral_compose",
    "locate_element",
    "order",
    "project_to_dihedral",
    "verify_double_cover",
]
