from darwin_atlas.validation.technical import (
    dicyclic_summary,
    run_technical_validation,
    validate_dicyclic,
    validate_operators,
    validate_symmetry,
)


def test_operator_relations_hold():
    results = validate_operators()
    assert {r.check_name for r in results} == {
        "shift_cyclic",
        "reverse_involution",
        "complement_involution",
        "rc_commutative",
        "dihedral_relation",
    }
    assert all(r.passed for r in results)


def test_symmetry_bounds_hold():
    results = validate_symmetry()
    assert all(r.passed for r in results)
    assert results[-1].check_name == "dmin_periodic_zero"


def test_dicyclic_summary():
    summary = dicyclic_summary(4)
    assert summary == {
        "n": 4,
        "dicyclic_order": 16,
        "dihedral_order": 8,
        "double_cover_verified": True,
        "group_notation": "Dic_4 -> D_4",
    }


def test_validate_dicyclic():
    results = validate_dicyclic((2, 3))
    assert [r.check_name for r in results] == ["dicyclic_lift_2", "dicyclic_lift_3"]
    assert all(r.passed for r in results)


def test_full_report():
    report = run_technical_validation()
    assert report["all_passed"] is True
    assert set(report) == {"timestamp", "operator_tests", "symmetry_tests", "dicyclic_tests", "all_passed"}
    assert report["operator_tests"][0]["check"] == "shift_cyclic"
