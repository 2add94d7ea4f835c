"""Tests for damping presets."""

import math

import pytest

from springsim.physics import DampingCategory, PresetCatalog, SystemParameters, critical_damping, damping_for


@pytest.mark.parametrize("m, k", [(0.1, 10.0), (1.0, 15.0), (2.5, 400.0)])
def test_preset_damping_ratios(m: float, k: float) -> None:
    c_crit = 2 * math.sqrt(m * k)
    assert PresetCatalog.critically_damped(m, k).params.damping == pytest.approx(c_crit)
    assert PresetCatalog.overdamped(m, k).params.damping == pytest.approx(1.5 * c_crit)
    assert PresetCatalog.underdamped(m, k).params.damping == pytest.approx(0.2 * c_crit)
    assert PresetCatalog.undamped(m, k).params.damping == 0.0


def test_preset_defaults() -> None:
    p = PresetCatalog.underdamped()
    assert p.name == "Under"
    assert p.params.mass == pytest.approx(0.1)
    assert p.params.stiffness == pytest.approx(10.0)
    assert p.params.rest_length == pytest.approx(0.5)
    assert (p.y0, p.v0) == (0.1, 0.0)
    assert p.params.damping_ratio == pytest.approx(0.2)


def test_preset_names() -> None:
    names = [PresetCatalog.get(c).name for c in DampingCategory]
    assert names == ["Over", "Crit", "Under", "Undamped"]


def test_presets_recomputed_for_requested_values() -> None:
    a = PresetCatalog.critically_damped(1.0, 4.0)
    b = PresetCatalog.critically_damped(1.0, 9.0)
    assert a.params.damping == pytest.approx(4.0)
    assert b.params.damping == pytest.approx(6.0)


def test_damping_for_matches_catalog() -> None:
    assert damping_for(DampingCategory.OVER, 1.0, 1.0) == pytest.approx(3.0)
    assert damping_for("under", 1.0, 1.0) == pytest.approx(0.4)
    assert damping_for(DampingCategory.CRIT, 1.0, 1.0) == pytest.approx(critical_damping(1.0, 1.0))
    assert damping_for(DampingCategory.UNDAMPED, 1.0, 1.0) == 0.0


def test_match_preset() -> None:
    assert PresetCatalog.match(PresetCatalog.overdamped().params) is DampingCategory.OVER
    assert PresetCatalog.match(PresetCatalog.undamped().params) is DampingCategory.UNDAMPED
    assert PresetCatalog.match(SystemParameters(mass=1.0, damping=0.2, stiffness=15.0)) is None


def test_get_with_degenerate_inputs_does_not_raise() -> None:
    p = PresetCatalog.get(DampingCategory.CRIT, mass=-1.0, stiffness=10.0)
    assert p.params.damping == pytest.approx(critical_damping(1e-6, 10.0))
    assert PresetCatalog.get("over", mass=1.0, stiffness=-5.0).params.damping == 0.0
    assert damping_for(DampingCategory.CRIT, -1.0, 10.0) == p.params.damping
