"""Tests for radiator sizing."""

import pytest

from accdv.components import DataIntegrityError, Radiator
from accdv.thermal import radiator_mass, tons_per_waste_heat


@pytest.fixture
def basic_radiator():
    return Radiator("BasicRadiator", "Basic Radiator", specific_power_kw_kg=2.0)


class TestRadiatorMass:
    def test_tons_per_waste_heat(self, basic_radiator):
        assert tons_per_waste_heat(basic_radiator) == 500.0

    def test_radiator_mass(self, basic_radiator):
        assert radiator_mass(1.25e6, basic_radiator) == pytest.approx(0.625)

    def test_no_waste_heat_needs_no_radiator(self, basic_radiator):
        assert radiator_mass(0.0, basic_radiator) == 0.0

    def test_better_radiators_are_lighter(self, basic_radiator):
        spray = Radiator("Spray", "Spray", specific_power_kw_kg=20.0)
        assert radiator_mass(1e9, spray) == pytest.approx(radiator_mass(1e9, basic_radiator) / 10)

    def test_non_positive_specific_power(self):
        with pytest.raises(DataIntegrityError):
            radiator_mass(1e6, Radiator("Broken", "Broken", specific_power_kw_kg=0.0))
