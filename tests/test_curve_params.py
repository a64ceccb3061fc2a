"""
Unit tests for CurveParams class.

Tests the physical constant defaults, validation and derived parameters.
"""

import pytest

from banked_curve import CurveParams


class TestCurveParams:
    """Test suite for CurveParams dataclass"""

    def test_default_initialization(self) -> None:
        """Test that CurveParams initializes with default values"""
        params = CurveParams()

        assert params.gravity == 9.8  # m/s²
        assert params.train_mass == 1000.0  # kg
        assert params.perfect_tolerance == 0.5  # m/s

    def test_custom_initialization(self) -> None:
        """Test that CurveParams can be initialized with custom values"""
        params = CurveParams(gravity=9.81, train_mass=50000.0, perfect_tolerance=1.0)

        assert params.gravity == 9.81
        assert params.train_mass == 50000.0
        assert params.perfect_tolerance == 1.0

    def test_weight_calculation(self) -> None:
        """Test that weight is calculated correctly in __post_init__"""
        params = CurveParams()

        assert abs(params.weight - 9800.0) < 1e-6

    def test_weight_scales_with_mass(self) -> None:
        """Test that weight scales linearly with mass"""
        params1 = CurveParams(train_mass=1000.0)
        params2 = CurveParams(train_mass=2000.0)

        assert abs(params2.weight - 2 * params1.weight) < 1e-6

    @pytest.mark.parametrize("field, value", [
        ("gravity", 0.0),
        ("gravity", -9.8),
        ("train_mass", 0.0),
        ("train_mass", -1.0),
        ("perfect_tolerance", -0.1),
    ])
    def test_invalid_constants_rejected(self, field: str, value: float) -> None:
        """Test that non-physical constants raise ValueError"""
        with pytest.raises(ValueError):
            CurveParams(**{field: value})

    def test_zero_tolerance_allowed(self) -> None:
        """Test that a zero tolerance is accepted"""
        params = CurveParams(perfect_tolerance=0.0)

        assert params.perfect_tolerance == 0.0
