"""
Test suite for the Banked Rail Curve model.

This package contains unit tests organized by component:
- test_curve_params.py: Tests for CurveParams class
- test_physics_engine.py: Tests for force calculations and domain checks
- test_status_classification.py: Tests for status priority and tolerance band
- test_force_geometry.py: Tests for slope frame rotation and force vector layout
- test_controls.py: Tests for the control surface model
- test_velocity_sweep.py: Tests for velocity and bank angle sweeps
- test_app.py: Tests for dashboard figure builders
"""
