"""Tests for racecourse_planner core functionality.

Tests: GeoCalculator, bearings, role bearing tables, course geometry
Focus: Known geometric values plus Hypothesis properties of the circular math

Note: Fixtures are defined in conftest.py (start_center).
"""

from math import cos, radians

import pytest
from hypothesis import assume, given, settings, strategies as st

from racecourse_planner.core.bearings import (
    angular_difference,
    bearing_delta,
    format_wind_relative,
    interior_angle,
    normalize_bearing,
    start_line_wind_angle,
    wind_relative_angle,
)
from racecourse_planner.core.course_geometry import (
    build_legs,
    clamp_course_scale,
    get_course_center,
    get_course_radius,
    rotate_course,
    scale_course,
    total_distance_nm,
)
from racecourse_planner.core.geo_calculator import GeoCalculator
from racecourse_planner.core.role_bearings import (
    calculate_new_position,
    relative_bearing,
    resolve_bearing,
    role_bearing_label,
    sequenced_table,
    simple_table,
    target_leg_bearing,
)
from racecourse_planner.model.geo_point import GeoPoint, bearing_between, destination_point, distance_between
from racecourse_planner.model.mark import GateSide

bearings = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False)
compass = st.floats(min_value=0.0, max_value=359.999, allow_nan=False)


# =============================================================================
# GEO CALCULATOR
# =============================================================================


class TestGeoCalculator:
    """GeoCalculator - geodesic calculations on a spherical Earth."""

    def test_haversine_distance_one_degree_latitude(self) -> None:
        """1 degree latitude ≈ 111.2km on R = 6371km."""
        dist = GeoCalculator.haversine_distance_m(lat1=50.0, lng1=-1.0, lat2=51.0, lng2=-1.0)
        assert 111_000 < dist < 111_400

    def test_haversine_distance_one_degree_longitude(self) -> None:
        """1 degree longitude at 50°N ≈ 111km * cos(50°)."""
        dist = GeoCalculator.haversine_distance_m(lat1=50.0, lng1=-1.0, lat2=50.0, lng2=0.0)
        expected = 111_195 * cos(radians(50))
        assert abs(dist - expected) < 200

    def test_haversine_distance_nm_one_degree_latitude(self) -> None:
        """1 degree latitude ≈ 60 NM on R = 3440.065 NM."""
        dist = GeoCalculator.haversine_distance_nm(lat1=0.0, lng1=0.0, lat2=1.0, lng2=0.0)
        assert abs(dist - 60.04) < 0.01

    def test_identical_points_zero_distance(self) -> None:
        """Distance from a point to itself is exactly zero."""
        assert GeoCalculator.haversine_distance_m(50.0, -1.0, 50.0, -1.0) == 0.0

    def test_unit_conversions(self) -> None:
        """1 NM = 1852 m."""
        assert GeoCalculator.m_to_nm(1852.0) == pytest.approx(1.0)
        assert GeoCalculator.nm_to_m(2.0) == pytest.approx(3704.0)

    def test_bearing_cardinal_directions(self) -> None:
        """North, east, south and west from the equator."""
        assert GeoCalculator.initial_bearing_deg(0.0, 0.0, 1.0, 0.0) == pytest.approx(0.0, abs=1e-9)
        assert GeoCalculator.initial_bearing_deg(0.0, 0.0, 0.0, 1.0) == pytest.approx(90.0)
        assert GeoCalculator.initial_bearing_deg(0.0, 0.0, -1.0, 0.0) == pytest.approx(180.0)
        assert GeoCalculator.initial_bearing_deg(0.0, 0.0, 0.0, -1.0) == pytest.approx(270.0)

    def test_bearing_to_same_point_is_zero(self) -> None:
        """Degenerate bearing is 0, not NaN."""
        assert GeoCalculator.initial_bearing_deg(50.0, -1.0, 50.0, -1.0) == 0.0

    def test_destination_roundtrip(self) -> None:
        """destination() agrees with haversine distance and initial bearing."""
        lat, lng = GeoCalculator.destination(lat=50.0, lng=-1.0, bearing_deg=45.0, distance_m=1000.0)
        assert GeoCalculator.haversine_distance_m(50.0, -1.0, lat, lng) == pytest.approx(1000.0, abs=0.01)
        assert GeoCalculator.initial_bearing_deg(50.0, -1.0, lat, lng) == pytest.approx(45.0, abs=1e-6)

    def test_destination_wraps_antimeridian(self) -> None:
        """Crossing 180° east comes back as negative longitude."""
        lat, lng = GeoCalculator.destination(lat=0.0, lng=179.99, bearing_deg=90.0, distance_m=5000.0)
        assert -180.0 <= lng < -179.9
        assert abs(lat) < 1e-9

    @given(
        lat=st.floats(min_value=-70.0, max_value=70.0),
        lng=st.floats(min_value=-179.0, max_value=179.0),
        bearing=compass,
        distance=st.floats(min_value=10.0, max_value=20_000.0),
    )
    @settings(max_examples=50)
    def test_destination_preserves_distance_and_bearing(
        self, lat: float, lng: float, bearing: float, distance: float
    ) -> None:
        """Moving along a bearing lands at that distance and initial bearing."""
        origin = GeoPoint(lat=lat, lng=lng)
        end = destination_point(origin, bearing_deg=bearing, distance_m=distance)
        assert distance_between(origin, end) == pytest.approx(distance, rel=1e-6)
        assert angular_difference(bearing_between(origin, end), bearing) < 1e-6

    def test_distance_between_units(self, start_center: GeoPoint) -> None:
        """distance_between reports meters by default, NM on request."""
        end = start_center.moved(bearing_deg=0.0, distance_m=1852.0)
        assert distance_between(start_center, end) == pytest.approx(1852.0, abs=1e-3)
        assert distance_between(start_center, end, unit="nm") == pytest.approx(1.0, abs=1e-4)


# =============================================================================
# BEARINGS
# =============================================================================


class TestNormalizeBearing:
    """normalize_bearing - canonical [0, 360) bearings."""

    def test_known_values(self) -> None:
        """Negative, oversize and boundary values wrap."""
        assert normalize_bearing(0.0) == 0.0
        assert normalize_bearing(360.0) == 0.0
        assert normalize_bearing(-10.0) == 350.0
        assert normalize_bearing(725.0) == 5.0

    def test_tiny_negative_does_not_return_360(self) -> None:
        """-1e-15 % 360 rounds to 360.0 in float math; result must stay < 360."""
        assert normalize_bearing(-1e-15) < 360.0

    @given(bearing=bearings)
    def test_range(self, bearing: float) -> None:
        """Every finite input maps into [0, 360)."""
        result = normalize_bearing(bearing)
        assert 0.0 <= result < 360.0

    @given(bearing=bearings)
    def test_idempotent(self, bearing: float) -> None:
        """Normalizing twice changes nothing."""
        once = normalize_bearing(bearing)
        assert normalize_bearing(once) == once


class TestBearingDelta:
    """bearing_delta - signed shortest rotation."""

    def test_known_values(self) -> None:
        """Crossing north takes the short way round."""
        assert bearing_delta(350.0, 10.0) == pytest.approx(20.0)
        assert bearing_delta(10.0, 350.0) == pytest.approx(-20.0)
        assert bearing_delta(90.0, 90.0) == 0.0

    def test_opposite_bearings_are_plus_180(self) -> None:
        """Exactly opposite bearings resolve to +180 in both directions."""
        assert bearing_delta(0.0, 180.0) == 180.0
        assert bearing_delta(180.0, 0.0) == 180.0

    @given(a=bearings, b=bearings)
    def test_range(self, a: float, b: float) -> None:
        """Deltas lie in (-180, 180]."""
        delta = bearing_delta(a, b)
        assert -180.0 < delta <= 180.0

    @given(a=compass, b=compass)
    def test_antisymmetric_away_from_180(self, a: float, b: float) -> None:
        """delta(a, b) = -delta(b, a) except at the ±180 boundary."""
        assume(angular_difference(a, b) < 179.9)
        assert bearing_delta(a, b) == pytest.approx(-bearing_delta(b, a), abs=1e-9)

    @given(a=compass, b=compass)
    def test_rotating_by_delta_reaches_target(self, a: float, b: float) -> None:
        """normalize(a + delta(a, b)) lands on b."""
        assert angular_difference(normalize_bearing(a + bearing_delta(a, b)), b) < 1e-9


class TestWindAngles:
    """Wind-relative leg and start line angles."""

    def test_wind_relative_angle_positive(self) -> None:
        """Leg 15° clockwise of the wind."""
        angle = wind_relative_angle(leg_bearing=45.0, wind_direction=30.0)
        assert angle.signed == pytest.approx(15.0)
        assert angle.absolute == pytest.approx(15.0)
        assert format_wind_relative(angle.signed) == "+15° to wind"

    def test_wind_relative_angle_negative(self) -> None:
        """Leg 120° counter-clockwise of the wind."""
        angle = wind_relative_angle(leg_bearing=270.0, wind_direction=30.0)
        assert angle.signed == pytest.approx(-120.0)
        assert angle.absolute == pytest.approx(120.0)
        assert format_wind_relative(angle.signed) == "-120° to wind"

    def test_square_line_is_zero_either_way(self) -> None:
        """A line has no direction: 090° and 270° are both square to a north wind."""
        assert start_line_wind_angle(line_bearing=90.0, wind_direction=0.0).signed == pytest.approx(0.0)
        assert start_line_wind_angle(line_bearing=270.0, wind_direction=0.0).signed == pytest.approx(0.0)

    def test_skewed_line_folds(self) -> None:
        """100° and 280° lines are the same 10° skew."""
        assert start_line_wind_angle(line_bearing=100.0, wind_direction=0.0).signed == pytest.approx(10.0)
        assert start_line_wind_angle(line_bearing=280.0, wind_direction=0.0).signed == pytest.approx(10.0)
        assert start_line_wind_angle(line_bearing=80.0, wind_direction=0.0).signed == pytest.approx(-10.0)

    @given(line=compass, wind=compass)
    def test_line_angle_range(self, line: float, wind: float) -> None:
        """Line deviation lies in (-90, 90]."""
        angle = start_line_wind_angle(line_bearing=line, wind_direction=wind)
        assert -90.0 < angle.signed <= 90.0
        assert angle.absolute == abs(angle.signed)

    def test_interior_angle_right_angle(self) -> None:
        """South to mark, then east: 90° turn."""
        angle = interior_angle(-0.01, 0.0, 0.0, 0.0, 0.0, 0.01)
        assert angle == pytest.approx(90.0, abs=1e-9)

    def test_interior_angle_straight_through(self) -> None:
        """Previous and next on opposite sides: 180°."""
        angle = interior_angle(-0.01, 0.0, 0.0, 0.0, 0.01, 0.0)
        assert angle == pytest.approx(180.0, abs=1e-9)


# =============================================================================
# ROLE BEARINGS
# =============================================================================


class TestRelativeBearing:
    """relative_bearing - single resolver for wind-relative leg bearings."""

    def test_fixed_roles(self) -> None:
        """Windward dead upwind, leeward dead downwind, offset 10° right."""
        assert relative_bearing("windward", 0, "spinnaker") == 0.0
        assert relative_bearing("leeward", 0, "spinnaker") == 180.0
        assert relative_bearing("offset", 0, "spinnaker") == 10.0

    def test_leeward_gate_spread(self) -> None:
        """Gate members sit 5° either side of the leeward bearing."""
        assert relative_bearing("leeward", 0, "spinnaker", gate_side="port") == 175.0
        assert relative_bearing("leeward", 1, "spinnaker", gate_side=GateSide.STARBOARD) == 185.0

    @pytest.mark.parametrize(
        "boat_class, first, second",
        [("spinnaker", 120.0, 240.0), ("non_spinnaker", 110.0, 250.0), ("foiling", 100.0, 260.0)],
    )
    def test_wing_by_boat_class(self, boat_class: str, first: float, second: float) -> None:
        """First wing at +reach angle, later wings mirrored."""
        assert relative_bearing("wing", 0, boat_class) == first
        assert relative_bearing("wing", 1, boat_class) == second
        assert relative_bearing("wing", 2, boat_class) == second

    @pytest.mark.parametrize("role", ["start_boat", "pin", "finish", "turning_mark", "gate", "other"])
    def test_roles_without_target(self, role: str) -> None:
        """Start, finish and custom roles have no wind-relative bearing."""
        assert relative_bearing(role, 0, "spinnaker") is None

    def test_unknown_boat_class_raises(self) -> None:
        """Boat class is an enum; typos are programming errors."""
        with pytest.raises(ValueError):
            relative_bearing("wing", 0, "catamaran")


class TestBearingTables:
    """Sequenced and simple tables derived from the course topology."""

    def test_windward_leeward_sequence(self) -> None:
        """Leeward gate expands into port then starboard."""
        table = sequenced_table("windward_leeward", "spinnaker")
        assert [e.role for e in table] == ["windward", "offset", "leeward", "leeward"]
        assert [e.index for e in table] == [0, 0, 0, 1]
        assert [e.gate_side for e in table] == [None, None, GateSide.PORT, GateSide.STARBOARD]
        assert [e.bearing for e in table] == [0.0, 10.0, 175.0, 185.0]
        assert [e.is_gate for e in table] == [False, False, True, True]

    def test_trapezoid_wings_mirror(self) -> None:
        """The second wing of a trapezoid is passed on the other side."""
        wings = [e for e in sequenced_table("trapezoid", "spinnaker") if e.role == "wing"]
        assert [(e.index, e.bearing) for e in wings] == [(0, 120.0), (1, 240.0)]

    def test_distance_ratios_non_negative(self) -> None:
        """Every entry scales the course length by a non-negative ratio."""
        for course_type in ("windward_leeward", "triangle", "trapezoid"):
            assert all(e.distance_ratio >= 0 for e in sequenced_table(course_type, "foiling"))

    @pytest.mark.parametrize("boat_class", ["spinnaker", "non_spinnaker", "foiling"])
    @pytest.mark.parametrize("course_type", ["windward_leeward", "triangle", "trapezoid"])
    def test_every_entry_has_a_bearing(self, course_type: str, boat_class: str) -> None:
        """Every topology role resolves to a real bearing in [0, 360)."""
        for entry in sequenced_table(course_type, boat_class):
            assert isinstance(entry.bearing, float)
            assert 0.0 <= entry.bearing < 360.0

    def test_simple_table_collapses_gates(self) -> None:
        """Simple table has one entry per role, gate at the leeward centre."""
        table = simple_table("windward_leeward", "spinnaker")
        assert set(table) == {"windward", "offset", "leeward"}
        assert table["leeward"].bearing == 180.0
        assert table["leeward"].distance_ratio == 1.0

    def test_simple_table_matches_sequenced_first_occurrence(self) -> None:
        """Both tables come from one resolver and agree on non-gate roles."""
        simple = simple_table("trapezoid", "non_spinnaker")
        for entry in sequenced_table("trapezoid", "non_spinnaker"):
            if entry.index == 0 and not entry.is_gate:
                assert simple[entry.role].bearing == entry.bearing

    def test_resolve_exact_index(self) -> None:
        """Exact role occurrence is found."""
        entry = resolve_bearing("leeward", 1, "windward_leeward", "spinnaker")
        assert entry is not None
        assert entry.gate_side is GateSide.STARBOARD
        assert entry.bearing == 185.0

    def test_resolve_falls_back_to_first_occurrence(self) -> None:
        """Unknown occurrence index uses index 0."""
        entry = resolve_bearing("wing", 5, "trapezoid", "spinnaker")
        assert entry is not None
        assert entry.index == 0
        assert entry.bearing == 120.0

    def test_resolve_missing_role(self) -> None:
        """A role absent from the course type has no entry."""
        assert resolve_bearing("wing", 0, "windward_leeward", "spinnaker") is None


class TestTargetLegBearing:
    """target_leg_bearing - absolute bearing for the leg arriving at a mark."""

    def test_adds_wind(self) -> None:
        """Leeward in a 350° wind is 170°."""
        assert target_leg_bearing("leeward", 350.0, "spinnaker", role_index=0) == pytest.approx(170.0)

    def test_gate_side_only_counts_for_gates(self) -> None:
        """gate_side is ignored unless the mark is a gate member."""
        gate = target_leg_bearing("leeward", 350.0, "spinnaker", 0, is_gate=True, gate_side="port")
        plain = target_leg_bearing("leeward", 350.0, "spinnaker", 0, is_gate=False, gate_side="port")
        assert gate == pytest.approx(165.0)
        assert plain == pytest.approx(170.0)

    def test_no_target(self) -> None:
        """Pin has no target."""
        assert target_leg_bearing("pin", 90.0, "spinnaker", 0) is None

    def test_labels(self) -> None:
        """Labels for known roles, 'Custom' otherwise."""
        assert role_bearing_label("pin") == "Start Line"
        assert role_bearing_label("windward") == "Windward (0° from wind)"
        assert role_bearing_label("gate") == "Custom"

    def test_calculate_new_position(self, start_center: GeoPoint) -> None:
        """Wind-relative 0° in an east wind points east."""
        position = calculate_new_position(center=start_center, wind_direction=90.0, bearing=0.0, distance_m=1000.0)
        assert start_center.bearing_to(position) == pytest.approx(90.0, abs=1e-6)
        assert start_center.distance_to(position) == pytest.approx(1000.0, abs=1e-3)


# =============================================================================
# COURSE GEOMETRY
# =============================================================================


class TestCourseGeometry:
    """Whole-course centre, radius, rotation, scaling and legs."""

    def test_center_is_mean(self) -> None:
        """Course centre is the arithmetic mean of positions."""
        center = get_course_center([GeoPoint(0.0, 0.0), GeoPoint(2.0, 2.0)])
        assert center == GeoPoint(1.0, 1.0)

    def test_center_of_empty_course(self) -> None:
        """Empty course centres on (0, 0)."""
        assert get_course_center([]) == GeoPoint(0.0, 0.0)

    def test_radius_bounds(self, start_center: GeoPoint) -> None:
        """Empty course gets the default radius, tiny course the minimum."""
        assert get_course_radius([], start_center) == 500.0
        nearby = start_center.moved(bearing_deg=0.0, distance_m=10.0)
        assert get_course_radius([nearby], start_center) == 100.0

    def test_radius_is_farthest_point(self, start_center: GeoPoint) -> None:
        """Radius is the distance to the farthest point."""
        points = [
            start_center.moved(bearing_deg=0.0, distance_m=400.0),
            start_center.moved(bearing_deg=180.0, distance_m=900.0),
        ]
        assert get_course_radius(points, start_center) == pytest.approx(900.0, abs=1e-3)

    def test_rotate_quarter_turn_clockwise(self, start_center: GeoPoint) -> None:
        """A point east of the centre rotates to the south at the same distance."""
        east = start_center.moved(bearing_deg=90.0, distance_m=500.0)
        (rotated,) = rotate_course([east], center=start_center, angle_deg=90.0)
        assert start_center.distance_to(rotated) == pytest.approx(500.0, abs=1e-3)
        assert start_center.bearing_to(rotated) == pytest.approx(180.0, abs=1e-6)

    def test_rotate_leaves_centre_in_place(self, start_center: GeoPoint) -> None:
        """The rotation centre does not move."""
        (rotated,) = rotate_course([start_center], center=start_center, angle_deg=45.0)
        assert start_center.distance_to(rotated) < 1e-6

    @given(
        bearing=st.floats(min_value=0.0, max_value=359.0),
        distance=st.floats(min_value=10.0, max_value=5000.0),
        angle=st.floats(min_value=-180.0, max_value=180.0),
    )
    @settings(max_examples=50)
    def test_rotate_keeps_distance_to_centre(self, bearing: float, distance: float, angle: float) -> None:
        """Rotation never stretches a leg from the centre."""
        center = GeoPoint(50.0, -1.0)
        point = center.moved(bearing_deg=bearing, distance_m=distance)
        (rotated,) = rotate_course([point], center=center, angle_deg=angle)
        assert center.distance_to(rotated) == pytest.approx(distance, abs=1e-3)
        assert angular_difference(center.bearing_to(rotated), normalize_bearing(bearing + angle)) < 1e-6

    def test_scale_doubles_offsets(self) -> None:
        """Scaling by 2 doubles every offset from the centre."""
        center = GeoPoint(50.0, -1.0)
        (scaled,) = scale_course([GeoPoint(50.01, -0.98)], center=center, factor=2.0)
        assert scaled.lat == pytest.approx(50.02)
        assert scaled.lng == pytest.approx(-0.96)

    def test_clamp_course_scale(self) -> None:
        """Scale factor clamped to [0.5, 3.0]."""
        assert clamp_course_scale(10.0) == 3.0
        assert clamp_course_scale(0.1) == 0.5
        assert clamp_course_scale(1.2) == 1.2

    def test_build_legs_in_nautical_miles(self, start_center: GeoPoint) -> None:
        """Two 1 NM legs: north then east."""
        first = start_center.moved(bearing_deg=0.0, distance_m=1852.0)
        second = first.moved(bearing_deg=90.0, distance_m=1852.0)
        legs = build_legs([("start", start_center), ("M1", first), ("M2", second)])

        assert [(leg.from_id, leg.to_id) for leg in legs] == [("start", "M1"), ("M1", "M2")]
        assert legs[0].distance_nm == pytest.approx(1.0, abs=1e-4)
        assert angular_difference(legs[0].bearing, 0.0) < 1e-6
        assert legs[1].bearing == pytest.approx(90.0, abs=1e-6)
        assert total_distance_nm(legs) == pytest.approx(2.0, abs=1e-3)

    def test_build_legs_single_waypoint(self, start_center: GeoPoint) -> None:
        """One waypoint has no legs."""
        assert build_legs([("start", start_center)]) == []
        assert total_distance_nm([]) == 0
