"""Shared pytest fixtures for racecourse_planner tests.

Provides a start line, hand-placed course marks and generated courses
reused across the test modules. All fixtures use explicit values.

COORDINATE SYSTEM:
    Tests sit at 50°N, 1°W (a Solent-like latitude) so that longitude
    degrees are visibly shorter than latitude degrees. Courses are built
    with GeoPoint.moved() from the start line centre, so distances and
    bearings in assertions are exact up to floating point noise.
"""

import pytest

from racecourse_planner.generators.role_course import generate_role_course
from racecourse_planner.model.geo_point import GeoPoint
from racecourse_planner.model.mark import Mark

START_LAT = 50.0
START_LNG = -1.0


@pytest.fixture
def start_center() -> GeoPoint:
    """Start line centre used as origin of every test course."""
    return GeoPoint(lat=START_LAT, lng=START_LNG)


@pytest.fixture
def start_line_marks(start_center: GeoPoint) -> list[Mark]:
    """Committee boat and pin, 300m apart, centred on start_center, line square to a north wind."""
    committee = start_center.moved(bearing_deg=90.0, distance_m=150.0)
    pin = start_center.moved(bearing_deg=270.0, distance_m=150.0)
    return [
        Mark(id="committee", lat=committee.lat, lng=committee.lng, role="start_boat"),
        Mark(id="pin", lat=pin.lat, lng=pin.lng, role="pin"),
    ]


@pytest.fixture
def skewed_course(start_center: GeoPoint) -> list[Mark]:
    """Windward/leeward course laid for a 005° wind, now checked against a north wind.

    Windward: 1000m at 005° from the start centre (5° off a north wind target)
    Leeward: 1000m at 185° back from the windward mark
    """
    windward = start_center.moved(bearing_deg=5.0, distance_m=1000.0)
    leeward = windward.moved(bearing_deg=185.0, distance_m=1000.0)
    return [
        Mark(id="W", lat=windward.lat, lng=windward.lng, role="windward", order=1),
        Mark(id="L", lat=leeward.lat, lng=leeward.lng, role="leeward", order=2),
    ]


@pytest.fixture
def windward_leeward_course(start_center: GeoPoint) -> list[Mark]:
    """Generated windward/leeward course (spinnaker, north wind, 500m)."""
    return generate_role_course(
        course_type="windward_leeward",
        boat_class="spinnaker",
        start_line_center=start_center,
        wind_direction=0.0,
        course_length_m=500.0,
    )
