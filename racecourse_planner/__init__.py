"""Race Course Planner - Lay out and re-align sailing race courses to the wind.

Geometry and wind-adjustment engine for race officers:
- Spherical geodesics (distance, bearing, destination) in meters and NM
- Wind-relative bearing tables per mark role, course type and boat class
- Sequential re-alignment of a whole course after a wind shift
- Guided single-mark adjustment and start line squaring
- Triangle/trapezoid templates and role-driven course generation
- Angle-fit optimizer snapping a mark to a target interior angle

Modules:
    core: Foundation math (geo calculations, bearings, role tables, course geometry)
    model: Data structures (GeoPoint, Mark, warnings, results, CourseState)
    adjusters: Wind adjustment algorithms and their validators
    generators: Course layout from templates and role tables

Example:
    from racecourse_planner.adjusters import calculate_sequential_adjustments
    from racecourse_planner.generators import generate_role_course
    from racecourse_planner.model import CourseState, GeoPoint
"""
