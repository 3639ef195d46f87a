"""Course generation.

Provides fresh mark layouts oriented to the wind:
- Shape templates: triangle (law of sines) and trapezoid catalogs
- Role course: marks laid straight from the role bearing table
"""

from racecourse_planner.generators.role_course import generate_role_course
from racecourse_planner.generators.shape_templates import (
    ALL_SHAPE_TEMPLATES,
    TRAPEZOID_TEMPLATES,
    TRIANGLE_TEMPLATES,
    GeneratedMark,
    ShapeTemplate,
    TemplateGeneration,
    generate_template_marks,
    generate_trapezoid,
    generate_triangle,
    get_template_by_id,
    get_templates_for_mark_count,
)

__all__ = [
    "ShapeTemplate",
    "GeneratedMark",
    "TemplateGeneration",
    "TRIANGLE_TEMPLATES",
    "TRAPEZOID_TEMPLATES",
    "ALL_SHAPE_TEMPLATES",
    "get_template_by_id",
    "get_templates_for_mark_count",
    "generate_triangle",
    "generate_trapezoid",
    "generate_template_marks",
    "generate_role_course",
]
