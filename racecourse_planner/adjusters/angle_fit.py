"""Angle-fit optimizer - Snap a mark so the turn at it matches a target angle.

The mark swings on a circle around the previous mark (leg length held
fixed). The interior angle at the mark is not unimodal along that circle:
there are generically two solutions, one each side of the leg.

Search:
    1. Coarse sweep of rotations 0..358° in COARSE_STEP_DEG steps
    2. Local minima of |angle - target| on the circular error curve, plus the
       global best sample
    3. Smallest error wins; candidates within TIE_TOLERANCE_DEG of the best
       prefer the smaller rotation from the current position
    4. Fine sweep ±FINE_WINDOW_DEG around the winner in FINE_STEP_DEG steps

Unreachable targets return the best approximation with its residual error.
"""

import logging
from dataclasses import dataclass

import numpy as np

from racecourse_planner.constants import OptimizerConfig
from racecourse_planner.core.bearings import interior_angle
from racecourse_planner.model.geo_point import GeoPoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AngleFitResult:
    """Best-effort repositioning of a mark to a target interior angle.

    Attributes:
        lat, lng: Refined mark position
        original_angle: Interior angle before fitting
        target_angle: Requested interior angle
        achieved_angle: Interior angle at the refined position
        residual_error: |achieved_angle - target_angle|
        rotation: Signed rotation about the previous mark, (-180, 180]
    """

    lat: float
    lng: float
    original_angle: float
    target_angle: float
    achieved_angle: float
    residual_error: float
    rotation: float

    @property
    def position(self) -> GeoPoint:
        return GeoPoint(lat=self.lat, lng=self.lng)


def _signed_rotation(rotation: np.ndarray | float) -> np.ndarray:
    """Map rotations to (-180, 180] so magnitudes compare as disturbance."""
    wrapped = np.mod(rotation, 360.0)
    return np.where(wrapped > 180.0, wrapped - 360.0, wrapped)


class AngleFitOptimizer:
    """Reposition one vertex of a course to a target interior angle.

    Example:
        optimizer = AngleFitOptimizer(prev=m1, mark=m2, next_mark=m3)
        result = optimizer.fit(target_angle=60.0)
        if result.residual_error > 1.0:
            ...  # warn the user the template angle was not reachable
    """

    def __init__(self, prev: GeoPoint, mark: GeoPoint, next_mark: GeoPoint) -> None:
        self.prev = prev
        self.mark = mark
        self.next_mark = next_mark
        self.leg_distance_m = prev.distance_to(mark)
        self.leg_bearing = prev.bearing_to(mark)

    def candidate(self, rotation: float) -> GeoPoint:
        """Mark position after rotating the leg by rotation degrees."""
        return self.prev.moved(bearing_deg=self.leg_bearing + rotation, distance_m=self.leg_distance_m)

    def angle_at(self, position: GeoPoint) -> float:
        """Interior angle at a position between the previous and next marks."""
        return interior_angle(
            self.prev.lat,
            self.prev.lng,
            position.lat,
            position.lng,
            self.next_mark.lat,
            self.next_mark.lng,
        )

    def _errors(self, rotations: np.ndarray, target_angle: float) -> np.ndarray:
        return np.array([abs(self.angle_at(self.candidate(float(r))) - target_angle) for r in rotations])

    def _choose_coarse(self, rotations: np.ndarray, errors: np.ndarray) -> float:
        # Circular neighbours: 358° is adjacent to 0°
        is_minimum = (errors < np.roll(errors, 1)) & (errors < np.roll(errors, -1))
        candidates = set(np.flatnonzero(is_minimum).tolist())
        candidates.add(int(np.argmin(errors)))

        best_error = min(errors[i] for i in candidates)
        contenders = [i for i in candidates if errors[i] - best_error <= OptimizerConfig.TIE_TOLERANCE_DEG]
        chosen = min(contenders, key=lambda i: (abs(float(_signed_rotation(rotations[i]))), errors[i]))

        logger.debug(
            f"Angle fit coarse: {len(candidates)} candidates, chose {rotations[chosen]:.0f}° "
            f"(error {errors[chosen]:.2f}°)"
        )
        return float(rotations[chosen])

    def _refine(self, rotation: float, target_angle: float) -> float:
        steps = int(round(OptimizerConfig.FINE_WINDOW_DEG / OptimizerConfig.FINE_STEP_DEG))
        offsets = np.arange(-steps, steps + 1) * OptimizerConfig.FINE_STEP_DEG
        rotations = rotation + offsets
        errors = self._errors(rotations, target_angle)
        # Equal errors prefer the smaller overall rotation
        order = np.lexsort((np.abs(_signed_rotation(rotations)), errors))
        return float(rotations[order[0]])

    def fit(self, target_angle: float) -> AngleFitResult:
        """Find the position whose interior angle best matches target_angle."""
        original_angle = self.angle_at(self.mark)

        rotations = np.arange(0.0, OptimizerConfig.COARSE_SPAN_DEG, OptimizerConfig.COARSE_STEP_DEG)
        errors = self._errors(rotations, target_angle)
        coarse = self._choose_coarse(rotations, errors)
        refined = self._refine(coarse, target_angle)

        position = self.candidate(refined)
        achieved = self.angle_at(position)
        residual = abs(achieved - target_angle)

        if residual > OptimizerConfig.FINE_STEP_DEG:
            logger.warning(
                f"Angle fit could not reach {target_angle:.1f}°: best {achieved:.1f}° (residual {residual:.1f}°)"
            )
        logger.info(
            f"Angle fit: {original_angle:.1f}° → {achieved:.1f}° (target {target_angle:.1f}°), "
            f"rotated {float(_signed_rotation(refined)):+.1f}°"
        )

        return AngleFitResult(
            lat=position.lat,
            lng=position.lng,
            original_angle=original_angle,
            target_angle=target_angle,
            achieved_angle=achieved,
            residual_error=residual,
            rotation=float(_signed_rotation(refined)),
        )


def fit_mark_to_angle(
    prev: GeoPoint,
    mark: GeoPoint,
    next_mark: GeoPoint,
    target_angle: float,
) -> AngleFitResult:
    """Reposition mark (fixed distance from prev) so the angle at it is target_angle."""
    return AngleFitOptimizer(prev=prev, mark=mark, next_mark=next_mark).fit(target_angle=target_angle)
