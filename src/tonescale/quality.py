"""Perceptual quality scoring of a scale.

A good ramp has evenly spaced steps: every pair of adjacent levels should be
about the same CIEDE2000 distance apart, near a target of 10. The report here
is informational; it never decides whether a scale is accessible.
"""

from dataclasses import dataclass

import numpy as np

from .constants import MAX_ADJACENT_DELTA_E, MIN_ADJACENT_DELTA_E, TARGET_DELTA_E
from .difference import adjacent_delta_e
from .scale import Scale

__all__ = ["QualityReport", "scale_quality"]


@dataclass(frozen=True)
class QualityReport:
    deltas: tuple[float, ...]
    mean: float
    minimum: float
    maximum: float
    std: float
    target_deviation: float
    uniformity: float
    issues: tuple[str, ...] = ()

    @property
    def is_uniform(self) -> bool:
        return not self.issues


def scale_quality(scale: Scale, target: float = TARGET_DELTA_E) -> QualityReport:
    """Score the spacing of adjacent swatches in ``scale``.

    ``uniformity`` is 100 for perfectly even steps and falls with the
    coefficient of variation of the adjacent differences, down to 0.
    """
    swatches = list(scale)
    deltas = adjacent_delta_e([s.rgb for s in swatches])

    if deltas.size == 0:
        return QualityReport(
            deltas=(),
            mean=0.0,
            minimum=0.0,
            maximum=0.0,
            std=0.0,
            target_deviation=0.0,
            uniformity=100.0,
        )

    mean = float(deltas.mean())
    std = float(deltas.std())
    variation = std / mean if mean > 0 else 1.0
    uniformity = float(np.clip(100.0 * (1.0 - variation), 0.0, 100.0))

    issues = []
    for (first, second), delta in zip(zip(swatches, swatches[1:]), deltas):
        if delta < MIN_ADJACENT_DELTA_E:
            issues.append(
                f"Levels {first.level} and {second.level} are nearly indistinguishable "
                f"(dE {delta:.1f})"
            )
        elif delta > MAX_ADJACENT_DELTA_E:
            issues.append(
                f"Large perceptual jump between levels {first.level} and {second.level} "
                f"(dE {delta:.1f})"
            )

    return QualityReport(
        deltas=tuple(float(d) for d in deltas),
        mean=mean,
        minimum=float(deltas.min()),
        maximum=float(deltas.max()),
        std=std,
        target_deviation=float(np.abs(deltas - target).mean()),
        uniformity=uniformity,
        issues=tuple(issues),
    )
