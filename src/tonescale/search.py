"""Staged search for an accessible color close to an original one.

When a base color fails the active accessibility mode, the search looks for
the nearest passing color in HSL space. Candidates come from three widening
stages:

1. Hue held fixed; lightness swept near the original and across the band
   that suits the render mode, crossed with a saturation range derived from
   the original saturation.
2. Hue within +/-30 degrees in steps of 5; saturation in steps of 10 and
   lightness in steps of 5 over their full ranges.
3. Hue within +/-60 degrees in steps of 15; saturation in steps of 20 and
   lightness in steps of 10.

Each stage is a lazy generator. Candidates are pulled in fixed-size chunks and
evaluated in one vectorized batch; a stage stops being consumed once a passing
candidate closer than the stage's "good enough" threshold (20, 40, 80) has
been seen. Among passing candidates the smallest weighted distance wins and
the earliest one wins an exact tie. When nothing passes, a short table of
hue-preserving variants is tried and finally a canonical swatch for the
original's hue family.
"""

import enum
import itertools
import logging
from collections.abc import Iterable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, NamedTuple

import numpy as np

from .color_utils import HSL, clamp_hsl, hsl_to_rgb, normalize_hue
from .constants import (
    DARK_MODE_LIGHTNESS_BAND,
    FAMILY_ACCESSIBLE_SWATCHES,
    HUE_FAMILY_BUCKETS,
    HUE_WEIGHT,
    LIGHT_MODE_LIGHTNESS_BAND,
    LIGHTNESS_WEIGHT,
    SATURATION_WEIGHT,
    SCORE_EPSILON,
    SEARCH_CHUNK_SIZE,
    SMART_LIGHTNESS_RADIUS,
)
from .contrast import AccessibilityMode, evaluate, evaluate_batch

__all__ = [
    "RenderMode",
    "DistanceWeights",
    "DEFAULT_WEIGHTS",
    "SearchStage",
    "SEARCH_STAGES",
    "Candidate",
    "SearchOutcome",
    "hsl_distance",
    "hue_difference",
    "stage_candidates",
    "hue_preserving_fallbacks",
    "hue_family",
    "family_swatch",
    "search_accessible",
    "find_accessible",
]

logger = logging.getLogger(__name__)


class RenderMode(enum.Enum):
    """Whether the accessible color is meant for a light or a dark UI."""

    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class DistanceWeights:
    hue: float = HUE_WEIGHT
    saturation: float = SATURATION_WEIGHT
    lightness: float = LIGHTNESS_WEIGHT


DEFAULT_WEIGHTS = DistanceWeights()


def hue_difference(h1: Any, h2: Any) -> Any:
    """Circular hue difference in degrees, in [0, 180]."""
    diff = np.abs(np.asarray(h1, dtype=float) - np.asarray(h2, dtype=float)) % 360.0
    diff = np.minimum(diff, 360.0 - diff)
    if np.ndim(diff) == 0:
        return float(diff)
    return diff


def hsl_distance(
    a: Sequence[float], b: Any, weights: DistanceWeights = DEFAULT_WEIGHTS
) -> Any:
    """Weighted distance between an HSL color and one or many others.

    ``b`` is a single HSL color or an ``(n, 3)`` array; the result is a float
    or an array of shape ``(n,)`` accordingly.
    """
    other = np.asarray(b, dtype=float)
    distance = (
        hue_difference(a[0], other[..., 0]) * weights.hue
        + np.abs(a[1] - other[..., 1]) * weights.saturation
        + np.abs(a[2] - other[..., 2]) * weights.lightness
    )
    if np.ndim(distance) == 0:
        return float(distance)
    return distance


@dataclass(frozen=True)
class SearchStage:
    hue_tolerance: int
    hue_step: int
    saturation_step: int
    lightness_step: int
    good_enough: float


SEARCH_STAGES = (
    SearchStage(hue_tolerance=0, hue_step=0, saturation_step=0, lightness_step=1, good_enough=20.0),
    SearchStage(hue_tolerance=30, hue_step=5, saturation_step=10, lightness_step=5, good_enough=40.0),
    SearchStage(hue_tolerance=60, hue_step=15, saturation_step=20, lightness_step=10, good_enough=80.0),
)


def _hue_range(center: float, tolerance: int, step: int) -> list[float]:
    hues = [normalize_hue(center)]
    if tolerance <= 0 or step <= 0:
        return hues
    for offset in range(step, tolerance + 1, step):
        hues.append(normalize_hue(center + offset))
        hues.append(normalize_hue(center - offset))
    return hues


def _search_range(center: float, low: float, high: float, step: int) -> list[float]:
    values = [max(low, min(high, center))]
    offset = step
    while offset <= max(center - low, high - center):
        if center - offset >= low:
            values.append(center - offset)
        if center + offset <= high:
            values.append(center + offset)
        offset += step
    for bound in (low, high):
        if bound not in values:
            values.append(bound)
    return sorted(values, key=lambda value: abs(value - center))


def _smart_saturation_range(s: float, lightness: float) -> list[float]:
    values = [s]
    if lightness > 80 or lightness < 20:
        values.extend(s - step for step in (10, 20, 30) if s - step >= 0)
    if s < 70:
        values.extend(s + step for step in (15, 30) if s + step <= 100)
    if s > 20:
        values.append(max(0, s - 40))
    if s < 80:
        values.append(min(100, s + 40))
    unique = list(dict.fromkeys(values))
    return sorted(unique, key=lambda value: abs(value - s))


def _smart_lightness_range(lightness: float, render_mode: RenderMode) -> list[float]:
    values = [lightness]
    for offset in range(1, SMART_LIGHTNESS_RADIUS + 1):
        for value in (lightness - offset, lightness + offset):
            if 0 <= value <= 100:
                values.append(value)

    low, high = (
        LIGHT_MODE_LIGHTNESS_BAND if render_mode is RenderMode.LIGHT else DARK_MODE_LIGHTNESS_BAND
    )
    values.extend(range(low, high + 1))

    unique = list(dict.fromkeys(values))
    return sorted(unique, key=lambda value: abs(value - lightness))


def stage_candidates(
    original: Sequence[float],
    stage_index: int,
    render_mode: RenderMode = RenderMode.LIGHT,
    seen: set | None = None,
) -> Iterator[HSL]:
    """Lazily yield the candidates of one search stage, in search order.

    ``seen`` is shared between stages so a candidate is evaluated once per
    search even when the stages overlap.
    """
    h, s, lightness = clamp_hsl(original)
    stage = SEARCH_STAGES[stage_index]
    seen = set() if seen is None else seen

    if stage_index == 0:
        hues = [h]
        lightnesses = _smart_lightness_range(lightness, render_mode)
        saturations = _smart_saturation_range(s, lightness)
    else:
        hues = _hue_range(h, stage.hue_tolerance, stage.hue_step)
        lightnesses = _search_range(lightness, 0, 100, stage.lightness_step)
        saturations = _search_range(s, 0, 100, stage.saturation_step)

    for hue in hues:
        for light in lightnesses:
            for sat in saturations:
                candidate = HSL(hue, sat, light)
                if candidate in seen:
                    continue
                seen.add(candidate)
                yield candidate


def hue_preserving_fallbacks(h: float, s: float) -> tuple[HSL, ...]:
    """Canonical dark and light variants that keep (or barely move) the hue."""
    return (
        HSL(h, max(0, s - 20), 25),
        HSL(h, max(0, s - 20), 75),
        HSL(h, min(100, s + 20), 35),
        HSL(h, min(100, s + 20), 65),
        HSL(h, 60, 30),
        HSL(h, 60, 70),
        HSL(normalize_hue(h + 15), max(20, s - 10), 40),
        HSL(normalize_hue(h - 15), max(20, s - 10), 60),
    )


def hue_family(hue: float) -> str:
    hue = normalize_hue(hue)
    for upper, family in HUE_FAMILY_BUCKETS:
        if hue < upper:
            return family
    return "red"


def family_swatch(hue: float) -> HSL:
    return HSL(*FAMILY_ACCESSIBLE_SWATCHES[hue_family(hue)])


class Candidate(NamedTuple):
    hsl: HSL
    distance: float
    score: float
    stage: int


@dataclass(frozen=True)
class SearchOutcome:
    """Result of :func:`search_accessible`.

    ``stage`` is 0 when the original already passed, 1-3 for the search
    stages, 4 for a hue-preserving fallback and 5 for a hue family swatch.
    When ``passed`` is false, ``color`` is the best non-passing candidate.
    """

    color: HSL | None
    distance: float
    score: float
    passed: bool
    stage: int
    evaluated: int
    passing: tuple[Candidate, ...] = ()


def _evaluate_chunk(
    chunk: Sequence[HSL],
    original: HSL,
    mode: AccessibilityMode,
    weights: DistanceWeights,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    hsl = np.asarray(chunk, dtype=float).reshape(-1, 3)
    batch = evaluate_batch(hsl)
    return batch.passes(mode), batch.scores(mode), hsl_distance(original, hsl, weights)


def _is_better_failure(candidate: Candidate, current: Candidate | None) -> bool:
    if current is None:
        return True
    if abs(candidate.score - current.score) < SCORE_EPSILON:
        return candidate.distance < current.distance
    return candidate.score > current.score


def _chunks(candidates: Iterable[HSL], size: int) -> Iterator[list[HSL]]:
    iterator = iter(candidates)
    while True:
        chunk = list(itertools.islice(iterator, size))
        if not chunk:
            return
        yield chunk


def _parallel_results(
    chunks: list[list[HSL]],
    original: HSL,
    mode: AccessibilityMode,
    weights: DistanceWeights,
    workers: int,
) -> list[tuple[np.ndarray, np.ndarray, np.ndarray]]:
    results: dict[int, tuple[np.ndarray, np.ndarray, np.ndarray]] = {}
    with ThreadPoolExecutor(max_workers=workers) as executor:
        future_to_index = {
            executor.submit(_evaluate_chunk, chunk, original, mode, weights): index
            for index, chunk in enumerate(chunks)
        }
        for future in as_completed(future_to_index):
            results[future_to_index[future]] = future.result()
    return [results[index] for index in range(len(chunks))]


def search_accessible(
    base_hsl: Sequence[float],
    render_mode: RenderMode = RenderMode.LIGHT,
    accessibility_mode: AccessibilityMode = AccessibilityMode.FULL,
    weights: DistanceWeights = DEFAULT_WEIGHTS,
    max_candidates: int | None = None,
    workers: int | None = None,
    chunk_size: int = SEARCH_CHUNK_SIZE,
) -> SearchOutcome:
    """Search for the accessible color nearest to ``base_hsl``.

    Args:
        base_hsl: The original color.
        render_mode: Picks the lightness band favored by the first stage.
        accessibility_mode: Which text colors the result must support.
        weights: Weights of the hue, saturation and lightness differences.
        max_candidates: Stop after evaluating this many candidates.
        workers: When greater than 1, every stage is evaluated in full across
            a thread pool before selecting, which keeps the result identical
            to the sequential search's final choice among evaluated candidates.
        chunk_size: Number of candidates evaluated per batch.

    Returns:
        A :class:`SearchOutcome`; ``passed`` is false when neither the stages
        nor the fallbacks produced a passing color.
    """
    original = clamp_hsl(base_hsl)
    report = evaluate(hsl_to_rgb(original))
    if report.passes(accessibility_mode):
        return SearchOutcome(
            color=original,
            distance=0.0,
            score=report.score(accessibility_mode),
            passed=True,
            stage=0,
            evaluated=1,
            passing=(Candidate(original, 0.0, report.score(accessibility_mode), 0),),
        )

    seen: set = set()
    passing: list[Candidate] = []
    best_failure: Candidate | None = None
    evaluated = 0
    budget_left = max_candidates

    for stage_index, stage in enumerate(SEARCH_STAGES):
        stage_number = stage_index + 1
        candidates: Iterable[HSL] = stage_candidates(original, stage_index, render_mode, seen)
        if budget_left is not None:
            candidates = itertools.islice(candidates, max(0, budget_left))

        if workers and workers > 1:
            chunks = list(_chunks(candidates, chunk_size))
            results = zip(chunks, _parallel_results(chunks, original, accessibility_mode, weights, workers))
        else:
            results = (
                (chunk, _evaluate_chunk(chunk, original, accessibility_mode, weights))
                for chunk in _chunks(candidates, chunk_size)
            )

        stage_best = float("inf")
        for chunk, (passes, scores, distances) in results:
            evaluated += len(chunk)
            if budget_left is not None:
                budget_left -= len(chunk)

            for hsl, passed, score, distance in zip(chunk, passes, scores, distances):
                candidate = Candidate(hsl, float(distance), float(score), stage_number)
                if passed:
                    passing.append(candidate)
                    stage_best = min(stage_best, candidate.distance)
                elif _is_better_failure(candidate, best_failure):
                    best_failure = candidate

            if stage_best < stage.good_enough and not (workers and workers > 1):
                break

        logger.debug(
            "Search stage %d: %d candidates evaluated, %d passing so far",
            stage_number, evaluated, len(passing),
        )
        if stage_best < stage.good_enough:
            break
        if budget_left is not None and budget_left <= 0:
            logger.debug("Search budget of %d candidates exhausted", max_candidates)
            break

    if passing:
        best = min(passing, key=lambda c: c.distance)
        return SearchOutcome(
            color=clamp_hsl(best.hsl),
            distance=best.distance,
            score=best.score,
            passed=True,
            stage=best.stage,
            evaluated=evaluated,
            passing=tuple(passing),
        )

    for stage_number, fallbacks in (
        (4, hue_preserving_fallbacks(original.h, original.s)),
        (5, (family_swatch(original.h),)),
    ):
        for fallback in fallbacks:
            evaluated += 1
            fallback_report = evaluate(hsl_to_rgb(fallback))
            if fallback_report.passes(accessibility_mode):
                logger.debug("Search exhausted, using fallback %s", tuple(fallback))
                candidate = Candidate(
                    clamp_hsl(fallback),
                    hsl_distance(original, fallback, weights),
                    fallback_report.score(accessibility_mode),
                    stage_number,
                )
                return SearchOutcome(
                    color=candidate.hsl,
                    distance=candidate.distance,
                    score=candidate.score,
                    passed=True,
                    stage=stage_number,
                    evaluated=evaluated,
                    passing=(candidate,),
                )

    logger.debug("No accessible color found for %s", tuple(original))
    return SearchOutcome(
        color=clamp_hsl(best_failure.hsl) if best_failure else None,
        distance=best_failure.distance if best_failure else float("inf"),
        score=best_failure.score if best_failure else 0.0,
        passed=False,
        stage=best_failure.stage if best_failure else 0,
        evaluated=evaluated,
    )


def find_accessible(
    base_hsl: Sequence[float],
    render_mode: RenderMode = RenderMode.LIGHT,
    accessibility_mode: AccessibilityMode = AccessibilityMode.FULL,
    **kwargs: Any,
) -> HSL | None:
    """Return the accessible color nearest to ``base_hsl``, or None."""
    outcome = search_accessible(base_hsl, render_mode, accessibility_mode, **kwargs)
    return outcome.color if outcome.passed else None
