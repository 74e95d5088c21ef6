"""CIEDE2000 color difference.

The full CIEDE2000 formula (G compensation of a*, the circular hue term,
the S_L/S_C/S_H weighting functions and the R_T blue-region rotation) as
implemented by colour-science. It is used for scale quality scoring only.
"""

import warnings
from collections.abc import Sequence
from typing import Any

import colour
import numpy as np

from .color_utils import rgb_array_to_lab

__all__ = ["delta_e", "delta_e_rgb", "adjacent_delta_e"]


def delta_e(lab_a: Sequence[float], lab_b: Sequence[float]) -> float:
    """CIEDE2000 difference between two CIELAB colors.

    Symmetric, non-negative and zero only for identical colors.

    Examples:
        >>> delta_e((50.0, 2.6772, -79.7751), (50.0, 0.0, -82.7485))  # doctest: +ELLIPSIS
        2.0424...
    """
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        return float(
            colour.difference.delta_E_CIE2000(
                np.asarray(lab_a, dtype=float), np.asarray(lab_b, dtype=float)
            )
        )


def delta_e_rgb(rgb_a: Sequence[float], rgb_b: Sequence[float]) -> float:
    """CIEDE2000 difference between two 8-bit sRGB colors."""
    lab = rgb_array_to_lab([rgb_a, rgb_b])
    return delta_e(lab[0], lab[1])


def adjacent_delta_e(rgb: Any) -> np.ndarray:
    """CIEDE2000 differences between consecutive colors of an ``(n, 3)`` RGB array."""
    lab = rgb_array_to_lab(np.asarray(rgb, dtype=float).reshape(-1, 3))
    if len(lab) < 2:
        return np.zeros(0)
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        return np.asarray(colour.difference.delta_E_CIE2000(lab[:-1], lab[1:]), dtype=float)
