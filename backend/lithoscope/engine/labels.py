"""Derived sub-classifications — clast roundness and fossil likelihood.

Both are ordered guard clauses; the first true branch wins.

Roundness (edge density E):
  E < 0.06  → well-rounded
  E > 0.16  → angular / fractured
  E > 0.11  → sub-angular
  else      → sub-rounded

Fossil likelihood (biomorphic index BI):
  BI > 1.8               → high (preliminary)
  BI > 1.2 and E > 0.08  → moderate
  else                   → low
"""

from __future__ import annotations

import enum

# Smooth surfaces: little Laplacian energy survives fluvial abrasion
_ROUNDED_MAX_EDGE = 0.06
_ANGULAR_MIN_EDGE = 0.16
_SUBANGULAR_MIN_EDGE = 0.11

_FOSSIL_HIGH_BI = 1.8
_FOSSIL_MODERATE_BI = 1.2
_FOSSIL_MODERATE_EDGE = 0.08


class Roundness(enum.Enum):
    WELL_ROUNDED = "Well-rounded (High-Energy Fluvial)"
    SUB_ROUNDED = "Sub-rounded"
    SUB_ANGULAR = "Sub-angular (Local Colluvial)"
    ANGULAR = "Angular / Fractured (In-situ / Brecciated)"

    @property
    def label(self) -> str:
        return self.value


class FossilLikelihood(enum.Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH_PRELIMINARY = "High (Preliminary)"

    @property
    def label(self) -> str:
        return self.value


def classify_roundness(edge_density: float) -> Roundness:
    if edge_density < _ROUNDED_MAX_EDGE:
        return Roundness.WELL_ROUNDED
    if edge_density > _ANGULAR_MIN_EDGE:
        return Roundness.ANGULAR
    if edge_density > _SUBANGULAR_MIN_EDGE:
        return Roundness.SUB_ANGULAR
    return Roundness.SUB_ROUNDED


def classify_fossil_likelihood(biomorphic_index: float, edge_density: float) -> FossilLikelihood:
    if biomorphic_index > _FOSSIL_HIGH_BI:
        return FossilLikelihood.HIGH_PRELIMINARY
    if biomorphic_index > _FOSSIL_MODERATE_BI and edge_density > _FOSSIL_MODERATE_EDGE:
        return FossilLikelihood.MODERATE
    return FossilLikelihood.LOW


def fossil_details(likelihood: FossilLikelihood, biomorphic_index: float) -> str:
    """Explanatory sentence that accompanies a fossil-likelihood label."""
    if likelihood is FossilLikelihood.HIGH_PRELIMINARY:
        return (
            "Strong spatial complexity anomalies detected. Highly suggestive of repetitive "
            "biological structures or intricate mineralized imprints."
        )
    if likelihood is FossilLikelihood.MODERATE:
        return (
            f"Detected localized edge clusters (BCI: {biomorphic_index:.2f}) consistent with "
            "potential biomorphic imprints or trace fossil structures."
        )
    return "No significant localized structural anomalies detected."
