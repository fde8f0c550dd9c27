"""Background estimation algorithms."""

from peakfit1d.core.baselines.asls import asls_baseline, whittaker_smooth
from peakfit1d.core.baselines.estimate import BASELINE_ESTIMATORS, estimate_baseline
from peakfit1d.core.baselines.linear import endpoint_line, linear_baseline
from peakfit1d.core.baselines.manual import interpolate_control_points, manual_baseline
from peakfit1d.core.baselines.polynomial import evaluate_polynomial, polynomial_baseline
from peakfit1d.core.baselines.rolling_ball import rolling_ball_baseline
from peakfit1d.core.baselines.shirley import shirley_baseline

__all__ = [
    "BASELINE_ESTIMATORS",
    "asls_baseline",
    "endpoint_line",
    "estimate_baseline",
    "evaluate_polynomial",
    "interpolate_control_points",
    "linear_baseline",
    "manual_baseline",
    "polynomial_baseline",
    "rolling_ball_baseline",
    "shirley_baseline",
    "whittaker_smooth",
]
