"""Domain configuration models for peakfit1d."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from peakfit1d.core.domain.peaks import Profile

OutlierMethod = Literal["none", "zscore", "iqr"]
BaselineMethod = Literal[
    "none", "linear", "polynomial", "asls", "rolling_ball", "shirley", "manual"
]
InterpolationKind = Literal["linear", "cubic"]
InitializerName = Literal["gmm", "even"]


class SmoothingConfig(BaseModel):
    """Savitzky-Golay smoothing settings."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = Field(default=False, description="Apply Savitzky-Golay smoothing.")
    window_length: Annotated[int, Field(ge=3)] = Field(
        default=11,
        description="Window length in samples. Even values are bumped to the next odd length.",
    )
    poly_order: Annotated[int, Field(ge=0)] = Field(
        default=3,
        description="Polynomial order. Clamped below the window length.",
    )


class OutlierConfig(BaseModel):
    """Outlier rejection settings."""

    model_config = ConfigDict(extra="forbid")

    method: OutlierMethod = Field(default="none", description="none, zscore or iqr.")
    threshold: Annotated[float, Field(gt=0)] = Field(
        default=3.0,
        description="Z-score cut-off, or IQR multiplier (typically 1.5).",
    )


class ProcessingOptions(BaseModel):
    """Preprocessing pipeline: outliers, crop, resample, smooth, normalise."""

    model_config = ConfigDict(extra="forbid")

    x_min: float | None = Field(default=None, description="Lower crop bound.")
    x_max: float | None = Field(default=None, description="Upper crop bound.")
    interpolation_step: Annotated[float, Field(gt=0)] | None = Field(
        default=None,
        description="Resample onto a uniform grid with this step.",
    )
    normalize: bool = Field(default=False, description="Divide y by max(|y|).")
    smoothing: SmoothingConfig = Field(default_factory=SmoothingConfig)
    outlier_removal: OutlierConfig = Field(default_factory=OutlierConfig)


class BaselineOptions(BaseModel):
    """Baseline estimation settings.

    With ``auto_baseline`` disabled, the supplied parameters (``slope`` and
    ``intercept``, or ``coeffs``) are used verbatim instead of being fitted.
    With ``optimize_simultaneously`` enabled the baseline parameters become
    free variables of the peak fit.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    method: BaselineMethod = Field(default="none", description="Baseline algorithm.")
    auto_baseline: bool = Field(default=True, description="Fit baseline parameters from data.")
    optimize_simultaneously: bool = Field(
        default=False,
        description="Co-optimise baseline parameters with the peak parameters.",
    )
    degree: Annotated[int, Field(ge=0, le=10)] = Field(default=2, description="Polynomial degree.")
    lam: Annotated[float, Field(gt=0, alias="lambda")] = Field(
        default=1e5,
        description="AsLS smoothness penalty.",
    )
    p: Annotated[float, Field(gt=0, lt=1)] = Field(default=0.01, description="AsLS asymmetry.")
    radius: Annotated[float, Field(gt=0)] = Field(default=10, description="Rolling-ball radius.")
    shirley_iterations: Annotated[int, Field(gt=0)] = Field(default=50)
    shirley_tolerance: Annotated[float, Field(gt=0)] = Field(default=1e-5)
    slope: float | None = Field(default=None, description="Linear baseline slope.")
    intercept: float | None = Field(default=None, description="Linear baseline intercept.")
    coeffs: list[float] | None = Field(
        default=None,
        description="Polynomial coefficients in raw x, constant term first.",
    )
    calc_range_min: float | None = Field(default=None)
    calc_range_max: float | None = Field(default=None)
    manual_points: list[tuple[float, float]] = Field(
        default_factory=list,
        description="Control points (x, y) for the manual baseline.",
    )
    manual_interp: InterpolationKind = Field(default="linear")

    @property
    def has_calc_range(self) -> bool:
        return self.calc_range_min is not None or self.calc_range_max is not None


class FitConfig(BaseModel):
    """Configuration for the peak fit itself."""

    model_config = ConfigDict(extra="forbid")

    max_iterations: Annotated[int, Field(gt=0)] = Field(
        default=200,
        description="Maximum Levenberg-Marquardt iterations.",
    )
    tolerance: Annotated[float, Field(gt=0)] = Field(
        default=1e-8,
        description="Relative chi-squared improvement that counts as converged.",
    )
    profile: Profile = Field(default=Profile.GAUSSIAN, description="Profile of initial peaks.")
    n_peaks: Annotated[int, Field(ge=1)] = Field(default=1, description="Number of peaks.")
    initializer: InitializerName = Field(
        default="gmm",
        description="Initial guess strategy: gmm (local maxima) or even (evenly spaced).",
    )


class PeakFit1DConfig(BaseModel):
    """Top-level configuration file model."""

    model_config = ConfigDict(extra="forbid")

    processing: ProcessingOptions = Field(default_factory=ProcessingOptions)
    baseline: BaselineOptions = Field(default_factory=BaselineOptions)
    fitting: FitConfig = Field(default_factory=FitConfig)

    @field_validator("processing")
    @classmethod
    def _check_crop(cls, value: ProcessingOptions) -> ProcessingOptions:
        if value.x_min is not None and value.x_max is not None and value.x_min > value.x_max:
            msg = f"x_min ({value.x_min}) must not exceed x_max ({value.x_max})"
            raise ValueError(msg)
        return value
