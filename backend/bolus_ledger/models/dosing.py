from pydantic import BaseModel, ConfigDict, Field


class DosingParameters(BaseModel):
    target_glucose: float = Field(default=100.0, gt=0, description="Target Glucose (mg/dL)")
    icr: float = Field(default=10.0, gt=0, description="Insulin Carb Ratio (g/U)")
    isf: float = Field(default=50.0, gt=0, description="Insulin Sensitivity Factor (mg/dL/U)")
    insulin_duration_min: float = Field(default=240.0, gt=0, description="Insulin action (min)")

    model_config = ConfigDict(frozen=True, allow_inf_nan=False, extra="forbid")


class RatioEstimate(BaseModel):
    total_daily_dose: float
    icr: float
    isf: float
