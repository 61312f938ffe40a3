from pydantic import BaseModel, Field, model_validator


class ThresholdConfig(BaseModel):
    """
    Knee-angle hysteresis band (degrees).

    UP requires both legs above up_deg, DOWN any leg below down_deg.
    The gap between the two is the dead-zone.
    """
    up_deg: float = 160.0
    down_deg: float = 130.0

    @model_validator(mode="after")
    def _check_band(self):
        if not 0.0 <= self.down_deg < self.up_deg <= 180.0:
            raise ValueError(
                f"Invalid threshold band: down_deg={self.down_deg} "
                f"must be below up_deg={self.up_deg} within [0, 180]"
            )
        return self


class LegIndices(BaseModel):
    hip: int = Field(ge=0)
    knee: int = Field(ge=0)
    ankle: int = Field(ge=0)


class LandmarkConfig(BaseModel):
    min_count: int = 33
    left: LegIndices = LegIndices(hip=23, knee=25, ankle=27)
    right: LegIndices = LegIndices(hip=24, knee=26, ankle=28)

    @model_validator(mode="after")
    def _check_indices(self):
        highest = max(
            *self.left.model_dump().values(),
            *self.right.model_dump().values(),
        )
        if self.min_count <= highest:
            raise ValueError(
                f"min_count={self.min_count} does not cover landmark index {highest}"
            )
        return self


class SchedulerConfig(BaseModel):
    # Display refresh cadence driving ticks
    display_hz: float = Field(default=60.0, gt=0)


class PoseConfig(BaseModel):
    model_complexity: int = Field(default=1, ge=0, le=2)
    smooth_landmarks: bool = True
    min_detection_confidence: float = Field(default=0.5, ge=0.0, le=1.0)
    min_tracking_confidence: float = Field(default=0.5, ge=0.0, le=1.0)


class CounterConfig(BaseModel):
    thresholds: ThresholdConfig = Field(default_factory=ThresholdConfig)
    landmarks: LandmarkConfig = Field(default_factory=LandmarkConfig)
    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)
    pose: PoseConfig = Field(default_factory=PoseConfig)
