"""Performance metrics Pydantic schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PerformanceSummaryResponse(BaseModel):
    """Averages over the recorded samples, in milliseconds."""

    model_config = ConfigDict(from_attributes=True)

    average_page_load_time: float = Field(0, description="Mean page load time")
    average_component_render_time: float = Field(0, description="Mean render time over all components")
    average_api_call_time: float = Field(0, description="Mean API call time over all APIs")
    total_api_calls: int = Field(0, ge=0, description="Recorded API call samples")
    total_components: int = Field(0, ge=0, description="Recorded component render samples")


class PerformanceMetricsResponse(BaseModel):
    """Summary together with every recorded sample."""

    summary: PerformanceSummaryResponse
    details: dict[str, Any] = Field(..., description="Recorded samples by bucket")
