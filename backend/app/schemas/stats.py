"""
Pydantic schemas for exam statistics.
"""
from typing import List

from pydantic import BaseModel, Field


class ScoreBin(BaseModel):
    """One bar of the score distribution chart."""

    name: str = Field(..., description="Bin label, e.g. '41-60%'")
    count: int = Field(..., description="Number of submissions in the bin")


class ExamStatsResponse(BaseModel):
    """Aggregate statistics over the percentage scores of one exam."""

    exam_id: str
    count: int = Field(..., description="Number of submissions")
    mean: float = Field(..., description="Mean percentage score")
    median: float = Field(..., description="Median percentage score")
    mode: float = Field(..., description="Most frequent percentage score")
    min: float = Field(..., description="Lowest percentage score")
    max: float = Field(..., description="Highest percentage score")
    std_dev: float = Field(..., description="Population standard deviation")
    t_value: float = Field(..., description="One-sample t statistic against 50%")
    p_value: float = Field(..., description="Approximate p-value of the t statistic")
    is_significant: bool = Field(
        ..., description="Whether p_value is below the 0.05 significance level"
    )
    distribution: List[ScoreBin] = Field(
        ..., description="Submissions bucketed into five 20-point bins"
    )
