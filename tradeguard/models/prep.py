"""Daily preparation data model."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Verdict(str, Enum):
    """Gatekeeper readiness verdict."""

    GREEN = "Green"
    YELLOW = "Yellow"
    RED = "Red"
    NONE = "None"


class DailyPrepData(BaseModel):
    """Pre-session readiness inputs and end-of-day habits for one calendar day."""

    gk_hrv_value: Optional[float] = Field(default=None, description="Morning HRV reading (ms)")
    gk_hrv_baseline: Optional[float] = Field(default=None, description="Personal HRV baseline (ms)")
    gk_sleep_hours: Optional[float] = Field(default=None, description="Hours slept")
    gk_physical_energy: float = Field(default=0.0, description="Subjective score 1-10")
    gk_mental_clarity: float = Field(default=0.0, description="Subjective score 1-10")
    gk_emotional_calm: float = Field(default=0.0, description="Subjective score 1-10")
    gk_process_confidence: float = Field(default=0.0, description="Subjective score 1-10")
    gk_uncertainty_accepted: bool = Field(default=False, description="Pre-fight contract signed")
    gk_daily_risk_amount: Optional[float] = Field(default=None, description="Declared risk for the day")
    gk_total_score: float = Field(default=0.0, description="Stored gatekeeper score")
    gk_verdict: Verdict = Field(default=Verdict.NONE, description="Stored gatekeeper verdict")
    hab_discipline_score: Optional[float] = Field(default=None, description="End-of-day discipline 1-10")
    hab_journal_completed: bool = Field(default=False, description="Day wrap-up completed")

    model_config = {"frozen": True}

    @property
    def subjective_scores(self) -> tuple[float, float, float, float]:
        return (
            self.gk_physical_energy,
            self.gk_mental_clarity,
            self.gk_emotional_calm,
            self.gk_process_confidence,
        )
