"""Value objects produced by the protocol engine."""

from datetime import date as date_type
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from tradeguard.models.prep import Verdict


class SizingResult(BaseModel):
    """Position sizing recommendation for one trade."""

    instrument: str
    risk_per_trade: int = Field(..., description="Dollar risk allotted to one trade")
    lots: int = Field(..., ge=1)
    sl_points: float
    tp_points: float
    commissions_per_trade: float = Field(..., description="Round-trip commissions")
    target_net: float = Field(..., description="Net profit when the target is hit")
    daily_potential: float

    model_config = {"frozen": True}


class DrawdownResult(BaseModel):
    """Equity replay and liquidation threshold for one account."""

    current_equity: float
    peak_equity: float
    liquidation_point: float
    available_risk_buffer: float = Field(..., ge=0)
    suggested_max_daily_risk: Optional[int] = Field(
        default=None, description="New max daily risk, when it differs from the current one"
    )

    model_config = {"frozen": True}


class GatekeeperResult(BaseModel):
    """Biometric readiness verdict."""

    score: int = Field(..., ge=0, le=100)
    verdict: Verdict
    hrv_points: int
    sleep_points: int
    subj_points: float

    model_config = {"frozen": True}


class Tier(str, Enum):
    """Behavioral equity tiers, lowest first."""

    RECRUIT = "RECRUIT"
    BUILDER = "BUILDER"
    OPERATOR = "OPERATOR"
    SENTINEL = "SENTINEL"


class BEResult(BaseModel):
    """Recent-form behavioral equity (last 10 trades)."""

    score: int = Field(..., ge=0, le=100)
    tier: Tier
    multiplier: float
    is_tier_a_locked: bool
    handicap_message: str = ""

    model_config = {"frozen": True}


class ReputationResult(BaseModel):
    """Lifetime reputation score."""

    score: int = Field(..., ge=0)
    tier: Tier
    next_tier: Tier
    progress_pct: float = Field(..., ge=0, le=100)
    violations: int = 0

    model_config = {"frozen": True}


class TGAxis(BaseModel):
    """One axis of the daily discipline composite."""

    subject: str
    value: float = Field(..., ge=0, le=100)

    model_config = {"frozen": True}


class TGScoreResult(BaseModel):
    """Five-axis daily discipline composite."""

    total: int = Field(..., ge=0, le=100)
    axes: list[TGAxis]
    veto: bool

    model_config = {"frozen": True}

    def axis(self, subject: str) -> float:
        for item in self.axes:
            if item.subject == subject:
                return item.value
        raise KeyError(subject)


class SentinelAudit(BaseModel):
    """Checklist view of a trading day."""

    is_gatekeeper_done: bool
    is_pre_fight_signed: bool
    has_trades: bool
    trade_count: int
    all_notes_done: bool
    tilt_control: bool
    wrap_up_done: bool
    sl_integrity: bool
    emotional_friction: bool

    model_config = {"frozen": True}


class TiltLevel(str, Enum):
    """Intraday tilt bands."""

    OPTIMAL = "OPTIMAL"
    MILD = "MILD"
    FRICTION = "FRICTION"
    OVERLOAD = "OVERLOAD"


class TiltResult(BaseModel):
    """Real-time risk-of-error heat score."""

    score: int = Field(..., ge=0, le=100)
    level: TiltLevel
    label: str
    description: str

    model_config = {"frozen": True}


class ProjectionPoint(BaseModel):
    """One day of a real or simulated equity curve."""

    day: int
    equity: float
    liquidation: float
    breached: bool = False
    date: Optional[date_type] = None

    model_config = {"frozen": True}


class ConsistencyBreach(BaseModel):
    """A day whose profit exceeds the consistency rule share."""

    date: date_type
    pnl: float
    limit: float

    model_config = {"frozen": True}


class ProjectionResult(BaseModel):
    """Challenge projection towards the profit goal."""

    days_to_target: int
    target_goal: float
    current_equity: float
    peak_equity: float
    liquidation_point: float
    historical_win_rate: float
    manual_expectancy: float
    historical_expectancy: float
    history_series: list[ProjectionPoint]
    manual_series: list[ProjectionPoint]
    historical_series: list[ProjectionPoint]
    profit_progress_pct: float = Field(..., ge=0, le=100)
    consistency_breaches: list[ConsistencyBreach] = Field(default_factory=list)

    model_config = {"frozen": True}
