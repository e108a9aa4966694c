"""Data models for TradeGuard."""

from tradeguard.models.trade import (
    ExecutionError,
    PlanAdherence,
    Trade,
    TradeStatus,
    VETO_ERRORS,
)
from tradeguard.models.account import (
    Account,
    AccountRiskSettings,
    CalcMode,
    DEFAULT_RISK_SETTINGS,
    DrawdownType,
    TargetMode,
)
from tradeguard.models.prep import DailyPrepData, Verdict
from tradeguard.models.instrument import InstrumentSpec
from tradeguard.models.results import (
    BEResult,
    ConsistencyBreach,
    DrawdownResult,
    GatekeeperResult,
    ProjectionPoint,
    ProjectionResult,
    ReputationResult,
    SentinelAudit,
    SizingResult,
    TGAxis,
    TGScoreResult,
    Tier,
    TiltLevel,
    TiltResult,
)

__all__ = [
    "Account",
    "AccountRiskSettings",
    "BEResult",
    "CalcMode",
    "ConsistencyBreach",
    "DailyPrepData",
    "DEFAULT_RISK_SETTINGS",
    "DrawdownResult",
    "DrawdownType",
    "ExecutionError",
    "GatekeeperResult",
    "InstrumentSpec",
    "PlanAdherence",
    "ProjectionPoint",
    "ProjectionResult",
    "ReputationResult",
    "SentinelAudit",
    "SizingResult",
    "TargetMode",
    "TGAxis",
    "TGScoreResult",
    "Tier",
    "TiltLevel",
    "TiltResult",
    "Trade",
    "TradeStatus",
    "Verdict",
    "VETO_ERRORS",
]
