"""Account and risk settings data models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class DrawdownType(str, Enum):
    """How the liquidation threshold moves."""

    STATIC = "Static"
    TRAILING = "Trailing"


class CalcMode(str, Enum):
    """Which side of the sizing equation is fixed."""

    FIXED_CONTRACTS = "fixedContracts"
    FIXED_SL = "fixedSL"


class TargetMode(str, Enum):
    """How the profit target is derived."""

    FIXED_RR = "fixedRR"
    FIXED_TARGET_POINTS = "fixedTargetPoints"


class AccountRiskSettings(BaseModel):
    """Per-account risk budget and sizing preferences."""

    max_daily_risk: float = Field(default=500.0, description="Max loss allowed per day ($)")
    max_trades_per_day: int = Field(default=5, description="Max trades per day")
    max_contracts_per_trade: int = Field(default=1, description="Contracts in fixed-contracts mode")
    calc_mode: CalcMode = Field(default=CalcMode.FIXED_CONTRACTS)
    target_mode: TargetMode = Field(default=TargetMode.FIXED_RR)
    rr_ratio: float = Field(default=2.0, description="Reward:risk ratio")
    fixed_sl_points: float = Field(default=25.0, description="Stop distance in fixed-SL mode")
    fixed_target_points: float = Field(default=50.0, description="Target distance in fixed-target mode")
    comm_per_contract: float = Field(default=2.40, description="Commission per contract per side ($)")
    preferred_instrument: str = Field(default="MNQ", description="Instrument used for sizing")

    model_config = {"frozen": True}


# Profile used whenever an account has no risk settings of its own.
DEFAULT_RISK_SETTINGS = AccountRiskSettings()

DEFAULT_TRAILING_STOP_THRESHOLD = 100.0
DEFAULT_PROFIT_TARGET_OFFSET = 3000.0


class Account(BaseModel):
    """Represents a trading (evaluation, payout or personal) account."""

    id: str = Field(..., min_length=1, description="Stable account ID")
    name: str = Field(default="", description="Display name")
    initial_balance: float = Field(default=0.0, description="Starting balance")
    max_drawdown: float = Field(default=0.0, description="Max drawdown allowed ($)")
    drawdown_type: DrawdownType = Field(default=DrawdownType.TRAILING)
    is_pa: bool = Field(default=False, description="Payout (funded) account flag")
    trailing_stop_threshold: Optional[float] = Field(
        default=None, description="Offset above initial balance where a PA trailing stop locks"
    )
    target_profit_goal: Optional[float] = Field(
        default=None, description="Absolute equity goal for the challenge"
    )
    risk_settings: Optional[AccountRiskSettings] = Field(default=None)

    model_config = {"frozen": True}

    @property
    def effective_risk_settings(self) -> AccountRiskSettings:
        return self.risk_settings or DEFAULT_RISK_SETTINGS

    @property
    def stop_threshold_offset(self) -> float:
        if self.trailing_stop_threshold is None:
            return DEFAULT_TRAILING_STOP_THRESHOLD
        return self.trailing_stop_threshold

    @property
    def profit_goal(self) -> float:
        if self.target_profit_goal:
            return self.target_profit_goal
        return self.initial_balance + DEFAULT_PROFIT_TARGET_OFFSET

    def owns(self, account_ref: str) -> bool:
        """Check whether a trade's account reference points at this account."""
        return account_ref == self.id or (bool(self.name) and account_ref == self.name)
