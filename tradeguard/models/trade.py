"""Trade data model."""

from datetime import date as date_type
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TradeStatus(str, Enum):
    """Outcome of a closed trade."""

    WIN = "WIN"
    LOSS = "LOSS"
    BE = "BE"


class ExecutionError(str, Enum):
    """Execution error tagged on a trade during review."""

    FOMO = "1. FOMO / Chasing"
    HESITATION = "2. Hesitation (Analysis Paralysis)"
    PREMATURE_EXIT = "3. Premature Exit (Paper Hands)"
    STOP_LOSS_SABOTAGE = "4. Stop-Loss Sabotage (Moving SL to BE)"
    AVERAGING_DOWN = "5. Averaging Down (The Loser's Move)"
    REVENGE_TRADING = "6. Revenge Trading"
    OVER_LEVERAGING = "7. Over-Leveraging (Size Error)"
    IMPULSE = "8. Impulse/Boredom Trading"
    TARGET_GREED = "9. Target Greed"
    NONE = "None"


class PlanAdherence(str, Enum):
    """Whether the trade followed the written plan (DA = yes, NU = no)."""

    DA = "DA"
    NU = "NU"
    NONE = "None"


# Errors that breach risk integrity and trigger the daily veto.
VETO_ERRORS = frozenset({ExecutionError.STOP_LOSS_SABOTAGE, ExecutionError.REVENGE_TRADING})


class Trade(BaseModel):
    """Represents an executed futures trade as recorded in the journal."""

    id: str = Field(default="", description="Journal trade ID")
    account_id: str = Field(..., description="Owning account ID or name")
    date: date_type = Field(..., description="Calendar trading day")
    instrument: str = Field(default="MNQ", description="Instrument symbol")
    pnl_net: float = Field(default=0.0, description="Net P&L after commissions")
    status: TradeStatus = Field(default=TradeStatus.BE, description="WIN/LOSS/BE")
    discipline_score: float = Field(default=0.0, description="Self-rated discipline (1-5)")
    execution_error: ExecutionError = Field(
        default=ExecutionError.NONE, description="Tagged execution error"
    )
    is_according_to_plan: PlanAdherence = Field(
        default=PlanAdherence.NONE, description="Plan adherence flag"
    )
    notes: Optional[str] = Field(default=None, description="Post-trade notes")

    model_config = {"frozen": True}

    @property
    def notes_length(self) -> int:
        return len(self.notes or "")
