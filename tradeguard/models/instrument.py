"""InstrumentSpec data model."""

from pydantic import BaseModel, Field


class InstrumentSpec(BaseModel):
    """Contract specification of a futures instrument."""

    symbol: str = Field(..., min_length=1, description="Instrument symbol")
    multiplier: float = Field(..., gt=0, description="Dollar value of one point")
    tick: float = Field(..., gt=0, description="Minimum price increment")

    model_config = {"frozen": True}
