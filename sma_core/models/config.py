"""Strategy configuration model."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class StrategyConfig(BaseModel):
    """SMA crossover strategy parameters.

    stop_loss_pct / take_profit_pct are informational to the host's own
    risk engine; the strategy never evaluates them.
    """

    model_config = ConfigDict(frozen=True)

    # Indicator periods
    short_period: int = Field(default=10, ge=1)
    long_period: int = Field(default=30, ge=1)

    # Risk percentages as fractions (0.02 = 2%)
    stop_loss_pct: Decimal | None = Field(default=Decimal("0.02"), gt=0, le=1)
    take_profit_pct: Decimal | None = Field(default=Decimal("0.05"), gt=0, le=1)

    # Fraction of available capital per entry
    order_size_pct: Decimal = Field(default=Decimal("0.5"), gt=0, le=1)

    @model_validator(mode="after")
    def _validate(self):
        if self.long_period <= self.short_period:
            raise ValueError(
                f"long_period ({self.long_period}) must be greater than "
                f"short_period ({self.short_period})"
            )
        return self
