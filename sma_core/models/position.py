"""Position state owned by the host."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator

from sma_core.models.signal import Direction


class PositionState(BaseModel):
    """Single position slot as tracked by the host.

    The host replaces this after acting on a signal or after its own
    stop-loss/take-profit trigger. Strategies only read it.
    """

    model_config = ConfigDict(frozen=True)

    held: bool = False
    type: Direction | None = None

    @model_validator(mode="after")
    def _validate(self):
        if self.held and self.type is None:
            raise ValueError("a held position requires a type (LONG or SHORT)")
        if not self.held and self.type is not None:
            raise ValueError("a flat position cannot have a type")
        return self

    @classmethod
    def flat(cls) -> PositionState:
        return cls()

    @classmethod
    def opened(cls, direction: Direction) -> PositionState:
        return cls(held=True, type=direction)
