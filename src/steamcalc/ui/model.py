"""View-model for the calculator window."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque

from ..calculator import CalculationOrchestrator, CalculationResult
from ..errors import ValidationError
from .events import HISTORY_CHANGED, RESULT_CLEARED, RESULT_UPDATED, VALIDATION_FAILED, EventBus

logger = logging.getLogger(__name__)


@dataclass
class CalculatorModel:
    """Holds the last inputs, the displayed result and the session history.

    Events published on :attr:`bus`:

    - ``result_updated(result)`` after a successful calculation
    - ``result_cleared()`` after a reset
    - ``validation_failed(message, field)`` when an input is not a number
    - ``history_changed(count)`` whenever the history grows or is cleared
    """

    bus: EventBus
    orchestrator: CalculationOrchestrator = field(default_factory=CalculationOrchestrator)
    max_history: int = 200
    temperature_text: str = ""
    pressure_text: str = ""
    result: CalculationResult | None = None

    def __post_init__(self) -> None:
        self._history: Deque[CalculationResult] = deque(maxlen=self.max_history)

    @property
    def history(self) -> tuple[CalculationResult, ...]:
        return tuple(self._history)

    @property
    def result_visible(self) -> bool:
        return self.result is not None

    def calculate(self, temperature_text: str, pressure_text: str) -> CalculationResult:
        """Run a calculation; on invalid input nothing in the model changes."""

        try:
            result = self.orchestrator.calculate(temperature_text, pressure_text)
        except ValidationError as exc:
            logger.info("Rejected input T=%r, P=%r", temperature_text, pressure_text)
            self.bus.publish(VALIDATION_FAILED, message=str(exc), field=exc.field)
            raise

        self.temperature_text = temperature_text
        self.pressure_text = pressure_text
        self.result = result
        self._history.append(result)
        self.bus.publish(RESULT_UPDATED, result=result)
        self.bus.publish(HISTORY_CHANGED, count=len(self._history))
        return result

    def reset(self) -> None:
        """Clear both inputs and hide the result view."""

        self.temperature_text = ""
        self.pressure_text = ""
        self.result = None
        self.bus.publish(RESULT_CLEARED)

    def clear_history(self) -> None:
        self._history.clear()
        self.bus.publish(HISTORY_CHANGED, count=0)


__all__ = ["CalculatorModel"]
