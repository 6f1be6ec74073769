"""
One calculator form as the caller sees it: Idle (inputs editable) ->
Calculated (session frozen, detail available) -> Idle on reset().

The engine itself is stateless; this object is owned by whoever drives it
(one per open form) and is not shared between forms.
"""

import enum
from typing import Dict, Optional

from . import engine, registry
from .results import CalculationSession, DetailRecord


class WorkspaceState(str, enum.Enum):
    IDLE = "idle"
    CALCULATED = "calculated"


class WorkspaceLocked(RuntimeError):
    """Inputs were edited while a calculation is showing; reset() first."""


class CalculatorWorkspace:

    def __init__(self, calculator_id: str, currency: Optional[str] = None):
        self.definition = registry.get_calculator(calculator_id)
        self.currency = currency
        self.inputs: Dict[str, str] = {}
        self.prices: Dict[str, str] = {}
        self.session: Optional[CalculationSession] = None

    @property
    def calculator_id(self) -> str:
        return self.definition.id

    @property
    def state(self) -> WorkspaceState:
        return WorkspaceState.CALCULATED if self.session is not None else WorkspaceState.IDLE

    @property
    def detail(self) -> Optional[DetailRecord]:
        return self.session.detail if self.session is not None else None

    def _check_editable(self):
        if self.session is not None:
            raise WorkspaceLocked(f"{self.calculator_id} is showing a result; reset() before editing")

    def set_input(self, name: str, value) -> None:
        self._check_editable()
        self.inputs[name] = "" if value is None else str(value)

    def set_price(self, name: str, value) -> None:
        self._check_editable()
        self.prices[name] = "" if value is None else str(value)

    def calculate(self) -> CalculationSession:
        """Freeze the current inputs into a session. Calling again while Calculated returns the same session."""
        if self.session is None:
            self.session = engine.snapshot(
                self.calculator_id, dict(self.inputs), dict(self.prices), currency=self.currency,
            )
        return self.session

    def reset(self, clear_inputs: bool = False) -> None:
        """Drop the session and go back to editing. Inputs are kept unless clear_inputs."""
        self.session = None
        if clear_inputs:
            self.inputs.clear()
            self.prices.clear()
