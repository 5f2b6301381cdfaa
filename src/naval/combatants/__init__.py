"""Combatant exports."""

from .automated import AutomatedCombatant
from .base import Combatant
from .interactive import InputSource, InteractiveCombatant, parse_placement, parse_target

__all__ = [
    "AutomatedCombatant",
    "Combatant",
    "InputSource",
    "InteractiveCombatant",
    "parse_placement",
    "parse_target",
]
