"""
In-memory game configuration model and round result.

The configuration tables are plain dicts. An embedding application may
edit them after the engine is built, and the round pipeline re-checks every
reference it follows at draw, match and reward time.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

# Symbol kinds
STANDARD = "standard"
BONUS = "bonus"

# Bonus impacts
MULTIPLY_REWARD = "multiply_reward"
EXTRA_BONUS = "extra_bonus"
MISS_IMPACT = "miss"

# Win combination modes
SAME_SYMBOLS = "same_symbols"
LINEAR_SYMBOLS = "linear_symbols"

MISS_SYMBOL = "MISS"

Position = Tuple[int, int]
Grid = List[List[str]]
MatchSet = Dict[str, List[str]]


@dataclass(frozen=True)
class SymbolDef:
    label: str
    kind: str
    reward_multiplier: float = 0.0
    impact: Optional[str] = None
    extra: Optional[float] = None

    @property
    def is_standard(self) -> bool:
        return self.kind == STANDARD


@dataclass(frozen=True)
class WinPatternDef:
    name: str
    when: str
    reward_multiplier: float
    count: Optional[int] = None
    covered_areas: Tuple[Tuple[str, ...], ...] = ()
    group: Optional[str] = None


@dataclass
class GameConfig:
    rows: int
    columns: int
    symbols: Dict[str, SymbolDef]
    win_combinations: Dict[str, WinPatternDef]
    standard_weights: Dict[Position, Dict[str, int]]
    bonus_weights: Optional[Dict[str, int]] = None

    def weights_for(self, row: int, column: int) -> Dict[str, int]:
        """Weight table for a cell: its own entry, else (0, 0), else the first listed entry."""
        weights = self.standard_weights.get((row, column))
        if weights is not None:
            return weights
        weights = self.standard_weights.get((0, 0))
        if weights is not None:
            return weights
        return next(iter(self.standard_weights.values()))


@dataclass
class RoundResult:
    matrix: Grid
    reward: float = 0.0
    applied_winning_combinations: MatchSet = field(default_factory=dict)
    applied_bonus_symbol: Optional[str] = None
