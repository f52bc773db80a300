"""
Reward Economy - Stat Block
===========================
Immutable five-stat container shared by heroes and items.

Supports ``+`` for stacking equipment bonuses onto base stats, and
``sum()`` over a list of blocks.
"""

from dataclasses import dataclass, fields
from typing import Dict, Tuple


@dataclass(frozen=True)
class StatBlock:
    """
    Hero or item stats.

    crit is a percentage (15.0 means 15%), the rest are flat values.
    """
    hp: float = 0
    atk: float = 0
    defense: float = 0
    spd: float = 0
    crit: float = 0.0

    def __add__(self, other: 'StatBlock') -> 'StatBlock':
        """Add two StatBlocks together."""
        if not isinstance(other, StatBlock):
            return NotImplemented

        return StatBlock(
            hp=self.hp + other.hp,
            atk=self.atk + other.atk,
            defense=self.defense + other.defense,
            spd=self.spd + other.spd,
            crit=self.crit + other.crit,
        )

    def __radd__(self, other):
        """Support sum() by handling 0 + StatBlock."""
        if other == 0:
            return self
        return self.__add__(other)

    @classmethod
    def from_tuple(cls, values: Tuple[float, float, float, float, float]) -> 'StatBlock':
        """Build from an (hp, atk, defense, spd, crit) tuple."""
        hp, atk, defense, spd, crit = values
        return cls(hp=hp, atk=atk, defense=defense, spd=spd, crit=crit)

    def as_tuple(self) -> Tuple[float, float, float, float, float]:
        return (self.hp, self.atk, self.defense, self.spd, self.crit)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary for serialization."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, float]) -> 'StatBlock':
        """Create StatBlock from dictionary. Missing stats default to 0."""
        return cls(
            hp=data.get('hp', 0),
            atk=data.get('atk', 0),
            defense=data.get('defense', 0),
            spd=data.get('spd', 0),
            crit=data.get('crit', 0.0),
        )


EMPTY_STATS = StatBlock()
