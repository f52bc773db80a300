"""
Reward Economy - Heroes
=======================
Mutable hero instances owned by the roster.

Stats:
- base_stats: class curve plus level-up growth, never includes equipment
- current_stats: base_stats plus equipment bonus (effective stats)
- max_hp is current_stats.hp; current_hp never exceeds it
"""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional

from .constants import (
    CLASS_BASE_STATS,
    CLASS_CREATION_GROWTH,
    HeroClass,
    HeroRarity,
    HeroRole,
)
from .progression import calculate_required_xp
from .sources import IdProvider, uuid_provider
from .stats import StatBlock

if TYPE_CHECKING:
    from .catalog import HeroTemplate
    from .equipment import EquipmentProvider


@dataclass
class HeroInstance:
    """A hero the player owns."""
    id: str
    name: str
    hero_class: HeroClass
    rarity: HeroRarity
    level: int
    experience: int
    required_xp: int
    base_stats: StatBlock
    current_stats: StatBlock
    current_hp: float
    talent_points: int = 0
    role: Optional[HeroRole] = None
    description: str = ""
    faction: Optional[str] = None
    special_ability: Optional[str] = None
    template_id: Optional[str] = None
    equipment: Optional["EquipmentProvider"] = None

    @property
    def max_hp(self) -> float:
        return self.current_stats.hp

    @property
    def missing_hp(self) -> float:
        return max(0, self.max_hp - self.current_hp)

    @property
    def is_alive(self) -> bool:
        return self.current_hp > 0

    def clamp_hp(self) -> None:
        """Keep current_hp within [0, max_hp]."""
        self.current_hp = max(0, min(self.current_hp, self.max_hp))

    def take_damage(self, amount: float) -> None:
        self.current_hp = max(0, self.current_hp - amount)

    def restore_full_hp(self) -> None:
        self.current_hp = self.max_hp

    def matches(self, template: "HeroTemplate") -> bool:
        """Same hero as a summoned template (name, class and rarity)."""
        return (
            self.name == template.name
            and self.hero_class == template.hero_class
            and self.rarity == template.rarity
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization. Equipment is not included."""
        return {
            'id': self.id,
            'name': self.name,
            'hero_class': self.hero_class.value,
            'rarity': self.rarity.value,
            'level': self.level,
            'experience': self.experience,
            'required_xp': self.required_xp,
            'talent_points': self.talent_points,
            'base_stats': self.base_stats.to_dict(),
            'current_stats': self.current_stats.to_dict(),
            'current_hp': self.current_hp,
            'role': self.role.value if self.role else None,
            'description': self.description,
            'faction': self.faction,
            'special_ability': self.special_ability,
            'template_id': self.template_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HeroInstance':
        """Create HeroInstance from dictionary."""
        base_stats = StatBlock.from_dict(data['base_stats'])
        current_stats = StatBlock.from_dict(data.get('current_stats', data['base_stats']))
        role = data.get('role')
        hero = cls(
            id=data['id'],
            name=data['name'],
            hero_class=HeroClass(data['hero_class']),
            rarity=HeroRarity(data['rarity']),
            level=data['level'],
            experience=data.get('experience', 0),
            required_xp=data['required_xp'],
            base_stats=base_stats,
            current_stats=current_stats,
            current_hp=data.get('current_hp', current_stats.hp),
            talent_points=data.get('talent_points', 0),
            role=HeroRole(role) if role else None,
            description=data.get('description', ""),
            faction=data.get('faction'),
            special_ability=data.get('special_ability'),
            template_id=data.get('template_id'),
        )
        hero.clamp_hp()
        return hero


# =============================================================================
# CREATION
# =============================================================================

def class_base_stats(hero_class: HeroClass, level: int = 1) -> StatBlock:
    """
    Class stat curve at creation time.

    floor(base + growth * (level - 1)) for flat stats; crit is not floored.
    """
    if level < 1:
        raise ValueError(f"hero level must be at least 1, got {level}")
    base = CLASS_BASE_STATS[hero_class]
    growth = CLASS_CREATION_GROWTH[hero_class]
    steps = level - 1
    hp, atk, defense, spd, crit = (b + g * steps for b, g in zip(base, growth))
    return StatBlock(
        hp=math.floor(hp),
        atk=math.floor(atk),
        defense=math.floor(defense),
        spd=math.floor(spd),
        crit=crit,
    )


def create_hero(
    template: "HeroTemplate",
    id_provider: IdProvider = uuid_provider,
    level: int = 1,
) -> HeroInstance:
    """New hero from a template, at full HP with no experience."""
    stats = class_base_stats(template.hero_class, level)
    return HeroInstance(
        id=id_provider(),
        name=template.name,
        hero_class=template.hero_class,
        rarity=template.rarity,
        level=level,
        experience=0,
        required_xp=calculate_required_xp(level),
        base_stats=stats,
        current_stats=stats,
        current_hp=stats.hp,
        role=template.role,
        description=template.description,
        faction=template.faction,
        special_ability=template.special_ability,
        template_id=template.id,
    )
