"""
Reward Economy - Hero Catalog
=============================
Immutable hero templates and the rarity-partitioned catalog the gacha
draws from.

DEFAULT_HERO_POOL holds 55 templates:
- 5 legendary, 15 epic, 15 rare, 20 common
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional

from .constants import HeroClass, HeroRarity, HeroRole
from .errors import ConfigurationError
from .sources import RandomSource, choice


@dataclass(frozen=True)
class HeroTemplate:
    """Static definition of a summonable hero."""
    id: str
    name: str
    hero_class: HeroClass
    role: HeroRole
    rarity: HeroRarity
    description: str
    icon: str
    faction: Optional[str] = None
    special_ability: Optional[str] = None


class HeroCatalog:
    """Templates grouped by rarity. Read-only after construction."""

    def __init__(self, templates: Iterable[HeroTemplate]):
        self._templates: List[HeroTemplate] = list(templates)
        self._by_id: Dict[str, HeroTemplate] = {}
        self._by_rarity: Dict[HeroRarity, List[HeroTemplate]] = {r: [] for r in HeroRarity}
        for template in self._templates:
            if template.id in self._by_id:
                raise ConfigurationError(f"duplicate hero template id: {template.id}")
            self._by_id[template.id] = template
            self._by_rarity[template.rarity].append(template)

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[HeroTemplate]:
        return iter(self._templates)

    def __contains__(self, template_id: str) -> bool:
        return template_id in self._by_id

    def get(self, template_id: str) -> Optional[HeroTemplate]:
        return self._by_id.get(template_id)

    def templates_of(self, rarity: HeroRarity) -> List[HeroTemplate]:
        return list(self._by_rarity[rarity])

    def rarity_counts(self) -> Dict[HeroRarity, int]:
        return {rarity: len(group) for rarity, group in self._by_rarity.items()}

    def pick(self, rarity: HeroRarity, rng: RandomSource) -> HeroTemplate:
        """
        Uniformly pick one template of the given rarity (one draw).

        Raises ConfigurationError if the catalog has none of that rarity.
        """
        group = self._by_rarity[rarity]
        if not group:
            raise ConfigurationError(f"no heroes available for rarity: {rarity.value}")
        return choice(rng, group)


# =============================================================================
# DEFAULT HERO POOL
# =============================================================================

def _hero(rarity, hero_id, name, hero_class, role, description, icon,
          faction=None, special_ability=None) -> HeroTemplate:
    return HeroTemplate(
        id=hero_id,
        name=name,
        hero_class=hero_class,
        role=role,
        rarity=rarity,
        description=description,
        icon=icon,
        faction=faction,
        special_ability=special_ability,
    )


_W, _A, _M, _C, _P = (HeroClass.WARRIOR, HeroClass.ARCHER, HeroClass.MAGE,
                      HeroClass.CLERIC, HeroClass.PALADIN)
_TANK, _DPS, _HEAL, _SUP = HeroRole.TANK, HeroRole.DPS, HeroRole.HEALER, HeroRole.SUPPORT

_L, _E, _R, _CO = HeroRarity.LEGENDARY, HeroRarity.EPIC, HeroRarity.RARE, HeroRarity.COMMON


DEFAULT_HERO_POOL: List[HeroTemplate] = [
    # Legendary (5)
    _hero(_L, 'legendary_arthur', 'King Arthur', _W, _TANK,
          'The legendary king who united the realm with Excalibur', '👑', 'Kingdom',
          'Excalibur Strike - Deals 300% damage and heals all allies for 20% max HP'),
    _hero(_L, 'legendary_merlin', 'Merlin the Archmage', _M, _DPS,
          'The most powerful wizard in history', '🧙', 'Kingdom',
          'Time Stop - Freezes all enemies for 2 turns, deals 200% damage'),
    _hero(_L, 'legendary_valkyrie', 'Valkyrie', _P, _SUP,
          'Divine warrior from the heavens', '👼', 'Divine',
          'Divine Resurrection - Revives all dead allies with 50% HP'),
    _hero(_L, 'legendary_phoenix', 'Phoenix Archer', _A, _DPS,
          'Reborn from flames, wielding the Eternal Bow', '🔥', 'Elementals',
          'Phoenix Storm - Deals 250% damage to all enemies, burns for 3 turns'),
    _hero(_L, 'legendary_sage', 'Ancient Sage', _C, _HEAL,
          'Immortal healer with millennium of wisdom', '🕉️', 'Monastery',
          'Eternal Blessing - Full heal all allies, immunity for 2 turns'),

    # Epic (15)
    _hero(_E, 'epic_dragonslayer', 'Dragonslayer', _W, _TANK,
          'Legendary warrior who defeated the Fire Dragon', '🐉', 'Mountain',
          'Dragon Roar - Stuns all enemies, +50% DEF'),
    _hero(_E, 'epic_shadowblade', 'Shadow Blade', _W, _DPS,
          'Master assassin from the Shadow Guild', '🗡️', 'Shadows',
          'Shadow Strike - 200% crit damage, guaranteed critical'),
    _hero(_E, 'epic_huntmaster', 'Hunt Master', _A, _DPS,
          'Elite hunter from the Forest Kingdom', '🎯', 'Forest',
          'Multi-Shot Barrage - Hits all enemies 3 times'),
    _hero(_E, 'epic_stormcaller', 'Storm Caller', _M, _DPS,
          'Weather mage who commands lightning', '⚡', 'Elementals',
          'Lightning Storm - Chain lightning to all enemies'),
    _hero(_E, 'epic_frostqueen', 'Frost Queen', _M, _SUP,
          'Ice sorceress from the Frozen North', '❄️', 'North',
          'Frozen Prison - Freezes all enemies for 1 turn'),
    _hero(_E, 'epic_holypriest', 'High Priest', _C, _HEAL,
          'Leader of the Sacred Church', '✝️', 'Church',
          'Mass Heal - Heals all allies for 100 HP'),
    _hero(_E, 'epic_warden', 'Nature Warden', _C, _SUP,
          'Guardian of the ancient forest', '🌳', 'Forest',
          "Nature's Blessing - Heals over time, +30% HP regen"),
    _hero(_E, 'epic_champion', 'Divine Champion', _P, _TANK,
          'Holy warrior blessed by the gods', '⚔️', 'Divine',
          'Holy Aegis - Blocks all damage for 1 turn'),
    _hero(_E, 'epic_dreadknight', 'Dread Knight', _P, _DPS,
          'Corrupted paladin with dark powers', '💀', 'Undead',
          'Life Drain - Deals damage and heals self'),
    _hero(_E, 'epic_berserker', 'Berserker Chief', _W, _DPS,
          'Fierce warrior from the Savage Lands', '🪓', 'Barbarian',
          'Rage Mode - +100% ATK but -50% DEF'),
    _hero(_E, 'epic_sniper', 'Elite Sniper', _A, _DPS,
          'Precision marksman with deadly accuracy', '🎯', 'Kingdom',
          'Headshot - 300% damage single target'),
    _hero(_E, 'epic_necromancer', 'Necromancer', _M, _SUP,
          'Master of death and undead magic', '☠️', 'Undead',
          'Raise Dead - Summons skeleton warrior'),
    _hero(_E, 'epic_oracle', 'Oracle', _C, _SUP,
          'Seer who glimpses the future', '🔮', 'Mystic',
          'Foresight - Reveals enemy next move, +20% dodge'),
    _hero(_E, 'epic_crusader', 'Crusader', _P, _TANK,
          'Holy warrior on a righteous quest', '🛡️', 'Church',
          'Holy Smite - Damage + heal combo'),
    _hero(_E, 'epic_bladedancer', 'Blade Dancer', _W, _DPS,
          'Agile swordmaster with twin blades', '⚔️', 'Desert',
          'Blade Whirlwind - Hits all enemies twice'),

    # Rare (15)
    _hero(_R, 'rare_knight', 'Royal Knight', _W, _TANK,
          "Elite knight from the King's Guard", '🛡️', 'Kingdom'),
    _hero(_R, 'rare_swordsman', 'Master Swordsman', _W, _DPS,
          'Skilled blade master', '⚔️', 'Kingdom'),
    _hero(_R, 'rare_ranger', 'Forest Ranger', _A, _DPS,
          'Expert tracker and hunter', '🏹', 'Forest'),
    _hero(_R, 'rare_crossbow', 'Crossbow Expert', _A, _DPS,
          'Deadly accurate with heavy crossbow', '🎯', 'Mountain'),
    _hero(_R, 'rare_battlemage', 'Battle Mage', _M, _DPS,
          'Warrior trained in combat magic', '🔥', 'Kingdom'),
    _hero(_R, 'rare_illusionist', 'Illusionist', _M, _SUP,
          'Master of deception and trickery', '✨', 'Mystic'),
    _hero(_R, 'rare_priest', 'War Priest', _C, _HEAL,
          'Healer trained for battlefield', '⚕️', 'Church'),
    _hero(_R, 'rare_monk', 'Monk', _C, _SUP,
          'Spiritual warrior from monastery', '🙏', 'Monastery'),
    _hero(_R, 'rare_templar', 'Templar', _P, _TANK,
          'Holy defender of the faith', '⚔️', 'Church'),
    _hero(_R, 'rare_guardian', 'Guardian', _P, _TANK,
          'Protector of the innocent', '🛡️', 'Kingdom'),
    _hero(_R, 'rare_gladiator', 'Gladiator', _W, _DPS,
          'Arena champion with countless victories', '⚔️', 'Desert'),
    _hero(_R, 'rare_scout', 'Scout', _A, _SUP,
          'Fast and stealthy reconnaissance expert', '🏃', 'Forest'),
    _hero(_R, 'rare_elementalist', 'Elementalist', _M, _DPS,
          'Mage who wields all elements', '🌊', 'Elementals'),
    _hero(_R, 'rare_druid', 'Druid', _C, _HEAL,
          'Nature magic practitioner', '🌿', 'Forest'),
    _hero(_R, 'rare_inquisitor', 'Inquisitor', _P, _DPS,
          'Hunter of evil and corruption', '🔱', 'Church'),

    # Common (20)
    _hero(_CO, 'common_soldier', 'Soldier', _W, _TANK, 'Regular army infantry', '⚔️', 'Kingdom'),
    _hero(_CO, 'common_guard', 'Guard', _W, _TANK, 'Town guard with basic training', '🛡️', 'Kingdom'),
    _hero(_CO, 'common_militia', 'Militia', _W, _DPS, 'Village defender', '⚔️', 'Kingdom'),
    _hero(_CO, 'common_footman', 'Footman', _W, _TANK, 'Basic infantry unit', '🛡️', 'Kingdom'),
    _hero(_CO, 'common_hunter', 'Hunter', _A, _DPS, 'Simple hunter from the woods', '🏹', 'Forest'),
    _hero(_CO, 'common_bowman', 'Bowman', _A, _DPS, 'Trained archer', '🏹', 'Kingdom'),
    _hero(_CO, 'common_marksman', 'Marksman', _A, _DPS, 'Skilled shooter', '🎯', 'Kingdom'),
    _hero(_CO, 'common_skirmisher', 'Skirmisher', _A, _DPS, 'Light ranged fighter', '🏹', 'Desert'),
    _hero(_CO, 'common_apprentice', 'Apprentice Mage', _M, _DPS, 'Student of the arcane arts', '🔮', 'Kingdom'),
    _hero(_CO, 'common_wizard', 'Wizard', _M, _DPS, 'Basic magic user', '🧙', 'Kingdom'),
    _hero(_CO, 'common_sorcerer', 'Sorcerer', _M, _DPS, 'Self-taught mage', '🔮', 'Mystic'),
    _hero(_CO, 'common_warlock', 'Warlock', _M, _DPS, 'Dark magic practitioner', '🌑', 'Shadows'),
    _hero(_CO, 'common_acolyte', 'Acolyte', _C, _HEAL, 'Novice healer', '⚕️', 'Church'),
    _hero(_CO, 'common_healer', 'Healer', _C, _HEAL, 'Basic healing magic user', '💚', 'Church'),
    _hero(_CO, 'common_medic', 'Field Medic', _C, _HEAL, 'Combat medic', '⚕️', 'Kingdom'),
    _hero(_CO, 'common_initiate', 'Initiate', _C, _SUP, 'Religious trainee', '🙏', 'Church'),
    _hero(_CO, 'common_squire', 'Squire', _P, _TANK, 'Knight in training', '🛡️', 'Kingdom'),
    _hero(_CO, 'common_sentinel', 'Sentinel', _P, _TANK, 'Basic holy defender', '🛡️', 'Church'),
    _hero(_CO, 'common_defender', 'Defender', _P, _TANK, 'Shield bearer', '🛡️', 'Kingdom'),
    _hero(_CO, 'common_protector', 'Protector', _P, _SUP, 'Basic support warrior', '⚔️', 'Kingdom'),
]


def default_catalog() -> HeroCatalog:
    """Catalog over the built-in 55-hero pool."""
    return HeroCatalog(DEFAULT_HERO_POOL)
