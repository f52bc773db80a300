"""
Reward Economy - Constants
==========================
Single source of truth for every tunable number in the reward economy.

Rarity tables, pity thresholds, summon prices, class stat curves, item
templates and town prices all live here. Services take their defaults from
these tables; override them through the config dataclasses instead of
editing values at call sites.

SOURCE OF TRUTH:
- Gacha rates are percentages that sum to 100
- Loot rarity distributions are percentages that sum to 100
- Chest and hidden-path tables are keyed by LootQuality
"""

from enum import Enum
from typing import Dict, List, Optional, Tuple


# =============================================================================
# RARITY ENUMS
# =============================================================================
# Declaration order is most common -> rarest. The rarity roller scans in the
# reverse of this order.

class HeroRarity(Enum):
    """Hero rarity from most common to rarest."""
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"

    @property
    def is_epic_or_better(self) -> bool:
        return self in (HeroRarity.EPIC, HeroRarity.LEGENDARY)


class ItemRarity(Enum):
    """Item rarity from most common to rarest."""
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"
    MYTHIC = "mythic"


class LootQuality(Enum):
    """Quality of a treasure chest or hidden path reward."""
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class HeroClass(Enum):
    """Hero combat class."""
    WARRIOR = "warrior"
    ARCHER = "archer"
    MAGE = "mage"
    CLERIC = "cleric"
    PALADIN = "paladin"


class HeroRole(Enum):
    """Party role of a hero template."""
    TANK = "tank"
    DPS = "dps"
    HEALER = "healer"
    SUPPORT = "support"


class ItemSlot(Enum):
    """Equipment slot an item occupies."""
    HELMET = "helmet"
    WEAPON = "weapon"
    CHEST = "chest"
    GLOVES = "gloves"
    LEGS = "legs"
    BOOTS = "boots"
    ACCESSORY = "accessory"


class EnemyType(Enum):
    """Defeated enemy category, controls the item drop chance."""
    NORMAL = "normal"
    ELITE = "elite"
    BOSS = "boss"


# =============================================================================
# GACHA
# =============================================================================
# Summon prices in gold. The ten-pull is discounted by one summon.

COST_SINGLE_SUMMON = 1000
COST_TEN_SUMMON = 9000
TEN_SUMMON_COUNT = 10

# Base hero drop rates (percent, sum to 100)
GACHA_RATES: Dict[HeroRarity, float] = {
    HeroRarity.COMMON: 60.0,
    HeroRarity.RARE: 25.0,
    HeroRarity.EPIC: 12.0,
    HeroRarity.LEGENDARY: 3.0,
}

# Summons without an epic-or-better hero before the next one is forced to epic
PITY_THRESHOLD = 100

# Rarity the pity counter forces. Legendary is never force-granted.
PITY_RARITY = HeroRarity.EPIC

# The 10th hero of a ten-pull is drawn from these when the first nine were common
TEN_SUMMON_GUARANTEE: Tuple[HeroRarity, ...] = (
    HeroRarity.RARE,
    HeroRarity.EPIC,
    HeroRarity.LEGENDARY,
)

# A duplicate summon converts into talent points on the owned hero
TALENT_POINTS_PER_DUPLICATE = 1

HERO_RARITY_COLORS: Dict[HeroRarity, str] = {
    HeroRarity.COMMON: "#9ca3af",
    HeroRarity.RARE: "#3b82f6",
    HeroRarity.EPIC: "#a855f7",
    HeroRarity.LEGENDARY: "#ff8c00",
}


# =============================================================================
# HERO PROGRESSION
# =============================================================================
# required_xp(level) = floor(XP_BASE * level ** XP_EXPONENT)

XP_BASE = 100
XP_EXPONENT = 1.5

# Base stats at level 1: (hp, atk, defense, spd, crit)
CLASS_BASE_STATS: Dict[HeroClass, Tuple[float, float, float, float, float]] = {
    HeroClass.WARRIOR: (150, 25, 30, 10, 5),
    HeroClass.ARCHER: (80, 35, 10, 25, 15),
    HeroClass.MAGE: (70, 40, 8, 15, 10),
    HeroClass.CLERIC: (100, 15, 20, 12, 5),
    HeroClass.PALADIN: (120, 22, 25, 14, 8),
}

# Flat growth per level above 1, used when a hero is created above level 1
CLASS_CREATION_GROWTH: Dict[HeroClass, Tuple[float, float, float, float, float]] = {
    HeroClass.WARRIOR: (10, 2, 2.5, 0.5, 0.3),
    HeroClass.ARCHER: (5, 3, 0.8, 1.5, 0.8),
    HeroClass.MAGE: (4, 3.5, 0.5, 1, 0.5),
    HeroClass.CLERIC: (7, 1.2, 1.5, 0.8, 0.3),
    HeroClass.PALADIN: (8, 2, 2, 1, 0.5),
}

# Multiplicative growth on level-up, rounded up: new = ceil(old * (1 + rate))
LEVEL_UP_GROWTH: Dict[str, float] = {
    'hp': 0.05,       # +5% HP
    'atk': 0.03,      # +3% ATK
    'defense': 0.03,  # +3% DEF
    'spd': 0.02,      # +2% SPD
}

# Crit grows additively, rounded to one decimal
LEVEL_UP_CRIT_GAIN = 0.5

# Hero score weights: hp, atk, defense, spd, crit
HERO_SCORE_WEIGHTS: Dict[str, float] = {
    'hp': 0.5,
    'atk': 5.0,
    'defense': 3.0,
    'spd': 2.0,
    'crit': 10.0,
}

HERO_SCORE_RARITY_MULTIPLIERS: Dict[HeroRarity, float] = {
    HeroRarity.COMMON: 1.0,
    HeroRarity.RARE: 1.2,
    HeroRarity.EPIC: 1.4,
    HeroRarity.LEGENDARY: 1.6,
}


# =============================================================================
# ITEMS
# =============================================================================
# base_stat = floor(ITEM_STAT_BASE * level ** ITEM_LEVEL_EXPONENT * rarity_mult)

ITEM_STAT_BASE = 3
ITEM_LEVEL_EXPONENT = 1.2

# Crit on items is a tenth of the slot weight, kept to two decimals
ITEM_CRIT_SCALE = 0.1

ITEM_RARITY_MULTIPLIERS: Dict[ItemRarity, float] = {
    ItemRarity.COMMON: 1.0,
    ItemRarity.UNCOMMON: 1.2,
    ItemRarity.RARE: 1.5,
    ItemRarity.EPIC: 2.0,
    ItemRarity.LEGENDARY: 3.0,
    ItemRarity.MYTHIC: 5.0,
}

# gold_value = floor(base * level / 5 * (1 + ENCHANT_VALUE_BONUS * enchant))
ITEM_BASE_VALUES: Dict[ItemRarity, int] = {
    ItemRarity.COMMON: 10,
    ItemRarity.UNCOMMON: 50,
    ItemRarity.RARE: 200,
    ItemRarity.EPIC: 1000,
    ItemRarity.LEGENDARY: 10000,
    ItemRarity.MYTHIC: 100000,
}
ITEM_VALUE_LEVEL_DIVISOR = 5
ENCHANT_VALUE_BONUS = 0.2

# Effective stats scale by 1 + ENCHANT_STAT_BONUS * enchant_level
ENCHANT_STAT_BONUS = 0.1

# Slot stat weights: (hp, atk, defense, spd, crit)
SLOT_STAT_WEIGHTS: Dict[ItemSlot, Tuple[float, float, float, float, float]] = {
    ItemSlot.HELMET: (3, 0, 2, 0, 0),
    ItemSlot.WEAPON: (0, 3, 0, 0.5, 0.5),
    ItemSlot.CHEST: (4, 0, 3, 0, 0),
    ItemSlot.GLOVES: (1, 1, 1, 1, 0.3),
    ItemSlot.LEGS: (2, 0, 2, 0.5, 0),
    ItemSlot.BOOTS: (1, 0, 1, 2, 0),
    ItemSlot.ACCESSORY: (1, 1, 0.5, 0.5, 1),
}

# Common items carry no prefix
ITEM_NAME_PREFIXES: Dict[ItemRarity, List[str]] = {
    ItemRarity.COMMON: [],
    ItemRarity.UNCOMMON: ['Decent', 'Good', 'Reliable'],
    ItemRarity.RARE: ['Fine', 'Quality', 'Sturdy', 'Sharp'],
    ItemRarity.EPIC: ['Superior', 'Enhanced', 'Reinforced', 'Blessed'],
    ItemRarity.LEGENDARY: ['Ancient', 'Mystic', 'Cursed', 'Holy'],
    ItemRarity.MYTHIC: ['Divine', 'Eternal', 'Celestial', 'Primordial'],
}

SLOT_NOUNS: Dict[ItemSlot, List[str]] = {
    ItemSlot.HELMET: ['Helmet', 'Helm', 'Crown', 'Circlet'],
    ItemSlot.WEAPON: ['Sword', 'Blade', 'Axe', 'Mace'],
    ItemSlot.CHEST: ['Armor', 'Breastplate', 'Chainmail', 'Tunic'],
    ItemSlot.GLOVES: ['Gloves', 'Gauntlets', 'Handwraps'],
    ItemSlot.LEGS: ['Greaves', 'Leggings', 'Pants'],
    ItemSlot.BOOTS: ['Boots', 'Shoes', 'Treads'],
    ItemSlot.ACCESSORY: ['Ring', 'Amulet', 'Talisman', 'Charm'],
}

SLOT_DESCRIPTIONS: Dict[ItemSlot, str] = {
    ItemSlot.HELMET: "Protects the head from enemy attacks.",
    ItemSlot.WEAPON: "A deadly weapon for combat.",
    ItemSlot.CHEST: "Sturdy armor for the torso.",
    ItemSlot.GLOVES: "Protective handwear.",
    ItemSlot.LEGS: "Armor for the lower body.",
    ItemSlot.BOOTS: "Footwear for adventurers.",
    ItemSlot.ACCESSORY: "A magical trinket with special properties.",
}

SLOT_ICONS: Dict[ItemSlot, str] = {
    ItemSlot.HELMET: "⛑️",
    ItemSlot.WEAPON: "⚔️",
    ItemSlot.CHEST: "🛡️",
    ItemSlot.GLOVES: "🧤",
    ItemSlot.LEGS: "👖",
    ItemSlot.BOOTS: "👢",
    ItemSlot.ACCESSORY: "💍",
}

# item_score = floor(base * (1 + level/50) * (1 + 0.15 * enchant) * slot_mult)
ITEM_SCORE_BASE: Dict[ItemRarity, int] = {
    ItemRarity.COMMON: 10,
    ItemRarity.UNCOMMON: 25,
    ItemRarity.RARE: 50,
    ItemRarity.EPIC: 100,
    ItemRarity.LEGENDARY: 250,
    ItemRarity.MYTHIC: 500,
}
ITEM_SCORE_SLOT_MULTIPLIERS: Dict[ItemSlot, float] = {
    ItemSlot.WEAPON: 1.5,
    ItemSlot.CHEST: 1.2,
    ItemSlot.HELMET: 1.0,
    ItemSlot.GLOVES: 1.0,
    ItemSlot.LEGS: 1.0,
    ItemSlot.BOOTS: 1.0,
    ItemSlot.ACCESSORY: 1.3,
}
ITEM_SCORE_LEVEL_DIVISOR = 50
ITEM_SCORE_ENCHANT_BONUS = 0.15

ITEM_RARITY_COLORS: Dict[ItemRarity, str] = {
    ItemRarity.COMMON: "#6c757d",
    ItemRarity.UNCOMMON: "#28a745",
    ItemRarity.RARE: "#007bff",
    ItemRarity.EPIC: "#9c27b0",
    ItemRarity.LEGENDARY: "#ff9800",
    ItemRarity.MYTHIC: "#ffd700",
}


# =============================================================================
# LOOT
# =============================================================================
# Combat gold per enemy = floor(level * BASE_GOLD_PER_LEVEL * variance)
# with variance uniform in [1 - GOLD_VARIANCE, 1 + GOLD_VARIANCE].

BASE_GOLD_PER_LEVEL = 10
GOLD_VARIANCE = 0.2

# Chance for a defeated enemy to drop one item
DROP_CHANCES: Dict[EnemyType, float] = {
    EnemyType.NORMAL: 0.30,
    EnemyType.ELITE: 0.50,
    EnemyType.BOSS: 1.00,
}

# Combat drop rarity distribution (percent, sum to 100)
COMBAT_RARITY_RATES: Dict[ItemRarity, float] = {
    ItemRarity.COMMON: 60.0,
    ItemRarity.UNCOMMON: 25.0,
    ItemRarity.RARE: 10.0,
    ItemRarity.EPIC: 4.0,
    ItemRarity.LEGENDARY: 1.0,
}

# Dropped item level = enemy level + randint(MIN, MAX), clamped to >= 1
MIN_ITEM_LEVEL_OFFSET = -1
MAX_ITEM_LEVEL_OFFSET = 2

# Chest and hidden-path gold = floor(base * uniform(low, high))
REWARD_GOLD_SPREAD: Tuple[float, float] = (0.8, 1.2)

CHEST_BASE_GOLD: Dict[LootQuality, int] = {
    LootQuality.COMMON: 50,
    LootQuality.RARE: 150,
    LootQuality.EPIC: 400,
    LootQuality.LEGENDARY: 1000,
}

CHEST_ITEM_COUNTS: Dict[LootQuality, int] = {
    LootQuality.COMMON: 1,
    LootQuality.RARE: 2,
    LootQuality.EPIC: 3,
    LootQuality.LEGENDARY: 4,
}

# Per-quality chest rarity tables (percent)
CHEST_RARITY_RATES: Dict[LootQuality, Dict[ItemRarity, float]] = {
    LootQuality.COMMON: {
        ItemRarity.COMMON: 70.0,
        ItemRarity.UNCOMMON: 25.0,
        ItemRarity.RARE: 5.0,
    },
    LootQuality.RARE: {
        ItemRarity.COMMON: 30.0,
        ItemRarity.UNCOMMON: 40.0,
        ItemRarity.RARE: 25.0,
        ItemRarity.EPIC: 5.0,
    },
    LootQuality.EPIC: {
        ItemRarity.UNCOMMON: 20.0,
        ItemRarity.RARE: 45.0,
        ItemRarity.EPIC: 30.0,
        ItemRarity.LEGENDARY: 5.0,
    },
    LootQuality.LEGENDARY: {
        ItemRarity.RARE: 30.0,
        ItemRarity.EPIC: 50.0,
        ItemRarity.LEGENDARY: 20.0,
    },
}

# Chest item level = player level + randint(-1, +1)
CHEST_LEVEL_OFFSETS: Tuple[int, int] = (-1, 1)

# Hidden paths only exist for rare and better
HIDDEN_PATH_BASE_GOLD: Dict[LootQuality, int] = {
    LootQuality.RARE: 300,
    LootQuality.EPIC: 800,
    LootQuality.LEGENDARY: 2000,
}

HIDDEN_PATH_ITEM_COUNTS: Dict[LootQuality, int] = {
    LootQuality.RARE: 3,
    LootQuality.EPIC: 4,
    LootQuality.LEGENDARY: 5,
}

# Hidden path items start at the path quality
HIDDEN_PATH_ITEM_RARITY: Dict[LootQuality, ItemRarity] = {
    LootQuality.RARE: ItemRarity.RARE,
    LootQuality.EPIC: ItemRarity.EPIC,
    LootQuality.LEGENDARY: ItemRarity.LEGENDARY,
}

# Flat chance for a hidden path item to bump one tier
HIDDEN_PATH_BUMP_CHANCE = 0.20

# Hidden path item level = player level + randint(0, 4)
HIDDEN_PATH_LEVEL_OFFSETS: Tuple[int, int] = (0, 4)


# =============================================================================
# TOWN SERVICES
# =============================================================================

HEAL_PER_HP = 1           # gold per missing HP
FULL_HEAL_COST = 50       # party heal price cap

# enchant_cost(level) = ceil(ENCHANT_BASE_COST * ENCHANT_LEVEL_MULTIPLIER ** level)
ENCHANT_BASE_COST = 100
ENCHANT_LEVEL_MULTIPLIER = 1.5
MAX_ENCHANT_LEVEL = 10

# Success chance (percent) by current enchant level
ENCHANT_SUCCESS_RATES: Dict[int, int] = {
    0: 100,
    1: 90,
    2: 80,
    3: 70,
    4: 60,
    5: 50,
    6: 40,
    7: 30,
    8: 20,
    9: 10,
}

# Each enchant level adds this much to the sell base
ENCHANT_SELL_BONUS = 50

BUY_PRICE_MULTIPLIER = 1.5
SELL_PRICE_MULTIPLIER = 0.6

# Market stock item level = town level + randint(0, MARKET_LEVEL_SPREAD)
MARKET_LEVEL_SPREAD = 2
MARKET_STOCK_SIZE = 10

DEPOSIT_FEE_PCT = 0.0     # % of deposited amount
WITHDRAW_FEE_PCT = 1.0    # % of withdrawn amount
DAILY_INTEREST_PCT = 0.5  # % of stored gold per day


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_rarity_color(rarity) -> str:
    """Get the UI color for a hero or item rarity."""
    if isinstance(rarity, HeroRarity):
        return HERO_RARITY_COLORS[rarity]
    return ITEM_RARITY_COLORS.get(rarity, "#FFFFFF")


def get_rarity_display_name(rarity) -> str:
    """Display name for a rarity ('legendary' -> 'Legendary')."""
    return rarity.value.capitalize()


def hero_rarity_from_string(value: str) -> Optional[HeroRarity]:
    """Parse a hero rarity from a case-insensitive string."""
    value = value.strip().lower()
    for rarity in HeroRarity:
        if rarity.value == value:
            return rarity
    return None


def item_rarity_from_string(value: str) -> Optional[ItemRarity]:
    """Parse an item rarity from a case-insensitive string."""
    value = value.strip().lower()
    for rarity in ItemRarity:
        if rarity.value == value:
            return rarity
    return None
