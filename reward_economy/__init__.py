"""
Reward Economy
==============
Gacha summoning, hero progression, loot generation and town pricing for a
hero-collecting RPG.

Every random outcome is driven by an injected RandomSource and every new
entity id by an injected IdProvider, so a seed reproduces a whole session.
"""

from .constants import (
    # Enums
    HeroRarity,
    ItemRarity,
    LootQuality,
    HeroClass,
    HeroRole,
    ItemSlot,
    EnemyType,
    # Tunables
    GACHA_RATES,
    PITY_THRESHOLD,
    COST_SINGLE_SUMMON,
    COST_TEN_SUMMON,
    MAX_ENCHANT_LEVEL,
    # Helpers
    get_rarity_color,
    get_rarity_display_name,
    hero_rarity_from_string,
    item_rarity_from_string,
)

from .errors import (
    EconomyError,
    ConfigurationError,
    FailureReason,
)

from .sources import (
    RandomSource,
    SeededRandom,
    ScriptedRandom,
    IdProvider,
    uuid_provider,
    sequential_ids,
)

from .stats import (
    StatBlock,
    EMPTY_STATS,
)

from .rarity import (
    roll_rarity,
    roll_with_pity,
    roll_ten_with_guarantee,
    bump_rarity,
)

from .items import (
    ItemInstance,
    generate_item,
    generate_stats_for_slot,
    calculate_item_value,
    get_effective_stats,
)

from .catalog import (
    HeroTemplate,
    HeroCatalog,
    DEFAULT_HERO_POOL,
    default_catalog,
)

from .heroes import (
    HeroInstance,
    create_hero,
    class_base_stats,
)

from .equipment import (
    EquipmentProvider,
    Loadout,
    equip_item,
    unequip_item,
)

from .progression import (
    LevelUp,
    calculate_required_xp,
    gain_xp,
    calculate_hero_score,
)

from .gacha import (
    GachaState,
    GachaConfig,
    GachaService,
    PityInfo,
    SummonPurchase,
)

from .roster import (
    Roster,
    RosterChange,
)

from .loot import (
    LootConfig,
    LootEngine,
    LootReward,
    DefeatedEnemy,
)

from .economy import (
    ServicePrices,
    EconomyService,
    HealOutcome,
    EnchantOutcome,
    TransactionOutcome,
    BankOutcome,
    MarketListing,
)

__all__ = [
    # Enums
    'HeroRarity',
    'ItemRarity',
    'LootQuality',
    'HeroClass',
    'HeroRole',
    'ItemSlot',
    'EnemyType',
    # Tunables
    'GACHA_RATES',
    'PITY_THRESHOLD',
    'COST_SINGLE_SUMMON',
    'COST_TEN_SUMMON',
    'MAX_ENCHANT_LEVEL',
    'get_rarity_color',
    'get_rarity_display_name',
    'hero_rarity_from_string',
    'item_rarity_from_string',
    # Errors
    'EconomyError',
    'ConfigurationError',
    'FailureReason',
    # Randomness
    'RandomSource',
    'SeededRandom',
    'ScriptedRandom',
    'IdProvider',
    'uuid_provider',
    'sequential_ids',
    # Stats
    'StatBlock',
    'EMPTY_STATS',
    # Rarity
    'roll_rarity',
    'roll_with_pity',
    'roll_ten_with_guarantee',
    'bump_rarity',
    # Items
    'ItemInstance',
    'generate_item',
    'generate_stats_for_slot',
    'calculate_item_value',
    'get_effective_stats',
    # Heroes
    'HeroTemplate',
    'HeroCatalog',
    'DEFAULT_HERO_POOL',
    'default_catalog',
    'HeroInstance',
    'create_hero',
    'class_base_stats',
    'EquipmentProvider',
    'Loadout',
    'equip_item',
    'unequip_item',
    # Progression
    'LevelUp',
    'calculate_required_xp',
    'gain_xp',
    'calculate_hero_score',
    # Gacha
    'GachaState',
    'GachaConfig',
    'GachaService',
    'PityInfo',
    'SummonPurchase',
    'Roster',
    'RosterChange',
    # Loot
    'LootConfig',
    'LootEngine',
    'LootReward',
    'DefeatedEnemy',
    # Town
    'ServicePrices',
    'EconomyService',
    'HealOutcome',
    'EnchantOutcome',
    'TransactionOutcome',
    'BankOutcome',
    'MarketListing',
]
