"""
Reward Economy - Equipment
==========================
The equipment collaborator a hero consults when its stats are refreshed.

Any object with ``get_total_bonus()`` and ``recalc(hero)`` works; Loadout is
the in-memory implementation (one item per slot).
"""

import logging
from typing import TYPE_CHECKING, Dict, List, Optional, Protocol

from .constants import ItemSlot
from .items import ItemInstance
from .stats import EMPTY_STATS, StatBlock

if TYPE_CHECKING:
    from .heroes import HeroInstance

logger = logging.getLogger(__name__)


class EquipmentProvider(Protocol):
    """Source of a hero's equipment bonus."""

    def get_total_bonus(self) -> StatBlock:
        ...

    def recalc(self, hero: "HeroInstance") -> None:
        ...


class Loadout:
    """Items equipped on one hero, keyed by slot."""

    def __init__(self, items: Optional[Dict[ItemSlot, ItemInstance]] = None):
        self._items: Dict[ItemSlot, ItemInstance] = dict(items or {})

    def __len__(self) -> int:
        return len(self._items)

    def get(self, slot: ItemSlot) -> Optional[ItemInstance]:
        return self._items.get(slot)

    @property
    def items(self) -> List[ItemInstance]:
        return list(self._items.values())

    def equip(self, item: ItemInstance) -> Optional[ItemInstance]:
        """Put an item in its slot. Returns the item it replaced, if any."""
        previous = self._items.get(item.slot)
        self._items[item.slot] = item
        return previous

    def unequip(self, slot: ItemSlot) -> Optional[ItemInstance]:
        return self._items.pop(slot, None)

    def get_total_bonus(self) -> StatBlock:
        """Sum of effective (enchanted) stats over every equipped item."""
        return sum((item.effective_stats() for item in self._items.values()), EMPTY_STATS)

    def recalc(self, hero: "HeroInstance") -> None:
        """Effective stats = base + equipment; clamp HP to the new maximum."""
        hero.current_stats = hero.base_stats + self.get_total_bonus()
        hero.clamp_hp()
        logger.debug("%s stats recalculated with %d items", hero.name, len(self._items))


def equip_item(hero: "HeroInstance", item: ItemInstance) -> Optional[ItemInstance]:
    """Equip an item on a hero, creating a Loadout if needed. Returns the replaced item."""
    if hero.equipment is None:
        hero.equipment = Loadout()
    if not isinstance(hero.equipment, Loadout):
        raise TypeError(f"{hero.name} uses a custom equipment provider; equip through it")
    previous = hero.equipment.equip(item)
    hero.equipment.recalc(hero)
    return previous


def unequip_item(hero: "HeroInstance", slot: ItemSlot) -> Optional[ItemInstance]:
    """Remove the item in a slot and refresh the hero's stats."""
    if hero.equipment is None:
        return None
    removed = hero.equipment.unequip(slot)
    hero.equipment.recalc(hero)
    return removed
