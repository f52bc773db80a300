"""
Reward Economy - Roster
=======================
Owns the player's heroes and turns summoned templates into heroes.

A summoned template that matches an owned hero (same name, class and
rarity) becomes a talent point on that hero; anything else becomes a new
level-1 hero.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from .catalog import HeroTemplate
from .constants import TALENT_POINTS_PER_DUPLICATE
from .heroes import HeroInstance, create_hero
from .sources import IdProvider, uuid_provider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RosterChange:
    """What one summoned template did to the roster."""
    template: HeroTemplate
    hero: HeroInstance
    is_new: bool
    talent_points_gained: int = 0


class Roster:
    """The player's hero collection."""

    def __init__(
        self,
        heroes: Optional[Iterable[HeroInstance]] = None,
        id_provider: IdProvider = uuid_provider,
    ):
        self._heroes: List[HeroInstance] = list(heroes or [])
        self.id_provider = id_provider

    def __len__(self) -> int:
        return len(self._heroes)

    def __iter__(self) -> Iterator[HeroInstance]:
        return iter(self._heroes)

    @property
    def heroes(self) -> List[HeroInstance]:
        return list(self._heroes)

    def get(self, hero_id: str) -> Optional[HeroInstance]:
        for hero in self._heroes:
            if hero.id == hero_id:
                return hero
        return None

    def find_duplicate(self, template: HeroTemplate) -> Optional[HeroInstance]:
        for hero in self._heroes:
            if hero.matches(template):
                return hero
        return None

    def add_summoned(self, templates: Iterable[HeroTemplate]) -> List[RosterChange]:
        """
        Add summon results in order.

        Duplicates within the same batch match heroes created earlier in it.
        """
        changes: List[RosterChange] = []
        for template in templates:
            owned = self.find_duplicate(template)
            if owned is not None:
                owned.talent_points += TALENT_POINTS_PER_DUPLICATE
                logger.debug("duplicate %s -> %s now has %d talent points",
                             template.id, owned.name, owned.talent_points)
                changes.append(RosterChange(
                    template=template,
                    hero=owned,
                    is_new=False,
                    talent_points_gained=TALENT_POINTS_PER_DUPLICATE,
                ))
                continue

            hero = create_hero(template, self.id_provider)
            self._heroes.append(hero)
            logger.info("new hero %s (%s)", hero.name, hero.rarity.value)
            changes.append(RosterChange(template=template, hero=hero, is_new=True))
        return changes
