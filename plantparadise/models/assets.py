from dataclasses import dataclass, field
from typing import Tuple, Union

RARITY_ORDER: Tuple[str, ...] = ("common", "uncommon", "rare", "legendary", "mythical")


@dataclass(frozen=True)
class RegularPlant:
    """A plant obtainable from seed packs, from plants.json."""
    id: str
    name: str
    icon: str
    rarity: str
    growth_time: int
    harvest_reward: int
    kind: str = "regular"


@dataclass(frozen=True)
class SunlightPlant:
    """A plant sold for sunlight in the sunlight shop, from sunlight_shop.json."""
    id: str
    name: str
    icon: str
    rarity: str
    growth_time: int
    harvest_reward: int
    sunlight_cost: int
    kind: str = "sunlight"


@dataclass(frozen=True)
class UnknownPlant:
    """Stand-in for a saved plant key that no longer resolves to catalog data."""
    id: str
    name: str = "Unknown Plant"
    icon: str = "❓"
    rarity: str = "unknown"
    growth_time: int = 0
    harvest_reward: int = 0
    kind: str = "unknown"


CatalogItem = Union[RegularPlant, SunlightPlant, UnknownPlant]


@dataclass(frozen=True)
class SeedPack:
    """Represents a seed pack definition from packs.json."""
    id: str
    name: str
    cost: int
    icon: str = "📦"
    rarity_rates: Tuple[Tuple[str, float], ...] = field(default_factory=tuple)

    def rate_for(self, rarity: str) -> float:
        return dict(self.rarity_rates).get(rarity, 0)


@dataclass(frozen=True)
class GeneratorType:
    """Display data for a generator plus the economics new gardens start with."""
    id: str
    name: str
    icon: str
    description: str
    cost: int
    base_nectar: int


@dataclass(frozen=True)
class Milestone:
    """Represents a collection milestone from milestones.json."""
    plants_threshold: int
    sunlight_reward: int
    description: str
