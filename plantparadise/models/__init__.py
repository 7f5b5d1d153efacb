from .assets import (
    RARITY_ORDER,
    RegularPlant,
    SunlightPlant,
    UnknownPlant,
    CatalogItem,
    SeedPack,
    GeneratorType,
    Milestone,
)
from .game_state import (
    Slot,
    GeneratorState,
    GameState,
    GameStateView,
)
from .events import (
    PackOpened,
    MilestoneReached,
    PlantHarvested,
    SunlightPlantPurchased,
    GeneratorPurchased,
    NectarGenerated,
    GardenEvent,
)
from .settings import GameSettings

__all__ = [
    "RARITY_ORDER",
    "RegularPlant",
    "SunlightPlant",
    "UnknownPlant",
    "CatalogItem",
    "SeedPack",
    "GeneratorType",
    "Milestone",
    "Slot",
    "GeneratorState",
    "GameState",
    "GameStateView",
    "PackOpened",
    "MilestoneReached",
    "PlantHarvested",
    "SunlightPlantPurchased",
    "GeneratorPurchased",
    "NectarGenerated",
    "GardenEvent",
    "GameSettings",
]
