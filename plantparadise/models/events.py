from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class PackOpened:
    """A pack reveal finished. ``slot_id`` is None when the garden was full."""
    pack_id: str
    plant_id: str
    slot_id: Optional[int]


@dataclass(frozen=True)
class MilestoneReached:
    threshold: int
    sunlight_awarded: int
    description: str


@dataclass(frozen=True)
class PlantHarvested:
    slot_id: int
    plant_id: str
    reward: int


@dataclass(frozen=True)
class SunlightPlantPurchased:
    plant_id: str
    slot_id: int
    cost: int


@dataclass(frozen=True)
class GeneratorPurchased:
    generator_id: str
    level: int
    cost: int


@dataclass(frozen=True)
class NectarGenerated:
    amount: float


GardenEvent = Union[
    PackOpened,
    MilestoneReached,
    PlantHarvested,
    SunlightPlantPurchased,
    GeneratorPurchased,
    NectarGenerated,
]
