from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class Slot:
    """A plant growing in one of the garden slots."""
    type: str
    planted_time: int


@dataclass(frozen=True)
class GeneratorState:
    """Per-garden economics of a generator. ``cost`` is the level-0 price."""
    level: int
    cost: int
    base_nectar: int


@dataclass
class GameState:
    """The internal representation of a single garden."""
    nectar: float = 50
    sunlight: int = 0
    plant_collection: Dict[str, int] = field(default_factory=dict)
    active_slots: Dict[int, Slot] = field(default_factory=dict)
    opening_pack: Optional[str] = None
    last_reward: Optional[str] = None
    last_milestone_reached: int = 0
    generators: Dict[str, GeneratorState] = field(default_factory=dict)


# --- External Immutable View ---

@dataclass(frozen=True)
class GameStateView:
    """The external read-only view of a garden."""
    nectar: float
    sunlight: int
    plant_collection: MappingProxyType
    active_slots: MappingProxyType
    opening_pack: Optional[str]
    last_reward: Optional[str]
    last_milestone_reached: int
    generators: MappingProxyType

    @property
    def occupied_slot_ids(self) -> Tuple[int, ...]:
        return tuple(sorted(self.active_slots))
