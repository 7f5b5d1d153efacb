import dataclasses
import json
import math
from typing import Any, Dict, Mapping, Optional

from ..models import GameSettings, GameState, GeneratorState, GeneratorType, Slot
from .logging_helper import LoggingHelper
from .storage_helper import StorageError


def _reject_constant(name: str):
    raise ValueError(f"non-finite number {name} in saved data")


class GameStore:
    """
    The single source of truth for one garden's persistent data.
    Every operation reads, merges and writes the whole aggregate through the storage backend.
    Read-modify-write is not atomic; callers are expected to be single-threaded.
    """

    def __init__(
        self,
        storage,
        logger: LoggingHelper,
        generator_types: Mapping[str, GeneratorType],
        settings: Optional[GameSettings] = None,
        storage_key: Optional[str] = None,
    ):
        self.storage = storage
        self.logger = logger
        self.generator_types = generator_types
        self.settings = settings or GameSettings()
        self.storage_key = storage_key or self.settings.storage_key

    def default_state(self) -> GameState:
        return GameState(
            nectar=self.settings.starting_nectar,
            generators={
                gen_id: GeneratorState(level=0, cost=gen.cost, base_nectar=gen.base_nectar)
                for gen_id, gen in self.generator_types.items()
            },
        )

    @staticmethod
    def serialize(state: GameState) -> Dict[str, Any]:
        """Converts a GameState into its persisted JSON shape."""
        return {
            "nectar": state.nectar,
            "sunlight": state.sunlight,
            "plantCollection": dict(state.plant_collection),
            "activeSlots": {
                str(slot_id): {"type": slot.type, "plantedTime": slot.planted_time}
                for slot_id, slot in state.active_slots.items()
            },
            "openingPack": state.opening_pack,
            "lastReward": state.last_reward,
            "lastMilestoneReached": state.last_milestone_reached,
            "generators": {
                gen_id: {"level": gen.level, "cost": gen.cost, "baseNectar": gen.base_nectar}
                for gen_id, gen in state.generators.items()
            },
        }

    def _merge_over_defaults(self, saved: Dict[str, Any]) -> Dict[str, Any]:
        merged = self.serialize(self.default_state())
        default_generators = merged["generators"]
        merged.update(saved)

        if isinstance(saved.get("generators"), dict):
            merged["generators"] = {**default_generators, **saved["generators"]}

        return merged

    def _deserialize(self, raw: Dict[str, Any]) -> GameState:
        nectar = float(raw["nectar"])
        if not math.isfinite(nectar):
            raise ValueError(f"nectar must be finite, got {nectar}")

        active_slots = {}
        for slot_id, slot_dict in raw["activeSlots"].items():
            slot_num = int(slot_id)
            if not (1 <= slot_num <= self.settings.slot_count):
                self.logger.log(f"State Load: Dropping out-of-range slot {slot_id}.", "WARNING")
                continue
            active_slots[slot_num] = Slot(type=str(slot_dict["type"]), planted_time=int(slot_dict["plantedTime"]))

        return GameState(
            nectar=max(0.0, nectar),
            sunlight=int(raw["sunlight"]),
            plant_collection={str(k): int(v) for k, v in raw["plantCollection"].items()},
            active_slots=active_slots,
            opening_pack=raw["openingPack"],
            last_reward=raw["lastReward"],
            last_milestone_reached=int(raw["lastMilestoneReached"]),
            generators={
                gen_id: GeneratorState(level=int(g["level"]), cost=g["cost"], base_nectar=g["baseNectar"])
                for gen_id, g in raw["generators"].items()
            },
        )

    def load(self) -> GameState:
        """Returns the saved garden merged over defaults, or pure defaults if the save is unreadable."""

        try:
            saved_text = self.storage.read(self.storage_key)
        except StorageError as e:
            self.logger.log(f"State Load ({self.storage_key}): Storage read failed: {e}. Using defaults.", "WARNING")
            return self.default_state()

        if saved_text is None:
            return self.default_state()

        try:
            saved = json.loads(saved_text, parse_constant=_reject_constant)
            if not isinstance(saved, dict):
                raise ValueError(f"expected a JSON object, got {type(saved).__name__}")
            return self._deserialize(self._merge_over_defaults(saved))
        except (ValueError, TypeError, KeyError, AttributeError, OverflowError) as e:
            self.logger.log(f"State Load ({self.storage_key}): Could not parse saved game state ({e}). "
                            f"Using defaults.", "WARNING")
            return self.default_state()

    def save(self, state: GameState):
        """Persists the full aggregate. Failures are logged and dropped."""

        try:
            self.storage.write(self.storage_key, json.dumps(self.serialize(state), ensure_ascii=False))
        except (TypeError, ValueError, StorageError) as e:
            self.logger.log(f"State Save ({self.storage_key}): Could not save game state: {e}", "WARNING")

    def update(self, **changes: Any) -> GameState:
        """Shallow-merges ``changes`` over freshly loaded state, saves and returns the result."""

        new_state = dataclasses.replace(self.load(), **changes)
        self.save(new_state)
        return new_state

    def reset(self) -> GameState:
        """Deletes the saved garden entirely, equivalent to a fresh install."""

        try:
            self.storage.remove(self.storage_key)
        except StorageError as e:
            self.logger.log(f"State Reset ({self.storage_key}): Could not remove save: {e}", "WARNING")
        return self.load()
