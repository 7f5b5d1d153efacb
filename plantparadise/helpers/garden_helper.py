import random
import traceback
from types import MappingProxyType
from typing import Callable, List, Optional, Tuple

from ..models import (
    GameSettings,
    GameState,
    GameStateView,
    GardenEvent,
    GeneratorPurchased,
    GeneratorState,
    Milestone,
    MilestoneReached,
    NectarGenerated,
    PackOpened,
    PlantHarvested,
    Slot,
    SunlightPlantPurchased,
)
from .catalog_helper import CatalogHelper
from .economy_helper import EconomyHelper
from .game_state_helper import GameStore
from .growth_helper import GrowthHelper
from .logging_helper import LoggingHelper
from .reward_helper import RewardHelper
from .scheduler_helper import SchedulerHelper
from .time_helper import TimeHelper

GardenListener = Callable[[GardenEvent], None]


class GardenHelper:
    """
    The progression engine for one garden. Actions validate, then read-modify-write the store
    in one synchronous step and report success as a bool; anything that happened is published
    to subscribers as an event. Deferred effects always re-read fresh state when they run.
    """

    def __init__(
        self,
        store: GameStore,
        catalog: CatalogHelper,
        scheduler: SchedulerHelper,
        logger: LoggingHelper,
        settings: Optional[GameSettings] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.store = store
        self.catalog = catalog
        self.scheduler = scheduler
        self.logger = logger
        self.settings = settings or store.settings
        self.rng = rng or random.Random()
        self.reward_helper = RewardHelper(catalog, self.rng)
        self.clock = clock or TimeHelper.get_current_timestamp_ms
        self._listeners: List[GardenListener] = []

    # --- Events ---

    def subscribe(self, listener: GardenListener):
        self._listeners.append(listener)

    def unsubscribe(self, listener: GardenListener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _publish(self, event: GardenEvent):
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                self.logger.log(f"Garden: Listener failed on {type(event).__name__}: {e}\n"
                                f"{traceback.format_exc()}", "ERROR")

    # --- Read API ---

    def get_state_view(self) -> GameStateView:
        state = self.store.load()
        return GameStateView(
            nectar=state.nectar,
            sunlight=state.sunlight,
            plant_collection=MappingProxyType(dict(state.plant_collection)),
            active_slots=MappingProxyType(dict(state.active_slots)),
            opening_pack=state.opening_pack,
            last_reward=state.last_reward,
            last_milestone_reached=state.last_milestone_reached,
            generators=MappingProxyType(dict(state.generators)),
        )

    def get_total_plants_collected(self) -> int:
        return EconomyHelper.total_plants(self.store.load().plant_collection)

    def get_total_nectar_per_second(self) -> int:
        state = self.store.load()
        slot_income = sum(
            EconomyHelper.slot_nectar_rate(self.catalog.get_item(slot.type))
            for slot in state.active_slots.values()
        )
        return slot_income + EconomyHelper.generator_nectar_rate(state.generators)

    def get_next_milestone(self) -> Optional[Milestone]:
        return self.catalog.get_next_milestone(self.get_total_plants_collected())

    def get_milestone_progress(self) -> Tuple[int, Optional[Milestone]]:
        total = self.get_total_plants_collected()
        return total, self.catalog.get_next_milestone(total)

    def get_generator_cost(self, generator_id: str) -> Optional[int]:
        generator = self.store.load().generators.get(generator_id)
        if generator is None:
            return None
        return EconomyHelper.generator_cost(generator, self.settings.generator_cost_growth)

    def get_empty_slot_ids(self, state: Optional[GameState] = None) -> List[int]:
        state = state or self.store.load()
        return [i for i in range(1, self.settings.slot_count + 1) if i not in state.active_slots]

    def get_slot_status(self, slot_id: int, now: Optional[int] = None) -> Optional[Tuple[Slot, float, int]]:
        """Returns (slot, progress_percent, remaining_ms) for an occupied slot, else None."""

        slot = self.store.load().active_slots.get(slot_id)
        if slot is None:
            return None
        now = self.clock() if now is None else now
        plant = self.catalog.get_item(slot.type)
        return slot, GrowthHelper.progress_percent(slot, plant, now), GrowthHelper.remaining_ms(slot, plant, now)

    # --- Milestones ---

    def check_milestones(self) -> Optional[MilestoneReached]:
        """Pays out every milestone reached since the last payout. No-op if nothing new was reached."""

        state = self.store.load()
        total_plants = EconomyHelper.total_plants(state.plant_collection)
        award, highest, newly_paid = EconomyHelper.evaluate_milestones(
            self.catalog.milestones, total_plants, state.last_milestone_reached
        )

        if not newly_paid:
            return None

        self.store.update(
            sunlight=state.sunlight + award,
            last_milestone_reached=highest,
            last_reward=f"milestone_{highest}",
        )
        self.logger.log(f"Garden ({self.store.storage_key}): Milestone {highest} reached, +{award} sunlight.", "INFO")

        event = MilestoneReached(threshold=highest, sunlight_awarded=award, description=newly_paid[-1].description)
        self._publish(event)
        return event

    # --- Actions ---

    def open_seed_pack(self, pack_id: str) -> bool:
        """Debits the pack and schedules its reveal. Only one pack may be opening at a time."""

        pack = self.catalog.get_seed_pack(pack_id)
        if pack is None:
            return False

        state = self.store.load()
        if state.nectar < pack.cost or state.opening_pack is not None:
            return False

        self.store.update(nectar=state.nectar - pack.cost, opening_pack=pack_id)
        self.scheduler.call_later(self.settings.pack_reveal_delay, self._reveal_pack, pack_id)
        return True

    def _reveal_pack(self, pack_id: str) -> Optional[PackOpened]:
        state = self.store.load()
        if state.opening_pack != pack_id:
            # The garden was reset while this pack was opening.
            self.logger.log(f"Garden ({self.store.storage_key}): Dropping stale '{pack_id}' pack reveal.", "WARNING")
            return None

        pack = self.catalog.get_seed_pack(pack_id)
        rarity_rates = dict(pack.rarity_rates) if pack else {"common": 100}
        plant = self.reward_helper.roll_for_plant(rarity_rates)

        collection = dict(state.plant_collection)
        collection[plant.id] = collection.get(plant.id, 0) + 1

        active_slots = dict(state.active_slots)
        empty_slots = self.get_empty_slot_ids(state)
        slot_id = None
        if empty_slots:
            slot_id = self.rng.choice(empty_slots)
            active_slots[slot_id] = Slot(type=plant.id, planted_time=self.clock())

        self.store.update(
            opening_pack=None,
            plant_collection=collection,
            active_slots=active_slots,
            last_reward=plant.id,
        )

        event = PackOpened(pack_id=pack_id, plant_id=plant.id, slot_id=slot_id)
        self._publish(event)
        self.scheduler.call_later(self.settings.milestone_check_delay, self.check_milestones)
        return event

    def resume_interrupted_reveal(self) -> bool:
        """
        Completes a reveal whose timer was lost, e.g. the bot restarted mid-animation.
        Must only be called when no reveal is scheduled for this garden.
        """

        pack_id = self.store.load().opening_pack
        if pack_id is None:
            return False

        self.logger.log(f"Garden ({self.store.storage_key}): Resuming interrupted '{pack_id}' pack reveal.", "INFO")
        self._reveal_pack(pack_id)
        return True

    def buy_sunlight_plant(self, item_id: str) -> bool:
        item = self.catalog.get_sunlight_item(item_id)
        if item is None:
            return False

        state = self.store.load()
        if state.sunlight < item.sunlight_cost:
            return False

        empty_slots = self.get_empty_slot_ids(state)
        if not empty_slots:
            return False

        slot_id = self.rng.choice(empty_slots)
        active_slots = dict(state.active_slots)
        active_slots[slot_id] = Slot(type=item_id, planted_time=self.clock())
        collection = dict(state.plant_collection)
        collection[item_id] = collection.get(item_id, 0) + 1

        self.store.update(
            sunlight=state.sunlight - item.sunlight_cost,
            active_slots=active_slots,
            plant_collection=collection,
            last_reward=item_id,
        )

        self._publish(SunlightPlantPurchased(plant_id=item_id, slot_id=slot_id, cost=item.sunlight_cost))
        self.check_milestones()
        return True

    def buy_generator(self, generator_id: str) -> bool:
        state = self.store.load()
        generator = state.generators.get(generator_id)
        if generator is None:
            return False

        cost = EconomyHelper.generator_cost(generator, self.settings.generator_cost_growth)
        if state.nectar < cost:
            return False

        generators = dict(state.generators)
        generators[generator_id] = GeneratorState(
            level=generator.level + 1, cost=generator.cost, base_nectar=generator.base_nectar
        )
        self.store.update(nectar=state.nectar - cost, generators=generators)

        self._publish(GeneratorPurchased(generator_id=generator_id, level=generator.level + 1, cost=cost))
        return True

    def harvest_plant(self, slot_id: int, now: Optional[int] = None) -> bool:
        state = self.store.load()
        slot = state.active_slots.get(slot_id)
        if slot is None:
            return False

        plant = self.catalog.get_item(slot.type)
        now = self.clock() if now is None else now
        if not GrowthHelper.is_ready(slot, plant, now):
            return False

        active_slots = dict(state.active_slots)
        del active_slots[slot_id]
        self.store.update(
            nectar=state.nectar + plant.harvest_reward,
            active_slots=active_slots,
            last_reward=f"harvested_{slot.type}",
        )

        self._publish(PlantHarvested(slot_id=slot_id, plant_id=slot.type, reward=plant.harvest_reward))
        return True

    def harvest_all(self) -> int:
        """Harvests every ready slot. Readiness is judged against a single ``now``."""

        now = self.clock()
        slot_ids = sorted(self.store.load().active_slots)
        return sum(1 for slot_id in slot_ids if self.harvest_plant(slot_id, now=now))

    def tick(self) -> int:
        """Credits one interval of passive income. Returns the amount credited."""

        nectar_gain = self.get_total_nectar_per_second()
        if nectar_gain <= 0:
            return 0

        state = self.store.load()
        self.store.update(nectar=state.nectar + nectar_gain)
        self._publish(NectarGenerated(amount=nectar_gain))
        return nectar_gain

    def reset(self) -> GameState:
        self.logger.log(f"Garden ({self.store.storage_key}): Reset to a fresh garden.", "INFO")
        return self.store.reset()
