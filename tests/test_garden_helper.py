"""
Tests for the progression engine: actions, deferred reveals, milestones and passive income.
"""
import asyncio
import random

import pytest

from plantparadise.helpers import GardenHelper
from plantparadise.models import (
    GameSettings,
    GeneratorPurchased,
    GeneratorState,
    MilestoneReached,
    NectarGenerated,
    PackOpened,
    PlantHarvested,
    Slot,
    SunlightPlantPurchased,
)

from conftest import logged_levels


def fill_garden(store, clock, plant="daisy"):
    store.update(active_slots={i: Slot(type=plant, planted_time=clock()) for i in range(1, 13)})


class TestOpenSeedPack:
    """Tests for the two-phase pack opening."""

    @pytest.mark.asyncio
    async def test_open_debits_and_sets_mutex(self, garden, store, scheduler):
        assert garden.open_seed_pack("basic")
        state = store.load()
        assert state.nectar == 40
        assert state.opening_pack == "basic"
        assert state.plant_collection == {}
        await scheduler.wait_until_idle()

    @pytest.mark.asyncio
    async def test_reveal_plants_and_clears_mutex(self, garden, store, scheduler, events, clock):
        garden.open_seed_pack("basic")
        await scheduler.wait_until_idle()

        state = store.load()
        assert state.opening_pack is None
        assert sum(state.plant_collection.values()) == 1
        assert len(state.active_slots) == 1

        slot_id, slot = next(iter(state.active_slots.items()))
        assert 1 <= slot_id <= 12
        assert slot.planted_time == clock()
        assert slot.type in state.plant_collection
        assert state.last_reward == slot.type

        opened = [e for e in events if isinstance(e, PackOpened)]
        assert opened == [PackOpened(pack_id="basic", plant_id=slot.type, slot_id=slot_id)]

    @pytest.mark.asyncio
    async def test_second_open_fails_while_first_is_pending(self, garden, store, scheduler):
        assert garden.open_seed_pack("basic")
        assert not garden.open_seed_pack("basic")

        state = store.load()
        assert state.nectar == 40
        assert state.opening_pack == "basic"

        await scheduler.wait_until_idle()
        assert garden.open_seed_pack("basic")
        await scheduler.wait_until_idle()

    @pytest.mark.asyncio
    async def test_insufficient_nectar_changes_nothing(self, garden, store, scheduler):
        before = store.load()
        assert not garden.open_seed_pack("legendary")
        assert store.load() == before
        assert scheduler.pending_count == 0

    def test_unknown_pack_is_rejected(self, garden, store):
        before = store.load()
        assert not garden.open_seed_pack("mystery")
        assert store.load() == before

    @pytest.mark.asyncio
    async def test_full_garden_still_records_collection(self, garden, store, scheduler, events, clock):
        fill_garden(store, clock, plant="grass")
        garden.open_seed_pack("basic")
        await scheduler.wait_until_idle()

        state = store.load()
        assert len(state.active_slots) == 12
        assert all(slot.type == "grass" for slot in state.active_slots.values())
        assert sum(state.plant_collection.values()) == 1
        assert state.opening_pack is None
        assert events[0].slot_id is None

    @pytest.mark.asyncio
    async def test_reveal_then_milestone_in_order(self, garden, store, scheduler, events):
        store.update(plant_collection={"daisy": 4})
        garden.open_seed_pack("basic")
        await scheduler.wait_until_idle()

        state = store.load()
        assert state.sunlight == 1
        assert state.last_milestone_reached == 5
        assert state.last_reward == "milestone_5"
        assert [type(e) for e in events] == [PackOpened, MilestoneReached]

    @pytest.mark.asyncio
    async def test_reveal_reads_fresh_state(self, garden, store, scheduler):
        """Changes made while a pack is opening are not lost when it is revealed."""
        garden.open_seed_pack("basic")
        store.update(nectar=store.load().nectar + 100)
        await scheduler.wait_until_idle()
        assert store.load().nectar == 140

    @pytest.mark.asyncio
    async def test_reset_during_reveal_drops_stale_reveal(self, garden, store, scheduler, logger):
        garden.open_seed_pack("basic")
        garden.reset()
        await scheduler.wait_until_idle()

        assert store.load() == store.default_state()
        assert "WARNING" in logged_levels(logger)

    @pytest.mark.asyncio
    async def test_resume_interrupted_reveal(self, garden, store, scheduler):
        store.update(opening_pack="premium")
        assert garden.resume_interrupted_reveal()
        await scheduler.wait_until_idle()

        state = store.load()
        assert state.opening_pack is None
        assert sum(state.plant_collection.values()) == 1

    def test_resume_without_pending_pack_is_noop(self, garden, store):
        before = store.load()
        assert not garden.resume_interrupted_reveal()
        assert store.load() == before


class TestBuySunlightPlant:
    """Tests for sunlight shop purchases."""

    def test_purchase_plants_and_debits(self, garden, store, events, clock):
        store.update(sunlight=5)
        assert garden.buy_sunlight_plant("golden_daisy")

        state = store.load()
        assert state.sunlight == 0
        assert state.plant_collection == {"golden_daisy": 1}
        (slot_id, slot), = state.active_slots.items()
        assert slot == Slot(type="golden_daisy", planted_time=clock())
        assert events == [SunlightPlantPurchased(plant_id="golden_daisy", slot_id=slot_id, cost=5)]

    def test_insufficient_sunlight_fails(self, garden, store):
        store.update(sunlight=4)
        before = store.load()
        assert not garden.buy_sunlight_plant("golden_daisy")
        assert store.load() == before

    def test_full_garden_fails(self, garden, store, clock):
        fill_garden(store, clock)
        store.update(sunlight=50)
        before = store.load()
        assert not garden.buy_sunlight_plant("golden_daisy")
        assert store.load() == before

    def test_unknown_item_fails(self, garden, store):
        store.update(sunlight=50)
        assert not garden.buy_sunlight_plant("daisy")
        assert store.load().sunlight == 50

    def test_purchase_checks_milestones(self, garden, store, events):
        store.update(sunlight=5, plant_collection={"daisy": 4})
        assert garden.buy_sunlight_plant("golden_daisy")

        state = store.load()
        assert state.sunlight == 1
        assert state.last_milestone_reached == 5
        assert isinstance(events[-1], MilestoneReached)


class TestBuyGenerator:
    """Tests for generator upgrades."""

    def test_cost_scales_with_level(self, garden, store, events):
        store.update(nectar=250)
        assert garden.get_generator_cost("sprinkler") == 100

        assert garden.buy_generator("sprinkler")
        assert store.load().nectar == 150
        assert garden.get_generator_cost("sprinkler") == 115

        assert garden.buy_generator("sprinkler")
        assert store.load().nectar == 35
        assert store.load().generators["sprinkler"].level == 2

        assert not garden.buy_generator("sprinkler")
        assert store.load().generators["sprinkler"].level == 2
        assert events == [
            GeneratorPurchased(generator_id="sprinkler", level=1, cost=100),
            GeneratorPurchased(generator_id="sprinkler", level=2, cost=115),
        ]

    def test_purchase_only_touches_nectar_and_level(self, garden, store):
        store.update(nectar=600)
        before = store.load()
        garden.buy_generator("greenhouse")
        after = store.load()

        assert after.nectar == before.nectar - 500
        assert after.generators["greenhouse"] == GeneratorState(level=1, cost=500, base_nectar=8)
        assert {k: v for k, v in after.generators.items() if k != "greenhouse"} == \
               {k: v for k, v in before.generators.items() if k != "greenhouse"}
        assert after.active_slots == before.active_slots
        assert after.sunlight == before.sunlight

    def test_unknown_generator_fails(self, garden, store):
        store.update(nectar=10 ** 6)
        assert not garden.buy_generator("windmill")
        assert garden.get_generator_cost("windmill") is None


class TestHarvest:
    """Tests for harvesting slots."""

    def test_harvest_only_when_ready(self, garden, store, clock, events):
        store.update(active_slots={1: Slot(type="daisy", planted_time=clock())})

        clock.advance(9999)
        assert not garden.harvest_plant(1)
        assert 1 in store.load().active_slots

        clock.advance(1)
        assert garden.harvest_plant(1)
        state = store.load()
        assert state.nectar == 65
        assert state.active_slots == {}
        assert state.last_reward == "harvested_daisy"
        assert events == [PlantHarvested(slot_id=1, plant_id="daisy", reward=15)]

    def test_harvest_empty_slot_fails(self, garden):
        assert not garden.harvest_plant(7)

    def test_harvest_all_counts_ready_slots(self, garden, store, clock):
        store.update(active_slots={
            1: Slot(type="daisy", planted_time=clock()),
            2: Slot(type="grass", planted_time=clock()),
            3: Slot(type="celestial", planted_time=clock()),
        })
        clock.advance(10000)

        assert garden.harvest_all() == 2
        state = store.load()
        assert state.nectar == 50 + 15 + 12
        assert list(state.active_slots) == [3]

    def test_unknown_plant_harvests_for_nothing(self, garden, store, clock):
        store.update(active_slots={3: Slot(type="ghost", planted_time=clock())})
        assert garden.harvest_plant(3)
        state = store.load()
        assert state.nectar == 50
        assert state.active_slots == {}

    def test_slot_status(self, garden, store, clock):
        store.update(active_slots={2: Slot(type="daisy", planted_time=clock())})
        clock.advance(2500)
        slot, percent, remaining = garden.get_slot_status(2)
        assert slot.type == "daisy"
        assert percent == 25.0
        assert remaining == 7500
        assert garden.get_slot_status(5) is None


class TestMilestones:

    def test_jump_back_pays(self, garden, store, events):
        store.update(plant_collection={"daisy": 12})
        event = garden.check_milestones()

        state = store.load()
        assert state.sunlight == 3
        assert state.last_milestone_reached == 10
        assert event == MilestoneReached(threshold=10, sunlight_awarded=3, description="Growing Collection")

    def test_repeat_check_is_noop(self, garden, store):
        store.update(plant_collection={"daisy": 12})
        garden.check_milestones()
        before = store.load()
        assert garden.check_milestones() is None
        assert store.load() == before

    def test_next_milestone(self, garden, store):
        assert garden.get_next_milestone().plants_threshold == 5
        store.update(plant_collection={"daisy": 30})
        assert garden.get_next_milestone().plants_threshold == 50
        store.update(plant_collection={"daisy": 50})
        assert garden.get_next_milestone() is None


class TestPassiveIncome:
    """Tests for nectar/sec and the passive tick."""

    def test_nectar_per_second_sums_slots_and_generators(self, garden, store, clock):
        generators = dict(store.load().generators)
        generators["sprinkler"] = GeneratorState(level=1, cost=100, base_nectar=2)
        store.update(generators=generators, active_slots={
            1: Slot(type="celestial", planted_time=clock()),
            2: Slot(type="daisy", planted_time=clock()),
        })
        assert garden.get_total_nectar_per_second() == 4

    def test_tick_credits_income(self, garden, store, clock, events):
        store.update(active_slots={1: Slot(type="celestial", planted_time=clock())})
        assert garden.tick() == 2
        assert store.load().nectar == 52
        assert events == [NectarGenerated(amount=2)]

    def test_tick_without_income_is_noop(self, garden, store, events):
        before = store.load()
        assert garden.tick() == 0
        assert store.load() == before
        assert events == []

    def test_unknown_slot_warns_once_across_ticks(self, garden, store, clock, logger):
        store.update(active_slots={1: Slot(type="ghost", planted_time=clock())})
        for _ in range(5):
            garden.tick()
        assert logged_levels(logger).count("WARNING") == 1
        assert store.load().nectar == 50


class TestRevealTiming:
    """Tests for the reveal and milestone recheck delays."""

    def test_default_delays(self):
        settings = GameSettings()
        assert settings.pack_reveal_delay == 1.5
        assert settings.milestone_check_delay == 0.1
        assert settings.tick_interval == 1.0

    @pytest.mark.asyncio
    async def test_reveal_and_recheck_wait_for_their_delays(self, store, catalog, scheduler, logger, clock):
        settings = GameSettings(pack_reveal_delay=0.05, milestone_check_delay=0.02)
        garden = GardenHelper(store, catalog, scheduler, logger, settings, rng=random.Random(1234), clock=clock)

        loop = asyncio.get_running_loop()
        timeline = []
        garden.subscribe(lambda event: timeline.append((type(event), loop.time())))

        store.update(plant_collection={"daisy": 4})
        started = loop.time()
        assert garden.open_seed_pack("basic")

        await asyncio.sleep(0.02)
        state = store.load()
        assert state.opening_pack == "basic"
        assert state.plant_collection == {"daisy": 4}
        assert timeline == []

        await scheduler.wait_until_idle()

        assert [event_type for event_type, _ in timeline] == [PackOpened, MilestoneReached]
        (_, revealed_at), (_, milestone_at) = timeline
        assert revealed_at - started >= 0.045
        assert milestone_at - revealed_at >= 0.015
        assert store.load().sunlight == 1


class TestReadApi:

    def test_state_view_is_idempotent(self, garden, store, clock):
        store.update(active_slots={1: Slot(type="rose", planted_time=clock())}, plant_collection={"rose": 1})
        assert garden.get_state_view() == garden.get_state_view()

    def test_state_view_is_read_only(self, garden):
        view = garden.get_state_view()
        with pytest.raises(TypeError):
            view.plant_collection["daisy"] = 1

    def test_listener_errors_do_not_break_actions(self, garden, store, clock, logger):
        def broken_listener(event):
            raise RuntimeError("boom")

        garden.subscribe(broken_listener)
        store.update(active_slots={1: Slot(type="daisy", planted_time=clock() - 10000)})
        assert garden.harvest_plant(1)
        assert "ERROR" in logged_levels(logger)
