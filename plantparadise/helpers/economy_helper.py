import math
from typing import Iterable, List, Mapping, Tuple

from ..models import CatalogItem, GeneratorState, Milestone


class EconomyHelper:
    """Static pricing, income and milestone arithmetic."""

    @staticmethod
    def generator_cost(generator: GeneratorState, growth: float = 1.15) -> int:
        """Price of the next level: floor(base cost × growth^level)."""
        # 100 * 1.15 is 114.99999999999999 in binary floating point
        return math.floor(round(generator.cost * growth ** generator.level, 6))

    @staticmethod
    def slot_nectar_rate(plant: CatalogItem) -> int:
        """Display income of a planted slot. Uses the per-minute scale of the harvest reward."""
        return math.floor(plant.harvest_reward * 0.1 / 60)

    @staticmethod
    def generator_nectar_rate(generators: Mapping[str, GeneratorState]) -> int:
        return sum(gen.base_nectar * gen.level for gen in generators.values() if gen.level > 0)

    @staticmethod
    def total_plants(plant_collection: Mapping[str, int]) -> int:
        return sum(plant_collection.values())

    @staticmethod
    def evaluate_milestones(
        milestones: Iterable[Milestone], total_plants: int, last_reached: int
    ) -> Tuple[int, int, List[Milestone]]:
        """
        Returns (sunlight_award, new_last_reached, newly_paid_milestones).
        Every milestone above ``last_reached`` and at or below ``total_plants`` is paid, so a
        single jump back-pays any skipped thresholds. A no-op returns (0, last_reached, []).
        """

        unlocked = [m for m in milestones if m.plants_threshold <= total_plants]
        if not unlocked:
            return 0, last_reached, []

        highest = max(m.plants_threshold for m in unlocked)
        if highest <= last_reached:
            return 0, last_reached, []

        newly_paid = sorted((m for m in unlocked if m.plants_threshold > last_reached),
                            key=lambda m: m.plants_threshold)
        award = sum(m.sunlight_reward for m in newly_paid)
        return award, highest, newly_paid
