import random
from typing import Mapping, Optional

from ..models import RARITY_ORDER, RegularPlant
from .catalog_helper import CatalogHelper


class RewardHelper:
    """Weighted rarity rolls for seed packs."""

    def __init__(self, catalog: CatalogHelper, rng: Optional[random.Random] = None):
        self.catalog = catalog
        self.rng = rng or random.Random()

    def pick_rarity(self, rarity_rates: Mapping[str, float], roll: float) -> Optional[str]:
        """
        Walks rarities in fixed order accumulating their rates and returns the first one whose
        cumulative rate reaches ``roll``. Rarities at 0% are skipped, and a bucket with no catalog
        plants lets the roll carry on into the next bucket. Returns None when nothing matched.
        """

        cumulative = 0.0
        for rarity in RARITY_ORDER:
            rate = rarity_rates.get(rarity, 0)
            if rate <= 0:
                continue

            cumulative += rate
            if roll <= cumulative and self.catalog.get_plants_of_rarity(rarity):
                return rarity

        return None

    def roll_for_plant(self, rarity_rates: Mapping[str, float]) -> RegularPlant:
        roll = self.rng.random() * 100
        rarity = self.pick_rarity(rarity_rates, roll)

        if rarity is None:
            return self.rng.choice(self.catalog.get_common_plants())

        return self.rng.choice(self.catalog.get_plants_of_rarity(rarity))
