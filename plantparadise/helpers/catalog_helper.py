from typing import Dict, List, Optional

from ..models import (
    RARITY_ORDER,
    CatalogItem,
    GeneratorType,
    Milestone,
    RegularPlant,
    SeedPack,
    SunlightPlant,
    UnknownPlant,
)
from .logging_helper import LoggingHelper


class CatalogIntegrityError(Exception):
    """Raised when the static catalog cannot satisfy a lookup it must always satisfy."""


class CatalogHelper:
    """
    Unified, read-only registry over every catalog table.
    Plant lookups are total: regular plants, sunlight-shop plants and unknown keys all resolve to an item.
    """

    def __init__(
        self,
        plants: Dict[str, RegularPlant],
        seed_packs: Dict[str, SeedPack],
        generator_types: Dict[str, GeneratorType],
        sunlight_shop: Dict[str, SunlightPlant],
        milestones: List[Milestone],
        logger: LoggingHelper,
    ):
        self.plants = plants
        self.seed_packs = seed_packs
        self.generator_types = generator_types
        self.sunlight_shop = sunlight_shop
        self.milestones = sorted(milestones, key=lambda m: m.plants_threshold)
        self.logger = logger

        overlap = set(plants) & set(sunlight_shop)
        if overlap:
            logger.log(f"CRITICAL WARNING: Keys {sorted(overlap)} exist as both regular and sunlight plants. "
                       f"Regular definitions win.", "CRITICAL")

        self.plants_by_rarity: Dict[str, List[RegularPlant]] = {}
        self._unknown_items: Dict[str, UnknownPlant] = {}
        self._categorize_plants()

    @classmethod
    def from_data_helper(cls, data_helper, logger: LoggingHelper) -> "CatalogHelper":
        return cls(
            data_helper.plants,
            data_helper.seed_packs,
            data_helper.generator_types,
            data_helper.sunlight_shop,
            data_helper.milestones,
            logger,
        )

    def _categorize_plants(self):
        """Groups regular plants by rarity for reward rolls."""

        for plant in self.plants.values():
            self.plants_by_rarity.setdefault(plant.rarity, []).append(plant)

        if "common" not in self.plants_by_rarity:
            self.logger.log("CRITICAL WARNING: No plants with rarity 'common' were found. Pack rolls that miss "
                            "every bucket will fail!", "CRITICAL")

    def get_item(self, key: str) -> CatalogItem:
        if key in self.plants:
            return self.plants[key]
        if key in self.sunlight_shop:
            return self.sunlight_shop[key]
        if key not in self._unknown_items:
            self.logger.log(f"Catalog: Unknown plant key '{key}' referenced by saved data.", "WARNING")
            self._unknown_items[key] = UnknownPlant(id=key)
        return self._unknown_items[key]

    def get_plants_of_rarity(self, rarity: str) -> List[RegularPlant]:
        return self.plants_by_rarity.get(rarity, [])

    def get_common_plants(self) -> List[RegularPlant]:
        common = self.get_plants_of_rarity("common")
        if not common:
            raise CatalogIntegrityError("The catalog has no common plants to fall back on.")
        return common

    def get_seed_pack(self, pack_id: str) -> Optional[SeedPack]:
        return self.seed_packs.get(pack_id)

    def get_generator_type(self, generator_id: str) -> Optional[GeneratorType]:
        return self.generator_types.get(generator_id)

    def get_sunlight_item(self, item_id: str) -> Optional[SunlightPlant]:
        return self.sunlight_shop.get(item_id)

    def get_next_milestone(self, total_plants: int) -> Optional[Milestone]:
        return next((m for m in self.milestones if m.plants_threshold > total_plants), None)

    def get_rarity_sort_key(self, rarity: str) -> int:
        return RARITY_ORDER.index(rarity) if rarity in RARITY_ORDER else len(RARITY_ORDER)
