import json
import pathlib
from typing import Any, Dict, List

from ..models import (
    RegularPlant,
    SunlightPlant,
    SeedPack,
    GeneratorType,
    Milestone,
    RARITY_ORDER,
)
from .logging_helper import LoggingHelper

DEFAULT_DATA_PATH = pathlib.Path(__file__).resolve().parent.parent / "data"


class DataHelper:
    """
    Handles the loading and validation of all JSON catalog files from the data directory.
    This class is responsible for parsing raw JSON into structured dataclass objects.
    It operates in a read-only manner on the data path.
    """

    def __init__(self, data_path_obj: pathlib.Path, logger: LoggingHelper):
        self.data_path = data_path_obj
        self.logger = logger

        self.plants: Dict[str, RegularPlant] = {}
        self.seed_packs: Dict[str, SeedPack] = {}
        self.generator_types: Dict[str, GeneratorType] = {}
        self.sunlight_shop: Dict[str, SunlightPlant] = {}
        self.milestones: List[Milestone] = []

    def load_all_data(self):
        """Master method to load all catalog files."""

        self.logger.log("Data loading process initiated.", "INFO")

        self.plants = self._load_plants_data()
        self.seed_packs = self._load_seed_packs_data()
        self.generator_types = self._load_generators_data()
        self.sunlight_shop = self._load_sunlight_shop_data()
        self.milestones = self._load_milestones_data()

        self.logger.log("All data files loaded and processed.", "INFO")

    def _load_json_file(self, filename: str, default_data: Any) -> Any:
        """Generic JSON file loader with validation and logging. Does not write to disk."""

        file_path = self.data_path / filename
        log_prefix = f"Data Load ({filename}): "
        try:
            if file_path.exists():
                with open(file_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)

                if data:
                    self.logger.log(f"{log_prefix}Successfully loaded {len(data)} entries.", "INFO")
                    return data
                else:
                    self.logger.log(f"{log_prefix}File is empty. Using default fallback data.", "WARNING")
                    return default_data
            else:
                self.logger.log(
                    f"{log_prefix}File not found. This is a critical error if not intended. "
                    "Using default fallback data.", "ERROR"
                )
                return default_data
        except (json.JSONDecodeError, OSError) as e:
            self.logger.log(f"{log_prefix}Failed to load or parse: {e}. Using default fallback data.", "ERROR")
            return default_data

    def _load_plants_data(self) -> Dict[str, RegularPlant]:
        fallback = {"daisy": {"name": "Daisy", "icon": "🌼", "rarity": "common", "growth_time": 10000,
                              "harvest_reward": 15}}
        data = self._load_json_file("plants.json", fallback)

        plants = {}
        for plant_id, details in data.items():
            if details.get("rarity") not in RARITY_ORDER:
                self.logger.log(f"Data Load (plants.json): '{plant_id}' has unknown rarity "
                                f"'{details.get('rarity')}'. It will never be rolled.", "WARNING")
            plants[plant_id] = RegularPlant(id=plant_id, **details)
        return plants

    def _load_seed_packs_data(self) -> Dict[str, SeedPack]:
        fallback = {"basic": {"name": "Basic Seed Pack", "cost": 10, "rarity_rates": {"common": 100}}}
        data = self._load_json_file("packs.json", fallback)

        packs = {}
        for pack_id, details in data.items():
            details = dict(details)
            rates = details.pop("rarity_rates", {})
            if sum(rates.values()) != 100:
                self.logger.log(f"Data Load (packs.json): Rates for '{pack_id}' sum to {sum(rates.values())}, "
                                f"not 100.", "WARNING")
            packs[pack_id] = SeedPack(id=pack_id, rarity_rates=tuple(rates.items()), **details)
        return packs

    def _load_generators_data(self) -> Dict[str, GeneratorType]:
        data = self._load_json_file("generators.json", {})
        return {gen_id: GeneratorType(id=gen_id, **details) for gen_id, details in data.items()}

    def _load_sunlight_shop_data(self) -> Dict[str, SunlightPlant]:
        data = self._load_json_file("sunlight_shop.json", {})
        return {item_id: SunlightPlant(id=item_id, **details) for item_id, details in data.items()}

    def _load_milestones_data(self) -> List[Milestone]:
        data = self._load_json_file("milestones.json", [])
        milestones = [Milestone(**m_dict) for m_dict in data]
        return sorted(milestones, key=lambda m: m.plants_threshold)
