from dataclasses import dataclass, fields
from typing import Any, Dict


@dataclass(frozen=True)
class GameSettings:
    """Tunable game constants. Delays and intervals are in seconds."""
    starting_nectar: float = 50
    slot_count: int = 12
    generator_cost_growth: float = 1.15
    pack_reveal_delay: float = 1.5
    milestone_check_delay: float = 0.1
    tick_interval: float = 1.0
    autosave_interval: float = 60.0
    storage_key: str = "plantParadiseGame"

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "GameSettings":
        """Builds settings from a stored dict, ignoring keys that are no longer known."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in raw.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
