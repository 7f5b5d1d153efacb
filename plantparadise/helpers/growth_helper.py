from ..models import CatalogItem, Slot


class GrowthHelper:
    """
    Pure growth math over a slot and its catalog item. Growth is a function of wall-clock
    elapsed time only, so it can be re-derived at any later ``now``.
    """

    @staticmethod
    def progress_percent(slot: Slot, plant: CatalogItem, now: int) -> float:
        if plant.growth_time <= 0:
            return 100.0
        elapsed = now - slot.planted_time
        return min(100.0, 100.0 * elapsed / plant.growth_time)

    @staticmethod
    def is_ready(slot: Slot, plant: CatalogItem, now: int) -> bool:
        return GrowthHelper.progress_percent(slot, plant, now) >= 100.0

    @staticmethod
    def remaining_ms(slot: Slot, plant: CatalogItem, now: int) -> int:
        elapsed = now - slot.planted_time
        return max(0, plant.growth_time - elapsed)

    @staticmethod
    def progress_bar(percent: float, width: int = 10) -> str:
        filled = int(max(0.0, min(percent, 100.0)) / 100 * width)
        return "▰" * filled + "▱" * (width - filled)
