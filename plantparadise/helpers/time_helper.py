import math
import time


class TimeHelper:
    """A static helper class for standardized time operations. Garden timestamps are epoch milliseconds."""

    @staticmethod
    def get_current_timestamp_ms() -> int:
        """Returns the current Unix timestamp in milliseconds."""
        return int(time.time() * 1000)

    @staticmethod
    def format_time(ms: float) -> str:
        """Formats a duration as '42s' or '3m 5s', rounding partial seconds up."""
        seconds = math.ceil(ms / 1000)
        if seconds < 60:
            return f"{seconds}s"
        minutes, remaining_seconds = divmod(seconds, 60)
        return f"{minutes}m {remaining_seconds}s"
