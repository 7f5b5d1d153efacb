from typing import TYPE_CHECKING, Dict, Optional

from .logging_helper import LoggingHelper

if TYPE_CHECKING:
    from redbot.core import Config


class StorageError(Exception):
    """Raised by a storage backend when a key cannot be written."""


class StorageQuotaExceeded(StorageError):
    """Raised when a write would exceed the backend's size limit."""


class MemoryStorage:
    """A dict-backed key-value backend with an optional size quota."""

    def __init__(self, quota_bytes: Optional[int] = None):
        self.quota_bytes = quota_bytes
        self._data: Dict[str, str] = {}

    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write(self, key: str, value: str):
        if self.quota_bytes is not None:
            used = sum(len(v.encode("utf-8")) for k, v in self._data.items() if k != key)
            if used + len(value.encode("utf-8")) > self.quota_bytes:
                raise StorageQuotaExceeded(f"Writing '{key}' would exceed the {self.quota_bytes} byte quota.")
        self._data[key] = value

    def remove(self, key: str):
        self._data.pop(key, None)

    def keys(self):
        return list(self._data.keys())


class ConfigStorage(MemoryStorage):
    """
    Key-value backend mirrored into Red's Config. Reads and writes hit the in-memory copy;
    the cog is the sole gatekeeper for disk I/O via load_from_disk/commit_to_disk.
    """

    def __init__(self, config_object: "Config", logger: LoggingHelper):
        super().__init__()
        self.config = config_object
        self.logger = logger

    async def load_from_disk(self):
        saves = await self.config.saves()
        self._data = {str(k): v for k, v in saves.items() if isinstance(v, str)}
        await self.logger.log_to_discord(f"Storage: Loaded {len(self._data)} saved garden(s) into memory.", "INFO")

    async def commit_to_disk(self):
        await self.config.saves.set(dict(self._data))
