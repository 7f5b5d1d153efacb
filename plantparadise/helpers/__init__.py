from .time_helper import TimeHelper
from .logging_helper import LoggingHelper
from .storage_helper import MemoryStorage, ConfigStorage, StorageError, StorageQuotaExceeded
from .data_helper import DataHelper, DEFAULT_DATA_PATH
from .catalog_helper import CatalogHelper, CatalogIntegrityError
from .reward_helper import RewardHelper
from .growth_helper import GrowthHelper
from .economy_helper import EconomyHelper
from .game_state_helper import GameStore
from .scheduler_helper import SchedulerHelper
from .garden_helper import GardenHelper
