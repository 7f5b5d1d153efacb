from .checks import is_cog_ready
