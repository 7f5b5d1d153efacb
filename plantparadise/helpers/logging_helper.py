import asyncio
from datetime import datetime, timezone
from typing import Optional, List, Tuple
import discord


class LoggingHelper:
    """Handles all logging operations, including Discord channel and console output."""

    def __init__(self, bot: Optional[discord.Client], log_channel_id: Optional[int] = None):
        self.bot = bot
        self.log_channel_id = log_channel_id
        self._log_queue: List[Tuple[str, str]] = []

    def _bot_is_ready(self) -> bool:
        return self.bot is not None and self.log_channel_id is not None and self.bot.is_ready()

    async def log_to_discord(self, message: str, level: str = "INFO", embed: Optional[discord.Embed] = None):
        """Sends a formatted log message to the designated Discord log channel."""

        if not self._bot_is_ready():
            self._log_queue.append((message, level))
            print(f"[LOG_QUEUE|{level.upper()}] Bot not ready. Queued: {message}")
            return

        log_channel = self.bot.get_channel(self.log_channel_id)

        if not isinstance(log_channel, discord.TextChannel):
            print(
                f"[LOG_ERROR|{level.upper()}] Log channel {self.log_channel_id} not found or not a TextChannel. "
                f"Message: {message}")
            return

        timestamp = datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')
        log_prefix = f"`[{timestamp}] [{level.upper()}]` "

        try:
            full_message = log_prefix + message

            if len(full_message) <= 2000:
                await log_channel.send(content=full_message, embed=embed,
                                       allowed_mentions=discord.AllowedMentions.none())
            else:
                await log_channel.send(content=f"{log_prefix}Log message exceeds 2000 characters. See chunks below.",
                                       embed=embed, allowed_mentions=discord.AllowedMentions.none())

                for i in range(0, len(message), 1900):
                    await log_channel.send(f"```{level.upper()} Chunk {i // 1900 + 1}```\n{message[i:i + 1900]}")
        except discord.Forbidden:
            print(f"[LOG_FORBIDDEN] No permission to send to log channel {self.log_channel_id}.")
        except discord.HTTPException as e:
            print(f"[LOG_HTTP_ERROR] Failed to send to log channel {self.log_channel_id}: {e}")

    def log(self, message: str, level: str = "INFO"):
        """
        Synchronous logger for game logic that cannot await. Prints to console immediately
        and forwards to Discord once the bot's loop is running; otherwise the message is queued.
        """

        timestamp = datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')
        print(f"[{level.upper()}|{timestamp}] {message}")

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if self.bot is not None and loop is not None:
            loop.create_task(self.log_to_discord(message, level=level))
        else:
            self._log_queue.append((message, level))

    async def flush_log_queue(self):
        """Sends any queued logs generated before the bot was ready."""

        if self._log_queue:
            queued = list(self._log_queue)
            self._log_queue.clear()
            self.log(f"Flushing {len(queued)} queued startup logs...", "DEBUG")
            for msg, level in queued:
                await self.log_to_discord(msg, level)

    @property
    def queued_messages(self) -> List[Tuple[str, str]]:
        return list(self._log_queue)
