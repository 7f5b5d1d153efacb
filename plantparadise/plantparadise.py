import asyncio
import io
import json
import time
import traceback
from typing import Dict, Optional, Set

import discord
from redbot.core import Config, commands, data_manager

from .decorators import is_cog_ready
from .helpers import (
    TimeHelper,
    LoggingHelper,
    DataHelper,
    CatalogHelper,
    ConfigStorage,
    GameStore,
    GrowthHelper,
    EconomyHelper,
    SchedulerHelper,
    GardenHelper,
)
from .models import GameSettings, GardenEvent, MilestoneReached, PackOpened


class PlantParadise(commands.Cog):
    """Plant Paradise - Open seed packs, grow plants and build a nectar empire."""

    CURRENCY_EMOJI = "🍯"
    SUNLIGHT_EMOJI = "☀️"

    def __init__(self, bot: commands.Bot):
        self._initialized = False

        self.bot = bot
        self.config = Config.get_conf(self, identifier=508217663542181889)
        self.config.register_global(saves={}, settings={}, log_channel_id=None)

        self.logger = LoggingHelper(bot)
        self.data_loader = DataHelper(data_manager.bundled_data_path(self), self.logger)
        self.data_loader.load_all_data()
        self.catalog = CatalogHelper.from_data_helper(self.data_loader, self.logger)

        self.settings = GameSettings()
        self.storage = ConfigStorage(self.config, self.logger)
        self.scheduler = SchedulerHelper(self.logger)

        self._gardens: Dict[int, GardenHelper] = {}
        self._notification_channels: Dict[int, int] = {}
        self._announce_tasks: Set[asyncio.Task] = set()

        self.tick_task = asyncio.create_task(self.startup_and_tick_loop())

    async def cog_unload(self):
        """Cog cleanup method."""

        if self.tick_task:
            self.tick_task.cancel()

        self.scheduler.cancel_all()
        for task in list(self._announce_tasks):
            task.cancel()
        await self.storage.commit_to_disk()
        self.logger.log("Plant Paradise systems are now offline. Gardens saved.", "INFO")

    # --- Garden management ---

    def _storage_key_for(self, user_id: int) -> str:
        return f"{self.settings.storage_key}:{user_id}"

    def _get_garden(self, user_id: int) -> GardenHelper:
        if user_id in self._gardens:
            return self._gardens[user_id]

        store = GameStore(self.storage, self.logger, self.catalog.generator_types, self.settings,
                          storage_key=self._storage_key_for(user_id))
        garden = GardenHelper(store, self.catalog, self.scheduler, self.logger, self.settings)
        garden.subscribe(lambda event: self._on_garden_event(user_id, event))
        self._gardens[user_id] = garden
        return garden

    def _saved_user_ids(self):
        prefix = f"{self.settings.storage_key}:"
        return [int(k[len(prefix):]) for k in self.storage.keys() if k.startswith(prefix) and k[len(prefix):].isdigit()]

    def _remember_channel(self, ctx: commands.Context):
        self._notification_channels[ctx.author.id] = ctx.channel.id

    async def _load_settings(self):
        stored = await self.config.settings()
        self.settings = GameSettings.from_dict(stored)
        self.logger.log_channel_id = await self.config.log_channel_id()

    async def startup_and_tick_loop(self):
        """The main background task: load gardens, then credit passive income every tick."""

        await self.bot.wait_until_ready()
        await self._load_settings()
        await self.logger.flush_log_queue()

        await self.storage.load_from_disk()
        for user_id in self._saved_user_ids():
            self._get_garden(user_id).resume_interrupted_reveal()

        self._initialized = True
        await self.logger.log_to_discord(f"Tick Loop: Startup complete. {len(self._gardens)} garden(s) loaded.",
                                         "INFO")

        last_save = time.monotonic()
        while not self.bot.is_closed():
            try:
                for garden in list(self._gardens.values()):
                    garden.tick()

                if time.monotonic() - last_save >= self.settings.autosave_interval:
                    await self.storage.commit_to_disk()
                    last_save = time.monotonic()
            except Exception as e:
                await self.logger.log_to_discord(
                    f"Tick Loop: CRITICAL Anomaly: {e}\n{traceback.format_exc()}", "CRITICAL")

            await asyncio.sleep(max(0.1, self.settings.tick_interval))

    # --- Presentation of deferred events ---

    def _on_garden_event(self, user_id: int, event: GardenEvent):
        if isinstance(event, (PackOpened, MilestoneReached)):
            task = asyncio.create_task(self._announce_event(user_id, event))
            self._announce_tasks.add(task)
            task.add_done_callback(self._announce_tasks.discard)

    async def _announce_event(self, user_id: int, event: GardenEvent):
        channel_id = self._notification_channels.get(user_id)
        channel = self.bot.get_channel(channel_id) if channel_id else None
        if channel is None:
            return

        garden = self._get_garden(user_id)

        if isinstance(event, PackOpened):
            plant = self.catalog.get_item(event.plant_id)
            desc = f"<@{user_id}>, your seed pack revealed a **{plant.name}** {plant.icon} " \
                   f"({plant.rarity.upper()})!\n"
            if event.slot_id is not None:
                desc += f"It has been planted in slot **{event.slot_id}**."
            else:
                desc += "Your garden is full, so it was added to your collection only."
            embed = discord.Embed(title="🌱 NEW PLANT!", description=desc, color=discord.Color.green())
        else:
            embed = discord.Embed(
                title="⭐ MILESTONE!",
                description=f"<@{user_id}> reached **{event.description}** ({event.threshold} plants).\n"
                            f"Sunlight earned: **+{event.sunlight_awarded}** {self.SUNLIGHT_EMOJI}",
                color=discord.Color.gold()
            )

        embed.set_footer(text=self._header_text(garden))
        try:
            await channel.send(embed=embed, allowed_mentions=discord.AllowedMentions(users=True))
        except (discord.Forbidden, discord.HTTPException) as e:
            await self.logger.log_to_discord(f"Announce: Could not post to channel {channel_id}: {e}", "WARNING")

    def _header_text(self, garden: GardenHelper) -> str:
        view = garden.get_state_view()
        header = f"{int(view.nectar):,} Nectar • {view.sunlight} Sunlight • " \
                 f"+{garden.get_total_nectar_per_second()}/sec"

        total, next_milestone = garden.get_milestone_progress()
        if next_milestone:
            header += f"\nNext Milestone: {next_milestone.description} - {total}/{next_milestone.plants_threshold} " \
                      f"plants (+{next_milestone.sunlight_reward} sunlight)"
        return header

    # --- Commands ---

    @commands.command(name="gardenhelp")
    @is_cog_ready()
    async def gardenhelp_command(self, ctx: commands.Context):
        """Display the Plant Paradise command manifest."""

        prefix = ctx.prefix
        embed = discord.Embed(title="🌻 Plant Paradise - Command Manifest",
                              description=f"Welcome to your garden, {ctx.author.mention}! Spend nectar on seed "
                                          f"packs, grow plants and harvest them for more nectar.",
                              color=discord.Color.teal())

        embed.add_field(name="🌱 Garden", inline=False, value=(
            f"▫️ `{prefix}garden` - View your slots, growth progress and balances.\n"
            f"▫️ `{prefix}harvest <slot...>` - Harvest ready plants from specified slots.\n"
            f"▫️ `{prefix}harvestall` - Harvest every ready plant.\n"
            f"▫️ `{prefix}collection` - View every plant you have collected.\n"
            f"▫️ `{prefix}resetgarden confirm` - Start over with a fresh garden."
        ))
        embed.add_field(name="🛒 Shops", inline=False, value=(
            f"▫️ `{prefix}packs` - Browse seed packs.\n"
            f"▫️ `{prefix}openpack <pack>` - Open a seed pack.\n"
            f"▫️ `{prefix}generators` - Browse passive nectar generators.\n"
            f"▫️ `{prefix}buygen <generator>` - Upgrade a generator by one level.\n"
            f"▫️ `{prefix}sunshop` - Browse plants sold for sunlight.\n"
            f"▫️ `{prefix}sunbuy <item>` - Buy a sunlight plant."
        ))
        embed.add_field(name="⭐ Progress", inline=False, value=(
            f"▫️ `{prefix}milestones` - View collection milestones and sunlight rewards."
        ))
        embed.set_footer(text=f"Passive nectar is credited every {self.settings.tick_interval:g}s.")
        await ctx.send(embed=embed)

    @commands.command(name="garden")
    @is_cog_ready()
    async def garden_command(self, ctx: commands.Context):
        """View your garden slots and balances."""

        self._remember_channel(ctx)
        garden = self._get_garden(ctx.author.id)
        view = garden.get_state_view()
        now = TimeHelper.get_current_timestamp_ms()

        lines = []
        for slot_id in range(1, self.settings.slot_count + 1):
            slot = view.active_slots.get(slot_id)
            if slot is None:
                lines.append(f"**{slot_id}:** 🟫 Empty")
                continue

            plant = self.catalog.get_item(slot.type)
            percent = GrowthHelper.progress_percent(slot, plant, now)
            if percent >= 100:
                lines.append(f"**{slot_id}:** {plant.icon} {plant.name} - ✅ Ready!")
            else:
                remaining = TimeHelper.format_time(GrowthHelper.remaining_ms(slot, plant, now))
                lines.append(f"**{slot_id}:** {plant.icon} {plant.name} {GrowthHelper.progress_bar(percent)} "
                             f"{remaining}")

        half = self.settings.slot_count // 2
        embed = discord.Embed(color=discord.Color.green())
        embed.set_author(name=f"{ctx.author.display_name}: Plant Paradise", icon_url=ctx.author.display_avatar.url)
        embed.add_field(name="🌳 Slots", value="\n".join(lines[:half]), inline=True)
        embed.add_field(name="🌳 Slots", value="\n".join(lines[half:]), inline=True)

        if view.opening_pack:
            pack = self.catalog.get_seed_pack(view.opening_pack)
            embed.add_field(name="📦 Opening", value=f"{pack.name if pack else view.opening_pack}...", inline=False)

        embed.set_footer(text=self._header_text(garden))
        await ctx.send(embed=embed)

    @commands.command(name="packs")
    @is_cog_ready()
    async def packs_command(self, ctx: commands.Context):
        """Browse the seed packs for sale."""

        garden = self._get_garden(ctx.author.id)
        parts = []
        for pack in self.catalog.seed_packs.values():
            odds = ", ".join(f"{rarity} {rate:g}%" for rarity, rate in pack.rarity_rates if rate > 0)
            parts.append(f"{pack.icon} **{pack.name}** (`{pack.id}`)\nCost: **{pack.cost:,}** "
                         f"{self.CURRENCY_EMOJI}\n-# {odds}")

        embed = discord.Embed(title="📦 Seed Packs", description="\n\n".join(parts) or "No packs for sale.",
                              color=discord.Color.teal())
        embed.set_footer(text=f"To open a pack: {ctx.prefix}openpack <pack>\n{self._header_text(garden)}")
        await ctx.send(embed=embed)

    @commands.command(name="openpack")
    @is_cog_ready()
    async def openpack_command(self, ctx: commands.Context, pack_id: str):
        """Open a seed pack. The plant is revealed after a short moment."""

        self._remember_channel(ctx)
        garden = self._get_garden(ctx.author.id)
        pack = self.catalog.get_seed_pack(pack_id.lower())

        if pack is None:
            embed = discord.Embed(title="❌ Unknown Seed Pack",
                                  description=f"'{pack_id}' is not a seed pack. Use `{ctx.prefix}packs` to see "
                                              f"what's for sale.",
                                  color=discord.Color.red())
            await ctx.send(embed=embed)
            return

        view = garden.get_state_view()
        if not garden.open_seed_pack(pack.id):
            if view.opening_pack:
                desc = "You are already opening a seed pack. Wait for it to be revealed first."
            else:
                desc = f"The **{pack.name}** costs **{pack.cost:,}** {self.CURRENCY_EMOJI}. You only have " \
                       f"**{int(view.nectar):,}** {self.CURRENCY_EMOJI}."
            embed = discord.Embed(title="❌ Pack Not Opened", description=desc, color=discord.Color.red())
            await ctx.send(embed=embed)
            return

        embed = discord.Embed(title=f"{pack.icon} Opening {pack.name}...",
                              description=f"Nectar spent: **{pack.cost:,}** {self.CURRENCY_EMOJI}. The seeds are "
                                          f"tumbling!",
                              color=discord.Color.blue())
        embed.set_footer(text=self._header_text(garden))
        await ctx.send(embed=embed)

    @commands.command(name="harvest")
    @is_cog_ready()
    async def harvest_command(self, ctx: commands.Context, *slots_to_harvest: int):
        """Harvest ready plants from the specified slots."""

        self._remember_channel(ctx)
        if not slots_to_harvest:
            embed = discord.Embed(title="⚠️ Insufficient Parameters",
                                  description=f"Syntax: `{ctx.prefix}harvest <slot_1> [slot_2] ...`\n"
                                              f"Example: `{ctx.prefix}harvest 1 2 3`",
                                  color=discord.Color.orange())
            await ctx.send(embed=embed)
            return

        garden = self._get_garden(ctx.author.id)
        harvested_lines = []
        error_messages = []
        total_reward = 0

        for slot_id in sorted(set(slots_to_harvest)):
            status = garden.get_slot_status(slot_id)
            if status is None:
                error_messages.append(f"Slot {slot_id}: Empty or invalid.")
                continue

            slot, _, remaining = status
            plant = self.catalog.get_item(slot.type)
            if garden.harvest_plant(slot_id):
                total_reward += plant.harvest_reward
                harvested_lines.append(f"{plant.icon} **{plant.name}** from slot {slot_id} (+{plant.harvest_reward:,} "
                                       f"{self.CURRENCY_EMOJI})")
            else:
                error_messages.append(f"Slot {slot_id}: {plant.name} needs {TimeHelper.format_time(remaining)} more.")

        if not harvested_lines:
            desc = "Nothing was harvested.\n\n" + "\n".join(f"• {msg}" for msg in error_messages)
            embed = discord.Embed(title="❌ Harvest Inconclusive", description=desc, color=discord.Color.red())
            await ctx.send(embed=embed)
            return

        desc = "\n".join(f"• {line}" for line in harvested_lines)
        desc += f"\n\n**Total Nectar Harvested:** {total_reward:,} {self.CURRENCY_EMOJI}"
        if error_messages:
            desc += "\n\n**Advisory:**\n" + "\n".join(f"• {msg}" for msg in error_messages)

        embed = discord.Embed(title="🍯 HARVESTED!", description=desc, color=discord.Color.gold())
        embed.set_footer(text=self._header_text(garden))
        await ctx.send(embed=embed)

    @commands.command(name="harvestall")
    @is_cog_ready()
    async def harvestall_command(self, ctx: commands.Context):
        """Harvest every ready plant in your garden."""

        self._remember_channel(ctx)
        garden = self._get_garden(ctx.author.id)
        nectar_before = garden.get_state_view().nectar
        harvested = garden.harvest_all()

        if harvested == 0:
            embed = discord.Embed(title="🌱 Nothing Ready", description="None of your plants are ready to harvest.",
                                  color=discord.Color.orange())
        else:
            gained = int(garden.get_state_view().nectar - nectar_before)
            embed = discord.Embed(title="🍯 HARVESTED!",
                                  description=f"Harvested **{harvested}** plant(s) for **+{gained:,}** "
                                              f"{self.CURRENCY_EMOJI}.",
                                  color=discord.Color.gold())
        embed.set_footer(text=self._header_text(garden))
        await ctx.send(embed=embed)

    @commands.command(name="generators")
    @is_cog_ready()
    async def generators_command(self, ctx: commands.Context):
        """Browse passive nectar generators."""

        garden = self._get_garden(ctx.author.id)
        view = garden.get_state_view()
        parts = []
        for gen_id, gen_state in view.generators.items():
            gen_type = self.catalog.get_generator_type(gen_id)
            name = gen_type.name if gen_type else gen_id
            icon = gen_type.icon if gen_type else "⚙️"
            description = gen_type.description if gen_type else "No description available."
            cost = EconomyHelper.generator_cost(gen_state, self.settings.generator_cost_growth)
            parts.append(f"{icon} **{name}** (`{gen_id}`) - Level {gen_state.level}\n"
                         f"Next level: **{cost:,}** {self.CURRENCY_EMOJI} • +{gen_state.base_nectar}/sec per level\n"
                         f"-# {description}")

        embed = discord.Embed(title="⚙️ Generators", description="\n\n".join(parts) or "No generators available.",
                              color=discord.Color.teal())
        embed.set_footer(text=f"To upgrade: {ctx.prefix}buygen <generator>\n{self._header_text(garden)}")
        await ctx.send(embed=embed)

    @commands.command(name="buygen")
    @is_cog_ready()
    async def buygen_command(self, ctx: commands.Context, generator_id: str):
        """Upgrade a generator by one level."""

        self._remember_channel(ctx)
        garden = self._get_garden(ctx.author.id)
        generator_id = generator_id.lower()
        cost = garden.get_generator_cost(generator_id)

        if cost is None:
            embed = discord.Embed(title="❌ Unknown Generator",
                                  description=f"'{generator_id}' is not a generator. Use `{ctx.prefix}generators` "
                                              f"to see them all.",
                                  color=discord.Color.red())
            await ctx.send(embed=embed)
            return

        if not garden.buy_generator(generator_id):
            embed = discord.Embed(title="❌ Insufficient Nectar",
                                  description=f"The next level costs **{cost:,}** {self.CURRENCY_EMOJI}. You only "
                                              f"have **{int(garden.get_state_view().nectar):,}** "
                                              f"{self.CURRENCY_EMOJI}.",
                                  color=discord.Color.red())
            await ctx.send(embed=embed)
            return

        gen_state = garden.get_state_view().generators[generator_id]
        gen_type = self.catalog.get_generator_type(generator_id)
        embed = discord.Embed(title="⚙️ Generator Upgraded",
                              description=f"**{gen_type.name if gen_type else generator_id}** is now level "
                                          f"**{gen_state.level}**.\nNectar spent: **{cost:,}** {self.CURRENCY_EMOJI}.",
                              color=discord.Color.green())
        embed.set_footer(text=self._header_text(garden))
        await ctx.send(embed=embed)

    @commands.command(name="sunshop")
    @is_cog_ready()
    async def sunshop_command(self, ctx: commands.Context):
        """Browse plants sold for sunlight."""

        garden = self._get_garden(ctx.author.id)
        parts = [
            f"{item.icon} **{item.name}** (`{item.id}`) - {item.rarity.upper()}\n"
            f"Cost: **{item.sunlight_cost}** {self.SUNLIGHT_EMOJI} • Harvest: {item.harvest_reward:,} "
            f"{self.CURRENCY_EMOJI} • Grows in {TimeHelper.format_time(item.growth_time)}"
            for item in self.catalog.sunlight_shop.values()
        ]
        embed = discord.Embed(title="☀️ Sunlight Shop", description="\n\n".join(parts) or "The shop is empty.",
                              color=discord.Color.gold())
        embed.set_footer(text=f"To buy: {ctx.prefix}sunbuy <item>\n{self._header_text(garden)}")
        await ctx.send(embed=embed)

    @commands.command(name="sunbuy")
    @is_cog_ready()
    async def sunbuy_command(self, ctx: commands.Context, item_id: str):
        """Buy a sunlight plant. It is planted straight into an empty slot."""

        self._remember_channel(ctx)
        garden = self._get_garden(ctx.author.id)
        item = self.catalog.get_sunlight_item(item_id.lower())

        if item is None:
            embed = discord.Embed(title="❌ Unknown Item",
                                  description=f"'{item_id}' is not sold here. Use `{ctx.prefix}sunshop` to browse.",
                                  color=discord.Color.red())
            await ctx.send(embed=embed)
            return

        view = garden.get_state_view()
        if not garden.buy_sunlight_plant(item.id):
            if view.sunlight < item.sunlight_cost:
                desc = f"The **{item.name}** costs **{item.sunlight_cost}** {self.SUNLIGHT_EMOJI}. You only have " \
                       f"**{view.sunlight}** {self.SUNLIGHT_EMOJI}."
            else:
                desc = "Your garden has no empty slots. Harvest something first."
            embed = discord.Embed(title="❌ Purchase Failed", description=desc, color=discord.Color.red())
            await ctx.send(embed=embed)
            return

        embed = discord.Embed(title="🌱 NEW PLANT!",
                              description=f"{item.icon} **{item.name}** ({item.rarity.upper()}) has been planted.\n"
                                          f"Sunlight spent: **{item.sunlight_cost}** {self.SUNLIGHT_EMOJI}.",
                              color=discord.Color.green())
        embed.set_footer(text=self._header_text(garden))
        await ctx.send(embed=embed)

    @commands.command(name="collection")
    @is_cog_ready()
    async def collection_command(self, ctx: commands.Context):
        """View every plant you have ever collected."""

        garden = self._get_garden(ctx.author.id)
        view = garden.get_state_view()

        if not view.plant_collection:
            desc = f"Your collection is empty. Open a seed pack with `{ctx.prefix}openpack basic`!"
        else:
            items = sorted((self.catalog.get_item(key) for key in view.plant_collection),
                           key=lambda p: (self.catalog.get_rarity_sort_key(p.rarity), p.name))
            desc = "\n".join(f"{p.icon} **{p.name}** ({p.rarity}) x{view.plant_collection[p.id]}" for p in items)

        embed = discord.Embed(title="📖 Plant Collection", description=desc, color=discord.Color.blue())
        embed.set_footer(text=self._header_text(garden))
        await ctx.send(embed=embed)

    @commands.command(name="milestones")
    @is_cog_ready()
    async def milestones_command(self, ctx: commands.Context):
        """View collection milestones and their sunlight rewards."""

        garden = self._get_garden(ctx.author.id)
        last_reached = garden.get_state_view().last_milestone_reached
        lines = [
            f"{'✅' if m.plants_threshold <= last_reached else '▫️'} **{m.description}** - {m.plants_threshold} "
            f"plants (+{m.sunlight_reward} {self.SUNLIGHT_EMOJI})"
            for m in self.catalog.milestones
        ]
        embed = discord.Embed(title="⭐ Milestones", description="\n".join(lines) or "No milestones defined.",
                              color=discord.Color.gold())
        embed.set_footer(text=self._header_text(garden))
        await ctx.send(embed=embed)

    @commands.command(name="resetgarden")
    @is_cog_ready()
    async def resetgarden_command(self, ctx: commands.Context, confirmation: Optional[str] = None):
        """Erase your garden and start over."""

        if confirmation != "confirm":
            embed = discord.Embed(title="⚠️ Confirm Garden Reset",
                                  description=f"This permanently deletes your nectar, sunlight, plants, collection "
                                              f"and generators.\nRun `{ctx.prefix}resetgarden confirm` to proceed.",
                                  color=discord.Color.orange())
            await ctx.send(embed=embed)
            return

        garden = self._get_garden(ctx.author.id)
        garden.reset()
        embed = discord.Embed(title="🌱 Fresh Garden", description="Your garden has been reset.",
                              color=discord.Color.green())
        embed.set_footer(text=self._header_text(garden))
        await ctx.send(embed=embed)

    # --- Administration ---

    @commands.group(name="gardenadmin")
    @is_cog_ready()
    @commands.is_owner()
    async def cmd_admin_group(self, ctx: commands.Context):
        """Base command for owner-only Plant Paradise utilities."""
        pass

    @cmd_admin_group.command(name="setnectar")
    async def admin_setnectar_command(self, ctx: commands.Context, amount: int, target_user: discord.Member):
        """Sets a user's nectar to a specific amount."""

        if amount < 0:
            await ctx.send(embed=discord.Embed(title="❌ Invalid Input", description="Amount cannot be negative.",
                                               color=discord.Color.red()))
            return

        garden = self._get_garden(target_user.id)
        original = garden.get_state_view().nectar
        garden.store.update(nectar=amount)

        embed = discord.Embed(title="⚙️ Admin: Nectar Set",
                              description=f"Nectar for {target_user.mention}: {int(original):,} → **{amount:,}** "
                                          f"{self.CURRENCY_EMOJI}",
                              color=discord.Color.orange())
        await ctx.send(embed=embed)

    @cmd_admin_group.command(name="setsunlight")
    async def admin_setsunlight_command(self, ctx: commands.Context, amount: int, target_user: discord.Member):
        """Sets a user's sunlight to a specific amount."""

        if amount < 0:
            await ctx.send(embed=discord.Embed(title="❌ Invalid Input", description="Amount cannot be negative.",
                                               color=discord.Color.red()))
            return

        garden = self._get_garden(target_user.id)
        original = garden.get_state_view().sunlight
        garden.store.update(sunlight=amount)

        embed = discord.Embed(title="⚙️ Admin: Sunlight Set",
                              description=f"Sunlight for {target_user.mention}: {original} → **{amount}** "
                                          f"{self.SUNLIGHT_EMOJI}",
                              color=discord.Color.orange())
        await ctx.send(embed=embed)

    @cmd_admin_group.command(name="tickrate")
    async def admin_tickrate_command(self, ctx: commands.Context, seconds: Optional[float] = None):
        """Sets or displays the passive income interval in seconds."""

        if seconds is None:
            await ctx.send(embed=discord.Embed(
                title="⚙️ Admin: Tick Rate",
                description=f"Passive nectar is credited every **{self.settings.tick_interval:g}s**.",
                color=discord.Color.blue()))
            return

        if seconds <= 0:
            await ctx.send(embed=discord.Embed(title="❌ Invalid Input", description="Interval must be positive.",
                                               color=discord.Color.red()))
            return

        new_settings = GameSettings.from_dict({**self.settings.to_dict(), "tick_interval": seconds})
        await self.config.settings.set(new_settings.to_dict())
        self.settings = new_settings
        for garden in self._gardens.values():
            garden.settings = new_settings
            garden.store.settings = new_settings

        await ctx.send(embed=discord.Embed(title="✅ Admin: Tick Rate Updated",
                                           description=f"Passive nectar is now credited every **{seconds:g}s**.",
                                           color=discord.Color.green()))

    @cmd_admin_group.command(name="logchannel")
    async def admin_logchannel_command(self, ctx: commands.Context, channel: discord.TextChannel):
        """Sets the channel that receives Plant Paradise logs."""

        await self.config.log_channel_id.set(channel.id)
        self.logger.log_channel_id = channel.id
        await ctx.send(embed=discord.Embed(title="✅ Admin: Log Channel Set",
                                           description=f"Logs will be sent to {channel.mention}.",
                                           color=discord.Color.green()))

    @cmd_admin_group.command(name="dumpdata")
    async def admin_dumpdata_command(self, ctx: commands.Context):
        """Dumps every saved garden into a JSON file."""

        gardens = {}
        for key in self.storage.keys():
            try:
                gardens[key] = json.loads(self.storage.read(key))
            except (TypeError, ValueError):
                gardens[key] = self.storage.read(key)

        buffer = io.BytesIO(json.dumps(gardens, indent=4, ensure_ascii=False).encode('utf-8'))
        file = discord.File(buffer, filename=f"plant_paradise_data_{int(time.time())}.json")
        embed = discord.Embed(title="⚙️ Admin: Game State Dump",
                              description=f"Serialized {len(gardens)} garden(s).", color=discord.Color.green())
        await ctx.send(embed=embed, file=file)
