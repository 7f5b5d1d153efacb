import discord
from redbot.core import commands


def is_cog_ready():
    """
    A commands.check decorator that fails if the cog's saved gardens have not yet been loaded.
    This prevents commands from running against default state during the startup sequence.
    """

    async def predicate(ctx: commands.Context):
        # The _initialized flag is on the cog instance
        if not getattr(ctx.cog, '_initialized', False):
            embed = discord.Embed(
                title="⏳ Garden Waking Up",
                description="Plant Paradise is still loading saved gardens. Please try your command again in a "
                            "moment.",
                color=discord.Color.orange()
            )
            await ctx.send(embed=embed, delete_after=10)
            return False
        return True

    return commands.check(predicate)
