async def setup(bot):
    from .plantparadise import PlantParadise

    await bot.add_cog(PlantParadise(bot))
