import logging

import discord
from discord.ext import commands

from catalog import build_catalog
from catalog_source import load_catalog_tables
from config import load_settings
from importer_cog import Importer
from maplink import MapLinkRenderer

settings = load_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("bot")

intents = discord.Intents.default()

bot = commands.Bot(command_prefix="!", intents=intents)


@bot.event
async def on_ready():
    logger.info("Logged in as %s (%s)", bot.user, bot.user.id)
    try:
        synced = await bot.tree.sync()
        logger.info("Synced %d commands.", len(synced))
    except discord.HTTPException as e:
        logger.error("Command sync error: %s", e)


@bot.event
async def setup_hook():
    tables = await load_catalog_tables(settings)
    catalog = build_catalog(tables)
    renderer = MapLinkRenderer(catalog, settings.display_language, settings.map_link_url)
    await bot.add_cog(Importer(bot, catalog, renderer))


if __name__ == "__main__":
    bot.run(settings.discord_token, log_handler=None)
