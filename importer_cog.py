import asyncio
import logging
from typing import List

import discord
from discord import app_commands
from discord.ext import commands

from catalog import LocationCatalog
from coord_importer import import_text
from maplink import MapLinkRenderer

logger = logging.getLogger(__name__)

MESSAGE_LIMIT = 2000


def chunk_lines(lines: List[str], limit: int = MESSAGE_LIMIT) -> List[str]:
    """Pack lines into as few messages as fit under Discord's length limit."""
    chunks = []
    current = ""
    for line in lines:
        line = line[:limit]
        if current and len(current) + 1 + len(line) > limit:
            chunks.append(current)
            current = ""
        current = f"{current}\n{line}" if current else line
    if current:
        chunks.append(current)
    return chunks


class PasteModal(discord.ui.Modal, title="Coordinate Importer"):
    payload = discord.ui.TextInput(
        label="Paste coordinates",
        style=discord.TextStyle.paragraph,
        placeholder="Labyrinthos ( 16.5 , 16.8 ) Storsie",
        max_length=4000,
    )

    def __init__(self, importer: "Importer"):
        super().__init__()
        self.importer = importer

    async def on_submit(self, interaction: discord.Interaction):
        await self.importer.echo(interaction, self.payload.value)


class Importer(commands.Cog):
    def __init__(self, bot, catalog: LocationCatalog, renderer: MapLinkRenderer):
        self.bot = bot
        self.catalog = catalog
        self.renderer = renderer

    @app_commands.command(
        name="ci",
        description="Paste hunt coordinates in the dialog box. Map links show up as a reply only you can see."
    )
    async def ci(self, interaction: discord.Interaction):
        await interaction.response.send_modal(PasteModal(self))

    async def echo(self, interaction: discord.Interaction, text: str):
        await interaction.response.defer(ephemeral=True, thinking=True)

        lines = await asyncio.to_thread(import_text, text, self.catalog, self.renderer)
        logger.info("Imported %d line(s) for %s", len(lines), interaction.user)

        if not lines:
            return await interaction.followup.send(
                "No coordinates were found in the pasted text.",
                ephemeral=True
            )

        for chunk in chunk_lines(lines):
            await interaction.followup.send(chunk, ephemeral=True)
