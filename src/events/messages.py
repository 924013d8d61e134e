"""
Dispatcher des commandes préfixées (ex: `$queue python besoin d'aide`).

Chaque message de guild commençant par COMMAND_PREFIX est découpé sur les espaces ;
le premier mot choisit le handler dans `bot.command_table`, le reste forme `args`.
Le Registry de la guild est résolu (construit à la première commande) avant l'appel.

En cas d'erreur inattendue, le workflow Discord n'est pas bloqué (log + ignore).
"""
from __future__ import annotations

import logging
import discord

from core import config
from commands.help import unknown_cmd

logger = logging.getLogger(__name__)


def parse_command(content: str, prefix: str) -> tuple[str, list[str]] | None:
    tokens = (content or "").split()
    if not tokens or not tokens[0].startswith(prefix) or len(tokens[0]) == len(prefix):
        return None
    return tokens[0][len(prefix):].lower(), tokens[1:]


async def handle_message(bot, message: discord.Message):
    if message.guild is None or message.author.bot:
        return
    parsed = parse_command(message.content, config.COMMAND_PREFIX)
    if parsed is None:
        return
    name, args = parsed
    handler = bot.command_table.get(name, unknown_cmd)
    try:
        registry = await bot.get_registry(message.guild)
        await handler(message.author, message.channel, registry, args)
    except Exception:  # noqa: BLE001
        logger.exception("Echec commande %s (guild %s)", name, message.guild.id)


def setup(bot: discord.Client):
    @bot.event
    async def on_message(message: discord.Message):
        await handle_message(bot, message)
