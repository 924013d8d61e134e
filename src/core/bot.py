"""
Classe principale du bot de mentoring.

Responsabilités :
- Crée le client Discord et l'adapter plateforme utilisé par le coeur mentoring.
- Porte le cache process des Registry (un par guild, construit à la première commande).
- Charge dynamiquement les commandes préfixées dans la table `command_table`.
- Enregistre les événements globaux (réception des messages).

Note : L'initialisation asynchrone est centralisée dans `setup_hook`, appelé avant `on_ready`.
"""
from __future__ import annotations

import logging
from typing import Awaitable, Callable, Dict, Optional

import discord

from core import config
from core.discord_adapter import DiscordAdapter
from core.mentoring import Registry, RegistryCache
from core.mentoring.adapter import PlatformAdapter

logger = logging.getLogger(__name__)

CommandHandler = Callable[..., Awaitable[None]]


class Bot(discord.Client):
    """
    Client Discord étendu, encapsulant l'état applicatif.

    Attributs principaux :
        adapter : PlatformAdapter utilisé par le coeur (DiscordAdapter par défaut)
        registries : RegistryCache (guild id -> Registry), vit autant que le process
        command_table : nom de commande -> handler(member, channel, registry, args)
    """

    def __init__(self, *, adapter: Optional[PlatformAdapter] = None, registries: Optional[RegistryCache] = None):
        super().__init__(intents=config.INTENTS)
        self.adapter: PlatformAdapter = adapter or DiscordAdapter(self)
        self.registries = registries or RegistryCache()
        self.command_table: Dict[str, CommandHandler] = {}

    async def get_registry(self, guild: discord.Guild) -> Registry:
        async def loader() -> Registry:
            return await Registry.load(
                self.adapter,
                guild,
                role_prefix=config.TOPIC_ROLE_PREFIX,
                category_name=config.MENTORING_CATEGORY,
                admin_role_names=config.ADMIN_ROLES,
            )

        return await self.registries.resolve(guild.id, loader)

    async def setup_hook(self):
        """
        Initialise les sous-systèmes avant la mise en ligne.

        Séquence :
        1. Chargement des commandes préfixées
        2. Enregistrement des événements globaux
        """
        try:
            from commands import load_all_commands  # type: ignore
            await load_all_commands(self)
            logger.info("Commandes chargées: %s", ", ".join(sorted(self.command_table)))
        except Exception:  # noqa: BLE001
            logger.exception("Erreur chargement commandes dynamiques")
        try:
            from events.messages import setup as setup_messages  # type: ignore
            setup_messages(self)
        except Exception:  # noqa: BLE001
            logger.exception("Erreur setup events")

    async def on_ready(self):
        logger.info("Connecté: %s (%s)", self.user, getattr(self.user, 'id', '?'))
        try:
            await self.change_presence(activity=discord.Game(name=f"{config.COMMAND_PREFIX}help"))
        except Exception:  # noqa: BLE001
            logger.exception("Erreur mise à jour présence")
