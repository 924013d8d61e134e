"""
Implémentation discord.py du `PlatformAdapter` utilisé par le coeur mentoring.

Principes :
- Les handles manipulés sont directement les objets discord.py (Guild, Role,
  CategoryChannel, TextChannel, VoiceChannel, Member)
- Toute `discord.HTTPException` est convertie en `AdapterError`
- Supprimer un salon déjà supprimé (`discord.NotFound`) n'est pas une erreur
- Aucun retry ici : la gestion du rate limit reste celle de discord.py
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

import discord

from core.mentoring.errors import AdapterError
from core.mentoring.models import CHANNEL_TEXT, CHANNEL_VOICE

logger = logging.getLogger(__name__)

AUDIT_REASON = "Mentoring"


class DiscordAdapter:
    def __init__(self, client: discord.Client):
        self.client = client

    # ---------- catégories / staff ----------
    async def get_or_create_category(self, community: discord.Guild, name: str) -> discord.CategoryChannel:
        existing = discord.utils.get(community.categories, name=name)
        if existing is not None:
            return existing
        try:
            category = await community.create_category(name, reason=AUDIT_REASON)
        except discord.HTTPException as exc:
            raise AdapterError(f"Création catégorie {name} impossible") from exc
        logger.info("Catégorie %s créée (guild %s)", name, community.id)
        return category

    async def staff_handles(self, community: discord.Guild, admin_role_names: Iterable[str]) -> List[object]:
        names = set(admin_role_names)
        handles: List[object] = [community.me]
        handles.extend(r for r in community.roles if r.name in names)
        return handles

    # ---------- salons ----------
    async def create_text_channel(self, container: discord.CategoryChannel, name: str) -> discord.TextChannel:
        try:
            return await container.create_text_channel(name, reason=AUDIT_REASON)
        except discord.HTTPException as exc:
            raise AdapterError(f"Création salon texte {name} impossible") from exc

    async def create_voice_channel(self, container: discord.CategoryChannel, name: str) -> discord.VoiceChannel:
        try:
            return await container.create_voice_channel(name, reason=AUDIT_REASON)
        except discord.HTTPException as exc:
            raise AdapterError(f"Création salon vocal {name} impossible") from exc

    async def delete_channel(self, handle: discord.abc.GuildChannel) -> None:
        try:
            await handle.delete(reason=AUDIT_REASON)
        except discord.NotFound:
            logger.debug("Salon %s déjà supprimé", getattr(handle, "id", "?"))
        except discord.HTTPException as exc:
            raise AdapterError(f"Suppression salon {getattr(handle, 'name', '?')} impossible") from exc

    async def find_channel_by_name(
        self, container: discord.CategoryChannel, name: str, kind: str
    ) -> Optional[discord.abc.GuildChannel]:
        # Discord force les noms de salons texte en minuscules
        target = name.lower()
        if kind == CHANNEL_TEXT:
            channels = container.text_channels
        elif kind == CHANNEL_VOICE:
            channels = container.voice_channels
        else:
            raise ValueError(f"Type de salon inconnu: {kind}")
        for channel in channels:
            if channel.name.lower() == target:
                return channel
        return None

    async def set_visibility(
        self, handle: discord.abc.GuildChannel, allow_list: Iterable[object], deny_default: bool = True
    ) -> None:
        try:
            for holder in allow_list:
                await handle.set_permissions(holder, view_channel=True, reason=AUDIT_REASON)
            if deny_default:
                await handle.set_permissions(handle.guild.default_role, view_channel=False, reason=AUDIT_REASON)
        except discord.HTTPException as exc:
            raise AdapterError(f"Permissions impossibles sur {handle.name}") from exc

    async def create_temporary_invite(self, voice_handle: discord.VoiceChannel, max_age: int, max_uses: int) -> str:
        try:
            invite = await voice_handle.create_invite(max_age=max_age, max_uses=max_uses, reason=AUDIT_REASON)
        except discord.HTTPException as exc:
            raise AdapterError(f"Invite impossible pour {voice_handle.name}") from exc
        return invite.url

    # ---------- rôles ----------
    async def list_roles_by_name_prefix(self, community: discord.Guild, prefix: str) -> List[Tuple[str, discord.Role]]:
        return [(r.name, r) for r in community.roles if r.name.startswith(prefix)]

    async def create_role(self, community: discord.Guild, name: str) -> discord.Role:
        try:
            return await community.create_role(name=name, mentionable=True, reason=AUDIT_REASON)
        except discord.HTTPException as exc:
            raise AdapterError(f"Création rôle {name} impossible") from exc

    async def delete_role(self, handle: discord.Role) -> None:
        try:
            await handle.delete(reason=AUDIT_REASON)
        except discord.NotFound:
            logger.debug("Rôle %s déjà supprimé", handle.id)
        except discord.HTTPException as exc:
            raise AdapterError(f"Suppression rôle {handle.name} impossible") from exc

    # ---------- messages ----------
    async def send_message(self, channel: discord.abc.Messageable, text: str) -> None:
        try:
            await channel.send(text)
        except discord.HTTPException as exc:
            raise AdapterError("Envoi message impossible") from exc


__all__ = ["DiscordAdapter", "AUDIT_REASON"]
