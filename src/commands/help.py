"""
Commande `help` et réponse aux commandes inconnues.
"""
from __future__ import annotations

from core.mentoring import Registry
from core.permissions import is_admin, is_mentor
from views import mentoring as views
from views.help import build_help_embed
from ._common import reply


async def help_cmd(member, channel, registry: Registry, args: list[str]):
    embed = build_help_embed(mentor=is_mentor(member), admin=is_admin(member))
    await channel.send(embed=embed)


async def unknown_cmd(member, channel, registry: Registry, args: list[str]):
    await reply(channel, views.msg_unknown_command(member.mention))


COMMANDS = {
    "help": help_cmd,
}


def register(bot):
    bot.command_table.update(COMMANDS)

__all__ = ["register", "COMMANDS", "unknown_cmd"]
