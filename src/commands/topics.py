"""
Gestion des topics : `maketopic`, `deletetopic` (admin) et `showtopics` (tous).

Un topic est porté par un rôle Discord `<TOPIC_ROLE_PREFIX><nom>`.
Supprimer un topic ferme d'abord toutes ses rooms actives et vide sa file.
"""
from __future__ import annotations

import logging

from core.mentoring import AdapterError, InvalidTopicName, Registry, TopicAlreadyExists, TopicNotFound
from core.permissions import is_admin
from views import mentoring as views
from ._common import reply

logger = logging.getLogger(__name__)


async def maketopic_cmd(member, channel, registry: Registry, args: list[str]):
    if len(args) != 1:
        await reply(channel, views.msg_usage(member.mention, "maketopic <nom>"))
        return
    if not is_admin(member):
        await reply(channel, views.msg_no_admin(member.mention))
        return
    try:
        topic = await registry.create_topic(args[0])
    except TopicAlreadyExists:
        await reply(channel, views.msg_topic_exists(member.mention, args[0]))
        return
    except InvalidTopicName:
        await reply(channel, views.msg_topic_invalid(member.mention, args[0]))
        return
    await reply(channel, views.msg_topic_created(member.mention, topic.name))


async def deletetopic_cmd(member, channel, registry: Registry, args: list[str]):
    if len(args) != 1:
        await reply(channel, views.msg_usage(member.mention, "deletetopic <nom>"))
        return
    if not is_admin(member):
        await reply(channel, views.msg_no_admin(member.mention))
        return
    try:
        dropped = await registry.delete_topic(args[0])
    except TopicNotFound:
        await reply(channel, views.msg_no_such_topic(member.mention, args[0]))
        return
    except AdapterError:
        logger.exception("Suppression topic %s incomplète", args[0])
        await reply(channel, views.msg_delete_failed(member.mention, args[0]))
        return
    await reply(channel, views.msg_topic_deleted(member.mention, args[0], [e.participant.mention for e in dropped]))


async def showtopics_cmd(member, channel, registry: Registry, args: list[str]):
    if args:
        await reply(channel, views.msg_usage(member.mention, "showtopics"))
        return
    names = [t.name for t in registry.topics()]
    if not names:
        await reply(channel, views.msg_no_topics(member.mention))
        return
    await reply(channel, views.msg_topic_list(member.mention, names))


COMMANDS = {
    "maketopic": maketopic_cmd,
    "deletetopic": deletetopic_cmd,
    "showtopics": showtopics_cmd,
}


def register(bot):
    bot.command_table.update(COMMANDS)

__all__ = ["register", "COMMANDS"]
