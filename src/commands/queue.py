"""
Commandes de file d'attente accessibles à tous : `queue`, `leave`, `showqueue`.
"""
from __future__ import annotations

import logging

from core.mentoring import AlreadyQueued, NotQueued, Registry, TopicNotFound
from views import mentoring as views
from ._common import reply, topic_or_reply

logger = logging.getLogger(__name__)


async def queue_cmd(member, channel, registry: Registry, args: list[str]):
    if len(args) < 2:
        await reply(channel, views.msg_usage(member.mention, "queue <topic> <message>"))
        return
    topic = await topic_or_reply(member, channel, registry, args[0])
    if topic is None:
        return
    message = " ".join(args[1:])
    try:
        topic.join(member, message)
    except AlreadyQueued:
        await reply(channel, views.msg_already_queued(member.mention, topic.name))
        return
    except TopicNotFound:
        await reply(channel, views.msg_no_such_topic(member.mention, topic.name))
        return
    logger.info("%s rejoint la file %s (%s en attente)", member, topic.name, len(topic))
    await reply(channel, views.msg_joined(member.mention, topic.name))


async def leave_cmd(member, channel, registry: Registry, args: list[str]):
    if len(args) != 1:
        await reply(channel, views.msg_usage(member.mention, "leave <topic>"))
        return
    topic = await topic_or_reply(member, channel, registry, args[0])
    if topic is None:
        return
    try:
        topic.leave(member)
    except NotQueued:
        await reply(channel, views.msg_self_not_queued(member.mention, topic.name))
        return
    await reply(channel, views.msg_left(member.mention, topic.name))


async def showqueue_cmd(member, channel, registry: Registry, args: list[str]):
    if len(args) != 1:
        await reply(channel, views.msg_usage(member.mention, "showqueue <topic>"))
        return
    topic = await topic_or_reply(member, channel, registry, args[0])
    if topic is None:
        return
    entries = topic.list()
    if not entries:
        await reply(channel, views.msg_queue_empty(member.mention, topic.name))
        return
    lines = [
        views.fmt_queue_line(i, getattr(e.participant, "display_name", str(e.participant)), e.message)
        for i, e in enumerate(entries, start=1)
    ]
    await reply(channel, views.msg_queue_list(member.mention, topic.name, lines))


COMMANDS = {
    "queue": queue_cmd,
    "leave": leave_cmd,
    "showqueue": showqueue_cmd,
}


def register(bot):
    bot.command_table.update(COMMANDS)

__all__ = ["register", "COMMANDS"]
