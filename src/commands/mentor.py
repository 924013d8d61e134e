"""
Commandes réservées aux mentors du topic (ou admins) : `ready`, `kick`, `clear`, `finish`.

`ready` compose deux étapes distinctes du coeur : sortie de file (`Topic.pop`)
puis création de room (`Topic.create_room`). Si la room ne peut pas être créée,
le mentee est remis en tête de file.
"""
from __future__ import annotations

import logging

from core import config
from core.mentoring import (
    AdapterError,
    AlreadyQueued,
    NotQueued,
    QueueEmpty,
    Registry,
    RoomNotFound,
    RoomProvisioningFailed,
    TopicNotFound,
)
from core.permissions import is_privileged
from views import mentoring as views
from ._common import reply, resolve_member, topic_or_reply

logger = logging.getLogger(__name__)


async def ready_cmd(member, channel, registry: Registry, args: list[str]):
    if len(args) != 1:
        await reply(channel, views.msg_usage(member.mention, "ready <topic>"))
        return
    topic = await topic_or_reply(member, channel, registry, args[0])
    if topic is None:
        return
    if not is_privileged(member, topic):
        await reply(channel, views.msg_no_permission(member.mention))
        return
    try:
        entry = topic.pop()
    except QueueEmpty:
        await reply(channel, views.msg_queue_empty(member.mention, topic.name))
        return
    try:
        room = await topic.create_room(entry.participant)
    except TopicNotFound:
        # Topic supprimé pendant la commande : sa file a été vidée
        await reply(channel, views.msg_no_such_topic(member.mention, topic.name))
        return
    except RoomProvisioningFailed:
        try:
            topic.restore(entry)
        except AlreadyQueued:
            logger.warning("%s a rejoint %s pendant la création de room", entry.participant, topic.name)
        await reply(channel, views.msg_room_failed(member.mention, topic.name))
        return
    # La room peut être fermée pendant l'attente de l'invite (topic supprimé)
    text_mention = room.text_channel.mention
    try:
        invite_url = await room.create_invite(config.INVITE_MAX_AGE, config.INVITE_MAX_USES)
    except AdapterError:
        logger.exception("Invite vocale impossible pour %s", room.name)
        invite_url = None
    logger.info("%s prend %s sur %s -> %s", member, entry.participant, topic.name, room.name)
    await reply(
        channel,
        views.msg_mentor_ready(member.mention, entry.participant.mention, text_mention, invite_url),
    )


async def kick_cmd(member, channel, registry: Registry, args: list[str]):
    if len(args) < 3:
        await reply(channel, views.msg_usage(member.mention, "kick <@membre> <topic> <raison>"))
        return
    topic = await topic_or_reply(member, channel, registry, args[1])
    if topic is None:
        return
    if not is_privileged(member, topic):
        await reply(channel, views.msg_no_permission(member.mention))
        return
    target = resolve_member(channel, args[0])
    if target is None:
        await reply(channel, views.msg_member_not_found(member.mention))
        return
    reason = " ".join(args[2:])
    try:
        topic.leave(target)
    except NotQueued:
        await reply(channel, views.msg_not_queued(member.mention, target.mention, topic.name))
        return
    logger.info("%s retiré de %s par %s (%s)", target, topic.name, member, reason)
    await reply(channel, views.msg_kicked(member.mention, target.mention, topic.name, reason))


async def clear_cmd(member, channel, registry: Registry, args: list[str]):
    if len(args) != 1:
        await reply(channel, views.msg_usage(member.mention, "clear <topic>"))
        return
    topic = await topic_or_reply(member, channel, registry, args[0])
    if topic is None:
        return
    if not is_privileged(member, topic):
        await reply(channel, views.msg_no_permission(member.mention))
        return
    removed = topic.clear()
    logger.info("File %s vidée par %s (%s retiré(s))", topic.name, member, len(removed))
    await reply(channel, views.msg_queue_cleared(member.mention, topic.name, [e.participant.mention for e in removed]))


async def finish_cmd(member, channel, registry: Registry, args: list[str]):
    if args:
        await reply(channel, views.msg_usage(member.mention, "finish"))
        return
    found = registry.find_room(channel.name)
    if found is None:
        await reply(channel, views.msg_run_in_room(member.mention))
        return
    topic, room = found
    if not is_privileged(member, topic):
        await reply(channel, views.msg_no_permission(member.mention))
        return
    try:
        await topic.delete_room(room)
    except RoomNotFound:
        await reply(channel, views.msg_run_in_room(member.mention))
        return
    except AdapterError:
        logger.exception("Fermeture room %s impossible", room.name)
        await reply(channel, views.msg_finish_failed(member.mention))
        return
    # Le salon de la commande vient d'être supprimé : pas de réponse
    logger.info("Room %s terminée par %s", room.name, member)


COMMANDS = {
    "ready": ready_cmd,
    "kick": kick_cmd,
    "clear": clear_cmd,
    "finish": finish_cmd,
}


def register(bot):
    bot.command_table.update(COMMANDS)

__all__ = ["register", "COMMANDS"]
