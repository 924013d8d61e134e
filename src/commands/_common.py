"""
Helpers partagés par les handlers de commandes (non chargé comme module de commandes).
"""
from __future__ import annotations

import re
from typing import Optional

from core.mentoring import Registry, Topic
from views import mentoring as views

_MENTION_RE = re.compile(r"^<@!?(\d+)>$")


async def reply(channel, text: str):
    await channel.send(text)


async def topic_or_reply(member, channel, registry: Registry, name: str) -> Optional[Topic]:
    """Retourne le topic, ou répond "topic inconnu" et retourne None."""
    topic = registry.get_topic(name)
    if topic is None:
        await reply(channel, views.msg_no_such_topic(member.mention, name))
    return topic


def resolve_member(channel, token: str):
    """Résout une mention `<@id>` en membre de la guild du salon."""
    match = _MENTION_RE.match(token or "")
    guild = getattr(channel, "guild", None)
    if not match or guild is None:
        return None
    return guild.get_member(int(match.group(1)))
