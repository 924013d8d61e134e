from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, Optional

from .errors import AdapterError, RoomProvisioningFailed
from .models import CHANNEL_TEXT, CHANNEL_VOICE, RoomState

if TYPE_CHECKING:
    from .adapter import PlatformAdapter
    from .topic import Topic

logger = logging.getLogger(__name__)


def room_name(topic_name: str, number: int) -> str:
    return f"{topic_name}-{number}"


class Room:
    """Salon de mentoring (texte + vocal) ouvert pour un mentee.

    Cycle de vie:
        PROVISIONING -> ACTIVE    via `Room.open` (salons créés et restreints)
        ACTIVE       -> DELETED   via `release` (salons supprimés)

    Une room n'est jamais visible dans `Topic.rooms` tant qu'elle n'est pas ACTIVE.
    Le nom est dérivé du topic et du numéro, il n'est jamais modifié.
    """

    def __init__(self, topic: Topic, number: int, participant: Any):
        self.topic = topic
        self.number = number
        self.participant = participant
        self.text_channel: Optional[Any] = None
        self.voice_channel: Optional[Any] = None
        self.state = RoomState.PROVISIONING

    @property
    def name(self) -> str:
        return room_name(self.topic.name, self.number)

    @property
    def adapter(self) -> PlatformAdapter:
        return self.topic.adapter

    def __repr__(self) -> str:
        return f"<Room {self.name} state={self.state.value}>"

    @classmethod
    async def open(cls, topic: Topic, number: int, participant: Any, allow_list: Iterable[Any]) -> Room:
        """Crée les salons de la room et applique les permissions.

        Les salons résiduels portant le même nom (ex: crash avant redémarrage)
        sont supprimés d'abord. En cas d'échec, tout ce qui a été créé est
        supprimé puis `RoomProvisioningFailed` est levée.
        """
        room = cls(topic, number, participant)
        allowed = list(allow_list)
        try:
            await room._delete_leftovers()
            room.text_channel = await room.adapter.create_text_channel(topic.category, room.name)
            await room.adapter.set_visibility(room.text_channel, allowed)
            room.voice_channel = await room.adapter.create_voice_channel(topic.category, room.name)
            await room.adapter.set_visibility(room.voice_channel, allowed)
        except AdapterError as exc:
            logger.exception("Echec provisioning room %s", room.name)
            await room._rollback()
            raise RoomProvisioningFailed(room.name, exc) from exc
        room.state = RoomState.ACTIVE
        logger.info("Room %s ouverte", room.name)
        return room

    async def _delete_leftovers(self):
        for kind in (CHANNEL_TEXT, CHANNEL_VOICE):
            leftover = await self.adapter.find_channel_by_name(self.topic.category, self.name, kind)
            if leftover is not None:
                await self.adapter.delete_channel(leftover)
                logger.info("Salon résiduel %s (%s) supprimé", self.name, kind)

    async def _rollback(self):
        for attr in ("voice_channel", "text_channel"):
            handle = getattr(self, attr)
            if handle is None:
                continue
            try:
                await self.adapter.delete_channel(handle)
            except AdapterError:
                logger.exception("Rollback: impossible de supprimer %s de %s", attr, self.name)
            setattr(self, attr, None)
        self.state = RoomState.DELETED

    async def release(self):
        """Supprime les salons de la room.

        Les deux suppressions sont toujours tentées. Si l'une échoue, la première
        erreur remonte et la room reste ACTIVE avec seulement le salon restant :
        l'appelant peut réessayer. Un salon déjà supprimé à la main n'est pas une erreur.
        """
        error: Optional[AdapterError] = None
        for attr in ("voice_channel", "text_channel"):
            handle = getattr(self, attr)
            if handle is None:
                continue
            try:
                await self.adapter.delete_channel(handle)
            except AdapterError as exc:
                logger.warning("Suppression %s de %s impossible: %s", attr, self.name, exc)
                error = error or exc
                continue
            setattr(self, attr, None)
        if error is not None:
            raise error
        self.state = RoomState.DELETED
        logger.info("Room %s fermée", self.name)

    async def create_invite(self, max_age: int, max_uses: int) -> str:
        # Invite courte durée pour ne pas atteindre le plafond d'invites du serveur
        return await self.adapter.create_temporary_invite(self.voice_channel, max_age, max_uses)


__all__ = ["Room", "room_name"]
