from __future__ import annotations

import asyncio
import logging
from collections import deque
from typing import TYPE_CHECKING, Any, Deque, Dict, Iterable, List, Optional, Tuple

from .errors import AlreadyQueued, NotQueued, QueueEmpty, RoomNotFound, TopicNotFound
from .models import QueueEntry
from .room import Room

if TYPE_CHECKING:
    from .adapter import PlatformAdapter

logger = logging.getLogger(__name__)


class Topic:
    """Sujet de mentoring : une file FIFO de mentees et les rooms actives.

    Opérations de file (`join`, `leave`, `pop`, `clear`...) : synchrones, sans
    point de suspension, donc atomiques sur la boucle asyncio.
    Opérations de rooms (`create_room`, `delete_room`) : attendent l'adapter,
    sérialisées par le verrou du topic pour que deux appels concurrents ne
    reçoivent jamais le même numéro.
    Fermeture (`close`) : prend le même verrou, ferme toutes les rooms puis
    refuse toute nouvelle room ou entrée en file.
    """

    def __init__(self, name: str, role: Any, category: Any, adapter: PlatformAdapter, staff: Iterable[Any] = ()):
        self.name = name
        self.role = role
        self.category = category
        self.adapter = adapter
        self.staff: List[Any] = list(staff)
        self.rooms: Dict[int, Room] = {}
        self._queue: Deque[QueueEntry] = deque()
        self.closed = False
        self._lock = asyncio.Lock()

    def __repr__(self) -> str:
        return f"<Topic {self.name} queue={len(self._queue)} rooms={len(self.rooms)}>"

    # ---------- file d'attente ----------
    def __len__(self) -> int:
        return len(self._queue)

    def __contains__(self, participant: Any) -> bool:
        return self.contains(participant)

    def contains(self, participant: Any) -> bool:
        return QueueEntry(participant) in self._queue

    def join(self, participant: Any, message: Optional[str] = None) -> QueueEntry:
        if self.closed:
            raise TopicNotFound(self.name)
        if self.contains(participant):
            raise AlreadyQueued(participant)
        entry = QueueEntry(participant, message)
        self._queue.append(entry)
        return entry

    def leave(self, participant: Any) -> QueueEntry:
        for entry in self._queue:
            if entry.participant == participant:
                self._queue.remove(entry)
                return entry
        raise NotQueued(participant)

    def list(self) -> Tuple[QueueEntry, ...]:
        return tuple(self._queue)

    def pop(self) -> QueueEntry:
        if not self._queue:
            raise QueueEmpty(self.name)
        return self._queue.popleft()

    def restore(self, entry: QueueEntry):
        """Remet en tête une entrée sortie par `pop` (ex: échec création room)."""
        if self.contains(entry.participant):
            raise AlreadyQueued(entry.participant)
        self._queue.appendleft(entry)

    def clear(self) -> List[QueueEntry]:
        removed = list(self._queue)
        self._queue.clear()
        return removed

    # ---------- rooms ----------
    def _next_room_number(self) -> int:
        # Plus petit entier positif libre ; 1..len+1 suffit toujours
        for candidate in range(1, len(self.rooms) + 2):
            if candidate not in self.rooms:
                return candidate
        raise AssertionError("unreachable")

    async def create_room(self, participant: Any) -> Room:
        async with self._lock:
            if self.closed:
                raise TopicNotFound(self.name)
            number = self._next_room_number()
            logger.debug("Topic %s: numéro de room %s alloué", self.name, number)
            allow_list = [*self.staff, self.role, participant]
            room = await Room.open(self, number, participant, allow_list)
            self.rooms[number] = room
            return room

    async def delete_room(self, room: Room):
        async with self._lock:
            await self._delete_room(room)

    async def _delete_room(self, room: Room):
        # Appelant: verrou du topic déjà pris
        if self.rooms.get(room.number) is not room:
            raise RoomNotFound(room.name)
        await room.release()
        del self.rooms[room.number]

    async def close(self) -> List[QueueEntry]:
        """Ferme toutes les rooms, vide la file et marque le topic fermé.

        Une création de room en cours se termine avant (même verrou) et sa room
        est donc fermée aussi. Si une room ne peut pas être fermée, l'erreur
        remonte et le topic reste ouvert. Idempotent. Retourne les entrées retirées.
        """
        async with self._lock:
            for room in self.active_rooms():
                await self._delete_room(room)
            self.closed = True
            return self.clear()

    def find_room(self, name: str) -> Optional[Room]:
        target = name.lower()
        for room in self.rooms.values():
            if room.name.lower() == target:
                return room
        return None

    def active_rooms(self) -> List[Room]:
        return [self.rooms[n] for n in sorted(self.rooms)]


__all__ = ["Topic"]
