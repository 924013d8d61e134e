from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Hashable, Iterable, List, Optional, Tuple, Union

from .adapter import PlatformAdapter
from .errors import InvalidTopicName, TopicAlreadyExists, TopicNotFound
from .models import QueueEntry
from .room import Room
from .topic import Topic

logger = logging.getLogger(__name__)


class Registry:
    """Topics d'une guild, reconstruits depuis la liste des rôles.

    Un rôle `<prefix><nom>` représente le topic `<nom>` et sert aussi à
    reconnaître ses mentors. Aucune autre persistance : au redémarrage, les
    files sont vides et les rooms résiduelles seront recyclées par `Room.open`.
    """

    def __init__(
        self,
        community: Any,
        adapter: PlatformAdapter,
        category: Any,
        *,
        role_prefix: str,
        staff: Iterable[Any] = (),
    ):
        self.community = community
        self.adapter = adapter
        self.category = category
        self.role_prefix = role_prefix
        self.staff = list(staff)
        self._topics: Dict[str, Topic] = {}

    @classmethod
    async def load(
        cls,
        adapter: PlatformAdapter,
        community: Any,
        *,
        role_prefix: str,
        category_name: str,
        admin_role_names: Iterable[str] = (),
    ) -> Registry:
        category = await adapter.get_or_create_category(community, category_name)
        staff = await adapter.staff_handles(community, admin_role_names)
        registry = cls(community, adapter, category, role_prefix=role_prefix, staff=staff)
        for role_name, role in await adapter.list_roles_by_name_prefix(community, role_prefix):
            name = role_name[len(role_prefix):]
            if not name:
                continue
            if name.lower() in registry._topics:
                logger.warning(
                    "Rôle %s ignoré: topic %s déjà chargé (noms identiques à la casse près)",
                    role_name, registry._topics[name.lower()].name,
                )
                continue
            registry._topics[name.lower()] = registry._make_topic(name, role)
        logger.info("Registry chargé pour %s: %s topic(s)", community, len(registry._topics))
        return registry

    def _make_topic(self, name: str, role: Any) -> Topic:
        return Topic(name, role, self.category, self.adapter, staff=self.staff)

    # ---------- lecture ----------
    def get_topic(self, name: str) -> Optional[Topic]:
        return self._topics.get(name.lower())

    def require_topic(self, name: str) -> Topic:
        topic = self.get_topic(name)
        if topic is None:
            raise TopicNotFound(name)
        return topic

    def topics(self) -> List[Topic]:
        return sorted(self._topics.values(), key=lambda t: t.name.lower())

    def find_room(self, channel_name: str) -> Optional[Tuple[Topic, Room]]:
        for topic in self._topics.values():
            room = topic.find_room(channel_name)
            if room is not None:
                return topic, room
        return None

    # ---------- écriture ----------
    async def create_topic(self, name: str) -> Topic:
        name = (name or "").strip()
        if not name or any(ch.isspace() for ch in name):
            raise InvalidTopicName(name)
        if name.lower() in self._topics:
            raise TopicAlreadyExists(name)
        role = await self.adapter.create_role(self.community, f"{self.role_prefix}{name}")
        topic = self._make_topic(name, role)
        self._topics[name.lower()] = topic
        logger.info("Topic %s créé (guild %s)", name, self.community)
        return topic

    async def delete_topic(self, topic: Union[str, Topic]) -> List[QueueEntry]:
        """Supprime un topic : ferme ses rooms actives, vide sa file, supprime le rôle.

        La fermeture se fait sous le verrou du topic (`Topic.close`) : une room en
        cours de création est fermée elle aussi, aucune ne peut être créée ensuite.
        Si la suppression du rôle échoue, le topic reste enregistré mais fermé ;
        un nouvel appel termine la suppression.
        Retourne les entrées retirées de la file (pour notification).
        """
        if isinstance(topic, str):
            topic = self.require_topic(topic)
        elif self._topics.get(topic.name.lower()) is not topic:
            raise TopicNotFound(topic.name)
        dropped = await topic.close()
        await self.adapter.delete_role(topic.role)
        del self._topics[topic.name.lower()]
        logger.info("Topic %s supprimé (guild %s), %s en file retiré(s)", topic.name, self.community, len(dropped))
        return dropped


RegistryLoader = Callable[[], Awaitable[Registry]]


class RegistryCache:
    """Cache process des Registry par guild.

    Créé au démarrage du bot, vit autant que le process, pas d'éviction.
    La construction d'un Registry est protégée par un verrou par guild : deux
    premières commandes simultanées obtiennent la même instance.
    """

    def __init__(self):
        self._registries: Dict[Hashable, Registry] = {}
        self._locks: Dict[Hashable, asyncio.Lock] = {}

    def __contains__(self, community_id: Hashable) -> bool:
        return community_id in self._registries

    def __len__(self) -> int:
        return len(self._registries)

    def get_lock(self, community_id: Hashable) -> asyncio.Lock:
        lock = self._locks.get(community_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[community_id] = lock
        return lock

    async def resolve(self, community_id: Hashable, loader: RegistryLoader) -> Registry:
        registry = self._registries.get(community_id)
        if registry is not None:
            return registry
        async with self.get_lock(community_id):
            registry = self._registries.get(community_id)
            if registry is None:
                registry = await loader()
                self._registries[community_id] = registry
            return registry


__all__ = ["Registry", "RegistryCache", "RegistryLoader"]
