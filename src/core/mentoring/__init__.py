"""Coeur mentoring : files d'attente par topic, rooms et registre par guild.

Ce package n'importe pas discord.py ; tout passe par un `PlatformAdapter`.
"""
from __future__ import annotations

from .errors import (
    AdapterError,
    AlreadyQueued,
    InvalidTopicName,
    MentoringError,
    NotQueued,
    QueueEmpty,
    RoomNotFound,
    RoomProvisioningFailed,
    TopicAlreadyExists,
    TopicNotFound,
)
from .models import QueueEntry, RoomState
from .registry import Registry, RegistryCache
from .room import Room
from .topic import Topic

__all__ = [
    "AdapterError", "AlreadyQueued", "InvalidTopicName", "MentoringError", "NotQueued", "QueueEmpty",
    "RoomNotFound", "RoomProvisioningFailed", "TopicAlreadyExists", "TopicNotFound",
    "QueueEntry", "RoomState", "Registry", "RegistryCache", "Room", "Topic",
]
