"""
Erreurs du domaine mentoring.

Toutes ces erreurs sont récupérables : la couche commandes les attrape et les
transforme en réponse pour l'utilisateur. Aucune n'est fatale au process.
"""
from __future__ import annotations


class MentoringError(Exception):
    """Base de toutes les erreurs du domaine."""


class AdapterError(MentoringError):
    """Echec d'un appel vers la plateforme (création salon, rôle, invite...)."""


class TopicNotFound(MentoringError):
    def __init__(self, name: str):
        super().__init__(f"Topic inconnu: {name}")
        self.name = name


class TopicAlreadyExists(MentoringError):
    def __init__(self, name: str):
        super().__init__(f"Topic déjà existant: {name}")
        self.name = name


class InvalidTopicName(MentoringError):
    def __init__(self, name: str):
        super().__init__(f"Nom de topic invalide: {name!r}")
        self.name = name


class AlreadyQueued(MentoringError):
    pass


class NotQueued(MentoringError):
    pass


class QueueEmpty(MentoringError):
    pass


class RoomNotFound(MentoringError):
    pass


class RoomProvisioningFailed(MentoringError):
    """Création d'une room impossible ; les salons déjà créés ont été supprimés."""

    def __init__(self, room_name: str, cause: Exception | None = None):
        super().__init__(f"Echec création room {room_name}: {cause}")
        self.room_name = room_name
        self.cause = cause


__all__ = [
    "MentoringError", "AdapterError", "TopicNotFound", "TopicAlreadyExists", "InvalidTopicName",
    "AlreadyQueued", "NotQueued", "QueueEmpty", "RoomNotFound", "RoomProvisioningFailed",
]
