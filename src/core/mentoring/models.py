from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class QueueEntry:
    """Un participant en attente dans la file d'un topic.

    L'égalité (et le hash) ne portent que sur `participant` : le message est
    ignoré, ce qui permet de retrouver/retirer une entrée avec le seul membre.
    """

    participant: Any
    message: Optional[str] = field(default=None, compare=False)


class RoomState(enum.Enum):
    PROVISIONING = "provisioning"
    ACTIVE = "active"
    DELETED = "deleted"


CHANNEL_TEXT = "text"
CHANNEL_VOICE = "voice"
