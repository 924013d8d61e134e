"""
Contrat attendu de la plateforme de chat.

Le coeur mentoring ne parle jamais directement à discord.py : il passe par un
objet respectant `PlatformAdapter`. Les handles (membres, rôles, salons,
catégories) sont opaques : le coeur ne fait que les comparer ou les repasser
tels quels à l'adapter.

Toute méthode peut lever `AdapterError` en cas d'échec côté plateforme.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Optional, Protocol, Tuple


class PlatformAdapter(Protocol):
    async def get_or_create_category(self, community: Any, name: str) -> Any: ...

    async def staff_handles(self, community: Any, admin_role_names: Iterable[str]) -> List[Any]:
        """Handles toujours autorisés dans les rooms (le bot lui-même + rôles admin)."""
        ...

    async def create_text_channel(self, container: Any, name: str) -> Any: ...

    async def create_voice_channel(self, container: Any, name: str) -> Any: ...

    async def delete_channel(self, handle: Any) -> None: ...

    async def find_channel_by_name(self, container: Any, name: str, kind: str) -> Optional[Any]: ...

    async def set_visibility(self, handle: Any, allow_list: Iterable[Any], deny_default: bool = True) -> None: ...

    async def create_temporary_invite(self, voice_handle: Any, max_age: int, max_uses: int) -> str: ...

    async def list_roles_by_name_prefix(self, community: Any, prefix: str) -> List[Tuple[str, Any]]:
        """Retourne des paires (nom du rôle, handle)."""
        ...

    async def create_role(self, community: Any, name: str) -> Any: ...

    async def delete_role(self, handle: Any) -> None: ...

    async def send_message(self, channel: Any, text: str) -> None: ...


__all__ = ["PlatformAdapter"]
