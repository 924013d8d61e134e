"""
Prédicats de permission pour les commandes mentoring.

Rappel :
- `discord.Permissions` expose un attribut `.value` (int) contenant les bits cumulés
- On teste un sous-ensemble via : (current & required) == required

Un membre est "admin" s'il a le bit Administrator ou un rôle listé dans ADMIN_ROLES.
Un membre est "mentor" d'un topic s'il porte le rôle de ce topic.
"""
from __future__ import annotations

from typing import Any, Iterable, Optional

from core import config

# Extraits de `discord.Permissions` (compléter si besoin futur)
ADMINISTRATOR = 0x00000008


def has_perms(member: Any, bits: int) -> bool:
    perms = getattr(member, "guild_permissions", None)
    perms_value = getattr(perms, "value", 0) or 0
    return (perms_value & bits) == bits


def is_admin(member: Any, admin_roles: Optional[Iterable[str]] = None) -> bool:
    names = set(config.ADMIN_ROLES if admin_roles is None else admin_roles)
    if has_perms(member, ADMINISTRATOR):
        return True
    return any(getattr(r, "name", None) in names for r in getattr(member, "roles", ()))


def is_mentor(member: Any, topic=None, prefix: Optional[str] = None) -> bool:
    """Mentor du topic donné, ou de n'importe quel topic si `topic` est None."""
    roles = getattr(member, "roles", ())
    if topic is not None:
        return any(r == topic.role for r in roles)
    prefix = config.TOPIC_ROLE_PREFIX if prefix is None else prefix
    return any(str(getattr(r, "name", "")).startswith(prefix) for r in roles)


def is_privileged(member: Any, topic) -> bool:
    return is_mentor(member, topic) or is_admin(member)


__all__ = ["ADMINISTRATOR", "has_perms", "is_admin", "is_mentor", "is_privileged"]
