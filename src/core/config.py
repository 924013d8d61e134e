"""
Configuration centrale du bot de mentoring.

Ce module charge les variables d'environnement (.env) et prépare :
- Les intents Discord (message_content pour les commandes préfixées, members)
- Le token du bot (BOT_TOKEN, obligatoire)
- Les réglages mentoring (préfixe de commande, rôles admin, préfixe des rôles topic,
  catégorie des rooms, durée et usages des invites vocales)

Un warning est émis si BOT_TOKEN est absent pour détecter le problème avant le lancement du bot.
"""
from __future__ import annotations

import os
import logging
from dotenv import load_dotenv
import discord

load_dotenv()

logger = logging.getLogger(__name__)

INTENTS = discord.Intents.default()
INTENTS.message_content = True
INTENTS.members = True

BOT_TOKEN = os.getenv("BOT_TOKEN")

COMMAND_PREFIX = os.getenv("COMMAND_PREFIX", "$")

# Membres ayant ces rôles : accès à toutes les commandes et à toutes les rooms
ADMIN_ROLES = frozenset(
    r.strip() for r in (os.getenv("ADMIN_ROLES", "Director,MLH") or "").split(",") if r.strip()
)

# Un rôle "<prefix><topic>" définit un topic et ses mentors
TOPIC_ROLE_PREFIX = os.getenv("TOPIC_ROLE_PREFIX", "Mentor-")
MENTORING_CATEGORY = os.getenv("MENTORING_CATEGORY", "Mentoring")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("%s invalide (%r), valeur par défaut %s", name, raw, default)
        return default


INVITE_MAX_AGE = _int_env("INVITE_MAX_AGE", 5 * 60)
INVITE_MAX_USES = _int_env("INVITE_MAX_USES", 5)


# Avertit si le token du bot est absent
if not BOT_TOKEN:
    logger.warning("BOT_TOKEN manquant dans l'environnement")
