"""
Embed d'aide : liste des commandes visibles selon le rôle de l'appelant.
"""
from __future__ import annotations

import discord

from core import config

HELP_COLOR = discord.Color(0xE57D25)

_PUBLIC = [
    ("queue <topic> <message>", "Rejoindre la file d'un topic avec un message pour le mentor."),
    ("leave <topic>", "Quitter la file d'un topic."),
    ("showqueue <topic>", "Afficher les membres en file."),
    ("showtopics", "Lister les topics."),
]
_MENTOR = [
    ("ready <topic>", "Prendre la personne suivante dans la file (mentor)."),
    ("kick <@membre> <topic> <raison>", "Retirer un membre de la file (mentor)."),
    ("clear <topic>", "Vider la file (mentor)."),
    ("finish", "Terminer une session. A lancer dans le salon texte de la room (mentor)."),
]
_ADMIN = [
    ("maketopic <nom>", "Créer un topic (admin)."),
    ("deletetopic <nom>", "Supprimer un topic et fermer ses rooms (admin)."),
]


def build_help_embed(*, mentor: bool = False, admin: bool = False) -> discord.Embed:
    e = discord.Embed(title="Aide", description="Commandes disponibles :", color=HELP_COLOR)
    sections = list(_PUBLIC)
    if mentor or admin:
        sections += _MENTOR
    if admin:
        sections += _ADMIN
    for usage, desc in sections:
        e.add_field(name=f"{config.COMMAND_PREFIX}{usage}", value=desc, inline=False)
    return e


__all__ = ["build_help_embed"]
