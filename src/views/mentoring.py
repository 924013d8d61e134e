"""
Textes des réponses aux commandes mentoring (file d'attente, rooms, topics).
"""
from __future__ import annotations

from typing import Iterable

from core import config


def _cmd(usage: str) -> str:
    return f"`{config.COMMAND_PREFIX}{usage}`"


def msg_usage(mention: str, usage: str) -> str: return f"{mention} Paramètres invalides. Usage: {_cmd(usage)}"
def msg_unknown_command(mention: str) -> str: return f"{mention} Commande inconnue. Essayez {_cmd('help')}."
def msg_no_permission(mention: str) -> str: return f"{mention} Vous n'avez pas la permission d'exécuter cette commande."
def msg_no_admin(mention: str) -> str: return f"{mention} Commande réservée aux administrateurs."
def msg_no_such_topic(mention: str, topic: str) -> str: return f"{mention} Le topic \"{topic}\" n'existe pas."
def msg_topic_exists(mention: str, topic: str) -> str: return f"{mention} Le topic \"{topic}\" existe déjà."
def msg_topic_invalid(mention: str, topic: str) -> str: return f"{mention} Nom de topic invalide: \"{topic}\"."
def msg_topic_created(mention: str, topic: str) -> str: return f"{mention} Topic \"{topic}\" créé."
def msg_no_topics(mention: str) -> str: return f"{mention} Aucun topic."
def msg_joined(mention: str, topic: str) -> str: return f"{mention} Vous êtes dans la file \"{topic}\"."
def msg_already_queued(mention: str, topic: str) -> str: return f"{mention} Vous êtes déjà dans la file \"{topic}\"."
def msg_left(mention: str, topic: str) -> str: return f"{mention} Vous avez quitté la file \"{topic}\"."
def msg_self_not_queued(mention: str, topic: str) -> str: return f"{mention} Vous n'êtes pas dans la file \"{topic}\"."
def msg_not_queued(mention: str, target: str, topic: str) -> str: return f"{mention} {target} n'est pas dans la file \"{topic}\"."
def msg_queue_empty(mention: str, topic: str) -> str: return f"{mention} La file \"{topic}\" est vide."
def msg_run_in_room(mention: str) -> str: return f"{mention} Cette commande doit être lancée dans le salon texte d'une room."
def msg_member_not_found(mention: str) -> str: return f"{mention} Membre introuvable (mentionnez-le avec @)."
def msg_room_failed(mention: str, topic: str) -> str: return f"{mention} Impossible de créer la room \"{topic}\", le mentee reste en tête de file."
def msg_finish_failed(mention: str) -> str: return f"{mention} Impossible de fermer la room, réessayez."
def msg_delete_failed(mention: str, topic: str) -> str: return f"{mention} Suppression du topic \"{topic}\" incomplète, réessayez."


def msg_topic_deleted(mention: str, topic: str, dropped: Iterable[str] = ()) -> str:
    dropped = list(dropped)
    text = f"{mention} Topic \"{topic}\" supprimé."
    if dropped:
        text += f" Retiré(s) de la file: {' '.join(dropped)}"
    return text


def msg_kicked(mention: str, target: str, topic: str, reason: str) -> str:
    return f"{target} a été retiré de la file \"{topic}\" par {mention}. Raison: {reason}"


def msg_queue_cleared(mention: str, topic: str, removed: Iterable[str] = ()) -> str:
    removed = list(removed)
    text = f"{mention} a vidé la file \"{topic}\"."
    if removed:
        text += f" {' '.join(removed)}"
    return text


def msg_mentor_ready(mentor: str, mentee: str, text_channel: str, invite_url: str | None) -> str:
    voice = invite_url or "(invite indisponible)"
    return f"{mentor} est prêt pour {mentee}.\n\nSalon texte: {text_channel}\nSalon vocal: {voice}"


def fmt_queue_line(position: int, name: str, message: str | None) -> str:
    return f"{position}. {name}: {message}" if message else f"{position}. {name}"


def msg_queue_list(mention: str, topic: str, lines: Iterable[str]) -> str:
    return f"{mention} Membres dans la file \"{topic}\":\n" + "\n".join(lines)


def msg_topic_list(mention: str, names: Iterable[str]) -> str:
    return f"{mention} Topics:\n" + "\n".join(names)


__all__ = [name for name in globals().keys() if name.startswith('msg_') or name.startswith('fmt_')]
