"""Fixtures partagées : adapter en mémoire et membres factices."""

import asyncio
from types import SimpleNamespace

import pytest

from core.mentoring import Registry, Topic
from core.mentoring.errors import AdapterError
from core.mentoring.models import CHANNEL_TEXT, CHANNEL_VOICE


class FakeChannel:
    def __init__(self, name, kind, container, guild=None):
        self.name = name.lower() if kind == CHANNEL_TEXT else name
        self.kind = kind
        self.container = container
        self.guild = guild
        self.mention = f"<#{self.name}>"
        self.allowed = []

    def __repr__(self):
        return f"<FakeChannel {self.kind}:{self.name}>"


class FakeRole:
    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return f"<FakeRole {self.name}>"


class FakeMember:
    _next_id = 1000

    def __init__(self, name, roles=(), admin=False):
        FakeMember._next_id += 1
        self.id = FakeMember._next_id
        self.name = name
        self.display_name = name
        self.mention = f"<@{self.id}>"
        self.roles = list(roles)
        self.guild_permissions = SimpleNamespace(value=0x8 if admin else 0)
        self.bot = False

    def __repr__(self):
        return f"<FakeMember {self.name}>"


class FakeAdapter:
    """Adapter en mémoire ; `fail_on` contient les méthodes qui doivent lever AdapterError."""

    def __init__(self, roles=()):
        self.roles = list(roles)
        self.channels = []
        self.categories = {}
        self.calls = []
        self.fail_on = set()
        self.invites = 0
        self.sent = []
        self.fail_channels = []
        self._holds = {}

    def hold(self, method):
        """Bloque `method` jusqu'à `release.set()` ; `reached` est posé quand l'appel attend."""
        reached, release = asyncio.Event(), asyncio.Event()
        self._holds[method] = (reached, release)
        return reached, release

    async def _wait(self, method):
        gate = self._holds.get(method)
        if gate is not None:
            reached, release = gate
            reached.set()
            await release.wait()

    def _check(self, method, *args):
        self.calls.append((method, args))
        if method in self.fail_on:
            raise AdapterError(f"{method} failed")

    async def get_or_create_category(self, community, name):
        self._check("get_or_create_category", community, name)
        return self.categories.setdefault(name, SimpleNamespace(name=name))

    async def staff_handles(self, community, admin_role_names):
        return ["bot"]

    async def create_text_channel(self, container, name):
        self._check("create_text_channel", container, name)
        channel = FakeChannel(name, CHANNEL_TEXT, container)
        self.channels.append(channel)
        return channel

    async def create_voice_channel(self, container, name):
        self._check("create_voice_channel", container, name)
        await self._wait("create_voice_channel")
        channel = FakeChannel(name, CHANNEL_VOICE, container)
        self.channels.append(channel)
        return channel

    async def delete_channel(self, handle):
        self._check("delete_channel", handle)
        if handle in self.fail_channels:
            raise AdapterError(f"delete {handle.name} failed")
        if handle in self.channels:
            self.channels.remove(handle)

    async def find_channel_by_name(self, container, name, kind):
        for channel in self.channels:
            if channel.container is container and channel.kind == kind and channel.name.lower() == name.lower():
                return channel
        return None

    async def set_visibility(self, handle, allow_list, deny_default=True):
        self._check("set_visibility", handle)
        handle.allowed = list(allow_list)

    async def create_temporary_invite(self, voice_handle, max_age, max_uses):
        self._check("create_temporary_invite", voice_handle, max_age, max_uses)
        self.invites += 1
        return f"https://discord.gg/fake{self.invites}"

    async def list_roles_by_name_prefix(self, community, prefix):
        return [(r.name, r) for r in self.roles if r.name.startswith(prefix)]

    async def create_role(self, community, name):
        self._check("create_role", community, name)
        role = FakeRole(name)
        self.roles.append(role)
        return role

    async def delete_role(self, handle):
        self._check("delete_role", handle)
        self.roles.remove(handle)

    async def send_message(self, channel, text):
        self.sent.append((channel, text))

    def names(self, kind):
        return sorted(c.name for c in self.channels if c.kind == kind)


@pytest.fixture
def adapter():
    return FakeAdapter()


@pytest.fixture
def category():
    return SimpleNamespace(name="Mentoring")


@pytest.fixture
def topic(adapter, category):
    return Topic("Math", FakeRole("Mentor-Math"), category, adapter, staff=["bot"])


@pytest.fixture
def registry(adapter, category):
    return Registry("guild-1", adapter, category, role_prefix="Mentor-", staff=["bot"])


@pytest.fixture
def member_factory():
    return FakeMember
