"""Tests du Registry (topics d'une guild) et du cache par guild."""

import asyncio
import logging

import pytest

from core.mentoring import (
    AdapterError,
    InvalidTopicName,
    Registry,
    RegistryCache,
    RoomState,
    TopicAlreadyExists,
    TopicNotFound,
)


class TestRegistryLoad:
    @pytest.mark.asyncio
    async def test_topics_rebuilt_from_roles(self, adapter):
        from conftest import FakeRole

        adapter.roles = [FakeRole("Mentor-Python"), FakeRole("Mentor-Web"), FakeRole("Director"), FakeRole("Mentor-")]

        registry = await Registry.load(
            adapter, "guild-1", role_prefix="Mentor-", category_name="Mentoring", admin_role_names=["Director"]
        )

        assert [t.name for t in registry.topics()] == ["Python", "Web"]
        assert registry.get_topic("python").role is adapter.roles[0]
        assert registry.category is adapter.categories["Mentoring"]
        assert registry.staff == ["bot"]

    @pytest.mark.asyncio
    async def test_category_reused(self, adapter):
        first = await Registry.load(adapter, "g", role_prefix="Mentor-", category_name="Mentoring")
        second = await Registry.load(adapter, "g", role_prefix="Mentor-", category_name="Mentoring")

        assert first.category is second.category


class TestRegistryTopics:
    @pytest.mark.asyncio
    async def test_lookup_is_case_insensitive(self, registry):
        created = await registry.create_topic("Math")

        assert registry.get_topic("Math") is created
        assert registry.get_topic("math") is created
        assert registry.get_topic("MATH") is created

    def test_missing_topic_is_none(self, registry):
        assert registry.get_topic("nope") is None
        with pytest.raises(TopicNotFound):
            registry.require_topic("nope")

    @pytest.mark.asyncio
    async def test_create_topic_creates_prefixed_role(self, registry, adapter):
        topic = await registry.create_topic("Math")

        assert topic.role.name == "Mentor-Math"
        assert topic.role in adapter.roles
        assert topic.category is registry.category

    @pytest.mark.asyncio
    async def test_duplicate_topic_rejected(self, registry, adapter):
        await registry.create_topic("Math")

        with pytest.raises(TopicAlreadyExists):
            await registry.create_topic("MATH")
        assert len(adapter.roles) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["", "   ", "two words"])
    async def test_invalid_names(self, registry, name):
        with pytest.raises(InvalidTopicName):
            await registry.create_topic(name)

    @pytest.mark.asyncio
    async def test_role_failure_registers_nothing(self, registry, adapter):
        adapter.fail_on.add("create_role")

        with pytest.raises(AdapterError):
            await registry.create_topic("Math")
        assert registry.topics() == []

    @pytest.mark.asyncio
    async def test_topics_sorted_by_name(self, registry):
        for name in ("web", "Algo", "math"):
            await registry.create_topic(name)

        assert [t.name for t in registry.topics()] == ["Algo", "math", "web"]

    @pytest.mark.asyncio
    async def test_delete_topic_cascades_rooms_and_queue(self, registry, adapter):
        topic = await registry.create_topic("Math")
        await topic.create_room("alice")
        await topic.create_room("bob")
        topic.join("carol", "help")

        dropped = await registry.delete_topic("math")

        assert [e.participant for e in dropped] == ["carol"]
        assert registry.get_topic("Math") is None
        assert topic.rooms == {}
        assert adapter.channels == []
        assert adapter.roles == []

    @pytest.mark.asyncio
    async def test_delete_topic_by_object(self, registry):
        topic = await registry.create_topic("Math")

        await registry.delete_topic(topic)

        assert registry.topics() == []

    @pytest.mark.asyncio
    async def test_delete_unknown_topic(self, registry):
        with pytest.raises(TopicNotFound):
            await registry.delete_topic("nope")

    @pytest.mark.asyncio
    async def test_delete_role_failure_keeps_topic(self, registry, adapter):
        await registry.create_topic("Math")
        adapter.fail_on.add("delete_role")

        with pytest.raises(AdapterError):
            await registry.delete_topic("Math")
        assert registry.get_topic("Math") is not None

    @pytest.mark.asyncio
    async def test_find_room_across_topics(self, registry):
        await registry.create_topic("Math")
        web = await registry.create_topic("Web")
        room = await web.create_room("alice")

        assert registry.find_room("web-1") == (web, room)
        assert registry.find_room("general") is None

    @pytest.mark.asyncio
    async def test_participant_can_be_queued_in_two_topics(self, registry):
        math = await registry.create_topic("Math")
        web = await registry.create_topic("Web")

        math.join("alice")
        web.join("alice")
        await math.create_room("alice")

        assert "alice" in math and "alice" in web


class TestRegistryCache:
    @pytest.mark.asyncio
    async def test_same_community_constructed_once(self, adapter, category):
        cache = RegistryCache()
        built = []

        async def loader():
            built.append(1)
            await asyncio.sleep(0)
            return Registry("g1", adapter, category, role_prefix="Mentor-")

        first, second = await asyncio.gather(cache.resolve("g1", loader), cache.resolve("g1", loader))
        third = await cache.resolve("g1", loader)

        assert len(built) == 1
        assert first is second is third
        assert "g1" in cache

    @pytest.mark.asyncio
    async def test_communities_are_independent(self, adapter, category):
        cache = RegistryCache()

        def loader_for(cid):
            async def loader():
                return Registry(cid, adapter, category, role_prefix="Mentor-")
            return loader

        one = await cache.resolve("g1", loader_for("g1"))
        two = await cache.resolve("g2", loader_for("g2"))
        await one.create_topic("Math")

        assert one is not two
        assert two.get_topic("Math") is None
        assert len(cache) == 2

    @pytest.mark.asyncio
    async def test_failed_loader_is_retried(self, adapter, category):
        cache = RegistryCache()
        attempts = []

        async def loader():
            attempts.append(1)
            if len(attempts) == 1:
                raise AdapterError("boom")
            return Registry("g1", adapter, category, role_prefix="Mentor-")

        with pytest.raises(AdapterError):
            await cache.resolve("g1", loader)
        registry = await cache.resolve("g1", loader)

        assert isinstance(registry, Registry)
        assert len(attempts) == 2


class TestTopicDeletionDuringRoomCreation:
    @pytest.mark.asyncio
    async def test_room_created_during_delete_is_closed_too(self, registry, adapter):
        topic = await registry.create_topic("Math")
        reached, release = adapter.hold("create_voice_channel")

        creating = asyncio.create_task(topic.create_room("alice"))
        await reached.wait()
        deleting = asyncio.create_task(registry.delete_topic("Math"))
        await asyncio.sleep(0)
        release.set()
        room, dropped = await asyncio.gather(creating, deleting)

        assert dropped == []
        assert room.state is RoomState.DELETED
        assert topic.rooms == {}
        assert adapter.channels == []
        assert registry.get_topic("Math") is None

    @pytest.mark.asyncio
    async def test_create_room_waiting_on_lock_after_delete_is_refused(self, registry, adapter):
        topic = await registry.create_topic("Math")
        reached, release = adapter.hold("create_voice_channel")

        first = asyncio.create_task(topic.create_room("alice"))
        await reached.wait()
        deleting = asyncio.create_task(registry.delete_topic("Math"))
        second = asyncio.create_task(topic.create_room("bob"))
        await asyncio.sleep(0)
        release.set()
        results = await asyncio.gather(first, deleting, second, return_exceptions=True)

        assert isinstance(results[2], TopicNotFound)
        assert adapter.channels == []

    @pytest.mark.asyncio
    async def test_closed_topic_refuses_queue_and_rooms(self, registry, adapter):
        topic = await registry.create_topic("Math")
        adapter.fail_on.add("delete_role")
        with pytest.raises(AdapterError):
            await registry.delete_topic("Math")

        assert topic.closed
        with pytest.raises(TopicNotFound):
            topic.join("alice")
        with pytest.raises(TopicNotFound):
            await topic.create_room("alice")

        adapter.fail_on.clear()
        await registry.delete_topic("Math")
        assert registry.topics() == []

    @pytest.mark.asyncio
    async def test_room_release_failure_keeps_topic_open(self, registry, adapter):
        topic = await registry.create_topic("Math")
        room = await topic.create_room("alice")
        adapter.fail_channels.append(room.text_channel)

        with pytest.raises(AdapterError):
            await registry.delete_topic("Math")

        assert not topic.closed
        assert topic.rooms == {1: room}
        assert registry.get_topic("Math") is topic


class TestRegistryLoadDuplicates:
    @pytest.mark.asyncio
    async def test_roles_differing_by_case_warn(self, adapter, caplog):
        from conftest import FakeRole

        adapter.roles = [FakeRole("Mentor-Math"), FakeRole("Mentor-math")]

        with caplog.at_level(logging.WARNING, logger="core.mentoring.registry"):
            registry = await Registry.load(adapter, "g", role_prefix="Mentor-", category_name="Mentoring")

        assert [t.name for t in registry.topics()] == ["Math"]
        assert registry.get_topic("math").role is adapter.roles[0]
        assert "Mentor-math" in caplog.text
