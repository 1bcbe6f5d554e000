"""Tests for the admin -> display sync channel."""

import pytest

from src.draft_manager.draft_session import draft_player, start_division_draft
from src.draft_manager.state_persistence import MemorySnapshotStore
from src.draft_manager.sync_channel import ADMIN, DISPLAY, SyncChannel, resolve_role


class _BrokenStore(MemorySnapshotStore):
    """Store that fails like a full or unavailable disk."""

    def get(self, key):
        raise OSError("storage unavailable")

    def set(self, key, value, origin):
        raise OSError("quota exceeded")

    def remove(self, key, origin):
        raise OSError("storage unavailable")


class TestResolveRole:
    @pytest.mark.parametrize("query, role", [
        ("view=display", DISPLAY),
        ("?view=display", DISPLAY),
        ("foo=1&view=display", DISPLAY),
        ("view=admin", ADMIN),
        ("", ADMIN),
        (None, ADMIN),
    ])
    def test_roles(self, query, role):
        assert resolve_role(query) == role


class TestSyncChannel:
    def test_unknown_role(self, store):
        with pytest.raises(ValueError):
            SyncChannel(store, role="viewer")

    def test_publish_then_load(self, store, app_state):
        admin = SyncChannel(store, ADMIN)
        assert admin.publish(app_state) is True
        loaded = SyncChannel(store, DISPLAY).load()
        assert loaded.players == app_state.players
        assert loaded.divisions == app_state.divisions

    def test_load_empty(self, store):
        assert SyncChannel(store, DISPLAY).load() is None

    def test_display_never_writes(self, store, app_state):
        display = SyncChannel(store, DISPLAY)
        assert display.publish(app_state) is False
        assert display.clear() is False
        assert store.get(display.key) is None

    def test_display_receives_each_publish(self, store, app_state):
        admin = SyncChannel(store, ADMIN)
        display = SyncChannel(store, DISPLAY)
        received = []
        display.subscribe(received.append)

        state = start_division_draft(app_state, "Majors")
        admin.publish(state)
        state = draft_player(state, "player-1")
        admin.publish(state)

        assert len(received) == 2
        assert received[-1].draft_session == state.draft_session

    def test_admin_does_not_hear_itself(self, store, app_state):
        admin = SyncChannel(store, ADMIN)
        received = []
        admin.subscribe(received.append)
        admin.publish(app_state)
        assert received == []

    def test_second_admin_last_write_wins(self, store, app_state):
        first = SyncChannel(store, ADMIN)
        second = SyncChannel(store, ADMIN)
        first.publish(start_division_draft(app_state, "Majors"))
        second.publish(start_division_draft(app_state, "Minors"))
        assert first.load().draft_session.division == "Minors"

    def test_clear(self, store, app_state):
        admin = SyncChannel(store, ADMIN)
        admin.publish(app_state)
        assert admin.clear() is True
        assert admin.load() is None

    def test_clear_not_delivered_as_snapshot(self, store, app_state):
        admin = SyncChannel(store, ADMIN)
        admin.publish(app_state)
        received = []
        SyncChannel(store, DISPLAY).subscribe(received.append)
        admin.clear()
        assert received == []

    def test_corrupt_snapshot_ignored(self, store):
        store.set("bcll-draft-state", "{not json", origin="someone")
        assert SyncChannel(store, DISPLAY).load() is None

    def test_foreign_snapshot_ignored(self, store):
        store.set("bcll-draft-state", '{"players": [{"bogus": 1}]}', origin="x")
        assert SyncChannel(store, DISPLAY).load() is None


class TestSyncFailures:
    def test_publish_failure_swallowed(self, app_state):
        assert SyncChannel(_BrokenStore(), ADMIN).publish(app_state) is False

    def test_load_failure_swallowed(self):
        assert SyncChannel(_BrokenStore(), DISPLAY).load() is None

    def test_clear_failure_swallowed(self):
        assert SyncChannel(_BrokenStore(), ADMIN).clear() is False

    def test_full_store_swallowed(self, app_state):
        class FullStore(MemorySnapshotStore):
            def set(self, key, value, origin):
                raise ValueError("quota exceeded")

        assert SyncChannel(FullStore(), ADMIN).publish(app_state) is False

    def test_encoding_bug_not_hidden(self, store, app_state, monkeypatch):
        def broken_encode(state):
            raise TypeError("Object of type set is not JSON serializable")

        monkeypatch.setattr("src.draft_manager.sync_channel.encode_snapshot", broken_encode)
        with pytest.raises(TypeError):
            SyncChannel(store, ADMIN).publish(app_state)

    def test_crashing_display_does_not_fail_publish(self, store, app_state):
        admin = SyncChannel(store, ADMIN)
        received = []

        def crash(state):
            raise KeyError("draft_state")

        SyncChannel(store, DISPLAY).subscribe(crash)
        SyncChannel(store, DISPLAY).subscribe(received.append)

        assert admin.publish(app_state) is True
        assert len(received) == 1
