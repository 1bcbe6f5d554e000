"""Tests for draft state data models."""

from src.draft_manager.draft_state import (
    AppState,
    Division,
    DraftSession,
    PickRecord,
    RosterIndex,
    Team,
    default_divisions,
)


# ── RosterIndex ──────────────────────────────────────────────────────

class TestRosterIndex:
    def test_preserves_ingest_order(self, roster):
        index = RosterIndex(roster)
        assert index.ids() == [p.id for p in roster]
        assert index.position("player-3") == 3

    def test_get_missing(self, roster):
        assert RosterIndex(roster).get("nope") is None

    def test_division_players(self, roster):
        index = RosterIndex(roster).with_drafted(["player-1"], True)
        assert len(index.division_players("Majors")) == 7
        undrafted = index.division_players("Majors", undrafted_only=True)
        assert "player-1" not in [p.id for p in undrafted]
        assert len(undrafted) == 6

    def test_with_drafted_returns_new_index(self, roster):
        index = RosterIndex(roster)
        updated = index.with_drafted(["player-0"], True)
        assert updated.get("player-0").drafted is True
        assert index.get("player-0").drafted is False

    def test_with_division(self, roster):
        index = RosterIndex(roster).with_division("player-7", "Juniors")
        assert index.get("player-7").division == "Juniors"

    def test_reset_division_only_touches_that_division(self, roster):
        index = RosterIndex(roster).with_drafted(["player-0", "player-7"], True)
        reset = index.reset_division("Majors")
        assert reset.get("player-0").drafted is False
        assert reset.get("player-7").drafted is True

    def test_needs_assignment(self, make_player):
        index = RosterIndex([make_player(0), make_player(1, division="")])
        assert [p.id for p in index.needs_assignment()] == ["player-1"]

    def test_count_by_division_skips_drafted(self, roster):
        index = RosterIndex(roster).with_drafted(["player-0"], True)
        counts = index.count_by_division()
        assert counts == {"Majors": 6, "Minors": 2}

    def test_equality(self, roster):
        assert RosterIndex(roster) == RosterIndex(list(roster))
        assert RosterIndex(roster) != RosterIndex(roster[:-1])


# ── Division ─────────────────────────────────────────────────────────

class TestDivision:
    def test_pick_order_uses_draft_order(self):
        d = Division("Majors", 2, teams=["A", "B"], draft_order_teams=["B", "A"])
        assert d.pick_order() == ["B", "A"]

    def test_pick_order_falls_back_to_teams(self):
        d = Division("Majors", 2, teams=["A", "B"])
        assert d.pick_order() == ["A", "B"]

    def test_zero_teams_is_skipped(self):
        assert Division("Rookies", 1).is_skipped is True

    def test_default_divisions(self):
        names = [d.name for d in default_divisions()]
        assert names == ["Rookies", "Majors", "Minors", "Intermediate", "Juniors"]
        assert all(d.teams == [] for d in default_divisions())


# ── DraftSession ─────────────────────────────────────────────────────

class TestDraftSession:
    def _session(self, **overrides):
        defaults = {
            "division": "Majors",
            "teams": [Team("A"), Team("B")],
            "available_players": ["p1", "p2"],
            "current_round": 1,
            "current_pick": 0,
            "draft_order": [0, 1, 1, 0],
        }
        defaults.update(overrides)
        return DraftSession(**defaults)

    def test_current_team_index(self):
        assert self._session(current_pick=2).current_team_index() == 1

    def test_current_team_index_past_end(self):
        assert self._session(current_pick=4).current_team_index() is None

    def test_round_for(self):
        session = self._session()
        assert session.round_for(0) == 1
        assert session.round_for(1) == 1
        assert session.round_for(2) == 2


# ── PickRecord / AppState ────────────────────────────────────────────

class TestPickRecord:
    def test_create(self):
        pick = PickRecord.create(round=1, pick=1, team="A", player="E1",
                                 player_id="p1")
        assert pick.siblings == []
        assert pick.sibling_ids == []
        assert pick.timestamp  # non-empty ISO string


class TestAppState:
    def test_initial_state(self):
        state = AppState()
        assert state.step == "upload"
        assert len(state.players) == 0
        assert state.draft_session is None
        assert state.draft_log == []

    def test_sorted_divisions(self, app_state):
        app_state.divisions.reverse()
        assert [d.order for d in app_state.sorted_divisions()] == [1, 2, 3, 4, 5]

    def test_get_division(self, app_state):
        assert app_state.get_division("Minors").teams == ["Ants", "Bees"]
        assert app_state.get_division("Seniors") is None
