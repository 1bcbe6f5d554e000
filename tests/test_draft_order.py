"""Tests for snake draft order generation."""

import math

import pytest

from src.draft_manager.draft_order import generate_draft_order


class TestGenerateDraftOrder:
    def test_three_teams_seven_players(self):
        assert generate_draft_order(3, 7) == [0, 1, 2, 2, 1, 0, 0, 1, 2]

    def test_zero_teams_is_empty(self):
        assert generate_draft_order(0, 10) == []

    def test_negative_teams_is_empty(self):
        assert generate_draft_order(-2, 10) == []

    def test_zero_players_is_empty(self):
        assert generate_draft_order(4, 0) == []

    def test_single_team(self):
        assert generate_draft_order(1, 3) == [0, 0, 0]

    def test_exact_multiple(self):
        assert generate_draft_order(2, 4) == [0, 1, 1, 0]

    @pytest.mark.parametrize("team_count", [1, 2, 3, 5, 8])
    @pytest.mark.parametrize("player_count", [0, 1, 7, 12, 31])
    def test_length_and_blocks(self, team_count, player_count):
        order = generate_draft_order(team_count, player_count)
        assert len(order) == team_count * math.ceil(player_count / team_count)

        ascending = list(range(team_count))
        for block_num, start in enumerate(range(0, len(order), team_count)):
            block = order[start:start + team_count]
            if block_num % 2 == 0:
                assert block == ascending
            else:
                assert block == ascending[::-1]
