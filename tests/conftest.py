"""Shared fixtures for the draft test suite."""

from pathlib import Path

import pytest

from src.draft_manager.draft_state import AppState, Division, PlayerRecord, RosterIndex
from src.draft_manager.state_persistence import MemorySnapshotStore

# (id suffix, division, account last name, street address, age)
# Smith households differ only in case: p0, p2 and p4 are siblings.
_ROSTER = [
    (0, "Majors", "Smith", "1 Oak St", 10),
    (1, "Majors", "Jones", "2 Elm St", 11),
    (2, "Majors", "SMITH", "1 oak st", 9),
    (3, "Majors", "Brown", "3 Pine St", 12),
    (4, "Majors", "Smith", "1 Oak St", 8),
    (5, "Majors", "Green", "4 Ash St", 12),
    (6, "Majors", "White", "5 Birch St", 10),
    (7, "Minors", "Black", "6 Cedar St", 8),
    (8, "Minors", "Gray", "7 Maple St", 9),
]


def _make_player(idx, division="Majors", **overrides):
    defaults = {
        "id": f"player-{idx}",
        "eval_id": f"E{100 + idx}",
        "first_name": f"Kid{idx}",
        "last_name": f"Last{idx}",
        "account_last_name": f"Family{idx}",
        "street_address": f"{idx} Main St",
        "age": 10,
        "division": division,
    }
    defaults.update(overrides)
    return PlayerRecord(**defaults)


def _make_roster():
    return [
        _make_player(
            idx, division,
            account_last_name=last_name, street_address=street, age=age,
        )
        for idx, division, last_name, street, age in _ROSTER
    ]


def _make_divisions():
    return [
        Division(name="Rookies", order=1),
        Division(
            name="Majors", order=2,
            teams=["Cubs", "Sox", "Mets"],
            draft_order_teams=["Sox", "Cubs", "Mets"],
        ),
        Division(name="Minors", order=3, teams=["Ants", "Bees"],
                 draft_order_teams=["Ants", "Bees"]),
        Division(name="Intermediate", order=4),
        Division(name="Juniors", order=5),
    ]


# ------------------------------------------------------------------
# Lightweight factories – cheap to construct, no I/O
# ------------------------------------------------------------------

@pytest.fixture
def make_player():
    return _make_player


@pytest.fixture
def roster():
    return _make_roster()


@pytest.fixture
def app_state():
    """Divisions set up, Majors and Minors ready to draft."""
    return AppState(
        step="draft",
        players=RosterIndex(_make_roster()),
        divisions=_make_divisions(),
    )


@pytest.fixture
def store():
    return MemorySnapshotStore()


# ------------------------------------------------------------------
# Registration CSV on disk
# ------------------------------------------------------------------

REGISTRATION_CSV = """\
Evaluation ID,Division,Account First Name,Account Last Name,Player First Name,Player Last Name,Player Gender,Player Birth Date,Street Address,City,State,Postal Code,User Email,Cellphone,Jersey Size,Player Allergies
101,Majors,Pat,Smith,Alex,Smith,M,2014-03-02,1 Oak St,Boulder City,NV,89005,pat@example.com,555-0101,YM,None
102,Majors,Pat,Smith,Sam,Smith,F,2016-09-30,1 Oak St,Boulder City,NV,89005,pat@example.com,555-0101,YS,Peanuts
103,Minors,Lee,Jones,Chris,Jones,M,not a date,2 Elm St,Boulder City,NV,89005,lee@example.com,555-0102,YL,
104,,Kim,Brown,Jo,Brown,F,2015-12-01,"3 Pine St, Apt 2",Boulder City,NV,89005,kim@example.com,555-0103,YM,
"""


@pytest.fixture
def registration_csv(tmp_path) -> Path:
    path = tmp_path / "registrations.csv"
    path.write_text(REGISTRATION_CSV, encoding="utf-8")
    return path
