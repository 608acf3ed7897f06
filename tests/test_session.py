from __future__ import annotations

import logging

import pytest

from c36_grid.cells import food_heal_amount, get_cell_type, hostile_damage
from c36_grid.models import CellType
from c36_grid.session import (
    MAX_HP,
    REVIVE_COST,
    START_HP,
    ExcavationSession,
    InsufficientFundsError,
    SessionState,
)


class RecordingTelemetry:
    def __init__(self) -> None:
        self.events: list[tuple[str, dict]] = []

    def emit(self, event_name: str, payload: dict) -> None:
        self.events.append((event_name, payload))


def _find_cell(cell_type: CellType) -> tuple[int, int]:
    for x in range(200):
        for y in range(200):
            if get_cell_type(x, y) == cell_type:
                return x, y
    raise AssertionError(f"no {cell_type} cell in search window")


def test_excavating_a_coin_cell_adds_inventory_once() -> None:
    telemetry = RecordingTelemetry()
    session = ExcavationSession(telemetry=telemetry)
    x, y = _find_cell(CellType.COIN)

    result = session.excavate(x, y)
    assert result.artifact is not None
    assert result.xp_gained == 10
    assert session.state.inventory == [result.artifact]
    assert session.state.visited[(x, y)] == CellType.COIN
    assert telemetry.events[-1][0] == "cell_excavated"

    again = session.excavate(x, y)
    assert again.already_visited is True
    assert again.artifact is None
    assert len(session.state.inventory) == 1


def test_clearing_visited_replays_the_same_coin() -> None:
    session = ExcavationSession()
    x, y = _find_cell(CellType.COIN)

    first = session.excavate(x, y).artifact
    session.clear_visited()
    replay = session.excavate(x, y).artifact

    assert first is not None and replay is not None
    assert replay.data == first.data
    assert replay.monetary_value == first.monetary_value


def test_food_heals_up_to_cap() -> None:
    session = ExcavationSession(state=SessionState(hp=95))
    x, y = _find_cell(CellType.FOOD)

    result = session.excavate(x, y)

    assert session.state.hp == min(MAX_HP, 95 + food_heal_amount(x, y))
    assert result.healed == session.state.hp - 95


def test_empty_cell_grants_scan_xp() -> None:
    session = ExcavationSession()
    x, y = _find_cell(CellType.EMPTY)

    result = session.excavate(x, y)

    assert result.artifact is None
    assert session.state.xp == 1


def test_hostile_cells_are_marked_and_hurt() -> None:
    session = ExcavationSession()
    x, y = _find_cell(CellType.HOSTILE)

    assert session.enter_cell(x, y) == CellType.HOSTILE
    assert session.is_visited(x, y)
    assert session.apply_hostile_tick(x, y) == 50 - hostile_damage(x, y)

    safe_x, safe_y = _find_cell(CellType.EMPTY)
    assert session.apply_hostile_tick(safe_x, safe_y) == 50 - hostile_damage(x, y)


def test_exhausted_player_cannot_excavate() -> None:
    session = ExcavationSession(state=SessionState(hp=0))
    x, y = _find_cell(CellType.COIN)

    assert session.excavate(x, y).artifact is None
    assert not session.is_visited(x, y)


def test_buying_requires_funds_and_selling_pays_out() -> None:
    session = ExcavationSession()
    with pytest.raises(InsufficientFundsError):
        session.buy("field-rations")

    x, y = _find_cell(CellType.COIN)
    coin = session.excavate(x, y).artifact
    assert coin is not None
    session.state.balance = 5_000 - coin.monetary_value

    assert session.sell([coin]) == coin.monetary_value
    assert session.state.inventory == []
    assert session.state.balance == 5_000

    detector = session.buy("metal-detector")
    assert session.state.balance == 0
    assert session.state.inventory == [detector]
    assert session.state.xp == 10 + 100


def test_revive_liquidates_selected_items() -> None:
    telemetry = RecordingTelemetry()
    session = ExcavationSession(telemetry=telemetry, state=SessionState(xp=1_200))
    x, y = _find_cell(CellType.COIN)
    coin = session.excavate(x, y).artifact
    assert coin is not None
    session.state.hp = 0

    balance = session.revive([coin])

    assert balance == coin.monetary_value - REVIVE_COST
    assert session.state.balance == balance
    assert session.state.hp == START_HP
    assert session.state.inventory == []
    assert session.state.xp == 1_200 + 10 - 500
    assert telemetry.events[-1][0] == "player_revived"


def test_revive_from_wallet_needs_the_full_bill() -> None:
    session = ExcavationSession(state=SessionState(hp=0, balance=REVIVE_COST - 1))

    with pytest.raises(InsufficientFundsError):
        session.revive()
    assert session.state.hp == 0
    assert session.state.balance == REVIVE_COST - 1

    session.state.balance = 2_500
    assert session.revive() == 1_500
    assert session.state.hp == START_HP


def test_death_penalty_never_drives_xp_negative() -> None:
    session = ExcavationSession(state=SessionState(hp=0, balance=REVIVE_COST, xp=120))

    session.revive()

    assert session.state.xp == 0
    assert session.state.balance == 0


def test_level_advances_every_thousand_xp() -> None:
    assert SessionState().level == 1
    assert SessionState(xp=999).level == 1
    assert SessionState(xp=1_000).level == 2
    assert SessionState(xp=2_500).level == 3


def test_logging_telemetry_records_excavations(caplog: pytest.LogCaptureFixture) -> None:
    from c36_grid.telemetry import LoggingTelemetry

    session = ExcavationSession(telemetry=LoggingTelemetry())
    x, y = _find_cell(CellType.EMPTY)

    with caplog.at_level(logging.INFO, logger="c36_grid.telemetry"):
        session.excavate(x, y)

    record = next(record for record in caplog.records if record.getMessage() == "cell_excavated")
    assert record.telemetry["type"] == "EMPTY"
