"""Player-side bookkeeping around the generator: visited cells, HP, wallet."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from .cells import XP_VALUES, food_heal_amount, get_cell_type, hostile_damage, xp_for_cell
from .factory import generate_artifact, generate_shop_artifact
from .models import Artifact, CellType, GridCoordinate, ItemEffect
from .shop import find_entry
from .telemetry import NullTelemetry, Telemetry

START_HP = 50
MAX_HP = 100
REVIVE_COST = 1_000

_PURCHASE_XP = {
    ItemEffect.RANGE_BOOST: XP_VALUES["buy_detector"],
    ItemEffect.SONAR_BOOST: XP_VALUES["buy_sonar"],
}


class InsufficientFundsError(RuntimeError):
    """Raised when a purchase or medical bill costs more than the current balance."""


@dataclass(slots=True)
class SessionState:
    hp: float = START_HP
    balance: int = 0
    xp: int = 0
    inventory: list[Artifact] = field(default_factory=list)
    visited: dict[tuple[int, int], CellType] = field(default_factory=dict)

    @property
    def level(self) -> int:
        return self.xp // XP_VALUES["level_threshold"] + 1


@dataclass(slots=True)
class ExcavationResult:
    cell: GridCoordinate
    cell_type: CellType
    already_visited: bool = False
    artifact: Artifact | None = None
    healed: float = 0.0
    xp_gained: int = 0


class ExcavationSession:
    """Applies excavations to a player state without touching generation itself."""

    def __init__(self, *, telemetry: Telemetry | None = None, state: SessionState | None = None) -> None:
        self._telemetry = telemetry or NullTelemetry()
        self._state = state or SessionState()

    @property
    def state(self) -> SessionState:
        return self._state

    def is_visited(self, cell_x: int, cell_y: int) -> bool:
        return (cell_x, cell_y) in self._state.visited

    def enter_cell(self, cell_x: int, cell_y: int) -> CellType:
        """Classify a cell the player walked into; hostile and shop cells are marked at once."""
        cell_type = get_cell_type(cell_x, cell_y)
        key = (cell_x, cell_y)
        if cell_type in (CellType.HOSTILE, CellType.SHOP) and key not in self._state.visited:
            self._state.visited[key] = cell_type
            self._telemetry.emit("cell_marked", {"x": cell_x, "y": cell_y, "type": cell_type.value})
        return cell_type

    def excavate(self, cell_x: int, cell_y: int, *, now: datetime | None = None) -> ExcavationResult:
        cell = GridCoordinate(cell_x, cell_y)
        cell_type = get_cell_type(cell_x, cell_y)
        if self._state.hp <= 0 or self.is_visited(cell_x, cell_y):
            return ExcavationResult(cell=cell, cell_type=cell_type, already_visited=self.is_visited(cell_x, cell_y))

        if cell_type in (CellType.HOSTILE, CellType.SHOP):
            return ExcavationResult(cell=cell, cell_type=cell_type)

        result = ExcavationResult(cell=cell, cell_type=cell_type, xp_gained=xp_for_cell(cell_type))
        if cell_type == CellType.FOOD:
            before = self._state.hp
            self._state.hp = min(MAX_HP, before + food_heal_amount(cell_x, cell_y))
            result.healed = self._state.hp - before
        elif cell_type == CellType.COIN:
            result.artifact = generate_artifact(cell_x, cell_y, now=now)
            self._state.inventory.insert(0, result.artifact)

        self._state.xp += result.xp_gained
        self._state.visited[(cell_x, cell_y)] = cell_type
        self._telemetry.emit(
            "cell_excavated",
            {
                "x": cell_x,
                "y": cell_y,
                "type": cell_type.value,
                "artifact_id": result.artifact.id if result.artifact else None,
                "xp": result.xp_gained,
            },
        )
        return result

    def apply_hostile_tick(self, cell_x: int, cell_y: int) -> float:
        """Apply one damage tick if the cell is hostile; returns the remaining HP."""
        if get_cell_type(cell_x, cell_y) == CellType.HOSTILE:
            damage = hostile_damage(cell_x, cell_y)
            self._state.hp = max(0, self._state.hp - damage)
            self._telemetry.emit("hostile_damage", {"x": cell_x, "y": cell_y, "damage": damage, "hp": self._state.hp})
        return self._state.hp

    def sell(self, artifacts: Iterable[Artifact]) -> int:
        sold_ids = {artifact.id for artifact in artifacts}
        sold = [artifact for artifact in self._state.inventory if artifact.id in sold_ids]
        total = sum(artifact.monetary_value for artifact in sold)
        self._state.inventory = [artifact for artifact in self._state.inventory if artifact.id not in sold_ids]
        self._state.balance += total
        self._telemetry.emit("artifacts_sold", {"count": len(sold), "total": total})
        return total

    def buy(self, sku: str, *, cell: GridCoordinate | None = None, now: datetime | None = None) -> Artifact:
        entry = find_entry(sku)
        if self._state.balance < entry.cost:
            raise InsufficientFundsError(
                f"{entry.name} costs ${entry.cost:,} but balance is ${self._state.balance:,}"
            )
        artifact = generate_shop_artifact(entry, found_at=cell, now=now)
        self._state.balance -= entry.cost
        self._state.xp += _PURCHASE_XP.get(entry.effect_type, 0)
        self._state.inventory.insert(0, artifact)
        self._telemetry.emit("item_purchased", {"sku": sku, "cost": entry.cost, "artifact_id": artifact.id})
        return artifact

    def revive(self, items_to_sell: Iterable[Artifact] = ()) -> int:
        """Pay the medical bill and restart at ``START_HP``; returns the balance left.

        Liquidating items settles the bill even when the sale falls short, which
        leaves the balance negative. Paying from the wallet alone needs the full
        ``REVIVE_COST`` and raises ``InsufficientFundsError`` otherwise.
        """
        items = list(items_to_sell)
        if items:
            self.sell(items)
        elif self._state.balance < REVIVE_COST:
            raise InsufficientFundsError(
                f"Medical bill is ${REVIVE_COST:,} but balance is ${self._state.balance:,}"
            )
        self._state.balance -= REVIVE_COST
        self._state.hp = START_HP
        self._state.xp = max(0, self._state.xp - XP_VALUES["death_penalty"])
        self._telemetry.emit(
            "player_revived",
            {"cost": REVIVE_COST, "balance": self._state.balance, "items_sold": len(items), "xp": self._state.xp},
        )
        return self._state.balance

    def clear_visited(self) -> None:
        self._state.visited.clear()
