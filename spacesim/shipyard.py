"""Shipyard production state: what a shipyard builds and how far along it is."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import ClassVar, Hashable, Optional

from spacesim.utils import DeltaTime, WorkUnit

log = logging.getLogger(__name__)

PrefabId = Hashable


class ProductionKind(enum.Enum):
    """How a shipyard picks what to build next."""

    NONE = "none"
    NEXT = "next"
    RANDOM = "random"
    RANDOM_SELECTED = "random_selected"


@dataclass(frozen=True)
class ProductionOrder:
    """What a shipyard is configured to produce.

    ``NONE`` builds nothing, ``NEXT`` builds the given prefab once, ``RANDOM``
    picks a prefab at the next chance and ``RANDOM_SELECTED`` holds the pick.
    """

    kind: ProductionKind = ProductionKind.NONE
    prefab_id: Optional[PrefabId] = None

    def __post_init__(self) -> None:
        needs_prefab = self.kind in (ProductionKind.NEXT, ProductionKind.RANDOM_SELECTED)
        if needs_prefab and self.prefab_id is None:
            raise ValueError(f"production order {self.kind.value} needs a prefab id")
        if not needs_prefab and self.prefab_id is not None:
            raise ValueError(f"production order {self.kind.value} takes no prefab id")

    @classmethod
    def none(cls) -> ProductionOrder:
        return cls(ProductionKind.NONE)

    @classmethod
    def next(cls, prefab_id: PrefabId) -> ProductionOrder:
        return cls(ProductionKind.NEXT, prefab_id)

    @classmethod
    def random(cls) -> ProductionOrder:
        return cls(ProductionKind.RANDOM)

    @classmethod
    def random_selected(cls, prefab_id: PrefabId) -> ProductionOrder:
        return cls(ProductionKind.RANDOM_SELECTED, prefab_id)

    def is_none(self) -> bool:
        return self.kind is ProductionKind.NONE


@dataclass
class ShipyardProduction:
    """Production in progress; the prefab is done once ``pending_work`` reaches zero."""

    pending_work: WorkUnit
    total_work: WorkUnit
    prefab_id: PrefabId


@dataclass(frozen=True)
class ProductionResult:
    """Outcome of advancing a shipyard's production by one step."""

    NOT_PRODUCING: ClassVar[str] = "not_producing"
    PRODUCING: ClassVar[str] = "producing"
    COMPLETED: ClassVar[str] = "completed"

    state: str
    prefab_id: Optional[PrefabId] = None

    @property
    def is_completed(self) -> bool:
        return self.state == self.COMPLETED


class Shipyard:
    """A station part that builds ships from prefabs."""

    def __init__(self, production: WorkUnit = 1.0) -> None:
        self.production: WorkUnit = production
        self.production_order: ProductionOrder = ProductionOrder.none()
        self.current_production: Optional[ShipyardProduction] = None
        self.trade_orders_dirty = False

    def __repr__(self) -> str:
        return (
            f"Shipyard(production={self.production!r}, "
            f"production_order={self.production_order!r}, "
            f"current_production={self.current_production!r})"
        )

    def set_production_order(self, production_order: ProductionOrder) -> None:
        """Change what to build next and mark the trade orders for refresh."""
        self.production_order = production_order
        self.trade_orders_dirty = True

    def is_producing(self) -> bool:
        return self.current_production is not None

    def producing(self) -> Optional[PrefabId]:
        """The prefab being built, if any."""
        if self.current_production is None:
            return None
        return self.current_production.prefab_id

    def current_order_percentile(self) -> float:
        """Share of the current production already done, 0 when idle."""
        current = self.current_production
        if current is None:
            return 0.0
        if current.total_work == 0:
            return 1.0
        return 1.0 - current.pending_work / current.total_work

    def start_production(self, prefab_id: PrefabId, work: WorkUnit) -> None:
        """Begin building ``prefab_id``, needing ``work`` units to complete."""
        if self.current_production is not None:
            raise RuntimeError(
                f"shipyard already producing {self.current_production.prefab_id!r}"
            )
        self.current_production = ShipyardProduction(
            pending_work=work, total_work=work, prefab_id=prefab_id
        )
        log.debug(
            "starting production of prefab %r, expected to complete in %r",
            prefab_id,
            work / self.production if self.production else float("inf"),
        )

    def update_production(self, delta_time: DeltaTime) -> ProductionResult:
        """Advance production by ``delta_time``; completing clears the current production."""
        current = self.current_production
        if current is None:
            return ProductionResult(ProductionResult.NOT_PRODUCING)
        current.pending_work -= self.production * delta_time.value
        if current.pending_work <= 0.0:
            self.current_production = None
            return ProductionResult(ProductionResult.COMPLETED, current.prefab_id)
        return ProductionResult(ProductionResult.PRODUCING)