"""Entries recorded while a combat round runs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Set, Union

from spacesim.ship_internals import ArmorIndex, ComponentId, ShipInstanceId


@dataclass(frozen=True)
class NoTarget:
    id: ShipInstanceId


@dataclass(frozen=True)
class Recharging:
    id: ShipInstanceId
    weapon_id: ComponentId
    wait_time: float


@dataclass(frozen=True)
class Miss:
    id: ShipInstanceId
    target_id: ShipInstanceId
    weapon_id: ComponentId


@dataclass(frozen=True)
class Hit:
    id: ShipInstanceId
    target_id: ShipInstanceId
    damage: int
    weapon_id: ComponentId
    armor_index: ArmorIndex
    hull_damage: bool


@dataclass(frozen=True)
class ComponentDestroy:
    id: ShipInstanceId
    component_id: ComponentId


@dataclass(frozen=True)
class ShipDestroyed:
    id: ShipInstanceId


CombatLog = Union[NoTarget, Recharging, Miss, Hit, ComponentDestroy, ShipDestroyed]


def destroyed_component_ships(logs: Iterable[CombatLog]) -> Set[ShipInstanceId]:
    """Ids of every ship that lost a component according to ``logs``."""
    return {entry.id for entry in logs if isinstance(entry, ComponentDestroy)}