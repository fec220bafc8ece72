"""Ship components, specifications, stats and per-ship combat state."""

from __future__ import annotations

import dataclasses
import enum
import logging
import math
from dataclasses import dataclass, field
from typing import ClassVar, Dict, List, Mapping, Optional, Set, Tuple

from spacesim.utils import Speed

log = logging.getLogger(__name__)

ComponentId = int
ShipInstanceId = int
TeamId = int
ArmorIndex = int


@dataclass(frozen=True)
class Armor:
    width: int
    height: int

    def weight(self) -> float:
        return self.width * self.height * 0.5


class WeaponDamageType(enum.Enum):
    EXPLOSIVE = "explosive"
    PENETRATION = "penetration"


@dataclass(frozen=True)
class Weapon:
    damage: int
    reload: float
    rounds: int
    damage_type: WeaponDamageType


@dataclass
class Component:
    id: ComponentId
    weapon: Optional[Weapon] = None
    thrust: float = 0.0
    weight: int = 0
    crew: float = 0.0
    power: float = 0.0
    engineer: float = 0.0
    fuel_consume: float = 0.0
    size: int = 0
    fuel_hold: float = 0.0
    bridge_power: float = 0.0


class Components:
    """Registry of known components by id."""

    def __init__(self) -> None:
        self._index: Dict[ComponentId, Component] = {}

    def add(self, component: Component) -> None:
        if component.id in self._index:
            raise ValueError(f"component {component.id} already registered")
        log.info("components - %r added %r", component.id, component)
        self._index[component.id] = component

    def get(self, component_id: ComponentId) -> Component:
        try:
            return self._index[component_id]
        except KeyError:
            raise KeyError(f"unknown component {component_id}") from None


@dataclass
class ShipStats:
    bridge: bool
    total_weight: int
    total_width: int
    power_balance: float
    crew_balance: float
    engineer_balance: float
    thrust: float
    speed: Speed


@dataclass(frozen=True)
class ShipValidationIssue:
    """One reason a ship design is not usable."""

    NO_BRIDGE: ClassVar[str] = "no_bridge"
    NEED_CREW: ClassVar[str] = "need_crew"
    NEED_POWER: ClassVar[str] = "need_power"
    NEED_FUEL: ClassVar[str] = "need_fuel"
    NEED_ENGINEER: ClassVar[str] = "need_engineer"

    kind: str
    amount: float = 0.0


class ShipValidationError(Exception):
    """Raised when a ship design fails validation; holds every issue found."""

    def __init__(self, issues: List[ShipValidationIssue]) -> None:
        super().__init__(", ".join(i.kind for i in issues))
        self.issues = issues


@dataclass
class ComponentTable:
    """Component widths in order, used to pick a component hit through the hull."""

    total: int
    sequence: List[Tuple[ComponentId, int]]

    @classmethod
    def build(cls, components: Components, amounts: Mapping[ComponentId, int]) -> ComponentTable:
        sequence = []
        for component_id, amount in amounts.items():
            component = components.get(component_id)
            sequence.append((component.id, component.size * amount))
        return cls(total=sum(width for _, width in sequence), sequence=sequence)


def compute_ship_stats(
    components: Components,
    ship_components: Mapping[ComponentId, int],
    armor: Armor,
    destroyed_components: Mapping[ComponentId, int],
) -> ShipStats:
    """Compute ship stats, ignoring the working share of destroyed components."""
    has_bridge = False
    power = crew = engineer = thrust = 0.0
    weight = 0
    width = 0

    for component_id, amount in ship_components.items():
        component = components.get(component_id)
        destroyed = destroyed_components.get(component_id, 0)

        weight += component.weight * amount
        width += component.size * amount

        if destroyed >= amount:
            continue

        active = float(amount - destroyed)
        if component.bridge_power > 0.0:
            has_bridge = True
        power += component.power * active
        crew += component.crew * active
        engineer += component.engineer * active
        thrust += component.thrust * active

    weight += armor.width * armor.height * 10

    if weight:
        speed = 10.0 * thrust / weight
    elif thrust == 0.0:
        speed = math.nan
    else:
        speed = math.copysign(math.inf, thrust)

    return ShipStats(
        bridge=has_bridge,
        total_weight=weight,
        total_width=width,
        power_balance=power,
        crew_balance=crew,
        engineer_balance=engineer,
        thrust=thrust,
        speed=Speed(speed),
    )


class ShipSpec:
    """A ship design: its components, armor and base stats."""

    def __init__(
        self,
        components: Components,
        ship_components: Mapping[ComponentId, int],
        armor_height: int,
    ) -> None:
        self.components: Dict[ComponentId, int] = dict(ship_components)
        self.component_table = ComponentTable.build(components, self.components)
        self.armor = Armor(self.component_table.total, armor_height)
        self.stats = compute_ship_stats(components, self.components, self.armor, {})

    def amount(self, component_id: ComponentId) -> Optional[int]:
        return self.components.get(component_id)

    def find_weapons(self, components: Components) -> List[ComponentId]:
        return [
            component_id
            for component_id in self.components
            if components.get(component_id).weapon is not None
        ]

    def validate(self) -> None:
        """Raise ShipValidationError listing every missing requirement."""
        stats = self.stats
        issues = []
        if not stats.bridge:
            issues.append(ShipValidationIssue(ShipValidationIssue.NO_BRIDGE))
        if stats.power_balance < 0.0:
            issues.append(
                ShipValidationIssue(ShipValidationIssue.NEED_POWER, -stats.power_balance)
            )
        if stats.crew_balance < 0.0:
            issues.append(ShipValidationIssue(ShipValidationIssue.NEED_CREW, -stats.crew_balance))
        if stats.engineer_balance < 0.0:
            issues.append(
                ShipValidationIssue(ShipValidationIssue.NEED_ENGINEER, -stats.engineer_balance)
            )
        if issues:
            raise ShipValidationError(issues)

    def map_components(self, components: Components) -> List[Tuple[Component, int]]:
        return [
            (components.get(component_id), amount)
            for component_id, amount in self.components.items()
        ]

    def hull_hp(self, components: Components) -> int:
        return sum(component.size * amount for component, amount in self.map_components(components))


@dataclass
class WeaponState:
    recharge: float = 0.0


class ShipInstance:
    """A ship in play, with the damage it has taken and its weapons' state."""

    def __init__(
        self,
        components: Components,
        ship_id: ShipInstanceId,
        spec: ShipSpec,
        team_id: TeamId,
    ) -> None:
        self.id = ship_id
        self.spec = spec
        self.team_id = team_id
        self.current_stats: ShipStats = dataclasses.replace(spec.stats)
        self.armor_damage: Set[ArmorIndex] = set()
        self.component_damage: Dict[ComponentId, int] = {}
        self.component_destroyed: Dict[ComponentId, int] = {}
        self.weapons_state: Dict[ComponentId, List[WeaponState]] = {
            weapon_id: [WeaponState() for _ in range(spec.amount(weapon_id) or 0)]
            for weapon_id in spec.find_weapons(components)
        }
        self.wreck = False

    def __repr__(self) -> str:
        return f"ShipInstance(id={self.id!r}, team_id={self.team_id!r}, wreck={self.wreck!r})"

    def weapon_state(self, component_id: ComponentId, index: int) -> WeaponState:
        return self.weapons_state[component_id][index]

    def update_stats(self, components: Components) -> None:
        self.current_stats = compute_ship_stats(
            components, self.spec.components, self.spec.armor, self.component_destroyed
        )

    def total_hull_damage(self) -> int:
        return sum(self.component_damage.values())


_ = field  # keep dataclasses.field available for subclasses that need defaults