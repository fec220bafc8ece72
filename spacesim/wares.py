"""Wares, cargo holds and cargo transfers between holds."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, Iterator, List, Mapping, Optional, Sequence

WareId = Hashable
Volume = int


class CargoError(Exception):
    """Base error for cargo operations."""


class NotAllowedError(CargoError):
    """The ware is not in the cargo whitelist."""


class CargoFullError(CargoError):
    """The cargo has no free volume for the ware."""


class NotEnoughSpaceError(CargoError):
    """The requested amount does not fit, or is not present to remove."""


@dataclass(frozen=True)
class WareAmount:
    ware_id: WareId
    amount: Volume


def ware_ids(amounts: Iterable[WareAmount]) -> List[WareId]:
    """Return the ware ids of a sequence of ware amounts, in order."""
    return [wa.ware_id for wa in amounts]


class WaresByCode:
    """Lookup of ware ids by their code."""

    def __init__(self, mapping: Mapping[str, WareId]) -> None:
        self._map: Dict[str, WareId] = dict(mapping)

    def get(self, code: str) -> Optional[WareId]:
        return self._map.get(code)


class Cargo:
    """A cargo hold with a maximum volume.

    When a whitelist is set, the volume is split evenly between the listed
    wares and any other ware is refused.
    """

    def __init__(self, max_volume: Volume = 0) -> None:
        self._max_volume = max_volume
        self._current_volume: Volume = 0
        self._wares: Dict[WareId, Volume] = {}
        self._whitelist: List[WareId] = []

    def __repr__(self) -> str:
        return (
            f"Cargo(max_volume={self._max_volume!r}, current_volume={self._current_volume!r}, "
            f"wares={self.wares!r}, whitelist={self._whitelist!r})"
        )

    @property
    def max_volume(self) -> Volume:
        return self._max_volume

    @property
    def current_volume(self) -> Volume:
        return self._current_volume

    @property
    def wares(self) -> List[WareAmount]:
        return [WareAmount(ware_id, amount) for ware_id, amount in self._wares.items()]

    @property
    def whitelist(self) -> List[WareId]:
        return list(self._whitelist)

    @whitelist.setter
    def whitelist(self, wares: Iterable[WareId]) -> None:
        self._whitelist = list(wares)

    def add(self, ware_id: WareId, amount: Volume) -> None:
        """Add ``amount`` of a ware, raising a CargoError if it does not fit."""
        if amount == 0:
            return
        if self.free_volume(ware_id) < amount:
            raise NotEnoughSpaceError(f"no space for {amount} of {ware_id!r}")
        self._wares[ware_id] = self._wares.get(ware_id, 0) + amount
        self._current_volume += amount

    def remove(self, ware_id: WareId, amount: Volume) -> None:
        """Remove ``amount`` of a ware, raising CargoError if not enough is held."""
        held = self._wares.get(ware_id)
        if held is None or held < amount:
            raise CargoError(f"can not remove {amount} of {ware_id!r}, holding {held or 0}")
        if held == amount:
            del self._wares[ware_id]
        else:
            self._wares[ware_id] = held - amount
        self._current_volume -= amount

    def add_all_or_none(self, wares: Sequence[WareAmount]) -> None:
        """Add every ware amount, or none of them if any does not fit."""
        for w in wares:
            if self.free_volume(w.ware_id) < w.amount:
                raise NotEnoughSpaceError(f"no space for {w.amount} of {w.ware_id!r}")
        for w in wares:
            self.add(w.ware_id, w.amount)

    def has_all(self, wares: Iterable[WareAmount]) -> bool:
        return all(self.get_amount(w.ware_id) >= w.amount for w in wares)

    def remove_all_or_none(self, wares: Sequence[WareAmount]) -> None:
        """Remove every ware amount, or none of them if any is missing."""
        for w in wares:
            if self.get_amount(w.ware_id) < w.amount:
                raise NotEnoughSpaceError(f"not enough {w.ware_id!r} to remove {w.amount}")
        for w in wares:
            self.remove(w.ware_id, w.amount)

    def add_to_max(self, ware_id: WareId, amount: Volume) -> Volume:
        """Add as much of ``amount`` as fits; return the amount added."""
        try:
            to_add = min(amount, self.free_volume(ware_id))
        except CargoError:
            to_add = 0
        try:
            self.add(ware_id, to_add)
        except CargoError:
            return 0
        return to_add

    def clear(self) -> None:
        """Empty the cargo, keeping its configuration."""
        self._current_volume = 0
        self._wares.clear()

    def free_volume(self, ware_id: WareId) -> Volume:
        """Free volume for a ware; raises NotAllowedError or CargoFullError."""
        if not self._whitelist:
            amount = self._max_volume - self._current_volume
        else:
            if ware_id not in self._whitelist:
                raise NotAllowedError(f"{ware_id!r} is not allowed")
            share = self._max_volume // len(self._whitelist)
            amount = share - self.get_amount(ware_id)
        if amount <= 0:
            raise CargoFullError(f"no free volume for {ware_id!r}")
        return amount

    def is_full(self) -> bool:
        return self._current_volume >= self._max_volume

    def is_empty(self) -> bool:
        return self._current_volume == 0

    def get_amount(self, ware_id: WareId) -> Volume:
        return self._wares.get(ware_id, 0)

    def ware_ids(self) -> Iterator[WareId]:
        return iter(list(self._wares))


@dataclass
class CargoTransfer:
    """Ware amounts planned to move between two cargos."""

    moved: List[WareAmount] = field(default_factory=list)

    def apply_from(self, cargo: Cargo) -> None:
        cargo.remove_all_or_none(self.moved)

    def apply_to(self, cargo: Cargo) -> None:
        cargo.add_all_or_none(self.moved)


def _transfer(
    from_cargo: Cargo, to_cargo: Cargo, wares: Optional[Sequence[WareId]]
) -> CargoTransfer:
    simulated = copy.deepcopy(to_cargo)
    transfer = CargoTransfer()
    for w in from_cargo.wares:
        if wares is not None and w.ware_id not in wares:
            continue
        try:
            available = simulated.free_volume(w.ware_id)
        except CargoError:
            available = 0
        to_move = min(w.amount, available)
        if to_move > 0:
            simulated.add(w.ware_id, to_move)
            transfer.moved.append(WareAmount(w.ware_id, to_move))
    return transfer


def transfer_all(from_cargo: Cargo, to_cargo: Cargo) -> CargoTransfer:
    """Plan moving as much cargo as fits from one hold to another."""
    return _transfer(from_cargo, to_cargo, None)


def transfer_only(from_cargo: Cargo, to_cargo: Cargo, wares: Sequence[WareId]) -> CargoTransfer:
    """Plan moving as much of the given wares as fits from one hold to another."""
    return _transfer(from_cargo, to_cargo, list(wares))


@dataclass(frozen=True)
class Station:
    """Marks an object as a station."""