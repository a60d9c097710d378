from __future__ import annotations


class GameError(ValueError):
    """A rejected game operation. The game state is left untouched."""


class PlacementInvalid(GameError):
    pass


class InvalidCoordinate(GameError):
    pass


class WrongPhase(GameError):
    pass


class FleetPlacementError(RuntimeError):
    """Random placement could not fit a ship within the attempt bound."""


__all__ = [
    "GameError",
    "PlacementInvalid",
    "InvalidCoordinate",
    "WrongPhase",
    "FleetPlacementError",
]
