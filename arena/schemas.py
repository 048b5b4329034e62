"""Inbound Socket.IO payloads.

The browser sends player intents and projectiles as JSON text; anything that
does not decode to the expected shape raises ``MalformedPayload`` so the
handlers can drop the event instead of poking at half-parsed data.
"""
import json
import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, Dict, Optional

from arena.models import Player, WorldConfig


class MalformedPayload(ValueError):
    pass


@dataclass(frozen=True)
class MoveIntent:
    player_id: Optional[int]
    velocity_x: Optional[float] = None
    velocity_y: Optional[float] = None


def _reject_constant(name):
    raise MalformedPayload(f"non-finite number {name} is not allowed")


def _decode(raw, what: str) -> Dict[str, Any]:
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode('utf-8', errors='replace')
    if isinstance(raw, str):
        try:
            raw = json.loads(raw, parse_constant=_reject_constant)
        except MalformedPayload:
            raise
        except ValueError as exc:
            raise MalformedPayload(f"{what} is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise MalformedPayload(f"{what} must be an object, got {type(raw).__name__}")
    # Frames are strict JSON; 1e999 or a transport-decoded NaN must not get in
    try:
        json.dumps(raw, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise MalformedPayload(f"{what} is not strict JSON: {exc}") from exc
    return raw


def _number(data: Dict[str, Any], key: str, what: str) -> Optional[float]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, Real):
        raise MalformedPayload(f"{what}.{key} must be a number")
    if not math.isfinite(value):
        raise MalformedPayload(f"{what}.{key} must be finite")
    return float(value)


def parse_move(raw) -> MoveIntent:
    """``{"id": 3, "X_Vel": -1, "Y_Vel": 0}`` -> MoveIntent.

    A missing or null ``id`` is not an error; it yields an intent that
    targets nobody. Missing velocities leave that axis alone.
    """
    data = _decode(raw, 'player')
    player_id = data.get('id')
    if player_id is not None:
        if isinstance(player_id, float) and player_id.is_integer():
            player_id = int(player_id)
        if isinstance(player_id, bool) or not isinstance(player_id, int):
            raise MalformedPayload('player.id must be an integer')
    return MoveIntent(
        player_id=player_id,
        velocity_x=_number(data, 'X_Vel', 'player'),
        velocity_y=_number(data, 'Y_Vel', 'player'),
    )


def parse_projectile(raw) -> Dict[str, Any]:
    return _decode(raw, 'newProjectile')


def parse_registered_player(raw, config: WorldConfig) -> Player:
    """Build a Player from a client-prepared object.

    Known fields are typed; everything else rides along in ``extra``.
    Any client-supplied ``id`` or ``style`` is discarded since the server
    owns both. A player wider than the world has no legal position.
    """
    data = _decode(raw, 'player')
    x = _number(data, 'X_pos', 'player')
    y = _number(data, 'Y_pos', 'player')
    width = _number(data, 'width', 'player')
    if width is None:
        width = config.player_width
    if width < 0:
        raise MalformedPayload('player.width must not be negative')
    if not config.fits(width):
        raise MalformedPayload('player.width does not fit inside the world')
    extra = {k: v for k, v in data.items() if k not in ('id', 'X_pos', 'Y_pos', 'width', 'style')}
    return Player(
        x=x if x is not None else 0.0,
        y=y if y is not None else 0.0,
        width=width,
        extra=extra,
    )
