from typing import Any, Dict, Optional

from arena.models import WorldConfig, WorldState


def _step_axis(position: float, velocity: float, bound_min: float,
               bound_max: float, width: float, multiplier: float) -> float:
    max_barrier = bound_max - width
    if bound_min <= position <= max_barrier:
        # Positive velocity moves toward the origin. The step is not clamped,
        # so a player may sit past the edge until the next intent pulls it back.
        return position - velocity * multiplier
    if position < bound_min:
        return bound_min
    if position > max_barrier:
        return max_barrier
    # NaN compares false everywhere; leave it as is
    return position


def apply_intent(world: WorldState, config: WorldConfig, player_id: Optional[int],
                 velocity_x: Optional[float] = None, velocity_y: Optional[float] = None,
                 new_projectile: Optional[Dict[str, Any]] = None) -> bool:
    """Apply one client intent to the world.

    - Appends ``new_projectile`` first, whether or not ``player_id`` is valid
    - No-ops (returns False) when there are no players or the id is unknown
    - Moves each axis whose velocity was supplied; Y then X
    """
    with world.lock:
        if new_projectile is not None:
            world.append_projectile(new_projectile)

        if not world.players or player_id is None:
            return False
        player = world.get_player(player_id)
        if player is None:
            return False

        if velocity_y is not None:
            player.y = _step_axis(player.y, velocity_y, config.min_y, config.max_y,
                                  player.width, config.speed_multiplier)
        if velocity_x is not None:
            player.x = _step_axis(player.x, velocity_x, config.min_x, config.max_x,
                                  player.width, config.speed_multiplier)
        player.refresh_style()
        return True
