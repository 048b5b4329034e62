from numbers import Real

from arena.models import Projectile, ProjectileList, WorldConfig


def _off_world(projectile: Projectile, config: WorldConfig) -> bool:
    x = projectile.payload.get('X_pos')
    y = projectile.payload.get('Y_pos')
    if isinstance(x, Real) and not isinstance(x, bool):
        if not config.min_x <= x <= config.max_x:
            return True
    if isinstance(y, Real) and not isinstance(y, bool):
        if not config.min_y <= y <= config.max_y:
            return True
    return False


def advance(projectile_list: ProjectileList, config: WorldConfig) -> int:
    """Age every projectile by one tick and drop the expired ones.

    A projectile expires once its age reaches the configured lifetime, or
    when its payload reports a position outside the world. Sets and returns
    ``remove_number``.
    """
    survivors = []
    for projectile in projectile_list.projectiles:
        projectile.age += 1
        if projectile.age >= config.projectile_lifetime or _off_world(projectile, config):
            continue
        survivors.append(projectile)
    removed = len(projectile_list.projectiles) - len(survivors)
    projectile_list.projectiles[:] = survivors
    projectile_list.remove_number = removed
    return removed
