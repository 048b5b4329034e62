import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _px(value: float) -> str:
    # 50.0 -> "50px" so the browser gets the same strings it always did
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value}px"


@dataclass(frozen=True)
class WorldConfig:
    """World bounds and movement constants, fixed for the process lifetime."""
    min_x: float
    max_x: float
    min_y: float
    max_y: float
    speed_multiplier: float
    player_width: float = 50.0
    projectile_lifetime: int = 100

    @classmethod
    def from_mapping(cls, config) -> 'WorldConfig':
        return cls(
            min_x=float(config.get('WORLD_MIN_X', 0)),
            max_x=float(config.get('WORLD_MAX_X', 1280)),
            min_y=float(config.get('WORLD_MIN_Y', 0)),
            max_y=float(config.get('WORLD_MAX_Y', 720)),
            speed_multiplier=float(config.get('SPEED_MULTIPLIER', 3)),
            player_width=float(config.get('PLAYER_WIDTH', 50)),
            projectile_lifetime=int(config.get('PROJECTILE_LIFETIME_TICKS', 100)),
        )

    def fits(self, width: float) -> bool:
        return width <= self.max_x - self.min_x and width <= self.max_y - self.min_y

    def to_dict(self):
        return {
            'dimensions': {
                'minX': self.min_x,
                'maxX': self.max_x,
                'minY': self.min_y,
                'maxY': self.max_y,
            },
            'speedMultiplier': self.speed_multiplier,
            'playerWidth': self.player_width,
        }


@dataclass
class Player:
    id: Optional[int] = None
    x: float = 0.0
    y: float = 0.0
    width: float = 50.0
    style: Dict[str, str] = field(default_factory=dict)
    # Client-supplied fields of registered players, echoed back untouched
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.refresh_style()

    def refresh_style(self) -> None:
        self.style = {
            'left': _px(self.x),
            'top': _px(self.y),
            'width': _px(self.width),
            'height': _px(self.width),
        }

    def to_dict(self):
        data = dict(self.extra)
        data.update({
            'id': self.id,
            'X_pos': self.x,
            'Y_pos': self.y,
            'width': self.width,
            'style': dict(self.style),
        })
        return data


@dataclass
class Projectile:
    payload: Dict[str, Any]
    age: int = 0

    def to_dict(self):
        data = dict(self.payload)
        data['age'] = self.age
        return data


@dataclass
class ProjectileList:
    projectiles: List[Projectile] = field(default_factory=list)
    remove_number: int = 0

    def to_dict(self):
        return {
            'projectiles': [p.to_dict() for p in self.projectiles],
            'removeNumber': self.remove_number,
        }


class WorldState:
    """Canonical players and projectiles of one running server.

    Every read-modify-write goes through ``lock``; Socket.IO handlers may run
    on several threads and the clamp in ``apply_intent`` is not atomic.
    """

    def __init__(self, config: WorldConfig):
        self.config = config
        self.players: List[Player] = []
        self.projectile_list = ProjectileList()
        self.lock = threading.RLock()

    def _clamp(self, player: Player) -> None:
        cfg = self.config
        player.x = min(max(player.x, cfg.min_x), cfg.max_x - player.width)
        player.y = min(max(player.y, cfg.min_y), cfg.max_y - player.width)

    def add_player(self, player: Optional[Player] = None) -> int:
        """Append a player and return its id (its index in ``players``).

        Without an argument a default player is spawned in the middle of the
        world. A supplied player is clamped into the playable rectangle; one
        wider than the world raises ValueError.
        """
        cfg = self.config
        with self.lock:
            if player is None:
                width = cfg.player_width
                player = Player(
                    x=(cfg.min_x + cfg.max_x - width) / 2,
                    y=(cfg.min_y + cfg.max_y - width) / 2,
                    width=width,
                )
            else:
                if not cfg.fits(player.width):
                    raise ValueError(f"player width {player.width} does not fit inside the world")
                self._clamp(player)
            player.id = len(self.players)
            player.refresh_style()
            self.players.append(player)
            return player.id

    def get_player(self, player_id) -> Optional[Player]:
        if isinstance(player_id, bool) or not isinstance(player_id, int):
            return None
        with self.lock:
            if 0 <= player_id < len(self.players):
                return self.players[player_id]
        return None

    def set_player_position(self, player_id: int, x: float, y: float) -> None:
        with self.lock:
            player = self.get_player(player_id)
            if player is None:
                raise KeyError(player_id)
            player.x = x
            player.y = y
            self._clamp(player)
            player.refresh_style()

    def append_projectile(self, payload: Dict[str, Any]) -> Projectile:
        projectile = Projectile(payload=payload)
        with self.lock:
            self.projectile_list.projectiles.append(projectile)
        return projectile

    def snapshot(self):
        with self.lock:
            return {
                'players': [p.to_dict() for p in self.players],
                'projectileList': self.projectile_list.to_dict(),
            }
