import json
import logging
import threading
import time
from typing import Callable, Optional

from arena.models import WorldConfig, WorldState
from .connections import ConnectionRegistry
from .projectiles import advance


FRAME_EVENT = 'frame'


class BroadcastScheduler:
    """Publishes the authoritative world to every connection on a fixed cadence.

    Each tick advances projectiles, snapshots the world under its lock,
    sends the JSON text as ``frame`` to each connected sid and finally resets
    ``remove_number``. One failing sid does not stop the others.
    """

    def __init__(self, socketio, world: WorldState, config: WorldConfig,
                 connections: ConnectionRegistry, interval: float = 0.02,
                 namespace: str = '/', logger: Optional[logging.Logger] = None,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Optional[Callable[[float], None]] = None,
                 log_every: int = 0):
        self.socketio = socketio
        self.world = world
        self.config = config
        self.connections = connections
        self.interval = interval
        self.namespace = namespace
        self.logger = logger or logging.getLogger(__name__)
        self.clock = clock
        self.sleep = sleep or socketio.sleep
        self.log_every = log_every
        self.ticks = 0
        self._stopped = False
        self._started = False
        self._start_lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._started and not self._stopped

    def publish(self, payload: str) -> int:
        sent = 0
        for sid in self.connections.sids():
            try:
                self.socketio.emit(FRAME_EVENT, payload, to=sid, namespace=self.namespace)
                sent += 1
            except Exception as exc:
                self.logger.warning(f"[frame-failed] sid={sid} error={exc!r}")
        return sent

    def tick(self) -> str:
        with self.world.lock:
            advance(self.world.projectile_list, self.config)
            snapshot = self.world.snapshot()
        payload = json.dumps(snapshot)
        if len(self.connections):
            self.publish(payload)
        with self.world.lock:
            self.world.projectile_list.remove_number = 0
        self.ticks += 1
        if self.log_every and self.ticks % self.log_every == 0:
            self.logger.info(
                f"[tick] n={self.ticks} players={len(snapshot['players'])} "
                f"projectiles={len(snapshot['projectileList']['projectiles'])} "
                f"connections={len(self.connections)}"
            )
        return payload

    def run(self, max_ticks: Optional[int] = None) -> int:
        """Tick every ``interval`` seconds until stopped (or ``max_ticks``)."""
        fired = 0
        deadline = self.clock() + self.interval
        while not self._stopped and (max_ticks is None or fired < max_ticks):
            delay = deadline - self.clock()
            if delay > 0:
                self.sleep(delay)
            if self._stopped:
                break
            try:
                self.tick()
            except Exception:
                self.logger.exception(f"[tick-failed] n={self.ticks}")
            fired += 1
            deadline += self.interval
            # Too far behind: start a fresh cadence instead of firing a burst
            now = self.clock()
            if now - deadline > self.interval:
                deadline = now + self.interval
        return fired

    def start(self) -> bool:
        with self._start_lock:
            if self._started:
                return False
            self._started = True
            self._stopped = False
        self.logger.info(f"[broadcast-start] interval={self.interval * 1000:.0f}ms namespace={self.namespace}")
        self.socketio.start_background_task(self.run)
        return True

    def stop(self) -> None:
        self._stopped = True
        self.logger.info(f"[broadcast-stop] after {self.ticks} ticks")
