from dataclasses import dataclass
from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config
from arena.models import WorldConfig, WorldState
from arena.services.world.broadcast import BroadcastScheduler
from arena.services.world.connections import ConnectionRegistry

socketio = SocketIO(async_mode=None)


@dataclass
class ArenaRuntime:
    """Per-process game objects, stored in ``app.extensions['arena']``."""
    world: WorldState
    config: WorldConfig
    connections: ConnectionRegistry
    scheduler: BroadcastScheduler
    namespace: str = '/'


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []
    CORS(flask_app, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    world_config = WorldConfig.from_mapping(flask_app.config)
    world = WorldState(world_config)
    connections = ConnectionRegistry()
    scheduler = BroadcastScheduler(
        socketio,
        world,
        world_config,
        connections,
        interval=int(flask_app.config.get('BROADCAST_INTERVAL_MS', 20)) / 1000.0,
        namespace=namespace,
        logger=flask_app.logger,
        log_every=int(flask_app.config.get('TICK_LOG_EVERY', 0)),
    )
    flask_app.extensions['arena'] = ArenaRuntime(
        world=world,
        config=world_config,
        connections=connections,
        scheduler=scheduler,
        namespace=namespace,
    )

    from arena.routes import main
    flask_app.register_blueprint(main)

    from arena.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    # The frame loop lives as long as the process; tests drive ticks by hand
    if not flask_app.config.get('TESTING') or flask_app.config.get('ENABLE_BROADCAST_IN_TESTS'):
        scheduler.start()

    return flask_app


def get_runtime(flask_app) -> ArenaRuntime:
    return flask_app.extensions['arena']


def stop(flask_app, done=None):
    """Stop broadcasting frames, then call ``done`` (if given)."""
    runtime = flask_app.extensions.get('arena')
    if runtime is not None:
        runtime.scheduler.stop()
    if done is not None:
        done()
