import os
import sys
import pytest

# Ensure the project root (containing the `arena` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from arena import create_app, socketio, get_runtime
from arena.models import WorldConfig, WorldState


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = ['http://localhost:3000']
    SOCKETIO_NAMESPACE = '/'
    WORLD_MIN_X = 0
    WORLD_MAX_X = 100
    WORLD_MIN_Y = 0
    WORLD_MAX_Y = 100
    SPEED_MULTIPLIER = 1
    PLAYER_WIDTH = 10
    PROJECTILE_LIFETIME_TICKS = 5
    BROADCAST_INTERVAL_MS = 20
    TICK_LOG_EVERY = 0


@pytest.fixture()
def world_config():
    return WorldConfig(min_x=0, max_x=100, min_y=0, max_y=100,
                       speed_multiplier=1, player_width=10, projectile_lifetime=5)


@pytest.fixture()
def world(world_config):
    return WorldState(world_config)


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def runtime(flask_app):
    return get_runtime(flask_app)


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/')
    except Exception:
        pass
