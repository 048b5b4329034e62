import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Browser origins allowed to open the channel (comma separated)
    CORS_ORIGINS = [o.strip() for o in os.environ.get(
        'CORS_ORIGINS',
        'http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173',
    ).split(',') if o.strip()]
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Playable rectangle (world units == client pixels)
    WORLD_MIN_X = float(os.environ.get('WORLD_MIN_X', '0'))
    WORLD_MAX_X = float(os.environ.get('WORLD_MAX_X', '1280'))
    WORLD_MIN_Y = float(os.environ.get('WORLD_MIN_Y', '0'))
    WORLD_MAX_Y = float(os.environ.get('WORLD_MAX_Y', '720'))
    SPEED_MULTIPLIER = float(os.environ.get('SPEED_MULTIPLIER', '3'))
    PLAYER_WIDTH = float(os.environ.get('PLAYER_WIDTH', '50'))
    # Projectiles expire after this many broadcast ticks
    PROJECTILE_LIFETIME_TICKS = int(os.environ.get('PROJECTILE_LIFETIME_TICKS', '100'))
    # Broadcast cadence (ms)
    BROADCAST_INTERVAL_MS = int(os.environ.get('BROADCAST_INTERVAL_MS', '20'))
    # Optional: log a heartbeat every N ticks. 0 disables.
    TICK_LOG_EVERY = int(os.environ.get('TICK_LOG_EVERY', '0'))
