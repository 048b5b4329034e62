from flask import current_app, request
from flask_socketio import emit
from arena import socketio, get_runtime
from arena.schemas import (
    MalformedPayload,
    parse_move,
    parse_projectile,
    parse_registered_player,
)
from arena.services.world.movement import apply_intent


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect(auth=None):
    runtime = get_runtime(current_app)
    runtime.connections.add(_get_sid())
    current_app.logger.info(f"[connect] sid={_get_sid()} connections={len(runtime.connections)}")


def handle_disconnect(reason=None):
    # Players stay in the world; only the frame target goes away
    runtime = get_runtime(current_app)
    runtime.connections.discard(_get_sid())
    current_app.logger.info(f"[disconnect] sid={_get_sid()} reason={reason}")


def handle_start(*_args):
    runtime = get_runtime(current_app)
    player_id = runtime.world.add_player()
    player = runtime.world.get_player(player_id)
    current_app.logger.info(f"[start] sid={_get_sid()} player={player_id}")
    # A tuple is sent as separate event arguments
    emit('linkStart', (player.to_dict(), runtime.config.to_dict()))


def handle_register(player=None):
    runtime = get_runtime(current_app)
    try:
        new_player = parse_registered_player(player, runtime.config)
    except MalformedPayload as exc:
        current_app.logger.warning(f"[register-rejected] sid={_get_sid()} error={exc}")
        return
    player_id = runtime.world.add_player(new_player)
    current_app.logger.info(f"[register] sid={_get_sid()} player={player_id}")
    emit('id', player_id)


def handle_move(player=None, new_projectile=None):
    """Apply one movement intent. Fire-and-forget: nothing is sent back."""
    runtime = get_runtime(current_app)
    try:
        projectile = parse_projectile(new_projectile) if new_projectile is not None else None
    except MalformedPayload as exc:
        current_app.logger.warning(f"[move-rejected] sid={_get_sid()} error={exc}")
        return
    if projectile is not None:
        runtime.world.append_projectile(projectile)

    try:
        intent = parse_move(player)
    except MalformedPayload as exc:
        current_app.logger.warning(f"[move-rejected] sid={_get_sid()} error={exc}")
        return
    moved = apply_intent(
        runtime.world,
        runtime.config,
        intent.player_id,
        velocity_x=intent.velocity_x,
        velocity_y=intent.velocity_y,
    )
    if not moved:
        current_app.logger.debug(f"[move-ignored] sid={_get_sid()} player={intent.player_id}")


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``.

    ``onStart`` and ``newPlayer`` are the event names older browser bundles
    emit; they map to ``start`` and ``register``.
    """
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('start', handle_start, namespace=namespace)
    socketio.on_event('onStart', handle_start, namespace=namespace)
    socketio.on_event('register', handle_register, namespace=namespace)
    socketio.on_event('newPlayer', handle_register, namespace=namespace)
    socketio.on_event('move', handle_move, namespace=namespace)
