import errno
import os
import sys

import click

from arena import create_app, socketio, stop


@click.command()
@click.option('--host', default=lambda: os.environ.get('HOST', '0.0.0.0'), show_default='0.0.0.0')
@click.option('--port', type=int, default=lambda: int(os.environ.get('PORT', '3000')), show_default='3000')
@click.option('--debug', is_flag=True, help='Enable Flask debug mode.')
def main(host, port, debug):
    """Serve the arena channel endpoint and start the frame broadcast."""
    app = create_app()
    port_string = f'Port {port}'
    try:
        app.logger.info(f"Listening on port {port}")
        # Use SocketIO server to enable websockets
        socketio.run(app, host=host, port=port, debug=debug, use_reloader=False,
                     allow_unsafe_werkzeug=True)
    except OSError as exc:
        # Friendly messages for the two common listen errors
        if exc.errno == errno.EACCES:
            click.echo(f'{port_string} requires elevated privileges')
            sys.exit(1)
        if exc.errno == errno.EADDRINUSE:
            click.echo(f'{port_string} is already in use')
            sys.exit(1)
        raise
    finally:
        stop(app)


if __name__ == '__main__':
    main()
