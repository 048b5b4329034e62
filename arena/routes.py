from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import HTTPException
from arena import get_runtime

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Arena frame server is running.'})

@main.route('/api/config')
def world_config():
    return jsonify(get_runtime(current_app).config.to_dict())

@main.route('/api/world')
def world_snapshot():
    return jsonify(get_runtime(current_app).world.snapshot())

@main.app_errorhandler(404)
def not_found(_error):
    return jsonify({'error': 'not found', 'path': request.path, 'method': request.method}), 404

@main.app_errorhandler(Exception)
def internal_error(error):
    if isinstance(error, HTTPException):
        return jsonify({'error': error.description}), error.code
    current_app.logger.exception(f"[http-error] {request.method} {request.path}")
    return jsonify({'error': str(error)}), 500
