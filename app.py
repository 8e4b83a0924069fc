"""
HTML Compare - Flask Application
Serves the HTML comparison API.
"""
from flask import Flask, g

from config_logging import get_config, get_logger, StructuredLogger, VERSION
from html_compare import hc_blueprint

logger = get_logger('app')


def create_app(config=None) -> Flask:
    """Build the Flask application with the comparison blueprint mounted."""
    config = config or get_config()

    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = config.max_content_length
    app.config['DEBUG'] = config.debug

    app.register_blueprint(hc_blueprint, url_prefix='/api/compare')

    @app.before_request
    def assign_correlation_id():
        g.correlation_id = StructuredLogger.new_correlation_id()

    @app.after_request
    def add_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        return response

    logger.debug(f"HtmlCompare {VERSION} app created", parser=config.html_parser)
    return app


if __name__ == '__main__':
    config = get_config()
    is_valid, errors = config.validate()
    if not is_valid:
        for error in errors:
            logger.error(f"Configuration error: {error}")
        raise SystemExit(1)
    create_app(config).run(host=config.host, port=config.port, debug=config.debug)
