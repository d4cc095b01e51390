import logging

from flask import Flask, render_template, url_for
from config import Config

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'

def configure_logging(level):
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)

def create_app(overrides=None):
    app = Flask(__name__,
                template_folder='../frontend/templates',
                static_folder='../frontend/static')

    # Load configuration
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    configure_logging(app.config.get('LOG_LEVEL', 'INFO'))
    if not app.config.get('GEMINI_API_KEY'):
        logger.warning("GEMINI_API_KEY is not set; every lookup will come back empty")

    from backend import components
    components.init_app(app)

    # Register routes
    from api.routes import api_bp
    app.register_blueprint(api_bp)

    @app.errorhandler(413)
    def upload_too_large(_error):
        return render_template(
            'error.html',
            message='图片太大，请上传更小的照片。',
            back_url=url_for('api.index'),
        ), 413

    return app
