import os
import logging
import sqlite3
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase
from flask_jwt_extended import JWTManager
from flask_marshmallow import Marshmallow
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix
from flask_restx import Api

# Configure logging
logging.basicConfig(
    level=os.environ.get('LOG_LEVEL', 'INFO'),
    format='%(asctime)s %(levelname)s %(name)s %(message)s',
)
logger = logging.getLogger(__name__)

# Database setup
class Base(DeclarativeBase):
    pass

db = SQLAlchemy(model_class=Base)
migrate = Migrate()
ma = Marshmallow()
jwt = JWTManager()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY clauses unless asked per connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_app(config_object='config.DevelopmentConfig'):
    # Create and configure the app
    app = Flask(__name__)
    app.config.from_object(config_object)
    logging.getLogger().setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    # Set secret key from environment or default
    app.secret_key = os.environ.get("SESSION_SECRET") or app.config['JWT_SECRET_KEY']

    # Fix proxy issues
    app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_host=1)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    ma.init_app(app)
    jwt.init_app(app)
    CORS(app)

    # API documentation setup
    authorizations = {
        'jwt': {
            'type': 'apiKey',
            'in': 'header',
            'name': 'Authorization',
            'description': "Type in the *'Value'* input box below: **'Bearer &lt;JWT&gt;'**, where JWT is the token"
        }
    }

    api = Api(
        app,
        version='1.0',
        title='ERP API',
        description='Clients, projects, employees, milestones and communications',
        prefix='/api',
        doc='/api/docs',
        authorizations=authorizations,
        security='jwt'
    )

    # Register namespaces
    from api.auth import api as auth_ns
    from api.clients import api as clients_ns
    from api.employees import api as employees_ns
    from api.projects import api as projects_ns
    from api.milestones import api as milestones_ns
    from api.communications import api as communications_ns
    from api.dashboard import api as dashboard_ns

    api.add_namespace(auth_ns)
    api.add_namespace(clients_ns)
    api.add_namespace(employees_ns)
    api.add_namespace(projects_ns)
    api.add_namespace(milestones_ns)
    api.add_namespace(communications_ns)
    api.add_namespace(dashboard_ns)

    # Register error handlers
    @app.errorhandler(404)
    def not_found(error):
        return {'error': {'message': 'Resource not found'}}, 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return {'error': {'message': 'Method not allowed'}}, 405

    @app.errorhandler(500)
    def server_error(error):
        logger.error(f"Server error: {error}")
        return {'error': {'message': 'An unexpected error occurred'}}, 500

    @api.errorhandler(HTTPException)
    def http_error(error):
        return {'error': {'message': error.description or error.name}}, error.code

    # Create database tables within app context
    with app.app_context():
        import models  # noqa: F401  (register mappers before create_all)
        db.create_all()

    return app
