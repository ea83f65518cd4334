# phpayroll/__init__.py
import os
from datetime import datetime

from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from config import config

from phpayroll.errors import PayrollError
from phpayroll.snapshot import SnapshotStore, load_snapshot_from_db

db = SQLAlchemy()
migrate = Migrate()


def parse_shift_start(value):
    if not value:
        return None
    return datetime.strptime(str(value).strip(), '%H:%M').time()


def create_app(config_name='default'):
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config[config_name])

    # Initialize app-specific configuration (logging, etc.)
    config[config_name].init_app(app)

    os.makedirs(app.instance_path, exist_ok=True)
    db.init_app(app)
    migrate.init_app(app, db, directory=app.config.get('MIGRATION_DIR'))

    # --- Payroll snapshot: loaded once per session, replaced whole on reload ---
    payroll_year = app.config['PAYROLL_YEAR']
    tax_table = app.config.get('WITHHOLDING_TAX_TABLE')
    app.extensions['payroll_snapshot'] = SnapshotStore(
        lambda: load_snapshot_from_db(payroll_year, tax_table=tax_table)
    )
    app.config['SHIFT_START_TIME'] = parse_shift_start(app.config.get('SHIFT_START'))

    # --- Register Blueprints ---
    from .attendance import bp as attendance_bp
    app.register_blueprint(attendance_bp)

    from .payroll import bp as payroll_bp
    app.register_blueprint(payroll_bp)

    from .cli import payroll_cli
    app.cli.add_command(payroll_cli)

    # --- Register Error Handlers ---
    @app.errorhandler(PayrollError)
    def payroll_error(error):
        if error.status_code >= 500:
            app.logger.error('%s: %s', error.kind, error.message)
        else:
            app.logger.warning('%s: %s', error.kind, error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({'error': 'NotFound', 'message': 'Resource not found.'}), 404

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return jsonify({'error': 'InternalError', 'message': 'Internal server error.'}), 500

    return app
