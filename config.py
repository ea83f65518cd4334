import os
from dotenv import load_dotenv

load_dotenv()

basedir = os.path.abspath(os.path.dirname(__file__))


def _table_from_env(name):
    """WITHHOLDING_TAX_TABLE as 'ceiling:excess_over:base_tax:rate;...' with an empty ceiling for the top bracket."""
    raw = os.environ.get(name)
    if not raw:
        return None
    rows = []
    for chunk in raw.split(';'):
        if not chunk.strip():
            continue
        parts = [part.strip() for part in chunk.split(':')]
        if len(parts) != 4:
            raise ValueError(
                f"{name} bracket {chunk.strip()!r} must have the form ceiling:excess_over:base_tax:rate"
            )
        ceiling, excess_over, base_tax, rate = parts
        rows.append((ceiling or None, excess_over, base_tax, rate))
    return rows


class Config:
    """Base configuration class."""
    # SECRET_KEY must be set via environment variable in production
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    # Relative SQLite paths resolve inside the Flask instance folder
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///payroll.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    MIGRATION_DIR = os.path.join(basedir, 'migrations')

    # Payroll rules
    PAYROLL_YEAR = int(os.environ.get('PAYROLL_YEAR', '2022'))
    SHIFT_START = os.environ.get('SHIFT_START', '08:00')
    LATE_GRACE_MINUTES = int(os.environ.get('LATE_GRACE_MINUTES', '10'))
    # None means the monthly TRAIN table in phpayroll.payroll.tax
    WITHHOLDING_TAX_TABLE = _table_from_env('WITHHOLDING_TAX_TABLE')

    # Logging
    LOG_TO_STDOUT = os.environ.get('LOG_TO_STDOUT')

    @staticmethod
    def init_app(app):
        """Initialize application-specific configuration."""
        import logging
        from logging import StreamHandler

        if app.config.get('LOG_TO_STDOUT'):
            stream_handler = StreamHandler()
            stream_handler.setLevel(logging.INFO)
            app.logger.addHandler(stream_handler)
            logging.getLogger('phpayroll').addHandler(stream_handler)
        elif not app.debug and not app.testing:
            # Production logging
            if not os.path.exists('logs'):
                os.mkdir('logs')
            file_handler = logging.FileHandler('logs/payroll.log')
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
            ))
            file_handler.setLevel(logging.INFO)
            app.logger.addHandler(file_handler)
            logging.getLogger('phpayroll').addHandler(file_handler)
        app.logger.setLevel(logging.INFO)
        logging.getLogger('phpayroll').setLevel(logging.DEBUG if app.debug else logging.INFO)
        app.logger.info('Payroll engine startup')


class DevelopmentConfig(Config):
    DEBUG = True
    # Allow weak secret key in development only
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    PAYROLL_YEAR = 2022
    SHIFT_START = '08:00'
    LATE_GRACE_MINUTES = 10
    WITHHOLDING_TAX_TABLE = None


class ProductionConfig(Config):
    DEBUG = False
    # In production, these must be set via environment variables
    # Validation happens in init_app() method

    @staticmethod
    def init_app(app):
        """Initialize production configuration with validation."""
        Config.init_app(app)  # Call parent init_app for logging

        # Validate required environment variables
        if not os.environ.get('SECRET_KEY'):
            raise ValueError("SECRET_KEY environment variable must be set in production!")

        if not os.environ.get('DATABASE_URL'):
            raise ValueError("DATABASE_URL environment variable must be set in production!")

        # Set production values
        app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY')
        app.config['SQLALCHEMY_DATABASE_URI'] = os.environ.get('DATABASE_URL')


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
