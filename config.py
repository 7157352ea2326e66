# config.py
"""DxH Reagent Generator - Flask Application configuration."""

# Python imports
from os import environ, path

# Third-party imports
from dotenv import load_dotenv

# Local imports

# Load environment variables from .env file
basedir = path.abspath(path.dirname(__file__))
load_dotenv(path.join(basedir, ".env"))


class Config:
    """Base config."""

    SECRET_KEY = environ.get("SECRET_KEY")

    # Only the log file lives here; the generator keeps no other state on disk.
    DXH_REAGENT_FOLDER = environ.get("DXH_REAGENT_FOLDER") or path.join(basedir, "dxh_data")
    DXH_REAGENT_LOG_FILE = (
        environ.get("DXH_REAGENT_LOG_FILE")
        or path.join(DXH_REAGENT_FOLDER, "dxh_reagent.log")
    )

    APP_SERVER_OS = environ.get("APP_SERVER_OS") or "Linux"

    # Label defaults
    DEFAULT_LABELER_ID = environ.get("DEFAULT_LABELER_ID") or "+H628"
    LOT_LENGTH = int(environ.get("LOT_LENGTH") or 7)

    # Data Matrix rendering (pixels per module, quiet zone in modules)
    BARCODE_SCALE = int(environ.get("BARCODE_SCALE") or 3)
    BARCODE_PADDING = int(environ.get("BARCODE_PADDING") or 2)


class ProdConfig(Config):
    """Production System Configuration"""

    FLASK_ENV = "production"
    DEBUG = False
    TESTING = False
    LOG_LINES_TO_SHOW = "164"


class DevConfig(Config):
    """Development System Configuration"""

    FLASK_ENV = "development"
    DEBUG = True
    TESTING = True
    LOG_LINES_TO_SHOW = "164"
