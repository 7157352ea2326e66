import os
import sys
import tempfile
from pathlib import Path

import pytest


# Ensure the project root (repo folder) is importable when running pytest under uv.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# dxh_reagent builds the Flask app at import time and test modules import it
# during collection, so the environment has to be in place before that.
DATA_DIR = Path(tempfile.mkdtemp(prefix="dxh_reagent_data_"))

os.environ["APP_MODE"] = "config.DevConfig"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["APP_SERVER_OS"] = "Linux"

# Force temp log location so tests never touch the developer's real data.
os.environ["DXH_REAGENT_FOLDER"] = str(DATA_DIR)
os.environ["DXH_REAGENT_LOG_FILE"] = str(DATA_DIR / "test.log")


@pytest.fixture(scope="session")
def app():
    import dxh_reagent  # noqa: E402

    return dxh_reagent.app


@pytest.fixture()
def client(app):
    return app.test_client()
