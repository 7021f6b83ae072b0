import os
import random
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from flask import Flask  # noqa: E402

from levelgen.dungeon import GeneratorConfig, Position, build_square_area  # noqa: E402


@pytest.fixture(autouse=True)
def _clean_levelgen_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("LEVELGEN_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("LEVELGEN_LOG_LEVEL", "warn")


@pytest.fixture()
def rng():
    return random.Random(1234)


@pytest.fixture()
def config():
    return GeneratorConfig()


@pytest.fixture()
def map_area_12():
    return build_square_area(Position(0, 0), 12)


@pytest.fixture()
def flask_app():
    app = Flask(__name__)
    app.config.update({"TESTING": True})
    return app
