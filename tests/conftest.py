import sys, os

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
if SRC not in sys.path:
    sys.path.insert(0, SRC)

import pytest

from seedmerge.storage.highscore import HighScoreStore


@pytest.fixture
def store(tmp_path):
    return HighScoreStore(tmp_path / "highscore.json")
