import os
import random
import sys

import pytest

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

FILLERS = ("broccoli", "corn", "chili")


def filler_layout(rows, cols, fillers=FILLERS):
    """Diagonal stripes of three types: no runs and no valid moves."""
    return [[fillers[(r + c) % len(fillers)] for c in range(cols)] for r in range(rows)]


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def filler():
    return filler_layout
