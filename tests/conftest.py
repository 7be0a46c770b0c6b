"""Make the in-tree ``nyaaview`` package importable when pytest runs from a checkout.

Tests import ``nyaaview`` directly, so the repository root goes first on
``sys.path`` ahead of any installed copy.
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = str(Path(__file__).resolve().parents[1])

if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)
