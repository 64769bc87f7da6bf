"""
config.py — Runtime Configuration
==================================
All tunables live here.  Values come from the environment (optionally
via a `.env` file in the project root) and fall back to the defaults
below.

    GRAPH_VISIT_DELAY_MS   – pause after each visited node   (300)
    GRAPH_OBSTACLE_POLICY  – "preserve" | "forbid"           (preserve)
    GRAPH_LOG_LEVEL        – logging level name              (INFO)
    GRAPH_HOST / GRAPH_PORT / GRAPH_DEBUG – Flask server
    GRAPH_SECRET_KEY       – Flask session key (random if unset)
"""

import os
import secrets
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent

load_dotenv(PROJECT_ROOT / ".env")


# ---------------------------------------------------------------------------
# Obstacle policy: may a start / end node also be an obstacle?
# ---------------------------------------------------------------------------
class ObstaclePolicy(Enum):
    PRESERVE = "preserve"   # allowed; BFS seed bypasses the obstacle filter
    FORBID   = "forbid"     # model raises RoleConflict


# =============================================================================
# Search / Animation
# =============================================================================
DEFAULT_VISIT_DELAY_MS = 300

VISIT_DELAY_MS = int(os.environ.get("GRAPH_VISIT_DELAY_MS", DEFAULT_VISIT_DELAY_MS))
OBSTACLE_POLICY = ObstaclePolicy(os.environ.get("GRAPH_OBSTACLE_POLICY", "preserve").lower())

# =============================================================================
# Logging
# =============================================================================
LOG_LEVEL = os.environ.get("GRAPH_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

# =============================================================================
# Web server
# =============================================================================
HOST = os.environ.get("GRAPH_HOST", "127.0.0.1")
PORT = int(os.environ.get("GRAPH_PORT", "5000"))
DEBUG = os.environ.get("GRAPH_DEBUG", "").lower() in ("1", "true", "yes")
SECRET_KEY = os.environ.get("GRAPH_SECRET_KEY") or secrets.token_hex(32)

# canvas size in pixels (node positions are clamped to it)
CANVAS_WIDTH = 900
CANVAS_HEIGHT = 600


@dataclass(frozen=True)
class SearchConfig:
    """Settings a Workspace is created with."""

    visit_delay_ms:  int            = DEFAULT_VISIT_DELAY_MS
    obstacle_policy: ObstaclePolicy = ObstaclePolicy.PRESERVE

    @classmethod
    def from_env(cls) -> "SearchConfig":
        return cls(visit_delay_ms=VISIT_DELAY_MS, obstacle_policy=OBSTACLE_POLICY)
