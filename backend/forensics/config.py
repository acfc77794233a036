"""
config.py – Centralised configuration via environment variables.
All tunable thresholds live here so nothing is scattered across modules.
"""
import logging
import os


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# ── Cycle detection ────────────────────────────────────────────────────────────
CYCLE_MIN_LEN: int = int(os.getenv("CYCLE_MIN_LEN", "3"))
CYCLE_MAX_LEN: int = int(os.getenv("CYCLE_MAX_LEN", "5"))

# ── Fan-in / fan-out (smurfing) ────────────────────────────────────────────────
FAN_THRESHOLD: int = int(os.getenv("FAN_THRESHOLD", "10"))
SMURF_WINDOW_HOURS: int = int(os.getenv("SMURF_WINDOW_HOURS", "72"))

# ── Shell detection ────────────────────────────────────────────────────────────
SHELL_MAX_TX: int = int(os.getenv("SHELL_MAX_TX", "3"))
SHELL_MIN_CHAIN: int = int(os.getenv("SHELL_MIN_CHAIN", "3"))

# ── Velocity ───────────────────────────────────────────────────────────────────
VELOCITY_MIN_TX: int = int(os.getenv("VELOCITY_MIN_TX", "5"))
VELOCITY_WINDOW_MINUTES: int = int(os.getenv("VELOCITY_WINDOW_MINUTES", "60"))

# ── Scoring ────────────────────────────────────────────────────────────────────
# Points per distinct tag an account holds
SCORE_CYCLE: int = int(os.getenv("SCORE_CYCLE", "50"))
SCORE_FAN: int = int(os.getenv("SCORE_FAN", "30"))
SCORE_SHELL: int = int(os.getenv("SCORE_SHELL", "20"))
SCORE_HIGH_VELOCITY: int = int(os.getenv("SCORE_HIGH_VELOCITY", "10"))

# ── Fraud rings ────────────────────────────────────────────────────────────────
# risk = avg(member score) + min(RING_SIZE_BONUS_MAX, members * RING_SIZE_BONUS_PER_MEMBER)
RING_SIZE_BONUS_PER_MEMBER: float = float(os.getenv("RING_SIZE_BONUS_PER_MEMBER", "1.5"))
RING_SIZE_BONUS_MAX: float = float(os.getenv("RING_SIZE_BONUS_MAX", "15"))

# ── Pipeline ───────────────────────────────────────────────────────────────────
PARALLEL_DETECTORS: bool = _env_bool("PARALLEL_DETECTORS", "false")
DETECTOR_WORKERS: int = int(os.getenv("DETECTOR_WORKERS", "4"))

# ── Summary ────────────────────────────────────────────────────────────────────
TOP_FLOWS: int = int(os.getenv("TOP_FLOWS", "8"))
DAILY_ACTIVITY_DAYS: int = int(os.getenv("DAILY_ACTIVITY_DAYS", "10"))
# Graphs larger than this skip average clustering (expensive)
CLUSTERING_MAX_NODES: int = int(os.getenv("CLUSTERING_MAX_NODES", "1000"))

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s │ %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"


def configure_logging(level: str | int = os.getenv("LOG_LEVEL", "INFO")) -> None:
    """Install the engine's log format on the root logger."""
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
