"""
Configuration loading for the ranking service.

Precedence (highest first):
1) Environment variables (RANK_KERNEL_*)
2) RankingConfig defaults

Validation is done by the pydantic model; invalid values are logged and raised.
"""

import logging
import os
from typing import Optional

from pydantic import ValidationError

from rank_kernel.models.config import RankingConfig

logger = logging.getLogger(__name__)

ENV_PREFIX = "RANK_KERNEL_"


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(ENV_PREFIX + key, default)


def load_config() -> RankingConfig:
    """Build a RankingConfig from the environment over the model defaults."""
    values = {}

    step = _env("STEP")
    if step is not None:
        values["step"] = step.strip()

    db_path = _env("DB_PATH")
    if db_path is not None and db_path.strip():
        values["db_path"] = db_path.strip()

    seed = _env("SEED_DEMO")
    if seed is not None:
        values["seed_demo_data"] = seed.strip().lower() in ("1", "true", "yes")

    log_level = _env("LOG_LEVEL")
    if log_level is not None:
        values["log_level"] = log_level

    try:
        return RankingConfig(**values)
    except ValidationError as e:
        logger.error("Invalid ranking configuration: %s", e)
        raise


__all__ = ["RankingConfig", "load_config"]
