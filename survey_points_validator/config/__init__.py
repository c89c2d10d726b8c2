"""
Expose the configuration loader.

Example:

    from survey_points_validator.config import load_config
    config = load_config()
    print(config.recipients)
"""

from .env import Config, load_config, LOG_LEVELS  # noqa: F401
