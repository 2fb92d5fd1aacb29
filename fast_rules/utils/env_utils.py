import logging
import os
from typing import Optional

from dotenv import load_dotenv


def configure_env(env_file_name: Optional[str] = None) -> None:
    """
    Load environment overrides for the emitter.

    Args:
        env_file_name: Optional environment file name. If None, tries `.env.<ENV>` then `.env`.
            Values already present in the process environment win over file values.
    """
    if env_file_name is not None:
        if not load_dotenv(env_file_name):
            logging.warning(f"[ENV] Could not load `{env_file_name}`")
        return

    environment = os.getenv("ENV", "debug")

    for env_file in [f".env.{environment}", ".env"]:
        if load_dotenv(env_file):
            logging.debug(f"[ENV] Loaded {env_file} file successfully")
            break
