# File: src/revit_fbx_exporter/config.py
"""
Exporter configuration read from environment variables.

Variables:
    FBX_EXPORT_PARAMS_FILE: parameter file name (default: params.json)
    FBX_EXPORT_OUTPUT_DIR: output directory name (default: exportedFBXs)
    FBX_EXPORT_DEBUG: enable TRACE logging (default: false)
    FBX_EXPORT_LOG_DIR: also write a log file there (default: unset)
"""

import os
import logging

logger = logging.getLogger(__name__)

DEFAULT_PARAMS_FILENAME = "params.json"
DEFAULT_EXPORT_DIR_NAME = "exportedFBXs"


def _env_flag(env, name: str, default: str = "false") -> bool:
    return env.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class ExporterConfig:
    """Exporter configuration loaded from environment variables"""

    def __init__(self, environ=None):
        env = os.environ if environ is None else environ

        # Inputs and outputs, relative to the job's working directory
        self.params_filename = env.get("FBX_EXPORT_PARAMS_FILE") or DEFAULT_PARAMS_FILENAME
        self.export_dir_name = env.get("FBX_EXPORT_OUTPUT_DIR") or DEFAULT_EXPORT_DIR_NAME

        # Logging
        self.debug = _env_flag(env, "FBX_EXPORT_DEBUG")
        self.log_dir = env.get("FBX_EXPORT_LOG_DIR") or None

    @classmethod
    def from_env(cls):
        return cls()

    def validate(self):
        """Log warnings for suspicious configuration values"""
        if os.path.isabs(self.export_dir_name):
            logger.warning(
                "FBX_EXPORT_OUTPUT_DIR is absolute (%s); the job working directory will be ignored",
                self.export_dir_name,
            )

        if not self.params_filename.lower().endswith(".json"):
            logger.warning("Parameter file %s does not have a .json extension", self.params_filename)

    def __repr__(self):
        return (
            f"ExporterConfig(params_filename={self.params_filename!r}, "
            f"export_dir_name={self.export_dir_name!r}, debug={self.debug})"
        )
