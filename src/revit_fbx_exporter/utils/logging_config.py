"""
Logging configuration for the Revit FBX exporter.

Design Automation collects everything the add-in writes to stdout into the
job report, so the console handler is the primary sink. A timestamped log
file can be added for local debugging. A custom TRACE level sits below DEBUG
for per-element diagnostics.
"""

import logging
import os
import sys
from datetime import datetime
from typing import Optional

class ExporterLogger:
    """
    Configures logging for the exporter.

    Supports:
    - Standard levels (CRITICAL, ERROR, WARNING, INFO, DEBUG)
    - Custom TRACE level for per-element diagnostics
    - Console output in the Design Automation report format
    - Optional file output
    """

    # Define custom TRACE level (between DEBUG and NOTSET)
    TRACE_LEVEL = 5
    logging.addLevelName(TRACE_LEVEL, "TRACE")

    @staticmethod
    def _add_trace_method():
        """Add the TRACE method to the Logger class if not already present."""
        if not hasattr(logging.Logger, 'trace'):
            def trace(self, message, *args, **kwargs):
                """Log a message with level TRACE."""
                if self.isEnabledFor(ExporterLogger.TRACE_LEVEL):
                    self._log(ExporterLogger.TRACE_LEVEL, message, args, **kwargs)
            logging.Logger.trace = trace

    @staticmethod
    def configure(
        debug_mode: bool = False,
        log_dir: Optional[str] = None,
        design_automation_mode: bool = True,
    ) -> Optional[str]:
        """
        Configure the logging system for the entire add-in.

        Args:
            debug_mode: If True, sets TRACE level for all loggers
            log_dir: Directory to store a log file in; no file when None
            design_automation_mode: If True, uses the terse ``LEVEL: message``
                console format read by the Design Automation report

        Returns:
            Path to the created log file, or None
        """
        ExporterLogger._add_trace_method()

        # A broken stream must never fail the export
        logging.raiseExceptions = debug_mode

        level = ExporterLogger.TRACE_LEVEL if debug_mode else logging.INFO

        root_logger = logging.getLogger()
        root_logger.setLevel(level)

        # Clear any existing handlers
        if root_logger.handlers:
            root_logger.handlers.clear()

        log_file = None
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = os.path.join(log_dir, f"fbx_export_{timestamp}.log")

            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            ))
            file_handler.setLevel(level)
            root_logger.addHandler(file_handler)

        console_handler = logging.StreamHandler(sys.stdout)
        if design_automation_mode:
            console_formatter = logging.Formatter('%(levelname)s: %(message)s')
        else:
            console_formatter = logging.Formatter('%(name)s - %(levelname)s: %(message)s')
        console_handler.setFormatter(console_formatter)
        console_handler.setLevel(level)
        root_logger.addHandler(console_handler)

        return log_file

    @staticmethod
    def get_logger(name: str, level: Optional[int] = None):
        """
        Get a logger for a specific module.

        Args:
            name: Logger name, typically __name__
            level: Optional specific level for this logger

        Returns:
            A configured logger
        """
        ExporterLogger._add_trace_method()
        logger = logging.getLogger(name)
        if level:
            logger.setLevel(level)
        return logger

# For direct import convenience
def get_logger(name: str, level: Optional[int] = None):
    """Get a logger for a module; delegates to ExporterLogger.get_logger."""
    return ExporterLogger.get_logger(name, level)
