# Flagwise Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for Flagwise."""
import logging

logger: logging.Logger = logging.getLogger("flagwise")
