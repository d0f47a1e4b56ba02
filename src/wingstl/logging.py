"""Logging system for wingstl using Loguru.

Provides a console sink, an optional rotating file sink, and component-bound
child loggers for the parser, the mesh generator and the writer.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from .config import get_config


class WingstlLogger:
    """wingstl logging system with structured records."""

    def __init__(self):
        self._configured = False

    @property
    def configured(self) -> bool:
        return self._configured

    def configure(self, config=None) -> None:
        """Configure logging based on provided config."""
        if config is None:
            config = get_config()

        # Remove default and previously installed handlers
        logger.remove()

        logger.configure(extra={"component": "wingstl"})

        # Console handler
        logger.add(
            sys.stderr,
            level=config.logging.level,
            format=config.logging.format,
            colorize=True,
        )

        # File handler (if specified)
        if config.logging.file_path:
            file_path = Path(config.logging.file_path)
            file_path.parent.mkdir(parents=True, exist_ok=True)

            logger.add(
                str(file_path),
                level=config.logging.level,
                format=config.logging.format,
                rotation=config.logging.max_file_size,
                retention=config.logging.retention,
                encoding="utf-8",
            )

        self._configured = True

        logger.debug(
            "wingstl logging configured",
            level=config.logging.level,
            file=str(config.logging.file_path) if config.logging.file_path else None,
        )

    def log_run_start(self, airfoil: str, planform: Dict[str, Any]) -> None:
        """Log the inputs of a run."""
        logger.info("Compiling wing for airfoil {}", airfoil, planform=planform)

    def log_mesh_generated(self, num_vertices: int, num_triangles: int, closed_trailing_edge: bool) -> None:
        """Log mesh size after generation."""
        logger.info(
            "Generated mesh with {} vertices and {} triangles",
            num_vertices,
            num_triangles,
            closed_trailing_edge=closed_trailing_edge,
        )

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """Log error with context."""
        context = context or {}
        logger.error(
            "{}: {}",
            type(error).__name__,
            str(error),
            context=context,
        )

    def create_child_logger(self, name: str) -> "WingstlChildLogger":
        """Create a child logger with specific context."""
        return WingstlChildLogger(name, self)


class WingstlChildLogger:
    """Child logger bound to a component name."""

    def __init__(self, name: str, parent: WingstlLogger):
        self.name = name
        self.parent = parent
        self.logger = logger.bind(component=name)

    def info(self, message: str, *args, **kwargs) -> None:
        self.logger.info(message, *args, **kwargs)

    def debug(self, message: str, *args, **kwargs) -> None:
        self.logger.debug(message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs) -> None:
        self.logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs) -> None:
        self.logger.error(message, *args, **kwargs)


# Global logger instance
wingstl_logger = WingstlLogger()


def get_logger(name: Optional[str] = None) -> WingstlChildLogger:
    """Get a logger instance for a specific component."""
    if name:
        return wingstl_logger.create_child_logger(name)
    return WingstlChildLogger("wingstl", wingstl_logger)


def setup_logging(config=None) -> None:
    """Setup logging for the entire package."""
    wingstl_logger.configure(config)


# Convenience functions
def log_run_start(airfoil: str, planform: Dict[str, Any]) -> None:
    wingstl_logger.log_run_start(airfoil, planform)


def log_mesh_generated(num_vertices: int, num_triangles: int, closed_trailing_edge: bool) -> None:
    wingstl_logger.log_mesh_generated(num_vertices, num_triangles, closed_trailing_edge)


def log_error(error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    """Log error with context."""
    wingstl_logger.log_error(error, context)
