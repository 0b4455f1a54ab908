"""
Logging utilities for aeonsim with step timing and error tracking.
"""

import logging
import sys
import time
import traceback
from datetime import datetime
from pathlib import Path
from typing import Optional, Dict, Any, List

PACKAGE_LOGGER = "aeonsim"

# Global timing logger instance
_timing_logger: Optional["TimingLogger"] = None


class TimingLogger:
    """Tracks timing of (possibly nested) execution steps."""
    
    def __init__(self):
        self.steps: List[Dict[str, Any]] = []
        self._open: List[Dict[str, Any]] = []
        self.start_time: float = time.time()
    
    @property
    def current_step(self) -> Optional[Dict[str, Any]]:
        return self._open[-1] if self._open else None

    def start_step(self, name: str) -> None:
        """Start timing a new step, nested inside any step still open."""
        self._open.append({
            "name": name,
            "depth": len(self._open),
            "start": time.time(),
            "end": None,
            "duration": None,
            "success": None,
        })
    
    def end_step(self, success: bool = True) -> float:
        """End the innermost open step and return its duration."""
        if not self._open:
            return 0.0
        
        step = self._open.pop()
        step["end"] = time.time()
        step["duration"] = step["end"] - step["start"]
        step["success"] = success
        self.steps.append(step)
        return step["duration"]
    
    def get_summary(self) -> str:
        """Get formatted timing summary."""
        total = time.time() - self.start_time
        
        lines = [
            "",
            "═" * 60,
            "  TIMING SUMMARY",
            "─" * 60,
        ]
        
        for step in sorted(self.steps, key=lambda s: s["start"]):
            status = "✓" if step["success"] else "✗"
            indent = "  " * step["depth"]
            duration = step["duration"] or 0
            lines.append(f"  {indent}{status} {step['name']}: {duration:.3f}s")
        
        lines.extend([
            "─" * 60,
            f"  Total: {total:.2f}s",
            "═" * 60,
        ])
        
        return "\n".join(lines)


def get_timing_logger() -> Optional[TimingLogger]:
    """Get global timing logger instance."""
    return _timing_logger


def setup_logging(
    level: str = "INFO",
    log_dir: Optional[str] = None,
    experiment_name: Optional[str] = None,
    format_style: str = "detailed",
    always_save: bool = True,
    include_timestamp: bool = False,
) -> logging.Logger:
    """
    Setup logging configuration.
    
    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR).
    log_dir : str, optional
        Directory for log files.
    experiment_name : str, optional
        Name for log file.
    format_style : str
        Format style: 'detailed', 'simple', 'minimal'.
    always_save : bool
        Write a log file whenever ``log_dir`` is given.
    include_timestamp : bool
        Include timestamp in log filename.
    
    Returns
    -------
    logging.Logger
        Configured package logger.
    """
    global _timing_logger
    _timing_logger = TimingLogger()
    
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    
    # Clear existing handlers
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    
    if format_style == "detailed":
        fmt = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
        datefmt = "%Y-%m-%d %H:%M:%S"
    elif format_style == "simple":
        fmt = "%(levelname)s: %(message)s"
        datefmt = None
    else:  # minimal
        fmt = "%(message)s"
        datefmt = None
    
    formatter = logging.Formatter(fmt, datefmt=datefmt)
    
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
    
    if log_dir and always_save:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        
        stem = experiment_name or "aeonsim"
        if include_timestamp:
            stem = f"{stem}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        
        file_handler = logging.FileHandler(log_path / f"{stem}.log")
        file_handler.setLevel(logging.DEBUG)  # Capture everything in file
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    
    return logger


def start_step(name: str) -> None:
    """Start timing a step (global convenience function)."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.info(f"Starting: {name}")
    
    if _timing_logger:
        _timing_logger.start_step(name)


def end_step(success: bool = True) -> float:
    """End timing current step (global convenience function)."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    
    duration = 0.0
    if _timing_logger:
        duration = _timing_logger.end_step(success)
    
    status = "completed" if success else "FAILED"
    logger.info(f"Step {status} in {duration:.3f}s")
    
    return duration


def log_error(error: Exception, context: str = "") -> None:
    """Log an error with full traceback."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    
    logger.error(f"ERROR in {context}: {type(error).__name__}: {error}")
    logger.debug(traceback.format_exc())


def log_calculation_issue(
    issue_type: str,
    description: str,
    details: Dict[str, Any],
) -> None:
    """Log a calculation issue (clamped input, out-of-range output, etc.)."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    
    logger.warning(f"Calculation issue [{issue_type}]: {description}")
    if details:
        logger.debug(f"  Details: {details}")
