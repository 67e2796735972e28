"""
Module: recognizer.config

Purpose:
    Configuration dataclass for recognition runs.

Key Classes:
    - RecognizerConfig: Immutable settings shared by Recognizer and recognize_many

Used By:
    - recognizer.engine: Diagnostics and logging switches
    - recognizer.batch: Thread pool size
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RecognizerConfig:
    """
    Configuration for recognition runs.

    Attributes:
        max_workers: Thread pool size for recognize_many (default 4)
        collect_expected: Record which terminals were expected at the
            failure frontier (default True)
        log_stats: Log per-run statistics at DEBUG level (default False)
    """
    max_workers: int = 4
    collect_expected: bool = True
    log_stats: bool = False

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1: {self.max_workers}")
