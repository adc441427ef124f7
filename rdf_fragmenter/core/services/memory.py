"""
Memory pre-flight checks for sources that parse a whole file into a Dataset.

Line-based sources never hold more than one statement, so only the
Dataset-backed formats of FileQuadSource go through these checks.

Example:
    ```python
    can_proceed, message = MemoryManager.check_memory_available(file_size_mb)
    if not can_proceed:
        raise QuadSourceError(message)
    ```
"""

import logging
from typing import NamedTuple, Tuple

import psutil

logger = logging.getLogger(__name__)

MB = 1024 * 1024


class ParseEstimate(NamedTuple):
    """Expected cost of loading one file into an rdflib Dataset."""

    file_mb: float
    required_mb: float
    available_mb: float
    budget_mb: float

    @property
    def fits(self) -> bool:
        return self.required_mb <= self.budget_mb


class MemoryManager:
    """
    Estimate whether an RDF file can be loaded into an rdflib Dataset.

    Attributes:
        MIN_AVAILABLE_MB: Free memory below which no file is loaded.
        MAX_SAFE_FILE_MB: Largest file loaded without ``force``.
        MEMORY_MULTIPLIER: Dataset size relative to the serialized file.
        LOAD_FACTOR: Share of free memory a single load may take.
    """

    MIN_AVAILABLE_MB = 256
    MAX_SAFE_FILE_MB = 500
    MEMORY_MULTIPLIER = 3.5
    LOAD_FACTOR = 0.7

    @staticmethod
    def get_available_memory_mb() -> float:
        """Free system memory in MB, or MIN_AVAILABLE_MB when psutil cannot tell."""
        try:
            return psutil.virtual_memory().available / MB
        except (psutil.Error, OSError) as e:
            logger.warning(f"Could not determine available memory: {e}")
            return float(MemoryManager.MIN_AVAILABLE_MB)

    @staticmethod
    def get_memory_usage_mb() -> float:
        """Resident set size of this process in MB, 0.0 if unknown."""
        try:
            return psutil.Process().memory_info().rss / MB
        except (psutil.Error, OSError):
            return 0.0

    @classmethod
    def estimate_parse(cls, file_size_mb: float) -> ParseEstimate:
        available_mb = cls.get_available_memory_mb()
        return ParseEstimate(
            file_mb=file_size_mb,
            required_mb=file_size_mb * cls.MEMORY_MULTIPLIER,
            available_mb=available_mb,
            budget_mb=available_mb * cls.LOAD_FACTOR,
        )

    @classmethod
    def check_memory_available(cls, file_size_mb: float, force: bool = False) -> Tuple[bool, str]:
        """
        Decide whether a file of the given size may be loaded.

        A file is refused when it is larger than MAX_SAFE_FILE_MB, when free
        memory is below MIN_AVAILABLE_MB, or when the estimated Dataset size
        does not fit in the load budget. ``force`` turns every refusal into
        a warning.

        Returns:
            Tuple of (can_proceed, message).
        """
        if file_size_mb > cls.MAX_SAFE_FILE_MB and not force:
            return False, (
                f"File size ({file_size_mb:.1f}MB) exceeds safe limit of {cls.MAX_SAFE_FILE_MB}MB "
                f"for in-memory formats; convert it to N-Quads or set 'force' on the quad source."
            )

        estimate = cls.estimate_parse(file_size_mb)

        if estimate.available_mb < cls.MIN_AVAILABLE_MB and not force:
            return False, (
                f"Insufficient free memory: {estimate.available_mb:.0f}MB available, "
                f"{cls.MIN_AVAILABLE_MB}MB required."
            )

        summary = (
            f"file {estimate.file_mb:.1f}MB, "
            f"estimated Dataset ~{estimate.required_mb:.0f}MB, "
            f"budget {estimate.budget_mb:.0f}MB of {estimate.available_mb:.0f}MB available"
        )
        if estimate.fits:
            return True, f"Memory OK: {summary}"
        if force:
            return True, f"WARNING: loading despite memory estimate ({summary})"
        return False, f"Dataset likely too large for available memory ({summary})."

    @classmethod
    def format_memory_status(cls) -> str:
        """One-line system and process memory summary, for logging."""
        try:
            system = psutil.virtual_memory()
        except (psutil.Error, OSError) as e:
            return f"Memory status: unavailable ({e})"

        return (
            f"Memory status: system {system.percent:.1f}% used "
            f"({system.available / (1024 * MB):.1f}GB available), "
            f"process using {cls.get_memory_usage_mb():.1f}MB"
        )
