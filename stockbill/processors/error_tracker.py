"""Error tracking and aggregation for commands and the invoice flow."""

from collections import defaultdict
from typing import Dict, List, Optional, Set
import logging

class ErrorTracker:
    """Track and aggregate errors by type."""

    def __init__(self, max_samples: int = 3):
        """Initialize error tracker.

        Args:
            max_samples: Maximum number of samples to store per error type
        """
        self.error_counts = defaultdict(int)
        self.error_samples = defaultdict(list)
        self.max_samples = max_samples
        self.seen_errors: Set[str] = set()

    def add_error(self, error_type: str, message: str, context: Optional[Dict] = None) -> None:
        """Record an error occurrence.

        Repeats of the same type and message are counted once.

        Args:
            error_type: Category of error, e.g. STOCK_INCONSISTENCY
            message: Error message
            context: Optional context data for the error
        """
        error_key = f"{error_type}:{message}"
        if error_key in self.seen_errors:
            return

        self.seen_errors.add(error_key)
        self.error_counts[error_type] += 1
        if len(self.error_samples[error_type]) < self.max_samples:
            self.error_samples[error_type].append({
                'message': message,
                'context': context or {}
            })

    def has_errors(self, error_type: Optional[str] = None) -> bool:
        if error_type is None:
            return bool(self.error_counts)
        return self.error_counts.get(error_type, 0) > 0

    def samples(self, error_type: str) -> List[Dict]:
        return list(self.error_samples.get(error_type, []))

    def get_summary(self) -> Dict:
        """Get error summary.

        Returns:
            Dict containing error counts and samples
        """
        return {
            'counts': dict(self.error_counts),
            'samples': dict(self.error_samples)
        }

    def log_summary(self, logger: logging.Logger) -> None:
        """Log error summary.

        Args:
            logger: Logger to use for output
        """
        if not self.error_counts:
            return

        logger.warning("\nError Summary:")
        for error_type, count in self.error_counts.items():
            logger.warning(f"\n{error_type} ({count} occurrences):")
            for i, sample in enumerate(self.error_samples[error_type], 1):
                logger.warning(f"  Sample {i}:")
                logger.warning(f"    {sample['message']}")
                for key, value in sample['context'].items():
                    logger.warning(f"    {key}: {value}")
