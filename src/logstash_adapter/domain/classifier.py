"""
Multi-line classifier.

Decides whether a log line continues the previous logical event. The
decision is table-driven: an ordered list of compiled patterns is tried
and the first match wins.
"""

import re

from logstash_adapter.core.exceptions import ConfigurationError

__all__ = [
    "DEFAULT_CONTINUATION_PATTERNS",
    "MultilineClassifier",
    "default_classifier",
    "classify",
]


# Ordered (name, regex) table. Adding a continuation rule is a one-line change.
DEFAULT_CONTINUATION_PATTERNS: list[tuple[str, str]] = [
    # Indented continuation. Only ASCII whitespace, no vertical tab
    ("indented", r"^[\t\n\f\r ]"),
    # Interpreted-language traceback frame: File "x.py", line 3, in f
    ("traceback_frame", r"line [0-9]+, in .+"),
    # Traceback header attaches to whatever came before it
    ("traceback_header", r"^Traceback "),
    # SQL error context line
    ("sql_context", r"LINE [0-9]+:"),
]


class MultilineClassifier:
    """
    Pure, stateless continuation predicate.

    Example:
        classifier = MultilineClassifier()
        classifier.is_continuation("    at com.example.Foo")  # True
        classifier.is_continuation("INFO started")            # False

        # Extra patterns are tried after the defaults
        classifier = MultilineClassifier(extra_patterns=[r"^Caused by: "])
    """

    def __init__(
        self,
        patterns: list[tuple[str, str]] | None = None,
        extra_patterns: list[str] | None = None,
    ):
        """
        Initialize the classifier.

        Args:
            patterns: Ordered (name, regex) table, defaults to DEFAULT_CONTINUATION_PATTERNS
            extra_patterns: Additional regexes appended after the table

        Raises:
            ConfigurationError: If a pattern does not compile
        """
        table = list(patterns if patterns is not None else DEFAULT_CONTINUATION_PATTERNS)
        for i, pattern in enumerate(extra_patterns or [], 1):
            table.append((f"extra_{i}", pattern))

        self._patterns: list[tuple[str, re.Pattern]] = []
        for name, pattern in table:
            try:
                self._patterns.append((name, re.compile(pattern)))
            except re.error as e:
                raise ConfigurationError(
                    f"Invalid continuation pattern {pattern!r}: {e}",
                    config_key=name,
                ) from e

    @property
    def pattern_names(self) -> list[str]:
        return [name for name, _ in self._patterns]

    def matching_pattern(self, line: str) -> str | None:
        """
        Get the name of the first pattern matching the line.

        Args:
            line: Raw log line text

        Returns:
            Pattern name, or None when the line starts a new event
        """
        for name, pattern in self._patterns:
            if pattern.search(line):
                return name
        return None

    def is_continuation(self, line: str) -> bool:
        """Check whether the line continues the prior logical event."""
        return self.matching_pattern(line) is not None

    __call__ = is_continuation


default_classifier = MultilineClassifier()


def classify(line: str) -> bool:
    """Classify a line with the default pattern table."""
    return default_classifier.is_continuation(line)
