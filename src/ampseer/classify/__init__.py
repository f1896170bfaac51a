from ampseer.classify.classifier import ClassificationTally, classify_read, classify_reads
from ampseer.classify.resolver import (
    DEFAULT_PANEL,
    Verdict,
    compare_only_unique_primers,
    resolve_panels,
)

__all__ = [
    "DEFAULT_PANEL",
    "ClassificationTally",
    "Verdict",
    "classify_read",
    "classify_reads",
    "compare_only_unique_primers",
    "resolve_panels",
]
