"""
asroute Data Models

Transient records passed between the hop parser, the resolvers and the
stream annotator.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional


MAX_AS_NUMBER = 4294967295  # 32-bit AS number space (RFC 6793)


class HopKind(Enum):
    """Classification of a single normalized trace line"""

    NO_RESPONSE = "no_response"
    RESERVED = "reserved"
    CANDIDATE = "candidate"


@dataclass(frozen=True)
class HopClassification:
    """
    Outcome of classifying one trace line.

    Only CANDIDATE outcomes carry the line, since they are the only ones
    that go on to identifier extraction.
    """
    kind: HopKind
    line: Optional[str] = None

    @property
    def is_candidate(self) -> bool:
        return self.kind is HopKind.CANDIDATE


@dataclass
class ASRecord:
    """
    One name record for an autonomous system, as returned by a resolver.

    Field set follows the Team Cymru bulk whois columns; resolvers that
    know less leave the optional fields empty.
    """
    as_number: int
    as_name: str
    country_code: Optional[str] = None
    registry: Optional[str] = None
    allocated: Optional[str] = None

    def __post_init__(self):
        """Validate AS number range."""
        if not 0 <= self.as_number <= MAX_AS_NUMBER:
            raise ValueError(f"AS number out of range: {self.as_number}")


@dataclass
class AnnotationStats:
    """
    Counters for one annotation run.
    Informational only: they are logged at the end of the run and never
    influence what is written to the output stream.
    """
    lines_read: int = 0
    lines_emitted: int = 0
    lookups_attempted: int = 0
    lookups_failed: int = 0
    lines_skipped: int = 0
    skip_reasons: Dict[str, int] = field(default_factory=dict)

    def record_skip(self, reason: str) -> None:
        """Count a line that produced no output."""
        self.lines_skipped += 1
        self.skip_reasons[reason] = self.skip_reasons.get(reason, 0) + 1

    def to_summary(self) -> str:
        """Generate a one-line summary of the run."""
        summary = (
            f"Read {self.lines_read} lines, emitted {self.lines_emitted}, "
            f"lookups {self.lookups_attempted} ({self.lookups_failed} failed)"
        )
        if self.skip_reasons:
            reasons = ", ".join(f"{k}={v}" for k, v in sorted(self.skip_reasons.items()))
            summary += f", skipped {self.lines_skipped} ({reasons})"
        return summary
