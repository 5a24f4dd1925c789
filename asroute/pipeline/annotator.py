#!/usr/bin/env python3
"""
Streaming Hop Annotator

Reads trace output one line at a time and writes one `-> ...` line per hop
that warrants one:

    traceroute -a example.com | asroute
    -> AS0 (Reserved)
    -> COMCAST-7922, US
    -> *
    -> CLOUDFLARENET, US

Lines are processed strictly in order and every output line is flushed as
soon as it is written, so the annotator can sit at the end of a live pipe.
"""

import logging
from typing import Iterable, Iterator, Optional, TextIO

from asroute.models import AnnotationStats
from asroute.processors.hop_parser import (
    classify_line, extract_as_token, marker_output, normalize_line
)
from asroute.resolvers.adapter import ResolverAdapter
from asroute.utils.error_handling import (
    InputReadError, InvalidIdentifierError,
    LookupFailedError, MissingIdentifierError
)


class DedupGate:
    """Single-slot memory of the last AS token let through"""

    def __init__(self):
        self.last_token: Optional[str] = None

    def should_process(self, token: str) -> bool:
        """False when the token repeats the immediately preceding one."""
        return token != self.last_token

    def commit(self, token: str) -> None:
        self.last_token = token

    def reset(self) -> None:
        self.last_token = None


class HopAnnotator:
    """
    Drives trace lines through classification, token extraction, the dedup
    gate and name resolution.

    Each instance owns its own gate, so separate runs never share state.
    """

    ARROW = "->"

    def __init__(self, adapter: ResolverAdapter, output: TextIO):
        """
        Args:
            adapter: Resolver adapter used for AS name lookups
            output: Stream that receives the annotated lines
        """
        self.adapter = adapter
        self.output = output
        self.gate = DedupGate()
        self.stats = AnnotationStats()
        self.logger = logging.getLogger("asroute.pipeline")

    def annotate_line(self, raw_line: str) -> Optional[str]:
        """
        Process one raw trace line.

        Returns the output line for this hop, or None when the hop gets no
        annotation. Per-line errors are logged and absorbed here.
        """
        line = normalize_line(raw_line)
        classification = classify_line(line)

        marker = marker_output(classification)
        if marker is not None:
            return marker

        try:
            return self._annotate_candidate(classification.line)
        except MissingIdentifierError as e:
            self.stats.record_skip("missing_identifier")
            self.logger.info(f"{e.message} {e.guidance}")
        except InvalidIdentifierError as e:
            self.stats.record_skip("invalid_identifier")
            self.logger.info(e.message)
        except LookupFailedError as e:
            self.stats.lookups_failed += 1
            self.stats.record_skip("lookup_failed")
            self.logger.info(e.message)
        return None

    def _annotate_candidate(self, line: str) -> Optional[str]:
        token = extract_as_token(line)
        if token is None:
            raise MissingIdentifierError(line)

        if not self.gate.should_process(token):
            self.stats.record_skip("unchanged")
            self.logger.debug(f"Skipping unchanged AS token {token}")
            return None

        as_number = self.adapter.parse_identifier(token)
        # Committed before the lookup: a failed lookup is not retried on
        # the next consecutive hop in the same AS.
        self.gate.commit(token)

        self.stats.lookups_attempted += 1
        as_name = self.adapter.lookup(as_number)
        return f"{self.ARROW} {as_name}"

    def run(self, lines: Iterable[str]) -> AnnotationStats:
        """
        Annotate every line of an input stream.

        Raises:
            InputReadError: reading from the input failed; nothing after
                the failing line is processed
        """
        for raw_line in _read_lines(lines):
            self.stats.lines_read += 1

            annotation = self.annotate_line(raw_line)
            if annotation is None:
                continue

            self.output.write(annotation + "\n")
            self.output.flush()
            self.stats.lines_emitted += 1

        self.logger.debug(self.stats.to_summary())
        return self.stats


def _read_lines(lines: Iterable[str]) -> Iterator[str]:
    """Yield lines, turning read failures into InputReadError"""
    iterator = iter(lines)
    while True:
        try:
            line = next(iterator)
        except StopIteration:
            return
        except (OSError, UnicodeDecodeError) as e:
            raise InputReadError(e) from e
        yield line


__all__ = ['DedupGate', 'HopAnnotator']
