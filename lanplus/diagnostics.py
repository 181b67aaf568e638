"""
Diagnostic hex tracing for lanplus primitives.

A BufferTracer writes labelled hex dumps of IVs, keys and data buffers to an
injected logger. Dumps expose key material, so a tracer is silent unless it
is built with a verbosity above the threshold an operation asks for.
"""

import logging
from typing import List, Optional

from .crypto.utils import BytesLike, format_hex

# Verbosity thresholds used by the cipher operations.
TRACE_INPUTS = 2
TRACE_OUTPUT = 1


def hex_dump_lines(data: BytesLike, width: int = 16) -> List[str]:
    """Split data into lines of at most width space-separated hex bytes."""
    raw = bytes(data)
    return [format_hex(raw[i:i + width])
            for i in range(0, len(raw), width)]


class BufferTracer:
    """
    Emits hex dumps to a logger when the configured verbosity is high enough.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, verbosity: int = 0):
        """
        Initialize tracer.

        Args:
            logger: Destination logger. Defaults to this module's logger.
            verbosity: Trace level, like repeated -v flags. 0 disables tracing.
        """
        if verbosity < 0:
            raise ValueError("Verbosity must be non-negative")
        self.logger = logger or logging.getLogger(__name__)
        self.verbosity = verbosity

    def enabled(self, threshold: int) -> bool:
        """Return True when dumps above threshold should be written."""
        return self.verbosity > threshold

    def printbuf(self, data: BytesLike, label: str, threshold: int = TRACE_INPUTS) -> None:
        """
        Dump a buffer as hex.

        Args:
            data: Buffer to dump
            label: Description written before the dump
            threshold: Verbosity the tracer must exceed
        """
        if not self.enabled(threshold):
            return
        self.logger.debug("%s (%d bytes)", label, len(data))
        for line in hex_dump_lines(data):
            self.logger.debug(" %s", line)

    def message(self, text: str, *args, threshold: int = TRACE_OUTPUT) -> None:
        """Log a plain diagnostic message above threshold."""
        if self.enabled(threshold):
            self.logger.debug(text, *args)


NULL_TRACER = BufferTracer(verbosity=0)


def get_tracer(tracer: Optional[BufferTracer]) -> BufferTracer:
    """Return tracer, or the disabled default when None."""
    return tracer if tracer is not None else NULL_TRACER
