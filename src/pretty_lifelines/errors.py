from __future__ import annotations

from typing import Literal

# ============================================================================
# Script errors
#
# Every problem with an input script is fatal for the run. The interpreter
# raises ScriptError at the earliest line that introduces the inconsistency;
# completion errors are only detectable at end of input and carry no line.
#
# Kinds:
#   syntax     -- unknown command, wrong argument count
#   state      -- inactive actor, duplicate message name, sending while blocked
#   causality  -- unsent message, unexpected or misrouted return
#   completion -- unfinished activities, unreceived messages
# ============================================================================

ErrorKind = Literal["syntax", "state", "causality", "completion"]


class ScriptError(ValueError):
    """A script violates the syntax or the causal rules of the diagram."""

    def __init__(self, kind: ErrorKind, message: str, line_number: int | None = None):
        self.kind = kind
        self.message = message
        self.line_number = line_number
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"line {self.line_number}: {self.message}"
