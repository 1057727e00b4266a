"""
Actions runner integration.

Input providers read action inputs; output sinks publish step outputs and
the failure marker. Each has an Actions runner flavour and a local one.
"""

from .inputs import (
    ActionsInputProvider,
    InputProvider,
    LocalInputProvider,
    read_inputs,
)
from .outputs import ActionsOutputSink, ConsoleOutputSink

__all__ = [
    "ActionsInputProvider",
    "ActionsOutputSink",
    "ConsoleOutputSink",
    "InputProvider",
    "LocalInputProvider",
    "read_inputs",
]
