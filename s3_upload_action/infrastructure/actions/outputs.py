"""
Step output sinks.

The runner reads outputs from the file named in GITHUB_OUTPUT, one
`name=value` line each; values with newlines use the heredoc form. Without
that file (old runners) the `::set-output` workflow command is printed
instead. Failure is reported with the `::error::` command plus a non-zero
exit code, which the entry point takes care of.
"""

import logging
import sys
import uuid
from typing import Optional, TextIO

logger = logging.getLogger(__name__)


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    return _escape_data(value).replace(":", "%3A").replace(",", "%2C")


class ActionsOutputSink:
    """Publishes outputs to the Actions runner."""
    
    def __init__(
        self,
        output_path: Optional[str] = None,
        stream: Optional[TextIO] = None,
    ) -> None:
        self._output_path = output_path
        self._stream = stream or sys.stdout
    
    def set_output(self, name: str, value: str) -> None:
        if self._output_path:
            with open(self._output_path, "a", encoding="utf-8") as f:
                f.write(self._format_output(name, value))
        else:
            self._command("set-output", value, name=name)
        
        logger.debug("Set output", extra={"output": name})
    
    def set_failed(self, message: str) -> None:
        self._command("error", message)
    
    @staticmethod
    def _format_output(name: str, value: str) -> str:
        if "\n" not in value:
            return f"{name}={value}\n"
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
    
    def _command(self, command: str, message: str, **properties: str) -> None:
        line = f"::{command}"
        if properties:
            line += " " + ",".join(
                f"{key}={_escape_property(val)}" for key, val in properties.items()
            )
        line += f"::{_escape_data(message)}"
        print(line, file=self._stream, flush=True)


class ConsoleOutputSink:
    """Local mode sink: logs outputs and keeps them for inspection."""
    
    def __init__(self) -> None:
        self.outputs: dict[str, str] = {}
        self.failure: Optional[str] = None
    
    def set_output(self, name: str, value: str) -> None:
        self.outputs[name] = value
        logger.info(f"Output {name}: {value}")
    
    def set_failed(self, message: str) -> None:
        self.failure = message
        logger.error(f"Run failed: {message}")
