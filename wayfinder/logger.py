"""Logging module for Wayfinder."""

import json
from datetime import datetime
from typing import Optional, Callable


class Logger:
    """Logs engine events to stdout, an append-mode file and an optional callback.

    Components log through a scoped child (``logger.scoped("search")``) so
    every line names the part of the engine that produced it. Children share
    the parent's sinks.
    """

    def __init__(self, log_path: Optional[str] = None, callback: Optional[Callable] = None,
                 echo: bool = True, prefix: str = ""):
        self.log_path = log_path
        self.callback = callback
        self.echo = echo
        self.prefix = prefix
        self.file = None
        if log_path:
            self.file = open(log_path, "a")
            self._write_header()

    def _write_header(self):
        if self.file:
            self.file.write(f"\n{'='*60}\n")
            self.file.write(f"Wayfinder Log - {datetime.now().isoformat()}\n")
            self.file.write(f"{'='*60}\n\n")
            self.file.flush()

    def scoped(self, prefix: str) -> "Logger":
        """Return a logger writing to the same sinks with a [prefix] tag"""
        child = Logger(callback=self.callback, echo=self.echo, prefix=prefix)
        child.log_path = self.log_path
        child.file = self.file
        return child

    def log(self, message: str, data: Optional[dict] = None):
        """Log a message with optional structured data"""
        if self.prefix:
            message = f"[{self.prefix}] {message}"
        line = f"[{datetime.now().isoformat()}] {message}"
        if data:
            line += f" | {json.dumps(data, default=str)}"
        if self.echo:
            print(line)
        if self.file and not self.file.closed:
            self.file.write(line + "\n")
            self.file.flush()
        if self.callback:
            self.callback(message, data)

    def close(self):
        if self.file:
            self.file.close()
