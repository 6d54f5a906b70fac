from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, TextIO


class Logger:
    """Timestamped log lines on stderr, optionally mirrored to a file.

    stdout is reserved for records and reports, so nothing here prints there.
    """

    def __init__(self, file: Optional[Path] = None, debug: bool = False, stream: Optional[TextIO] = None):
        self.file = file
        self.debug_enabled = debug
        self._stream = stream
        if self.file is not None:
            self.file.parent.mkdir(parents=True, exist_ok=True)
            # Touch file
            self.file.open("a").close()

    def _ts(self) -> str:
        return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")

    def _write(self, level: str, msg: str) -> None:
        line = f"[{self._ts()}] {level}: {msg}"
        # Resolved late so pytest's capsys sees the replaced sys.stderr
        print(line, file=self._stream or sys.stderr)
        if self.file is not None:
            with self.file.open("a", encoding="utf-8") as f:
                f.write(line + "\n")

    def debug(self, msg: str) -> None:
        if self.debug_enabled:
            self._write("DEBUG", msg)

    def info(self, msg: str) -> None:
        self._write("INFO", msg)

    def warn(self, msg: str) -> None:
        self._write("WARN", msg)

    def error(self, msg: str) -> None:
        self._write("ERROR", msg)
