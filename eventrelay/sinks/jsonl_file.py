"""JSON-lines file sink — appends each received event to a local file.

Each line is a ``RelayedEvent`` serialized with Pydantic.  The file and
its parent directory are created on first write.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from eventrelay.config import settings
from eventrelay.models.events import RelayedEvent
from eventrelay.sinks.base import ClosableSink

logger = logging.getLogger(__name__)


class JsonLinesFileSink(ClosableSink):
    """Appends events to a ``.jsonl`` file.

    Parameters
    ----------
    path:
        Target file.  Defaults to ``settings.events_path``.
    name:
        Sink name recorded on every line.
    """

    def __init__(self, path: Path | str | None = None, name: str = "jsonl_file") -> None:
        super().__init__(name)
        self._path = Path(path) if path is not None else settings.events_path

    @property
    def path(self) -> Path:
        return self._path

    def _deliver(self, event: str, args: tuple[Any, ...]) -> None:
        record = RelayedEvent.from_call(event, args, sink_name=self.sink_name)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding="utf-8") as fh:
            fh.write(record.model_dump_json() + "\n")

        logger.debug("JsonLinesFileSink: wrote %s to %s", event, self._path)

    def read_events(self) -> list[RelayedEvent]:
        """Read back every record written so far."""
        if not self._path.exists():
            return []
        with self._path.open(encoding="utf-8") as fh:
            return [
                RelayedEvent.model_validate_json(line)
                for line in fh
                if line.strip()
            ]
