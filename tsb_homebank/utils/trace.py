"""
Request dumps for debugging the login flow.

A ``DebugTrace`` is created by the caller and passed down explicitly; each
instance numbers its own dumps, so two login attempts never share a counter.
"""

from pathlib import Path

from ..logging_setup import log


def save_file(local_path: Path, content: bytes) -> None:
    """Write *content* to *local_path*, creating all parent directories."""
    local_path.parent.mkdir(parents=True, exist_ok=True)
    local_path.write_bytes(content)
    log.debug("Saved → %s (%d bytes)", local_path, len(content))


class DebugTrace:
    """Writes each response body to ``text-<name>-<n>.txt`` when enabled."""

    def __init__(self, dump_dir: Path | None = None) -> None:
        self.dump_dir = Path(dump_dir) if dump_dir is not None else None
        self.count = 0

    @property
    def enabled(self) -> bool:
        return self.dump_dir is not None

    def record(self, name: str, text: str) -> Path | None:
        if self.dump_dir is None:
            log.debug("Response '%s': %d chars", name, len(text))
            return None
        path = self.dump_dir / f"text-{name}-{self.count}.txt"
        self.count += 1
        save_file(path, text.encode("utf-8"))
        return path
