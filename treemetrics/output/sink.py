from abc import ABC, abstractmethod
from typing import IO, List, Optional, Sequence

from rich.console import Console


class OutputSink(ABC):
    """Write-only destination for result lines."""

    @abstractmethod
    def write_line(self, text: str) -> None:
        pass


class ConsoleSink(OutputSink):
    """Prints lines through a rich Console (markup and highlighting off)."""

    def __init__(self, console: Optional[Console] = None, file: Optional[IO] = None):
        self.console = console or Console(file=file, highlight=False)

    def write_line(self, text: str) -> None:
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)


class MemorySink(OutputSink):
    """Keeps the written lines in memory."""

    def __init__(self):
        self.lines: List[str] = []

    def write_line(self, text: str) -> None:
        self.lines.append(text)

    def getvalue(self) -> str:
        return "\n".join(self.lines)


def format_metric_line(name: str, value: float) -> str:
    return f"{name}: {value}"


def format_sentence_line(
    sentence_id: str,
    values: Sequence[float],
    prefix: Optional[str] = None,
    precision: int = 2,
) -> str:
    """'<prefix> <sentence_id> v1 v2 ...' with fixed decimals."""
    parts = [prefix] if prefix is not None else []
    parts.append(str(sentence_id))
    parts.extend(f"{v:.{precision}f}" for v in values)
    return " ".join(parts)
