from .sink import (
    OutputSink,
    ConsoleSink,
    MemorySink,
    format_metric_line,
    format_sentence_line,
)

__all__ = [
    "OutputSink",
    "ConsoleSink",
    "MemorySink",
    "format_metric_line",
    "format_sentence_line",
]
