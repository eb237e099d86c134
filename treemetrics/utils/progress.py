import logging
from typing import Optional

from rich.progress import Progress, SpinnerColumn

logger = logging.getLogger(__name__)


class ProgressTracker:
    """
    Shared rich progress display.

    Only one live display may run at a time, so every tracker hands out the
    same Progress instance. Use it as a context manager:

        with ProgressTracker() as progress:
            task = progress.add_task("Processing 3 treebanks", total=3)
            progress.update(task, advance=1)
    """

    _progress: Optional[Progress] = None
    _depth: int = 0

    def __init__(self, transient: bool = True, disable: bool = False):
        self.transient = transient
        self.disable = disable

    def __enter__(self) -> Progress:
        cls = type(self)
        if cls._progress is None:
            cls._progress = Progress(
                SpinnerColumn(),
                *Progress.get_default_columns(),
                transient=self.transient,
                disable=self.disable,
            )
            cls._progress.start()
        cls._depth += 1
        return cls._progress

    def __exit__(self, *args):
        cls = type(self)
        cls._depth = max(0, cls._depth - 1)
        if cls._depth == 0:
            self.force_stop()

    def force_stop(self) -> None:
        """Stop the live display, whatever the nesting depth."""
        cls = type(self)
        if cls._progress is not None:
            try:
                cls._progress.stop()
            except Exception as e:
                logger.warning(f"Progress stop failed: {e}")
            cls._progress = None
        cls._depth = 0
