"""Background execution of blocking backend calls with GUI-thread callbacks."""

from typing import Any, Callable, Optional, Set, Tuple
import logging

from PyQt6.QtCore import QThread, pyqtSignal

logger = logging.getLogger(__name__)

# --- Module-level constants ---
CLEANUP_WAIT_MS = 2000    # Wait time per task during shutdown


class BackgroundTask(QThread):
    """
    Runs one blocking callable on a worker thread.

    Results and errors are emitted as signals, so connected slots run on the
    GUI thread. Tasks always run to completion; there is no cancellation.

    Usage:
        task = BackgroundTask(target=api.update_point, args=(point,))
        task.result_ready.connect(on_success)
        task.error_occurred.connect(on_error)  # Receives Exception, not str
        task.start()
    """

    result_ready = pyqtSignal(object)
    error_occurred = pyqtSignal(Exception)  # Full exception, caller decides

    def __init__(self, target: Callable[..., Any], args: Tuple = (), kwargs: dict = None, parent=None):
        super().__init__(parent)
        self._target = target
        self._args = args
        self._kwargs = kwargs or {}

    def run(self):
        """Execute target in background."""
        try:
            result = self._target(*self._args, **self._kwargs)
        except Exception as e:
            self.error_occurred.emit(e)
            return
        self.result_ready.emit(result)


class BackgroundTaskRunner:
    """
    Starts background tasks and keeps them alive until they finish.

    Unlike a single-slot task manager, several tasks may be in flight at
    once (a load and a mutation, for example); none is ever cancelled.

    Usage:
        self._runner = BackgroundTaskRunner()

        self._runner.run(
            target=self._api.delete_point,
            args=(point,),
            on_success=lambda _: self._finish_delete(point),
            on_error=self._report_failure,
        )

        # On shutdown:
        self._runner.cleanup()
    """

    def __init__(self):
        self._tasks: Set[BackgroundTask] = set()

    @property
    def active_count(self) -> int:
        return len(self._tasks)

    def run(
        self,
        target: Callable[..., Any],
        args: Tuple = (),
        kwargs: dict = None,
        on_success: Optional[Callable[[Any], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> BackgroundTask:
        """
        Run ``target`` on a worker thread.

        Args:
            target: Blocking function to execute
            args: Positional arguments for target
            kwargs: Keyword arguments for target
            on_success: Called on the GUI thread with the result
            on_error: Called on the GUI thread with the raised exception

        Returns:
            The started BackgroundTask
        """
        task = BackgroundTask(target=target, args=args, kwargs=kwargs)

        if on_success:
            task.result_ready.connect(on_success)
        if on_error:
            task.error_occurred.connect(on_error)
        task.finished.connect(lambda: self._tasks.discard(task))
        task.finished.connect(task.deleteLater)

        # Hold a reference so the QThread is not collected mid-run
        self._tasks.add(task)
        task.start()
        return task

    def cleanup(self):
        """Wait for in-flight tasks. Call from closeEvent."""
        for task in list(self._tasks):
            if task.isRunning() and not task.wait(CLEANUP_WAIT_MS):
                logger.warning(f"Background task {task._target!r} still running at shutdown")
        self._tasks.clear()
