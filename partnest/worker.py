"""Background worker that takes nesting jobs one by one from a queue."""

from __future__ import annotations

import queue
import threading
from typing import Callable

from .job import ErrorType, Input, JobError, Status, Update
from .nesting_runner import NestingRunner

UpdateCallback = Callable[[str], None]

_STOP = object()


class JobWorker:
    """Runs submitted jobs in order on a single background thread.

    Each update is handed to the job's callback as a JSON string.
    """

    def __init__(self) -> None:
        self._queue: queue.Queue = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False
        self._thread = threading.Thread(target=self._run, name="nesting-worker", daemon=True)
        self._thread.start()

    def __enter__(self) -> JobWorker:
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    def add_job(self, payload: str | bytes, update_callback: UpdateCallback) -> None:
        """Parse a JSON job description and queue it."""
        job = Input.from_json(payload)
        with self._lock:
            if self._closed:
                raise RuntimeError("the worker has been stopped")
            self._queue.put((job, update_callback))

    def stop(self) -> None:
        """Finish the queued jobs and end the worker thread."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(_STOP)
        self._thread.join()

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            if item is _STOP:
                return
            job, update_callback = item
            self._process(job, update_callback)

    @staticmethod
    def _process(job: Input, update_callback: UpdateCallback) -> None:
        def send(update: Update) -> None:
            update_callback(update.to_json())

        try:
            runner = NestingRunner(job, send)
        except (ValueError, ZeroDivisionError) as exc:
            send(
                Update(
                    status=Status.FAILED,
                    error=JobError(error_type=ErrorType.INVALID_INPUT, message=str(exc)),
                )
            )
            return
        runner.start()


_worker: JobWorker | None = None
_worker_lock = threading.Lock()


def init() -> None:
    """Start the shared worker, replacing any previous one."""
    global _worker
    with _worker_lock:
        previous, _worker = _worker, JobWorker()
    if previous is not None:
        previous.stop()


def add_job(payload: str | bytes, update_callback: UpdateCallback) -> None:
    """Queue a job on the shared worker; without one, the job is only validated."""
    with _worker_lock:
        worker = _worker
    if worker is None:
        Input.from_json(payload)
        return
    worker.add_job(payload, update_callback)