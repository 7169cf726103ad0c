"""
Worker Pool - Ordered parallel execution for build steps

Decoding sources and synthesizing frames are independent per item, so they
can run on worker threads. Results always come back in input order, and a
failure in any item fails the whole map.

Usage:
    pool = WorkerPool(max_workers=4)
    frames = pool.map_ordered(make_frame, sizes)
"""

import logging
import threading
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Any, Callable, Dict, Iterable, List

logger = logging.getLogger(__name__)


@dataclass
class _Task:
    """One item of a map_ordered call."""
    index: int
    item: Any


class WorkerPool:
    """
    Runs a function over a list of items on a fixed number of threads.

    Workers are started per map_ordered call and joined before it returns,
    so the pool holds no threads between calls. With max_workers <= 1 the
    items are processed inline on the calling thread.
    """

    def __init__(self, max_workers: int = 1, name: str = "worker"):
        """
        Initialize worker pool.

        Args:
            max_workers: Maximum concurrent workers
            name: Prefix for worker thread names
        """
        self.max_workers = max(1, int(max_workers))
        self.name = name

    def map_ordered(self, func: Callable[[Any], Any], items: Iterable[Any]) -> List[Any]:
        """
        Apply func to every item.

        Args:
            func: Callable taking one item
            items: Items to process

        Returns:
            Results in the same order as items

        Raises:
            Exception: The error raised by the earliest failing item
        """
        items = list(items)
        if self.max_workers == 1 or len(items) <= 1:
            return [func(item) for item in items]

        queue: Queue = Queue()
        for index, item in enumerate(items):
            queue.put(_Task(index=index, item=item))

        results: Dict[int, Any] = {}
        errors: Dict[int, BaseException] = {}
        lock = threading.Lock()
        failed = threading.Event()

        def worker_loop() -> None:
            while not failed.is_set():
                try:
                    task = queue.get_nowait()
                except Empty:
                    return
                try:
                    result = func(task.item)
                except Exception as e:
                    with lock:
                        errors[task.index] = e
                    failed.set()
                    return
                with lock:
                    results[task.index] = result

        worker_count = min(self.max_workers, len(items))
        workers = [
            threading.Thread(target=worker_loop, name=f"{self.name}-{i}", daemon=True)
            for i in range(worker_count)
        ]
        for worker in workers:
            worker.start()
        logger.debug(f"Started {worker_count} {self.name} workers for {len(items)} items")

        for worker in workers:
            worker.join()

        if errors:
            first = min(errors)
            raise errors[first]

        return [results[index] for index in range(len(items))]

