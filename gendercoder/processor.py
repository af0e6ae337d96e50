"""
Batch gender coding.

`GenderProcessor` classifies batches of first names across a pool of worker
threads and reports progress while the batch runs. Each call to
`classify_batch` gets its own `BatchSession` (queue, results, lock and
remaining counter), so concurrent batches on one processor never share state.

```python
from gendercoder.processor import GenderProcessor, GenderCodingInput

processor = GenderProcessor()
processor.add_progress_listener(lambda fraction: print(f"{fraction:.0%}"))

results = processor.classify_batch(["John Q.", GenderCodingInput("Mary-Jane", unique_id=17)])
[(r.row_index, r.first_name, r.gender) for r in results]
# [(1, 'John Q.', <Gender.MALE>), (2, 'Mary-Jane', <Gender.FEMALE>)]
```
"""

from __future__ import annotations
import os
import queue
import time
import logging
import threading
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Sequence, Set, Tuple, Union

from gendercoder.gender_names import (
    Gender,
    GenderCoderConfig,
    GenderNameLookup,
    LookupResult,
    NameDictionary,
    NormalizationService,
)

ProgressListener = Callable[[float], None]


@dataclass(frozen=True)
class GenderCodingInput:
    """A first name plus a caller identifier carried through to the result."""

    first_name: str
    unique_id: Optional[Any] = None


@dataclass
class GenderCodingResult:
    """One row of a batch. `gender` and `processed` are written once by a single worker."""

    first_name: str
    row_index: int
    unique_id: Optional[Any] = None
    gender: Gender = Gender.UNKNOWN
    processed: bool = False


BatchItem = Union[str, GenderCodingInput, Tuple[str, Any]]


# ════════════════════════════════════════════════════════════════════════════════
# BATCH SESSION
# ════════════════════════════════════════════════════════════════════════════════


class BatchSession:
    """Work queue, results and completion counter for one batch."""

    def __init__(self, results: List[GenderCodingResult]):
        self.results = results
        self._queue: "queue.SimpleQueue[GenderCodingResult]" = queue.SimpleQueue()
        for result in results:
            self._queue.put(result)
        self._lock = threading.Lock()
        self._remaining = len(results)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def remaining(self) -> int:
        with self._lock:
            return self._remaining

    def progress(self) -> float:
        """Fraction of entries completed, in [0.0, 1.0]. An empty batch is complete."""
        if not self.results:
            return 1.0
        with self._lock:
            return (self.total - self._remaining) / self.total

    def next_entry(self) -> Optional[GenderCodingResult]:
        """Non-blocking dequeue. None once the queue is drained."""
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def complete(self, entry: GenderCodingResult, gender: Gender) -> None:
        # gender lands before processed, both before the counter moves
        with self._lock:
            if entry.processed:
                raise RuntimeError(f"Row {entry.row_index} was processed twice")
            entry.gender = gender
            entry.processed = True
            self._remaining -= 1


# ════════════════════════════════════════════════════════════════════════════════
# PROCESSOR
# ════════════════════════════════════════════════════════════════════════════════


class GenderProcessor:
    """Single-name and batch gender classification over a `NameDictionary`."""

    def __init__(self, dictionary: Optional[NameDictionary] = None, config: Optional[GenderCoderConfig] = None):
        if config is None:
            config = dictionary.config if dictionary is not None else GenderCoderConfig.create_default()
        self._config = config
        self._dictionary = dictionary if dictionary is not None else NameDictionary(config)
        self._normalizer = NormalizationService(config)
        self._listeners: List[ProgressListener] = []
        self._listeners_lock = threading.Lock()

    @property
    def config(self) -> GenderCoderConfig:
        return self._config

    @property
    def dictionary(self) -> NameDictionary:
        return self._dictionary

    # Progress listeners
    def add_progress_listener(self, listener: ProgressListener) -> None:
        with self._listeners_lock:
            self._listeners.append(listener)

    def remove_progress_listener(self, listener: ProgressListener) -> None:
        with self._listeners_lock:
            self._listeners.remove(listener)

    # Public API methods
    def classify(self, first_name: Optional[str]) -> Gender:
        return self._new_lookup().classify(first_name)

    def explain(self, first_name: Optional[str]) -> LookupResult:
        return self._new_lookup().lookup(first_name)

    def classify_batch(
        self, names: Iterable[BatchItem], on_progress: Optional[ProgressListener] = None
    ) -> List[GenderCodingResult]:
        """
        Classify every name in `names` and return one result per input, in input order.

        Items may be plain strings, `GenderCodingInput` records or `(name, unique_id)`
        pairs. Progress listeners receive the completed fraction after every poll;
        the last notification is always 1.0.
        """
        session = BatchSession(self._build_results(names))
        lookup = self._new_lookup()
        with self._listeners_lock:
            listeners = list(self._listeners)
        if on_progress is not None:
            listeners.append(on_progress)

        start_time = time.perf_counter()
        if not session.results:
            self._report_progress(session, listeners)
        elif self._config.parallel:
            self._run_parallel(session, lookup, listeners)
        else:
            self._run_sequential(session, lookup, listeners)

        logging.info(f"Gender coded {session.total} names in {time.perf_counter() - start_time:.3f}s")
        return session.results

    # Internals
    def _new_lookup(self) -> GenderNameLookup:
        # Tiers are captured once per lookup, so a refresh mid-batch is not observed
        return GenderNameLookup(self._dictionary.snapshot(), self._normalizer, self._config)

    @staticmethod
    def _build_results(names: Iterable[BatchItem]) -> List[GenderCodingResult]:
        results = []
        for row, item in enumerate(names, start=1):
            if isinstance(item, str):
                results.append(GenderCodingResult(first_name=item, row_index=row))
            elif isinstance(item, GenderCodingInput):
                results.append(GenderCodingResult(first_name=item.first_name, row_index=row, unique_id=item.unique_id))
            elif isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], str):
                results.append(GenderCodingResult(first_name=item[0], row_index=row, unique_id=item[1]))
            else:
                raise TypeError(f"Row {row}: expected a name, GenderCodingInput or (name, id) pair, got {item!r}")
        return results

    @staticmethod
    def _drain(session: BatchSession, lookup: GenderNameLookup) -> int:
        """Worker loop: classify entries until the queue is empty. Returns the number handled."""
        handled = 0
        entry = session.next_entry()
        while entry is not None:
            session.complete(entry, lookup.classify(entry.first_name))
            handled += 1
            entry = session.next_entry()
        return handled

    def _run_parallel(
        self, session: BatchSession, lookup: GenderNameLookup, listeners: Sequence[ProgressListener]
    ) -> None:
        worker_count = self._config.effective_worker_count(os.cpu_count())
        logging.debug(f"Starting {worker_count} gender coding workers for {session.total} names")

        with ThreadPoolExecutor(max_workers=worker_count, thread_name_prefix="gendercoder") as executor:
            pending: Set[Future] = {executor.submit(self._drain, session, lookup) for _ in range(worker_count)}

            while True:
                remaining = session.remaining
                self._report_progress(session, listeners)
                if remaining == 0:
                    break
                if not pending:
                    raise RuntimeError(f"Workers exited with {remaining} names unprocessed")

                done, pending = wait(pending, timeout=self._config.poll_interval, return_when=FIRST_EXCEPTION)
                self._collect_workers(done)

            # Workers still pending here only have an empty queue left
            self._collect_workers(pending)

    @staticmethod
    def _collect_workers(futures: Iterable[Future]) -> None:
        for future in futures:
            handled = future.result()
            logging.debug(f"Gender coding worker finished after {handled} names")

    def _run_sequential(
        self, session: BatchSession, lookup: GenderNameLookup, listeners: Sequence[ProgressListener]
    ) -> None:
        self._report_progress(session, listeners)
        last_report = time.monotonic()

        entry = session.next_entry()
        while entry is not None:
            session.complete(entry, lookup.classify(entry.first_name))
            if time.monotonic() - last_report >= self._config.poll_interval:
                self._report_progress(session, listeners)
                last_report = time.monotonic()
            entry = session.next_entry()

        self._report_progress(session, listeners)

    @staticmethod
    def _report_progress(session: BatchSession, listeners: Sequence[ProgressListener]) -> None:
        fraction = session.progress()
        for listener in listeners:
            listener(fraction)
        logging.debug(f"Gender coding process: {fraction:.3%} complete")


# ════════════════════════════════════════════════════════════════════════════════
# MODULE-LEVEL CONVENIENCE FUNCTIONS
# ════════════════════════════════════════════════════════════════════════════════

# Global processor instance for module-level functions
_global_processor: Optional[GenderProcessor] = None
_global_lock = threading.Lock()


def _get_global_processor() -> GenderProcessor:
    """Get or create the global processor instance."""
    global _global_processor
    with _global_lock:
        if _global_processor is None:
            _global_processor = GenderProcessor()
        return _global_processor


def reset_global_processor() -> None:
    """Drop the global processor so the next call reloads the dictionary."""
    global _global_processor
    with _global_lock:
        _global_processor = None


def get_gender(first_name: Optional[str]) -> Gender:
    """
    Module-level convenience function for single-name classification.

    Args:
        first_name: Raw first name, may include initials or a compound form

    Returns:
        The Gender classification, Gender.UNKNOWN when nothing matches
    """
    return _get_global_processor().classify(first_name)


def explain_name(first_name: Optional[str]) -> LookupResult:
    return _get_global_processor().explain(first_name)


def get_gender_results(
    names: Iterable[BatchItem], on_progress: Optional[ProgressListener] = None
) -> List[GenderCodingResult]:
    """Module-level convenience function for batch classification."""
    return _get_global_processor().classify_batch(names, on_progress=on_progress)
