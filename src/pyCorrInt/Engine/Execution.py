"""Execution strategies for pyCorrInt block computations.

Anchor blocks are independent, so they can be computed sequentially or
farmed out to joblib workers. Every strategy returns results in the
order of its input, which keeps the output identical across modes.
A CancellationToken is checked between dispatch waves.
"""

import logging
import threading
from abc import ABC, abstractmethod
from enum import Enum
from itertools import islice
from typing import Callable, Iterable, Optional

from joblib import Parallel, delayed, cpu_count

from ..Errors import AnalysisCancelled

logger = logging.getLogger(__name__)


class ExecutionMode(Enum):
    """Enumeration of execution strategies.

    Attributes
    ----------
    SEQUENTIAL : str
        Sequential execution (no parallelism)
    THREADS : str
        joblib threading backend. Workers share the embedding in memory.
    PROCESSES : str
        joblib loky backend (separate worker processes)
    """
    SEQUENTIAL = "sequential"
    THREADS = "threads"
    PROCESSES = "processes"


class CancellationToken:
    """Cooperative cancellation flag shared between a caller and a run.

    Examples
    --------
    >>> token = CancellationToken()
    >>> # from another thread
    >>> token.cancel()
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        """Request cancellation."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self):
        """Raise AnalysisCancelled if cancel() has been called."""
        if self._event.is_set():
            raise AnalysisCancelled('Analysis cancelled.')


class ExecutionStrategy(ABC):
    """Abstract base class for execution strategies."""

    @abstractmethod
    def map(self, func: Callable, iterable: Iterable,
            token: Optional[CancellationToken] = None):
        """Execute function over iterable.

        Parameters
        ----------
        func : callable
            Function to execute
        iterable : iterable
            Iterable of argument tuples to pass to func
        token : CancellationToken, optional
            Checked before each dispatch wave

        Returns
        -------
        list
            Results from executing func over iterable, in input order

        Raises
        ------
        AnalysisCancelled
            If the token is cancelled before all work is dispatched
        """
        pass


class SequentialExecution(ExecutionStrategy):
    """Sequential execution strategy (no parallelism).

    Useful for debugging or for short series where worker startup
    exceeds the cost of the distance computation.
    """

    def map(self, func, iterable, token = None):
        results = []
        for args in iterable:
            if token is not None:
                token.raise_if_cancelled()
            results.append(func(*args))
        return results


class JoblibExecution(ExecutionStrategy):
    """joblib execution strategy.

    Parameters
    ----------
    numWorkers : int, optional
        Number of workers. If None, uses joblib.cpu_count()
    backend : str, default='threading'
        joblib backend, 'threading' or 'loky'
    chunksize : int, default=1
        Number of tasks dispatched per worker in each wave
    """

    def __init__(self, numWorkers: Optional[int] = None,
                 backend: str = 'threading',
                 chunksize: int = 1):
        self.numWorkers = numWorkers or cpu_count()
        self.backend = backend
        self.chunksize = chunksize

    def map(self, func, iterable, token = None):
        """Execute function in parallel, one wave of
        numWorkers * chunksize tasks at a time.
        """
        waveSize = self.numWorkers * self.chunksize
        iterator = iter(iterable)
        results = []

        logger.info(f'Dispatching to {self.numWorkers} {self.backend} workers')

        with Parallel(n_jobs = self.numWorkers, backend = self.backend) as parallel:
            while True:
                wave = list(islice(iterator, waveSize))
                if not wave:
                    break
                if token is not None and token.cancelled:
                    logger.info(f'Cancelled after {len(results)} tasks')
                    token.raise_if_cancelled()
                results.extend(parallel(delayed(func)(*args) for args in wave))

        return results


def create_executor(
    mode: ExecutionMode = ExecutionMode.SEQUENTIAL,
    numWorkers: Optional[int] = None,
    chunksize: int = 1
) -> ExecutionStrategy:
    """Factory function to create execution strategy from enum.

    Parameters
    ----------
    mode : ExecutionMode, default=ExecutionMode.SEQUENTIAL
        Execution mode to use
    numWorkers : int, optional
        Number of workers (ignored for SEQUENTIAL mode)
    chunksize : int, default=1
        Tasks per worker per wave (ignored for SEQUENTIAL mode)

    Returns
    -------
    ExecutionStrategy
        Configured execution strategy

    Raises
    ------
    ValueError
        If mode is not a valid ExecutionMode

    Examples
    --------
    >>> executor = create_executor(ExecutionMode.THREADS, numWorkers=4)
    >>> results = executor.map(my_function, arguments)
    """
    if mode == ExecutionMode.SEQUENTIAL:
        return SequentialExecution()
    elif mode == ExecutionMode.THREADS:
        return JoblibExecution(numWorkers = numWorkers, backend = 'threading',
                               chunksize = chunksize)
    elif mode == ExecutionMode.PROCESSES:
        return JoblibExecution(numWorkers = numWorkers, backend = 'loky',
                               chunksize = chunksize)
    else:
        raise ValueError(f"Unknown execution mode: {mode}")
