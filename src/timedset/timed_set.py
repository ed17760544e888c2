import time
from datetime import timedelta
from numbers import Real

from .exceptions import MissingTtlError
from .logging import get_logger

from typing import Callable, Dict, Generic, Hashable, Iterator, Optional, TypeVar, Union

T = TypeVar('T', bound=Hashable)
Ttl = Union[float, int, timedelta]


def ttl_to_seconds(ttl: Ttl) -> float:
    """
    convert ttl given as number of seconds or timedelta into float seconds

    negative values are NOT clamped here, TimedSet does that when computing deadlines
    """
    if isinstance(ttl, timedelta):
        return ttl.total_seconds()
    if isinstance(ttl, bool) or not isinstance(ttl, Real):
        raise TypeError(f'ttl must be a number of seconds or a timedelta, not {type(ttl).__name__}')
    return float(ttl)


class TimedSet(Generic[T]):
    """
    Set of hashable values, each one expiring after its own deadline.

    Expiration is lazy: nothing is evicted by a timer.
    An entry is physically removed only when it is overwritten by another add of the same value,
    discarded explicitly, or visited by the draining iterator.

    Iteration is DESTRUCTIVE and single-use: iterating over the set (or over ts.iter())
    removes every visited entry, alive or expired, and yields only the ones that are still alive.
    After an iterator is fully consumed the set is empty.

    Not thread-safe. Wrap the whole set with a lock if it has to be shared.
    """

    def __init__(self, ttl: Optional[Ttl] = None, *, clock: Callable[[], float] = time.monotonic):
        """
        :param ttl: default time-to-live in seconds (or timedelta) used by add(),
                    if None - every add must provide its own ttl
        :param clock: source of current time, monotonic by default
        """
        self.__default_ttl: Optional[float] = None if ttl is None else ttl_to_seconds(ttl)
        self.__clock = clock
        self.__entries: Dict[T, float] = {}

    @property
    def default_ttl(self) -> Optional[float]:
        return self.__default_ttl

    def add(self, val: T, ttl: Optional[Ttl] = None):
        """
        add val, or refresh its deadline if it's already in the set

        :param val: hashable value
        :param ttl: time-to-live, if not given - default one is used
        """
        if ttl is None:
            if self.__default_ttl is None:
                raise MissingTtlError('this set has no default ttl, ttl must be provided')
            lifetime = self.__default_ttl
        else:
            lifetime = ttl_to_seconds(ttl)
        self.__set_deadline(val, lifetime)

    def add_with_ttl(self, val: T, ttl: Ttl):
        """
        add val with explicit ttl, ignoring the default one
        """
        self.__set_deadline(val, ttl_to_seconds(ttl))

    def __set_deadline(self, val: T, lifetime: float):
        # zero or negative lifetime means already expired
        self.__entries[val] = self.__clock() + max(lifetime, 0.0)

    def contains(self, val: T) -> bool:
        """
        check if val is in the set and not yet expired.
        expired entries are NOT removed by this check
        """
        deadline = self.__entries.get(val)
        if deadline is None:
            return False
        return self.__clock() < deadline

    def __contains__(self, val) -> bool:
        return self.contains(val)

    def deadline_of(self, val: T) -> Optional[float]:
        """
        get the deadline of val in terms of this set's clock, or None if val is absent or expired
        """
        deadline = self.__entries.get(val)
        if deadline is None or self.__clock() >= deadline:
            return None
        return deadline

    def discard(self, val: T):
        self.__entries.pop(val, None)

    def __len__(self) -> int:
        now = self.__clock()
        return sum(1 for deadline in self.__entries.values() if now < deadline)

    def iter(self) -> "TimedSetDrain[T]":
        """
        get a draining iterator over this set.
        see TimedSetDrain
        """
        return TimedSetDrain(self.__entries, self.__clock)

    def __iter__(self) -> "TimedSetDrain[T]":
        return self.iter()

    def __repr__(self):
        return f'<{self.__class__.__name__} default_ttl={self.__default_ttl}, stored={len(self.__entries)}>'


class TimedSetDrain(Iterator[T]):
    """
    One-pass destructive iterator over TimedSet storage.

    Each step pops entries from the shared storage until one that is still alive is found,
    expired entries popped on the way are dropped.
    When storage is exhausted - iteration is over, and the set is empty.

    Adding to the set while draining it is not supported: such values may or may not be yielded.
    """
    _logger = get_logger('timed_set')

    def __init__(self, entries: Dict[T, float], clock: Callable[[], float]):
        self.__entries = entries
        self.__clock = clock
        self.__finished = False
        self.__yielded = 0
        self.__discarded = 0

    def __iter__(self) -> "TimedSetDrain[T]":
        return self

    def __next__(self) -> T:
        if self.__finished:
            raise StopIteration()
        while self.__entries:
            val, deadline = self.__entries.popitem()
            if self.__clock() < deadline:
                self.__yielded += 1
                return val
            self.__discarded += 1
        self.__finished = True
        self._logger.debug(f'drain finished: {self.__yielded} yielded, {self.__discarded} expired discarded')
        raise StopIteration()
