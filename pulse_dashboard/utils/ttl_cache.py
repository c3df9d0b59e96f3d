# Recidiviz - a data platform for criminal justice reform
# Copyright (C) 2026 Recidiviz, Inc.
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
# =============================================================================
"""An in-memory cache whose entries expire a fixed time after they are created.

Reads never extend an entry's lifetime, so values are refreshed at a predictable
cadence regardless of traffic. Refreshes are single-flight: while a value for a key
is being produced, every other caller asking for that key waits for, and receives,
the outcome of that one producer call.
"""
import datetime
import logging
import threading
from concurrent import futures
from typing import Callable, Dict, Generic, Hashable, Optional, TypeVar

import attr

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


def _utc_now() -> datetime.datetime:
    return datetime.datetime.now(tz=datetime.timezone.utc)


@attr.define(frozen=True)
class CacheEntry(Generic[V]):
    value: V
    created_at: datetime.datetime

    def is_fresh(self, now: datetime.datetime, ttl: datetime.timedelta) -> bool:
        return now < self.created_at + ttl


class TTLCache(Generic[K, V]):
    """Keyed cache with creation-time expiry and single-flight refreshes.

    Entries are never evicted. A stale entry stays in place until a refresh for its
    key succeeds, at which point it is replaced wholesale. A failed refresh leaves the
    previous entry, and its original creation time, untouched, and the stale value
    keeps being served until a later refresh succeeds.
    """

    def __init__(self, clock: Callable[[], datetime.datetime] = _utc_now) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        # Both protected by _lock
        self._entries: Dict[K, CacheEntry[V]] = {}
        self._pending: Dict[K, "futures.Future[V]"] = {}

    def get_or_refresh(
        self,
        key: K,
        ttl: datetime.timedelta,
        producer: Callable[[], V],
        serve_stale_on_error: bool = True,
    ) -> V:
        """Returns the cached value for |key| if it is younger than |ttl|. Otherwise,
        calls |producer| to build a new value, caches and returns it. If a refresh for
        |key| is already in flight, waits for it instead of calling |producer|.

        If |producer| fails and |key| has never been cached, the exception is raised
        to the caller that invoked it and to every caller that waited on it. If a
        stale value is cached, waiters receive the stale value instead, as does the
        invoking caller unless |serve_stale_on_error| is False, in which case the
        exception is raised to it.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.is_fresh(self._clock(), ttl):
                return entry.value

            pending = self._pending.get(key)
            is_producer = pending is None
            if pending is None:
                pending = futures.Future()
                self._pending[key] = pending

        if not is_producer:
            return pending.result()

        try:
            value = producer()
        except BaseException as e:
            with self._lock:
                del self._pending[key]
            if entry is None or not isinstance(e, Exception):
                pending.set_exception(e)
                raise

            pending.set_result(entry.value)
            if not serve_stale_on_error:
                raise
            logging.error(
                "Refresh of [%s] failed, serving value cached at [%s]: <%s> %s",
                key,
                entry.created_at.isoformat(),
                type(e).__name__,
                e,
            )
            return entry.value

        with self._lock:
            self._entries[key] = CacheEntry(value=value, created_at=self._clock())
            del self._pending[key]
        pending.set_result(value)
        return value

    def entry_for(self, key: K) -> Optional[CacheEntry[V]]:
        """Returns the current entry for |key|, fresh or not, without refreshing it."""
        with self._lock:
            return self._entries.get(key)
