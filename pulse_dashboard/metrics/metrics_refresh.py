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
"""Utilities for automatically refreshing metric caches on a scheduled interval.

Metrics are cached in memory as they are updated relatively infrequently (on the
order of hours), see metric_cache.py. Fetching through the MetricCache performs a
cache check: if the TTL has expired then the metrics are re-retrieved and cached
again, otherwise the cached metrics are returned straight away. Because of this,
some scheduled refreshes do not actually trigger a download. The cache does not
reset the TTL on reads, so this is okay.
"""
import datetime
import logging
import threading
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from pulse_dashboard.metrics.metric_cache import MetricCache
from pulse_dashboard.metrics.metric_files import MetricType
from pulse_dashboard.metrics.metrics_config import MetricsCacheConfig


class RefreshState(Enum):
    IDLE = "IDLE"
    REFRESHING = "REFRESHING"


class MetricRefreshTimer(threading.Thread):
    """Background thread that refreshes the cache for one metric type, for every
    tracked state, immediately on start and then once every |refresh_interval|."""

    def __init__(
        self,
        *,
        metric_cache: MetricCache,
        metric_type: MetricType,
        state_codes: Sequence[str],
        refresh_interval: datetime.timedelta,
    ):
        super().__init__(name=f"metric_refresh_{metric_type.value}", daemon=True)
        self.metric_cache = metric_cache
        self.metric_type = metric_type
        self.state_codes = tuple(state_codes)
        self.refresh_interval = refresh_interval

        self.stop_event = threading.Event()
        self.state = RefreshState.IDLE
        self.completed_refreshes = 0

    def run(self) -> None:
        while True:
            self.refresh()
            # Will be true if we didn't wait for the full interval (e.g. stop() is called)
            is_set = self.stop_event.wait(
                timeout=self.refresh_interval.total_seconds()
            )
            if is_set:
                break

    def refresh(self) -> None:
        """Performs a refresh of this metric type's caches, logging success or failure
        for each state. Never raises: the next scheduled refresh is the retry."""
        self.state = RefreshState.REFRESHING
        try:
            for state_code in self.state_codes:
                try:
                    self.metric_cache.fetch(
                        state_code, self.metric_type, serve_stale_on_error=False
                    )
                except Exception as e:
                    logging.error(
                        "Encountered error during scheduled fetch-and-cache of [%s] metrics for [%s]: <%s> %s",
                        self.metric_type.value,
                        state_code,
                        type(e).__name__,
                        e,
                    )
                else:
                    logging.info(
                        "Executed scheduled fetch-and-cache of [%s] metrics for [%s]",
                        self.metric_type.value,
                        state_code,
                    )
        finally:
            self.state = RefreshState.IDLE
            self.completed_refreshes += 1

    def stop(self) -> None:
        self.stop_event.set()


class MetricsRefresher:
    """Keeps the cache warm for every metric type, with one independent timer per
    type so that a slow or failing type does not hold up the others."""

    def __init__(
        self,
        *,
        metric_cache: MetricCache,
        state_codes: Sequence[str],
        refresh_interval: datetime.timedelta,
        metric_types: Optional[Iterable[MetricType]] = None,
    ):
        if metric_types is None:
            metric_types = metric_cache.metric_fetcher.catalog.metric_types

        self.timers: List[MetricRefreshTimer] = [
            MetricRefreshTimer(
                metric_cache=metric_cache,
                metric_type=metric_type,
                state_codes=state_codes,
                refresh_interval=refresh_interval,
            )
            for metric_type in metric_types
        ]

    def start(self) -> None:
        for timer in self.timers:
            timer.start()

    def stop(self) -> None:
        for timer in self.timers:
            timer.stop()

    def join(self, timeout: Optional[float] = None) -> None:
        for timer in self.timers:
            timer.join(timeout=timeout)

    @classmethod
    def build(
        cls, metric_cache: MetricCache, config: MetricsCacheConfig
    ) -> "MetricsRefresher":
        return MetricsRefresher(
            metric_cache=metric_cache,
            state_codes=config.state_codes,
            refresh_interval=config.refresh_interval,
        )
