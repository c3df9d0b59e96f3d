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
"""Utilities for retrieving and caching metrics for the dashboard.

Metrics are stored in pre-processed json files in Google Cloud Storage. Those files
are pulled down and cached in memory with a TTL. That TTL is unaffected by access to
the cache, so files are re-fetched at a predictable cadence, allowing for updates to
those files to be quickly reflected in the app without frequent requests to GCS.
"""
import datetime
from typing import Optional, Union

import attr

from pulse_dashboard.cloud_storage.gcsfs_factory import GcsfsFactory
from pulse_dashboard.metrics.metric_fetcher import CompositeMetricResult, MetricFetcher
from pulse_dashboard.metrics.metric_files import MetricType
from pulse_dashboard.metrics.metrics_config import MetricsCacheConfig
from pulse_dashboard.utils.ttl_cache import CacheEntry, TTLCache


@attr.define(frozen=True)
class MetricCacheKey:
    state_code: str
    metric_type: MetricType


@attr.s(auto_attribs=True)
class MetricCache:
    """Contains functionality for fetching metrics through the in-memory cache"""

    metric_fetcher: MetricFetcher
    ttl: datetime.timedelta
    cache: TTLCache[MetricCacheKey, CompositeMetricResult] = attr.ib(factory=TTLCache)

    def fetch(
        self,
        state_code: str,
        metric_type: Union[MetricType, str],
        serve_stale_on_error: bool = True,
    ) -> CompositeMetricResult:
        """Returns the metrics of |metric_type| for |state_code|, fetching them from
        storage if they are not cached or were cached longer than the TTL ago.

        If that fetch fails, the previously cached metrics are returned if there are
        any. Errors are only raised for metrics that have never been cached, or when
        |serve_stale_on_error| is False.
        """
        resolved_metric_type = self.metric_fetcher.catalog.resolve(metric_type)

        return self.cache.get_or_refresh(
            MetricCacheKey(state_code=state_code, metric_type=resolved_metric_type),
            self.ttl,
            lambda: self.metric_fetcher.fetch(resolved_metric_type, state_code),
            serve_stale_on_error=serve_stale_on_error,
        )

    def cached_entry(
        self, state_code: str, metric_type: MetricType
    ) -> Optional[CacheEntry[CompositeMetricResult]]:
        return self.cache.entry_for(
            MetricCacheKey(state_code=state_code, metric_type=metric_type)
        )

    @classmethod
    def build(cls, config: MetricsCacheConfig) -> "MetricCache":
        return MetricCache(
            metric_fetcher=MetricFetcher(
                gcs_fs=GcsfsFactory.build(demo_data_dir=config.demo_data_dir),
                bucket_name=config.bucket_name,
            ),
            ttl=config.cache_ttl,
        )
