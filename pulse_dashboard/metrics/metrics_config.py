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
"""Startup configuration for the metrics cache, read from environment variables."""
import datetime
import os
from typing import Any, Mapping, Optional, Tuple

import attr

DEFAULT_METRIC_CACHE_TTL_SECONDS = 60 * 60  # Expire items in the cache after 1 hour
DEFAULT_METRIC_REFRESH_INTERVAL_SECONDS = 60 * 30  # Refresh metrics every 30 minutes
DEFAULT_CACHED_STATE_CODES = ("US_MO", "US_ND")
DEMO_BUCKET_NAME = "demo"
DEFAULT_DEMO_DATA_DIR = os.path.join(
    os.path.dirname(os.path.realpath(__file__)), "demo_data"
)


def _positive_timedelta(
    _instance: Any, attribute: attr.Attribute, value: datetime.timedelta
) -> None:
    if value <= datetime.timedelta(0):
        raise ValueError(f"[{attribute.name}] must be positive, found [{value}]")


def _non_empty(_instance: Any, attribute: attr.Attribute, value: Tuple) -> None:
    if not value:
        raise ValueError(f"[{attribute.name}] must be non-empty")


def _parse_seconds(
    env: Mapping[str, str], name: str, default: int
) -> datetime.timedelta:
    raw_value = env.get(name)
    if not raw_value:
        return datetime.timedelta(seconds=default)
    try:
        return datetime.timedelta(seconds=int(raw_value))
    except ValueError as e:
        raise ValueError(
            f"Expected an integer number of seconds for [{name}], found [{raw_value}]"
        ) from e


def _parse_state_codes(raw_value: Optional[str]) -> Tuple[str, ...]:
    if raw_value is None:
        return DEFAULT_CACHED_STATE_CODES
    return tuple(
        state_code.strip().upper()
        for state_code in raw_value.split(",")
        if state_code.strip()
    )


@attr.define(frozen=True, kw_only=True)
class MetricsCacheConfig:
    """Where metric files live, how long they are cached and which states are kept
    warm by the scheduled refresh."""

    bucket_name: str = attr.ib(validator=attr.validators.min_len(1))
    cache_ttl: datetime.timedelta = attr.ib(validator=_positive_timedelta)
    refresh_interval: datetime.timedelta = attr.ib(validator=_positive_timedelta)
    state_codes: Tuple[str, ...] = attr.ib(converter=tuple, validator=_non_empty)
    # Set only in demo mode, where metrics are served from local files.
    demo_data_dir: Optional[str] = None

    @property
    def demo_mode(self) -> bool:
        return self.demo_data_dir is not None

    @classmethod
    def from_environment(
        cls, env: Optional[Mapping[str, str]] = None
    ) -> "MetricsCacheConfig":
        """Reads the configuration from |env| (defaults to os.environ)."""
        env = os.environ if env is None else env

        demo_data_dir: Optional[str] = None
        if env.get("IS_DEMO") == "true":
            demo_data_dir = env.get("DEMO_DATA_DIR") or DEFAULT_DEMO_DATA_DIR

        bucket_name = env.get("METRIC_BUCKET", "")
        if not bucket_name:
            if demo_data_dir is None:
                raise ValueError("Missing METRIC_BUCKET environment variable")
            bucket_name = DEMO_BUCKET_NAME

        return cls(
            bucket_name=bucket_name,
            cache_ttl=_parse_seconds(
                env, "METRIC_CACHE_TTL_SECONDS", DEFAULT_METRIC_CACHE_TTL_SECONDS
            ),
            refresh_interval=_parse_seconds(
                env,
                "METRIC_REFRESH_INTERVAL_SECONDS",
                DEFAULT_METRIC_REFRESH_INTERVAL_SECONDS,
            ),
            state_codes=_parse_state_codes(env.get("CACHED_STATE_CODES")),
            demo_data_dir=demo_data_dir,
        )
