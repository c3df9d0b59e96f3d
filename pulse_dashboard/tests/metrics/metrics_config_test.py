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
"""Tests for MetricsCacheConfig"""
import datetime
from unittest import TestCase

from pulse_dashboard.metrics.metrics_config import (
    DEFAULT_DEMO_DATA_DIR,
    MetricsCacheConfig,
)


class MetricsCacheConfigTest(TestCase):
    """Tests for MetricsCacheConfig"""

    def test_defaults(self) -> None:
        config = MetricsCacheConfig.from_environment({"METRIC_BUCKET": "my-bucket"})

        self.assertEqual(
            MetricsCacheConfig(
                bucket_name="my-bucket",
                cache_ttl=datetime.timedelta(hours=1),
                refresh_interval=datetime.timedelta(minutes=30),
                state_codes=("US_MO", "US_ND"),
            ),
            config,
        )
        self.assertFalse(config.demo_mode)

    def test_overrides(self) -> None:
        config = MetricsCacheConfig.from_environment(
            {
                "METRIC_BUCKET": "my-bucket",
                "METRIC_CACHE_TTL_SECONDS": "120",
                "METRIC_REFRESH_INTERVAL_SECONDS": "60",
                "CACHED_STATE_CODES": " us_pa, US_ID ,,",
            }
        )

        self.assertEqual(datetime.timedelta(minutes=2), config.cache_ttl)
        self.assertEqual(datetime.timedelta(minutes=1), config.refresh_interval)
        self.assertEqual(("US_PA", "US_ID"), config.state_codes)

    def test_missing_bucket(self) -> None:
        with self.assertRaisesRegex(ValueError, "METRIC_BUCKET"):
            MetricsCacheConfig.from_environment({})

    def test_invalid_seconds(self) -> None:
        with self.assertRaisesRegex(ValueError, "METRIC_CACHE_TTL_SECONDS"):
            MetricsCacheConfig.from_environment(
                {"METRIC_BUCKET": "my-bucket", "METRIC_CACHE_TTL_SECONDS": "1h"}
            )

    def test_non_positive_interval(self) -> None:
        with self.assertRaises(ValueError):
            MetricsCacheConfig.from_environment(
                {"METRIC_BUCKET": "my-bucket", "METRIC_REFRESH_INTERVAL_SECONDS": "0"}
            )

    def test_no_state_codes(self) -> None:
        with self.assertRaises(ValueError):
            MetricsCacheConfig.from_environment(
                {"METRIC_BUCKET": "my-bucket", "CACHED_STATE_CODES": ","}
            )

    def test_demo_mode(self) -> None:
        config = MetricsCacheConfig.from_environment({"IS_DEMO": "true"})

        self.assertTrue(config.demo_mode)
        self.assertEqual("demo", config.bucket_name)
        self.assertEqual(DEFAULT_DEMO_DATA_DIR, config.demo_data_dir)

        config = MetricsCacheConfig.from_environment(
            {"IS_DEMO": "true", "DEMO_DATA_DIR": "/tmp/demo", "METRIC_BUCKET": "b"}
        )
        self.assertEqual("/tmp/demo", config.demo_data_dir)
        self.assertEqual("b", config.bucket_name)

    def test_demo_flag_must_be_true(self) -> None:
        config = MetricsCacheConfig.from_environment(
            {"IS_DEMO": "false", "METRIC_BUCKET": "my-bucket"}
        )
        self.assertFalse(config.demo_mode)
