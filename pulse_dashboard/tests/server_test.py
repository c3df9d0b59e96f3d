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
"""Tests for the metrics API server"""
import datetime
from http import HTTPStatus
from typing import Any
from unittest import TestCase
from unittest.mock import patch

from flask import Flask

from pulse_dashboard import server
from pulse_dashboard.metrics.metric_cache import MetricCache
from pulse_dashboard.metrics.metric_fetcher import MetricFetcher
from pulse_dashboard.metrics.metric_files import FILES_BY_METRIC_TYPE, MetricType
from pulse_dashboard.metrics.metrics_config import (
    DEFAULT_DEMO_DATA_DIR,
    MetricsCacheConfig,
)
from pulse_dashboard.metrics.metrics_refresh import MetricsRefresher
from pulse_dashboard.server import create_app
from pulse_dashboard.tests.cloud_storage.fake_gcs_file_system import FakeGCSFileSystem


class ServerTest(TestCase):
    """Tests for the Flask app served in demo mode"""

    def setUp(self) -> None:
        self.config = MetricsCacheConfig(
            bucket_name="demo",
            cache_ttl=datetime.timedelta(hours=1),
            refresh_interval=datetime.timedelta(minutes=30),
            state_codes=("US_MO", "US_ND"),
            demo_data_dir=DEFAULT_DEMO_DATA_DIR,
        )
        self.app = create_app(self.config)
        self.client = self.app.test_client()

    def test_health(self) -> None:
        response = self.client.get("/health")

        self.assertEqual(HTTPStatus.OK, response.status_code)
        self.assertEqual("no-store, max-age=0", response.headers["Cache-Control"])

    def test_serves_demo_metrics(self) -> None:
        response = self.client.get("/api/US_ND/revocations")

        self.assertEqual(HTTPStatus.OK, response.status_code)
        self.assertEqual("no-store, max-age=0", response.headers["Cache-Control"])
        body = response.get_json()
        self.assertEqual(
            {
                file_name[: -len(".json")]
                for file_name in FILES_BY_METRIC_TYPE[MetricType.REVOCATION]
            },
            set(body),
        )
        for records in body.values():
            self.assertTrue(records)
            self.assertEqual("US_DEMO", records[0]["state_code"])

    def test_every_metric_group_is_served(self) -> None:
        for metric_group in (
            "programEval",
            "reincarcerations",
            "revocations",
            "snapshots",
        ):
            response = self.client.get(f"/api/US_MO/{metric_group}")
            self.assertEqual(HTTPStatus.OK, response.status_code, metric_group)

    def test_error_response(self) -> None:
        response = self.client.get("/api/US_XX/revocations")

        self.assertEqual(HTTPStatus.BAD_REQUEST, response.status_code)
        self.assertEqual("state_not_enabled", response.get_json()["code"])
        self.assertEqual("no-store, max-age=0", response.headers["Cache-Control"])

    def test_one_refresh_timer_per_metric_type(self) -> None:
        self.assertEqual(
            list(FILES_BY_METRIC_TYPE),
            [timer.metric_type for timer in self.app.metrics_refresher.timers],
        )

    def test_worker_initialization_skips_refresh_in_demo_mode(self) -> None:
        with patch.object(self.app.metrics_refresher, "start") as mock_start:
            self.app.initialize_worker_process()
        mock_start.assert_not_called()

    def test_worker_initialization_starts_refresh(self) -> None:
        app = create_app(
            MetricsCacheConfig(
                bucket_name="dashboard-data",
                cache_ttl=datetime.timedelta(hours=1),
                refresh_interval=datetime.timedelta(minutes=30),
                state_codes=("US_ND",),
            ),
            metric_cache=self.app.metrics_refresher.timers[0].metric_cache,
        )

        with patch.object(app.metrics_refresher, "start") as mock_start, patch(
            "pulse_dashboard.server.in_test", return_value=False
        ):
            app.initialize_worker_process()
        mock_start.assert_called_once()


class ServerMainTest(TestCase):
    """Tests for running the server outside of gunicorn"""

    @patch.dict("os.environ", {"METRIC_BUCKET": "dashboard-data", "PORT": "9000"})
    @patch.object(server.structured_logging, "setup")
    @patch.object(server, "in_test", return_value=False)
    @patch.object(Flask, "run")
    @patch.object(MetricsRefresher, "start")
    @patch.object(MetricCache, "build")
    def test_main_starts_refresh_before_serving(
        self,
        mock_build: Any,
        mock_start: Any,
        mock_run: Any,
        _mock_in_test: Any,
        _mock_setup: Any,
    ) -> None:
        mock_build.return_value = MetricCache(
            metric_fetcher=MetricFetcher(
                gcs_fs=FakeGCSFileSystem(), bucket_name="dashboard-data"
            ),
            ttl=datetime.timedelta(hours=1),
        )
        mock_run.side_effect = lambda **_kwargs: mock_start.assert_called_once()

        server.main()

        mock_run.assert_called_once_with(host="0.0.0.0", port=9000)
