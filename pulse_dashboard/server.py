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
"""Backend entry point for the dashboard metrics API server.

In production the app is served by gunicorn (see gunicorn.conf.py), which starts the
scheduled metric refresh in each worker once it has booted. Running this module
directly serves the app with the Flask development server and starts the refresh
before serving the first request.
"""
import logging
import os
from http import HTTPStatus
from typing import Optional, Tuple

from flask import Flask, Response

from pulse_dashboard.metrics.error_handlers import register_error_handlers
from pulse_dashboard.metrics.metric_cache import MetricCache
from pulse_dashboard.metrics.metrics_config import MetricsCacheConfig
from pulse_dashboard.metrics.metrics_refresh import MetricsRefresher
from pulse_dashboard.metrics.metrics_routes import create_metrics_api_blueprint
from pulse_dashboard.utils import structured_logging
from pulse_dashboard.utils.environment import in_test


def create_app(
    config: MetricsCacheConfig, metric_cache: Optional[MetricCache] = None
) -> Flask:
    """Builds the Flask app serving metrics from |metric_cache| (built from |config|
    if not provided). The scheduled refresh is started per worker process, see
    initialize_worker_process."""
    if metric_cache is None:
        metric_cache = MetricCache.build(config)

    flask_app = Flask(__name__)
    register_error_handlers(flask_app)

    flask_app.register_blueprint(
        create_metrics_api_blueprint(metric_cache, config.state_codes),
        url_prefix="/api",
    )

    @flask_app.route("/health")
    def health() -> Tuple[str, HTTPStatus]:
        """This just returns 200, and is used by Docker and GCP uptime checks to verify that the flask workers are
        up and serving requests."""
        return "", HTTPStatus.OK

    @flask_app.after_request
    def set_headers(response: Response) -> Response:
        # Set cache control to no-store if it isn't already set
        if "Cache-Control" not in response.headers:
            response.headers["Cache-Control"] = "no-store, max-age=0"
        return response

    refresher = MetricsRefresher.build(metric_cache, config)

    def initialize_worker_process() -> None:
        # Each worker process owns its own cache, so each keeps its own cache warm.
        if config.demo_mode or in_test():
            logging.info("Skipping scheduled metric refresh")
            return
        refresher.start()

    flask_app.initialize_worker_process = initialize_worker_process  # type: ignore[attr-defined]
    flask_app.metrics_refresher = refresher  # type: ignore[attr-defined]

    return flask_app


def main() -> None:
    """Serves the app outside of gunicorn, refreshing metrics from process start."""
    structured_logging.setup()
    flask_app = create_app(MetricsCacheConfig.from_environment())
    flask_app.initialize_worker_process()  # type: ignore[attr-defined]

    port = int(os.getenv("PORT", "8080"))
    logging.info("Starting server on port %d", port)
    flask_app.run(host="0.0.0.0", port=port)  # nosec B104


if __name__ == "__main__":
    main()
elif not in_test():
    structured_logging.setup()
    app = create_app(MetricsCacheConfig.from_environment())
