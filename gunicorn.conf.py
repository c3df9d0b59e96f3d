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
"""Configures gunicorn for the metrics API server.

Serve with: gunicorn -c gunicorn.conf.py pulse_dashboard.server:app
"""
import logging
import multiprocessing

from gunicorn.workers.base import Worker

# Every worker process holds its own in-memory metrics cache and runs its own
# scheduled refresh, so more workers means more downloads from GCS. Prefer threads.
workers = min(multiprocessing.cpu_count(), 2)
threads = 8
# Use a threaded worker
worker_class = "gthread"
timeout = 120
loglevel = "info"
keepalive = 650


def post_worker_init(worker: Worker) -> None:
    logging.info("Running post_worker_init for worker %s", worker)
    flask_app = worker.app.callable
    # attribute is expected to be defined in `pulse_dashboard/server.py`
    if hasattr(flask_app, "initialize_worker_process"):
        flask_app.initialize_worker_process()
