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
"""Implements routes for the metrics API Flask blueprint."""
from http import HTTPStatus
from typing import Dict, Sequence

from flask import Blueprint, Response, jsonify

from pulse_dashboard.metrics.exceptions import UnknownMetricTypeError
from pulse_dashboard.metrics.metric_cache import MetricCache
from pulse_dashboard.metrics.metric_files import MetricType
from pulse_dashboard.utils.flask_exception import FlaskException

# Maps the dashboard's metric group in the URL to the metric type that backs it
METRIC_TYPES_BY_GROUP: Dict[str, MetricType] = {
    "programEval": MetricType.PROGRAM_EVAL,
    "reincarcerations": MetricType.REINCARCERATION,
    "revocations": MetricType.REVOCATION,
    "snapshots": MetricType.SNAPSHOT,
}


class StateNotEnabledError(FlaskException):
    def __init__(self, state_code: str) -> None:
        super().__init__(
            code="state_not_enabled",
            description=f"Metrics are not enabled for [{state_code}]",
            status_code=HTTPStatus.BAD_REQUEST,
        )


def create_metrics_api_blueprint(
    metric_cache: MetricCache, state_codes: Sequence[str]
) -> Blueprint:
    """Creates the API blueprint serving cached metrics for |state_codes|"""
    api = Blueprint("metrics", __name__)
    enabled_state_codes = {state_code.upper() for state_code in state_codes}

    @api.get("/<state_code>/<metric_group>")
    def metrics(state_code: str, metric_group: str) -> Response:
        state_code = state_code.upper()
        if state_code not in enabled_state_codes:
            raise StateNotEnabledError(state_code)

        try:
            metric_type = METRIC_TYPES_BY_GROUP[metric_group]
        except KeyError as e:
            raise UnknownMetricTypeError(metric_group) from e

        return jsonify(metric_cache.fetch(state_code, metric_type))

    return api
