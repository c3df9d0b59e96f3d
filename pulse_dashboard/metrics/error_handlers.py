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
"""Translates metrics errors into JSON error responses."""
from http import HTTPStatus

from flask import Flask, Response

from pulse_dashboard.metrics.exceptions import (
    MetricDecodeError,
    MetricRetrievalError,
    UnknownMetricTypeError,
)
from pulse_dashboard.utils.flask_exception import FlaskException


def handle_flask_exception(ex: FlaskException) -> Response:
    return ex.to_response()


def handle_unknown_metric_type_error(error: UnknownMetricTypeError) -> Response:
    return FlaskException(
        code="metric_not_enabled",
        description=error.message,
        status_code=HTTPStatus.BAD_REQUEST,
    ).to_response()


def handle_metric_retrieval_error(error: MetricRetrievalError) -> Response:
    return FlaskException(
        code="metric_retrieval_error",
        description=error.message,
        status_code=HTTPStatus.BAD_GATEWAY,
    ).to_response()


def handle_metric_decode_error(error: MetricDecodeError) -> Response:
    return FlaskException(
        code="metric_decode_error",
        description=error.message,
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
    ).to_response()


def register_error_handlers(app: Flask) -> None:
    """Registers error handlers"""
    app.errorhandler(FlaskException)(handle_flask_exception)
    app.errorhandler(UnknownMetricTypeError)(handle_unknown_metric_type_error)
    app.errorhandler(MetricRetrievalError)(handle_metric_retrieval_error)
    app.errorhandler(MetricDecodeError)(handle_metric_decode_error)
