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
"""Errors raised while fetching and caching dashboard metrics."""
from typing import Optional


class MetricsCacheError(Exception):
    """Base class for errors raised while fetching dashboard metrics."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class MetricCatalogError(ValueError):
    """Raised at startup when the metric file catalog is misconfigured."""


class UnknownMetricTypeError(MetricsCacheError):
    def __init__(self, metric_type: str) -> None:
        self.metric_type = metric_type
        super().__init__(f"No metric files are configured for [{metric_type}]")


class MetricRetrievalError(MetricsCacheError):
    """Raised when a metric file could not be downloaded from storage."""

    def __init__(self, metric_type: str, state_code: str, file_name: str) -> None:
        self.metric_type = metric_type
        self.state_code = state_code
        self.file_name = file_name
        super().__init__(
            f"Could not retrieve [{file_name}] for [{metric_type}] metrics in [{state_code}]"
        )


class MetricDecodeError(MetricsCacheError):
    """Raised when a metric file is not valid newline-delimited JSON."""

    def __init__(self, file_name: str, line_number: Optional[int] = None) -> None:
        self.file_name = file_name
        self.line_number = line_number
        location = f" on line [{line_number}]" if line_number is not None else ""
        super().__init__(f"Could not decode metric file [{file_name}]{location}")
