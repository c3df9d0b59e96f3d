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
"""Google API retry predicate used for calls to Cloud Storage."""

from google.api_core import exceptions  # pylint: disable=no-name-in-module
from google.api_core import retry
from requests.exceptions import SSLError


def google_api_retry_predicate(exception: Exception) -> bool:
    """A function that will determine whether we should retry a given Google exception."""
    return (
        retry.if_transient_error(exception)
        or retry.if_exception_type(exceptions.GatewayTimeout)(exception)
        or retry.if_exception_type(exceptions.BadGateway)(exception)
        # Unexpected SSL EOF errors may occur when downloading from many threads
        or isinstance(exception, SSLError)
    )
