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
"""Implements common interface for exceptions served by the Flask frontend."""
from http import HTTPStatus
from typing import Any, Dict, List, Union

from flask import Response, jsonify


class FlaskException(Exception):
    """An error that is rendered to API clients as a JSON body of the form
    {"code": ..., "description": ...} with the given status code."""

    def __init__(
        self,
        code: str,
        description: Union[str, List[Any], Dict[Any, Any]],
        status_code: HTTPStatus,
    ) -> None:
        self.code = code
        self.description = description
        self.status_code = status_code
        super().__init__(description)

    def to_response(self) -> Response:
        response = jsonify(
            {
                "code": self.code,
                "description": self.description,
            }
        )
        response.status_code = self.status_code
        return response
