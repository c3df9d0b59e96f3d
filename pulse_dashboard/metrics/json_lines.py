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
"""Decoding of newline-delimited JSON metric files."""
import json
from typing import Any, List, Optional

from pulse_dashboard.metrics.exceptions import MetricDecodeError


def decode_json_lines(contents: bytes, file_name: str) -> Optional[List[Any]]:
    """Converts the raw |contents| of a metric file into the list of records it
    contains, one per non-blank line, in file order.

    Returns None, rather than an empty list, if the file has no content at all.
    Raises MetricDecodeError naming |file_name| if any line is not valid JSON.
    """
    try:
        text = contents.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MetricDecodeError(file_name) from e

    if not text.strip():
        return None

    records = []
    for line_number, line in enumerate(text.split("\n"), start=1):
        if not line.strip():
            continue
        try:
            records.append(json.loads(line))
        except json.JSONDecodeError as e:
            raise MetricDecodeError(file_name, line_number=line_number) from e

    return records
