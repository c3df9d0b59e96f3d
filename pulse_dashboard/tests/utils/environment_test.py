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
"""Tests for environment.py"""
from unittest import TestCase
from unittest.mock import patch

from pulse_dashboard.utils import environment


class EnvironmentTest(TestCase):
    """Tests for environment.py"""

    @patch.dict("os.environ", {"RECIDIVIZ_ENV": "production"})
    def test_in_gcp_production(self) -> None:
        self.assertTrue(environment.in_gcp())
        self.assertEqual("production", environment.get_gcp_environment())

    @patch.dict("os.environ", {"RECIDIVIZ_ENV": "staging"})
    def test_in_gcp_staging(self) -> None:
        self.assertTrue(environment.in_gcp())

    @patch.dict("os.environ", {"RECIDIVIZ_ENV": "local"})
    def test_not_in_gcp(self) -> None:
        self.assertFalse(environment.in_gcp())

    @patch.dict("os.environ", {}, clear=True)
    def test_not_set(self) -> None:
        self.assertIsNone(environment.get_gcp_environment())
        self.assertFalse(environment.in_gcp())

    def test_in_test(self) -> None:
        self.assertTrue(environment.in_test())
