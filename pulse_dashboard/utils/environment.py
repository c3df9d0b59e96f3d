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
"""Tools for working with the environment the server is running in.

The deployed environment is identified by the RECIDIVIZ_ENV variable, which is
never set on local machines.
"""
import os
import sys
from enum import Enum
from typing import Optional

import pulse_dashboard


class GCPEnvironment(Enum):
    STAGING = "staging"
    PRODUCTION = "production"


GCP_ENVIRONMENTS = {env.value for env in GCPEnvironment}


def get_gcp_environment() -> Optional[str]:
    """Get the environment we are running in, or None if it is not set."""
    return os.getenv("RECIDIVIZ_ENV")


def in_gcp() -> bool:
    """Check whether we are running hosted on GCP (if not, likely running on a local
    dev machine)."""
    return get_gcp_environment() in GCP_ENVIRONMENTS


def in_test() -> bool:
    """Check whether we are running in a test"""
    # Pytest sets pulse_dashboard.called_from_test in conftest.py
    if not hasattr(pulse_dashboard, "called_from_test"):
        # If it is not set, we may have been called from unittest. Check if unittest
        # has been imported, if it has then we assume we are running from a unittest
        setattr(pulse_dashboard, "called_from_test", "unittest" in sys.modules)
    return getattr(pulse_dashboard, "called_from_test")
