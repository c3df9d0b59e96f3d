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
"""Packaging for the dashboard metrics API server.

REQUIRED_PACKAGES are the external packages imported by ./pulse_dashboard and must
be manually updated any time a dependency is added to the server. Test-only
packages are listed under the "tests" extra.
"""
import setuptools

REQUIRED_PACKAGES = [
    "attrs>=22.1.0",
    "Flask>=2.2",
    "google-api-core",
    "google-cloud-logging>=3.0",
    "google-cloud-storage",
    "gunicorn",
    "opentelemetry-api",
    "requests",
]

TEST_PACKAGES = [
    "freezegun",
    "pytest",
]

setuptools.setup(
    name="pulse-dashboard-metrics",
    version="1.0.0",
    python_requires=">=3.9",
    install_requires=REQUIRED_PACKAGES,
    extras_require={"tests": TEST_PACKAGES},
    packages=setuptools.find_packages(include=["pulse_dashboard", "pulse_dashboard.*"]),
    package_data={"pulse_dashboard.metrics": ["demo_data/*.json"]},
)
