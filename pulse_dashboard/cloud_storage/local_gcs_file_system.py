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
"""A GCSFileSystem that serves metric files from a local directory.

Used in demo mode, where the dashboard is backed by fixed sample data rather than
by a real bucket. Every bucket and partition resolves to the same directory, so
the lookup is by file name only.
"""
import os

from pulse_dashboard.cloud_storage.gcs_file_system import (
    GCSBlobDoesNotExistError,
    GCSFileSystem,
)
from pulse_dashboard.cloud_storage.gcsfs_path import GcsfsFilePath


class LocalGCSFileSystem(GCSFileSystem):
    """Reads metric files from |root_dir| on the local file system."""

    def __init__(self, root_dir: str):
        if not os.path.isdir(root_dir):
            raise ValueError(f"Demo data directory [{root_dir}] does not exist")
        self.root_dir = root_dir

    def local_path_for_path(self, path: GcsfsFilePath) -> str:
        return os.path.join(self.root_dir, path.file_name)

    def download_as_bytes(self, path: GcsfsFilePath) -> bytes:
        local_path = self.local_path_for_path(path)
        if not os.path.isfile(local_path):
            raise GCSBlobDoesNotExistError(
                f"Could not find demo file for [{path.uri()}] in [{self.root_dir}]"
            )

        with open(local_path, "rb") as f:
            return f.read()
