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
"""An abstraction for reading metric files from the Google Cloud Storage File System"""

import abc

from pulse_dashboard.cloud_storage.gcsfs_path import GcsfsFilePath


class GCSBlobDoesNotExistError(ValueError):
    pass


class GCSFileSystem:
    """An abstraction for reading metric files from the Google Cloud Storage File
    System. Implementations must be safe to call from multiple threads at once."""

    @abc.abstractmethod
    def download_as_bytes(self, path: GcsfsFilePath) -> bytes:
        """Downloads object contents from the given path to bytes, raising
        GCSBlobDoesNotExistError if there is no object at that path."""

    def download_metric_file(
        self, bucket_name: str, partition: str, file_name: str
    ) -> bytes:
        """Downloads the metric file |file_name| stored for |partition| (e.g. a state
        code) in |bucket_name|."""
        return self.download_as_bytes(
            GcsfsFilePath.for_metric_file(
                bucket_name=bucket_name, partition=partition, file_name=file_name
            )
        )
