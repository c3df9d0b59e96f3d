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
"""An implementation of the GCSFileSystem built on top of a real GCS client."""
import logging

from google.api_core import retry
from google.cloud import storage
from google.cloud.exceptions import NotFound

from pulse_dashboard.cloud_storage.gcs_file_system import (
    GCSBlobDoesNotExistError,
    GCSFileSystem,
)
from pulse_dashboard.cloud_storage.gcsfs_path import GcsfsFilePath
from pulse_dashboard.common.retry_predicate import google_api_retry_predicate


class GCSFileSystemImpl(GCSFileSystem):
    """An implementation of the GCSFileSystem built on top of a real GCS client."""

    def __init__(self, client: storage.Client):
        self.storage_client = client

    def _get_blob(self, path: GcsfsFilePath) -> storage.Blob:
        try:
            bucket = self.storage_client.bucket(path.bucket_name)
            blob = bucket.get_blob(path.blob_name)
        except NotFound as error:
            raise GCSBlobDoesNotExistError(
                f"Blob at [{path.uri()}] does not exist"
            ) from error

        if not blob:
            logging.warning("Blob at [%s] does not exist", path.uri())
            raise GCSBlobDoesNotExistError(f"Blob at [{path.uri()}] does not exist")

        return blob

    @retry.Retry(predicate=google_api_retry_predicate)
    def download_as_bytes(self, path: GcsfsFilePath) -> bytes:
        blob = self._get_blob(path)
        try:
            return blob.download_as_bytes()
        except NotFound as error:
            # The blob was deleted between the metadata lookup and the download.
            raise GCSBlobDoesNotExistError(
                f"Blob at [{path.uri()}] does not exist"
            ) from error
