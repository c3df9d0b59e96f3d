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
"""
Path information about metric files stored in Google Cloud Storage.

Metric files are laid out as gs://<bucket>/<state code>/<file name>.
"""
import abc
import os

import attr


def strip_forward_slash(string: str) -> str:
    if string.startswith("/"):
        return string[1:]
    return string


@attr.s(frozen=True)
class GcsfsPath:
    """Abstract class representing path information about objects in Google Cloud
    Storage."""

    # Name of the bucket for this path in Cloud Storage
    bucket_name: str = attr.ib()

    def __attrs_post_init__(self) -> None:
        if not self.bucket_name:
            raise ValueError("Bucket name must be non-empty")
        if "/" in self.bucket_name:
            raise ValueError(
                f"Bucket name includes a relative path: [{self.bucket_name}]"
            )

    @abc.abstractmethod
    def abs_path(self) -> str:
        """Builds full path as a string."""

    def uri(self) -> str:
        """Builds a Google Cloud Storage URI (e.g. the absolute path with 'gs://' prepended)."""
        return f"gs://{self.abs_path()}"


@attr.s(frozen=True)
class GcsfsFilePath(GcsfsPath):
    """Represents path information about an actual file (blob) in Google Cloud
    Storage. The coordinates for this file are the bucket name and the blob
    name, which is the full relative path from the bucket.
    """

    # Relative path to a blob (file) in Cloud Storage.
    blob_name: str = attr.ib(converter=strip_forward_slash)

    @property
    def file_name(self) -> str:
        return os.path.basename(self.blob_name)

    def abs_path(self) -> str:
        return os.path.join(self.bucket_name, self.blob_name)

    @classmethod
    def for_metric_file(
        cls, bucket_name: str, partition: str, file_name: str
    ) -> "GcsfsFilePath":
        if not file_name or "/" in file_name:
            raise ValueError(f"Unexpected metric file name: [{file_name}]")
        if "/" in partition:
            raise ValueError(f"Partition includes a relative path: [{partition}]")
        return GcsfsFilePath(
            bucket_name=bucket_name, blob_name=os.path.join(partition, file_name)
        )
