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
"""Fetches the files that make up a metric type from Cloud Storage."""
import logging
from concurrent import futures
from typing import Any, Dict, List, Optional, Tuple, Union

import attr

from pulse_dashboard.cloud_storage.gcs_file_system import GCSFileSystem
from pulse_dashboard.metrics.exceptions import MetricDecodeError, MetricRetrievalError
from pulse_dashboard.metrics.json_lines import decode_json_lines
from pulse_dashboard.metrics.metric_files import (
    MetricFileCatalog,
    MetricFileDescriptor,
    MetricType,
    default_metric_file_catalog,
)
from pulse_dashboard.utils import structured_logging

# Maps each file's result key to the records decoded from that file, or None if the
# file was empty.
CompositeMetricResult = Dict[str, Optional[List[Any]]]

DEFAULT_MAX_DOWNLOAD_WORKERS = 8


@attr.s(auto_attribs=True)
class MetricFetcher:
    """Fetches all files of a metric type for a state and assembles them into a
    single result keyed by file."""

    gcs_fs: GCSFileSystem
    bucket_name: str
    catalog: MetricFileCatalog = attr.ib(factory=default_metric_file_catalog)
    max_workers: int = DEFAULT_MAX_DOWNLOAD_WORKERS

    def fetch(
        self, metric_type: Union[MetricType, str], state_code: str
    ) -> CompositeMetricResult:
        """Downloads every file of |metric_type| for |state_code| in parallel and
        decodes them. Fails as a whole if any single file cannot be downloaded
        (MetricRetrievalError) or decoded (MetricDecodeError); no partial result is
        ever returned."""
        descriptors = self.catalog.descriptors_for(metric_type)
        metric_type_name = self.catalog.resolve(metric_type).value

        with structured_logging.metric_logging_context(state_code, metric_type_name):
            logging.info(
                "Fetching [%s] metrics for [%s] from [%s]",
                metric_type_name,
                state_code,
                self.bucket_name,
            )
            contents_by_descriptor = self._download_all(descriptors, state_code)
            logging.info(
                "Fetched all [%s] metrics for [%s]", metric_type_name, state_code
            )

            results: CompositeMetricResult = {}
            for descriptor in descriptors:
                try:
                    results[descriptor.result_key] = decode_json_lines(
                        contents_by_descriptor[descriptor], descriptor.file_name
                    )
                except MetricDecodeError as e:
                    logging.error(
                        "Metric file [%s] for [%s] is malformed: %s",
                        descriptor.file_name,
                        state_code,
                        e.message,
                    )
                    raise
                logging.info(
                    "Fetched contents for file key [%s]", descriptor.result_key
                )

            return results

    def _download_all(
        self, descriptors: Tuple[MetricFileDescriptor, ...], state_code: str
    ) -> Dict[MetricFileDescriptor, bytes]:
        """Downloads every descriptor's file, waiting for all downloads to settle.
        Raises a MetricRetrievalError for the first failed file, in catalog order."""
        with futures.ThreadPoolExecutor(
            max_workers=min(self.max_workers, len(descriptors))
        ) as executor:
            future_by_descriptor = {
                descriptor: executor.submit(
                    structured_logging.with_context(self.gcs_fs.download_metric_file),
                    self.bucket_name,
                    state_code,
                    descriptor.file_name,
                )
                for descriptor in descriptors
            }
            futures.wait(future_by_descriptor.values())

        contents_by_descriptor: Dict[MetricFileDescriptor, bytes] = {}
        for descriptor, future in future_by_descriptor.items():
            try:
                contents_by_descriptor[descriptor] = future.result()
            except Exception as e:
                logging.error(
                    "Unable to download metric file [%s] for [%s]: <%s> %s",
                    descriptor.file_name,
                    state_code,
                    type(e).__name__,
                    e,
                )
                raise MetricRetrievalError(
                    metric_type=descriptor.metric_type.value,
                    state_code=state_code,
                    file_name=descriptor.file_name,
                ) from e

        return contents_by_descriptor
