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
"""The catalog of files that make up each dashboard metric type.

Metrics are exported as pre-processed, newline-delimited JSON files. Each metric
type (one group of dashboard charts) is backed by a fixed set of those files, and
each file's contents are returned to the frontend under a key derived from its
file name, e.g. 'revocations_by_month.json' -> 'revocations_by_month'.
"""
import os
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Sequence, Tuple, Union

import attr

from pulse_dashboard.metrics.exceptions import (
    MetricCatalogError,
    UnknownMetricTypeError,
)


class MetricType(Enum):
    PROGRAM_EVAL = "programEval"
    REINCARCERATION = "reincarceration"
    REVOCATION = "revocation"
    SNAPSHOT = "snapshot"


def result_key_for_file_name(file_name: str) -> str:
    return os.path.splitext(file_name)[0]


@attr.define(frozen=True)
class MetricFileDescriptor:
    metric_type: MetricType
    file_name: str

    @property
    def result_key(self) -> str:
        return result_key_for_file_name(self.file_name)


@attr.define(frozen=True)
class MetricFileCatalog:
    """Immutable mapping of metric type to the files that compose it."""

    descriptors_by_metric_type: Mapping[MetricType, Tuple[MetricFileDescriptor, ...]]

    @classmethod
    def build(
        cls, files_by_metric_type: Mapping[MetricType, Sequence[str]]
    ) -> "MetricFileCatalog":
        """Builds a catalog from file names, validating that every metric type has at
        least one file and that no two files of a metric type share a result key."""
        descriptors_by_metric_type: Dict[
            MetricType, Tuple[MetricFileDescriptor, ...]
        ] = {}
        for metric_type, file_names in files_by_metric_type.items():
            if not file_names:
                raise MetricCatalogError(
                    f"Metric type [{metric_type.value}] has no files configured"
                )

            file_names_by_result_key: Dict[str, str] = {}
            for file_name in file_names:
                result_key = result_key_for_file_name(file_name)
                if not result_key or "/" in file_name:
                    raise MetricCatalogError(
                        f"Invalid file name [{file_name}] for metric type [{metric_type.value}]"
                    )
                if result_key in file_names_by_result_key:
                    raise MetricCatalogError(
                        f"Files [{file_names_by_result_key[result_key]}] and [{file_name}] "
                        f"of metric type [{metric_type.value}] share the result key [{result_key}]"
                    )
                file_names_by_result_key[result_key] = file_name

            descriptors_by_metric_type[metric_type] = tuple(
                MetricFileDescriptor(metric_type=metric_type, file_name=file_name)
                for file_name in file_names
            )

        return cls(
            descriptors_by_metric_type=MappingProxyType(descriptors_by_metric_type)
        )

    @property
    def metric_types(self) -> Tuple[MetricType, ...]:
        return tuple(self.descriptors_by_metric_type)

    def resolve(self, metric_type: Union[MetricType, str]) -> MetricType:
        """Returns |metric_type|, which may be given as a MetricType or as its string
        value, as a MetricType. Raises UnknownMetricTypeError if it has no files in
        this catalog."""
        if not isinstance(metric_type, MetricType):
            try:
                metric_type = MetricType(metric_type)
            except ValueError as e:
                raise UnknownMetricTypeError(str(metric_type)) from e

        if metric_type not in self.descriptors_by_metric_type:
            raise UnknownMetricTypeError(metric_type.value)
        return metric_type

    def descriptors_for(
        self, metric_type: Union[MetricType, str]
    ) -> Tuple[MetricFileDescriptor, ...]:
        return self.descriptors_by_metric_type[self.resolve(metric_type)]


FILES_BY_METRIC_TYPE: Dict[MetricType, Tuple[str, ...]] = {
    MetricType.PROGRAM_EVAL: (
        "cost_effectiveness_by_program.json",
        "recidivism_rate_by_program.json",
    ),
    MetricType.REINCARCERATION: (
        "admissions_versus_releases_by_month.json",
        "reincarceration_rate_by_release_facility.json",
        "reincarceration_rate_by_stay_length.json",
        "reincarcerations_by_month.json",
    ),
    MetricType.REVOCATION: (
        "revocations_by_county_60_days.json",
        "revocations_by_officer_60_days.json",
        "admissions_by_type_60_days.json",
        "revocations_by_month.json",
        "revocations_by_race_60_days.json",
        "revocations_by_supervision_type_by_month.json",
        "revocations_by_violation_type_by_month.json",
    ),
    MetricType.SNAPSHOT: (
        "admissions_by_type_by_month.json",
        "average_change_lsir_score_by_month.json",
        "avg_days_at_liberty_by_month.json",
        "supervision_termination_by_type_by_month.json",
    ),
}


def default_metric_file_catalog() -> MetricFileCatalog:
    return MetricFileCatalog.build(FILES_BY_METRIC_TYPE)
