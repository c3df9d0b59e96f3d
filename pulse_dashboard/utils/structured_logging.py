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
"""Configures logging setup."""

import logging
import sys
from contextlib import contextmanager
from functools import wraps
from types import TracebackType
from typing import Any, Callable, Dict, Iterator, Optional, Tuple, Type, Union

from google.cloud.logging import Client, Resource, handlers
from opentelemetry import baggage, context

from pulse_dashboard.utils import environment

STATE_CODE_BAGGAGE_KEY = "state_code"
METRIC_TYPE_BAGGAGE_KEY = "metric_type"


def with_context(func: Callable) -> Callable:
    """Wraps |func| so that it runs with the OpenTelemetry context that was current
    when it was wrapped, e.g. when it is handed to a worker thread."""
    current_context = context.get_current()

    @wraps(func)
    def _wrapper(*args: Any, **kwargs: Any) -> Any:
        token = context.attach(current_context)
        try:
            return func(*args, **kwargs)
        finally:
            context.detach(token)

    return _wrapper


@contextmanager
def metric_logging_context(state_code: str, metric_type: str) -> Iterator[None]:
    """Tags all log records produced in this block (and in functions wrapped with
    with_context inside it) with the given state code and metric type."""
    ctx = baggage.set_baggage(STATE_CODE_BAGGAGE_KEY, state_code)
    ctx = baggage.set_baggage(METRIC_TYPE_BAGGAGE_KEY, metric_type, context=ctx)
    token = context.attach(ctx)
    try:
        yield
    finally:
        context.detach(token)


class ContextualLogRecord(logging.LogRecord):
    """Fetches context from when the record was produced and adds it to the record.

    This must happen when the record is produced, not during formatting or emitting
    as those may happen asynchronously on a separate thread with different
    context.
    """

    # pylint: disable=too-many-positional-arguments
    def __init__(
        self,
        name: str,
        level: int,
        pathname: str,
        lineno: int,
        msg: str,
        args: Tuple[Any, ...],
        exc_info: Union[
            Tuple[Type[BaseException], BaseException, Optional[TracebackType]],
            Tuple[None, None, None],
            None,
        ],
        func: Optional[str] = None,
        sinfo: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            name,
            level,
            pathname,
            lineno,
            msg,
            args,
            exc_info,
            func=func,
            sinfo=sinfo,
        )

        self.state_code = str(baggage.get_baggage(STATE_CODE_BAGGAGE_KEY))
        self.metric_type = str(baggage.get_baggage(METRIC_TYPE_BAGGAGE_KEY))


def _labels_for_record(record: logging.LogRecord) -> Dict[str, str]:
    labels = {
        "func_name": record.funcName,
        "module": record.module,
        "thread_name": record.threadName,
        "process_id": record.process,
    }

    if isinstance(record, ContextualLogRecord):
        labels["state_code"] = record.state_code
        labels["metric_type"] = record.metric_type
    return {k: str(v) for k, v in labels.items()}


class ContextualLabelsFilter(logging.Filter):
    """Attaches the record's context as Cloud Logging labels."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.labels = {  # type: ignore[attr-defined]
            **getattr(record, "labels", {}),
            **_labels_for_record(record),
        }
        return True


def setup() -> None:
    """Setup logging"""
    # Set the state code and metric type on log records.
    logging.setLogRecordFactory(ContextualLogRecord)
    logger = logging.getLogger()

    # Send logs directly via the logging client if possible. This allows us to
    # send structured messages.
    if environment.in_gcp():
        client = Client()
        structured_handler = handlers.CloudLoggingHandler(
            client, resource=Resource(type="global", labels={})
        )
        structured_handler.addFilter(ContextualLabelsFilter())
        handlers.setup_logging(structured_handler, log_level=logging.INFO)

        # Streams unstructured logs to stdout - these logs will still show up
        # under the stdout logs bucket, even if other logs are stalled.
        stdout_handler = logging.StreamHandler(sys.stdout)
        logger.addHandler(stdout_handler)
        logger.setLevel(logging.INFO)
    else:
        logging.basicConfig(level=logging.INFO)

    for handler in logger.handlers:
        # If we aren't writing directly to Cloud Logging, prefix the log with
        # important context that would be in the labels.
        if not isinstance(handler, handlers.CloudLoggingHandler):
            handler.setFormatter(
                logging.Formatter(
                    "[pid: %(process)d] (%(state_code)s %(metric_type)s) %(module)s/%(funcName)s : %(message)s"
                )
            )

    # Export gunicorn errors using the same handlers as other logs, so that they
    # go to Cloud Logging in production.
    gunicorn_logger = logging.getLogger("gunicorn.error")
    gunicorn_logger.handlers = logger.handlers
