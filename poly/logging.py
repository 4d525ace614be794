from datetime import datetime, timezone
import inspect
import json
import logging
import pathlib
import traceback
from typing import Callable, Dict, List, Optional


# QUESTION: Use a LoggingAdapter instead?
class PolyLogger:
    """Wraps a logging.Logger so that it's easy to use str.format syntax.

    The caller's frame is only captured when the logger would emit a record at
    the requested level."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def debug(
        self, format_string: str, *args: object, **kwargs: object
    ) -> None:
        if self._logger.isEnabledFor(logging.DEBUG):
            _log(
                self._logger.debug, format_string, _caller(), args, kwargs
            )

    def info(
        self, format_string: str, *args: object, **kwargs: object
    ) -> None:
        if self._logger.isEnabledFor(logging.INFO):
            _log(self._logger.info, format_string, _caller(), args, kwargs)

    def warning(
        self, format_string: str, *args: object, **kwargs: object
    ) -> None:
        if self._logger.isEnabledFor(logging.WARNING):
            _log(
                self._logger.warning, format_string, _caller(), args, kwargs
            )


def get_logger(name: str) -> PolyLogger:
    """Create the module logger used throughout poly.

    Nothing is printed unless the application configures a handler."""
    python_logger = logging.getLogger(name)
    python_logger.addHandler(logging.NullHandler())
    return PolyLogger(python_logger)


def _caller() -> inspect.Traceback:
    # skip this function and the PolyLogger method
    frame = inspect.currentframe()
    assert frame is not None and frame.f_back is not None
    caller_frame = frame.f_back.f_back
    assert caller_frame is not None
    try:
        return inspect.getframeinfo(caller_frame, context=0)
    finally:
        # break the reference cycle through the frame objects
        del frame, caller_frame


class _LogRecordEncoder(json.JSONEncoder):
    """A JSON Encoder that supports logging.LogRecord objects."""

    def default(self, obj: object):
        if isinstance(obj, logging.LogRecord):
            caller: Optional[inspect.Traceback] = getattr(obj, 'caller', None)
            return {
                'name': obj.name,
                'message': obj.getMessage(),
                # the format arguments are already in the message
                'level_name': obj.levelname,
                'path_name': caller.filename if caller else obj.pathname,
                'file_name': pathlib.Path(
                    caller.filename if caller else obj.pathname
                ).name,
                'module': obj.module,
                'exception': (
                    traceback.format_exception(*obj.exc_info)
                    if obj.exc_info
                    else None
                ),
                'line_number': caller.lineno if caller else obj.lineno,
                'function_name': caller.function if caller else obj.funcName,
                'created': datetime.fromtimestamp(
                    obj.created, timezone.utc
                ).isoformat(),
            }
        return super().default(obj)


class JSONFormatter(logging.Formatter):
    """A logging formatter for producing structured JSON logs."""

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(record, cls=_LogRecordEncoder)


def _log(
    logging_method: Callable,
    format_string: str,
    caller: inspect.Traceback,
    args: List[object],
    kwargs: Dict[str, object],
) -> None:
    exc_info = None
    if 'exc_info' in kwargs:
        exc_info = kwargs['exc_info']
        del kwargs['exc_info']
    logging_method(
        _DelayedFormat(format_string, args, kwargs),
        exc_info=exc_info,
        extra={'caller': caller},
    )


class _DelayedFormat:
    def __init__(
        self, format_string: str, args: List[object], kwargs: Dict[str, object]
    ) -> None:
        self._format_string, self._args, self._kwargs = (
            format_string,
            args,
            kwargs,
        )

    def __str__(self) -> str:
        return self._format_string.format(*self._args, **self._kwargs)
