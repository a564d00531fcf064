from .errors import LogSetupError, PanicError, SinkWriteError
from .formatter import TextFormatter
from .hook import OutputHook
from .log import LoggingFacility, SharedLogger, get_facility, get_shared_logger
from .models import DEBUG, ERROR, FATAL, INFO, PANIC, TRACE, WARNING, LogEntry
from .sinks import ConsoleSink, FileSink, MemorySink, Sink

__all__ = [
    "get_shared_logger", "get_facility", "LoggingFacility", "SharedLogger",
    "OutputHook", "TextFormatter", "LogEntry",
    "Sink", "FileSink", "ConsoleSink", "MemorySink",
    "LogSetupError", "SinkWriteError", "PanicError",
    "TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "FATAL", "PANIC",
]
