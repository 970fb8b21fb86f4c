"""

Logging Core Module

========================================================================

One project-wide `logger` writes leveled messages to the console (on
stderr, optionally in color) and, optionally, to a log file. Messages
whose level is above the verbosity of a stream are not written to it.

"""

from datetime import datetime
from enum import IntEnum
from functools import partialmethod, wraps
from pathlib import Path
from sys import stderr
from traceback import format_exception, format_exception_only
from typing import Callable, NamedTuple, Optional, TextIO


class Level(IntEnum):
    """ Level of a logging message; lower is more severe. """
    FATAL = -3
    ERROR = -2
    WARNING = -1
    STATUS = 0
    TASK = 1
    ACTION = 2
    ROUTINE = 3
    DETAIL = 4


DEFAULT_COLOR = True
DEFAULT_EXIT_ON_ERROR = False
DEFAULT_VERBOSITY = Level.STATUS
FILE_VERBOSITY = Level.DETAIL
# Show tracebacks of exceptions at this verbosity or higher.
EXC_INFO_VERBOSITY = Level.TASK


class Message(NamedTuple):
    level: Level
    content: object

    def __str__(self):
        if isinstance(self.content, BaseException):
            formatter = format_exception if exc_info() else format_exception_only
            return "".join(formatter(self.content)).rstrip()
        return str(self.content)


class Stream(object):
    """ Write messages up to a verbosity to stderr or to a file, which
    is opened (for appending) when the first message is written. """
    __slots__ = ["verbosity", "formatter", "file_path", "_file"]

    def __init__(self,
                 verbosity: int,
                 formatter: Callable[[Message], str],
                 file_path: str | Path | None = None):
        self.verbosity = verbosity
        self.formatter = formatter
        self.file_path = Path(file_path) if file_path is not None else None
        self._file = None

    @property
    def stream(self) -> TextIO:
        if self.file_path is None:
            return stderr
        if self._file is None:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.file_path, "a")
        return self._file

    def log(self, message: Message):
        if message.level <= self.verbosity:
            self.stream.write(self.formatter(message))

    def close(self):
        if self._file is not None:
            self._file.close()
            self._file = None


def format_console_plain(message: Message):
    return f"{message.level.name: <8}{message}\n"


# 256-color code of each level (FATAL is also bold).
LEVEL_COLORS = {Level.FATAL: 198,
                Level.ERROR: 160,
                Level.WARNING: 214,
                Level.STATUS: 28,
                Level.TASK: 38,
                Level.ACTION: 69,
                Level.ROUTINE: 147,
                Level.DETAIL: 247}
ANSI_RESET = "\033[0m"
ANSI_BOLD = "\033[1m"


def format_console_color(message: Message):
    color = f"\033[38;5;{LEVEL_COLORS[message.level]}m"
    if message.level == Level.FATAL:
        color += ANSI_BOLD
    return f"{color}{format_console_plain(message)}{ANSI_RESET}"


def format_logfile(message: Message):
    timestamp = datetime.now().strftime("on %Y-%m-%d at %H:%M:%S.%f")
    return f"LOGMSG> {message.level.name} {timestamp}\n{message}\n\n"


class Logger(object):
    """ Log messages to the console and to a file. If `exit_on_error`,
    then an error or fatal message raises an exception instead. """
    __slots__ = ["console_stream", "file_stream", "exit_on_error"]

    def __init__(self):
        self.console_stream = None
        self.file_stream = None
        self.exit_on_error = DEFAULT_EXIT_ON_ERROR

    def log(self, level: Level, content: object):
        message = Message(level, content)
        if level <= Level.ERROR and self.exit_on_error:
            if isinstance(content, BaseException):
                raise content
            raise RuntimeError(str(message))
        for stream in (self.console_stream, self.file_stream):
            if stream is not None:
                stream.log(message)

    fatal = partialmethod(log, Level.FATAL)
    error = partialmethod(log, Level.ERROR)
    warning = partialmethod(log, Level.WARNING)
    status = partialmethod(log, Level.STATUS)
    task = partialmethod(log, Level.TASK)
    action = partialmethod(log, Level.ACTION)
    routine = partialmethod(log, Level.ROUTINE)
    detail = partialmethod(log, Level.DETAIL)


logger = Logger()


class LoggerConfig(NamedTuple):
    verbosity: int
    log_file_path: Path | None
    log_color: bool
    exit_on_error: bool


def erase_config():
    """ Remove every stream from the logger, closing the log file. """
    if logger.file_stream is not None:
        logger.file_stream.close()
    logger.console_stream = None
    logger.file_stream = None
    logger.exit_on_error = DEFAULT_EXIT_ON_ERROR


def set_config(verbosity: int = DEFAULT_VERBOSITY,
               log_file_path: str | Path | None = None,
               log_color: bool = DEFAULT_COLOR,
               exit_on_error: bool = DEFAULT_EXIT_ON_ERROR):
    """ Replace the configuration of the logger. """
    erase_config()
    logger.console_stream = Stream(verbosity,
                                   format_console_color
                                   if log_color
                                   else format_console_plain)
    if log_file_path is not None:
        logger.file_stream = Stream(FILE_VERBOSITY,
                                    format_logfile,
                                    log_file_path)
    logger.exit_on_error = exit_on_error


def get_config():
    """ Current configuration of the logger, as `set_config` takes. """
    console = logger.console_stream
    return LoggerConfig(
        verbosity=(console.verbosity if console is not None
                   else DEFAULT_VERBOSITY),
        log_file_path=(logger.file_stream.file_path
                       if logger.file_stream is not None
                       else None),
        log_color=(console.formatter is format_console_color
                   if console is not None
                   else DEFAULT_COLOR),
        exit_on_error=logger.exit_on_error
    )


def exc_info():
    """ Whether to log the traceback of exceptions. """
    return get_config().verbosity >= EXC_INFO_VERBOSITY


def log_exceptions(default: Optional[Callable]):
    """ Log any exception as fatal and return `default()` instead. """

    def decorator(func: Callable):

        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as error:
                logger.fatal(error)
                return default() if default is not None else None

        return wrapper

    return decorator


def restore_config(func: Callable):
    """ Restore the logging configuration after the function returns or
    raises. """

    @wraps(func)
    def wrapper(*args, **kwargs):
        config = get_config()
        try:
            return func(*args, **kwargs)
        finally:
            set_config(**config._asdict())

    return wrapper


set_config()
