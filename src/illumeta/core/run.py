from functools import wraps
from typing import Callable, Optional

from .logs import logger, log_exceptions


def log_command(command: str):
    """ Log the beginning and end of a command. """

    def decorator(func: Callable):

        @wraps(func)
        def wrapper(*args, **kwargs):
            logger.status(f"Began {command}")
            result = func(*args, **kwargs)
            logger.status(f"Ended {command}")
            return result

        return wrapper

    return decorator


def run_func(command: str, default: Optional[Callable] = list):
    """ Decorator for the run function of a command. """

    def decorator(func: Callable):
        func = log_exceptions(default)(func)
        func = log_command(command)(func)
        return func

    return decorator
