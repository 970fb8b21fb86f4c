from concurrent.futures import ProcessPoolExecutor, as_completed
from inspect import getmodule
from typing import Any, Callable, Iterable

from .logs import Level, logger, get_config, set_config


def calc_pool_size(num_tasks: int, num_cpus: int):
    """ Number of processes to run `num_tasks` tasks on `num_cpus` CPUs;
    always ≥ 1. """
    if num_cpus < 1:
        logger.warning(f"num_cpus must be ≥ 1, but got {num_cpus}; "
                       f"defaulting to 1")
        num_cpus = 1
    return max(min(num_tasks, num_cpus), 1)


class Task(object):
    """ Run a function with the logging configuration of the process
    that created the task. """

    def __init__(self, func: Callable):
        self._func = func
        self._config = get_config()

    @property
    def name(self):
        return f"{getmodule(self._func).__name__}.{self._func.__name__}"

    def __call__(self, *args, **kwargs):
        if get_config() != self._config:
            # A worker process may not have inherited the configuration
            # of the parent process.
            set_config(*self._config)
            close_file_stream = True
        else:
            close_file_stream = False
        items = list()
        if self._config.verbosity >= Level.ACTION:
            items.extend(map(repr, args))
        if self._config.verbosity >= Level.ROUTINE:
            items.extend(f"{k}={repr(v)}" for k, v in kwargs.items())
        description = f"{self.name}({', '.join(items)})"
        try:
            logger.task(f"Began {description}")
            result = self._func(*args, **kwargs)
            logger.task(f"Ended {description}")
            return result
        finally:
            if close_file_stream and logger.file_stream is not None:
                logger.file_stream.close()


def _dispatch(func: Callable, *,
              num_cpus: int,
              ordered: bool,
              raise_on_error: bool,
              args: Iterable[tuple],
              kwargs: dict[str, Any] | None = None):
    if kwargs is None:
        kwargs = dict()
    args = list(args)
    if nontuple := [arg for arg in args if not isinstance(arg, tuple)]:
        raise TypeError(f"Got non-tuple args: {nontuple}")
    num_tasks = len(args)
    if num_tasks == 0:
        logger.task("No tasks were given to dispatch")
        return
    pool_size = calc_pool_size(num_tasks, num_cpus)
    logger.detail(f"Calculated size of process pool: {pool_size}")
    num_failed = 0
    if pool_size > 1:
        with ProcessPoolExecutor(max_workers=pool_size) as pool:
            logger.task(f"Opened pool of {pool_size} processes")
            futures = [pool.submit(Task(func), *task_args, **kwargs)
                       for task_args in args]
            for future in (futures if ordered else as_completed(futures)):
                try:
                    yield future.result()
                except Exception as error:
                    if raise_on_error:
                        raise
                    logger.error(error)
                    num_failed += 1
        logger.task(f"Closed pool of {pool_size} processes")
    else:
        logger.task(f"Began running {num_tasks} task(s) in series")
        task = Task(func)
        for task_args in args:
            try:
                yield task(*task_args, **kwargs)
            except Exception as error:
                if raise_on_error:
                    raise
                logger.error(error)
                num_failed += 1
        logger.task(f"Ended running {num_tasks} task(s) in series")
    if num_failed:
        logger.warning(f"Failed {num_failed} of {num_tasks} task(s)")
    else:
        logger.task(f"All {num_tasks} task(s) completed successfully")


def dispatch(func: Callable, *,
             num_cpus: int,
             as_list: bool,
             ordered: bool,
             raise_on_error: bool,
             args: Iterable[tuple],
             kwargs: dict[str, Any] | None = None):
    """ Run a function once per tuple of positional arguments, in series
    or in parallel depending on the number of tasks and CPUs.

    Parameters
    ----------
    func: Callable
        Function to run.
    num_cpus: int
        Number of CPUs available. Must be ≥ 1.
    as_list: bool
        Return results as a list (if True) or an iterator (if False).
    ordered: bool
        Return results in the order of `args` (if True) or in order of
        completion (if False).
    raise_on_error: bool
        If any task fails, then raise its exception (if True) or log it
        as an error and omit its result (if False).
    args: Iterable[tuple]
        Positional arguments of each call.
    kwargs: dict[str, Any] | None
        Keyword arguments to pass to every call.
    """
    results = _dispatch(func,
                        num_cpus=num_cpus,
                        ordered=ordered,
                        raise_on_error=raise_on_error,
                        args=args,
                        kwargs=kwargs)
    return list(results) if as_list else iter(results)
