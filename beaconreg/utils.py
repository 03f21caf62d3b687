"""General utility functions."""

import time
from functools import wraps


def time_function(func):
    """
    Decorator to time function execution.

    The elapsed time of the last call is kept on ``wrapper.last_elapsed`` and
    printed unless the call was made with ``verbose=False``.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        try:
            return func(*args, **kwargs)
        finally:
            wrapper.last_elapsed = time.time() - start_time
            if kwargs.get("verbose", True):
                print(f"{func.__name__} took {wrapper.last_elapsed:.6f} seconds")

    wrapper.last_elapsed = None
    return wrapper
