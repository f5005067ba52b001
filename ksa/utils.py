import gzip
import time


def time_function(func):
    """
    Decorator to measure the execution time of a function
    """
    def wrapper(*args, **kwargs):
        start_time = time.time()
        result = func(*args, **kwargs)
        end_time = time.time()
        execution_time = end_time - start_time
        return result, execution_time
    return wrapper


def load_symbols(path, size_limit=None):
    """Read a gzip corpus as byte symbols in [0, 255]."""
    with gzip.open(path, 'rb') as f:
        if size_limit:
            return list(f.read(size_limit))  # Read up to `size_limit` bytes
        return list(f.read())
