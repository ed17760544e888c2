import logging

__logger_cache = {}


def get_logger(name) -> logging.Logger:
    """
    get logger named timedset.<name>

    records propagate to the host application's handlers,
    nothing is printed unless the host configures logging
    """
    global __logger_cache
    if name in __logger_cache:
        return __logger_cache[name]
    logger = logging.getLogger(f'timedset.{name}')
    logger.addHandler(logging.NullHandler())
    __logger_cache[name] = logger
    return logger
