"""Logging configuration for applications embedding the tween engine.

Library modules only create module loggers; the host application decides
where records go by calling configure_logging once at startup.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

SEARCH_LOGGER = 'tween_lib.matching.topology'


def configure_logging(level: str = 'INFO', log_file: str | None = None,
                      verbose_search: bool = False) -> None:
    """Route tween_lib records to stderr and, optionally, a file.

    Replaces any handlers already on the root logger. The split search logs
    one DEBUG line per solved binding, so its logger is held at INFO unless
    ``verbose_search`` is set; other modules follow ``level``.

    Args:
        level: Level name ('DEBUG', 'INFO', ...). Unknown names mean INFO.
        log_file: Extra file to append records to.
        verbose_search: Let the split search log at ``level`` too.

    Example::

        from tween_lib.utils.log_setup import configure_logging
        configure_logging(level='DEBUG', verbose_search=True)
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(
        fmt='%(asctime)s %(levelname)-8s [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    search_level = log_level if verbose_search else max(log_level, logging.INFO)
    logging.getLogger(SEARCH_LOGGER).setLevel(search_level)

    logger.info("Logging configured: level=%s, file=%s", level, log_file or 'stderr')
