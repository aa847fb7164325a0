"""structlog loggers for yamlbuild modules.

Events are emitted on stdlib loggers named after the module, so the host
application's logging levels and handlers decide what is shown. Nothing is
written anywhere until the host configures a handler for ``yamlbuild``.
"""

import logging

import structlog


def get_logger(name):
    """Get a bound logger for a module.

    Args:
        name: Logger name (typically __name__).

    Returns:
        structlog BoundLogger wrapping ``logging.getLogger(name)``.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
