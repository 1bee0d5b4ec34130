"""Contains the name for the logger of derivnode modules.

``derivnode`` uses a simple logging system based on the
`Logging <https://docs.python.org/3/library/logging.html>`__ standard library.
Logging messages are grouped in different levels:

* ``DEBUG``: Step-size retries of the numeric differentiator.
* ``INFO``: An indication that things are working as expected, or that a
  derivative could not be estimated to an acceptable confidence.
* ``WARNING``: An indication that something unexpected
    happened which may require attention, e.g. a matrix operand.

By default, only messages of level ``WARNING`` are displayed.

Calling applications can configure the format and log level of the displayed messages
by `Configuring Logging <https://docs.python.org/3/howto/logging.html#configuring-logging>`__
for ``derivnode.logger.derivnode_logger``, e.g.::

    >>> import logging
    >>> logging.basicConfig(
    ...     level=logging.DEBUG,
    ...     format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    ... )
"""
import logging

logger_name = "derivnode"
derivnode_logger = logging.getLogger(logger_name)
