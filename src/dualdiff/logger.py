"""Logger shared by :mod:`dualdiff` modules.

``dualdiff`` uses the `logging <https://docs.python.org/3/library/logging.html>`__
standard library and never installs handlers itself. Messages are emitted at the
following levels:

* ``DEBUG``: iterates of :func:`dualdiff.optimize.newton`.
* ``WARNING``: solver failures, e.g. a singular Jacobian matrix.

Applications can enable the messages by configuring ``dualdiff_logger``, e.g.::

    >>> import logging
    >>> logging.basicConfig(  # doctest: +SKIP
    ...     level=logging.DEBUG,
    ...     format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    ... )
"""

import logging

logger_name = "dualdiff"
dualdiff_logger = logging.getLogger(logger_name)
