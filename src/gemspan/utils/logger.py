"""Logger lookup for gemspan modules.

Every record the engine emits is at DEBUG level under the ``gemspan``
namespace:

- ``gemspan.document``: a drain that changed whether a fence is open at a
  region end and requeued the rest of the text
- ``gemspan.region``: how far a dirty range was extended and in how many steps
- ``gemspan.propertize``: each propertized region, how many spans were
  cleared and how many line spans were written

The library never configures handlers; hosts decide where records go.

Example:
    >>> import logging
    >>> logging.getLogger("gemspan.region").setLevel(logging.DEBUG)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Return the stdlib logger for ``name`` under the "gemspan." prefix.

    Module names inside the package are used as they are.

    Example:
        >>> get_logger("mymodule").name
        'gemspan.mymodule'
    """
    if not (name == "gemspan" or name.startswith("gemspan.")):
        name = f"gemspan.{name}"
    return logging.getLogger(name)
