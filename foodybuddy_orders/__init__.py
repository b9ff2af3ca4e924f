"""FoodyBuddy order lifecycle service.

Tracks food orders from creation through delivery, enforces the order status
state machine, and notifies the gateway on every status change.
"""

from .utils.constants import APP_VERSION

__version__ = APP_VERSION
