"""
Deribit API module

Endpoint descriptors and the public/private endpoint wrappers.
"""

from . import endpoints
from .deribit_public import DeribitPublicAPI
from .deribit_private import DeribitPrivateAPI

__all__ = [
    "endpoints",
    "DeribitPublicAPI",
    "DeribitPrivateAPI",
]
