"""
PhotoPrint Relay Print Methods
==============================

Dispatch methods for the different host print paths.
"""

from typing import List

from .base import PrintMethod, PrintRequest
from .gdi import GDIMethod
from .image_view import ImageViewMethod
from .lp import LPMethod
from .shell_verb import ShellVerbMethod

__all__ = [
    'PrintMethod', 'PrintRequest', 'GDIMethod', 'ShellVerbMethod', 'ImageViewMethod', 'LPMethod',
    'METHODS', 'get_method', 'default_methods',
]

# Method registry
METHODS = {
    'gdi': GDIMethod,
    'shell_verb': ShellVerbMethod,
    'image_view': ImageViewMethod,
    'lp': LPMethod,
}

# Windows fallback order
WINDOWS_CHAIN = ('gdi', 'shell_verb', 'image_view')
POSIX_CHAIN = ('lp',)


def get_method(name: str) -> type:
    """Get method class by name."""
    return METHODS.get(name)


def default_methods(windows: bool, **kwargs) -> List[PrintMethod]:
    """Instantiate the method chain for the host platform, in fallback order."""
    chain = WINDOWS_CHAIN if windows else POSIX_CHAIN
    return [METHODS[name](**kwargs) for name in chain]
