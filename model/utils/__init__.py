from . import response

from .response import *

__all__ = [*response.__all__]
