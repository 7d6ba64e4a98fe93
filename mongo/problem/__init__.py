from . import problem

from .problem import *

__all__ = [*problem.__all__]
