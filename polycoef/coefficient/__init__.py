from .coef import Coefficient
from . import ordering

__all__ = ["Coefficient", "ordering"]
