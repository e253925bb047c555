from .atom import Atom
from .term import Term, canonical_atoms, format_factor

__all__ = ["Atom", "Term", "canonical_atoms", "format_factor"]
