"""
Symbolic polynomial coefficients: canonical sums of numerical-factor-times-atoms terms.

Public API re-export:
	Atom, Term: symbolic factors and their products
	Coefficient: immutable canonical sum of terms
	EngineConfig: canonicalizer choice, rendering and tracing knobs
	to_sympy, parse ...: SymPy bridge
	evaluate, ...: NumPy evaluation
"""

from .errors import InvalidInput, PolycoefError
from .config import EngineConfig, get_config, override_config, set_config
from .terms import Atom, Term
from .coefficient import Coefficient
from .io import from_sympy, parse, symbolic_equal, to_sympy
from .numeric import evaluate, probe_equal

__all__ = [
	"InvalidInput", "PolycoefError",
	"EngineConfig", "get_config", "override_config", "set_config",
	"Atom", "Term", "Coefficient",
	"from_sympy", "parse", "symbolic_equal", "to_sympy",
	"evaluate", "probe_equal",
]

__version__ = "0.1.0"
