from .sympy_bridge import SympyBridge, from_sympy, parse, symbolic_equal, to_sympy

__all__ = ["SympyBridge", "from_sympy", "parse", "symbolic_equal", "to_sympy"]
