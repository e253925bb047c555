from .evaluate import atom_names, evaluate, probe_equal

__all__ = ["atom_names", "evaluate", "probe_equal"]
