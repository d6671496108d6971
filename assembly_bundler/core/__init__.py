"""Core bundle generation modules.

WHY: The core package holds everything with real invariants: the C array
serialization, the staleness decision, config file lookup, and the
generated symbol surface. The CLI and report layers only orchestrate it.

HOW: models.py defines the data structures, symbols.py the naming
capability, resolver.py the config lookup, staleness.py the skip
decision, c_array.py and emitter.py the source writer, and generator.py
the per-batch driver.

RULES:
- Core modules never touch sys.argv or print; they log and raise
- Generated output format is a byte-exact contract; change with care
"""
