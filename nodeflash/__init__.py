"""nodeflash - flash race-gate nodes with per-node network configuration.

This package derives the node address and wireless configuration baked into
a firmware build and hands them to the external flashing tool.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
