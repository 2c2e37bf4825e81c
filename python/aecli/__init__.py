"""
aecli: command-line front-end for æternity nodes.

The heavy lifting (signing, transaction encoding, consensus) lives in the
SDK; this package validates inputs, sequences SDK calls and renders results.
"""
from __future__ import annotations

from .version import __version__

__all__ = ["__version__"]
