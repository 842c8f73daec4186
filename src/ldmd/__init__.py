"""ldmd: DMD-compatible command-line front end for LDC.

Parses a DMD-style invocation (where repeated switches resolve last-wins),
re-emits an equivalent, conflict-free LDC command line and runs it.
"""

__version__ = "0.1.0"
