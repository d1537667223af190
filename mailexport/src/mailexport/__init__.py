"""
Module: mailexport.__init__

What:
  Package root for the mailbox export toolkit: MIME traversal, body
  normalisation, header parsing, category-based redaction and the field map
  consumed by CSV writers.

Interfaces:
  - config: ``mailexport.yaml`` discovery and validation.
  - core: message transform, redaction engine and field catalogue.
  - utils: structured logging and MIME tree helpers.
  - cli: developer command line.
"""

__version__ = "0.1.0"

__all__ = [
    "config",
    "core",
    "utils",
]
