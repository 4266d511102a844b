"""
minicc Command-Line Interface
=============================

- **minicc**: compiler driver (preprocess, compile, assemble, link)

Implemented as a Click application with help text and unified error
reporting (see minicc.cli.errors).
"""
