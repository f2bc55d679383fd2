"""
tinyacc Command-Line Interface
==============================

- **tacc**: compile a MiniLang program to an assembly listing

The tool is a Click application; exit codes are shared through
tinyacc.cli.errors.
"""
