"""Utility modules for readmore.

- error_handling: CLI error decorator mapping readmore errors to exit codes
- logging: Logger setup driven by the CLI verbosity flags
- output: Shared rich console and JSON printing
"""
