"""
Shared utilities for Sondeur components.

- reporter: SystemReporter logging and emoji registry
- resilience: retry and endpoint fallback policies
- tests: LaborantTest base class and result schema
"""
