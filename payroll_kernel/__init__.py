"""
Payroll Kernel

Shared foundation for the payroll accrual engine:
- Immutable domain records and month periods
- Typed exceptions with machine-readable codes
- Structured JSON logging
- Read-only data access for the records the engines consume
"""

__version__ = "0.1.0"
