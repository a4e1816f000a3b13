"""
Typed Exception Hierarchy for the Payroll Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers at the request boundary need to tell "bad input" apart from "bad
configuration" and from "the computation for one employee blew up" without
parsing message strings.  Every exception therefore:
  1. Has its own class (catch by type, not message)
  2. Carries a CODE attribute (machine-readable, API-safe)
  3. Carries structured DATA (the offending month, employee, value)

Example:
    try:
        service.salary_report(user_id, month)
    except InvalidMonthFormatError as e:
        api_response(status=400, code=e.code, month=e.value)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    PayrollKernelError (base)
    |
    +-- InputFormatError
    |   +-- InvalidMonthFormatError
    |   +-- InvalidTrendWindowError
    |
    +-- ConfigurationError
    |   +-- InvalidAdjustmentDirectionError
    |
    +-- EmployeeComputationError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                          | When Raised
----------------|-------------------------------|---------------------------------------
Input           | INVALID_MONTH_FORMAT          | Month selector is not YYYY-MM
                | INVALID_TREND_WINDOW          | Trend window is not a positive int
----------------|-------------------------------|---------------------------------------
Configuration   | CONFIGURATION_ERROR           | Config value out of range
                | INVALID_ADJUSTMENT_DIRECTION  | Direction not addition/deduction
----------------|-------------------------------|---------------------------------------
Computation     | EMPLOYEE_COMPUTATION_ERROR    | Unexpected failure for one employee

Missing collections (no changes, no holidays, no adjustments) are NEVER an
error: they contribute zero.  A month with zero working days yields a daily
rate of zero instead of a division error.
"""


class PayrollKernelError(Exception):
    """
    Base exception for all payroll kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "PAYROLL_KERNEL_ERROR"


# Input-related exceptions


class InputFormatError(PayrollKernelError):
    """Base exception for malformed input rejected at the service boundary."""

    code: str = "INPUT_FORMAT_ERROR"


class InvalidMonthFormatError(InputFormatError):
    """Month selector does not match ``YYYY-MM``."""

    code: str = "INVALID_MONTH_FORMAT"

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Month is required in YYYY-MM format, got {value!r}")


class InvalidTrendWindowError(InputFormatError):
    """Trend report window is not a positive number of months."""

    code: str = "INVALID_TREND_WINDOW"

    def __init__(self, months: object):
        self.months = months
        super().__init__(f"Trend window must be a positive number of months, got {months!r}")


# Configuration exceptions


class ConfigurationError(PayrollKernelError):
    """Accrual configuration is structurally valid YAML but semantically wrong."""

    code: str = "CONFIGURATION_ERROR"

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Invalid configuration for '{field}': {message}")


class InvalidAdjustmentDirectionError(ConfigurationError):
    """Adjustment type declares a direction other than addition/deduction."""

    code: str = "INVALID_ADJUSTMENT_DIRECTION"

    def __init__(self, type_name: str, direction: object):
        self.type_name = type_name
        self.direction = direction
        super().__init__(
            "direction",
            f'adjustment type {type_name!r} has direction {direction!r}; '
            'must be "addition" or "deduction"',
        )


# Computation exceptions


class EmployeeComputationError(PayrollKernelError):
    """
    Unexpected failure while computing one employee's month.

    Wraps the original exception (``raise ... from``) and records which
    employee and which month were being computed.
    """

    code: str = "EMPLOYEE_COMPUTATION_ERROR"

    def __init__(self, employee_id: str, month: str, reason: str):
        self.employee_id = employee_id
        self.month = month
        self.reason = reason
        super().__init__(
            f"Salary computation failed for employee {employee_id} in {month}: {reason}"
        )
