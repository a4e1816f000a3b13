"""Read-only selectors returning domain records."""

from payroll_kernel.selectors.base import BaseSelector
from payroll_kernel.selectors.payroll_selector import PayrollSnapshotSelector

__all__ = ["BaseSelector", "PayrollSnapshotSelector"]
