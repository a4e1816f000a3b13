"""ORM models.  Importing this package registers every table on ``Base.metadata``."""

from payroll_kernel.models.adjustment import EmployeeUnitModel, UnitTypeModel
from payroll_kernel.models.calendar import HolidayModel
from payroll_kernel.models.deferral import SalaryDeferralModel
from payroll_kernel.models.employee import EmployeeModel, SalaryChangeModel
from payroll_kernel.models.insurance import InsuranceRecordModel

__all__ = [
    "EmployeeModel",
    "EmployeeUnitModel",
    "HolidayModel",
    "InsuranceRecordModel",
    "SalaryChangeModel",
    "SalaryDeferralModel",
    "UnitTypeModel",
]
