"""Fixed employee roster used by the session component."""

from dataclasses import dataclass

from backend.portal.db.context import Actor
from backend.portal.models.common import Role


@dataclass(frozen=True)
class Employee:
    """Portal employee account."""

    id: int
    employee_code: str
    name: str
    mobile_number: str
    role: Role
    is_active: bool = True

    def as_actor(self) -> Actor:
        return Actor(
            actor_id=self.id,
            employee_code=self.employee_code,
            name=self.name,
            role=self.role,
        )


EMPLOYEES: tuple[Employee, ...] = (
    Employee(1, "LAW001", "Priya Sharma", "+91-9876543210", Role.admin),
    Employee(2, "LAW002", "Rajesh Kumar", "+91-9876543211", Role.officer),
    Employee(3, "LAW003", "Anita Singh", "+91-9876543212", Role.officer),
    Employee(4, "LAW004", "Vikram Gupta", "+91-9876543213", Role.staff),
    Employee(5, "LAW005", "Meera Nair", "+91-9876543214", Role.viewer),
)


class EmployeeDirectory:
    """Lookup over the employee roster."""

    def __init__(self, employees: tuple[Employee, ...] = EMPLOYEES) -> None:
        self._by_code = {employee.employee_code: employee for employee in employees}
        self._by_mobile = {employee.mobile_number: employee for employee in employees}

    def get_by_code(self, employee_code: str) -> Employee | None:
        return self._by_code.get(employee_code)

    def get_by_mobile(self, mobile_number: str) -> Employee | None:
        return self._by_mobile.get(mobile_number)
