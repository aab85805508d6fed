from repositories import EMPLOYEES
from schemas.employee import EmployeeInputSchema
from services.base import EntityService


class EmployeeService(EntityService):
    config = EMPLOYEES
    input_schema = EmployeeInputSchema
    entity_name = 'employee'

    def get_departments(self):
        return self.repository.distinct_values('department')

    def get_by_user(self, user_id):
        """Employee record linked to an authenticated user account."""
        return self.repository.find_one_by(user_id=user_id)
