import enum
from app import db
from models.base import EntityMixin, enum_column

class EmployeeStatus(enum.Enum):
    ACTIVE = 'active'
    INACTIVE = 'inactive'
    ON_LEAVE = 'on_leave'

class Employee(EntityMixin, db.Model):
    __tablename__ = 'employees'

    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), unique=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120))
    phone = db.Column(db.String(50))
    position = db.Column(db.String(120))
    department = db.Column(db.String(120))
    hire_date = db.Column(db.Date)
    status = enum_column(EmployeeStatus, 'employee_status', nullable=False, default=EmployeeStatus.ACTIVE)
    salary = db.Column(db.Numeric(12, 2, asdecimal=False))

    def __repr__(self):
        return f'<Employee {self.name}>'
