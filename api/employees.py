from flask_restx import Namespace, Resource, fields
from models.employee import EmployeeStatus
from schemas.employee import EmployeeSchema
from services.employees import EmployeeService
from app import db
from api.common import (
    current_user_id,
    deleted_response,
    detail_response,
    error_response,
    list_params,
    list_parser,
    request_payload,
    require_permission,
    result_response,
    success,
)

api = Namespace('employees', description='Employee operations')

employee_model = api.model('Employee', {
    'name': fields.String(required=True, description='Full name'),
    'email': fields.String(description='Work email'),
    'phone': fields.String(description='Phone number'),
    'position': fields.String(description='Job title'),
    'department': fields.String(description='Department'),
    'hire_date': fields.Date(description='Hire date'),
    'status': fields.String(description='Employment status', enum=[s.value for s in EmployeeStatus]),
    'salary': fields.Float(description='Salary')
})

employee_schema = EmployeeSchema()
employees_schema = EmployeeSchema(many=True)

EMPLOYEE_FILTERS = ('status', 'department')
employee_parser = list_parser(*EMPLOYEE_FILTERS)

@api.route('')
class EmployeeList(Resource):
    @require_permission('employees:read')
    @api.expect(employee_parser)
    @api.response(200, 'Success')
    def get(self):
        """Get employees with filtering, sorting and pagination"""
        params = list_params(employee_parser, EMPLOYEE_FILTERS)
        page = EmployeeService(db.session).list(params)
        return success(page.to_dict(employees_schema))

    @require_permission('employees:write')
    @api.expect(employee_model)
    @api.response(201, 'Employee created successfully')
    @api.response(400, 'Validation error')
    def post(self):
        """Create an employee"""
        result = EmployeeService(db.session).create(request_payload())
        return result_response(result, employee_schema, 201)

@api.route('/departments')
class EmployeeDepartments(Resource):
    @require_permission('employees:read')
    @api.response(200, 'Success')
    def get(self):
        """Distinct departments in use, sorted"""
        return success(EmployeeService(db.session).get_departments())

@api.route('/me')
class CurrentEmployee(Resource):
    @require_permission()
    @api.response(200, 'Success')
    @api.response(404, 'No employee record for this user')
    def get(self):
        """Employee record linked to the authenticated user"""
        employee = EmployeeService(db.session).get_by_user(current_user_id())
        if employee is None:
            return error_response('Employee not found', 404)
        return success(employee_schema.dump(employee))

@api.route('/<string:id>')
class EmployeeDetail(Resource):
    @require_permission('employees:read')
    @api.response(200, 'Success')
    @api.response(404, 'Employee not found')
    def get(self, id):
        """Get an employee with their project count"""
        found = EmployeeService(db.session).get_with_relations(id)
        return detail_response(found, employee_schema, 'Employee')

    @require_permission('employees:write')
    @api.expect(employee_model)
    @api.response(200, 'Employee updated successfully')
    @api.response(404, 'Employee not found')
    def put(self, id):
        """Update an employee"""
        result = EmployeeService(db.session).update(id, request_payload())
        return result_response(result, employee_schema)

    @require_permission('employees:write')
    @api.response(200, 'Employee deleted successfully')
    @api.response(404, 'Employee not found')
    def delete(self, id):
        """Soft-delete an employee"""
        result = EmployeeService(db.session).delete(id)
        return deleted_response(result, 'Employee')
