from flask_restx import Namespace, Resource, fields
from models.milestone import MilestoneStatus
from schemas.milestone import MilestoneSchema
from schemas.assignment import MilestoneEmployeeSchema
from services.milestones import MilestoneService
from services.assignments import MilestoneEmployeeService
from app import db
from api.common import (
    deleted_response,
    detail_response,
    list_params,
    list_parser,
    request_payload,
    require_permission,
    result_response,
    success,
)

api = Namespace('milestones', description='Project milestone operations')

milestone_model = api.model('Milestone', {
    'project_id': fields.String(required=True, description='Project ID'),
    'milestone': fields.String(required=True, description='Milestone name'),
    'description': fields.String(description='Milestone description'),
    'due_date': fields.Date(description='Target finish date'),
    'completion_date': fields.Date(description='Actual completion date'),
    'status': fields.String(description='Milestone status', enum=[s.value for s in MilestoneStatus]),
    'remarks': fields.String(description='Remarks')
})

assignee_model = api.model('MilestoneAssignee', {
    'employee_id': fields.String(required=True, description='Employee ID (must be on the project team)')
})

milestone_schema = MilestoneSchema()
milestones_schema = MilestoneSchema(many=True)
assignee_schema = MilestoneEmployeeSchema()
assignees_schema = MilestoneEmployeeSchema(many=True)

MILESTONE_FILTERS = ('status', 'projectId')
milestone_parser = list_parser(*MILESTONE_FILTERS)

@api.route('')
class MilestoneList(Resource):
    @require_permission('milestones:read')
    @api.expect(milestone_parser)
    @api.response(200, 'Success')
    def get(self):
        """Get milestones, soonest due first unless sorted otherwise"""
        params = list_params(milestone_parser, MILESTONE_FILTERS)
        page = MilestoneService(db.session).list(params)
        return success(page.to_dict(milestones_schema))

    @require_permission('milestones:write')
    @api.expect(milestone_model)
    @api.response(201, 'Milestone created successfully')
    @api.response(400, 'Validation error')
    def post(self):
        """Create a milestone"""
        result = MilestoneService(db.session).create(request_payload())
        return result_response(result, milestone_schema, 201)

@api.route('/<string:id>')
class MilestoneDetail(Resource):
    @require_permission('milestones:read')
    @api.response(200, 'Success')
    @api.response(404, 'Milestone not found')
    def get(self, id):
        """Get a milestone with its project name"""
        found = MilestoneService(db.session).get_with_relations(id)
        return detail_response(found, milestone_schema, 'Milestone')

    @require_permission('milestones:write')
    @api.expect(milestone_model)
    @api.response(200, 'Milestone updated successfully')
    @api.response(404, 'Milestone not found')
    def put(self, id):
        """Update a milestone"""
        result = MilestoneService(db.session).update(id, request_payload())
        return result_response(result, milestone_schema)

    @require_permission('milestones:write')
    @api.response(200, 'Milestone deleted successfully')
    @api.response(404, 'Milestone not found')
    def delete(self, id):
        """Soft-delete a milestone"""
        result = MilestoneService(db.session).delete(id)
        return deleted_response(result, 'Milestone')

@api.route('/<string:id>/employees')
class MilestoneEmployees(Resource):
    @require_permission('milestones:read')
    @api.response(200, 'Success')
    @api.response(404, 'Milestone not found')
    def get(self, id):
        """List employees assigned to the milestone"""
        result = MilestoneEmployeeService(db.session).list_assignees(id)
        return result_response(result, assignees_schema)

    @require_permission('milestones:assign')
    @api.expect(assignee_model)
    @api.response(201, 'Employee assigned')
    @api.response(400, 'Not a team member or already assigned')
    @api.response(404, 'Milestone not found')
    def post(self, id):
        """Assign a project team member to the milestone"""
        result = MilestoneEmployeeService(db.session).assign(id, request_payload())
        return result_response(result, assignee_schema, 201)

@api.route('/<string:id>/employees/<string:employee_id>')
class MilestoneEmployeeDetail(Resource):
    @require_permission('milestones:assign')
    @api.response(200, 'Employee unassigned')
    @api.response(404, 'Milestone assignee not found')
    def delete(self, id, employee_id):
        """Unassign an employee from the milestone"""
        result = MilestoneEmployeeService(db.session).unassign(id, employee_id)
        if not result.success:
            return result_response(result)
        return success({'message': 'Employee unassigned'})
