from flask_restx import Namespace, Resource, fields
from models.project import ProjectStatus, ProjectPriority
from schemas.project import ProjectSchema
from schemas.assignment import ProjectMemberSchema
from services.projects import ProjectService
from services.assignments import ProjectMemberService
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

# Setting up API namespace
api = Namespace('projects', description='Project and team member operations')

# Define models for swagger
project_model = api.model('Project', {
    'client_id': fields.String(required=True, description='Client ID'),
    'project_name': fields.String(required=True, description='Project name'),
    'description': fields.String(description='Project description'),
    'start_date': fields.Date(description='Project start date'),
    'end_date': fields.Date(description='Project end date'),
    'status': fields.String(description='Project status', enum=[s.value for s in ProjectStatus]),
    'priority': fields.String(description='Project priority', enum=[p.value for p in ProjectPriority]),
    'total_budget': fields.Float(description='Total budget', default=0),
    'amount_paid': fields.Float(description='Amount paid so far', default=0),
    'payment_terms': fields.String(description='Payment terms'),
    'last_payment_date': fields.Date(description='Date of the last payment')
})

member_model = api.model('ProjectMember', {
    'employee_id': fields.String(required=True, description='Employee ID'),
    'role': fields.String(description='Role on the project')
})

member_role_model = api.model('ProjectMemberRole', {
    'role': fields.String(description='Role on the project')
})

# Set up schemas
project_schema = ProjectSchema()
projects_schema = ProjectSchema(many=True)
member_schema = ProjectMemberSchema()
members_schema = ProjectMemberSchema(many=True)

# Query parameter parser
PROJECT_FILTERS = ('status', 'priority', 'clientId')
project_parser = list_parser(*PROJECT_FILTERS)

@api.route('')
class ProjectList(Resource):
    @require_permission('projects:read')
    @api.expect(project_parser)
    @api.response(200, 'Success')
    @api.response(400, 'Invalid filter')
    def get(self):
        """Get projects with filtering, sorting and pagination"""
        params = list_params(project_parser, PROJECT_FILTERS)
        page = ProjectService(db.session).list(params)
        return success(page.to_dict(projects_schema))

    @require_permission('projects:write')
    @api.expect(project_model)
    @api.response(201, 'Project created successfully')
    @api.response(400, 'Validation error')
    def post(self):
        """Create a new project"""
        result = ProjectService(db.session).create(request_payload())
        return result_response(result, project_schema, 201)

@api.route('/<string:id>')
class ProjectDetail(Resource):
    @require_permission('projects:read')
    @api.response(200, 'Success')
    @api.response(404, 'Project not found')
    def get(self, id):
        """Get a project with its client name and milestone progress"""
        found = ProjectService(db.session).get_with_relations(id)
        return detail_response(found, project_schema, 'Project')

    @require_permission('projects:write')
    @api.expect(project_model)
    @api.response(200, 'Project updated successfully')
    @api.response(404, 'Project not found')
    @api.response(400, 'Validation error')
    def put(self, id):
        """Update a project"""
        result = ProjectService(db.session).update(id, request_payload())
        return result_response(result, project_schema)

    @require_permission('projects:write')
    @api.response(200, 'Project deleted successfully')
    @api.response(404, 'Project not found')
    def delete(self, id):
        """Soft-delete a project"""
        result = ProjectService(db.session).delete(id)
        return deleted_response(result, 'Project')

@api.route('/<string:id>/members')
class ProjectMembers(Resource):
    @require_permission('projects:read')
    @api.response(200, 'Success')
    @api.response(404, 'Project not found')
    def get(self, id):
        """List the project's team members, newest first"""
        result = ProjectMemberService(db.session).list_members(id)
        return result_response(result, members_schema)

    @require_permission('projects:assign')
    @api.expect(member_model)
    @api.response(201, 'Team member added')
    @api.response(400, 'Validation error or duplicate member')
    @api.response(404, 'Project not found')
    def post(self, id):
        """Add an employee to the project team"""
        result = ProjectMemberService(db.session).add_member(id, request_payload())
        return result_response(result, member_schema, 201)

@api.route('/<string:id>/members/<string:employee_id>')
class ProjectMemberDetail(Resource):
    @require_permission('projects:assign')
    @api.expect(member_role_model)
    @api.response(200, 'Team member updated')
    @api.response(404, 'Team member not found')
    def put(self, id, employee_id):
        """Change a team member's role"""
        result = ProjectMemberService(db.session).update_member_role(id, employee_id, request_payload())
        return result_response(result, member_schema)

    @require_permission('projects:assign')
    @api.response(200, 'Team member removed')
    @api.response(404, 'Team member not found')
    def delete(self, id, employee_id):
        """Remove an employee from the project team"""
        result = ProjectMemberService(db.session).remove_member(id, employee_id)
        if not result.success:
            return result_response(result)
        return success({'message': 'Team member removed'})
