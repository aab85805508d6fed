from flask_restx import Namespace, Resource, fields
from models.communication import CommunicationMode
from schemas.communication import CommunicationSchema
from services.communications import CommunicationService
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

api = Namespace('communications', description='Client communication log')

communication_model = api.model('Communication', {
    'client_id': fields.String(required=True, description='Client ID'),
    'project_id': fields.String(description='Related project ID'),
    'date': fields.Date(required=True, description='Date of the contact'),
    'mode': fields.String(required=True, description='Channel', enum=[m.value for m in CommunicationMode]),
    'summary': fields.String(required=True, description='What was discussed (at least 10 characters)'),
    'follow_up_required': fields.Boolean(description='Whether a follow-up is needed', default=False),
    'follow_up_date': fields.Date(description='Planned follow-up date')
})

communication_schema = CommunicationSchema()
communications_schema = CommunicationSchema(many=True)

COMMUNICATION_FILTERS = ('mode', 'clientId', 'projectId', 'followUpRequired')
communication_parser = list_parser(*COMMUNICATION_FILTERS)

@api.route('')
class CommunicationList(Resource):
    @require_permission('communications:read')
    @api.expect(communication_parser)
    @api.response(200, 'Success')
    def get(self):
        """Get communication logs, newest contact first"""
        params = list_params(communication_parser, COMMUNICATION_FILTERS)
        page = CommunicationService(db.session).list(params)
        return success(page.to_dict(communications_schema))

    @require_permission('communications:write')
    @api.expect(communication_model)
    @api.response(201, 'Communication logged')
    @api.response(400, 'Validation error')
    def post(self):
        """Log a communication"""
        result = CommunicationService(db.session).create(request_payload())
        return result_response(result, communication_schema, 201)

@api.route('/<string:id>')
class CommunicationDetail(Resource):
    @require_permission('communications:read')
    @api.response(200, 'Success')
    @api.response(404, 'Communication log not found')
    def get(self, id):
        """Get a communication log with client and project names"""
        found = CommunicationService(db.session).get_with_relations(id)
        return detail_response(found, communication_schema, 'Communication log')

    @require_permission('communications:write')
    @api.expect(communication_model)
    @api.response(200, 'Communication log updated')
    @api.response(404, 'Communication log not found')
    def put(self, id):
        """Update a communication log"""
        result = CommunicationService(db.session).update(id, request_payload())
        return result_response(result, communication_schema)

    @require_permission('communications:write')
    @api.response(200, 'Communication log deleted')
    @api.response(404, 'Communication log not found')
    def delete(self, id):
        """Soft-delete a communication log"""
        result = CommunicationService(db.session).delete(id)
        return deleted_response(result, 'Communication log')
