from flask_restx import Namespace, Resource, fields, reqparse
from schemas.client import ClientSchema, ClientSummarySchema
from services.clients import ClientService
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
api = Namespace('clients', description='Client operations')

# Define models for swagger
client_model = api.model('Client', {
    'name': fields.String(required=True, description='Client name (at least 2 characters)'),
    'email': fields.String(description='Client email'),
    'phone': fields.String(description='Client phone number'),
    'company_name': fields.String(description='Company name'),
    'address': fields.String(description='Client address'),
    'notes': fields.String(description='Additional notes')
})

# Set up schemas
client_schema = ClientSchema()
clients_schema = ClientSchema(many=True)
client_summaries_schema = ClientSummarySchema(many=True)

# Query parameter parsers
CLIENT_FILTERS = ()
client_parser = list_parser(*CLIENT_FILTERS)

search_parser = reqparse.RequestParser()
search_parser.add_argument('q', type=str, location='args', help='Text to look for in name, email or company')
search_parser.add_argument('limit', type=int, location='args', default=10, help='Maximum number of matches')

@api.route('')
class ClientList(Resource):
    @require_permission('clients:read')
    @api.expect(client_parser)
    @api.response(200, 'Success')
    def get(self):
        """Get clients with search, sorting and pagination"""
        params = list_params(client_parser, CLIENT_FILTERS)
        page = ClientService(db.session).list(params)
        return success(page.to_dict(clients_schema))

    @require_permission('clients:write')
    @api.expect(client_model)
    @api.response(201, 'Client created successfully')
    @api.response(400, 'Validation error')
    def post(self):
        """Create a new client"""
        result = ClientService(db.session).create(request_payload())
        return result_response(result, client_schema, 201)

@api.route('/search')
class ClientSearch(Resource):
    @require_permission('clients:read')
    @api.expect(search_parser)
    @api.response(200, 'Success')
    def get(self):
        """Quick client lookup for pickers"""
        args = search_parser.parse_args()
        limit = min(max(args.get('limit') or 10, 1), 100)
        clients = ClientService(db.session).search(args.get('q'), limit)
        return success(client_summaries_schema.dump(clients))

@api.route('/<string:id>')
class ClientDetail(Resource):
    @require_permission('clients:read')
    @api.response(200, 'Success')
    @api.response(404, 'Client not found')
    def get(self, id):
        """Get a client by ID, with its project count"""
        found = ClientService(db.session).get_with_relations(id)
        return detail_response(found, client_schema, 'Client')

    @require_permission('clients:write')
    @api.expect(client_model)
    @api.response(200, 'Client updated successfully')
    @api.response(404, 'Client not found')
    @api.response(400, 'Validation error')
    def put(self, id):
        """Update a client"""
        result = ClientService(db.session).update(id, request_payload())
        return result_response(result, client_schema)

    @require_permission('clients:write')
    @api.response(200, 'Client deleted successfully')
    @api.response(404, 'Client not found')
    def delete(self, id):
        """Soft-delete a client"""
        result = ClientService(db.session).delete(id)
        return deleted_response(result, 'Client')
