from flask import current_app
from flask_restx import Namespace, Resource
from services.dashboard import DashboardService
from app import db
from api.common import require_permission, success

api = Namespace('dashboard', description='Dashboard metrics and summaries')


def _service():
    return DashboardService(db.session, current_app.config.get('RECENT_COMMUNICATION_DAYS', 7))

@api.route('')
class Dashboard(Resource):
    @require_permission('dashboard:view')
    @api.response(200, 'Success')
    @api.response(500, 'Failed to build the dashboard')
    def get(self):
        """Metrics, recent projects, top clients and recent activity"""
        return success(_service().get_dashboard_data())

@api.route('/metrics')
class DashboardMetrics(Resource):
    @require_permission('dashboard:view')
    @api.response(200, 'Success')
    def get(self):
        """Headline counts and totals only"""
        return success(_service().get_metrics())
