"""
Dashboard aggregates.

Every figure is computed by the store with grouped queries; no per-row
follow-up queries are issued. The parts are read one after another inside the
caller's session and any store error aborts the whole aggregate.
"""
import datetime
import logging

from sqlalchemy import and_, func

from models import (
    Client, Employee, Project, ProjectMilestone, CommunicationLog,
    EmployeeStatus, ProjectStatus, MilestoneStatus,
)
from models.base import utcnow
from repositories import milestone_progress, progress_percent
from utils.normalize import truncate

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = 'Unknown'
ACTIVITY_PER_SOURCE = 3
SUMMARY_LENGTH = 100


def _iso(value):
    return value.isoformat() if value is not None else None


def _count(query):
    return query.order_by(None).count() or 0


class DashboardService:
    def __init__(self, session, recent_days=7):
        self.session = session
        self.recent_days = recent_days

    def get_dashboard_data(self):
        logger.debug("Building dashboard (recent window %s days)", self.recent_days)
        return {
            'metrics': self.get_metrics(),
            'recentProjects': self.get_recent_projects(),
            'topClients': self.get_top_clients(),
            'recentActivity': self.get_recent_activity(),
        }

    def get_metrics(self):
        session = self.session
        live_projects = session.query(Project).filter(Project.deleted_at.is_(None))
        since = utcnow().date() - datetime.timedelta(days=self.recent_days)

        total_revenue, outstanding = (
            session.query(
                func.coalesce(func.sum(Project.total_budget), 0),
                func.coalesce(func.sum(Project.total_budget - Project.amount_paid), 0),
            )
            .filter(Project.deleted_at.is_(None))
            .one()
        )

        return {
            'totalClients': _count(session.query(Client).filter(Client.deleted_at.is_(None))),
            'activeProjects': _count(live_projects.filter(Project.status == ProjectStatus.ACTIVE)),
            'completedProjects': _count(live_projects.filter(Project.status == ProjectStatus.COMPLETED)),
            'totalEmployees': _count(
                session.query(Employee).filter(
                    Employee.deleted_at.is_(None), Employee.status == EmployeeStatus.ACTIVE
                )
            ),
            'pendingMilestones': _count(
                session.query(ProjectMilestone).filter(
                    ProjectMilestone.deleted_at.is_(None),
                    ProjectMilestone.status.in_([MilestoneStatus.PENDING, MilestoneStatus.IN_PROGRESS]),
                )
            ),
            'recentCommunications': _count(
                session.query(CommunicationLog).filter(
                    CommunicationLog.deleted_at.is_(None), CommunicationLog.date >= since
                )
            ),
            'totalRevenue': float(total_revenue or 0),
            'outstandingPayments': float(outstanding or 0),
        }

    def get_recent_projects(self, limit=5):
        """Newest live projects with their client's name and milestone progress."""
        rows = (
            self.session.query(Project, Client.name)
            .outerjoin(Client, Client.id == Project.client_id)
            .filter(Project.deleted_at.is_(None))
            .order_by(Project.created_at.desc())
            .limit(limit)
            .all()
        )
        progress = milestone_progress(self.session, [project.id for project, _ in rows])

        summaries = []
        for project, client_name in rows:
            total, completed = progress.get(project.id, (0, 0))
            summaries.append({
                'id': project.id,
                'projectName': project.project_name,
                'clientName': client_name or UNKNOWN_CLIENT,
                'status': project.status.value,
                'priority': project.priority.value,
                'progress': progress_percent(completed, total),
                'dueDate': _iso(project.end_date),
            })
        return summaries

    def get_top_clients(self, limit=5):
        """
        Live clients ranked by the summed budget of their live projects.

        The ranking runs over every client, so a high-value client created
        late still makes the list.
        """
        total_value = func.coalesce(func.sum(Project.total_budget), 0)
        rows = (
            self.session.query(Client.id, Client.name, func.count(Project.id), total_value)
            .outerjoin(Project, and_(Project.client_id == Client.id, Project.deleted_at.is_(None)))
            .filter(Client.deleted_at.is_(None))
            .group_by(Client.id, Client.name)
            .order_by(total_value.desc(), Client.name.asc())
            .limit(limit)
            .all()
        )

        client_ids = [row[0] for row in rows]
        last_contacts = {}
        if client_ids:
            last_contacts = dict(
                self.session.query(CommunicationLog.client_id, func.max(CommunicationLog.date))
                .filter(CommunicationLog.client_id.in_(client_ids), CommunicationLog.deleted_at.is_(None))
                .group_by(CommunicationLog.client_id)
                .all()
            )

        return [
            {
                'id': client_id,
                'name': name,
                'projectCount': project_count,
                'totalValue': float(value or 0),
                'lastContact': _iso(last_contacts.get(client_id)),
            }
            for client_id, name, project_count, value in rows
        ]

    def get_recent_activity(self, limit=10):
        projects = (
            self.session.query(Project)
            .filter(Project.deleted_at.is_(None))
            .order_by(Project.created_at.desc())
            .limit(ACTIVITY_PER_SOURCE)
            .all()
        )
        logs = (
            self.session.query(CommunicationLog)
            .filter(CommunicationLog.deleted_at.is_(None))
            .order_by(CommunicationLog.created_at.desc())
            .limit(ACTIVITY_PER_SOURCE)
            .all()
        )

        activities = [
            {
                'id': f'project-{project.id}',
                'type': 'project',
                'title': 'New Project',
                'description': project.project_name,
                'timestamp': project.created_at,
            }
            for project in projects
        ]
        activities.extend(
            {
                'id': f'comm-{log.id}',
                'type': 'communication',
                'title': f'{log.mode.value.capitalize()} Log',
                'description': truncate(log.summary, SUMMARY_LENGTH),
                'timestamp': log.created_at,
            }
            for log in logs
        )

        activities.sort(key=lambda item: item['timestamp'], reverse=True)
        for item in activities:
            item['timestamp'] = _iso(item['timestamp'])
        return activities[:limit]
