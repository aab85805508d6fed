import math

from sqlalchemy import case, func

from models import (
    Client, Employee, Project, ProjectMilestone, CommunicationLog,
    ProjectMember, MilestoneEmployee, MilestoneStatus,
)
from repositories.base import EntityConfig, JoinConfig

UNKNOWN = 'Unknown'


def progress_percent(completed, total):
    """Completed share of ``total`` as a 0-100 integer, rounding halves up."""
    if not total:
        return 0
    return math.floor(100 * completed / total + 0.5)


def milestone_progress(session, project_ids):
    """
    Count live milestones per project in one grouped query.

    Returns ``{project_id: (total, completed)}``; projects without milestones
    are absent.
    """
    if not project_ids:
        return {}
    completed = func.sum(case((ProjectMilestone.status == MilestoneStatus.COMPLETED, 1), else_=0))
    rows = (
        session.query(ProjectMilestone.project_id, func.count(ProjectMilestone.id), completed)
        .filter(ProjectMilestone.project_id.in_(project_ids), ProjectMilestone.deleted_at.is_(None))
        .group_by(ProjectMilestone.project_id)
        .all()
    )
    return {project_id: (total, int(done or 0)) for project_id, total, done in rows}


def _name_of(session, column, id):
    # Historical joins: a soft-deleted parent still lends its name
    if id is None:
        return None
    model = column.class_
    return session.query(column).filter(model.id == id).scalar()


def client_relations(session, client):
    count = (
        session.query(Project)
        .filter(Project.client_id == client.id, Project.deleted_at.is_(None))
        .count()
    )
    return {'projectCount': count}


def employee_relations(session, employee):
    count = session.query(ProjectMember).filter(ProjectMember.employee_id == employee.id).count()
    return {'projectCount': count}


def project_relations(session, project):
    total, completed = milestone_progress(session, [project.id]).get(project.id, (0, 0))
    return {
        'client_name': _name_of(session, Client.name, project.client_id) or UNKNOWN,
        'milestoneCount': total,
        'completedMilestones': completed,
        'progress': progress_percent(completed, total),
    }


def milestone_relations(session, milestone):
    return {'project_name': _name_of(session, Project.project_name, milestone.project_id) or UNKNOWN}


def communication_relations(session, log):
    return {
        'client_name': _name_of(session, Client.name, log.client_id) or UNKNOWN,
        'project_name': _name_of(session, Project.project_name, log.project_id),
    }


CLIENTS = EntityConfig(
    model=Client,
    resource='Client',
    search_fields=('name', 'email', 'company_name'),
    relations=client_relations,
)

EMPLOYEES = EntityConfig(
    model=Employee,
    resource='Employee',
    search_fields=('name', 'email', 'position'),
    filters={'status': 'status', 'department': 'department'},
    relations=employee_relations,
)

PROJECTS = EntityConfig(
    model=Project,
    resource='Project',
    search_fields=('project_name',),
    filters={'status': 'status', 'priority': 'priority', 'clientId': 'client_id'},
    references={'client_id': (Client, 'client')},
    relations=project_relations,
)

MILESTONES = EntityConfig(
    model=ProjectMilestone,
    resource='Milestone',
    search_fields=('milestone',),
    filters={'status': 'status', 'projectId': 'project_id'},
    default_sort='due_date',
    references={'project_id': (Project, 'project')},
    relations=milestone_relations,
)

COMMUNICATIONS = EntityConfig(
    model=CommunicationLog,
    resource='Communication log',
    search_fields=('summary',),
    filters={
        'mode': 'mode',
        'clientId': 'client_id',
        'projectId': 'project_id',
        'followUpRequired': 'follow_up_required',
    },
    default_sort='date',
    references={'client_id': (Client, 'client'), 'project_id': (Project, 'project')},
    relations=communication_relations,
)

PROJECT_MEMBERS = JoinConfig(model=ProjectMember, parent_field='project_id', resource='Team member')

MILESTONE_EMPLOYEES = JoinConfig(model=MilestoneEmployee, parent_field='milestone_id', resource='Milestone assignee')
