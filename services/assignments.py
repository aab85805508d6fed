"""
Team assignment: employees on projects and on milestones.

Both tables are plain join rows. A pair may exist once; a second insert is
reported as a conflict and never overwrites the first row.
"""
import logging

from repositories import (
    EMPLOYEES, MILESTONES, PROJECTS, PROJECT_MEMBERS, MILESTONE_EMPLOYEES,
    JoinRepository, Repository,
)
from schemas.assignment import (
    ProjectMemberInputSchema, MemberRoleInputSchema, MilestoneEmployeeInputSchema,
)
from services.base import ServiceResult, load_input, run_write
from utils.errors import ConflictError

logger = logging.getLogger(__name__)


class ProjectMemberService:
    def __init__(self, session):
        self.session = session
        self.projects = Repository(session, PROJECTS)
        self.employees = Repository(session, EMPLOYEES)
        self.members = JoinRepository(session, PROJECT_MEMBERS)

    def list_members(self, project_id):
        if self.projects.find_by_id(project_id) is None:
            return ServiceResult.fail('Project not found', kind='not_found')
        return ServiceResult.ok(self.members.find_by_parent(project_id))

    def add_member(self, project_id, payload):
        if self.projects.find_by_id(project_id) is None:
            return ServiceResult.fail('Project not found', kind='not_found')

        values, error = load_input(ProjectMemberInputSchema, payload, label='team member')
        if error:
            return error

        employee_id = values['employee_id']
        if self.employees.find_by_id(employee_id) is None:
            return ServiceResult.fail('Referenced employee does not exist', kind='conflict')
        if self.members.find(project_id, employee_id) is not None:
            return ServiceResult.fail('Employee is already a team member', kind='conflict')

        values['project_id'] = project_id
        result = run_write('add team member', lambda: self.members.add(values))
        return _duplicate_as(result, 'Employee is already a team member')

    def update_member_role(self, project_id, employee_id, payload):
        values, error = load_input(MemberRoleInputSchema, payload, partial=True, label='team member')
        if error:
            return error
        return run_write(
            'update team member',
            lambda: self.members.update(project_id, employee_id, values),
        )

    def remove_member(self, project_id, employee_id):
        result = run_write('remove team member', lambda: self.members.remove(project_id, employee_id))
        if result.success and not result.data:
            return ServiceResult.fail('Team member not found', kind='not_found')
        return result


class MilestoneEmployeeService:
    def __init__(self, session):
        self.session = session
        self.milestones = Repository(session, MILESTONES)
        self.employees = Repository(session, EMPLOYEES)
        self.members = JoinRepository(session, PROJECT_MEMBERS)
        self.assignees = JoinRepository(session, MILESTONE_EMPLOYEES)

    def list_assignees(self, milestone_id):
        if self.milestones.find_by_id(milestone_id) is None:
            return ServiceResult.fail('Milestone not found', kind='not_found')
        return ServiceResult.ok(self.assignees.find_by_parent(milestone_id))

    def assign(self, milestone_id, payload):
        milestone = self.milestones.find_by_id(milestone_id)
        if milestone is None:
            return ServiceResult.fail('Milestone not found', kind='not_found')

        values, error = load_input(MilestoneEmployeeInputSchema, payload, label='milestone assignee')
        if error:
            return error

        employee_id = values['employee_id']
        if self.employees.find_by_id(employee_id) is None:
            return ServiceResult.fail('Referenced employee does not exist', kind='conflict')
        if self.members.find(milestone.project_id, employee_id) is None:
            logger.info("Rejected assignment of non-member %s to milestone %s", employee_id, milestone_id)
            return ServiceResult.fail('Employee must be a project team member first')
        if self.assignees.find(milestone_id, employee_id) is not None:
            return ServiceResult.fail('Employee already assigned', kind='conflict')

        values['milestone_id'] = milestone_id
        result = run_write('assign employee', lambda: self.assignees.add(values))
        return _duplicate_as(result, 'Employee already assigned')

    def unassign(self, milestone_id, employee_id):
        result = run_write('unassign employee', lambda: self.assignees.remove(milestone_id, employee_id))
        if result.success and not result.data:
            return ServiceResult.fail('Milestone assignee not found', kind='not_found')
        return result


def _duplicate_as(result, message):
    # A concurrent insert can still trip the pair constraint after the check
    if not result.success and result.kind == ConflictError.kind and result.error == ConflictError.default_message:
        return ServiceResult.fail(message, kind='conflict')
    return result

