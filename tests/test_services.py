import pytest
from sqlalchemy.exc import OperationalError
from models import Client, Employee, Project, ProjectMember
from services import (
    ClientService, CommunicationService, EmployeeService, MilestoneService, ProjectService,
    ProjectMemberService, MilestoneEmployeeService, ServiceResult,
)
from utils.errors import ConflictError, NotFoundError

def test_service_result_constructors():
    assert ServiceResult.ok({'a': 1}) == ServiceResult(success=True, data={'a': 1})
    assert ServiceResult.fail('nope').kind == 'validation'
    result = ServiceResult.from_error(NotFoundError('Client'))
    assert result.success is False
    assert result.error == 'Client not found'
    assert result.kind == 'not_found'

def test_create_normalizes_blank_strings(session):
    result = ClientService(session).create({'name': 'Acme', 'email': '', 'address': '  '})

    assert result.success
    assert result.data.email is None
    assert result.data.address is None

def test_create_reports_first_error_in_field_order(session):
    result = ClientService(session).create({'email': 'bad', 'name': ''})

    assert result.success is False
    assert result.kind == 'validation'
    assert result.error == 'Client name is required'

def test_create_ignores_unknown_keys(session):
    result = ClientService(session).create({'name': 'Acme', 'id': 'chosen', 'created_at': 'x'})

    assert result.success
    assert result.data.id != 'chosen'

def test_short_summary_inserts_nothing(session):
    owner = Client(name='Owner')
    session.add(owner)
    session.commit()

    result = CommunicationService(session).create({
        'client_id': owner.id,
        'date': '2030-01-01',
        'mode': 'email',
        'summary': 'Hi!!!'
    })

    assert result.error == 'Summary must be at least 10 characters'
    assert CommunicationService(session).repository.count() == 0

def test_update_missing_row(session):
    result = ProjectService(session).update('missing', {'project_name': 'New name'})

    assert result.success is False
    assert result.kind == 'not_found'
    assert result.error == 'Project not found'

def test_delete_missing_row(session):
    result = EmployeeService(session).delete('missing')

    assert result.kind == 'not_found'

def test_store_failure_gives_generic_message(session, monkeypatch):
    service = ClientService(session)

    def broken_create(values):
        raise OperationalError('INSERT', {}, Exception('disk I/O error'))

    monkeypatch.setattr(service.repository, 'create', broken_create)

    result = service.create({'name': 'Acme'})

    assert result.success is False
    assert result.kind == 'internal'
    assert result.error == 'Failed to create client'

def test_conflict_message_is_kept(session, monkeypatch):
    service = CommunicationService(session)

    def conflicting_delete(id):
        raise ConflictError()

    monkeypatch.setattr(service.repository, 'soft_delete', conflicting_delete)

    result = service.delete('anything')

    assert result.kind == 'conflict'
    assert result.error == 'Record already exists'

def test_search_clients(session):
    service = ClientService(session)
    service.create({'name': 'Acme Corp'})
    service.create({'name': 'Other', 'company_name': 'ACME Holdings'})

    assert {c.name for c in service.search('acme')} == {'Acme Corp', 'Other'}
    assert service.search('   ') == []
    assert len(service.search('acme', limit=1)) == 1

def test_get_by_user(session):
    session.add(Employee(name='Linked', user_id=1))
    session.commit()

    assert EmployeeService(session).get_by_user(1).name == 'Linked'
    assert EmployeeService(session).get_by_user(2) is None

@pytest.fixture
def team(session):
    owner = Client(name='Owner')
    ann = Employee(name='Ann')
    bob = Employee(name='Bob')
    session.add_all([owner, ann, bob])
    session.commit()
    project = Project(client_id=owner.id, project_name='Site')
    session.add(project)
    session.commit()
    return project, ann, bob

def test_add_member_twice(session, team):
    project, ann, _ = team
    service = ProjectMemberService(session)

    assert service.add_member(project.id, {'employee_id': ann.id, 'role': 'Lead'}).success
    result = service.add_member(project.id, {'employee_id': ann.id})

    assert result.error == 'Employee is already a team member'
    assert session.query(ProjectMember).count() == 1

def test_add_member_role_too_long(session, team):
    project, ann, _ = team

    result = ProjectMemberService(session).add_member(project.id, {'employee_id': ann.id, 'role': 'x' * 101})

    assert result.error == 'Role cannot exceed 100 characters'

def test_member_of_deleted_project(session, team):
    project, ann, _ = team
    ProjectService(session).delete(project.id)

    result = ProjectMemberService(session).add_member(project.id, {'employee_id': ann.id})

    assert result.kind == 'not_found'

def test_assign_milestone(session, team):
    project, ann, bob = team
    members = ProjectMemberService(session)
    members.add_member(project.id, {'employee_id': ann.id})
    milestone = MilestoneService(session).create({'project_id': project.id, 'milestone': 'Launch'}).data
    assignees = MilestoneEmployeeService(session)

    assert assignees.assign(milestone.id, {'employee_id': bob.id}).error == \
        'Employee must be a project team member first'
    assert assignees.assign(milestone.id, {'employee_id': ann.id}).success
    assert assignees.assign(milestone.id, {'employee_id': ann.id}).error == 'Employee already assigned'
    assert [row.employee_id for row in assignees.list_assignees(milestone.id).data] == [ann.id]

    assert assignees.unassign(milestone.id, ann.id).success
    assert assignees.unassign(milestone.id, ann.id).kind == 'not_found'

def test_search_clients_returns_oldest_first(session):
    service = ClientService(session)
    service.create({'name': 'Widget One'})
    service.create({'name': 'Two', 'email': 'widget@two.test'})
    service.create({'name': 'Three', 'company_name': 'Widget Works'})

    assert [c.name for c in service.search('widget')] == ['Widget One', 'Two', 'Three']
