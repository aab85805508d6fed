import json
import pytest

@pytest.fixture
def staffed_milestone(client, auth_headers, make_project, make_employee, make_milestone):
    """A milestone whose project has one team member"""
    project = make_project()
    milestone = make_milestone(project_id=project['id'])
    employee = make_employee()
    client.post(f"/api/projects/{project['id']}/members", json={'employee_id': employee['id']},
                headers=auth_headers)
    return milestone, employee

def test_assign_team_member(client, auth_headers, staffed_milestone):
    milestone, employee = staffed_milestone

    response = client.post(f"/api/milestones/{milestone['id']}/employees",
                           json={'employee_id': employee['id']}, headers=auth_headers)

    assert response.status_code == 201
    assert json.loads(response.data)['data']['employee']['id'] == employee['id']

    response = client.get(f"/api/milestones/{milestone['id']}/employees", headers=auth_headers)
    assignees = json.loads(response.data)['data']
    assert [a['employee_id'] for a in assignees] == [employee['id']]

def test_assign_requires_project_membership(client, auth_headers, staffed_milestone, make_employee):
    milestone, _ = staffed_milestone
    outsider = make_employee(name='Outsider')

    response = client.post(f"/api/milestones/{milestone['id']}/employees",
                           json={'employee_id': outsider['id']}, headers=auth_headers)

    assert response.status_code == 400
    assert json.loads(response.data)['error']['message'] == 'Employee must be a project team member first'

def test_duplicate_assignment(client, auth_headers, staffed_milestone):
    milestone, employee = staffed_milestone
    url = f"/api/milestones/{milestone['id']}/employees"

    client.post(url, json={'employee_id': employee['id']}, headers=auth_headers)
    response = client.post(url, json={'employee_id': employee['id']}, headers=auth_headers)

    assert response.status_code == 400
    assert json.loads(response.data)['error']['message'] == 'Employee already assigned'

    response = client.get(url, headers=auth_headers)
    assert len(json.loads(response.data)['data']) == 1

def test_unassign(client, auth_headers, staffed_milestone):
    milestone, employee = staffed_milestone
    client.post(f"/api/milestones/{milestone['id']}/employees",
                json={'employee_id': employee['id']}, headers=auth_headers)

    url = f"/api/milestones/{milestone['id']}/employees/{employee['id']}"
    response = client.delete(url, headers=auth_headers)
    assert response.status_code == 200

    response = client.delete(url, headers=auth_headers)
    assert response.status_code == 404
    assert json.loads(response.data)['error']['message'] == 'Milestone assignee not found'

def test_assignees_of_missing_milestone(client, auth_headers):
    response = client.get('/api/milestones/missing/employees', headers=auth_headers)

    assert response.status_code == 404
    assert json.loads(response.data)['error']['message'] == 'Milestone not found'
