import json
from app import db
from models import ProjectMember

def _add(client, headers, project_id, employee_id, **extra):
    payload = {'employee_id': employee_id}
    payload.update(extra)
    return client.post(f'/api/projects/{project_id}/members', json=payload, headers=headers)

def test_add_and_list_members(client, auth_headers, make_project, make_employee):
    project = make_project()
    first = make_employee(name='Ann')
    second = make_employee(name='Bob')

    response = _add(client, auth_headers, project['id'], first['id'], role='Lead')
    assert response.status_code == 201
    member = json.loads(response.data)['data']
    assert member['role'] == 'Lead'
    assert member['employee']['name'] == 'Ann'

    _add(client, auth_headers, project['id'], second['id'])

    response = client.get(f"/api/projects/{project['id']}/members", headers=auth_headers)
    assert response.status_code == 200
    members = json.loads(response.data)['data']
    assert [m['employee']['name'] for m in members] == ['Bob', 'Ann']

def test_duplicate_member_keeps_one_row(app, client, auth_headers, make_project, make_employee):
    project = make_project()
    employee = make_employee()

    assert _add(client, auth_headers, project['id'], employee['id'], role='Lead').status_code == 201
    response = _add(client, auth_headers, project['id'], employee['id'], role='Reviewer')

    assert response.status_code == 400
    assert json.loads(response.data)['error']['message'] == 'Employee is already a team member'

    with app.app_context():
        rows = db.session.query(ProjectMember).filter_by(project_id=project['id']).all()
        assert len(rows) == 1
        assert rows[0].role == 'Lead'

def test_add_member_validation(client, auth_headers, make_project):
    project = make_project()

    response = _add(client, auth_headers, project['id'], '')
    assert response.status_code == 400
    assert json.loads(response.data)['error']['message'] == 'Employee ID is required'

    response = _add(client, auth_headers, project['id'], 'ghost')
    assert response.status_code == 400
    assert json.loads(response.data)['error']['message'] == 'Referenced employee does not exist'

def test_members_of_missing_project(client, auth_headers, make_employee):
    employee = make_employee()

    response = client.get('/api/projects/missing/members', headers=auth_headers)
    assert response.status_code == 404
    assert json.loads(response.data)['error']['message'] == 'Project not found'

    response = _add(client, auth_headers, 'missing', employee['id'])
    assert response.status_code == 404

def test_update_member_role(client, auth_headers, make_project, make_employee):
    project = make_project()
    employee = make_employee()
    _add(client, auth_headers, project['id'], employee['id'], role='Developer')

    response = client.put(f"/api/projects/{project['id']}/members/{employee['id']}",
                          json={'role': 'Tech Lead'}, headers=auth_headers)

    assert response.status_code == 200
    assert json.loads(response.data)['data']['role'] == 'Tech Lead'

    response = client.put(f"/api/projects/{project['id']}/members/nobody",
                          json={'role': 'Tech Lead'}, headers=auth_headers)
    assert response.status_code == 404
    assert json.loads(response.data)['error']['message'] == 'Team member not found'

def test_remove_member(client, auth_headers, make_project, make_employee):
    project = make_project()
    employee = make_employee()
    _add(client, auth_headers, project['id'], employee['id'])

    url = f"/api/projects/{project['id']}/members/{employee['id']}"
    response = client.delete(url, headers=auth_headers)
    assert response.status_code == 200

    response = client.get(f"/api/projects/{project['id']}/members", headers=auth_headers)
    assert json.loads(response.data)['data'] == []

    response = client.delete(url, headers=auth_headers)
    assert response.status_code == 404

    # Removal is not permanent: the employee can be added again
    assert _add(client, auth_headers, project['id'], employee['id']).status_code == 201

def test_viewer_cannot_assign(client, viewer_headers, make_project, make_employee):
    project = make_project()
    employee = make_employee()

    response = _add(client, viewer_headers, project['id'], employee['id'])

    assert response.status_code == 403
