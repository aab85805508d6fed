import json

def test_create_milestone(client, auth_headers, make_project):
    project = make_project()

    response = client.post('/api/milestones', json={
        'project_id': project['id'],
        'milestone': 'Kickoff',
        'due_date': '2030-01-15',
        'description': ''
    }, headers=auth_headers)

    assert response.status_code == 201
    data = json.loads(response.data)['data']
    assert data['status'] == 'pending'
    assert data['due_date'] == '2030-01-15'
    assert data['description'] is None

def test_create_milestone_validation(client, auth_headers, make_project):
    project = make_project()

    response = client.post('/api/milestones', json={'project_id': project['id'], 'milestone': 'K'},
                           headers=auth_headers)
    assert response.status_code == 400
    assert json.loads(response.data)['error']['message'] == 'Milestone name must be at least 2 characters'

    response = client.post('/api/milestones', json={
        'project_id': project['id'],
        'milestone': 'Kickoff',
        'due_date': 'someday'
    }, headers=auth_headers)
    assert json.loads(response.data)['error']['message'] == 'Please select a valid target finish date'

def test_create_milestone_for_missing_project(client, auth_headers):
    response = client.post('/api/milestones', json={'project_id': 'nope', 'milestone': 'Kickoff'},
                           headers=auth_headers)

    assert response.status_code == 400
    assert json.loads(response.data)['error']['message'] == 'Referenced project does not exist'

def test_milestones_default_sort_is_due_date(client, auth_headers, make_project, make_milestone):
    project = make_project()
    make_milestone(project_id=project['id'], milestone='Early', due_date='2030-01-01')
    make_milestone(project_id=project['id'], milestone='Late', due_date='2030-06-01')
    make_milestone(project_id=project['id'], milestone='Middle', due_date='2030-03-01')

    response = client.get(f"/api/milestones?projectId={project['id']}", headers=auth_headers)
    names = [m['milestone'] for m in json.loads(response.data)['data']['items']]
    assert names == ['Late', 'Middle', 'Early']

    response = client.get(f"/api/milestones?projectId={project['id']}&sortOrder=asc", headers=auth_headers)
    names = [m['milestone'] for m in json.loads(response.data)['data']['items']]
    assert names == ['Early', 'Middle', 'Late']

def test_filter_milestones_by_status(client, auth_headers, make_project, make_milestone):
    project = make_project()
    make_milestone(project_id=project['id'], status='completed')
    make_milestone(project_id=project['id'], milestone='Build')

    response = client.get('/api/milestones?status=completed', headers=auth_headers)

    data = json.loads(response.data)['data']
    assert data['total'] == 1
    assert data['items'][0]['status'] == 'completed'

def test_milestone_detail_has_project_name(client, auth_headers, make_project, make_milestone):
    project = make_project(project_name='Mobile App')
    milestone = make_milestone(project_id=project['id'])

    response = client.get(f"/api/milestones/{milestone['id']}", headers=auth_headers)

    assert response.status_code == 200
    assert json.loads(response.data)['data']['project_name'] == 'Mobile App'

def test_update_and_delete_milestone(client, auth_headers, make_milestone):
    milestone = make_milestone()

    response = client.put(f"/api/milestones/{milestone['id']}", json={
        'status': 'completed',
        'completion_date': '2030-02-01'
    }, headers=auth_headers)
    assert response.status_code == 200
    data = json.loads(response.data)['data']
    assert data['status'] == 'completed'
    assert data['milestone'] == milestone['milestone']

    response = client.delete(f"/api/milestones/{milestone['id']}", headers=auth_headers)
    assert response.status_code == 200

    response = client.put(f"/api/milestones/{milestone['id']}", json={'status': 'pending'},
                          headers=auth_headers)
    assert response.status_code == 404
    assert json.loads(response.data)['error']['message'] == 'Milestone not found'
