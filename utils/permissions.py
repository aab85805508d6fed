"""
Role based access control.

Row-level restrictions (an employee only editing their own projects) belong
to the database policies; this matrix only answers "may this role call this
endpoint at all".
"""
from models.user import UserRole

READ_ALL = [
    'dashboard:view',
    'clients:read',
    'projects:read',
    'milestones:read',
    'communications:read',
]

ROLE_PERMISSIONS = {
    UserRole.ADMIN.value: READ_ALL + [
        'clients:write',
        'projects:write',
        'projects:assign',
        'milestones:write',
        'milestones:assign',
        'employees:read',
        'employees:write',
        'communications:write',
    ],
    UserRole.MANAGER.value: READ_ALL + [
        'clients:write',
        'projects:write',
        'projects:assign',
        'milestones:write',
        'milestones:assign',
        'employees:read',
        'communications:write',
    ],
    UserRole.EMPLOYEE.value: READ_ALL + [
        'projects:write',
        'milestones:write',
        'communications:write',
    ],
    UserRole.VIEWER.value: list(READ_ALL),
}

ROLE_HIERARCHY = {
    UserRole.ADMIN.value: 4,
    UserRole.MANAGER.value: 3,
    UserRole.EMPLOYEE.value: 2,
    UserRole.VIEWER.value: 1,
}


def has_permission(role, permission):
    return permission in ROLE_PERMISSIONS.get(role, [])


def get_permissions(role):
    return list(ROLE_PERMISSIONS.get(role, []))


def is_role_at_least(role, minimum):
    return ROLE_HIERARCHY.get(role, 0) >= ROLE_HIERARCHY.get(minimum, 0)
