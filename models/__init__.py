# Import all models to make them accessible from models package
from models.user import User, RevokedToken, UserRole
from models.client import Client
from models.employee import Employee, EmployeeStatus
from models.project import Project, ProjectStatus, ProjectPriority
from models.milestone import ProjectMilestone, MilestoneStatus
from models.communication import CommunicationLog, CommunicationMode
from models.assignment import ProjectMember, MilestoneEmployee
