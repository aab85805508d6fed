from services.base import ServiceResult, EntityService
from services.clients import ClientService
from services.employees import EmployeeService
from services.projects import ProjectService
from services.milestones import MilestoneService
from services.communications import CommunicationService
from services.assignments import ProjectMemberService, MilestoneEmployeeService
from services.dashboard import DashboardService
from services.auth import AuthService
