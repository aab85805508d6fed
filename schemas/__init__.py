# Import all schemas to make them accessible from schemas package
from schemas.user import UserSchema, RegisterInputSchema
from schemas.client import ClientSchema, ClientSummarySchema, ClientInputSchema
from schemas.employee import EmployeeSchema, EmployeeSummarySchema, EmployeeInputSchema
from schemas.project import ProjectSchema, ProjectInputSchema
from schemas.milestone import MilestoneSchema, MilestoneInputSchema
from schemas.communication import CommunicationSchema, CommunicationInputSchema
from schemas.assignment import (ProjectMemberSchema, ProjectMemberInputSchema, MemberRoleInputSchema,
                                MilestoneEmployeeSchema, MilestoneEmployeeInputSchema)
