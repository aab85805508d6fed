from repositories.base import Repository, EntityConfig, JoinRepository, JoinConfig
from repositories.entities import (
    CLIENTS, EMPLOYEES, PROJECTS, MILESTONES, COMMUNICATIONS,
    PROJECT_MEMBERS, MILESTONE_EMPLOYEES,
    milestone_progress, progress_percent,
)
