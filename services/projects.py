from repositories import PROJECTS
from schemas.project import ProjectInputSchema
from services.base import EntityService


class ProjectService(EntityService):
    config = PROJECTS
    input_schema = ProjectInputSchema
    entity_name = 'project'
