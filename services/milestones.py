from repositories import MILESTONES
from schemas.milestone import MilestoneInputSchema
from services.base import EntityService


class MilestoneService(EntityService):
    config = MILESTONES
    input_schema = MilestoneInputSchema
    entity_name = 'milestone'
