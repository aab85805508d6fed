from repositories import COMMUNICATIONS
from schemas.communication import CommunicationInputSchema
from services.base import EntityService


class CommunicationService(EntityService):
    config = COMMUNICATIONS
    input_schema = CommunicationInputSchema
    entity_name = 'communication log'
