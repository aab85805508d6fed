from repositories import CLIENTS
from schemas.client import ClientInputSchema
from services.base import EntityService


class ClientService(EntityService):
    config = CLIENTS
    input_schema = ClientInputSchema
    entity_name = 'client'

    def search(self, query, limit=10):
        """
        Quick lookup for pickers. Matches name, email or company name,
        case-insensitively, and returns the oldest clients first.
        """
        if not query or not query.strip():
            return []
        return self.repository.search(query.strip(), limit)
