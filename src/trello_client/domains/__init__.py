"""Domain clients: thin wrappers translating Trello operations into submit() calls."""

from .base import DomainClient
from .boards import BoardsClient
from .lists import ListsClient
from .cards import CardsClient
from .card_features import CardFeaturesClient
from .members import MembersClient
from .organizations import OrganizationsClient
from .labels import LabelsClient
from .custom_fields import CustomFieldsClient
from .automation import AutomationClient
from .power_ups import PowerUpsClient

__all__ = [
    "DomainClient",
    "BoardsClient",
    "ListsClient",
    "CardsClient",
    "CardFeaturesClient",
    "MembersClient",
    "OrganizationsClient",
    "LabelsClient",
    "CustomFieldsClient",
    "AutomationClient",
    "PowerUpsClient",
]
