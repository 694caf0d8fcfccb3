from .structs import HTTPMethod, OutboundRequest
from .rest_client_interface import BaseRestClientInterface

__all__ = ['HTTPMethod', 'OutboundRequest', 'BaseRestClientInterface']
