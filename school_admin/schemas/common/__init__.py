from .base import CamelModel, NamedRef
from .error import ErrorResponse, MessageResponse
