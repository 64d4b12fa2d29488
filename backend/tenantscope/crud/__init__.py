from .client import DataClient, ModelClient
from .errors import RecordNotFound
