from .tenants import Tenant
from .posts import Post
