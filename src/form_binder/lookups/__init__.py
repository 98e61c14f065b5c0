"""Lookup subpackage — imports trigger @register_lookup decorators."""

from form_binder.lookups.in_memory import InMemoryLookup  # noqa: F401
from form_binder.lookups.json_file import JSONFileLookup  # noqa: F401
from form_binder.lookups.sql_database import SQLAlchemyLookup  # noqa: F401
from form_binder.lookups.rest_api import RESTAPILookup  # noqa: F401
