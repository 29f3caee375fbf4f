"""
loris.couchdb

CouchDB document store boundary.

Responsibilities:
- Provide the async client used to query pre-built CouchDB views.
"""

from loris.couchdb.client import CouchDBClient, CouchDBError, create_http_client

__all__ = ["CouchDBClient", "CouchDBError", "create_http_client"]
