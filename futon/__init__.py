"""Blocking and non-blocking (asynchronous) clients for CouchDB using
Tornado's httpclient.

This package wraps the CouchDB HTTP REST API: documents are written with the
revision-based optimistic concurrency of CouchDB, and responses are mapped
onto a typed exception hierarchy.
"""

from futon.client import BlockingFuton, Futon
from futon.credentials import Credentials
from futon.db import Database
from futon.ddoc import DesignDocument, DesignDocuments, QueryServer
from futon.document import Documents, Tombstone
from futon.errors import (
    Conflict, CouchException, DecodeError, FutonError, InvalidDatabaseName,
    InvalidRevFormat, NotFound, RequestError, TransportError, Unauthorized,
    UnknownBadRequest, UnknownError, error_for_status, relax_exception)
from futon.meta import Meta
from futon.params import CopyDestination, DatabaseCreationParams, ViewParams
from futon.request import FutonRequest
from futon.response import (
    DatabaseInfo, DocumentOperation, ErrorResponse, FutonResponse,
    ServerInstanceInfo, ViewResults, ViewRow)
from futon.transport import TornadoTransport


__all__ = ["Futon", "BlockingFuton", "Credentials", "Database", "Documents",
           "DesignDocument", "DesignDocuments", "QueryServer", "Tombstone",
           "Meta", "CopyDestination", "DatabaseCreationParams", "ViewParams",
           "FutonRequest", "FutonResponse", "ErrorResponse",
           "DocumentOperation", "DatabaseInfo", "ServerInstanceInfo",
           "ViewResults", "ViewRow", "TornadoTransport", "FutonError",
           "RequestError", "TransportError", "DecodeError",
           "InvalidDatabaseName", "CouchException", "NotFound",
           "Unauthorized", "Conflict", "InvalidRevFormat",
           "UnknownBadRequest", "UnknownError", "relax_exception",
           "error_for_status"]

__version__ = '0.1.0'
