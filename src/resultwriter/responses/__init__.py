"""Built-in structured responses.

Short ``responseType`` names are looked up in this package, so
``responseType=PagedQueryResult`` resolves to
:class:`resultwriter.responses.PagedQueryResult`.
"""

from resultwriter.responses.base import StructuredResponse
from resultwriter.responses.query import PagedQueryResult, QueryResult

__all__ = ["PagedQueryResult", "QueryResult", "StructuredResponse"]
