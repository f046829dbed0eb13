"""ResultWriter Python SDK — Client library for the ResultWriter API.

Quick start::

    from resultwriter.client import ResultWriterClient

    client = ResultWriterClient("http://localhost:8983")

    # Rendered through templates/results.j2
    page = client.select("solar", template="results")
    print(page["content_type"], page["text"])
"""

from resultwriter.client.client import AsyncResultWriterClient, ResultWriterClient

__all__ = ["AsyncResultWriterClient", "ResultWriterClient"]
