##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module defines `DatabaseClient`, a thin HTTP client for one REST server
of the target database.

Entityhub talks to three such servers (staging, final and admin). Everything it
needs from them goes through two calls: POSTing a JSON body to a server-side
resource extension and uploading a query-options document.
"""

import json
import logging
from email import policy
from email.parser import BytesParser
from typing import Any, Dict, List

import httpx


LOG = logging.getLogger(__name__)

RESOURCES_PATH = "/v1/resources"
QUERY_OPTIONS_PATH = "/v1/config/query"


def split_response_parts(response: httpx.Response) -> List[str]:
    """
    Split a resource extension response into its result items.

    A resource that returns several documents answers with a `multipart/mixed`
    body, one part per document. A single document comes back as the plain body
    and an empty body means there were no results at all.

    Args:
        response: The response to split.

    Returns:
        The text of every result item, in order.
    """
    if not response.content:
        return []

    content_type = response.headers.get("content-type", "")
    if not content_type.lower().startswith("multipart/"):
        return [response.text]

    header = f"Content-Type: {content_type}\r\n\r\n".encode("utf-8")
    message = BytesParser(policy=policy.HTTP).parsebytes(header + response.content)
    parts = []
    for part in message.iter_parts():
        payload = part.get_payload(decode=True) or b""
        parts.append(payload.decode(part.get_content_charset() or "utf-8"))
    return parts


class DatabaseClient:
    """
    A connection to one REST server of the target database.

    Attributes:
        host: The server's host name.
        port: The server's port.
        name: A label used in log messages (e.g. "staging").

    Methods:
        post_resource: POST a JSON body to a resource extension and return its result items.
        put_query_options: Install a query-options document.
        close: Close the underlying HTTP connection pool.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        host: str,
        port: int,
        username: str = None,
        password: str = None,
        auth: str = "digest",
        scheme: str = "http",
        timeout: float = 60.0,
        name: str = None,
        transport: httpx.BaseTransport = None,
    ):
        """
        Initialize the client.

        Args:
            host: The server's host name.
            port: The server's port.
            username: The user to authenticate as. No authentication if not given.
            password: The user's password.
            auth: Either "digest" or "basic".
            scheme: Either "http" or "https".
            timeout: Seconds to wait on any single request.
            name: A label used in log messages.
            transport: An httpx transport to send requests through instead of the network.
        """
        self.host = host
        self.port = port
        self.name = name or f"{host}:{port}"

        credentials = None
        if username is not None:
            auth_class = httpx.BasicAuth if auth == "basic" else httpx.DigestAuth
            credentials = auth_class(username, password or "")

        self._client = httpx.Client(
            base_url=f"{scheme}://{host}:{port}",
            auth=credentials,
            timeout=timeout,
            transport=transport,
        )

    def __repr__(self) -> str:
        return f"DatabaseClient(name={self.name}, host={self.host}, port={self.port})"

    def __enter__(self) -> "DatabaseClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def post_resource(self, resource_name: str, body: Any, params: Dict[str, str] = None) -> List[str]:
        """
        POST a JSON body to a server-side resource extension.

        Args:
            resource_name: The name the resource extension is installed under.
            body: A JSON-serializable value to send.
            params: Resource parameters. They're sent with the `rs:` prefix.

        Returns:
            The text of every result item in the response. Empty if there were none.

        Raises:
            httpx.HTTPError: If the request fails or the server answers with an error status.
        """
        query = {f"rs:{key}": value for key, value in (params or {}).items()}
        LOG.debug(f"POST {RESOURCES_PATH}/{resource_name} on {self.name} with params {query}")
        response = self._client.post(
            f"{RESOURCES_PATH}/{resource_name}",
            params=query,
            content=json.dumps(body),
            headers={"Content-Type": "application/json", "Accept": "multipart/mixed"},
        )
        response.raise_for_status()
        return split_response_parts(response)

    def put_query_options(self, options_name: str, content: str, fmt: str = "xml"):
        """
        Install a query-options document under `options_name`.

        Args:
            options_name: The name to install the options under.
            content: The options document.
            fmt: The format of the document, "xml" or "json".

        Raises:
            httpx.HTTPError: If the request fails or the server answers with an error status.
        """
        content_type = "application/json" if fmt == "json" else "application/xml"
        LOG.debug(f"PUT {QUERY_OPTIONS_PATH}/{options_name} on {self.name}")
        response = self._client.put(
            f"{QUERY_OPTIONS_PATH}/{options_name}",
            params={"format": fmt},
            content=content.encode("utf-8"),
            headers={"Content-Type": content_type},
        )
        response.raise_for_status()

    def close(self):
        """Close the underlying HTTP connection pool."""
        self._client.close()
