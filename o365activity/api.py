# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Office 365 Management Activity API client.

There is no maintained Python SDK for the Management Activity API, and the API itself
is small, so this client simply implements the required operations using requests.
Retries are intentionally not performed here: a failed request is reported to the
caller, and content is collected again by the next (overlapping) collection window.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import requests

from o365activity.auth import TokenManager
from o365activity.constants import (
    API_BASE_URI,
    API_HOST,
    DEFAULT_REQUEST_TIMEOUT,
    HEADER_NEXT_PAGE,
    PARAM_PUBLISHER,
)
from o365activity.exceptions import DataFormatException, RequestFailedException
from o365activity.types import ContentPage, ContentPointer, HTTPResponse, TimeWindow


class Client:
    def __init__(
        self,
        tenant_id: str,
        publisher_id: str,
        tokens: TokenManager,
        host: str = API_HOST,
        timeout: int = DEFAULT_REQUEST_TIMEOUT,
    ):
        """Setup a new client.

        :param tenant_id: The Azure AD tenant identifier to collect content for.
        :param publisher_id: The publisher identifier to send with every request.
        :param tokens: A token manager, used to get a valid token for every request.
        :param host: The API host name.
        :param timeout: The timeout to apply to every request, in seconds.
        """
        self.logger = logging.getLogger(__name__)
        self.tokens = tokens
        self.timeout = timeout
        self.publisher_id = publisher_id

        self._api_base_uri = API_BASE_URI.format(host=host, tenant_id=tenant_id)

    @property
    def headers(self) -> Dict[str, str]:
        """Returns request headers, including a token which is refreshed if needed."""
        credential = self.tokens.ensure_fresh()

        return {
            "Accept": "application/json",
            "Authorization": f"Bearer {credential.token}",
        }

    def _params(self, **kwargs: Optional[str]) -> Dict[str, Optional[str]]:
        """Returns query parameters, including the publisher identifier."""
        return {**kwargs, PARAM_PUBLISHER: self.publisher_id}

    def _request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Optional[str]]] = None,
    ) -> requests.Response:
        """Performs an HTTP request, raising on transport or HTTP errors.

        :param method: The HTTP method to use.
        :param url: The URL to perform the request against.
        :param params: HTTP parameters to add to the request.

        :raises RequestFailedException: An HTTP request failed, or timed out.

        :return: The response to the request.
        """
        try:
            response = requests.request(
                method,
                url,
                headers=self.headers,
                params=params,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as err:
            raise RequestFailedException(err)

        return response

    def _get(
        self,
        url: str,
        params: Optional[Dict[str, Optional[str]]] = None,
    ) -> HTTPResponse:
        """A GET wrapper which parses the JSON body of the response.

        :param url: URL to perform the HTTP GET against.
        :param params: HTTP parameters to add to the request.

        :raises RequestFailedException: An HTTP request failed.
        :raises DataFormatException: The response body was not valid JSON.

        :return: HTTP Response object containing the headers and body of a response.
        """
        response = self._request("GET", url, params=params)

        try:
            body = response.json()
        except (json.JSONDecodeError, ValueError) as err:
            raise DataFormatException(f"Unable to parse response from {url}. {err}")

        return HTTPResponse(headers=response.headers, body=body)

    def list_subscriptions(self) -> List[Dict[str, Any]]:
        """Lists all subscriptions for the tenant.

        :raises RequestFailedException: An HTTP request failed.
        :raises DataFormatException: The response was not a list of subscriptions.

        :return: A list of subscriptions, as returned by the API.
        """
        result = self._get(
            f"{self._api_base_uri}/subscriptions/list",
            params=self._params(),
        )

        if not isinstance(result.body, list):
            raise DataFormatException("Subscription list response was not a list.")

        return result.body

    def start_subscription(self, content_type: str) -> requests.Response:
        """Starts a subscription to the given content type.

        :param content_type: The content type to subscribe to.

        :raises RequestFailedException: An HTTP request failed.

        :return: The response to the request.
        """
        return self._request(
            "POST",
            f"{self._api_base_uri}/subscriptions/start",
            params=self._params(contentType=content_type),
        )

    def stop_subscription(self, content_type: str) -> requests.Response:
        """Stops a subscription to the given content type.

        :param content_type: The content type to unsubscribe from.

        :raises RequestFailedException: An HTTP request failed.

        :return: The response to the request.
        """
        return self._request(
            "POST",
            f"{self._api_base_uri}/subscriptions/stop",
            params=self._params(contentType=content_type),
        )

    def list_content(
        self,
        content_type: str,
        window: Optional[TimeWindow] = None,
        cursor: Optional[str] = None,
    ) -> ContentPage:
        """Lists content available for download within the given window.

        The first page is requested using the content type and window. Subsequent
        pages are requested by passing the cursor returned with the previous page,
        which is the URL of the next page provided by the API.

        :param content_type: The content type to list content for.
        :param window: The window to list content for.
        :param cursor: The URL of the next page of content, if paging.

        :raises RequestFailedException: An HTTP request failed.
        :raises DataFormatException: The response could not be parsed.

        :return: ContentPage object containing a pagination cursor, and pointers.
        """
        if cursor:
            result = self._get(cursor, params=self._params())
        else:
            result = self._get(
                f"{self._api_base_uri}/subscriptions/content",
                params=self._params(
                    contentType=content_type,
                    startTime=window.start_time if window else None,
                    endTime=window.end_time if window else None,
                ),
            )

        if not isinstance(result.body, list):
            raise DataFormatException("Content list response was not a list.")

        pointers = []
        for entry in result.body:
            try:
                pointers.append(
                    ContentPointer(
                        content_type=entry.get("contentType", content_type),
                        uri=entry["contentUri"],
                        created=entry.get("contentCreated"),
                        content_id=entry.get("contentId"),
                    )
                )
            except (KeyError, AttributeError) as err:
                raise DataFormatException(f"Content entry is missing a URI. {err}")

        # Keep paging while the API tells us there is another page.
        return ContentPage(
            cursor=result.headers.get(HEADER_NEXT_PAGE) or None,
            entries=pointers,
        )

    def get_blob(self, uri: str) -> List[Dict[str, Any]]:
        """Fetches a content blob, returning the audit records it contains.

        Only successful responses are parsed. Any other status results in no records
        being returned, without error.

        :param uri: The content URI of the blob, from content listing.

        :raises RequestFailedException: The request could not be completed.
        :raises DataFormatException: The blob was not a JSON array.

        :return: A list of audit records.
        """
        try:
            response = requests.get(
                uri,
                headers=self.headers,
                params=self._params(),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as err:
            raise RequestFailedException(err)

        if response.status_code != 200:
            self.logger.debug(
                "Skipping content blob with unsuccessful response.",
                extra={"uri": uri, "status": response.status_code},
            )
            return []

        try:
            records = response.json()
        except (json.JSONDecodeError, ValueError) as err:
            raise DataFormatException(f"Unable to parse content blob. {err}")

        if not isinstance(records, list):
            raise DataFormatException("Content blob was not a list of records.")

        return records
