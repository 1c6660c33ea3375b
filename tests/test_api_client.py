# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Implements tests for the Management Activity API client."""

import datetime
import os
import re
import unittest
from urllib.parse import parse_qs, urlparse

import requests
import responses

from o365activity.api import Client
from o365activity.exceptions import DataFormatException, RequestFailedException
from o365activity.types import TimeWindow
from tests import mocks

TENANT_ID = "00000000-0000-0000-0000-000000000000"
FEED_URI = f"https://manage.office.com/api/v1.0/{TENANT_ID}/activity/feed"


class APIClientTestCase(unittest.TestCase):
    """Implements tests for the Management Activity API client."""

    def setUp(self):
        self.dir = os.path.dirname(__file__)
        self.tokens = mocks.auth.StaticTokenManager()
        self.client = Client(
            tenant_id=TENANT_ID,
            publisher_id="publisher",
            tokens=self.tokens,
        )

    def fixture(self, path: str) -> str:
        return open(os.path.join(self.dir, "fixtures/o365", path), "r").read()

    @responses.activate
    def test_request_headers(self):
        """Ensures every request carries a token, and the publisher identifier."""
        responses.add(
            responses.GET,
            f"{FEED_URI}/subscriptions/list",
            status=200,
            content_type="application/json",
            body=self.fixture("subscriptions/001.json"),
        )

        subscriptions = self.client.list_subscriptions()
        self.assertEqual(len(subscriptions), 2)

        request = responses.calls[0].request
        self.assertEqual(request.headers["Authorization"], "Bearer token")
        self.assertEqual(
            parse_qs(urlparse(request.url).query)["PublisherIdentifier"],
            ["publisher"],
        )

        # A token is requested from the token manager for every request.
        self.assertEqual(self.tokens.calls, 1)

    @responses.activate
    def test_list_content_parameters(self):
        """Ensures the content listing is requested with the window and type."""
        responses.add(
            responses.GET,
            f"{FEED_URI}/subscriptions/content",
            status=200,
            content_type="application/json",
            body=self.fixture("content/001.json"),
        )

        window = TimeWindow(
            start=datetime.datetime(2023, 1, 1, 9, 48, tzinfo=datetime.timezone.utc),
            end=datetime.datetime(2023, 1, 1, 10, 0, tzinfo=datetime.timezone.utc),
        )
        page = self.client.list_content("Audit.SharePoint", window)

        query = parse_qs(urlparse(responses.calls[0].request.url).query)
        self.assertEqual(query["contentType"], ["Audit.SharePoint"])
        self.assertEqual(query["startTime"], ["2023-01-01T09:48"])
        self.assertEqual(query["endTime"], ["2023-01-01T10:00"])

        # No next page header, so no cursor.
        self.assertIsNone(page.cursor)
        self.assertEqual(
            [pointer.uri for pointer in page.entries],
            [f"{FEED_URI}/audit/blob-001", f"{FEED_URI}/audit/blob-002"],
        )
        self.assertEqual(page.entries[0].created, "2023-01-01T09:49:12.000Z")

    @responses.activate
    def test_list_content_cursor(self):
        """Ensures the next page is requested from the URI provided by the API."""
        next_page = f"{FEED_URI}/subscriptions/content?contentType=Audit.SharePoint&nextPage=2"
        responses.add(
            responses.GET,
            f"{FEED_URI}/subscriptions/content",
            status=200,
            content_type="application/json",
            body=self.fixture("content/002.json"),
            headers={"NextPageUri": next_page},
        )

        page = self.client.list_content("Audit.SharePoint", cursor=next_page)
        self.assertEqual(page.cursor, next_page)

        # The publisher identifier must be present when following a cursor too.
        query = parse_qs(urlparse(responses.calls[0].request.url).query)
        self.assertEqual(query["nextPage"], ["2"])
        self.assertEqual(query["PublisherIdentifier"], ["publisher"])

    @responses.activate
    def test_list_content_missing_uri(self):
        """Ensures content entries without a URI are treated as malformed."""
        responses.add(
            responses.GET,
            f"{FEED_URI}/subscriptions/content",
            status=200,
            content_type="application/json",
            body='[{"contentType": "Audit.SharePoint"}]',
        )

        with self.assertRaises(DataFormatException):
            self.client.list_content("Audit.SharePoint")

    @responses.activate
    def test_request_failures(self):
        """Ensures transport and HTTP errors are raised as request failures."""
        responses.add(
            responses.GET,
            f"{FEED_URI}/subscriptions/list",
            body=requests.exceptions.ConnectTimeout("Timed out"),
        )
        responses.add(
            responses.POST,
            f"{FEED_URI}/subscriptions/start",
            status=401,
            content_type="application/json",
            body='{"error": {"code": "AF10001"}}',
        )

        with self.assertRaises(RequestFailedException):
            self.client.list_subscriptions()

        with self.assertRaises(RequestFailedException):
            self.client.start_subscription("Audit.SharePoint")

    @responses.activate
    def test_get_blob(self):
        """Ensures blobs are parsed, and unsuccessful responses are skipped."""
        responses.add(
            responses.GET,
            f"{FEED_URI}/audit/blob-001",
            status=200,
            content_type="application/json",
            body=self.fixture("blobs/001.json"),
        )
        responses.add(
            responses.GET,
            f"{FEED_URI}/audit/blob-002",
            status=404,
            content_type="application/json",
            body='{"error": {"code": "AF20051"}}',
        )
        responses.add(
            responses.GET,
            re.compile(r".*/audit/blob-003"),
            status=200,
            content_type="application/json",
            body="[{'not': 'json'",
        )

        self.assertEqual(len(self.client.get_blob(f"{FEED_URI}/audit/blob-001")), 2)
        self.assertEqual(self.client.get_blob(f"{FEED_URI}/audit/blob-002"), [])

        with self.assertRaises(DataFormatException):
            self.client.get_blob(f"{FEED_URI}/audit/blob-003")
