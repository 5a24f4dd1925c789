"""
Tests for the AS name resolvers

The whois socket and the RIPEstat HTTP session are mocked; nothing here
touches the network.
"""

import io
import socket
import unittest
from unittest.mock import MagicMock, Mock, patch

import requests

from asroute.pipeline.annotator import HopAnnotator
from asroute.resolvers import (
    CymruWhoisResolver, ResolverAdapter, RipeStatResolver, create_resolver
)
from asroute.utils.config import ResolverConfig
from asroute.utils.error_handling import ConfigurationError, ResolverError


CYMRU_REPLY = (
    b"AS      | CC | Registry | Allocated  | AS Name\n"
    b"13335   | US | arin     | 2010-07-14 | CLOUDFLARENET, US\n"
)


def mock_connection(mock_create, chunks):
    """Wire socket.create_connection to a socket returning the given chunks"""
    sock = MagicMock()
    sock.recv.side_effect = list(chunks) + [b""]
    mock_create.return_value.__enter__.return_value = sock
    return sock


class TestCymruWhoisResolver(unittest.TestCase):
    """Test the Team Cymru whois resolver."""

    def setUp(self):
        self.resolver = CymruWhoisResolver(timeout=5)

    @patch('asroute.resolvers.cymru.socket.create_connection')
    def test_resolve(self, mock_create):
        sock = mock_connection(mock_create, [CYMRU_REPLY[:30], CYMRU_REPLY[30:]])

        records = self.resolver.resolve(13335)

        mock_create.assert_called_once_with(("whois.cymru.com", 43), timeout=5)
        sock.sendall.assert_called_once_with(b" -v AS13335\r\n")
        self.assertEqual(len(records), 1)
        record = records[0]
        self.assertEqual(record.as_number, 13335)
        self.assertEqual(record.as_name, "CLOUDFLARENET, US")
        self.assertEqual(record.country_code, "US")
        self.assertEqual(record.registry, "arin")
        self.assertEqual(record.allocated, "2010-07-14")

    @patch('asroute.resolvers.cymru.socket.create_connection')
    def test_callable(self, mock_create):
        mock_connection(mock_create, [CYMRU_REPLY])
        self.assertEqual(self.resolver(13335)[0].as_name, "CLOUDFLARENET, US")

    @patch('asroute.resolvers.cymru.socket.create_connection')
    def test_header_only_reply_has_no_records(self, mock_create):
        mock_connection(mock_create, [b"AS      | CC | Registry | Allocated  | AS Name\n"])
        self.assertEqual(self.resolver.resolve(111111), [])

    @patch('asroute.resolvers.cymru.socket.create_connection')
    def test_error_reply(self, mock_create):
        mock_connection(mock_create, [b"Error: no ASN or IP match on line 1.\n"])
        with self.assertRaises(ResolverError) as ctx:
            self.resolver.resolve(111111)
        self.assertIn("no ASN or IP match", ctx.exception.message)

    @patch('asroute.resolvers.cymru.socket.create_connection')
    def test_connection_refused(self, mock_create):
        mock_create.side_effect = ConnectionRefusedError("Connection refused")
        with self.assertRaises(ResolverError) as ctx:
            self.resolver.resolve(13335)
        self.assertIn("whois.cymru.com:43", ctx.exception.message)

    @patch('asroute.resolvers.cymru.socket.create_connection')
    def test_timeout(self, mock_create):
        mock_create.side_effect = socket.timeout("timed out")
        with self.assertRaises(ResolverError) as ctx:
            self.resolver.resolve(13335)
        self.assertIn("timed out", ctx.exception.message)

    def test_parse_name_containing_separator(self):
        reply = "64500   | ZZ | ripencc  | 2001-01-01 | ODD | NAME, ZZ\n"
        records = CymruWhoisResolver.parse_response(reply)
        self.assertEqual(records[0].as_name, "ODD | NAME, ZZ")
        self.assertEqual(records[0].allocated, "2001-01-01")

    @patch('asroute.resolvers.cymru.socket.create_connection')
    def test_resolve_name_containing_separator(self, mock_create):
        mock_connection(mock_create, [
            b"AS      | CC | Registry | Allocated  | AS Name\n",
            b"64500   | ZZ | ripencc  | 2001-01-01 | A|B | C\n",
        ])
        self.assertEqual(self.resolver.resolve(64500)[0].as_name, "A|B | C")

    def test_parse_skips_short_rows(self):
        self.assertEqual(CymruWhoisResolver.parse_response("Bulk mode; whois.cymru.com\n"), [])


class TestRipeStatResolver(unittest.TestCase):
    """Test the RIPEstat resolver."""

    def setUp(self):
        self.session = Mock()
        self.response = Mock()
        self.response.raise_for_status.return_value = None
        self.session.get.return_value = self.response
        self.resolver = RipeStatResolver(timeout=3, session=self.session)

    def test_resolve(self):
        self.response.json.return_value = {
            "status": "ok",
            "data": {"holder": "CLOUDFLARENET - Cloudflare, Inc.", "announced": True},
        }

        records = self.resolver.resolve(13335)

        self.session.get.assert_called_once_with(
            RipeStatResolver.DEFAULT_URL, params={"resource": "AS13335"}, timeout=3
        )
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0].as_number, 13335)
        self.assertIn("CLOUDFLARE", records[0].as_name)

    def test_empty_holder_has_no_records(self):
        self.response.json.return_value = {"status": "ok", "data": {"holder": ""}}
        self.assertEqual(self.resolver.resolve(111111), [])

    def test_error_status(self):
        self.response.json.return_value = {"status": "error", "message": "invalid resource"}
        with self.assertRaises(ResolverError) as ctx:
            self.resolver.resolve(13335)
        self.assertIn("invalid resource", ctx.exception.message)

    def test_http_error(self):
        self.response.raise_for_status.side_effect = requests.exceptions.HTTPError("503 Server Error")
        with self.assertRaises(ResolverError):
            self.resolver.resolve(13335)

    def test_connection_error(self):
        self.session.get.side_effect = requests.exceptions.ConnectionError("Name or service not known")
        with self.assertRaises(ResolverError) as ctx:
            self.resolver.resolve(13335)
        self.assertIn("RIPEstat request failed", ctx.exception.message)

    def test_timeout(self):
        self.session.get.side_effect = requests.exceptions.Timeout("read timed out")
        with self.assertRaises(ResolverError) as ctx:
            self.resolver.resolve(13335)
        self.assertIn("timed out", ctx.exception.message)

    def test_invalid_json(self):
        self.response.json.side_effect = ValueError("Expecting value")
        with self.assertRaises(ResolverError):
            self.resolver.resolve(13335)

    def test_list_payload(self):
        self.response.json.return_value = ["unexpected"]
        with self.assertRaises(ResolverError) as ctx:
            self.resolver.resolve(13335)
        self.assertIn("unexpected payload type: list", ctx.exception.message)

    def test_data_not_an_object(self):
        self.response.json.return_value = {"status": "ok", "data": ["AS13335"]}
        with self.assertRaises(ResolverError):
            self.resolver.resolve(13335)

    def test_holder_not_a_string(self):
        self.response.json.return_value = {"status": "ok", "data": {"holder": {"name": "X"}}}
        with self.assertRaises(ResolverError) as ctx:
            self.resolver.resolve(13335)
        self.assertIn("unexpected holder", ctx.exception.message)

    def test_unexpected_payload_does_not_stop_annotation(self):
        self.response.json.side_effect = [
            ["unexpected"],
            {"status": "ok", "data": {"holder": "CLOUDFLARENET"}},
        ]
        output = io.StringIO()
        annotator = HopAnnotator(ResolverAdapter(self.resolver), output)

        annotator.run([" 1  [AS3356] 4.69.1.1\n", " 2  [AS13335] 1.1.1.1\n"])

        self.assertEqual(output.getvalue(), "-> CLOUDFLARENET\n")
        self.assertEqual(annotator.stats.lookups_failed, 1)


class TestCreateResolver(unittest.TestCase):
    """Test resolver selection from configuration."""

    @patch.dict('os.environ', {}, clear=True)
    def test_cymru(self):
        config = ResolverConfig(backend="cymru", whois_host="whois.example.net",
                                whois_port=4343, timeout=2.5)
        resolver = create_resolver(config)
        self.assertIsInstance(resolver, CymruWhoisResolver)
        self.assertEqual(resolver.host, "whois.example.net")
        self.assertEqual(resolver.port, 4343)
        self.assertEqual(resolver.timeout, 2.5)

    @patch.dict('os.environ', {}, clear=True)
    def test_ripestat(self):
        resolver = create_resolver(ResolverConfig(backend="ripestat", timeout=4))
        self.assertIsInstance(resolver, RipeStatResolver)
        self.assertEqual(resolver.timeout, 4)

    @patch.dict('os.environ', {}, clear=True)
    def test_unknown_backend(self):
        with self.assertRaises(ConfigurationError):
            create_resolver(ResolverConfig(backend="dns"))


if __name__ == '__main__':
    unittest.main()
