#!/usr/bin/env python3
import os
import sys
import unittest
from unittest.mock import Mock, patch

import requests

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from webhook_forwarder.errors import SendFailedError, SinkUnavailableError  # noqa: E402
from webhook_forwarder.models import DeliveryOutcome, Notification  # noqa: E402
from webhook_forwarder.services import DiscordSink, GotifySink, build_sink_from_env, deliver  # noqa: E402


NOTIFICATION = Notification(title="t", body="b", priority=8, metadata={"source": "grafana"})


class TestDeliver(unittest.TestCase):
    def test_passes_notification_unchanged(self):
        sink = Mock()
        outcome = deliver(NOTIFICATION, sink)
        sink.send.assert_called_once_with("t", "b", 8, {"source": "grafana"})
        self.assertEqual(outcome, DeliveryOutcome.ok())
        self.assertTrue(outcome.delivered)

    def test_missing_sink_is_unavailable(self):
        with self.assertRaises(SinkUnavailableError) as ctx:
            deliver(NOTIFICATION, None)
        self.assertEqual(ctx.exception.status_code, 503)

    def test_sink_error_is_wrapped(self):
        sink = Mock()
        sink.send.side_effect = RuntimeError("gotify down")
        with self.assertRaises(SendFailedError) as ctx:
            deliver(NOTIFICATION, sink)
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertEqual(ctx.exception.reason, "gotify down")
        self.assertEqual(ctx.exception.to_response(), {
            "error": "Failed to forward message",
            "details": "gotify down",
        })
        self.assertEqual(ctx.exception.outcome, DeliveryOutcome.failed("gotify down"))
        # sem retry
        self.assertEqual(sink.send.call_count, 1)

    def test_custom_failure_message(self):
        sink = Mock()
        sink.send.side_effect = ValueError("boom")
        with self.assertRaises(SendFailedError) as ctx:
            deliver(NOTIFICATION, sink, failure_message="Failed to forward Grafana alert")
        self.assertEqual(ctx.exception.message, "Failed to forward Grafana alert")


class TestGotifySink(unittest.TestCase):
    @patch("webhook_forwarder.services.requests.post")
    def test_posts_message_with_token(self, mock_post):
        mock_post.return_value = Mock(status_code=200)
        sink = GotifySink("https://gotify.example.com/", "app-token", timeout=3)
        sink.send("t", "b", 8, {"source": "grafana"})

        mock_post.assert_called_once_with(
            "https://gotify.example.com/message",
            json={"title": "t", "message": "b", "priority": 8, "extras": {"source": "grafana"}},
            headers={"X-Gotify-Key": "app-token"},
            timeout=3,
        )
        mock_post.return_value.raise_for_status.assert_called_once()

    @patch("webhook_forwarder.services.requests.post")
    def test_http_error_propagates(self, mock_post):
        resp = Mock(status_code=401)
        resp.raise_for_status.side_effect = requests.HTTPError("401 Client Error: Unauthorized")
        mock_post.return_value = resp
        sink = GotifySink("https://gotify.example.com", "bad-token")

        with self.assertRaises(SendFailedError) as ctx:
            deliver(NOTIFICATION, sink)
        self.assertIn("401", ctx.exception.details)


class TestDiscordSink(unittest.TestCase):
    def test_payload_shape(self):
        sink = DiscordSink("https://discord.example.com/api/webhooks/x")
        payload = sink.build_payload("t", "b", 9, {"status": "firing"})
        embed = payload["embeds"][0]
        self.assertEqual(embed["title"], "t")
        self.assertEqual(embed["description"], "b")
        self.assertEqual(embed["fields"][0], {"name": "Priority", "value": "9", "inline": True})
        self.assertEqual(embed["fields"][1], {"name": "status", "value": "firing", "inline": True})

    def test_field_limit(self):
        sink = DiscordSink("https://discord.example.com/api/webhooks/x")
        metadata = {f"k{i}": i for i in range(40)}
        self.assertEqual(len(sink.build_payload("t", "b", 5, metadata)["embeds"][0]["fields"]), 25)

    def test_embed_size_limits(self):
        sink = DiscordSink("https://discord.example.com/api/webhooks/x")
        embed = sink.build_payload("t" * 300, "b" * 5000, 5, {"k": "", "long": "v" * 2000, "": "x"})["embeds"][0]
        self.assertLessEqual(len(embed["title"]), 256)
        self.assertTrue(embed["title"].endswith("..."))
        self.assertLessEqual(len(embed["description"]), 4096)
        fields = {f["name"]: f["value"] for f in embed["fields"]}
        self.assertEqual(fields["k"], "-")
        self.assertEqual(len(fields["long"]), 1024)
        self.assertEqual(fields["-"], "x")
        for f in embed["fields"]:
            self.assertTrue(f["name"])
            self.assertTrue(f["value"])

    def test_short_values_untouched(self):
        sink = DiscordSink("https://discord.example.com/api/webhooks/x")
        embed = sink.build_payload("t" * 256, "b" * 4096, 5, {})["embeds"][0]
        self.assertEqual(embed["title"], "t" * 256)
        self.assertEqual(embed["description"], "b" * 4096)

    @patch("webhook_forwarder.services.requests.post")
    def test_send(self, mock_post):
        mock_post.return_value = Mock(status_code=204)
        sink = DiscordSink("https://discord.example.com/api/webhooks/x", timeout=2)
        sink.send("t", "b", 5, {})
        args, kwargs = mock_post.call_args
        self.assertEqual(args[0], "https://discord.example.com/api/webhooks/x")
        self.assertEqual(kwargs["timeout"], 2)
        self.assertIn("embeds", kwargs["json"])


class TestBuildSinkFromEnv(unittest.TestCase):
    @patch("webhook_forwarder.services.GOTIFY_APP_TOKEN", "tok")
    @patch("webhook_forwarder.services.GOTIFY_URL", "https://gotify.local")
    @patch("webhook_forwarder.services.SINK_TYPE", "gotify")
    def test_gotify(self):
        sink = build_sink_from_env()
        self.assertIsInstance(sink, GotifySink)
        self.assertEqual(sink.base_url, "https://gotify.local")

    @patch("webhook_forwarder.services.GOTIFY_APP_TOKEN", None)
    @patch("webhook_forwarder.services.GOTIFY_URL", "https://gotify.local")
    @patch("webhook_forwarder.services.SINK_TYPE", "gotify")
    def test_gotify_without_token_is_unavailable(self):
        self.assertIsNone(build_sink_from_env())

    @patch("webhook_forwarder.services.DISCORD_WEBHOOK_URL", "https://discord.local/hook")
    @patch("webhook_forwarder.services.SINK_TYPE", "discord")
    def test_discord(self):
        self.assertIsInstance(build_sink_from_env(), DiscordSink)

    @patch("webhook_forwarder.services.SINK_TYPE", "carrier-pigeon")
    def test_unknown_type(self):
        self.assertIsNone(build_sink_from_env())


if __name__ == '__main__':
    unittest.main()
