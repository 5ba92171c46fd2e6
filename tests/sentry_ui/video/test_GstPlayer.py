import sys
import unittest
from unittest.mock import MagicMock, patch

from sentry_ui.video import Player

with patch.dict(sys.modules, {"gi": MagicMock(), "gi.repository": MagicMock()}):
    import sentry_ui.video.GstPlayer as gst_player


class FakeGLibError(Exception):
    def __init__(self, message):
        super().__init__(message)
        self.message = message


class TestGstPlayer(unittest.TestCase):
    def setUp(self):
        self.gst = MagicMock()
        self.glib = MagicMock()
        self.glib.Error = FakeGLibError

        self._patches = [
            patch.object(gst_player, "Gst", self.gst),
            patch.object(gst_player, "GLib", self.glib),
        ]
        for p in self._patches:
            p.start()

        self.pipeline = self.gst.parse_launch.return_value
        self.pipeline.set_state.return_value = self.gst.StateChangeReturn.ASYNC
        self.player = gst_player.GstPlayer()

    def tearDown(self):
        for p in self._patches:
            p.stop()

    def test_init_initializes_gstreamer(self):
        self.gst.init.assert_called_once_with(None)
        self.assertIsNone(self.player.pipeline)

    def test_describe(self):
        self.assertEqual(
            gst_player.GstPlayer.describe(5000, "  application/x-rtp ! decodebin ! autovideosink "),
            "udpsrc port=5000 ! application/x-rtp ! decodebin ! autovideosink"
        )

    def test_play(self):
        result = self.player.play(5000, "decodebin ! autovideosink")

        self.assertEqual(result, "")
        self.gst.parse_launch.assert_called_once_with("udpsrc port=5000 ! decodebin ! autovideosink")
        self.pipeline.set_state.assert_called_once_with(self.gst.State.PLAYING)
        self.assertIs(self.player.pipeline, self.pipeline)

    def test_play_parse_error(self):
        self.gst.parse_launch.side_effect = FakeGLibError("no element \"foo\"")

        result = self.player.play(5000, "foo")

        self.assertEqual(result, "no element \"foo\"")
        self.assertIsNone(self.player.pipeline)

    def test_play_state_change_failure(self):
        self.pipeline.set_state.return_value = self.gst.StateChangeReturn.FAILURE

        result = self.player.play(5000, "decodebin ! autovideosink")

        self.assertEqual(result, "Failed to start video pipeline")
        self.pipeline.set_state.assert_called_with(self.gst.State.NULL)
        self.assertIsNone(self.player.pipeline)

    def test_play_replaces_running_pipeline(self):
        first = MagicMock()
        second = MagicMock()
        self.gst.parse_launch.side_effect = [first, second]

        self.player.play(5000, "a")
        self.player.play(5001, "b")

        first.set_state.assert_called_with(self.gst.State.NULL)
        self.assertIs(self.player.pipeline, second)

    def test_stop(self):
        self.player.play(5000, "decodebin ! autovideosink")
        self.player.stop()

        self.pipeline.set_state.assert_called_with(self.gst.State.NULL)
        self.assertIsNone(self.player.pipeline)

    def test_stop_without_pipeline(self):
        self.player.stop()

        self.gst.parse_launch.assert_not_called()

    def test_is_player(self):
        self.assertIsInstance(self.player, Player)
