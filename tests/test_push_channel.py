import json
import unittest

from luckydraw.services.broadcast_hub import BroadcastHub
from luckydraw.sockets import DisplayConnections


class FakeSocket:
    def __init__(self, broken=False):
        self.frames = []
        self.broken = broken

    def send(self, data):
        if self.broken:
            raise ConnectionResetError("peer went away")
        self.frames.append(data)


class DisplayConnectionsTests(unittest.TestCase):
    def test_envelopes_are_sent_as_json_text(self):
        connections = DisplayConnections()
        ws = FakeSocket()
        connections.add("a", ws)

        connections({"type": "rolling_stop", "payload": {"winners": ["007"]}}, "a")

        self.assertEqual(len(ws.frames), 1)
        self.assertIsInstance(ws.frames[0], str)
        self.assertEqual(json.loads(ws.frames[0]), {"type": "rolling_stop", "payload": {"winners": ["007"]}})

    def test_unknown_client_raises(self):
        with self.assertRaises(ConnectionError):
            DisplayConnections()({"type": "reset", "payload": None}, "ghost")

    def test_hub_drops_clients_whose_socket_fails(self):
        connections = DisplayConnections()
        healthy, broken = FakeSocket(), FakeSocket(broken=True)
        connections.add("healthy", healthy)
        connections.add("broken", broken)
        hub = BroadcastHub(connections)
        hub.register("healthy")
        hub.register("broken")
        hub.register("closed")  # registered but socket already discarded

        delivered = hub.reset()

        self.assertEqual(delivered, 1)
        self.assertEqual(hub.client_count, 1)
        self.assertEqual([json.loads(f)["type"] for f in healthy.frames], ["reset"])


if __name__ == "__main__":
    unittest.main()
