import unittest

from luckydraw.services.broadcast_hub import BroadcastHub, EventType
from tests.support import RecordingEmitter


class BroadcastHubTests(unittest.TestCase):
    def test_publish_reaches_every_client(self):
        emitter = RecordingEmitter()
        hub = BroadcastHub(emitter)
        hub.register("a")
        hub.register("b")

        delivered = hub.rolling_start(3, "1-1")

        self.assertEqual(delivered, 2)
        self.assertEqual(
            sorted(sid for _, sid in emitter.sent),
            ["a", "b"],
        )
        envelope, _ = emitter.sent[0]
        self.assertEqual(envelope, {"type": "rolling_start", "payload": {"count": 3, "prizeId": "1-1"}})

    def test_failed_client_is_dropped_and_others_still_receive(self):
        emitter = RecordingEmitter(fail_for={"dead"})
        hub = BroadcastHub(emitter)
        for sid in ("alive", "dead"):
            hub.register(sid)

        delivered = hub.reset()

        self.assertEqual(delivered, 1)
        self.assertEqual(hub.client_count, 1)
        self.assertEqual(emitter.types_for("alive"), ["reset"])

    def test_publish_without_emitter_or_clients(self):
        self.assertEqual(BroadcastHub().state_update({}), 0)
        self.assertEqual(BroadcastHub(RecordingEmitter()).state_update({}), 0)

    def test_unknown_event_type_is_refused(self):
        emitter = RecordingEmitter()
        hub = BroadcastHub(emitter)
        hub.register("a")

        self.assertEqual(hub.publish("explode", {}), 0)
        self.assertEqual(emitter.sent, [])

    def test_send_to_single_client(self):
        emitter = RecordingEmitter()
        hub = BroadcastHub(emitter)
        hub.register("a")
        hub.register("b")

        self.assertTrue(hub.send_to("a", EventType.SHOW_QRCODE, {"show": True}))
        self.assertEqual(emitter.types_for("a"), ["show_qrcode"])
        self.assertEqual(emitter.types_for("b"), [])

    def test_unregister_unknown_client_is_noop(self):
        hub = BroadcastHub()
        hub.unregister("ghost")
        self.assertEqual(hub.client_count, 0)


if __name__ == "__main__":
    unittest.main()
