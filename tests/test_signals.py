from dactylo.engine.signals import Signal


def test_emit_in_connection_order():
    signal = Signal("test")
    received = []
    signal.connect(lambda payload: received.append(("first", payload)))
    signal.connect(lambda payload: received.append(("second", payload)))
    signal.emit(1)
    assert received == [("first", 1), ("second", 1)]


def test_connect_is_idempotent():
    signal = Signal("test")
    received = []
    signal.connect(received.append)
    signal.connect(received.append)
    assert len(signal) == 1
    signal.emit("x")
    assert received == ["x"]


def test_connection_context_disconnects():
    signal = Signal("test")
    received = []
    with signal.connect(received.append) as connection:
        assert connection.connected
        signal.emit(1)
    assert not connection.connected
    assert received.append not in signal
    signal.emit(2)
    assert received == [1]


def test_disconnect_during_emit_applies_next_time():
    signal = Signal("test")
    received = []

    def once(payload):
        received.append(("once", payload))
        signal.disconnect(once)

    signal.connect(once)
    signal.connect(received.append)
    signal.emit(1)
    signal.emit(2)
    assert received == [("once", 1), 1, 2]


def test_clear():
    signal = Signal("test")
    signal.connect(print)
    signal.clear()
    assert len(signal) == 0
    signal.disconnect(print)
