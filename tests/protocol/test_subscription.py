import struct

import pytest

import pytipc

from pytipc.protocol import fields
from pytipc.protocol.subscription import Subscription


def test_encode():

    subscription = Subscription(18888, 0, 99, handle=b'abcdefgh')
    record = subscription.encode()

    assert len(record) == 28
    assert record == struct.pack('!IIIII8s', 18888, 0, 99, 0xFFFFFFFF, fields.SUB_SERVICE, b'abcdefgh')


def test_never_expires():

    subscription = Subscription(1000, 1, 1)
    assert subscription.expire_ms == -1
    assert subscription.timeout == fields.WAIT_FOREVER

    finite = Subscription(1000, 1, 1, expire_ms=250)
    assert finite.timeout == 250


def test_filter():

    assert Subscription(1000, 1, 1).filter == fields.SUB_SERVICE
    assert Subscription(1000, 1, 1, all_ports=True).filter == fields.SUB_PORTS

    subscription = Subscription(1000, 1, 1, all_ports=True)
    record = subscription.encode(cancel=True)
    _type, _lower, _upper, _timeout, filter, _handle = struct.unpack('!IIIII8s', record)
    assert filter == fields.SUB_PORTS | fields.SUB_CANCEL


def test_decode():

    subscription = Subscription(0, 0, 0xFFFFFFFF, all_ports=True, expire_ms=10)
    decoded = Subscription.decode(subscription.encode())

    assert decoded == subscription
    assert decoded.matches(subscription)

    # The cancel bit does not survive decoding.
    decoded = Subscription.decode(subscription.encode(cancel=True))
    assert decoded.all_ports == True

    with pytest.raises(pytipc.errors.ProtocolError):
        Subscription.decode(subscription.encode()[:20])


def test_handles():

    first = Subscription(1000, 1, 1)
    second = Subscription(1000, 1, 1)

    assert len(first.handle) == 8
    assert first.handle != second.handle
    assert first.matches(second) == False
    assert first.matches(first) == True


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
