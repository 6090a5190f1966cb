import socket

import pytest

import pytipc

from pytipc.address import LogicalAddress
from pytipc.protocol import event
from pytipc.protocol.subscription import Subscription


def connection(context):

    ours, theirs = socket.socketpair(socket.AF_UNIX, socket.SOCK_SEQPACKET)
    transport = pytipc.transport.TransportSocket(pytipc.transport.SEQPACKET, context, ours)
    return pytipc.topology.TopologyClient(transport), theirs


def published(subscription, lower):

    service = LogicalAddress(subscription.service_type, lower, 0)
    return event.encode(event.Published(subscription, service, lower, LogicalAddress(0, 1, 0)))


@pytest.fixture
def monitor():

    monitor = pytipc.topology.Monitor()
    yield monitor
    monitor.close()


def test_dispatch(monitor, context):

    first, first_server = connection(context)
    second, second_server = connection(context)

    received = list()

    def callback(source, event):
        received.append((source, event))

    monitor.register(first, callback)
    monitor.register(second, callback)

    assert len(monitor) == 2
    assert first in monitor

    # Nothing to read yet.
    assert monitor.poll(0) == 0

    subscription = Subscription(18888, 0, 99)
    second_server.send(published(subscription, 7))

    assert monitor.poll(1000) == 1
    assert len(received) == 1

    source, found = received[0]
    assert source is second
    assert found.found_lower == 7

    first_server.send(published(subscription, 8))
    second_server.send(published(subscription, 9))

    assert monitor.poll(1000) == 2
    assert sorted(found.found_lower for source, found in received[1:]) == [8, 9]

    first_server.close()
    second_server.close()


def test_closed_source(monitor, context):

    client, server = connection(context)
    received = list()

    monitor.register(client, lambda source, event: received.append(event))
    server.close()

    assert monitor.poll(1000) == 1
    assert received == [None]

    assert client not in monitor
    assert client.closed == True

    # Nothing left to watch, so run() returns right away.
    monitor.run()


def test_run(monitor, context):

    client, server = connection(context)
    received = list()

    def callback(source, event):
        received.append(event)

    monitor.register(client, callback)

    subscription = Subscription(18888, 0, 99)
    server.send(published(subscription, 1))
    server.send(published(subscription, 2))
    server.close()

    monitor.run(1000)

    assert [found.found_lower for found in received[:2]] == [1, 2]
    assert received[2] is None
    assert len(monitor) == 0


def test_run_timeout(monitor, context):

    client, server = connection(context)
    monitor.register(client, lambda source, event: None)

    monitor.run(10)
    assert client in monitor

    server.close()


def test_unregister(monitor, context):

    client, server = connection(context)

    monitor.register(client, lambda source, event: None)
    monitor.unregister(client)
    monitor.unregister(client)

    assert len(monitor) == 0
    assert client.closed == False

    client.close()
    server.close()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
