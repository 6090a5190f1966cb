import socket

import pytest

import pytipc


@pytest.fixture
def tipc():
    """ Skip the test unless the kernel has TIPC loaded and the node has an
        address.
    """

    try:
        sock = socket.socket(pytipc.protocol.fields.AF_TIPC, socket.SOCK_RDM)
    except (OSError, AttributeError):
        pytest.skip('AF_TIPC is not available')

    try:
        node = sock.getsockname()[1]
    finally:
        sock.close()

    if not node:
        pytest.skip('the local TIPC node has no address')

    return pytipc.context.Context(node)


@pytest.fixture
def context():
    """ A context for node <1.1.1>, so that nothing needs the kernel to learn
        the own node address.
    """

    return pytipc.context.Context(pytipc.address.compose(1, 1, 1))


@pytest.fixture
def server_pair(context):
    """ A connected pair of SEQPACKET sockets. The first one is wrapped in
        a TopologyClient, the second one plays the topology server.
    """

    ours, theirs = socket.socketpair(socket.AF_UNIX, socket.SOCK_SEQPACKET)

    transport = pytipc.transport.TransportSocket(pytipc.transport.SEQPACKET, context, ours)
    client = pytipc.topology.TopologyClient(transport)

    yield client, theirs

    client.close()
    theirs.close()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
