"""Client side of the TIPC topology (service discovery) protocol.

A :class:`TopologyClient` holds one connection to the topology server of a
node, carrying any number of subscriptions side by side. Each subscription
produces :class:`pytipc.protocol.event.Published` and
:class:`pytipc.protocol.event.Withdrawn` events as matching bindings come
and go, and ends with an :class:`pytipc.protocol.event.Expired` event if it
was given a finite expiry.
"""

from __future__ import annotations

import logging
from typing import Iterator, List

from .. import config
from ..address import LogicalAddress, MAX_U32
from ..errors import ConnectionClosed, ProtocolError, ResourceError
from ..protocol import event as event_module
from ..protocol import fields
from ..protocol.event import Event, Expired, Published, ServiceEvent, Withdrawn
from ..protocol.subscription import Subscription
from ..transport.socket import SEQPACKET, TransportSocket


logger = logging.getLogger(__name__)


class TopologyClient:
    """ A connection to the topology server on *node*; zero means the own
        node. Use :func:`connect` to open one.

        Closing the connection is the only way to interrupt a blocked
        :func:`next_event` call.
    """

    def __init__(self, transport: TransportSocket, node: int = 0):

        self.transport = transport
        self.node = node
        self.subscriptions: List[Subscription] = []


    @classmethod
    def connect(cls, node: int = 0, context=None) -> TopologyClient:
        """ Open a connection to the topology server on *node*. Raises
            :class:`pytipc.errors.ResourceError` if the socket cannot be
            created or the server cannot be reached.
        """

        transport = TransportSocket(SEQPACKET, context)
        server = LogicalAddress(fields.TOP_SRV, fields.TOP_SRV, node)

        try:
            transport.connect(server)
        except OSError as exc:
            transport.close()
            raise ResourceError('cannot reach topology server %s: %s' % (server, exc)) from exc

        return cls(transport, node)


    def __enter__(self):
        return self


    def __exit__(self, *exc_info):
        self.close()


    def fileno(self) -> int:
        return self.transport.fileno()


    def close(self) -> None:
        self.transport.close()


    @property
    def closed(self) -> bool:
        return self.transport.closed


    def subscribe(self, service_type: int, lower: int, upper: int, all_ports: bool = False, expire_ms: int = -1) -> Subscription:
        """ Ask for events about the instances [*lower*, *upper*] of
            *service_type*. With *all_ports* False there is one event per
            distinct binding; with *all_ports* True there is one event per
            bound socket. A negative *expire_ms* never expires. Returns the
            :class:`pytipc.protocol.subscription.Subscription` sent, which
            is also the ``subscription`` attribute of every resulting event.
        """

        subscription = Subscription(service_type, lower, upper, all_ports, expire_ms)
        self._send(subscription.encode())
        self.subscriptions.append(subscription)

        logger.debug('subscribed to %u:%u:%u, all ports %s, expiry %d ms',
                     service_type, lower, upper, all_ports, expire_ms)
        return subscription


    def unsubscribe(self, subscription: Subscription) -> None:
        """ Cancel a subscription made on this connection.
        """

        self._send(subscription.encode(cancel=True))
        self._forget(subscription)
        logger.debug('cancelled subscription to %u:%u:%u', subscription.service_type, subscription.lower, subscription.upper)


    def _send(self, record: bytes) -> None:

        sent = self.transport.send(record)
        if sent != len(record):
            raise ProtocolError('sent %d of %d subscription bytes' % (sent, len(record)))


    def _forget(self, subscription: Subscription) -> None:

        for existing in self.subscriptions:
            if existing.matches(subscription):
                self.subscriptions.remove(existing)
                return


    def next_event(self) -> Event:
        """ Block until the next event arrives and return it. Raises
            :class:`pytipc.errors.ConnectionClosed` if the server closed the
            connection, and :class:`pytipc.errors.ProtocolError` for a
            truncated or malformed record.
        """

        return self._next_record()


    def _next_record(self) -> Event:
        """ Read and decode one event record. Subclasses may translate what
            :func:`next_event` returns; this always returns the decoded
            record as is.
        """

        record = self.transport.read(event_module.SIZE)

        if len(record) == 0:
            raise ConnectionClosed('topology server closed the connection')

        if len(record) != event_module.SIZE:
            raise ProtocolError('short topology event: %d of %d bytes' % (len(record), event_module.SIZE))

        event = event_module.decode(record)

        if isinstance(event, Expired):
            self._forget(event.subscription)

        logger.debug('topology event %r', event)
        return event


    def events(self) -> Iterator[Event]:
        """ Yield events in arrival order until the connection is closed.
        """

        while True:
            try:
                event = self.next_event()
            except ConnectionClosed:
                return

            yield event


    def snapshot(self, service_type: int, lower: int = 0, upper: int = MAX_U32, all_ports: bool = False) -> List[ServiceEvent]:
        """ Return the bindings currently matching the given range, as a list
            of :class:`pytipc.protocol.event.Published` events. This uses a
            short-lived subscription that expires after the configured
            snapshot interval; events for other subscriptions on the same
            connection that arrive in the meantime are discarded.
        """

        subscription = self.subscribe(service_type, lower, upper, all_ports, config.get('snapshot'))
        found: List[ServiceEvent] = []

        while True:
            event = self._next_record()

            if not subscription.matches(event.subscription):
                continue

            if isinstance(event, Expired):
                break

            if isinstance(event, Published):
                found.append(event)
            elif isinstance(event, Withdrawn):
                found = [known for known in found if known.port != event.port or known.found_lower != event.found_lower]

        return found


# end of class TopologyClient



def wait_for_service(service: LogicalAddress, timeout_ms: int = -1, context=None) -> bool:
    """ Return True if *service* is available now, or becomes available
        within *timeout_ms* milliseconds; a negative timeout waits forever.
        This is a one-shot check using a throwaway connection; callers that
        need to keep watching should hold a :class:`TopologyClient` open and
        read its events instead.
    """

    with TopologyClient.connect(0, context) as client:
        client.subscribe(service.service_type, service.instance, service.instance, False, timeout_ms)
        event = client.next_event()

    if isinstance(event, Published):
        return True

    return False


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
