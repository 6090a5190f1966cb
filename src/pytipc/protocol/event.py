""" Events delivered by the TIPC topology server. Each event is a fixed 48
    byte record:

        event, found lower, found upper, port reference, port node,
        followed by the 28 byte subscription that generated the event

    A subscription yields any number of :class:`Published` and
    :class:`Withdrawn` events, in any order, and ends with a single
    :class:`Expired` event if it has a finite expiry. Events are consumed
    in the order they arrive.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Optional

from ..address import LogicalAddress
from ..errors import ProtocolError
from . import fields
from . import subscription as subscription_module
from .subscription import Subscription


HEADER = '!IIIII'
HEADER_SIZE = struct.calcsize(HEADER)
SIZE = HEADER_SIZE + subscription_module.SIZE


@dataclass(frozen=True)
class Event:
    """ Common base for all topology events. """

    subscription: Subscription


@dataclass(frozen=True)
class ServiceEvent(Event):
    """ A change in the set of bindings matching a subscription. *service*
        is the lowest matching instance, qualified by the node hosting the
        binding; *found_upper* is the upper bound of the matched binding,
        and *port* is the identity of the bound socket.
    """

    service: LogicalAddress
    found_upper: int
    port: LogicalAddress

    @property
    def found_lower(self) -> int:
        return self.service.instance

    @property
    def node(self) -> int:
        return self.port.domain


@dataclass(frozen=True)
class Published(ServiceEvent):
    available = True


@dataclass(frozen=True)
class Withdrawn(ServiceEvent):
    available = False


@dataclass(frozen=True)
class Expired(Event):
    """ The subscription reached its expiry; no further events will be
        delivered for it.
    """

    available = False


def decode(record: bytes) -> Event:
    """ Translate one wire record into a :class:`Published`,
        :class:`Withdrawn`, or :class:`Expired` instance. Raises
        :class:`ProtocolError` if the record has the wrong size or an
        unknown event code.
    """

    if len(record) != SIZE:
        raise ProtocolError('topology event is %d bytes, expected %d' % (len(record), SIZE))

    kind, found_lower, found_upper, ref, node = struct.unpack(HEADER, record[:HEADER_SIZE])
    subscription = Subscription.decode(record[HEADER_SIZE:])

    if kind == fields.SUBSCR_TIMEOUT:
        return Expired(subscription)

    if kind == fields.PUBLISHED:
        cls = Published
    elif kind == fields.WITHDRAWN:
        cls = Withdrawn
    else:
        raise ProtocolError('unknown topology event code %d' % (kind))

    service = LogicalAddress(subscription.service_type, found_lower, node)
    port = LogicalAddress(0, ref, node)

    return cls(subscription, service, found_upper, port)


def encode(event: Event) -> bytes:
    """ Produce the wire record for *event*. The topology server is the only
        real source of these records; this is the inverse of :func:`decode`
        for anything that needs to stand in for one.
    """

    if isinstance(event, Expired):
        header = struct.pack(HEADER, fields.SUBSCR_TIMEOUT, 0, 0, 0, 0)
    else:
        if isinstance(event, Published):
            kind = fields.PUBLISHED
        else:
            kind = fields.WITHDRAWN

        header = struct.pack(HEADER, kind, event.found_lower, event.found_upper,
                             event.port.instance, event.port.domain)

    return header + event.subscription.encode()


@dataclass(frozen=True)
class NeighborEvent:
    """ A node became reachable (*up*) or unreachable. """

    node: int
    up: bool

    @classmethod
    def from_event(cls, event: ServiceEvent) -> NeighborEvent:
        return cls(event.found_lower, event.available)


@dataclass(frozen=True)
class LinkEvent:
    """ A link to *peer* came up or went down. The topology server packs the
        two bearer identities of the link into the port reference of the
        event: the local bearer in the low 16 bits, the remote bearer in the
        high 16 bits.
    """

    peer: int
    up: bool
    local_bearer: int
    remote_bearer: int
    name: Optional[str] = None

    @classmethod
    def from_event(cls, event: ServiceEvent) -> LinkEvent:
        ref = event.port.instance
        local_bearer = ref & 0xFFFF
        remote_bearer = (ref >> 16) & 0xFFFF
        return cls(event.found_lower, event.available, local_bearer, remote_bearer)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
