""" The subscription record sent to the TIPC topology server. On the wire
    it is a fixed 28 byte structure:

        service type, lower, upper, timeout, filter, user handle

    with all integers in network byte order. The topology server answers
    in the byte order of the request, and echoes the whole record back in
    every event it generates for the subscription; the 8 byte user handle
    is what lets a client holding several subscriptions on one connection
    tell them apart.
"""

from __future__ import annotations

import itertools
import struct
import threading
from dataclasses import dataclass, field

from ..errors import ProtocolError
from . import fields


FORMAT = '!IIIII8s'
SIZE = struct.calcsize(FORMAT)


_handle_min = 0
_handle_max = 0xFFFFFFFF
_handle_lock = threading.Lock()
_handle_ticker = itertools.count(_handle_min)


def _handle_next() -> bytes:
    """ Return a locally unique 8 byte user handle for a new subscription.
    """

    global _handle_ticker

    with _handle_lock:
        handle = next(_handle_ticker)

        if handle >= _handle_max:
            _handle_ticker = itertools.count(_handle_min)

    return ('%08x' % (handle)).encode()


@dataclass(frozen=True)
class Subscription:
    """ Interest in the instances [*lower*, *upper*] of *service_type*.

        With *all_ports* False the server reports one event per distinct
        service binding; with *all_ports* True it reports one event per
        bound socket. A negative *expire_ms* never expires.
    """

    service_type: int
    lower: int
    upper: int
    all_ports: bool = False
    expire_ms: int = -1
    handle: bytes = field(default_factory=_handle_next)

    @property
    def timeout(self) -> int:
        """The wire value of the expiry."""
        if self.expire_ms < 0:
            return fields.WAIT_FOREVER
        return self.expire_ms

    @property
    def filter(self) -> int:
        if self.all_ports:
            return fields.SUB_PORTS
        return fields.SUB_SERVICE

    def encode(self, cancel: bool = False) -> bytes:
        """ Return the wire representation. With *cancel* set the record
            asks the server to drop an existing, identical subscription.
        """

        filter = self.filter
        if cancel:
            filter |= fields.SUB_CANCEL

        return struct.pack(FORMAT, self.service_type, self.lower, self.upper,
                           self.timeout, filter, self.handle)

    @classmethod
    def decode(cls, record: bytes) -> Subscription:
        """ Rebuild a :class:`Subscription` from its wire representation,
            as echoed inside an event.
        """

        if len(record) != SIZE:
            raise ProtocolError('subscription record is %d bytes, expected %d' % (len(record), SIZE))

        service_type, lower, upper, timeout, filter, handle = struct.unpack(FORMAT, record)

        if timeout == fields.WAIT_FOREVER:
            expire_ms = -1
        else:
            expire_ms = timeout

        all_ports = bool(filter & fields.SUB_PORTS)
        return cls(service_type, lower, upper, all_ports, expire_ms, handle)

    def matches(self, other: Subscription) -> bool:
        """ Return True if *other* is the echo of this subscription.
        """

        return (self.handle == other.handle and
                self.service_type == other.service_type and
                self.lower == other.lower and
                self.upper == other.upper)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
