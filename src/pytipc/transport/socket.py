"""TIPC sockets.

:class:`TransportSocket` wraps a kernel AF_TIPC socket with operations
expressed in TIPC terms: binding service ranges at a scope, sending to
logical addresses, cluster multicast, and a receive path that reports the
sender, the matched destination name, and rejections of earlier sends.

Every call blocks the calling thread. Errors are surfaced to the caller
without any retry; whether resending makes sense is an application
decision.
"""

from __future__ import annotations

import fcntl
import logging
import socket as pysocket
import struct
from dataclasses import dataclass
from typing import Optional, Tuple

from .. import address
from .. import config
from .. import context as context_module
from ..address import LogicalAddress
from ..errors import Rejected, ResourceError, UnsupportedScope
from ..protocol import fields
from . import ancillary
from .ancillary import Rejection


logger = logging.getLogger(__name__)

# Socket kinds. SOCK_RDM is Linux-only in the socket module.

RDM = getattr(pysocket, 'SOCK_RDM', 4)
DGRAM = pysocket.SOCK_DGRAM
STREAM = pysocket.SOCK_STREAM
SEQPACKET = pysocket.SOCK_SEQPACKET

kinds = {
    'rdm': RDM,
    'dgram': DGRAM,
    'stream': STREAM,
    'seqpacket': SEQPACKET,
}

_link_request = struct.Struct('=II%ds' % (fields.MAX_LINK_NAME))


@dataclass(frozen=True)
class ReceiveResult:
    """ Everything learned from one receive call.

        *payload* is the received data; for a rejection it is the returned
        copy of the original outgoing data, or empty. *sender* is the
        socket identity of the originator, if the transport reported one.
        *destination* is the service name the message was addressed to,
        or the receiving socket's own identity when the message was sent
        directly to it. *rejection* is None for a normal delivery.
    """

    payload: bytes
    sender: Optional[LogicalAddress]
    destination: Optional[LogicalAddress]
    rejection: Optional[Rejection] = None

    @property
    def rejected(self) -> bool:
        return self.rejection is not None


def to_sockaddr(destination: LogicalAddress) -> Tuple[int, int, int, int]:
    """ Build the socket module's AF_TIPC address tuple for *destination*:
        a name lookup for a service address, a direct port identity for a
        socket address.
    """

    if destination.service_type:
        return (fields.ADDR_NAME, destination.service_type, destination.instance, destination.domain)

    return (fields.ADDR_ID, destination.domain, destination.instance, 0)


def from_sockaddr(sockaddr) -> Optional[LogicalAddress]:
    """ Translate an AF_TIPC address tuple as returned by the socket module
        into a :class:`LogicalAddress`. Returns None if there is no address.
    """

    if not sockaddr:
        return None

    addrtype = sockaddr[0]

    if addrtype == fields.ADDR_ID:
        # (addrtype, node, ref, 0, scope)
        return LogicalAddress(0, sockaddr[2], sockaddr[1])

    if addrtype == fields.ADDR_NAME:
        # (addrtype, type, instance, instance, scope)
        return LogicalAddress(sockaddr[1], sockaddr[2], 0)

    if addrtype == fields.ADDR_NAMESEQ:
        # (addrtype, type, lower, upper, scope)
        return LogicalAddress(sockaddr[1], sockaddr[2], 0)

    return None


class TransportSocket:
    """ A single AF_TIPC socket of the given *kind* (:data:`RDM`,
        :data:`DGRAM`, :data:`STREAM` or :data:`SEQPACKET`).

        The *context* supplies the own node address used for scope checks;
        the shared default context is used if none is given. An already
        open *sock* can be wrapped instead of creating a new one, which is
        how accepted connections are represented.

        Instances are not safe to share between threads without external
        serialization of each send/receive pair.
    """

    def __init__(self, kind: int = RDM, context=None, sock=None):

        if context is None:
            context = context_module.default

        self.kind = kind
        self.context = context

        if sock is None:
            try:
                sock = pysocket.socket(fields.AF_TIPC, kind)
            except (OSError, AttributeError) as exc:
                raise ResourceError('cannot open TIPC socket: ' + str(exc)) from exc

        self.socket = sock
        self.closed = False


    def __repr__(self):
        if self.closed:
            return '<TransportSocket (closed)>'
        return '<TransportSocket fd=%d kind=%d>' % (self.socket.fileno(), self.kind)


    def __enter__(self):
        return self


    def __exit__(self, *exc_info):
        self.close()


    def fileno(self) -> int:
        return self.socket.fileno()


    def close(self) -> None:
        """ Release the socket. Calling this more than once has no effect.
        """

        if self.closed:
            return

        self.closed = True
        self.socket.close()


    def identity(self) -> LogicalAddress:
        """ Return the socket identity of this socket: service type zero,
            the port reference as the instance, and the own node as the
            domain. The own node is remembered by the context.
        """

        sockaddr = self.socket.getsockname()
        identity = from_sockaddr(sockaddr)

        if identity is not None:
            self.context.learn(identity.domain)

        return identity


    def bind(self, service_type: int, lower: int, upper: int, scope: int = 0) -> address.Scope:
        """ Publish this socket as a receiver for the instances
            [*lower*, *upper*] of *service_type*. The *scope* is a domain:
            the own node, the own cluster, the own zone, or zero for zone
            wide visibility. Raises :class:`pytipc.errors.OutOfScope`
            without binding anything if the domain is not one of those.
            Returns the resolved :class:`pytipc.address.Scope`.
        """

        resolved = address.resolve_scope(scope, self.context)
        sockaddr = (fields.ADDR_NAMESEQ, service_type, lower, upper, int(resolved))

        logger.debug('bind %s scope %s', address.format_range(service_type, lower, upper, scope), resolved.name)
        self.socket.bind(sockaddr)
        return resolved


    def unbind(self, service_type: int, lower: int, upper: int) -> None:
        """ Withdraw a binding previously made with :func:`bind`.
        """

        sockaddr = (fields.ADDR_NAMESEQ, service_type, lower, upper, fields.WITHDRAW_SCOPE)

        logger.debug('unbind %s', address.format_range(service_type, lower, upper))
        self.socket.bind(sockaddr)


    def connect(self, destination: LogicalAddress) -> None:
        """ Establish a connection to *destination*. Only meaningful for
            :data:`STREAM` and :data:`SEQPACKET` sockets.
        """

        logger.debug('connect to %s', destination)
        self.socket.connect(to_sockaddr(destination))


    def listen(self, backlog: Optional[int] = None) -> None:

        if backlog is None:
            self.socket.listen()
        else:
            self.socket.listen(backlog)


    def accept(self) -> Tuple[TransportSocket, Optional[LogicalAddress]]:
        """ Accept one incoming connection. Returns a new
            :class:`TransportSocket` and the socket identity of the peer.
        """

        sock, sockaddr = self.socket.accept()
        accepted = TransportSocket(self.kind, self.context, sock)
        return accepted, from_sockaddr(sockaddr)


    def send(self, payload: bytes) -> int:
        """ Send *payload* over an established connection, or to the
            destination of a connected datagram socket.
        """

        return self.socket.send(payload)


    def sendto(self, payload: bytes, destination: LogicalAddress) -> int:
        """ Send *payload* to *destination*: a name lookup if it has a
            service type, otherwise directly to that socket identity.
        """

        return self.socket.sendto(payload, to_sockaddr(destination))


    def multicast(self, payload: bytes, service_type: int, lower: int, upper: int, domain: int) -> int:
        """ Send *payload* to every socket bound within [*lower*, *upper*]
            of *service_type* in the own cluster. Multicast is cluster-local;
            any other *domain* raises
            :class:`pytipc.errors.UnsupportedScope`.
        """

        own_cluster = self.context.own_cluster()

        if domain != own_cluster:
            raise UnsupportedScope('multicast is limited to the own cluster <%s>, not <%s>' % (address.format_domain(own_cluster), address.format_domain(domain)))

        sockaddr = (fields.ADDR_MCAST, service_type, lower, upper)
        return self.socket.sendto(payload, sockaddr)


    def receive_from(self, bufsize: Optional[int] = None) -> ReceiveResult:
        """ Block until a message arrives and return a
            :class:`ReceiveResult`. A rejection of one of our own earlier
            sends is reported in the result, not raised.
        """

        if bufsize is None:
            bufsize = config.get('buffer')

        ancbufsize = ancillary.space(config.get('ancillary'))
        data, records, flags, sockaddr = self.socket.recvmsg(bufsize, ancbufsize)

        if flags & pysocket.MSG_CTRUNC:
            logger.warning('ancillary data truncated to %d bytes, returned data may be incomplete', ancbufsize)

        decoded = ancillary.decode(records, limit=bufsize)
        sender = from_sockaddr(sockaddr)
        rejection = decoded.rejection

        if rejection is not None:
            logger.warning('message to %s rejected with error %d', sender, rejection.code)
            data = rejection.payload or b''

        destination = decoded.destination
        if destination is None:
            destination = self.identity()

        return ReceiveResult(data, sender, destination, rejection)


    def read(self, bufsize: int) -> bytes:
        """ Plain receive of up to *bufsize* bytes, without any ancillary
            data processing. Returns an empty string if the peer closed the
            connection.
        """

        return self.socket.recv(bufsize)


    def recv(self, bufsize: Optional[int] = None) -> bytes:
        """ Receive the payload of one message. If the message turns out to
            be a rejection of an earlier send, :class:`pytipc.errors.Rejected`
            is raised instead; use :func:`receive_from` to handle rejections
            as ordinary results.
        """

        result = self.receive_from(bufsize)

        if result.rejection is not None:
            raise Rejected(result.rejection.code, result.rejection.payload)

        return result.payload


    def make_rejectable(self) -> None:
        """ Ask the transport to return undeliverable messages to this socket
            instead of dropping them. Must be set before the first send to
            see every failure.
        """

        self.socket.setsockopt(fields.SOL_TIPC, fields.DEST_DROPPABLE, 0)


    def set_nonblocking(self) -> None:
        self.socket.setblocking(False)


    def set_importance(self, importance: int) -> None:
        """ Set the message importance, one of the *_IMPORTANCE values in
            :mod:`pytipc.protocol.fields`.
        """

        if importance < fields.LOW_IMPORTANCE or importance > fields.CRITICAL_IMPORTANCE:
            raise ValueError('invalid importance: ' + repr(importance))

        self.socket.setsockopt(fields.SOL_TIPC, fields.IMPORTANCE, importance)


    def set_connect_timeout(self, timeout_ms: int) -> None:
        self.socket.setsockopt(fields.SOL_TIPC, fields.CONN_TIMEOUT, timeout_ms)


    def link_name(self, peer: int, bearer_id: int) -> str:
        """ Return the name of the link to node *peer* on the local bearer
            *bearer_id*, or an empty string if the kernel knows no such link.
        """

        request = _link_request.pack(peer, bearer_id, b'')

        try:
            response = fcntl.ioctl(self.fileno(), fields.SIOCGETLINKNAME, request)
        except OSError as exc:
            logger.debug('no link name for <%s> bearer %d: %s', address.format_domain(peer), bearer_id, exc)
            return ''

        _peer, _bearer, name = _link_request.unpack(response)
        name = name.split(b'\0', 1)[0]
        return name.decode(errors='replace')


# end of class TransportSocket


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
