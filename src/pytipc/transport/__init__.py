"""Transport layer: AF_TIPC sockets."""

from ..errors import (
    TransportError,
    ResourceError,
    OutOfScope,
    UnsupportedScope,
    ProtocolError,
    ConnectionClosed,
    Rejected,
)

from . import ancillary
from . import socket

from .ancillary import Rejection
from .socket import TransportSocket, ReceiveResult, RDM, DGRAM, STREAM, SEQPACKET


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
