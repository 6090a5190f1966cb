"""Decoding of the ancillary records TIPC attaches to received messages.

A returned (rejected) message carries an ERRINFO record, holding the error
code and the length of the returned data, followed by a RETDATA record with
the original payload. A message delivered through a name lookup may carry a
DESTNAME record with the service name that matched. Records are identified
by their cmsg type only; the payload is never inspected.
"""

from __future__ import annotations

import logging
import socket
import struct
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from ..address import LogicalAddress
from ..protocol import fields


logger = logging.getLogger(__name__)

_ERRINFO = struct.Struct('=II')
_DESTNAME = struct.Struct('=III')


@dataclass(frozen=True)
class Rejection:
    """ The transport returned a message instead of delivering it. *code*
        is the TIPC error code; *payload* is the original outgoing data, or
        None if none was returned.
    """

    code: int
    payload: Optional[bytes] = None


@dataclass(frozen=True)
class Ancillary:
    rejection: Optional[Rejection] = None
    destination: Optional[LogicalAddress] = None


def space(returned: int = 1024) -> int:
    """ Return the ancillary buffer size needed to hold every record TIPC
        may attach: ERRINFO, RETDATA of up to *returned* bytes, DESTNAME.
    """

    return socket.CMSG_SPACE(_ERRINFO.size) + socket.CMSG_SPACE(returned) + socket.CMSG_SPACE(_DESTNAME.size)


def decode(records: Iterable[Tuple[int, int, bytes]], limit: Optional[int] = None) -> Ancillary:
    """ Interpret the (level, type, data) tuples returned by
        :func:`socket.socket.recvmsg`. Returned data is truncated to
        *limit* bytes, the size of the caller's receive buffer.
    """

    code = 0
    length = 0
    returned = None
    destination = None

    for level, kind, data in records:
        if level != fields.SOL_TIPC:
            continue

        if kind == fields.ERRINFO:
            if len(data) < _ERRINFO.size:
                logger.warning('ignoring short ERRINFO record (%d bytes)', len(data))
                continue
            code, length = _ERRINFO.unpack_from(data)

        elif kind == fields.RETDATA:
            returned = bytes(data)

        elif kind == fields.DESTNAME:
            if len(data) < _DESTNAME.size:
                logger.warning('ignoring short DESTNAME record (%d bytes)', len(data))
                continue
            service_type, lower, _upper = _DESTNAME.unpack_from(data)
            destination = LogicalAddress(service_type, lower, 0)

    rejection = None

    if code != 0:
        if returned is not None:
            if limit is not None and length > limit:
                length = limit
            returned = returned[:length]

        rejection = Rejection(code, returned)

    return Ancillary(rejection, destination)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
