""" Exceptions raised by pytipc. Everything derives from :class:`TipcError`;
    the transport and command subsystems each have their own intermediate
    base class.
"""


class TipcError(Exception):
    """Base class for all pytipc errors."""


class InvalidAddress(TipcError, ValueError):
    """A domain or logical address is malformed or out of range."""


# Transport errors

class TransportError(TipcError):
    """Base class for all transport-layer errors."""


class ResourceError(TransportError):
    """A socket or connection could not be created."""


class OutOfScope(TransportError):
    """The requested binding scope is not reachable from this node."""


class UnsupportedScope(TransportError):
    """Multicast was requested outside of the own cluster."""


class ProtocolError(TransportError):
    """A topology record was truncated or malformed."""


class ConnectionClosed(ProtocolError):
    """The peer closed the connection before a complete record arrived."""


class Rejected(TransportError):
    """ A message was returned by the transport instead of being delivered.
        *code* is the TIPC error code; *payload* is the original outgoing
        data, if the transport returned it.
    """

    reasons = {
        1: 'no such name',
        2: 'no such port',
        3: 'no such node',
        4: 'overload',
        5: 'connection shutdown',
    }

    def __init__(self, code, payload=None):

        self.code = code
        self.payload = payload

        try:
            reason = self.reasons[code]
        except KeyError:
            reason = 'error ' + str(code)

        TransportError.__init__(self, 'message rejected: ' + reason)


# Command line errors

class CommandError(TipcError):
    """Base class for command line resolution and parsing errors."""


class InvalidArguments(CommandError):
    """A command received the wrong number or kind of arguments."""


class NotFound(CommandError):
    """No command or option matches the given token."""


class Ambiguous(NotFound):
    """More than one command or option matches an abbreviated token."""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
