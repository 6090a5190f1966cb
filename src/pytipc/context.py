""" Per-process knowledge about the local TIPC node. The own node address
    cannot change while a process is running, so it is discovered once,
    on first use, and cached on a :class:`Context` instance. Most callers
    share the module-level :data:`default` context; tests and unusual
    applications can construct their own, optionally with a fixed *node*.
"""

import logging
import socket
import threading

from . import address
from .errors import ResourceError
from .protocol import fields


logger = logging.getLogger(__name__)


class Context:
    """ Lazily populated own-address state. The node address is taken from
        the identity of a throwaway socket the first time any of the
        accessors is called; a failed query is not cached, the next call
        will try again.
    """

    def __init__(self, node=None):

        self._node = node
        self._lock = threading.Lock()


    def __repr__(self):
        if self._node is None:
            return '<Context (unknown node)>'
        return '<Context <%s>>' % (address.format_domain(self._node))


    def known(self):
        """ Return True if the own node address has already been established.
        """

        return self._node is not None


    def learn(self, node):
        """ Record the own node address as observed from a socket identity,
            unless it is already known.
        """

        if self._node is not None or not node:
            return

        with self._lock:
            if self._node is None:
                self._node = node
                logger.debug('own node is <%s>', address.format_domain(node))


    def own_node(self):

        if self._node is not None:
            return self._node

        with self._lock:
            if self._node is None:
                self._node = _probe()
                logger.debug('own node is <%s>', address.format_domain(self._node))

        return self._node


    def own_cluster(self):
        return self.own_node() & ~0xFFF


    def own_zone(self):
        return self.own_node() & ~0xFFFFFF


# end of class Context



def _probe():
    """ Open a reliable datagram socket and return the node part of its
        identity.
    """

    try:
        sock = socket.socket(fields.AF_TIPC, socket.SOCK_RDM)
    except OSError as exc:
        raise ResourceError('cannot open TIPC socket: ' + str(exc)) from exc

    try:
        name = sock.getsockname()
    except OSError as exc:
        raise ResourceError('cannot query TIPC socket identity: ' + str(exc)) from exc
    finally:
        sock.close()

    # (addrtype, node, ref, 0, scope) for a TIPC_ADDR_ID sockaddr.
    return name[1]


default = Context()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
