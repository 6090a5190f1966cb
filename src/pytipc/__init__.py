""" Python access to TIPC, the Transparent Inter-Process Communication
    protocol. This includes addressing, datagram and connection oriented
    sockets bound to service addresses, and service discovery through the
    topology server of each node.
"""

# Submodules used by multiple other components.

from . import config
from . import errors
from . import protocol
from .protocol import event
from .protocol import subscription

from . import address
from . import context

# Primary public-facing interfaces.

from . import transport
from . import topology
from . import cmdline

from .address import LogicalAddress, ServiceRange, Scope
from .errors import TipcError
from .transport import TransportSocket
from .topology import TopologyClient, Monitor, NeighborWatch, LinkWatch
wait_for_service = topology.wait_for_service

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
