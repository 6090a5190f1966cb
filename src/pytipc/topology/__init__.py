"""Service discovery through the TIPC topology server."""

from . import client
from . import monitor
from . import watch

from .client import TopologyClient, wait_for_service
from .monitor import Monitor
from .watch import LinkWatch, NeighborWatch


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
