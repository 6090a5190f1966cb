""" The "node" commands: list reachable nodes, and follow them coming and
    going.
"""

import logging

from ..cmdline import Command, insert, parse_options
from ..topology import NeighborWatch
from . import common


logger = logging.getLogger(__name__)


def describe(event):

    if event.up:
        state = 'up'
    else:
        state = 'down'

    return '%s: %s' % (common.node_name(event.node), state)


def list_nodes(command, arguments):
    """ Print every node currently reachable from this one, in address
        order. The own node is included.
    """

    common.no_arguments(arguments)

    with NeighborWatch.connect(follow=False) as neighbors:
        found = neighbors.current()

    nodes = sorted(set(event.node for event in found))

    for node in nodes:
        print('%s: up' % (common.node_name(node)))

    return 0


def watch(command, arguments):
    """ Print a line each time a node is found or lost, until interrupted or
        until the topology server goes away. The "node" option watches from
        the perspective of another node's topology server.
    """

    options = parse_options(command, arguments)

    if 'node' in options:
        node = common.domain('node', options['node'])
    else:
        node = 0

    with NeighborWatch.connect(node) as neighbors:
        try:
            for event in neighbors.events():
                print(describe(event), flush=True)
        except KeyboardInterrupt:
            logger.debug('node watch interrupted')

    return 0


def register(root):

    node = Command('node', description='Node state')
    node.add(Command('list', list_nodes, '', 'List reachable nodes'))

    watching = node.add(Command('watch', watch, '[OPTIONS]', 'Report nodes as they come and go'))
    watching.add_option('node', 'Z.C.N', 'Watch from the perspective of this node')

    insert(root, node)
    return node


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
