""" The "link" commands: list working links, and follow them going up and
    down.
"""

import logging

from ..cmdline import Command, insert, parse_options
from ..topology import LinkWatch
from . import common


logger = logging.getLogger(__name__)


def label(event):

    if event.name:
        return event.name

    return '%s/%u' % (common.node_name(event.peer), event.local_bearer)


def describe(event):

    if event.up:
        state = 'up'
    else:
        state = 'down'

    return 'link %s is %s, local bearer %u, remote bearer %u' % (label(event), state, event.local_bearer, event.remote_bearer)


def list_links(command, arguments):

    common.no_arguments(arguments)

    with LinkWatch.connect(follow=False) as links:
        found = links.current()

    found.sort(key=lambda event: (event.peer, event.local_bearer))

    for event in found:
        print('%s: up' % (label(event)))

    return 0


def watch(command, arguments):

    options = parse_options(command, arguments)

    if 'node' in options:
        node = common.domain('node', options['node'])
    else:
        node = 0

    with LinkWatch.connect(node) as links:
        try:
            for event in links.events():
                print(describe(event), flush=True)
        except KeyboardInterrupt:
            logger.debug('link watch interrupted')

    return 0


def register(root):

    link = Command('link', description='Link state')
    link.add(Command('list', list_links, '', 'List working links'))

    watching = link.add(Command('watch', watch, '[OPTIONS]', 'Report links as they go up and down'))
    watching.add_option('node', 'Z.C.N', 'Watch the links of this node')

    insert(root, link)
    return link


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
