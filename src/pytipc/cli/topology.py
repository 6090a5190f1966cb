""" The "topology" command: follow service bindings, neighbor nodes and
    links all at once, on separate topology connections multiplexed by a
    :class:`pytipc.topology.Monitor`.
"""

import logging

from ..address import MAX_U32, format_range
from ..cmdline import Command, insert, parse_options
from ..errors import InvalidArguments
from ..protocol.event import Expired
from ..topology import LinkWatch, Monitor, NeighborWatch, TopologyClient
from . import common
from . import link
from . import node


logger = logging.getLogger(__name__)


class Printer:
    """ Callbacks for a :class:`pytipc.topology.Monitor`, one per kind of
        source, each printing a line per event.
    """

    def __init__(self, monitor):

        self.monitor = monitor


    def service(self, source, event):

        if event is None:
            print('topology server closed the connection', flush=True)
            return

        if isinstance(event, Expired):
            subscription = event.subscription
            print('subscription to %s expired' % (format_range(subscription.service_type, subscription.lower, subscription.upper)), flush=True)

            if not source.subscriptions:
                self.monitor.unregister(source)
                source.close()
            return

        if event.available:
            verb = 'published'
        else:
            verb = 'withdrawn'

        service = format_range(event.service.service_type, event.found_lower, event.found_upper, event.node)
        print('%s %s, port %u' % (verb, service, event.port.instance), flush=True)


    def neighbor(self, source, event):

        if event is None:
            print('node watch closed', flush=True)
            return

        print('node ' + node.describe(event), flush=True)


    def link(self, source, event):

        if event is None:
            print('link watch closed', flush=True)
            return

        print(link.describe(event), flush=True)


# end of class Printer



def watch(command, arguments):
    """ Watch nodes and links, plus the bindings of one service type if the
        "type" option is given, until interrupted.
    """

    options = parse_options(command, arguments)

    for key in ('lower', 'upper', 'expire'):
        if key in options and 'type' not in options:
            raise InvalidArguments('the "%s" option requires "type"' % (key))

    monitor = Monitor()
    printer = Printer(monitor)

    try:
        if 'type' in options:
            service_type = common.number('type', options['type'])
            lower = common.number('lower', options.get('lower', '0'))
            upper = common.number('upper', options.get('upper', str(MAX_U32)))

            if 'expire' in options:
                expire = common.number('expire', options['expire'])
            else:
                expire = -1

            if lower > upper:
                raise InvalidArguments('lower %d exceeds upper %d' % (lower, upper))

            client = TopologyClient.connect()
            monitor.register(client, printer.service)
            client.subscribe(service_type, lower, upper, all_ports=True, expire_ms=expire)

        monitor.register(NeighborWatch.connect(), printer.neighbor)
        monitor.register(LinkWatch.connect(), printer.link)

        try:
            monitor.run()
        except KeyboardInterrupt:
            logger.debug('topology watch interrupted')
    finally:
        monitor.close()

    return 0


def register(root):

    topology = Command('topology', description='Topology events')

    watching = topology.add(Command('watch', watch, '[OPTIONS]', 'Report bindings, nodes and links as they change'))
    watching.add_option('type', 'TYPE', 'Also watch bindings of this service type')
    watching.add_option('lower', 'INSTANCE', 'Lowest instance to watch, default 0')
    watching.add_option('upper', 'INSTANCE', 'Highest instance to watch, default all')
    watching.add_option('expire', 'MS', 'End the service subscription after this many milliseconds')

    insert(root, topology)
    return topology


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
