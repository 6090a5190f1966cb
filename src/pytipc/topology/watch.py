""" Watches on the two pseudo services maintained by every TIPC node: node
    state, with one binding per reachable node, and link state, with one
    binding per working link. They are ordinary topology subscriptions;
    what differs is how the events are interpreted, which is what the
    :class:`NeighborWatch` and :class:`LinkWatch` classes take care of.
"""

from ..address import MAX_U32
from ..protocol import fields
from ..protocol.event import LinkEvent, NeighborEvent, ServiceEvent
from .client import TopologyClient


class NeighborWatch(TopologyClient):
    """ Report nodes becoming reachable or unreachable, as seen from the
        node whose topology server is connected. :func:`next_event` returns
        :class:`pytipc.protocol.event.NeighborEvent` instances.
    """

    service_type = fields.NODE_STATE

    @classmethod
    def connect(cls, node=0, context=None, follow=True):
        """ Connect to the topology server on *node*. With *follow* True a
            permanent subscription is made right away; a connection opened
            with *follow* False is only good for :func:`current`.
        """

        watch = super().connect(node, context)

        if follow:
            try:
                watch.subscribe(cls.service_type, 0, MAX_U32, all_ports=True)
            except Exception:
                watch.close()
                raise

        return watch


    def translate(self, event):
        return NeighborEvent.from_event(event)


    def next_event(self):

        event = self._next_record()

        # Expired events pass through untranslated.

        if isinstance(event, ServiceEvent):
            return self.translate(event)

        return event


    def current(self):
        """ Return the translated events for everything currently known,
            using a snapshot subscription on this same connection.
        """

        found = self.snapshot(self.service_type, 0, MAX_U32, all_ports=True)
        return [self.translate(event) for event in found]


# end of class NeighborWatch



class LinkWatch(NeighborWatch):
    """ Report links to other nodes going up or down. :func:`next_event`
        returns :class:`pytipc.protocol.event.LinkEvent` instances; if
        *names* is True (the default) the kernel is asked for the name of
        each link.
    """

    service_type = fields.LINK_STATE
    names = True

    def translate(self, event):

        link = LinkEvent.from_event(event)

        if self.names:
            name = self.transport.link_name(link.peer, link.local_bearer)
            link = LinkEvent(link.peer, link.up, link.local_bearer, link.remote_bearer, name)

        return link


# end of class LinkWatch


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
