""" Readiness multiplexing for topology connections. A :class:`Monitor`
    waits on any number of :class:`pytipc.topology.TopologyClient` (or
    watch) instances at once, in the calling thread, and hands each event
    to the callback registered for its connection. Nothing here starts a
    thread; an application that wants a background monitor runs
    :func:`Monitor.run` in a thread of its own.

    The polling is done with a ZeroMQ poller, which accepts plain file
    descriptors alongside ZeroMQ sockets, so applications that also use
    ZeroMQ can register both kinds of source on the same poller.
"""

import logging

import zmq

from ..errors import ConnectionClosed


logger = logging.getLogger(__name__)


class Monitor:
    """ Dispatch events from several topology connections. Sources are
        registered with a callback invoked as ``callback(source, event)``;
        when a source's connection closes the callback is invoked once more
        with *event* set to None, after which the source is unregistered and
        closed.
    """

    def __init__(self):

        self.poller = zmq.Poller()
        self.sources = dict()


    def __len__(self):
        return len(self.sources)


    def __contains__(self, source):
        return source in self.sources


    def register(self, source, callback):
        """ Start watching *source*, which must provide fileno() and
            next_event().
        """

        self.poller.register(source, zmq.POLLIN)
        self.sources[source] = callback


    def unregister(self, source):
        """ Stop watching *source*. Unknown sources are ignored.
        """

        try:
            del self.sources[source]
        except KeyError:
            return

        self.poller.unregister(source)


    def poll(self, timeout=None):
        """ Wait up to *timeout* milliseconds (None waits indefinitely) for
            at least one source to become readable, then read one event from
            each readable source and dispatch it. Returns the number of
            sources that were ready.
        """

        ready = self.poller.poll(timeout)

        for source, _flags in ready:
            try:
                callback = self.sources[source]
            except KeyError:
                # Unregistered by an earlier callback in this same pass.
                continue

            try:
                event = source.next_event()
            except ConnectionClosed:
                logger.debug('topology connection %r closed', source)
                self.unregister(source)
                source.close()
                event = None

            callback(source, event)

        return len(ready)


    def run(self, timeout=None):
        """ Dispatch events until no sources remain registered, or until
            *timeout* milliseconds pass without any source becoming ready.
        """

        while self.sources:
            if self.poll(timeout) == 0:
                break


    def close(self):
        """ Close and forget every registered source.
        """

        for source in list(self.sources.keys()):
            self.unregister(source)
            source.close()


# end of class Monitor


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
