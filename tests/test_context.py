import threading

import pytipc

from pytipc.address import compose


def test_fixed_node():

    context = pytipc.context.Context(compose(1, 2, 3))

    assert context.known() == True
    assert context.own_node() == compose(1, 2, 3)
    assert context.own_cluster() == compose(1, 2, 0)
    assert context.own_zone() == compose(1, 0, 0)
    assert '1.2.3' in repr(context)


def test_learn():

    context = pytipc.context.Context()
    assert context.known() == False

    # Zero is not a node address.
    context.learn(0)
    assert context.known() == False

    context.learn(compose(1, 1, 7))
    assert context.own_node() == compose(1, 1, 7)

    # The first address learned sticks.
    context.learn(compose(1, 1, 8))
    assert context.own_node() == compose(1, 1, 7)


def test_probe_once(monkeypatch):
    """ The own node is looked up at most once, no matter how many threads
        ask for it at the same time.
    """

    calls = list()
    gate = threading.Event()

    def probe():
        gate.wait()
        calls.append(1)
        return compose(1, 1, 42)

    monkeypatch.setattr(pytipc.context, '_probe', probe)

    context = pytipc.context.Context()
    results = list()

    def worker():
        results.append(context.own_node())

    threads = [threading.Thread(target=worker) for index in range(8)]
    for thread in threads:
        thread.start()

    gate.set()

    for thread in threads:
        thread.join()

    assert len(calls) == 1
    assert results == [compose(1, 1, 42)] * 8


def test_probe(tipc):

    context = pytipc.context.Context()
    assert context.own_node() == tipc.own_node()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
