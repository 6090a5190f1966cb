import pytipc
import pytipc.cli

from pytipc.address import LogicalAddress, compose
from pytipc.protocol import event
from pytipc.protocol.subscription import Subscription


class FakeClient:
    """ Stand-in for a topology connection that answers every snapshot
        with the same list of events.
    """

    found = list()

    def __init__(self):
        self.closed = False

    @classmethod
    def connect(cls, node=0, context=None, follow=True):
        cls.node = node
        return cls()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True

    def snapshot(self, service_type, lower=0, upper=0xFFFFFFFF, all_ports=False):
        FakeClient.asked = (service_type, lower, upper, all_ports)
        return list(self.found)

    def current(self):
        return list(self.found)


def published(service_type, lower, upper, ref, node):

    subscription = Subscription(service_type, 0, 0xFFFFFFFF, all_ports=True)
    service = LogicalAddress(service_type, lower, node)
    return event.Published(subscription, service, upper, LogicalAddress(0, ref, node))


def test_no_command(capsys):

    assert pytipc.cli.main(['pytipc']) == 1

    captured = capsys.readouterr()
    assert 'Usage: pytipc [OPTIONS] COMMAND [ARGS]' in captured.err
    assert 'nametable' in captured.err


def test_build():

    root = pytipc.cli.build()
    names = [command.name for command in root]

    assert names == sorted(names)
    assert names == ['address', 'link', 'nametable', 'node', 'service', 'topology']


def test_unknown(capsys, caplog):

    assert pytipc.cli.main(['pytipc', 'bogus']) == 1
    assert 'unknown bareword "bogus"' in caplog.text

    captured = capsys.readouterr()
    assert 'Usage: pytipc\n' in captured.err


def test_address(capsys, monkeypatch):

    monkeypatch.setattr(pytipc.context, 'default', pytipc.context.Context(compose(1, 1, 10)))

    assert pytipc.cli.main(['pytipc', 'addr', 'sh']) == 0

    captured = capsys.readouterr()
    assert captured.out == '<1.1.10>\n'


def test_help(capsys):

    assert pytipc.cli.main(['pytipc', 'nametable', 'show', '--help']) == 1

    captured = capsys.readouterr()
    assert 'Usage: pytipc nametable show type TYPE [OPTIONS]' in captured.err
    assert 'Lowest instance' in captured.err
    assert captured.out == ''


def test_nametable(capsys, monkeypatch):

    FakeClient.found = [
        published(18888, 20, 29, 2, compose(1, 1, 2)),
        published(18888, 10, 19, 1, compose(1, 1, 1)),
    ]
    monkeypatch.setattr(pytipc.cli.nametable, 'TopologyClient', FakeClient)

    assert pytipc.cli.main(['pytipc', 'nametable', 'show', 'type', '18888', 'lo', '5']) == 0
    assert FakeClient.asked == (18888, 5, 0xFFFFFFFF, True)

    lines = capsys.readouterr().out.splitlines()

    assert lines[0].split() == ['Type', 'Lower', 'Upper', 'Port', 'Identity']
    assert lines[1].split() == ['18888', '10', '19', '<1.1.1:1>']
    assert lines[2].split() == ['18888', '20', '29', '<1.1.2:2>']


def test_nametable_errors(capsys, monkeypatch):

    monkeypatch.setattr(pytipc.cli.nametable, 'TopologyClient', FakeClient)

    assert pytipc.cli.main(['pytipc', 'nametable', 'show']) == 1
    assert pytipc.cli.main(['pytipc', 'nametable', 'show', 'type', 'x']) == 1
    assert pytipc.cli.main(['pytipc', 'nametable', 'show', 'type', '1', 'lower', '5', 'upper', '4']) == 1
    assert pytipc.cli.main(['pytipc', 'nametable', 'show', 'type']) == 1

    captured = capsys.readouterr()
    assert 'Usage: pytipc nametable show' in captured.err


def test_node_list(capsys, monkeypatch):

    FakeClient.found = [
        event.NeighborEvent(compose(1, 1, 3), True),
        event.NeighborEvent(compose(1, 1, 1), True),
        event.NeighborEvent(compose(1, 1, 3), True),
    ]
    monkeypatch.setattr(pytipc.cli.node, 'NeighborWatch', FakeClient)

    assert pytipc.cli.main(['pytipc', 'node', 'list']) == 0

    captured = capsys.readouterr()
    assert captured.out == '<1.1.1>: up\n<1.1.3>: up\n'


def test_link_list(capsys, monkeypatch):

    FakeClient.found = [
        event.LinkEvent(compose(1, 1, 2), True, 0, 0, '1.1.1:eth0-1.1.2:eth0'),
        event.LinkEvent(compose(1, 1, 3), True, 1, 0, ''),
    ]
    monkeypatch.setattr(pytipc.cli.link, 'LinkWatch', FakeClient)

    assert pytipc.cli.main(['pytipc', 'link', 'list']) == 0

    captured = capsys.readouterr()
    assert captured.out == '1.1.1:eth0-1.1.2:eth0: up\n<1.1.3>/1: up\n'


def test_service_wait(capsys, monkeypatch):

    waited = list()

    def wait_for_service(service, timeout):
        waited.append((service, timeout))
        return service.instance == 5

    monkeypatch.setattr(pytipc.cli.service, 'wait_for_service', wait_for_service)
    monkeypatch.delenv('PYTIPC_WAIT', raising=False)

    assert pytipc.cli.main(['pytipc', 'service', 'wait', '1000:5']) == 0
    assert waited[-1] == (LogicalAddress(1000, 5, 0), 5000)

    assert pytipc.cli.main(['pytipc', 'service', 'wait', '1000:6:1.1.1', 'timeout', '20']) == 1
    assert waited[-1] == (LogicalAddress(1000, 6, compose(1, 1, 1)), 20)

    captured = capsys.readouterr()
    assert '1000:5:0.0.0 is available' in captured.out
    assert '1000:6:1.1.1 is not available' in captured.out


def test_service_wait_errors(capsys):

    assert pytipc.cli.main(['pytipc', 'service', 'wait']) == 1
    assert pytipc.cli.main(['pytipc', 'service', 'wait', 'nonsense']) == 1
    assert pytipc.cli.main(['pytipc', 'service', 'wait', '1000:5', 'timeout']) == 1

    captured = capsys.readouterr()
    assert 'Usage: pytipc service wait TYPE:INSTANCE[:Z.C.N] [OPTIONS]' in captured.err


def test_topology_options(capsys, caplog):

    assert pytipc.cli.main(['pytipc', 'topology', 'watch', 'lower', '5']) == 1
    assert 'requires "type"' in caplog.text

    captured = capsys.readouterr()
    assert 'Usage: pytipc topology watch [OPTIONS]' in captured.err


def test_transport_failure(capsys, caplog, monkeypatch):

    def unreachable(cls, node=0, context=None, follow=True):
        raise pytipc.errors.ResourceError('cannot open TIPC socket: not supported')

    monkeypatch.setattr(pytipc.cli.node.NeighborWatch, 'connect', classmethod(unreachable))

    assert pytipc.cli.main(['pytipc', '-v', 'node', 'list']) == 1

    assert 'cannot open TIPC socket' in caplog.text
    assert 'Traceback' not in capsys.readouterr().err


def test_printer(capsys):

    monitor = pytipc.topology.Monitor()
    printer = pytipc.cli.topology.Printer(monitor)

    found = published(18888, 5, 5, 7, compose(1, 1, 2))
    printer.service(None, found)
    printer.neighbor(None, event.NeighborEvent(compose(1, 1, 2), False))
    printer.link(None, event.LinkEvent(compose(1, 1, 2), True, 0, 1, 'a-b'))
    printer.link(None, None)

    lines = capsys.readouterr().out.splitlines()

    assert lines[0] == 'published 18888:5:5:1.1.2, port 7'
    assert lines[1] == 'node <1.1.2>: down'
    assert lines[2] == 'link a-b is up, local bearer 0, remote bearer 1'
    assert lines[3] == 'link watch closed'


def test_list_nodes(tipc, capsys):

    assert pytipc.cli.main(['pytipc', 'node', 'list']) == 0
    assert '<' in capsys.readouterr().out


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
