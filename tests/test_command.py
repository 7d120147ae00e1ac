import pytest

from minish.ast import Node, NodeType
from minish.command import Command, PipeIO, dir_join


def _node(kind, data=None):
    node = Node(kind)
    node.set_data(data)
    return node


def _cmd(name, *args, redirs=None):
    node = _node(NodeType.CMD, name)
    for arg in reversed(args):
        node.insert(_node(NodeType.ARG, arg), True)
    node.left = redirs
    return node


def test_argv_from_chain():
    cmd = Command.from_node(_cmd("ls", "-l", "dir"))
    assert cmd.argv == ["ls", "-l", "dir"]
    assert cmd.argc == 3


def test_redirections_come_from_left_chain():
    redir = _node(NodeType.RD_TRUNC, "out.txt")
    io = PipeIO()
    cmd = Command.from_node(_cmd("echo", "hi", redirs=redir), io)
    assert cmd.io is io
    assert io.redirections is redir


def test_command_without_name_has_empty_argv():
    redir = _node(NodeType.RD_INFILE, "in.txt")
    node = Node(NodeType.CMD, left=redir)
    cmd = Command.from_node(node)
    assert cmd.argv == []
    assert cmd.argc == 0
    assert cmd.io.redirections is redir


def test_chain_stops_at_other_node_kind():
    node = _cmd("cat", "a")
    node.right.right = _node(NodeType.RD_TRUNC, "ignored")
    assert Command.from_node(node).argv == ["cat", "a"]


@pytest.mark.parametrize("node", [None, Node(NodeType.PIPE), _node(NodeType.ARG, "x")])
def test_rejects_non_command(node):
    with pytest.raises(ValueError):
        Command.from_node(node)


def test_pipe_flags():
    io = PipeIO(read_fd=3)
    assert io.reads_pipe and not io.writes_pipe and io.in_pipeline
    assert not PipeIO().in_pipeline
    assert PipeIO(write_fd=4).writes_pipe


def test_dir_join():
    assert dir_join("/usr/bin", "ls") == "/usr/bin/ls"
    assert dir_join(None, "ls") is None
    assert dir_join("/bin", None) is None