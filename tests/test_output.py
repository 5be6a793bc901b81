"""Tests for machine-readable output parsing."""

from __future__ import annotations

import pytest

from vagrant_client.output import OutputLine, parse_line, parse_output, unescape


@pytest.mark.parametrize(
    'raw',
    [
        '1546430404,default,metadata,provider,libvirt',
        '1546015529,,ui,info,my-debian (libvirt%!(VAGRANT_COMMA) 0)',
        '1546015529,default,action,up,start',
    ],
)
def test_parse_line_ignored_kinds(raw: str) -> None:
    assert parse_line(raw) is None


@pytest.mark.parametrize('raw', ['', '   ', 'a,b,c', 'no commas here'])
def test_parse_line_too_few_segments(raw: str) -> None:
    assert parse_line(raw) is None


def test_parse_line_single_data_field() -> None:
    line = parse_line('  1546015529,default,box-name,my-debian \n')
    assert line == OutputLine('1546015529', 'default', 'box-name', ('my-debian',))
    assert line.first == 'my-debian'


def test_parse_line_multiple_data_fields() -> None:
    line = parse_line('1546015529,,error-exit,Vagrant::Errors::Foo,bad thing')
    assert line is not None
    assert line.target == ''
    assert line.data == ('Vagrant::Errors::Foo', 'bad thing')


def test_parse_line_empty_data() -> None:
    line = parse_line('1546015529,default,state,')
    assert line is not None
    assert line.data == ('',)


def test_parse_line_custom_ignore_set() -> None:
    raw = '1546430404,default,state,running'
    assert parse_line(raw, ignored_kinds={'state'}) is None
    assert parse_line('1546430404,default,ui,info,x', ignored_kinds=()) is not None


def test_parse_output_keeps_order_and_literal_escapes() -> None:
    output = r"""
1546430404,default,metadata,provider,libvirt
1546430404,default,provider-name,libvirt
1546430404,default,state,running
1546430404,default,state-human-short,running
1546430404,default,state-human-long,The Libvirt domain is running. To stop this machine%!(VAGRANT_COMMA) you can run\n'vagrant halt'.
1546430404,,ui,info,Current machine states:\n\ndefault                   running (libvirt)
"""
    lines = parse_output(output)
    assert [ln.kind for ln in lines] == [
        'provider-name',
        'state',
        'state-human-short',
        'state-human-long',
    ]
    long = lines[3]
    assert long.data == (
        "The Libvirt domain is running. To stop this machine%!(VAGRANT_COMMA)"
        " you can run\\n'vagrant halt'.",
    )
    assert long.message == (
        "The Libvirt domain is running. To stop this machine, you can run\n"
        "'vagrant halt'."
    )


def test_parse_output_empty_and_noise() -> None:
    assert parse_output('') == []
    noise = """
(Not all processes could be identified, non-owned process info
 will not be shown, you would have to be root to see it all.)
Active Internet connections (servers and established)
Proto Recv-Q Send-Q Local Address           Foreign Address         State
tcp        0      0 127.0.0.1:63342         0.0.0.0:*               LISTEN
"""
    assert parse_output(noise) == []


def test_unescape() -> None:
    assert unescape('a%!(VAGRANT_COMMA) b\\nc\\r') == 'a, b\nc\r'


def test_parse_output_splits_only_on_newline() -> None:
    raw = '1,default,state-human-long,foo\rbar\n1,,box-name,my\u2028box\r\n'
    lines = parse_output(raw)
    assert [ln.data for ln in lines] == [('foo\rbar',), ('my\u2028box',)]
