"""Tests for wire text rendering and the two readers."""

import pytest

from online_packet.protocol.errors import DecodeError, FieldNotFoundError, FieldValueError
from online_packet.protocol.framing import (
    DecodeMode,
    WireFrame,
    escape_value,
    read_frame,
    render_frame,
    scan_field,
    tokenize_frame,
)

AUTHOR = "a3bb189e-8bf9-3888-9912-ace4e6543002"
PACKET = "5f0c6a1e-2d4b-4b8e-9c3f-7a9d1e2b3c4d"
CANONICAL = (
    f'{{"command":"SIMPLE_TEXT", "data":" hello", '
    f'"packetID":"{PACKET}", "authID":"{AUTHOR}"}}'
)


def test_render_frame_exact_template():
    text = render_frame("SIMPLE_TEXT", "hello", PACKET, AUTHOR)
    assert text == CANONICAL


def test_render_frame_null_author():
    text = render_frame("chat;", "1.5", PACKET, "null")
    assert text.endswith('"authID":"null"}')


def test_render_frame_escapes_on_request():
    text = render_frame('say;', 'a "quoted" \\ word', PACKET, "null", escape_quotes=True)
    assert '"data":" a \\"quoted\\" \\\\ word"' in text


def test_escape_value():
    assert escape_value('x"y') == 'x\\"y'
    assert escape_value("x\\y") == "x\\\\y"


def test_scan_field_keeps_data_space():
    """The legacy offset lands on the template space of data."""
    assert scan_field(CANONICAL, "data") == " hello"
    assert scan_field(CANONICAL, "command") == "SIMPLE_TEXT"
    assert scan_field(CANONICAL, "packetID") == PACKET
    assert scan_field(CANONICAL, "authID") == AUTHOR


def test_scan_field_missing():
    with pytest.raises(FieldNotFoundError) as exc:
        scan_field('{"command":"x"}', "data")
    assert exc.value.field == "data"


def test_scan_field_unterminated():
    with pytest.raises(FieldValueError):
        scan_field('{"command":"x', "command")


def test_scan_field_name_at_end_of_text():
    with pytest.raises(FieldValueError):
        scan_field("data", "data")


def test_scan_field_first_occurrence_wins():
    """A field name inside an earlier value derails the legacy reader."""
    text = (
        '{"command":"see data here", "data":" real", '
        f'"packetID":"{PACKET}", "authID":"null"}}'
    )
    assert scan_field(text, "data") != " real"


@pytest.mark.parametrize("mode", list(DecodeMode))
def test_read_frame_canonical(mode):
    frame = read_frame(CANONICAL, mode=mode)
    assert frame == WireFrame(
        command="SIMPLE_TEXT", data="hello", packet_id=PACKET, author_id=AUTHOR
    )


@pytest.mark.parametrize("mode", list(DecodeMode))
def test_read_frame_strips_only_one_space(mode):
    text = render_frame("c;", "  two", PACKET, "null")
    assert read_frame(text, mode=mode).data == "  two"


def test_read_frame_mode_accepts_string():
    assert read_frame(CANONICAL, mode="legacy").command == "SIMPLE_TEXT"


def test_tokenizer_ignores_key_order():
    text = (
        f'{{"authID":"null", "packetID":"{PACKET}", '
        '"data":" x", "command":"c;"}'
    )
    frame = read_frame(text)
    assert frame.command == "c;"
    assert frame.data == "x"
    assert frame.author_id == "null"


def test_tokenizer_field_name_inside_value():
    text = render_frame("chat;", 'the "command" word', PACKET, "null", escape_quotes=True)
    frame = read_frame(text, escaped=True)
    assert frame.data == 'the "command" word'
    assert frame.command == "chat;"


def test_tokenizer_field_name_inside_value_unescaped():
    text = render_frame("see data;", "command packetID authID", PACKET, "null")
    frame = read_frame(text)
    assert frame.command == "see data;"
    assert frame.data == "command packetID authID"


def test_tokenizer_pairs_and_whitespace():
    pairs = tokenize_frame(' { "a" : "1" ,"b":"2"  } ')
    assert pairs == {"a": "1", "b": "2"}


def test_tokenizer_empty_object():
    assert tokenize_frame("{}") == {}


def test_tokenizer_unknown_keys_are_ignored():
    text = CANONICAL[:-1] + ', "extra":"1"}'
    assert read_frame(text).data == "hello"


def test_tokenizer_backslash_literal_when_not_escaped():
    text = render_frame("c;", "C:\\dir", PACKET, "null")
    assert read_frame(text).data == "C:\\dir"


@pytest.mark.parametrize(
    "text",
    [
        "",
        "not a frame",
        '{"command":"x"',
        '{"command" "x"}',
        '{"command":"x",}',
        '{"command":"x"} trailing',
        '{"command":"x" "data":"y"}',
        '{"command":"unterminated}',
        '{"unterminated',
    ],
)
def test_tokenizer_structural_errors(text):
    with pytest.raises(FieldValueError):
        tokenize_frame(text)


def test_tokenizer_duplicate_key():
    with pytest.raises(FieldValueError) as exc:
        tokenize_frame('{"data":"1", "data":"2"}')
    assert exc.value.field == "data"


def test_tokenizer_missing_field():
    text = f'{{"command":"c;", "data":" x", "packetID":"{PACKET}"}}'
    with pytest.raises(FieldNotFoundError) as exc:
        read_frame(text)
    assert exc.value.field == "authID"


def test_decode_errors_are_value_errors():
    with pytest.raises(ValueError):
        read_frame("garbage")
    with pytest.raises(DecodeError):
        read_frame("garbage", mode=DecodeMode.LEGACY)


def test_unknown_mode():
    with pytest.raises(ValueError):
        read_frame(CANONICAL, mode="fast")
