from lambdas.owlbot.utils import (
    KIND_ATTACHMENT,
    KIND_QUICK_REPLY,
    KIND_TEXT,
    build_option,
    parse_turn,
    truncate_label,
)


def test_truncate_label():
    assert truncate_label("M.D. Anderson Biological Laboratories") == "M.D. Anderson Biolog"
    assert truncate_label("Baker College") == "Baker College"
    assert build_option("Anderson-Clarke Center", "x") == {"label": "Anderson-Clarke Cent", "payload": "x"}


def test_parse_turn_kinds():
    text = parse_turn({"sender": {"id": 7}, "message": {"text": "hi"}})
    assert (text.user_id, text.kind, text.content) == ("7", KIND_TEXT, "hi")
    qr = parse_turn({"sender": {"id": "7"}, "message": {"text": "Directions", "quick_reply": {"payload": "directions"}}})
    assert (qr.kind, qr.content) == (KIND_QUICK_REPLY, "directions")
    att = parse_turn({"sender": {"id": "7"}, "message": {"attachments": [{"type": "image"}]}})
    assert att.kind == KIND_ATTACHMENT


def test_parse_turn_ignores_echoes_and_empty_messages():
    assert parse_turn({"sender": {"id": "7"}, "message": {"is_echo": True, "text": "hi"}}) is None
    assert parse_turn({"sender": {"id": "7"}, "message": {"mid": "m"}}) is None
    assert parse_turn({"sender": {"id": "7"}}) is None
