from influx.parser import FieldKind


def test_field_kind():
    kind = FieldKind.POSITIONAL
    assert kind == FieldKind.POSITIONAL
    assert kind != FieldKind.NAMED
    assert kind != "positional"
    assert kind.value == "positional"
    assert str(kind) == "positional"
