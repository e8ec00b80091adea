import pytest

from paramstore_lib.parameters.errors import NotFound, ValidationError
from paramstore_lib.parameters.models import MASK, Parameter, validate_value


def test_repr_masks_secure_value():
    p = Parameter(name="TOKEN", value="supersecret", namespace="ns", is_secure=True)
    assert "supersecret" not in repr(p)
    assert MASK in repr(p)


def test_repr_shows_plain_value():
    p = Parameter(name="PORT", value="3001", namespace="ns")
    assert "3001" in repr(p)


def test_to_dict_masks_unless_revealed():
    p = Parameter(name="TOKEN", value="s3cr3t", namespace="ns", is_secure=True, id=7, version=2)
    assert p.to_dict()["value"] == MASK
    d = p.to_dict(reveal=True)
    assert d == {"id": 7, "name": "TOKEN", "value": "s3cr3t", "isSecure": True, "namespace": "ns", "version": 2}


def test_bumped_increments_version_and_keeps_other_fields():
    p = Parameter(name="PORT", value="3001", namespace="ns", version=4, id=1)
    q = p.bumped(value="3002")
    assert q.version == 5
    assert q.value == "3002"
    assert q.name == "PORT" and q.id == 1
    assert p.version == 4


def test_validate_value_rejects_empty():
    with pytest.raises(ValidationError):
        validate_value("")
    assert validate_value("x") == "x"


def test_not_found_message_is_plain():
    e = NotFound("ortelius/dev", "PORT")
    assert str(e) == "Parameter 'PORT' not found in namespace 'ortelius/dev'"
    assert isinstance(e, KeyError)
