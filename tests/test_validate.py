import pytest

from oaiclient.jsonschema.definition import DataType, Definition
from oaiclient.jsonschema.validate import (
    SchemaValidationError,
    collect_defs,
    validate,
    verify_schema_and_unmarshal,
)


def _person_def():
    return Definition(
        type=DataType.OBJECT,
        properties={
            "name": Definition(type=DataType.STRING),
            "gender": Definition(
                type=DataType.STRING, enum=["male", "female", "unknown"]
            ),
            "age": Definition(type=DataType.INTEGER),
            "profile": Definition(ref="#/$defs/Person/$defs/Profile"),
            "tweets": Definition(
                type=DataType.ARRAY, items=Definition(ref="#/$defs/Tweet")
            ),
        },
        required=["name", "gender", "age", "profile"],
        defs={"Profile": _profile_def()},
    )


def _profile_def():
    return Definition(
        type=DataType.OBJECT,
        properties={"full_name": Definition(type=DataType.STRING)},
    )


def _tweet_def():
    return Definition(
        type=DataType.OBJECT,
        properties={
            "text": Definition(type=DataType.STRING),
            "person": Definition(ref="#/$defs/Person"),
        },
    )


def _root_schema():
    return Definition(
        type=DataType.OBJECT,
        properties={"person": Definition(ref="#/$defs/Person")},
        required=["person"],
        defs={"Person": _person_def(), "Tweet": _tweet_def()},
    )


def _mixed_schema():
    return Definition(
        type=DataType.OBJECT,
        properties={
            "string": Definition(type=DataType.STRING),
            "integer": Definition(type=DataType.INTEGER),
            "number": Definition(type=DataType.NUMBER),
            "boolean": Definition(type=DataType.BOOLEAN),
            "array": Definition(
                type=DataType.ARRAY, items=Definition(type=DataType.NUMBER)
            ),
        },
        required=["string"],
    )


@pytest.mark.parametrize(
    "data, schema, expected",
    [
        ("ABC", Definition(type=DataType.STRING), True),
        (123, Definition(type=DataType.STRING), False),
        (123, Definition(type=DataType.INTEGER), True),
        (123.4, Definition(type=DataType.INTEGER), False),
        ("ABC", Definition(type=DataType.NUMBER), False),
        (123, Definition(type=DataType.NUMBER), True),
        (False, Definition(type=DataType.BOOLEAN), True),
        (123, Definition(type=DataType.BOOLEAN), False),
        (None, Definition(type=DataType.NULL), True),
        (0, Definition(type=DataType.NULL), False),
        (
            ["a", "b", "c"],
            Definition(type=DataType.ARRAY, items=Definition(type=DataType.STRING)),
            True,
        ),
        (
            [1, 2, 3],
            Definition(type=DataType.ARRAY, items=Definition(type=DataType.STRING)),
            False,
        ),
        (
            [1, 2, 3],
            Definition(type=DataType.ARRAY, items=Definition(type=DataType.INTEGER)),
            True,
        ),
        (
            [1, 2, 3.4],
            Definition(type=DataType.ARRAY, items=Definition(type=DataType.INTEGER)),
            False,
        ),
        (
            {
                "string": "abc",
                "integer": 123,
                "number": 123.4,
                "boolean": False,
                "array": [1, 2, 3],
            },
            _mixed_schema(),
            True,
        ),
        (
            {"integer": 123, "number": 123.4, "boolean": False, "array": [1, 2, 3]},
            _mixed_schema(),
            False,
        ),
    ],
)
def test_validate_cases(data, schema, expected):
    assert validate(schema, data) is expected


def test_validate_with_ref_and_defs():
    data = {
        "person": {
            "name": "John",
            "gender": "male",
            "age": 28,
            "profile": {"full_name": "John Doe"},
        }
    }
    assert validate(_root_schema(), data) is True


def test_validate_enum_invalid_value():
    data = {
        "person": {
            "name": "John",
            "gender": "other",
            "age": 28,
            "profile": {"full_name": "John Doe"},
        }
    }
    assert validate(_root_schema(), data) is False


def test_integer_rejects_bool_and_accepts_integral_float():
    schema = Definition(type=DataType.INTEGER)
    assert validate(schema, True) is False
    assert validate(schema, 5.0) is True


def test_invalid_containers():
    assert validate(Definition(type=DataType.OBJECT), 1) is False
    array_schema = Definition(
        type=DataType.ARRAY, items=Definition(type=DataType.STRING)
    )
    assert validate(array_schema, 1) is False


def test_ref_not_found():
    schema = Definition(ref="#/$defs/Missing")
    assert validate(schema, "data", {}) is False


def test_schema_without_type_or_ref_fails():
    assert validate(Definition(), "anything") is False


def test_unmarshal_success():
    schema = Definition(
        type=DataType.OBJECT,
        properties={
            "string": Definition(type=DataType.STRING),
            "number": Definition(type=DataType.NUMBER),
        },
    )
    result = verify_schema_and_unmarshal(schema, b'{"string":"abc","number":123.4}')
    assert result == {"string": "abc", "number": 123.4}


def test_unmarshal_missing_required():
    schema = Definition(
        type=DataType.OBJECT,
        properties={
            "string": Definition(type=DataType.STRING),
            "number": Definition(type=DataType.NUMBER),
        },
        required=["string", "number"],
    )
    with pytest.raises(SchemaValidationError):
        verify_schema_and_unmarshal(schema, '{"string":"abc"}')


def _integer_schema():
    return Definition(
        type=DataType.OBJECT,
        properties={
            "string": Definition(type=DataType.STRING),
            "integer": Definition(type=DataType.INTEGER),
        },
        required=["string", "integer"],
    )


def test_unmarshal_integer():
    result = verify_schema_and_unmarshal(
        _integer_schema(), '{"string":"abc","integer":123}'
    )
    assert result == {"string": "abc", "integer": 123}


def test_unmarshal_integer_failed():
    with pytest.raises(SchemaValidationError):
        verify_schema_and_unmarshal(
            _integer_schema(), '{"string":"abc","integer":123.4}'
        )


def test_collect_defs():
    assert collect_defs(_root_schema()) == {
        "#/$defs/Person": _person_def(),
        "#/$defs/Person/$defs/Profile": _profile_def(),
        "#/$defs/Tweet": _tweet_def(),
    }


def test_collect_defs_empty():
    assert collect_defs(Definition(type=DataType.STRING)) == {}