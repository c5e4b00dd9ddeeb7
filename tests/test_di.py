from dataclasses import dataclass

from edgeboot.di import Container, type_instance_to_name

SERVICE_NAME = "serviceName"


class Foo:
    pass


@dataclass
class _Value:
    value: object


def test_get_unknown_service_returns_none():
    sut = Container({})
    assert sut.get("unknownService") is None


def test_get_known_service_returns_constructor_result():
    service = _Value("service")
    sut = Container({SERVICE_NAME: lambda get: service})
    assert sut.get(SERVICE_NAME) is service


def test_get_known_service_implements_singleton():
    count = 0

    def constructor(get):
        nonlocal count
        count += 1
        return _Value(count)

    sut = Container({SERVICE_NAME: constructor})
    first = sut.get(SERVICE_NAME)
    second = sut.get(SERVICE_NAME)
    assert first.value == second.value
    assert count == 1


def test_update_of_non_existent_service_adds():
    service = _Value("service")
    sut = Container({})
    sut.update({SERVICE_NAME: lambda get: service})
    assert sut.get(SERVICE_NAME) is service


def test_update_of_existing_service_replaces():
    sut = Container({SERVICE_NAME: lambda get: _Value("original")})
    sut.update({SERVICE_NAME: lambda get: _Value("replacement")})
    assert sut.get(SERVICE_NAME).value == "replacement"


def test_update_after_get_rebuilds_instance():
    sut = Container({SERVICE_NAME: lambda get: _Value("original")})
    assert sut.get(SERVICE_NAME).value == "original"
    sut.update({SERVICE_NAME: lambda get: _Value("replacement")})
    assert sut.get(SERVICE_NAME).value == "replacement"


def test_get_inside_get_returns_as_expected():
    @dataclass
    class FooService:
        foo_message: str

    @dataclass
    class BarService:
        bar_message: str
        foo: FooService

    sut = Container(
        {
            "foo": lambda get: FooService("foo"),
            "bar": lambda get: BarService("bar", get("foo")),
        }
    )
    result = sut.get("bar")
    assert result.bar_message == "bar"
    assert result.foo is not None
    assert result.foo.foo_message == "foo"
    assert result.foo is sut.get("foo")


def test_none_constructors_gives_empty_container():
    sut = Container(None)
    assert sut.get(SERVICE_NAME) is None


def test_type_instance_to_name_returns_module_plus_type_name():
    assert type_instance_to_name(Foo()) == __name__ + ".Foo"


def test_type_instance_to_name_of_class_matches_instance():
    assert type_instance_to_name(Foo) == type_instance_to_name(Foo())