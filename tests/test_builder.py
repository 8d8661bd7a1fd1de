import logging
import threading

import pytest

from tasklaunch.core.builder import (
    DATASOURCE_DRIVER_CLASS_NAME_KEY,
    DATASOURCE_PASSWORD_KEY,
    DATASOURCE_URL_KEY,
    DATASOURCE_USERNAME_KEY,
    build_launch_request,
    default_application_name,
    split_command_line_arguments,
)
from tasklaunch.core.config import LaunchConfig
from tasklaunch.core.errors import MalformedPropertyStringError, MissingUriError
from tasklaunch.core.messages import Message

DEFAULT_URI = "MY_URI"


@pytest.mark.parametrize("payload", ["hello", "hello world", "hi!", ""])
def test_build_uses_configured_uri_for_any_payload(payload):
    request = build_launch_request(LaunchConfig(uri=DEFAULT_URI), Message(payload=payload))

    assert request.uri == DEFAULT_URI
    assert request.command_line_arguments == ()
    assert request.environment_properties == {}
    assert request.deployment_properties == {}


@pytest.mark.parametrize("uri", [None, ""])
def test_build_without_uri_fails(uri):
    with pytest.raises(MissingUriError):
        build_launch_request(LaunchConfig(uri=uri), Message(payload="hello"))


def test_build_without_message_is_allowed():
    assert build_launch_request(LaunchConfig(uri=DEFAULT_URI)).uri == DEFAULT_URI


def test_build_uses_configured_application_name():
    config = LaunchConfig(uri=DEFAULT_URI, application_name="fooTest")

    first = build_launch_request(config, Message(payload="hello"))
    second = build_launch_request(config, Message(payload="hello"))

    assert first.application_name == "fooTest"
    assert first == second


def test_build_generates_application_name_when_unset():
    config = LaunchConfig(uri=DEFAULT_URI)

    first = build_launch_request(config, Message(payload="hello"))
    second = build_launch_request(config, Message(payload="hello"))

    assert first.application_name.startswith("Task-")
    assert first.application_name != second.application_name
    assert first.uri == second.uri
    assert first.command_line_arguments == second.command_line_arguments
    assert first.environment_properties == second.environment_properties
    assert first.deployment_properties == second.deployment_properties


def test_build_uses_name_factory():
    request = build_launch_request(
        LaunchConfig(uri=DEFAULT_URI), name_factory=lambda: "Task-fixed"
    )

    assert request.application_name == "Task-fixed"


def test_default_application_name_is_prefixed_and_unique():
    names = {default_application_name() for _ in range(50)}

    assert len(names) == 50
    assert all(name.startswith("Task-") for name in names)


def test_build_splits_command_line_arguments_in_order():
    config = LaunchConfig(uri=DEFAULT_URI, command_line_arguments="--hello=world --foo=bar")

    request = build_launch_request(config, Message(payload="hello"))

    assert request.command_line_arguments == ("--hello=world", "--foo=bar")


def test_split_command_line_arguments_has_no_quoting_and_keeps_duplicates():
    assert split_command_line_arguments('--a="x y" --a="x y"') == [
        '--a="x',
        'y"',
        '--a="x',
        'y"',
    ]


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_split_command_line_arguments_empty(raw):
    assert split_command_line_arguments(raw) == []


def test_build_parses_deployment_properties():
    config = LaunchConfig(
        uri=DEFAULT_URI,
        deployment_properties='app.wow.hello=world,app.wow.foo=bar,app.wow.test=a=b,c=d,e="baz=bbb,nnn=mmm"',
    )

    request = build_launch_request(config, Message(payload="hello"))

    assert request.deployment_properties == {
        "app.wow.hello": "world",
        "app.wow.foo": "bar",
        "app.wow.test": "a=b",
        "c": "d",
        "e": '"baz=bbb,nnn=mmm"',
    }
    assert request.environment_properties == {}


def test_build_adds_datasource_environment_properties():
    config = LaunchConfig(
        uri=DEFAULT_URI,
        application_name="fooTest",
        data_source_url="myUrl",
        data_source_password="myPassword",
        data_source_user_name="myUserName",
        data_source_driver_class_name="myClassName",
    )

    request = build_launch_request(config, Message(payload="hello"))

    assert request.environment_properties == {
        DATASOURCE_URL_KEY: "myUrl",
        DATASOURCE_USERNAME_KEY: "myUserName",
        DATASOURCE_PASSWORD_KEY: "myPassword",
        DATASOURCE_DRIVER_CLASS_NAME_KEY: "myClassName",
    }
    assert DATASOURCE_DRIVER_CLASS_NAME_KEY == "spring.datasource.driver-class-name"


def test_build_datasource_fields_override_environment_properties():
    config = LaunchConfig(
        uri=DEFAULT_URI,
        environment_properties="spring.datasource.url=fromProps,spring.datasource.username=props,other=1",
        data_source_url="fromField",
    )

    request = build_launch_request(config, Message(payload="hello"))

    assert request.environment_properties == {
        "spring.datasource.url": "fromField",
        "spring.datasource.username": "props",
        "other": "1",
    }


def test_build_rejects_malformed_properties():
    config = LaunchConfig(uri=DEFAULT_URI, environment_properties="a=b,broken")

    with pytest.raises(MalformedPropertyStringError):
        build_launch_request(config, Message(payload="hello"))


def test_build_is_safe_for_concurrent_calls():
    config = LaunchConfig(
        uri=DEFAULT_URI,
        deployment_properties="a=b,c=d",
        command_line_arguments="--x=1 --y=2",
    )
    results = []
    lock = threading.Lock()

    def worker():
        for _ in range(20):
            request = build_launch_request(config, Message(payload="hi"))
            with lock:
                results.append(request)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 160
    assert len({r.application_name for r in results}) == 160
    assert all(r.deployment_properties == {"a": "b", "c": "d"} for r in results)


def test_build_logs_summary_at_info_without_password(caplog):
    builder_logger = logging.getLogger("tasklaunch.core.builder")
    builder_logger.addHandler(caplog.handler)
    config = LaunchConfig(
        uri=DEFAULT_URI, application_name="fooTest", data_source_password="s3cret"
    )

    try:
        with caplog.at_level(logging.INFO, logger="tasklaunch.core.builder"):
            build_launch_request(config)
    finally:
        builder_logger.removeHandler(caplog.handler)

    summaries = [r for r in caplog.records if r.getMessage().startswith("Built launch request")]
    assert summaries and all(r.levelno == logging.INFO for r in summaries)
    assert "fooTest" in summaries[0].getMessage()
    assert all("s3cret" not in r.getMessage() for r in caplog.records)
