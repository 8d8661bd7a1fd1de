import pytest

from tasklaunch.core.config import LaunchConfig, config_from_env, env_var_name


def test_config_from_env_reads_prefixed_variables():
    config = config_from_env(
        {
            "TASKLAUNCH_URI": "MY_URI",
            "TASKLAUNCH_APPLICATION_NAME": "fooTest",
            "TASKLAUNCH_COMMAND_LINE_ARGUMENTS": "--a=1",
            "TASKLAUNCH_DEPLOYMENT_PROPERTIES": "x=y",
            "TASKLAUNCH_ENVIRONMENT_PROPERTIES": "k=v",
            "TASKLAUNCH_DATASOURCE_URL": "myUrl",
            "TASKLAUNCH_DATASOURCE_USERNAME": "myUserName",
            "TASKLAUNCH_DATASOURCE_PASSWORD": "myPassword",
            "TASKLAUNCH_DATASOURCE_DRIVER_CLASS_NAME": "myClassName",
            "UNRELATED": "ignored",
        }
    )

    assert config == LaunchConfig(
        uri="MY_URI",
        application_name="fooTest",
        command_line_arguments="--a=1",
        deployment_properties="x=y",
        environment_properties="k=v",
        data_source_url="myUrl",
        data_source_user_name="myUserName",
        data_source_password="myPassword",
        data_source_driver_class_name="myClassName",
    )


def test_config_from_env_treats_empty_values_as_unset():
    assert config_from_env({"TASKLAUNCH_URI": ""}) == LaunchConfig()


def test_config_from_env_defaults_to_os_environ(monkeypatch):
    monkeypatch.setenv("TASKLAUNCH_URI", "from-env")

    assert config_from_env().uri == "from-env"


def test_merged_applies_only_non_none_overrides():
    base = LaunchConfig(uri="a", application_name="name")

    merged = base.merged(uri="b", application_name=None)

    assert merged.uri == "b"
    assert merged.application_name == "name"
    assert base.uri == "a"


def test_merged_rejects_unknown_fields():
    with pytest.raises(TypeError, match="nope"):
        LaunchConfig().merged(nope="x")


def test_env_var_name():
    assert env_var_name("data_source_user_name") == "TASKLAUNCH_DATASOURCE_USERNAME"
