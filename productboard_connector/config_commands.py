"""`pbc config` commands for the connector's token, base URL, and search shape."""

import os

from cyclopts import App

from productboard_connector.config import CONFIG_KEYS, TOKEN_ENV_VAR, get_config, mask_secret, validate_setting

config_app = App(name="config", help="Manage connector settings (api_token, base_url, search_shape)")


def _scope(global_: bool) -> str:
    return "global" if global_ else "local"


@config_app.command
def set(key: str, value: str, global_: bool = False) -> None:
    """Validate and store a connector setting.

    Args:
        key: One of api_token, base_url, search_shape
        value: Setting value; base_url must be http(s), search_shape is envelope or bare
        global_: Store in ~/.productboard-connector instead of the working directory
    """
    value = validate_setting(key, value)
    get_config(use_global=global_).set(key, value)
    print(f"Set {key} = {mask_secret(key, value)} ({_scope(global_)})")


@config_app.command
def unset(key: str, global_: bool = False) -> None:
    """Remove a connector setting.

    Args:
        key: One of api_token, base_url, search_shape
        global_: Remove from global config instead of local config
    """
    if key not in CONFIG_KEYS:
        raise ValueError(f"Unknown config key: '{key}'. Expected one of: {list(CONFIG_KEYS)}")
    get_config(use_global=global_).unset(key)
    print(f"Unset {key} ({_scope(global_)})")


@config_app.command
def get(key: str, global_: bool = False) -> None:
    """Show one setting; the API token may come from the environment."""
    config = get_config(use_global=global_)
    value = config.api_token() if key == "api_token" else config.get(key)
    if value is None:
        print(f"{key} is not set")
    else:
        print(f"{key} = {mask_secret(key, value)}")


@config_app.command(name="list")
def list_config(global_: bool = False) -> None:
    """List stored settings, noting an API token supplied by the environment."""
    settings = get_config(use_global=global_).list()
    if "api_token" not in settings and os.environ.get(TOKEN_ENV_VAR):
        settings["api_token"] = os.environ[TOKEN_ENV_VAR]
        print(f"api_token read from {TOKEN_ENV_VAR}")

    if not settings:
        print(f"No {_scope(global_)} settings")
        return

    for key in CONFIG_KEYS:
        if key in settings:
            print(f"{key} = {mask_secret(key, settings[key])}")
