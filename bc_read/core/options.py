# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Client settings and endpoint configuration for bc-read."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource
from pydantic_settings import YamlConfigSettingsSource

DEFAULT_SCHEME = "http"
DEFAULT_HOST = "api.brightcove.com"
DEFAULT_PORT = 80
DEFAULT_PATH = "/services/library"
DEFAULT_CHARSET = "UTF-8"


class EndpointConfig(BaseModel):
    """Where read commands are sent. Replaced wholesale, never mutated."""

    model_config = ConfigDict(frozen=True)

    scheme: str = DEFAULT_SCHEME
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    path: str = DEFAULT_PATH
    charset: str = DEFAULT_CHARSET


class ReadApiOptions(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BC_READ_",
        yaml_file="bc_read.yaml",
        yaml_file_encoding="utf-8",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    token: str | None = None
    scheme: str = DEFAULT_SCHEME
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    path: str = DEFAULT_PATH
    charset: str = DEFAULT_CHARSET
    enable_uds: bool = False
    timeout: float | None = None
    verbose: bool = False

    def endpoint(self) -> EndpointConfig:
        return EndpointConfig(
            scheme=self.scheme,
            host=self.host,
            port=self.port,
            path=self.path,
            charset=self.charset,
        )
