from io import StringIO

import os
import ZConfig


_ADDRESSING_STYLES = ("auto", "path", "virtual")

_schema = None


def get_schema():
    global _schema
    if _schema is None:
        _schema = ZConfig.loadSchema(
            os.path.join(os.path.dirname(__file__), "schema.xml")
        )
    return _schema


class S3ProviderFactory:
    """ZConfig factory for S3FileProvider."""

    def __init__(self, config):
        self.config = config
        self.name = config.getSectionName()
        if config.addressing_style not in _ADDRESSING_STYLES:
            raise ValueError(
                f"addressing-style must be one of {', '.join(_ADDRESSING_STYLES)}, "
                f"got {config.addressing_style!r}"
            )

    def open(self):
        from vfs_simple_s3.auth import StaticUserAuthenticator
        from vfs_simple_s3.provider import S3FileProvider

        config = self.config
        authenticator = None
        if config.access_key or config.secret_key:
            authenticator = StaticUserAuthenticator(
                username=config.access_key, password=config.secret_key
            )
        return S3FileProvider(
            endpoint=config.endpoint_url,
            region=config.region,
            use_ssl=config.use_ssl,
            addressing_style=config.addressing_style,
            temp_dir=config.temp_dir,
            authenticator=authenticator,
        )


def provider_from_string(text):
    config, _handler = ZConfig.loadConfigFile(get_schema(), StringIO(text))
    return config.provider.open()


def provider_from_file(path):
    config, _handler = ZConfig.loadConfig(get_schema(), path)
    return config.provider.open()
